import os
import sys
import argparse

sys.path.append(os.path.dirname(__file__))
sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from typing import List, Optional
from colorama import Fore
from common.catalogue import CRC8_FB5210
from common.checksum_algo import ChecksumAlgorithm
from common.crc_engine import CrcEngine
from common.utils import load_checksum_params, load_input_image, to_hex_string
from ticket_codec import Ticket, TicketReader, VerificationResult, parse_hex_log, verify_ticket
from report_builder import ReportBuilder

LOG_EXTENSIONS = [".log", ".txt"]


def load_capture(path: str) -> bytes:
    """Load a capture: a timestamped hex log (*.log, *.txt), a HEX/S-record image or a raw binary dump."""
    if os.path.splitext(path)[1].lower() in LOG_EXTENSIONS:
        with open(path, mode="r", encoding="utf-8") as f:
            return parse_hex_log(f.read())
    return load_input_image(path)


def create_engine(checksum_params_path: Optional[str]) -> CrcEngine:
    if checksum_params_path is None:
        return CrcEngine(CRC8_FB5210)
    return ChecksumAlgorithm(params=load_checksum_params(checksum_params_path)).engine


def print_ticket(index: int, ticket: Ticket, result: VerificationResult):
    color = Fore.GREEN if result.is_ok else Fore.RED
    kind = ticket.kind or "?"
    print(f"{index:5d} @0x{ticket.offset:06X}: {kind:<11} {to_hex_string(ticket.raw)}  {color}{result}{Fore.RESET}")


def inspect(data: bytes, engine: CrcEngine, quiet: bool = False) -> tuple[List[Ticket], List[VerificationResult], int]:
    reader = TicketReader(data)
    tickets = list(reader)
    results = [verify_ticket(engine, t) for t in tickets]

    if not quiet:
        for index, (ticket, result) in enumerate(zip(tickets, results)):
            print_ticket(index, ticket, result)

    return tickets, results, reader.skipped


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Ticket inspector - splits a captured FB5210 bus stream into tickets and verifies their checksums",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument("capture", help="Path to the capture: hex log (*.log, *.txt), binary dump (*.bin) or (*.hex)")
    parser.add_argument("checksum_params", nargs="?", default=None, help="Path to checksum_parameters.json file. Defaults to the FB5210 CRC-8")
    parser.add_argument("-o", "--output", default=None, help="Write an HTML report to this path")
    parser.add_argument("-q", "--quiet", action="store_true", help="Print the summary only")

    args = parser.parse_args(argv)

    try:
        data = load_capture(args.capture)
        engine = create_engine(args.checksum_params)
        tickets, results, skipped = inspect(data, engine, quiet=args.quiet)
        failed = sum(1 for r in results if not r.is_ok)

        if args.output:
            paths = {"capture": args.capture, "report": args.output}
            if args.checksum_params:
                paths["checksum_params"] = args.checksum_params
            report = ReportBuilder(tickets=tickets, engine=engine, paths=paths, skipped_bytes=skipped).create_report()

            with open(args.output, mode="w", encoding="utf-8") as f:
                f.write(report)
            print(f"{Fore.GREEN}ticket_inspector::info:: report successfully generated to {args.output}{Fore.RESET}")

        print(f"{Fore.BLUE}{len(tickets)} ticket(s), {len(tickets) - failed} OK, {failed} failed, {skipped} byte(s) outside of frames{Fore.RESET}")
        exit_code = 0 if failed == 0 else 1
    except Exception as x:
        import traceback

        traceback.print_exc()
        print(f"{Fore.RED}ticket_inspector::error:: {x}{Fore.RESET}")
        exit_code = 1

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
