import os
import sys
import argparse

sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from typing import List, Optional
from colorama import Fore
from common.checksum_algo import ChecksumAlgorithm
from common.utils import OUTPUT_FORMATS, format_value, load_checksum_params, load_input_image, parse_int_literal


def calculate(image: bytes, checksum_algo: ChecksumAlgorithm, offset: int = 0, length: Optional[int] = None) -> int:
    return checksum_algo.engine.compute(image, offset, length)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="CRC calculator - computes the CRC of a file, or of a part of it, under arbitrary CRC parameters",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument("input", help="Path to the input: binary (*.bin), Intel HEX (*.hex) or S-record (*.srec, *.s19...)")
    parser.add_argument("checksum_params", help="Path to checksum_parameters.json file")
    parser.add_argument("-s", "--offset", default="0", help="Offset of the first byte to process (default: 0)")
    parser.add_argument("-n", "--length", default=None, help="Count of bytes to process (default: up to the end)")
    parser.add_argument("-f", "--format", choices=list(OUTPUT_FORMATS.keys()), default="0xhex", help="Output format (default: 0xhex)")
    parser.add_argument("-q", "--quiet", action="store_true", help="Print the result only")

    args = parser.parse_args(argv)

    try:
        image = load_input_image(args.input)
        checksum_algo = ChecksumAlgorithm(params=load_checksum_params(args.checksum_params))
        offset = parse_int_literal(args.offset)
        length = parse_int_literal(args.length) if args.length is not None else None

        crc = calculate(image, checksum_algo, offset, length)
        result = format_value(crc, checksum_algo.algorithm_parameters.hash_size, args.format)

        if args.quiet:
            print(result)
        else:
            processed = (len(image) - offset) if length is None else length
            print(f"{Fore.BLUE}crc_calc::info:: {processed} byte(s) processed, starting at offset {offset}{Fore.RESET}")
            print(f"{Fore.GREEN}crc: {result}{Fore.RESET}")
        exit_code = 0
    except Exception as x:
        import traceback

        traceback.print_exc()
        print(f"{Fore.RED}crc_calc::error:: {x}{Fore.RESET}")
        exit_code = 1

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
