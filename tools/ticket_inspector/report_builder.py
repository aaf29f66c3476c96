import os
import sys
from datetime import datetime

sys.path.append(os.path.dirname(__file__))
sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from typing import Any, Dict, List
from jinja2 import Environment, FileSystemLoader
from tzlocal import get_localzone
from common.crc_engine import CrcEngine
from common.utils import to_hex_string
from ticket_codec import Ticket, Verdict, VerificationResult, verify_ticket
from view_types import SummaryView, TicketView


class ReportBuilder:
    def __init__(self, tickets: List[Ticket], engine: CrcEngine, paths: Dict[str, str], skipped_bytes: int = 0) -> None:
        self.tickets: List[Ticket] = tickets
        self.engine: CrcEngine = engine
        self.paths: Dict[str, str] = paths
        self.skipped_bytes: int = skipped_bytes
        self.results: List[VerificationResult] = [verify_ticket(engine, t) for t in tickets]

    def create_report(self) -> str:
        templateEnv = Environment(loader=FileSystemLoader(searchpath=os.path.dirname(__file__)), trim_blocks=True, autoescape=True)
        template = templateEnv.get_template("report_template.html")
        return template.render(
            report_header=self._create_report_header(),
            summary=self._create_summary(),
            ticket_views=self._create_ticket_views(),
        )

    def _create_report_header(self) -> Dict[str, Any]:
        return {
            "date": datetime.now(tz=get_localzone()).strftime("%Y-%m-%d %H:%M:%S %Z (UTC%z)"),
            "capture_path": self.paths["capture"],
            "checksum_params_path": self.paths.get("checksum_params", "built-in (FB5210)"),
            "checksum_params": self.engine.parameters.to_dict(),
        }

    def _create_summary(self) -> SummaryView:
        ok = sum(1 for r in self.results if r.is_ok)
        return SummaryView(total=len(self.results), ok=ok, failed=len(self.results) - ok, skipped_bytes=self.skipped_bytes)

    def _create_ticket_views(self) -> List[TicketView]:
        to_tv_verdict: dict[Verdict, TicketView.Verdicts] = {
            Verdict.OK: "OK",
            Verdict.NOK: "NOK",
            Verdict.TOO_SHORT: "Too short",
            Verdict.TRUNCATED: "Truncated",
        }
        views: List[TicketView] = []

        for index, (ticket, result) in enumerate(zip(self.tickets, self.results)):
            views.append(
                TicketView(
                    index=index,
                    address=f"0x{ticket.offset:06X}",
                    kind=ticket.kind or "--",
                    payload_hex=to_hex_string(ticket.payload),
                    checksum_hex=f"0x{ticket.checksum:02X}" if ticket.checksum is not None else "--",
                    calculated_hex=f"0x{result.calculated:02X}" if result.calculated is not None else "--",
                    verdict=to_tv_verdict[result.verdict],
                    is_valid=result.is_ok,
                )
            )
        return views
