from dataclasses import dataclass
from typing import List, Literal


@dataclass
class TicketView:
    """One row of the report"""

    Verdicts = Literal["OK", "NOK", "Too short", "Truncated"]

    index: int
    address: str
    kind: str
    """Name of the known ticket, "--" for unknown payloads."""
    payload_hex: str
    checksum_hex: str
    calculated_hex: str
    verdict: Verdicts
    is_valid: bool


@dataclass
class SummaryView:
    total: int
    ok: int
    failed: int
    skipped_bytes: int
