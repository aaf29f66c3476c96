import os
import re
import sys

sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, Iterator, List, Optional
from common.crc_engine import CrcEngine

DLE = 0x10
STX = 0x02
ETX = 0x03

FRAME_OVERHEAD = 5
"""DLE STX <payload> <checksum> DLE ETX: everything except the payload."""

HEX_BYTE = re.compile(r"[0-9a-fA-F]{1,2}")

KNOWN_TICKETS: Dict[str, bytes] = {
    # Sent by the control unit
    "ACK_BD_MD": bytes([0x9B, 0x7F, 0x05, 0x02, 0x83, 0xE7, 0x00]),
    "TEMP_BD_MD": bytes([0x9B, 0x7F, 0x05, 0x02, 0x83, 0xF7, 0x00, 0x06, 0x21, 0x0A]),
    "TIME_BD_MD": bytes([0x9B, 0x7F, 0x05, 0x02, 0x83, 0xF7, 0x00, 0x06, 0x25, 0x08]),
    # Sent by the controller, answered
    "PUMPEN": bytes([0x92, 0x05, 0x7F, 0x03, 0x02, 0x67, 0x08, 0x20, 0x06]),
    "ASK_RAUM": bytes([0x92, 0x05, 0x7F, 0x03, 0x02, 0x77, 0x07, 0x21, 0x00, 0x05]),
    "TEMP_IST": bytes([0x92, 0x05, 0x7F, 0x03, 0x02, 0x67, 0x08, 0x22, 0x0A]),
    "TEMP_SOLAR": bytes([0x92, 0x05, 0x7F, 0x03, 0x02, 0x67, 0x08, 0x23, 0x0A]),
    "TEMP_SOLL": bytes([0x92, 0x05, 0x7F, 0x03, 0x02, 0x67, 0x08, 0x24, 0x0C]),
    "ASK_TIME": bytes([0x92, 0x05, 0x7F, 0x03, 0x02, 0x77, 0x07, 0x25, 0x00, 0xA8]),
    "UML_PARAMS": bytes([0x92, 0x05, 0x7F, 0x03, 0x02, 0x67, 0x08, 0x26, 0x0C]),
    # Sent by the controller, never answered
    "BRENNER": bytes([0x92, 0x00, 0x7F, 0x03, 0x02, 0x67, 0x08, 0x02, 0x04]),
    "KESSEL": bytes([0x92, 0x00, 0x7F, 0x03, 0x02, 0x67, 0x08, 0x03, 0x05]),
    "_770704": bytes([0x92, 0x00, 0x7F, 0x03, 0x02, 0x77, 0x07, 0x04, 0x00, 0x54]),
    "_77070E": bytes([0x92, 0x00, 0x7F, 0x03, 0x02, 0x77, 0x07, 0x0E, 0x00, 0xA4]),
    "_030504": bytes([0x91, 0x00, 0x7F, 0x03, 0x02, 0x03, 0x05, 0x04, 0x00, 0x12]),
    "_03050E": bytes([0x91, 0x00, 0x7F, 0x03, 0x02, 0x03, 0x05, 0x0E, 0x00, 0xE2]),
}
"""Payload prefixes of the tickets seen on the FB5210 bus. A ticket is of a kind if its payload starts with the prefix."""


class Verdict(IntEnum):
    OK = 0
    NOK = 1
    TOO_SHORT = 2
    TRUNCATED = 3


@dataclass
class VerificationResult:
    verdict: Verdict
    expected: Optional[int] = None
    calculated: Optional[int] = None

    @property
    def is_ok(self) -> bool:
        return self.verdict == Verdict.OK

    def __str__(self) -> str:
        if self.verdict == Verdict.OK:
            return "OK"
        if self.verdict == Verdict.NOK:
            return f"NOK! [{self.calculated:02X}]"
        if self.verdict == Verdict.TOO_SHORT:
            return "[Too short]"
        return "[Truncated]"


@dataclass
class Ticket:
    """One framed message of the bus, DLE escaping already removed."""

    payload: bytes
    checksum: Optional[int]
    raw: bytes
    """The bytes as captured, including framing and escaping."""
    offset: int
    """Position of the leading DLE in the captured stream."""
    truncated: bool = False

    @property
    def frame(self) -> bytes:
        """The unescaped frame: DLE STX payload checksum DLE ETX"""
        checksum = bytes([self.checksum]) if self.checksum is not None else b""
        return bytes([DLE, STX]) + self.payload + checksum + bytes([DLE, ETX])

    @property
    def kind(self) -> Optional[str]:
        return classify(self.payload)


def classify(payload: bytes | bytearray) -> Optional[str]:
    """Name of the known ticket the payload belongs to, or None. The longest matching prefix wins."""
    kind = None
    for name, prefix in KNOWN_TICKETS.items():
        if payload.startswith(prefix) and (kind is None or len(prefix) > len(KNOWN_TICKETS[kind])):
            kind = name
    return kind


def escape(data: bytes | bytearray) -> bytes:
    """Doubles every DLE, so it can't be mistaken for a frame delimiter."""
    return bytes(data).replace(bytes([DLE]), bytes([DLE, DLE]))


def escape_and_frame(payload: bytes | bytearray, engine: CrcEngine) -> bytes:
    # The checksum covers the payload before escaping
    checksum = engine.compute(payload) & 0xFF
    return bytes([DLE, STX]) + escape(payload) + escape(bytes([checksum])) + bytes([DLE, ETX])


def verify_frame(engine: CrcEngine, frame: bytes | bytearray) -> VerificationResult:
    """Checks the checksum byte of an unescaped frame. Frames without payload are never passed to the engine."""
    size = len(frame)
    if size <= FRAME_OVERHEAD:
        return VerificationResult(Verdict.TOO_SHORT)

    calculated = engine.compute(frame, 2, size - FRAME_OVERHEAD) & 0xFF
    expected = frame[size - 3]
    return VerificationResult(Verdict.OK if calculated == expected else Verdict.NOK, expected=expected, calculated=calculated)


def verify_ticket(engine: CrcEngine, ticket: Ticket) -> VerificationResult:
    if ticket.truncated:
        return VerificationResult(Verdict.TRUNCATED)
    return verify_frame(engine, ticket.frame)


class TicketReader:
    """Splits a captured byte stream into tickets. Bytes outside of frames are skipped."""

    class _State(IntEnum):
        Hunt = 0
        Start = 1
        Body = 2
        BodyDle = 3

    def __init__(self, data: bytes | bytearray) -> None:
        self.data: bytes = bytes(data)
        self.skipped: int = 0
        """Count of bytes found outside of any frame."""

    def __iter__(self) -> Iterator[Ticket]:
        State = TicketReader._State
        state = State.Hunt
        self.skipped = 0
        start = 0
        body = bytearray()

        for i, b in enumerate(self.data):
            if state == State.Hunt:
                if b == DLE:
                    state = State.Start
                    start = i
                else:
                    self.skipped += 1
            elif state == State.Start:
                if b == STX:
                    state = State.Body
                    body = bytearray()
                elif b == DLE:
                    self.skipped += 1
                    start = i
                else:
                    self.skipped += 2
                    state = State.Hunt
            elif state == State.Body:
                if b == DLE:
                    state = State.BodyDle
                else:
                    body.append(b)
            else:
                if b == DLE:
                    body.append(DLE)
                    state = State.Body
                elif b == ETX:
                    yield self._make_ticket(body, start, i + 1)
                    state = State.Hunt
                elif b == STX:
                    # A new frame starts before the previous one ended
                    yield self._make_ticket(body, start, i - 1, truncated=True)
                    start = i - 1
                    body = bytearray()
                    state = State.Body
                else:
                    yield self._make_ticket(body, start, i + 1, truncated=True)
                    state = State.Hunt

        if state in (State.Body, State.BodyDle):
            yield self._make_ticket(body, start, len(self.data), truncated=True)
        elif state == State.Start:
            self.skipped += 1

    def _make_ticket(self, body: bytearray, start: int, end: int, truncated: bool = False) -> Ticket:
        raw = self.data[start:end]
        if truncated or len(body) == 0:
            return Ticket(payload=bytes(body), checksum=None, raw=raw, offset=start, truncated=truncated)
        return Ticket(payload=bytes(body[:-1]), checksum=body[-1], raw=raw, offset=start)


def split_tickets(data: bytes | bytearray) -> List[Ticket]:
    return list(TicketReader(data))


def parse_hex_log(text: str) -> bytes:
    """Parses a capture log. Each line looks like 'HH:MM:SS.fff: 10 02 9B ... comment'.
    Blank lines and lines starting with '#' are skipped. The first token, which isn't a hex byte, starts the comment."""
    data = bytearray()

    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if ": " in line:
            line = line[line.index(": ") + 2 :]

        for token in line.split():
            if not HEX_BYTE.fullmatch(token):
                break
            data.append(int(token, 16))

    return bytes(data)
