import pytest
from common.catalogue import CRC8_FB5210
from common.crc_engine import CrcEngine

# Captured from the FB5210 heating controller bus
SHORT_FRAME = bytes([0xFF, 0xFF])
DATE_FRAME = bytes([0x10, 0x02, 0x9B, 0x7F, 0x05, 0x02, 0x83, 0xE7, 0x00, 0x5C, 0x10, 0x03])
TEMP_FRAME = bytes(
    [0x10, 0x02, 0x9B, 0x7F, 0x05, 0x02, 0x83, 0xF7, 0x00, 0x06, 0x21, 0x0A, 0xD0, 0x02, 0x06, 0x86, 0x03, 0xE8, 0x00, 0x00, 0x03, 0xE8, 0xAF, 0x10, 0x03]
)


@pytest.fixture
def fb5210_engine():
    return CrcEngine(CRC8_FB5210)


@pytest.fixture
def sample_frames():
    return [SHORT_FRAME, DATE_FRAME, TEMP_FRAME]
