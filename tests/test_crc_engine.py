import random

import pytest
from common.algo_params import AlgorithmParameters
from common.catalogue import CHECK_INPUT, CHECK_VALUES, CRC8_FB5210, CRC8_MAXIM, CRC16_ARC, CRC16_XMODEM, CRC32, CRC32_BZIP2
from common.crc_engine import CrcEngine, bitwise_crc, reverse_bits
from conftest import DATE_FRAME, TEMP_FRAME

SAMPLE = bytes(range(256)) + b"The quick brown fox jumps over the lazy dog"


def test_reverse_bits_byte():
    assert reverse_bits(0x01) == 0x80
    assert reverse_bits(0x80) == 0x01
    assert reverse_bits(0xF0) == 0x0F
    assert reverse_bits(0xA5) == 0xA5
    assert reverse_bits(0x00) == 0x00


def test_reverse_bits_ignores_upper_bits():
    assert reverse_bits(0x1F0) == 0x0F
    assert reverse_bits(0xFF01) == 0x80


def test_reverse_bits_width():
    assert reverse_bits(0x001, 12) == 0x800
    assert reverse_bits(0x04C11DB7, 32) == 0xEDB88320
    assert reverse_bits(0b10110, 5) == 0b01101


def test_date_frame_checksum(fb5210_engine):
    checksum = fb5210_engine.compute(DATE_FRAME, 2, len(DATE_FRAME) - 5)
    assert checksum & 0xFF == DATE_FRAME[-3] == 0x5C


def test_temp_frame_checksum(fb5210_engine):
    checksum = fb5210_engine.compute(TEMP_FRAME, 2, len(TEMP_FRAME) - 5)
    assert checksum & 0xFF == TEMP_FRAME[-3] == 0xAF


def test_checksum_with_dle_in_payload(fb5210_engine):
    payload = bytes([0x9B, 0x7F, 0x05, 0x02, 0x10, 0x83, 0xE7, 0x00])
    assert fb5210_engine.compute(payload) == 0x34


def test_payload_followed_by_its_checksum_leaves_zero(fb5210_engine):
    payload = TEMP_FRAME[2:-3]
    assert fb5210_engine.compute(payload + bytes([fb5210_engine.compute(payload)])) == 0


@pytest.mark.parametrize("params,check", list(CHECK_VALUES.items()))
def test_check_values(params, check):
    assert CrcEngine(params).compute(CHECK_INPUT) == check


@pytest.mark.parametrize("params", list(CHECK_VALUES.keys()) + [CRC8_FB5210])
def test_agrees_with_bitwise_reference(params):
    engine = CrcEngine(params)
    assert engine.compute(SAMPLE) == bitwise_crc(params, SAMPLE)
    assert engine.compute(SAMPLE, 17, 100) == bitwise_crc(params, SAMPLE[17:117])


def test_agrees_with_bitwise_reference_random_models():
    rnd = random.Random(5210)

    for _ in range(200):
        width = rnd.randint(1, 64)
        mask = (1 << width) - 1
        reflect_input = rnd.random() < 0.5
        params = AlgorithmParameters(
            hash_size=width,
            polynomial=rnd.randint(0, mask) | 1,
            init=rnd.randint(0, mask),
            reflect_input=reflect_input,
            reflect_output=reflect_input if rnd.random() < 0.8 else not reflect_input,
            xor_out=rnd.randint(0, mask),
        )
        data = bytes(rnd.randint(0, 255) for _ in range(rnd.randint(0, 40)))
        assert CrcEngine(params).compute(data) == bitwise_crc(params, data), f"Mismatch for {params}"


def test_determinism():
    engine = CrcEngine(CRC32)
    assert engine.compute(SAMPLE) == engine.compute(SAMPLE) == engine.compute(bytearray(SAMPLE))


@pytest.mark.parametrize("params", list(CHECK_VALUES.keys()))
def test_result_in_range(params):
    engine = CrcEngine(params)
    for i in range(0, len(SAMPLE), 37):
        assert 0 <= engine.compute(SAMPLE, 0, i) <= (1 << params.hash_size) - 1


@pytest.mark.parametrize("params", [CRC8_FB5210, CRC16_ARC, CRC16_XMODEM, CRC32, CRC32_BZIP2])
def test_empty_input(params):
    engine = CrcEngine(params)
    expected = (engine.initial_register ^ params.xor_out) & params.mask
    for offset in (0, 1, len(SAMPLE)):
        assert engine.compute(SAMPLE, offset, 0) == expected
    assert engine.compute(b"") == expected


def test_initial_register_reflection():
    params = AlgorithmParameters(hash_size=16, polynomial=0x1021, init=0x0001, reflect_input=True, reflect_output=True)
    assert CrcEngine(params).initial_register == 0x8000
    assert CrcEngine(CRC16_XMODEM).initial_register == 0x0000


def test_sub_range_equals_slice():
    engine = CrcEngine(CRC16_ARC)
    assert engine.compute(SAMPLE, 3, 4) == engine.compute(SAMPLE[3:7])
    assert engine.compute(SAMPLE, 10) == engine.compute(SAMPLE[10:])


def test_accepts_memoryview_and_int_list():
    engine = CrcEngine(CRC32)
    expected = engine.compute(CHECK_INPUT)
    assert engine.compute(memoryview(CHECK_INPUT)) == expected
    assert engine.compute(list(CHECK_INPUT)) == expected


@pytest.mark.parametrize("offset,length", [(-1, 1), (0, -1), (0, 10), (9, 1), (10, None)])
def test_out_of_range(offset, length):
    engine = CrcEngine(CRC32)
    with pytest.raises(IndexError):
        engine.compute(CHECK_INPUT, offset, length)


def test_table_stability():
    a = CrcEngine(AlgorithmParameters(16, 0x8005, 0, True, True, 0))
    b = CrcEngine(AlgorithmParameters(16, 0x8005, 0, True, True, 0))
    assert len(a.table) == 256
    assert a.table == b.table
    assert isinstance(a.table, tuple)


def test_well_known_table_entries():
    assert CrcEngine(CRC32).table[1] == 0x77073096
    assert CrcEngine(CRC32).table[255] == 0x2D02EF8D
    assert CrcEngine(CRC16_XMODEM).table[1] == 0x1021
    assert CrcEngine(CRC16_ARC).table[1] == 0xC0C1


@pytest.mark.parametrize("params", [CRC8_FB5210, CRC8_MAXIM])
def test_8_bit_table_matches_byte_reversal_construction(params):
    """For 8-bit models, full-width reflection is the same as reflecting within one byte."""

    def entry(index: int) -> int:
        r = reverse_bits(index) if params.reflect_input else index
        for _ in range(8):
            r = (r << 1) ^ params.polynomial if r & 0x80 else r << 1
        return reverse_bits(r) & 0xFF if params.reflect_output else r & 0xFF

    assert CrcEngine(params).table == tuple(entry(i) for i in range(256))


def test_table_entries_masked_to_width():
    params = AlgorithmParameters(hash_size=12, polynomial=0x80F)
    assert all(0 <= v <= 0xFFF for v in CrcEngine(params).table)


@pytest.mark.parametrize(
    "params",
    [
        AlgorithmParameters(hash_size=0, polynomial=0x07),
        AlgorithmParameters(hash_size=65, polynomial=0x07),
        AlgorithmParameters(hash_size=8, polynomial=0x107),
        AlgorithmParameters(hash_size=8, polynomial=0x07, init=0x100),
        AlgorithmParameters(hash_size=8, polynomial=0x07, xor_out=-1),
    ],
)
def test_invalid_parameters_rejected(params):
    with pytest.raises(Exception):
        CrcEngine(params)
