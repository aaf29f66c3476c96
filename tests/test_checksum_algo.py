import pytest
from common.catalogue import CHECK_INPUT, CHECK_VALUES, CRC5_USB, CRC7_MMC, CRC8_FB5210, CRC12_UMTS
from common.checksum_algo import ChecksumAlgorithm, make_reference_fn
from common.crc_engine import CrcEngine

FB5210_PARAMS = {
    "algo": "CRC",
    "hash_size": 8,
    "polynomial": "0xD5",
    "init": "0x00",
    "reflect_input": True,
    "reflect_output": True,
    "xor_out": "0x00",
}


def test_calculate():
    algo = ChecksumAlgorithm(FB5210_PARAMS)
    assert algo.calculate(bytes([0x9B, 0x7F, 0x05, 0x02, 0x83, 0xE7, 0x00])) == 0x5C
    assert algo.algorithm_parameters == CRC8_FB5210
    assert algo.parameters is FB5210_PARAMS


def test_not_implemented_algo():
    with pytest.raises(Exception, match="Not implemented checksum algo: fletcher"):
        ChecksumAlgorithm({"algo": "fletcher"})


def test_invalid_parameters():
    with pytest.raises(Exception):
        ChecksumAlgorithm({"algo": "crc", "hash_size": 8, "polynomial": "0x1D5"})


@pytest.mark.parametrize("params", [p for p in CHECK_VALUES if make_reference_fn(p) is not None])
def test_agrees_with_crcmod(params):
    reference_fn = make_reference_fn(params)
    engine = CrcEngine(params)
    data = bytes(range(256)) * 3

    assert reference_fn(CHECK_INPUT) == CHECK_VALUES[params]
    assert engine.compute(data) == reference_fn(data)
    assert engine.compute(b"") == reference_fn(b"")


def test_fb5210_agrees_with_crcmod():
    data = bytes([0x9B, 0x7F, 0x05, 0x02, 0x10, 0x83, 0xE7, 0x00])
    assert make_reference_fn(CRC8_FB5210)(data) == CrcEngine(CRC8_FB5210).compute(data) == 0x34


@pytest.mark.parametrize("params", [CRC5_USB, CRC7_MMC, CRC12_UMTS])
def test_no_reference_for_models_crcmod_cannot_express(params):
    assert make_reference_fn(params) is None
