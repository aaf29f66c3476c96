"""Parameter sets of well-known CRC variants.
Values follow the CRC RevEng catalogue: https://reveng.sourceforge.io/crc-catalogue/all.htm"""

from typing import Dict

from common.algo_params import AlgorithmParameters

CRC8_FB5210 = AlgorithmParameters(hash_size=8, polynomial=0xD5, init=0x00, reflect_input=True, reflect_output=True, xor_out=0x00)
"""Checksum of the tickets on the FB5210 heating controller bus."""

CRC5_USB = AlgorithmParameters(hash_size=5, polynomial=0x05, init=0x1F, reflect_input=True, reflect_output=True, xor_out=0x1F)
CRC7_MMC = AlgorithmParameters(hash_size=7, polynomial=0x09, init=0x00, reflect_input=False, reflect_output=False, xor_out=0x00)
CRC8_SMBUS = AlgorithmParameters(hash_size=8, polynomial=0x07, init=0x00, reflect_input=False, reflect_output=False, xor_out=0x00)
CRC8_MAXIM = AlgorithmParameters(hash_size=8, polynomial=0x31, init=0x00, reflect_input=True, reflect_output=True, xor_out=0x00)
CRC8_DVB_S2 = AlgorithmParameters(hash_size=8, polynomial=0xD5, init=0x00, reflect_input=False, reflect_output=False, xor_out=0x00)
CRC12_UMTS = AlgorithmParameters(hash_size=12, polynomial=0x80F, init=0x000, reflect_input=False, reflect_output=True, xor_out=0x000)
CRC16_ARC = AlgorithmParameters(hash_size=16, polynomial=0x8005, init=0x0000, reflect_input=True, reflect_output=True, xor_out=0x0000)
CRC16_XMODEM = AlgorithmParameters(hash_size=16, polynomial=0x1021, init=0x0000, reflect_input=False, reflect_output=False, xor_out=0x0000)
CRC16_IBM_3740 = AlgorithmParameters(hash_size=16, polynomial=0x1021, init=0xFFFF, reflect_input=False, reflect_output=False, xor_out=0x0000)
CRC16_KERMIT = AlgorithmParameters(hash_size=16, polynomial=0x1021, init=0x0000, reflect_input=True, reflect_output=True, xor_out=0x0000)
CRC24_OPENPGP = AlgorithmParameters(hash_size=24, polynomial=0x864CFB, init=0xB704CE, reflect_input=False, reflect_output=False, xor_out=0x000000)
CRC32 = AlgorithmParameters(hash_size=32, polynomial=0x04C11DB7, init=0xFFFFFFFF, reflect_input=True, reflect_output=True, xor_out=0xFFFFFFFF)
CRC32_BZIP2 = AlgorithmParameters(hash_size=32, polynomial=0x04C11DB7, init=0xFFFFFFFF, reflect_input=False, reflect_output=False, xor_out=0xFFFFFFFF)
CRC32_MPEG2 = AlgorithmParameters(hash_size=32, polynomial=0x04C11DB7, init=0xFFFFFFFF, reflect_input=False, reflect_output=False, xor_out=0x00000000)
CRC64_XZ = AlgorithmParameters(
    hash_size=64, polynomial=0x42F0E1EBA9EA3693, init=0xFFFFFFFFFFFFFFFF, reflect_input=True, reflect_output=True, xor_out=0xFFFFFFFFFFFFFFFF
)

CHECK_INPUT = b"123456789"

CHECK_VALUES: Dict[AlgorithmParameters, int] = {
    CRC5_USB: 0x19,
    CRC7_MMC: 0x75,
    CRC8_SMBUS: 0xF4,
    CRC8_MAXIM: 0xA1,
    CRC8_DVB_S2: 0xBC,
    CRC12_UMTS: 0xDAF,
    CRC16_ARC: 0xBB3D,
    CRC16_XMODEM: 0x31C3,
    CRC16_IBM_3740: 0x29B1,
    CRC16_KERMIT: 0x2189,
    CRC24_OPENPGP: 0x21CF02,
    CRC32: 0xCBF43926,
    CRC32_BZIP2: 0xFC891918,
    CRC32_MPEG2: 0x0376E6E7,
    CRC64_XZ: 0x995DC9BBDF1939FA,
}
"""CRC of CHECK_INPUT for each variant."""
