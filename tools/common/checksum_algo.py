from typing import Any, Callable, Dict, Optional

from common.algo_params import AlgorithmParameters
from common.crc_engine import CrcEngine, reverse_bits

CRCMOD_WIDTHS = (8, 16, 24, 32, 64)


class ChecksumAlgorithm:
    def __init__(self, params: Dict[str, Any]) -> None:
        assert "algo" in params
        assert isinstance(params["algo"], str)

        if params["algo"].lower() == "crc":
            crc_params = {k: v for k, v in params.items() if k != "algo"}
            self.engine: CrcEngine = CrcEngine(AlgorithmParameters.from_dict(crc_params))
            self.params: dict = params
        else:
            raise Exception(f"Not implemented checksum algo: {params['algo']}")

    def calculate(self, data: bytes | bytearray) -> int:
        return self.engine.compute(data)

    @property
    def parameters(self) -> dict:
        return self.params

    @property
    def algorithm_parameters(self) -> AlgorithmParameters:
        return self.engine.parameters


def make_reference_fn(params: AlgorithmParameters) -> Optional[Callable[[bytes], int]]:
    """Creates an independent crcmod implementation of the same CRC model.
    Returns None if crcmod can't express the model (odd widths, crossed reflection)."""
    if params.hash_size not in CRCMOD_WIDTHS or params.reflect_input != params.reflect_output:
        return None

    import crcmod

    # crcmod wants the CRC of an empty message as initial value, computed in its own register direction
    register = reverse_bits(params.init, params.hash_size) if params.reflect_input else params.init

    return crcmod.mkCrcFun(
        poly=(1 << params.hash_size) | params.polynomial,
        initCrc=register ^ params.xor_out,
        rev=params.reflect_input,
        xorOut=params.xor_out,
    )
