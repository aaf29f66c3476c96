import os
import sys

sys.path.append(os.path.dirname(__file__))
sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from colorama import Fore
from common.algo_params import AlgorithmParameters
from common.catalogue import CHECK_INPUT
from common.checksum_algo import make_reference_fn
from common.crc_engine import CrcEngine, bitwise_crc
from target_settings import TargetSettings


class CodeGenValidator:
    @staticmethod
    def validate(params: AlgorithmParameters, settings: TargetSettings) -> CrcEngine:
        """Validates the inputs of the generator and self-checks the table-driven engine.
        Returns the checked engine."""
        params.validate()
        settings.validate()

        errors = []

        engine = CrcEngine(params)
        check = engine.compute(CHECK_INPUT)
        expected = bitwise_crc(params, CHECK_INPUT)

        if check != expected:
            errors.append(f"Table-driven CRC (0x{check:X}) differs from the bitwise reference (0x{expected:X}).")

        reference_fn = make_reference_fn(params)
        if reference_fn is not None and reference_fn(CHECK_INPUT) != check:
            errors.append(f"Table-driven CRC (0x{check:X}) differs from crcmod (0x{reference_fn(CHECK_INPUT):X}).")

        if errors:
            raise Exception("\n".join(f"- {error}" for error in errors))

        if params.reflect_input != params.reflect_output:
            print(f"{Fore.YELLOW}:Warning: crossed model (reflect_input != reflect_output), the generated code reflects the register once more at the end.")

        if params.hash_size < 8:
            print(f"{Fore.YELLOW}:Warning: {params.hash_size}-bit CRC is stored in an 8-bit table, 256 bytes are needed anyway.")

        # No exceptions at this point, print report
        print(f"{Fore.BLUE}Check value (CRC of '{CHECK_INPUT.decode()}'): 0x{check:0{params.hex_digits}X}")
        return engine
