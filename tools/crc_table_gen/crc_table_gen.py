import os
import sys
import argparse

sys.path.append(os.path.dirname(__file__))
sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from typing import List, Optional
from colorama import Fore
from common.algo_params import AlgorithmParameters
from target_settings import TargetSettings
from validator import CodeGenValidator
from generator_crc_table import CodeGen_CrcTable


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="CRC table generator - compiles CRC parameters into a C lookup table and CRC routine",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument("checksum_params", help="Path to checksum_parameters.json file")
    parser.add_argument("output_dir", help="Output directory")
    parser.add_argument("-t", "--target", default=None, help="Path to a target_settings.json file (default: built-in settings)")
    args = parser.parse_args(argv)

    try:
        params = AlgorithmParameters.load_from_file(path=args.checksum_params)
        settings = TargetSettings.load_from_file(path=args.target) if args.target else TargetSettings()

        CodeGenValidator.validate(params=params, settings=settings)
        generated_source_files = CodeGen_CrcTable().generate(params=params, settings=settings)

        for file_name in generated_source_files:
            with open(os.path.join(args.output_dir, file_name), "w") as f:
                f.write(generated_source_files[file_name])

        print(f"{Fore.GREEN}crc_table_gen: success{Fore.RESET}")
        exit_code = 0
    except Exception as x:
        import traceback

        traceback.print_exc()
        print(f"{Fore.RED}crc_table_gen :: error :: {x}{Fore.RESET}")
        exit_code = 1

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
