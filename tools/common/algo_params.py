import json
from dataclasses import dataclass, fields
from typing import Any, Dict

NATIVE_REGISTER_BITS = 64
"""Widest CRC register supported. Python integers are unbounded, so the register is emulated by masking."""


def _to_int(key: str, value: Any) -> int:
    if isinstance(value, bool):
        raise Exception(f"'{key}' must be an integer, got a boolean")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip(), 0)
        except ValueError:
            raise Exception(f"'{key}' is not a valid integer literal: {value!r}")
    raise Exception(f"'{key}' must be an integer or an integer literal, got {type(value).__name__}")


def _to_bool(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("true", "false"):
        return value.strip().lower() == "true"
    raise Exception(f"'{key}' must be a boolean, got {value!r}")


@dataclass(frozen=True)
class AlgorithmParameters:
    """Describes one CRC variant in the parametric ("Rocksoft") CRC model.

    No validation happens on construction, call validate() or hand the object to a CrcEngine."""

    hash_size: int
    """Width of the CRC register in bits."""

    polynomial: int
    """Generator polynomial, unreflected, without the implicit top bit."""

    init: int = 0
    """Register value before the first input byte."""

    reflect_input: bool = False
    """Process the bits of each input byte LSB-first."""

    reflect_output: bool = False
    """Reflect the register before the final XOR."""

    xor_out: int = 0
    """Value XORed into the final register."""

    @property
    def mask(self) -> int:
        if self.hash_size < NATIVE_REGISTER_BITS:
            return (1 << self.hash_size) - 1
        return (1 << NATIVE_REGISTER_BITS) - 1

    @property
    def hex_digits(self) -> int:
        """Number of hex digits needed to print a value of this width."""
        return (self.hash_size + 3) // 4

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "AlgorithmParameters":
        known = {f.name for f in fields(AlgorithmParameters)}
        unknown = set(data.keys()) - known
        if unknown:
            raise Exception("Unknown CRC parameters: " + ", ".join(sorted(unknown)))
        for required in ("hash_size", "polynomial"):
            if required not in data:
                raise Exception(f"The required CRC parameter '{required}' is missing")

        return AlgorithmParameters(
            hash_size=_to_int("hash_size", data["hash_size"]),
            polynomial=_to_int("polynomial", data["polynomial"]),
            init=_to_int("init", data.get("init", 0)),
            reflect_input=_to_bool("reflect_input", data.get("reflect_input", False)),
            reflect_output=_to_bool("reflect_output", data.get("reflect_output", False)),
            xor_out=_to_int("xor_out", data.get("xor_out", 0)),
        )

    def to_dict(self) -> Dict[str, Any]:
        w = self.hex_digits
        return {
            "hash_size": self.hash_size,
            "polynomial": f"0x{self.polynomial:0{w}X}",
            "init": f"0x{self.init:0{w}X}",
            "reflect_input": self.reflect_input,
            "reflect_output": self.reflect_output,
            "xor_out": f"0x{self.xor_out:0{w}X}",
        }

    @staticmethod
    def load_from_file(path: str) -> "AlgorithmParameters":
        with open(path, "r", encoding="utf-8") as f:
            data = json.loads(s=f.read())
        algo = data.pop("algo", "crc")
        if not isinstance(algo, str) or algo.lower() != "crc":
            raise Exception(f"Not implemented checksum algo: {algo}")
        return AlgorithmParameters.from_dict(data)

    def save_to_file(self, path: str):
        with open(path, mode="w", encoding="utf-8") as f:
            f.write(json.dumps(obj=dict(algo="crc", **self.to_dict()), indent=4))

    def validate(self):
        """Validates the parameters. Raises an exception listing all problems found."""
        errors = []

        def is_int(value: Any) -> bool:
            return isinstance(value, int) and not isinstance(value, bool)

        for name in ("hash_size", "polynomial", "init", "xor_out"):
            if not is_int(getattr(self, name)):
                errors.append(f"'{name}' must be an integer")

        for name in ("reflect_input", "reflect_output"):
            if not isinstance(getattr(self, name), bool):
                errors.append(f"'{name}' must be a boolean")

        if errors:
            raise Exception("\n".join(f"- {error}" for error in errors))

        if self.hash_size < 1 or self.hash_size > NATIVE_REGISTER_BITS:
            errors.append(f"The hash size must be in range [1..{NATIVE_REGISTER_BITS}] bits, got {self.hash_size}")
        else:
            for name in ("polynomial", "init", "xor_out"):
                value = getattr(self, name)
                if value < 0 or value > self.mask:
                    errors.append(f"'{name}' (0x{value:X}) doesn't fit into {self.hash_size} bits")

        if errors:
            raise Exception("\n".join(f"- {error}" for error in errors))
