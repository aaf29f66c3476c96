import json
import os
from typing import Any, Dict

import bincopy

IMAGE_EXTENSIONS = [".hex", ".ihex", ".srec", ".s19", ".s28", ".s37"]

OUTPUT_FORMATS = {
    "0xhex": "0x{:0{w}X}",
    "hex": "{:0{w}X}",
    "decimal": "{}",
}


def parse_int_literal(literal: str) -> int:
    """Parses decimal, 0x-hex, 0o-octal and 0b-binary literals."""
    try:
        return int(literal.strip(), 0)
    except ValueError:
        raise Exception(f"Invalid integer literal: '{literal}'")


def load_input_image(path: str, padding: bytes = b"\xff") -> bytes:
    """Load an input image from binary, Intel HEX, or Motorola S-record format.
    Gaps between the records of a HEX/S-record file are filled with 'padding'."""
    ext = os.path.splitext(path)[1].lower()

    if ext in IMAGE_EXTENSIONS:
        bf = bincopy.BinFile(path)
        if bf.minimum_address is None:
            return b""
        return bf.as_binary(minimum_address=bf.minimum_address, maximum_address=bf.maximum_address, padding=padding)
    else:
        # Load as raw binary
        with open(path, mode="rb") as f:
            return f.read()


def load_checksum_params(path: str) -> Dict[str, Any]:
    with open(path, mode="r", encoding="utf-8") as f:
        params = json.load(f)
    if not isinstance(params, dict):
        raise Exception(f"'{path}' doesn't contain a JSON object")
    params.setdefault("algo", "crc")
    return params


def format_value(value: int, hash_size: int, fmt: str = "0xhex") -> str:
    return OUTPUT_FORMATS[fmt].format(value, w=(hash_size + 3) // 4)


def to_hex_string(data: bytes | bytearray) -> str:
    """Formats bytes the way the bus logs show them: '10 02 9B ...'"""
    return " ".join(f"{b:02X}" for b in data)
