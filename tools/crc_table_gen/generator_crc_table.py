import os
import sys

sys.path.append(os.path.dirname(__file__))
sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from typing import Dict
from common.algo_params import AlgorithmParameters
from common.catalogue import CHECK_INPUT
from common.crc_engine import CrcEngine
from generator_base import CodeGenerator
from target_settings import TargetSettings


class CodeGen_CrcTable(CodeGenerator):
    """C source code generator: lookup table plus the matching table-driven CRC routine."""

    def __init__(self):
        super().__init__()
        self.application_name = "Table-driven CRC"

    def generate(self, params: AlgorithmParameters, settings: TargetSettings) -> Dict[str, str]:
        """Generates all necessary files as a dictionary in format file_name:file_content"""

        self._params: AlgorithmParameters = params
        self._settings: TargetSettings = settings
        self._engine: CrcEngine = CrcEngine(params)
        self._prefix: str = settings.identifier_prefix

        header_name = f"{self._prefix}_Table.h"
        source_name = f"{self._prefix}_Table.c"
        description = self.describe_parameters()

        return {
            header_name: self.compose_file(description, header_name, self.generate_table_h()),
            source_name: self.compose_file(description, source_name, self.generate_table_c(header_name)),
        }

    def describe_parameters(self) -> str:
        p = self._params
        w = p.hex_digits
        return (
            f"width={p.hash_size} poly=0x{p.polynomial:0{w}X} init=0x{p.init:0{w}X} "
            f"refin={str(p.reflect_input).lower()} refout={str(p.reflect_output).lower()} xorout=0x{p.xor_out:0{w}X}"
        )

    def get_c_type(self) -> str:
        for bits in (8, 16, 32):
            if self._params.hash_size <= bits:
                return f"uint{bits}_t"
        return "uint64_t"

    def to_c_literal(self, value: int) -> str:
        suffix = "U"
        if self._params.hash_size > 32:
            suffix = "ULL"
        elif self._params.hash_size > 16:
            suffix = "UL"
        return f"0x{value:0{self._params.hex_digits}X}{suffix}"

    def generate_table_h(self) -> str:
        p = self._params
        pfx = self._prefix

        txt = self.to_comment_box("   Dependencies", self.TextAlignment.Left) + "\n"
        txt += "#include <stdint.h>\n"
        txt += "#include <stddef.h>\n"
        txt += "\n"

        txt += self.to_comment_box("   Macros", self.TextAlignment.Left) + "\n"
        txt += f"#define {pfx}_WIDTH              {p.hash_size}U\n"
        txt += f"#define {pfx}_POLYNOMIAL         {self.to_c_literal(p.polynomial)}\n"
        txt += f"#define {pfx}_INIT               {self.to_c_literal(p.init)}\n"
        txt += f"#define {pfx}_INITIAL_REGISTER   {self.to_c_literal(self._engine.initial_register)}\n"
        txt += f"#define {pfx}_REFLECT_INPUT      {int(p.reflect_input)}\n"
        txt += f"#define {pfx}_REFLECT_OUTPUT     {int(p.reflect_output)}\n"
        txt += f"#define {pfx}_XOR_OUT            {self.to_c_literal(p.xor_out)}\n"
        txt += f"#define {pfx}_MASK               {self.to_c_literal(p.mask)}\n"
        txt += f"/* CRC of \"{CHECK_INPUT.decode()}\" */\n"
        txt += f"#define {pfx}_CHECK              {self.to_c_literal(self._engine.compute(CHECK_INPUT))}\n"
        txt += "\n"

        txt += self.to_comment_box("   Types", self.TextAlignment.Left) + "\n"
        txt += f"typedef {self.get_c_type()}    {pfx}_t;\n"
        txt += "\n"

        txt += self.to_comment_box("   Interface", self.TextAlignment.Left) + "\n"
        txt += f"extern const {pfx}_t {pfx}_table[256];\n"
        txt += "\n"
        txt += f"{pfx}_t {pfx}_Compute(const uint8_t* data, size_t length);\n"
        return txt

    def generate_table_c(self, header_name: str) -> str:
        txt = self.to_comment_box("   Dependencies", self.TextAlignment.Left) + "\n"
        txt += f'#include "{header_name}"\n'

        for hdr in self._settings.external_headers:
            hdr = hdr.strip()
            txt += f"#include {hdr}\n" if hdr.startswith(("<", '"')) else f'#include "{hdr}"\n'

        txt += "\n"
        txt += self.to_comment_box("   Lookup table", self.TextAlignment.Left) + "\n"
        txt += self.generate_table_definition() + "\n"
        txt += "\n"

        txt += self.to_comment_box("   Routines", self.TextAlignment.Left) + "\n"
        if self._params.reflect_input != self._params.reflect_output:
            txt += self.generate_reflect_function() + "\n"
        txt += self.generate_compute_function()
        return txt

    def generate_table_definition(self) -> str:
        pfx = self._prefix
        per_line = self._settings.entries_per_line
        attr = (" " + self._settings.table_attribute) if self._settings.table_attribute else ""
        table = self._engine.table

        txt = f"const {pfx}_t {pfx}_table[256]{attr} = {{\n"
        for row in range(0, len(table), per_line):
            entries = ", ".join(self.to_c_literal(v) for v in table[row : row + per_line])
            txt += f"    {entries}{',' if row + per_line < len(table) else ''}\n"
        txt += "};\n"
        return txt

    def generate_reflect_function(self) -> str:
        pfx = self._prefix
        txt = f"static {pfx}_t {pfx}_Reflect({pfx}_t value)\n"
        txt += "{\n"
        txt += f"    {pfx}_t result = 0U;\n"
        txt += "    uint8_t i;\n"
        txt += "\n"
        txt += f"    for (i = 0U; i < {pfx}_WIDTH; i++) {{\n"
        txt += f"        result = ({pfx}_t)((result << 1) | (value & 1U));\n"
        txt += "        value >>= 1;\n"
        txt += "    }\n"
        txt += "    return result;\n"
        txt += "}\n"
        return txt

    def generate_compute_function(self) -> str:
        pfx = self._prefix
        width = self._params.hash_size

        if self._params.reflect_input:
            step = f"{pfx}_table[(uint8_t)(crc ^ *data++)] ^ (crc >> 8)"
        elif width > 8:
            step = f"{pfx}_table[(uint8_t)((crc >> {width - 8}U) ^ *data++)] ^ (crc << 8)"
        elif width == 8:
            step = f"{pfx}_table[(uint8_t)(crc ^ *data++)]"
        else:
            # Sub-byte register: its top bit goes to bit 7 of the index
            step = f"{pfx}_table[(uint8_t)((crc << {8 - width}U) ^ *data++)]"

        txt = f"{pfx}_t {pfx}_Compute(const uint8_t* data, size_t length)\n"
        txt += "{\n"
        txt += f"    {pfx}_t crc = {pfx}_INITIAL_REGISTER;\n"
        txt += "\n"
        txt += "    while (length-- > 0U) {\n"
        txt += f"        crc = ({pfx}_t)(({step}) & {pfx}_MASK);\n"
        txt += "    }\n"
        if self._params.reflect_input != self._params.reflect_output:
            txt += f"    crc = {pfx}_Reflect(crc);\n"
        txt += f"    return ({pfx}_t)((crc ^ {pfx}_XOR_OUT) & {pfx}_MASK);\n"
        txt += "}\n"
        return txt
