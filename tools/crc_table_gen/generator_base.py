from abc import ABC
from datetime import datetime
from enum import IntEnum
from tzlocal import get_localzone


class CodeGenerator(ABC):
    class TextAlignment(IntEnum):
        Left = 0
        Center = 1

    class Enclosure(IntEnum):
        Opening = 0
        Closing = 1

    def __init__(self):
        self.max_line_length: int = 80

        self.application_name: str = "CRC table"
        """Name of the application for which we generate source files"""

        self.generator_name: str = "crc_table_gen"
        """Name of the tool, producing the code"""

        self.generator_version: dict = {"major": 1, "minor": 0}
        """Version of the tool, producing the code."""

    def compose_file(self, description: str, file_name: str, file_content: str) -> str:
        """Produces final source file (.c or .h) by incorporating timestamp, inclusion guard and file content."""

        is_header = file_name.lower().endswith(".h")
        txt = self.generate_file_header(file_name, description) + "\n"

        if is_header:
            txt += self.to_inclusion_guard(file_name, CodeGenerator.Enclosure.Opening) + "\n"

        txt += file_content + "\n"

        if is_header:
            txt += self.to_inclusion_guard(file_name, CodeGenerator.Enclosure.Closing) + "\n"
        return txt

    def generate_file_header(self, file_name: str, description: str) -> str:
        """Generates information file header as comment box.
        Parameters:
        file_name (str): Name of the generated file, including extension
        description (str): One-line description of the generator input, e.g. the CRC parameters
        """
        txt = ""
        txt += " \\file   " + file_name + "\n"
        txt += " \\date   " + datetime.now(tz=get_localzone()).strftime("%Y-%m-%d %H:%M:%S %Z (UTC%z)") + "\n"
        txt += " \\note   !!! Do not change manually !!!" + "\n"
        txt += f" \\brief  Generated file for '{self.application_name}'" + "\n"
        txt += "\n"
        txt += "         Generator name    : " + self.generator_name + "\n"
        txt += "         Generator version : " + str(self.generator_version["major"]) + "." + str(self.generator_version["minor"]) + "\n"
        txt += "         Parameters        : " + description

        return self.to_doxygen_comment_box(txt)

    def to_comment_box(self, text: str, alignment: TextAlignment) -> str:
        """Encloses a text with multiline asterisk box."""

        lines = text.splitlines()
        line_len = max(len(max(lines, key=len)) + 6, self.max_line_length)

        txt = "/*" + "".ljust(line_len - 4, "*") + "*/\n"

        for line in lines:
            total_pad: int = line_len - 4 - len(line)  # 4 is for the comment symbols at both ends of the row

            if alignment == CodeGenerator.TextAlignment.Left:
                left_pad = 1
            else:
                left_pad = int(total_pad / 2)

            txt += "/*" + "".ljust(left_pad) + line + "".rjust(total_pad - left_pad) + "*/\n"

        txt += "/" + "".ljust(line_len - 2, "*") + "/"
        return txt

    def to_doxygen_comment_box(self, multiline_text: str) -> str:
        lines = multiline_text.splitlines()
        txt = "/*!\n"

        for line in lines:
            txt += " *" + line + "\n"

        txt += " */"
        return txt

    def to_inclusion_guard(self, file_name: str, enclosure: Enclosure) -> str:
        """Produces multiple inclusion protection macro. Example: fileName.ext -> FILENAME_EXT__"""

        macro = file_name.replace(".", "_").replace(" ", "_").replace("-", "_").upper() + "__"

        if enclosure == CodeGenerator.Enclosure.Opening:
            return f"#ifndef {macro}\n#define {macro}\n"
        return f"#endif  /* {macro} */"
