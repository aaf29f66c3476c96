import json
import re
from typing import List, Optional


class TargetSettings:
    """Settings of the generated C code."""

    def __init__(
        self,
        identifier_prefix: str = "CRC",
        external_headers: List[str] = [],
        table_attribute: Optional[str] = None,
        entries_per_line: int = 8,
    ):
        self.identifier_prefix: str = identifier_prefix
        """Prefix of all generated identifiers and file names. Must be a valid C-language identifier."""

        self.external_headers: List[str] = external_headers
        """Additional headers to include in the generated source file, e.g. the one defining 'table_attribute'."""

        self.table_attribute: Optional[str] = table_attribute
        """Compiler-specific attribute for the table object, like a section placement. Will be added to the table definition."""

        self.entries_per_line: int = entries_per_line
        """Count of table entries per source line. Power of 2, in the range [1..16]."""

    @staticmethod
    def load_from_file(path: str) -> "TargetSettings":
        with open(path, "r", encoding="utf-8") as f:
            return TargetSettings(**json.loads(s=f.read()))

    def save_to_file(self, path: str):
        with open(path, mode="w", encoding="utf-8") as f:
            f.write(json.dumps(obj=self, indent=4, default=lambda obj: obj.__dict__))

    def validate(self):
        """Validates the target settings. Raises an Exception if something is not ok."""

        def is_valid_identifier(string: str) -> bool:
            """Checks if a string is valid C identifier"""
            if string is None or string == "":
                return False
            return re.match(r"^[a-zA-Z_][a-zA-Z0-9_]*$", string) is not None

        def is_valid_filename(file_name: str) -> bool:
            if len(file_name) > 255:
                return False
            return re.match(r"^[a-zA-Z0-9_./-]+$", file_name.strip('<> "')) is not None

        errors = []

        if not is_valid_identifier(self.identifier_prefix):
            errors.append(f"'identifier_prefix' is not a valid C-language identifier: '{self.identifier_prefix}'")

        if any(map(lambda h: not is_valid_filename(h), self.external_headers)):
            errors.append(f"Some of the external headers has invalid file name")

        if self.entries_per_line not in (1, 2, 4, 8, 16):
            errors.append(f"'entries_per_line' should be a power of 2 in the range [1..16], got {self.entries_per_line}")

        if errors:
            raise Exception("\n".join(f"- {error}" for error in errors))
