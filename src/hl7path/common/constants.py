"""Constants and enums for hl7path."""

from enum import StrEnum
from typing import Final


class Strategy(StrEnum):
    """How a value is pulled out of a message."""

    TREE = "tree"  # tokenize once, resolve against the tree
    SCAN = "scan"  # single linear pass, no tree


class AddressSyntax(StrEnum):
    """External address syntaxes."""

    DOTTED = "dotted"  # OBR.7
    TERSER = "terser"  # /.OBR-7


# Segments whose first two fields declare the delimiters
HEADER_SEGMENTS: Final[frozenset[str]] = frozenset({"MSH", "BHS", "FHS"})

SEGMENT_NAME_LENGTH: Final[int] = 3
ENCODING_CHARACTERS_LENGTH: Final[int] = 4
SEGMENT_TERMINATORS: Final[str] = "\r\n"

DEFAULT_FIELD_SEPARATOR: Final[str] = "|"
DEFAULT_ENCODING_CHARACTERS: Final[str] = "^~\\&"

# Escape code -> delimiter role
ESCAPE_CODES: Final[dict[str, str]] = {
    "F": "field",
    "S": "component",
    "T": "subcomponent",
    "R": "repetition",
    "E": "escape",
}

__all__ = [
    "Strategy",
    "AddressSyntax",
    "HEADER_SEGMENTS",
    "SEGMENT_NAME_LENGTH",
    "ENCODING_CHARACTERS_LENGTH",
    "SEGMENT_TERMINATORS",
    "DEFAULT_FIELD_SEPARATOR",
    "DEFAULT_ENCODING_CHARACTERS",
    "ESCAPE_CODES",
]
