"""Common constants, configuration and errors for hl7path."""

from hl7path.common.config import HL7PathConfig
from hl7path.common.constants import HEADER_SEGMENTS, AddressSyntax, Strategy
from hl7path.common.errors import (
    EmptyMessageError,
    FieldIndexOutOfRangeError,
    HL7PathError,
    InvalidAddressSyntaxError,
    MalformedHeaderError,
    SegmentNotFoundError,
    UnknownDelimitersError,
)

__all__ = [
    "HL7PathConfig",
    "HEADER_SEGMENTS",
    "AddressSyntax",
    "Strategy",
    "HL7PathError",
    "MalformedHeaderError",
    "EmptyMessageError",
    "UnknownDelimitersError",
    "SegmentNotFoundError",
    "FieldIndexOutOfRangeError",
    "InvalidAddressSyntaxError",
]
