"""Exceptions raised while parsing and addressing HL7 v2 messages.

All errors derive from ``HL7PathError``, itself a ``ValueError``: every
failure is caused by malformed input or a bad address, never by a transient
condition, so nothing here is worth retrying.
"""

from __future__ import annotations


class HL7PathError(ValueError):
    """Base class for all hl7path errors."""


class MalformedHeaderError(HL7PathError):
    """The header does not declare a usable delimiter set."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Malformed header: {reason}")


class EmptyMessageError(HL7PathError):
    """The text contains no segments."""

    def __init__(self) -> None:
        super().__init__("HL7 message is empty or contains no segments")


class UnknownDelimitersError(HL7PathError):
    """Delimiters could not be resolved from the message header."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Unable to resolve delimiters: {reason}")


class SegmentNotFoundError(HL7PathError):
    """No segment with the requested name and occurrence exists."""

    def __init__(self, segment: str, occurrence: int = 1) -> None:
        self.segment = segment
        self.occurrence = occurrence
        if occurrence == 1:
            message = f"Segment '{segment}' not found"
        else:
            message = f"Segment '{segment}' occurrence {occurrence} not found"
        super().__init__(message)


class FieldIndexOutOfRangeError(HL7PathError):
    """The field index exceeds the number of fields in the segment."""

    def __init__(self, segment: str, field: int, field_count: int) -> None:
        self.segment = segment
        self.field = field
        self.field_count = field_count
        super().__init__(
            f"Field {segment}-{field} out of range: segment has {field_count} fields"
        )


class InvalidAddressSyntaxError(HL7PathError):
    """The address expression cannot be parsed."""

    def __init__(self, expression: str, reason: str = "") -> None:
        self.expression = expression
        message = f"Invalid address '{expression}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


__all__ = [
    "HL7PathError",
    "MalformedHeaderError",
    "EmptyMessageError",
    "UnknownDelimitersError",
    "SegmentNotFoundError",
    "FieldIndexOutOfRangeError",
    "InvalidAddressSyntaxError",
]
