"""Delimiter table discovered from an HL7 v2 message header."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from hl7path.common.constants import (
    DEFAULT_ENCODING_CHARACTERS,
    DEFAULT_FIELD_SEPARATOR,
    ENCODING_CHARACTERS_LENGTH,
    SEGMENT_NAME_LENGTH,
    SEGMENT_TERMINATORS,
)
from hl7path.common.errors import MalformedHeaderError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Delimiters:
    """The five special characters a message declares in its header."""

    field: str
    component: str
    repetition: str
    escape: str
    subcomponent: str

    def __post_init__(self) -> None:
        chars = (self.field, self.component, self.repetition, self.escape, self.subcomponent)
        if any(len(c) != 1 for c in chars):
            msg = "Delimiters must be single characters"
            raise ValueError(msg)
        if len(set(chars)) != len(chars):
            msg = f"Delimiters must be distinct, got {''.join(chars)!r}"
            raise ValueError(msg)

    @classmethod
    def default(cls) -> Delimiters:
        """The conventional ``|^~\\&`` set."""
        return cls.from_encoding_characters(DEFAULT_FIELD_SEPARATOR, DEFAULT_ENCODING_CHARACTERS)

    @classmethod
    def from_encoding_characters(cls, field: str, encoding: str) -> Delimiters:
        """Build from a field separator and the MSH-2 block (component, repetition, escape, subcomponent)."""
        component, repetition, escape, subcomponent = encoding
        return cls(
            field=field,
            component=component,
            repetition=repetition,
            escape=escape,
            subcomponent=subcomponent,
        )

    @property
    def encoding_characters(self) -> str:
        """The MSH-2 block in declaration order."""
        return f"{self.component}{self.repetition}{self.escape}{self.subcomponent}"

    def __str__(self) -> str:
        return f"{self.field}{self.encoding_characters}"


def resolve_delimiters(text: str) -> Delimiters:
    """Read the delimiter table from the start of a message.

    The header must start with a 3-character segment code followed by the
    field separator; the next four characters, up to the following field
    separator or segment terminator, are the component, repetition, escape
    and subcomponent characters.

    Args:
        text: Raw message text.

    Returns:
        Resolved Delimiters.

    Raises:
        MalformedHeaderError: If the header is too short or the encoding
            block is not exactly four further distinct characters.
    """
    if len(text) <= SEGMENT_NAME_LENGTH:
        raise MalformedHeaderError("header is shorter than a segment code and field separator")

    name = text[:SEGMENT_NAME_LENGTH]
    if not (name.isascii() and name.isalnum()):
        raise MalformedHeaderError(f"header does not start with a segment code: {name!r}")

    field = text[SEGMENT_NAME_LENGTH]
    if field in SEGMENT_TERMINATORS or field.isalnum() or field.isspace():
        raise MalformedHeaderError(f"invalid field separator {field!r}")

    start = SEGMENT_NAME_LENGTH + 1
    # one past the block so an overlong block is detected without reading further
    limit = min(len(text), start + ENCODING_CHARACTERS_LENGTH + 1)
    end = start
    while end < limit and text[end] != field and text[end] not in SEGMENT_TERMINATORS:
        end += 1
    encoding = text[start:end]

    if len(encoding) != ENCODING_CHARACTERS_LENGTH:
        raise MalformedHeaderError(
            f"expected {ENCODING_CHARACTERS_LENGTH} encoding characters after the field "
            f"separator, got {text[start:limit]!r}"
        )
    if len(set(field + encoding)) != ENCODING_CHARACTERS_LENGTH + 1:
        raise MalformedHeaderError(f"delimiters are not distinct: {field + encoding!r}")

    delimiters = Delimiters.from_encoding_characters(field, encoding)
    logger.debug("Resolved delimiters %r from %s header", str(delimiters), name)
    return delimiters


__all__ = ["Delimiters", "resolve_delimiters"]
