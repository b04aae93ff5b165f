"""Tokenizer turning raw HL7 v2 text into a Message tree."""

from __future__ import annotations

import logging
import re

from hl7path.common.constants import HEADER_SEGMENTS
from hl7path.common.errors import EmptyMessageError, MalformedHeaderError, UnknownDelimitersError
from hl7path.parsing.delimiters import Delimiters, resolve_delimiters
from hl7path.parsing.escapes import decode_escapes
from hl7path.parsing.tree import Component, Field, Message, Repetition, Segment

logger = logging.getLogger(__name__)

# CR is the HL7 terminator; LF and CRLF are tolerated, blank lines are skipped
SEGMENT_TERMINATOR = re.compile(r"[\r\n]")


def _parse_component(text: str, delims: Delimiters) -> Component:
    if delims.subcomponent not in text:
        return Component(raw=text, subcomponents=(decode_escapes(text, delims),))
    return Component(
        raw=text,
        subcomponents=tuple(decode_escapes(s, delims) for s in text.split(delims.subcomponent)),
    )


def _parse_repetition(text: str, delims: Delimiters) -> Repetition:
    return Repetition(
        raw=text,
        components=tuple(_parse_component(c, delims) for c in text.split(delims.component)),
    )


def _parse_field(text: str, delims: Delimiters) -> Field:
    return Field(
        raw=text,
        repetitions=tuple(_parse_repetition(r, delims) for r in text.split(delims.repetition)),
    )


def _parse_segment(text: str, delims: Delimiters) -> Segment:
    items = text.split(delims.field)
    name = items[0]

    if name in HEADER_SEGMENTS and len(items) > 1:
        # MSH-1 is the separator itself and MSH-2 the encoding block; neither is split
        fields = (
            Field.literal(delims.field),
            Field.literal(items[1]),
            *(_parse_field(f, delims) for f in items[2:]),
        )
    else:
        fields = tuple(_parse_field(f, delims) for f in items[1:])

    return Segment(name=name, fields=fields, raw=text)


def tokenize(text: str, delimiters: Delimiters | None = None) -> Message:
    """Parse a raw HL7 v2 message string into an immutable tree.

    Args:
        text: One message; segments end with CR, LF or CRLF.
        delimiters: Known delimiters; read from the header when omitted.

    Returns:
        Message with its segments in encounter order.

    Raises:
        EmptyMessageError: If the text has no segments.
        UnknownDelimitersError: If the header does not declare delimiters.
    """
    if not text or not text.strip():
        raise EmptyMessageError()

    if delimiters is not None:
        delims = delimiters
    else:
        try:
            delims = resolve_delimiters(text)
        except MalformedHeaderError as exc:
            raise UnknownDelimitersError(exc.reason) from exc

    segments = tuple(
        _parse_segment(line, delims) for line in SEGMENT_TERMINATOR.split(text) if line.strip()
    )
    logger.debug("Tokenized %d segments", len(segments))

    return Message(raw=text, delimiters=delims, segments=segments)


def parse_message(text: str) -> Message:
    """Parse once, address many: the tree entry point."""
    return tokenize(text)


__all__ = ["SEGMENT_TERMINATOR", "tokenize", "parse_message"]
