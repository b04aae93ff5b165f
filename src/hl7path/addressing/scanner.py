"""Direct field extraction without building a message tree.

``scan`` walks the text once, left to right: it skips whole segments until
the requested one turns up, counts field separators inside it, cuts out the
one field and only then splits that substring into repetition, component
and subcomponent. It returns exactly what ``resolve(tokenize(text), addr)``
returns, and is the cheaper choice when only a few values are needed from a
message.
"""

from __future__ import annotations

import logging
from enum import StrEnum

from hl7path.addressing.address import Address, parse_address
from hl7path.common.constants import HEADER_SEGMENTS
from hl7path.common.errors import (
    EmptyMessageError,
    FieldIndexOutOfRangeError,
    HL7PathError,
    MalformedHeaderError,
    SegmentNotFoundError,
    UnknownDelimitersError,
)
from hl7path.parsing.delimiters import Delimiters, resolve_delimiters
from hl7path.parsing.escapes import decode_escapes
from hl7path.parsing.tokenizer import SEGMENT_TERMINATOR

logger = logging.getLogger(__name__)


class ScanState(StrEnum):
    """States of the direct scanner."""

    SEEK_SEGMENT = "seek_segment"
    SEEK_FIELD = "seek_field"
    EXTRACT_VALUE = "extract_value"
    DONE = "done"
    FAILED = "failed"


def _nth_piece(text: str, sep: str, index: int | None) -> str | None:
    """The 1-based piece of ``text.split(sep)`` (first when None), or None past the end."""
    start = 0
    for _ in range((1 if index is None else index) - 1):
        pos = text.find(sep, start)
        if pos == -1:
            return None
        start = pos + 1
    end = text.find(sep, start)
    return text[start:] if end == -1 else text[start:end]


def _slice_value(raw: str, addr: Address, delims: Delimiters) -> str:
    rep = _nth_piece(raw, delims.repetition, addr.repetition)
    if rep is None:
        return ""
    comp = _nth_piece(rep, delims.component, addr.component)
    if comp is None:
        return ""
    sub = _nth_piece(comp, delims.subcomponent, addr.subcomponent)
    return "" if sub is None else decode_escapes(sub, delims)


def _literal_value(raw: str, addr: Address) -> str:
    # MSH-1 / MSH-2 hold a single unsplit leaf
    if all(i in (None, 1) for i in (addr.repetition, addr.component, addr.subcomponent)):
        return raw
    return ""


def scan(text: str, address: Address | str) -> str:
    """Extract one decoded value from raw message text in a single pass.

    Args:
        text: One raw HL7 v2 message.
        address: Address or dotted / terser-style expression.

    Returns:
        The decoded value, ``""`` when the addressed node is empty.

    Raises:
        InvalidAddressSyntaxError: If the expression cannot be parsed.
        EmptyMessageError: If the text has no segments.
        UnknownDelimitersError: If the header does not declare delimiters.
        SegmentNotFoundError: If the segment occurrence does not exist.
        FieldIndexOutOfRangeError: If the field index exceeds the field count.
    """
    if not text or not text.strip():
        raise EmptyMessageError()

    try:
        delims = resolve_delimiters(text)
    except MalformedHeaderError as exc:
        raise UnknownDelimitersError(exc.reason) from exc

    addr = parse_address(address)

    fs = delims.field
    name = addr.segment
    header = name in HEADER_SEGMENTS
    # separators to pass before the target field starts; MSH-1 is the first separator itself
    needed = max(addr.field - 1, 1) if header else addr.field

    length = len(text)
    remaining = addr.occurrence
    pos = 0
    span_end = 0
    cursor = 0
    separators_seen = 0
    value = ""
    failure: HL7PathError | None = None
    state = ScanState.SEEK_SEGMENT

    while state is not ScanState.DONE and state is not ScanState.FAILED:
        if state is ScanState.SEEK_SEGMENT:
            if pos >= length:
                failure = SegmentNotFoundError(name, addr.occurrence)
                state = ScanState.FAILED
                continue
            terminator = SEGMENT_TERMINATOR.search(text, pos)
            span_end = length if terminator is None else terminator.start()
            after_name = pos + len(name)
            if text.startswith(name, pos) and (after_name == span_end or text[after_name] == fs):
                remaining -= 1
                if remaining == 0:
                    cursor = after_name
                    state = ScanState.SEEK_FIELD
                    continue
            pos = span_end + 1

        elif state is ScanState.SEEK_FIELD:
            if separators_seen == needed:
                state = ScanState.EXTRACT_VALUE
                continue
            nxt = text.find(fs, cursor, span_end)
            if nxt == -1:
                if header:
                    field_count = separators_seen + 1 if separators_seen else 0
                else:
                    field_count = separators_seen
                failure = FieldIndexOutOfRangeError(name, addr.field, field_count)
                state = ScanState.FAILED
                continue
            separators_seen += 1
            cursor = nxt + 1

        elif state is ScanState.EXTRACT_VALUE:
            end = text.find(fs, cursor, span_end)
            raw = text[cursor:span_end if end == -1 else end]
            if header and addr.field == 1:
                value = _literal_value(fs, addr)
            elif header and addr.field == 2:
                value = _literal_value(raw, addr)
            else:
                value = _slice_value(raw, addr, delims)
            state = ScanState.DONE

    if failure is not None:
        raise failure

    logger.debug("Scanned %s", addr)
    return value


def extract_value(text: str, address: Address | str) -> str:
    """Scan once per address: the direct entry point."""
    return scan(text, address)


__all__ = ["ScanState", "scan", "extract_value"]
