"""Decoding of in-band HL7 escape sequences."""

from __future__ import annotations

from hl7path.common.constants import ESCAPE_CODES
from hl7path.parsing.delimiters import Delimiters


def decode_escapes(text: str, delimiters: Delimiters) -> str:
    """Replace delimiter escape sequences with their literal characters.

    ``\\F\\``, ``\\S\\``, ``\\T\\``, ``\\R\\`` and ``\\E\\`` (written with the
    message's own escape character) become the field, component,
    subcomponent, repetition and escape characters. Any other escape
    sequence, such as the ``\\H\\`` highlighting directive, is kept as-is,
    as is an escape character with no closing partner.

    Only call this on leaf text that has already been split.
    """
    esc = delimiters.escape
    start = text.find(esc)
    if start == -1:
        return text

    parts: list[str] = []
    pos = 0
    while start != -1:
        end = text.find(esc, start + 1)
        if end == -1:
            break
        role = ESCAPE_CODES.get(text[start + 1:end])
        if role is None:
            # unknown code: keep the whole sequence
            parts.append(text[pos:end + 1])
        else:
            parts.append(text[pos:start])
            parts.append(getattr(delimiters, role))
        pos = end + 1
        start = text.find(esc, pos)

    parts.append(text[pos:])
    return "".join(parts)


__all__ = ["decode_escapes"]
