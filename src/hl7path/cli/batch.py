"""Splitting multi-message files and pulling values out of each message."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from hl7path.addressing.address import Address
from hl7path.addressing.resolver import resolve
from hl7path.addressing.scanner import scan
from hl7path.common.constants import Strategy
from hl7path.parsing.tokenizer import SEGMENT_TERMINATOR, parse_message

logger = logging.getLogger(__name__)

# File and batch envelope segments carry no message content
ENVELOPE_SEGMENTS: frozenset[str] = frozenset({"FHS", "FTS", "BHS", "BTS"})


def split_messages(content: str) -> list[str]:
    """Split file content into individual messages.

    A new message starts at every line beginning with ``MSH``; blank lines,
    envelope segments and lines before the first ``MSH`` are dropped. Each
    message is re-joined with CR, the HL7 segment terminator.
    """
    messages: list[str] = []
    current: list[str] = []

    for line in SEGMENT_TERMINATOR.split(content):
        if not line.strip():
            continue
        if line[:3] in ENVELOPE_SEGMENTS:
            continue
        if line.startswith("MSH"):
            if current:
                messages.append("\r".join(current))
            current = [line]
        elif current:
            current.append(line)
        else:
            logger.debug("Skipping line outside any message: %.20s", line)

    if current:
        messages.append("\r".join(current))
    return messages


def extract_row(
    text: str,
    addresses: Sequence[Address],
    strategy: Strategy = Strategy.SCAN,
) -> list[str]:
    """Values of every address in one message, in address order.

    TREE tokenizes once and resolves each address; SCAN rescans the raw text
    per address. Both give the same values.
    """
    if strategy is Strategy.TREE:
        message = parse_message(text)
        return [resolve(message, addr) for addr in addresses]
    return [scan(text, addr) for addr in addresses]


__all__ = ["ENVELOPE_SEGMENTS", "split_messages", "extract_row"]
