"""Resolve an address against a parsed message tree."""

from __future__ import annotations

from hl7path.addressing.address import Address, parse_address
from hl7path.common.errors import SegmentNotFoundError
from hl7path.parsing.tree import Message


def resolve(message: Message, address: Address | str) -> str:
    """Return the decoded value at an address.

    Omitted repetition, component and subcomponent indices mean the first
    one, so ``OBX.5`` on ``^182`` is ``""`` (the first component) and never
    the delimiter-joined field. Indices past the end of an existing field
    give ``""``.

    Args:
        message: Tree returned by ``tokenize``.
        address: Address or dotted / terser-style expression.

    Raises:
        InvalidAddressSyntaxError: If the expression cannot be parsed.
        SegmentNotFoundError: If the segment occurrence does not exist.
        FieldIndexOutOfRangeError: If the field index exceeds the field count.
    """
    addr = parse_address(address)

    segment = message.get_segment(addr.segment, addr.occurrence)
    if segment is None:
        raise SegmentNotFoundError(addr.segment, addr.occurrence)

    field = segment.get_field(addr.field)
    return field.leaf(addr.repetition, addr.component, addr.subcomponent)


__all__ = ["resolve"]
