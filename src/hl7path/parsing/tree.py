"""Immutable message tree produced by the tokenizer.

Message -> Segment -> Field -> Repetition -> Component -> subcomponent text.
Every node keeps the raw text it was built from; leaves hold decoded text.
HL7 numbers fields, repetitions, components and subcomponents from 1, and
every accessor here takes 1-based indices.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeVar

from hl7path.common.constants import HEADER_SEGMENTS
from hl7path.common.errors import FieldIndexOutOfRangeError
from hl7path.parsing.delimiters import Delimiters

if TYPE_CHECKING:
    from hl7path.addressing.address import Address

_QUERY_PATTERN = re.compile(r"^R(\d+)(?:\.C(\d+)(?:\.S(\d+))?)?$", re.IGNORECASE)

_T = TypeVar("_T")


def _pick(items: tuple[_T, ...], index: int | None) -> _T | None:
    """Return the 1-based item, the first when index is None, or None past the end."""
    position = 0 if index is None else index - 1
    if 0 <= position < len(items):
        return items[position]
    return None


@dataclass(frozen=True)
class Component:
    """A component and its subcomponents (decoded)."""

    raw: str
    subcomponents: tuple[str, ...]

    def __str__(self) -> str:
        return self.raw


@dataclass(frozen=True)
class Repetition:
    """One repetition of a field."""

    raw: str
    components: tuple[Component, ...]

    def __str__(self) -> str:
        return self.raw


@dataclass(frozen=True)
class Field:
    """A single value between field separators, with its repetitions."""

    raw: str
    repetitions: tuple[Repetition, ...]

    @classmethod
    def literal(cls, text: str) -> Field:
        """A single-leaf field that is never split or decoded (MSH-1, MSH-2)."""
        return cls(
            raw=text,
            repetitions=(Repetition(raw=text, components=(Component(raw=text, subcomponents=(text,)),)),),
        )

    def leaf(
        self,
        repetition: int | None = None,
        component: int | None = None,
        subcomponent: int | None = None,
    ) -> str:
        """Decoded text at the given position; omitted indices mean the first.

        Positions past the end of the field are empty, not errors.
        """
        rep = _pick(self.repetitions, repetition)
        if rep is None:
            return ""
        comp = _pick(rep.components, component)
        if comp is None:
            return ""
        sub = _pick(comp.subcomponents, subcomponent)
        return "" if sub is None else sub

    def value(self) -> str:
        """First repetition's first component's first subcomponent."""
        return self.leaf()

    def query(self, path: str) -> str:
        """Text addressed as ``R<n>[.C<n>[.S<n>]]``, or ``""`` when out of range.

        Repetitions and components come back raw (``"R2"`` on ``x^y~a^b``
        is ``"a^b"``); a subcomponent comes back decoded.
        """
        match = _QUERY_PATTERN.match(path.strip())
        if match is None:
            return ""
        r, c, s = (int(g) if g else None for g in match.groups())

        rep = _pick(self.repetitions, r)
        if rep is None:
            return ""
        if c is None:
            return rep.raw
        comp = _pick(rep.components, c)
        if comp is None:
            return ""
        if s is None:
            return comp.raw
        sub = _pick(comp.subcomponents, s)
        return "" if sub is None else sub

    def __str__(self) -> str:
        return self.raw


@dataclass(frozen=True)
class Segment:
    """A single segment line: its name and 1-based content fields."""

    name: str
    fields: tuple[Field, ...]
    raw: str = ""

    @property
    def field_count(self) -> int:
        return len(self.fields)

    @property
    def is_header(self) -> bool:
        return self.name in HEADER_SEGMENTS

    def get_field(self, index: int) -> Field:
        """Get field by 1-based index (HL7 convention).

        Raises:
            FieldIndexOutOfRangeError: If index is below 1 or past the last field.
        """
        if index < 1 or index > len(self.fields):
            raise FieldIndexOutOfRangeError(self.name, index, len(self.fields))
        return self.fields[index - 1]

    def __str__(self) -> str:
        return self.raw


@dataclass(frozen=True)
class Message:
    """Parsed HL7 v2 message."""

    raw: str
    delimiters: Delimiters
    segments: tuple[Segment, ...]

    @property
    def segment_names(self) -> list[str]:
        return [seg.name for seg in self.segments]

    def get_segment(self, name: str, occurrence: int = 1) -> Segment | None:
        """Get the n-th (1-based) segment matching the name."""
        seen = 0
        for seg in self.segments:
            if seg.name == name:
                seen += 1
                if seen == occurrence:
                    return seg
        return None

    def get_all_segments(self, name: str) -> list[Segment]:
        """Get all segments matching the name."""
        return [s for s in self.segments if s.name == name]

    def get_value(self, address: Address | str) -> str:
        """Decoded value at a dotted or terser-style address."""
        from hl7path.addressing.resolver import resolve

        return resolve(self, address)

    def _header_leaf(self, field: int, component: int | None = None) -> str:
        header = self.segments[0] if self.segments and self.segments[0].is_header else None
        if header is None or field > header.field_count:
            return ""
        return header.get_field(field).leaf(component=component)

    @property
    def message_type(self) -> str:
        """MSH-9.1, e.g. ``ORU``."""
        return self._header_leaf(9, 1)

    @property
    def trigger_event(self) -> str:
        """MSH-9.2, e.g. ``R01``."""
        return self._header_leaf(9, 2)

    @property
    def control_id(self) -> str:
        """MSH-10."""
        return self._header_leaf(10)

    @property
    def version(self) -> str:
        """MSH-12."""
        return self._header_leaf(12)

    def __str__(self) -> str:
        return self.raw


__all__ = ["Component", "Repetition", "Field", "Segment", "Message"]
