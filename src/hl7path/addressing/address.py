"""Field addresses and the two external address syntaxes.

Dotted (1-based throughout, as in HL7-DotNetCore ``GetValue``)::

    OBR.7          OBX(2).5.1       PID.3(2).1.2

Terser-style (segment occurrence and repetition in parentheses are
zero-based, as in the NHapi Terser; field, component and subcomponent are
1-based)::

    /.OBR-7        /.OBX(1)-5-1     /.PID-3(1)-1-2

Both parse into the same ``Address``, which always stores 1-based indices.
"""

from __future__ import annotations

import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from hl7path.common.constants import AddressSyntax
from hl7path.common.errors import InvalidAddressSyntaxError

_SEGMENT = r"(?P<segment>[A-Z][A-Z0-9]{2})(?:\((?P<occurrence>\d+)\))?"
_FIELD = r"(?P<field>\d+)(?:\((?P<repetition>\d+)\))?"

DOTTED_PATTERN = re.compile(
    rf"^{_SEGMENT}\.{_FIELD}(?:\.(?P<component>\d+)(?:\.(?P<subcomponent>\d+))?)?$"
)
TERSER_PATTERN = re.compile(
    rf"^/\.?{_SEGMENT}-{_FIELD}(?:-(?P<component>\d+)(?:-(?P<subcomponent>\d+))?)?$"
)


class Address(BaseModel):
    """Location of a single value inside a message. All indices are 1-based."""

    model_config = ConfigDict(frozen=True)

    segment: str = Field(pattern=r"^[A-Z][A-Z0-9]{2}$")
    occurrence: int = Field(default=1, ge=1)
    field: int = Field(ge=1)
    repetition: int | None = Field(default=None, ge=1)
    component: int | None = Field(default=None, ge=1)
    subcomponent: int | None = Field(default=None, ge=1)

    @model_validator(mode="after")
    def check_subcomponent_has_component(self) -> Address:
        """A subcomponent index only makes sense under a component index."""
        if self.subcomponent is not None and self.component is None:
            msg = "subcomponent index requires a component index"
            raise ValueError(msg)
        return self

    def __str__(self) -> str:
        text = self.segment
        if self.occurrence != 1:
            text += f"({self.occurrence})"
        text += f".{self.field}"
        if self.repetition is not None:
            text += f"({self.repetition})"
        if self.component is not None:
            text += f".{self.component}"
        if self.subcomponent is not None:
            text += f".{self.subcomponent}"
        return text


def detect_syntax(expression: str) -> AddressSyntax:
    """Terser paths start with ``/``; everything else is dotted."""
    return AddressSyntax.TERSER if expression.lstrip().startswith("/") else AddressSyntax.DOTTED


def _build(expression: str, values: dict[str, Any]) -> Address:
    try:
        return Address(**values)
    except ValidationError as exc:
        reason = "; ".join(err["msg"] for err in exc.errors())
        raise InvalidAddressSyntaxError(expression, reason) from exc


def _groups(pattern: re.Pattern[str], expression: str) -> dict[str, int | str | None]:
    match = pattern.match(expression.strip())
    if match is None:
        raise InvalidAddressSyntaxError(expression)
    return {
        name: value if name == "segment" or value is None else int(value)
        for name, value in match.groupdict().items()
    }


def parse_dotted(expression: str) -> Address:
    """Parse ``SEG[(occ)].field[(rep)][.comp[.sub]]``."""
    values = _groups(DOTTED_PATTERN, expression)
    if values["occurrence"] is None:
        values["occurrence"] = 1
    return _build(expression, values)


def parse_terser(expression: str) -> Address:
    """Parse ``/.SEG[(occ)]-field[(rep)][-comp[-sub]]`` with zero-based occ/rep."""
    values = _groups(TERSER_PATTERN, expression)
    values["occurrence"] = 1 if values["occurrence"] is None else values["occurrence"] + 1
    if values["repetition"] is not None:
        values["repetition"] += 1
    return _build(expression, values)


def parse_address(expression: Address | str) -> Address:
    """Parse either address syntax.

    Args:
        expression: Dotted (``OBR.7``) or terser-style (``/.OBR-7``) path,
            or an already parsed Address.

    Returns:
        The parsed Address.

    Raises:
        InvalidAddressSyntaxError: If the expression matches neither syntax
            or carries an index of zero.
    """
    if isinstance(expression, Address):
        return expression
    if not isinstance(expression, str):
        raise InvalidAddressSyntaxError(repr(expression), "address must be a string")
    if detect_syntax(expression) is AddressSyntax.TERSER:
        return parse_terser(expression)
    return parse_dotted(expression)


__all__ = [
    "Address",
    "DOTTED_PATTERN",
    "TERSER_PATTERN",
    "detect_syntax",
    "parse_dotted",
    "parse_terser",
    "parse_address",
]
