"""Address parsing, tree resolution and direct scanning."""

from hl7path.addressing.address import Address, parse_address
from hl7path.addressing.resolver import resolve
from hl7path.addressing.scanner import ScanState, extract_value, scan

__all__ = [
    "Address",
    "parse_address",
    "resolve",
    "ScanState",
    "scan",
    "extract_value",
]
