"""Batch splitting and the hl7path command-line entry point."""

from hl7path.cli.batch import extract_row, split_messages

__all__ = ["split_messages", "extract_row"]
