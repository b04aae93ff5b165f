"""HL7 v2 delimiter discovery, escape decoding and tokenization."""

from hl7path.parsing.delimiters import Delimiters, resolve_delimiters
from hl7path.parsing.escapes import decode_escapes
from hl7path.parsing.tokenizer import parse_message, tokenize
from hl7path.parsing.tree import Component, Field, Message, Repetition, Segment

__all__ = [
    "Delimiters",
    "resolve_delimiters",
    "decode_escapes",
    "tokenize",
    "parse_message",
    "Message",
    "Segment",
    "Field",
    "Repetition",
    "Component",
]
