"""Command-line field extraction from HL7 v2 files.

Run directly:
    python -m hl7path.cli messages.hl7 OBR.7 /.PID-5-1 [--strategy tree] [--json]
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from hl7path.addressing.address import parse_address
from hl7path.cli.batch import extract_row, split_messages
from hl7path.common.config import HL7PathConfig
from hl7path.common.constants import Strategy
from hl7path.common.errors import HL7PathError, InvalidAddressSyntaxError

logger = logging.getLogger(__name__)


def _read_input(source: str, encoding: str) -> str:
    if source == "-":
        return sys.stdin.read()
    # newline="" keeps bare CR segment terminators intact
    with open(Path(source), encoding=encoding, newline="") as f:
        return f.read()


def main(argv: Sequence[str] | None = None) -> int:
    config = HL7PathConfig()

    parser = argparse.ArgumentParser(
        prog="hl7path",
        description="Extract field values from HL7 v2 messages",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Observation date of every message in a file
  hl7path results.hl7 OBR.7

  # Terser paths, parse each message once, JSON output
  hl7path results.hl7 /.PID-5-1 /.OBX-5-2 --strategy tree --json

  # Read from stdin
  cat results.hl7 | hl7path - MSH.9.1
        """,
    )
    parser.add_argument("file", help="HL7 file to read, or - for stdin")
    parser.add_argument(
        "addresses", nargs="+", metavar="ADDRESS",
        help="Dotted (OBR.7) or terser-style (/.OBR-7) address",
    )
    parser.add_argument(
        "--strategy", choices=[s.value for s in Strategy], default=None,
        help=f"tree: parse once per message; scan: one pass per address (default: {config.strategy})",
    )
    parser.add_argument(
        "--json", action="store_true",
        help="Print a JSON list of {address: value} objects instead of tab-separated rows",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    try:
        addresses = [parse_address(a) for a in args.addresses]
    except InvalidAddressSyntaxError as exc:
        parser.error(str(exc))

    # JSON rows are keyed by address
    if args.json and len(set(args.addresses)) != len(args.addresses):
        parser.error("--json needs distinct addresses")

    strategy = Strategy(args.strategy) if args.strategy else config.strategy

    try:
        content = _read_input(args.file, config.encoding)
    except OSError as exc:
        logger.error("Cannot read %s: %s", args.file, exc)
        return 1

    messages = split_messages(content)
    if not messages:
        logger.error("No HL7 messages found in %s", args.file)
        return 1
    logger.info("Extracting %d address(es) from %d message(s) using %s", len(addresses), len(messages), strategy)

    rows: list[list[str]] = []
    failures = 0
    for i, text in enumerate(messages, start=1):
        try:
            values = extract_row(text, addresses, strategy)
        except HL7PathError as exc:
            failures += 1
            logger.error("Message %d: %s", i, exc)
            continue
        rows.append(values)

    if args.json:
        print(json.dumps([dict(zip(args.addresses, row)) for row in rows], indent=2))
    else:
        for row in rows:
            print("\t".join(row))

    if failures:
        logger.warning("%d of %d message(s) failed", failures, len(messages))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
