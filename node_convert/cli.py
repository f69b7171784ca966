"""Command-line interface — decode nodes as a type and show the round trip.

WHY: When a document value will not read as the type you expect, the
quickest check is to run the same conversion by hand: does "0x1F" read
as a uint8? Does this list read as pairs? What text does the value
encode back to?

HOW: argparse with two subcommands. ``decode`` reads a node (scalar text
via --scalar, or a JSON node dump from a file or stdin), decodes it
through the default registry, and prints the canonical re-encoded node
as JSON (or the Python value with --repr). ``types`` lists the bare
type names. Logging is configured here from config, nowhere else.

RULES:
- Results go to stdout; status and errors go to stderr
- Exit codes: 0 decoded, 1 decode failed, 2 bad type, input or config
- The input node is never modified
- Python 3.9 compatible
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

import jsonschema

from node_convert.config import load_json_indent, load_log_level
from node_convert.converters.registry import decode, encode
from node_convert.core.dump import node_from_data, node_to_data
from node_convert.core.errors import UnsupportedTypeError
from node_convert.core.node import Node
from node_convert.typespec import TYPE_NAMES, parse_type_argument

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_DECODE_FAILED = 1
EXIT_USAGE = 2


def _status(msg: str) -> None:
    """Print a status message to stderr."""
    print(msg, file=sys.stderr, flush=True)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="node-convert",
        description="Decode document nodes as typed values and show how they encode back.",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="log at DEBUG level (overrides NODE_CONVERT_LOG_LEVEL)",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    decode_cmd = commands.add_parser("decode", help="decode a node as TYPE")
    decode_cmd.add_argument(
        "type",
        help='type name (e.g. "int32") or JSON type expression (e.g. \'{"seq": "float64"}\')',
    )
    decode_cmd.add_argument(
        "input", nargs="?",
        help="JSON node dump file (default: read stdin)",
    )
    decode_cmd.add_argument(
        "--scalar", metavar="TEXT",
        help="decode a scalar node holding TEXT instead of reading a dump",
    )
    decode_cmd.add_argument(
        "--repr", action="store_true", dest="show_repr",
        help="print the decoded Python value instead of the re-encoded node",
    )

    commands.add_parser("types", help="list bare type names")
    return parser


def _read_node(scalar: Optional[str], input_path: Optional[str]) -> Node:
    if scalar is not None:
        return Node(scalar)
    if input_path:
        text = Path(input_path).read_text(encoding="utf-8")
    else:
        text = sys.stdin.read()
    return node_from_data(json.loads(text))


def _run_decode(args: argparse.Namespace, indent: Optional[int]) -> int:
    try:
        type_ = parse_type_argument(args.type)
    except jsonschema.ValidationError as exc:
        _status(f"Error: invalid type expression: {exc.message}")
        return EXIT_USAGE
    except UnsupportedTypeError as exc:
        _status(f"Error: {exc}")
        return EXIT_USAGE

    try:
        node = _read_node(args.scalar, args.input)
    except (OSError, ValueError, TypeError) as exc:
        _status(f"Error: cannot read input: {exc}")
        return EXIT_USAGE

    try:
        result = decode(node, type_)
    except UnsupportedTypeError as exc:
        _status(f"Error: {exc}")
        return EXIT_USAGE

    if not result:
        _status(f"Cannot decode {node.type.value} node as {args.type}: {result.error.value}")
        return EXIT_DECODE_FAILED
    logger.info("Decoded %s node as %r", node.type.value, type_)

    if args.show_repr:
        print(repr(result.value))
        return EXIT_OK
    try:
        data = node_to_data(encode(result.value, type_))
    except ValueError as exc:
        _status(f"Error: {exc}")
        return EXIT_USAGE
    print(json.dumps(data, indent=indent, ensure_ascii=False))
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for ``node-convert`` and ``python -m node_convert``."""
    args = _build_parser().parse_args(argv)

    try:
        level = logging.DEBUG if args.verbose else load_log_level()
        indent = load_json_indent()
    except ValueError as exc:
        _status(f"Error: {exc}")
        return EXIT_USAGE
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    if args.command == "types":
        for name in TYPE_NAMES:
            print(name)
        return EXIT_OK
    return _run_decode(args, indent)
