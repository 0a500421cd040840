"""CLI for reading and rewriting ASCII property-list (.pbxproj) files."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from scripts.pbxplist import PlistError, SerializeOptions, parse, serialize
from scripts.pbxplist.utils import DEFAULT_MAX_DEPTH


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Parse a .pbxproj file and print it back in normalized form.",
    )
    parser.add_argument("input", help="Path to a .pbxproj file.")
    parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="File to write the result to (defaults to stdout).",
    )
    parser.add_argument(
        "--comments",
        choices=("strip", "generate", "preserve"),
        default="generate",
        help="How to annotate object entries (default: generate).",
    )
    parser.add_argument(
        "--indent",
        default="  ",
        help="Indentation characters to use (default: two spaces).",
    )
    parser.add_argument(
        "--wrap-root",
        action=argparse.BooleanOptionalAction,
        default=False,
        help="Wrap the output in a root dictionary (default: disabled).",
    )
    parser.add_argument(
        "--max-depth",
        type=int,
        default=DEFAULT_MAX_DEPTH,
        help=f"Maximum nesting depth accepted when parsing and writing (default: {DEFAULT_MAX_DEPTH}).",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the parsed document as JSON instead of plist text.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log parser progress to stderr.")
    return parser.parse_args(argv)


def convert(text: str, args: argparse.Namespace) -> str:
    config = {
        "log_level": logging.DEBUG if args.verbose else logging.WARNING,
        "max_depth": args.max_depth,
    }
    document = parse(text, config=config)
    if args.json:
        return json.dumps(document.to_python(), indent=2)
    options = SerializeOptions(
        comment_strategy=args.comments,
        indent=args.indent,
        wrap_root=args.wrap_root,
        max_depth=args.max_depth,
    )
    return serialize(document, options)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    source = Path(args.input)
    try:
        text = source.read_text(encoding="utf-8")
    except OSError as exc:
        print(f"Error: cannot read {source}: {exc.strerror or exc}", file=sys.stderr)
        return 1

    try:
        result = convert(text, args)
    except PlistError as exc:
        print(f"Error: failed to parse {source}: {exc}", file=sys.stderr)
        return 1

    if args.output:
        destination = Path(args.output)
        destination.write_text(result + "\n", encoding="utf-8")
        print(f"Wrote {destination}", file=sys.stderr)
    else:
        print(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
