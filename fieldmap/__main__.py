"""Entry point: python -m fieldmap

Scans Go sources for struct field tags and generates a Go file with the
field -> tag mapping (generate/mapping/field_and_json_mapping.go by default).
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Sequence

from .codegen import DEFAULT_OUTPUT, DEFAULT_PACKAGE, DEFAULT_VAR_NAME, generate
from .errors import FieldMapError
from .extractor import DEFAULT_TAG_KEY, build_mappings
from .go_parser import KEYWORDS
from .loader import resolve_inputs


def _go_identifier(value: str) -> str:
    if not value.isidentifier() or value in KEYWORDS:
        raise argparse.ArgumentTypeError(f"not a valid Go identifier: {value!r}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fieldmap",
        description="Generate a Go map from struct field names to their tag values.",
    )
    parser.add_argument(
        "-pattern", "--pattern",
        default="",
        help="The file pattern to match (e.g. ./graph/model/*.go)",
    )
    parser.add_argument(
        "-files", "--files",
        default="",
        help="Comma-separated list of individual file paths "
             "(e.g. ./db/sqlc/models.go,./graph/model/auth.go)",
    )
    parser.add_argument(
        "-output", "--output",
        type=Path,
        default=DEFAULT_OUTPUT,
        help=f"Output file path (default: ./{DEFAULT_OUTPUT.as_posix()})",
    )
    parser.add_argument(
        "--tag-key",
        default=DEFAULT_TAG_KEY,
        help=f"Struct tag key to read (default: {DEFAULT_TAG_KEY})",
    )
    parser.add_argument(
        "--package",
        type=_go_identifier,
        default=DEFAULT_PACKAGE,
        help=f"Package name of the generated file (default: {DEFAULT_PACKAGE})",
    )
    parser.add_argument(
        "--var-name",
        type=_go_identifier,
        default=DEFAULT_VAR_NAME,
        help=f"Name of the generated map variable (default: {DEFAULT_VAR_NAME})",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.pattern and not args.files:
        parser.error("you must provide either a file pattern or a list of individual file paths")

    try:
        paths = resolve_inputs(args.pattern, args.files)
        mappings = build_mappings(paths, tag_key=args.tag_key)
        generate(mappings, args.output, package=args.package, var_name=args.var_name)
    except FieldMapError as e:
        print(f"fieldmap: error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
