"""Flint CLI: run a .fl program from a file.

    flint PROGRAM [--log-level LEVEL]

Exit status is 0 on success, 1 when the program fails with a Flint error and
2 when the file cannot be read (or the arguments are wrong).
"""

from __future__ import annotations

import argparse
import logging
import sys

from flint import __version__, config
from flint.errors import FlintError
from flint.interpreter import Interpreter
from flint.reader.tokens import line_and_column

logger = logging.getLogger(__name__)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="flint", description="Run a Flint program.")
    parser.add_argument("file", help="path of the program to run")
    parser.add_argument(
        "--log-level",
        default=None,
        type=str.upper,
        choices=config.LOG_LEVELS,
        help="logging level (default: $FLINT_LOG_LEVEL or WARNING)",
    )
    parser.add_argument("--version", action="version", version=f"flint {__version__}")
    return parser


def describe(error: FlintError, source: str) -> str:
    """One-line diagnostic, prefixed with line:column when the error knows its position."""
    if error.position is None:
        return error.message
    line, col = line_and_column(source, error.position)
    return f"{line + 1}:{col + 1}: {error.message}"


def main(argv: list[str] | None = None) -> int:
    args = build_arg_parser().parse_args(argv)

    logging.basicConfig(
        level=args.log_level or config.get_log_level(),
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        with open(args.file, encoding=config.get_source_encoding()) as f:
            source = f.read()
    except (OSError, UnicodeDecodeError, LookupError) as e:
        print(f"flint: {args.file}: {e}", file=sys.stderr)
        return 2

    sys.setrecursionlimit(max(sys.getrecursionlimit(), config.get_recursion_limit()))
    logger.debug("running %s (%d characters)", args.file, len(source))

    try:
        Interpreter().eval(source)
    except FlintError as e:
        print(f"flint: error: {describe(e, source)}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
