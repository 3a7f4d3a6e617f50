"""Command line interface for parsing iCalendar streams.

Reads an ics stream from a file or stdin and renders the component tree:

    icaltree -f calendar.ics --markdown
    cat calendar.ics | icaltree --json -o calendar.json
"""

from __future__ import annotations

import argparse
import contextlib
import logging
import sys
from collections.abc import Generator, Sequence
from importlib import metadata
from typing import TextIO

from pydantic import ValidationError

from .config import ParserConfig, use_config
from .exceptions import CalendarParseError
from .json_output import render_json
from .markdown_output import render_markdown
from .parsing.component import ParsedComponent, encode_content, parse_stream

__all__ = [
    "main",
]

_LOGGER = logging.getLogger(__name__)

PROG = "icaltree"
STDIO = "-"
FORMAT_JSON = "json"
FORMAT_MARKDOWN = "markdown"
FORMAT_ICS = "ics"


def _version() -> str:
    try:
        return metadata.version(PROG)
    except metadata.PackageNotFoundError:
        return "unknown"


def _create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROG,
        description="Parse iCalendar streams.",
    )
    parser.add_argument(
        "-v", "--version", action="version", version=f"version: {_version()}"
    )
    parser.add_argument(
        "-f",
        "--file",
        default=STDIO,
        metavar="FILE",
        help="read from filename (default stdin)",
    )
    parser.add_argument(
        "-o",
        "--output",
        default=STDIO,
        metavar="FILE",
        help="write to filename (default stdout)",
    )
    output_format = parser.add_mutually_exclusive_group()
    output_format.add_argument(
        "-j",
        "--json",
        dest="format",
        action="store_const",
        const=FORMAT_JSON,
        help="print in json format (default)",
    )
    output_format.add_argument(
        "-m",
        "--markdown",
        dest="format",
        action="store_const",
        const=FORMAT_MARKDOWN,
        help="print in markdown format",
    )
    output_format.add_argument(
        "-i",
        "--ics",
        dest="format",
        action="store_const",
        const=FORMAT_ICS,
        help="print as re-encoded ics content",
    )
    parser.set_defaults(format=FORMAT_JSON)
    parser.add_argument(
        "--strict",
        action="store_true",
        help="fail when an END does not match the open component",
    )
    parser.add_argument(
        "--fail-on-malformed",
        action="store_true",
        help="fail instead of skipping content lines that can't be parsed",
    )
    parser.add_argument(
        "--max-depth", type=int, metavar="N", help="maximum component nesting"
    )
    parser.add_argument(
        "--max-line-length",
        type=int,
        metavar="N",
        help="maximum length of an unfolded content line",
    )
    parser.add_argument(
        "--unescape-text",
        action="store_true",
        help="decode backslash escapes in rendered values",
    )
    parser.add_argument("--debug", action="store_true", help="enable debug logging")
    return parser


def _render(
    components: list[ParsedComponent], output_format: str, unescape: bool
) -> str:
    if output_format == FORMAT_MARKDOWN:
        return render_markdown(components, unescape=unescape)
    if output_format == FORMAT_ICS:
        return encode_content(components)
    return render_json(components, unescape=unescape)


@contextlib.contextmanager
def _open(filename: str, mode: str, default: TextIO) -> Generator[TextIO]:
    if filename == STDIO:
        yield default
        return
    with open(filename, mode, encoding="utf-8") as stream:
        yield stream


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line interface, returning the process exit code."""
    parser = _create_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as err:
        # --help and --version exit cleanly, usage errors exit with 2
        return 0 if not err.code else 1

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        config = ParserConfig(
            strict=args.strict,
            skip_malformed=not args.fail_on_malformed,
            max_depth=args.max_depth,
            max_line_length=args.max_line_length,
        )
    except ValidationError as err:
        parser.print_usage(sys.stderr)
        print(f"{PROG}: error: invalid option: {err}", file=sys.stderr)
        return 1

    try:
        with use_config(config), _open(args.file, "r", sys.stdin) as in_file:
            components = parse_stream(in_file)
    except OSError as err:
        print(f"{PROG}: error: cannot open file: {err}", file=sys.stderr)
        return 1
    except CalendarParseError as err:
        print(f"{PROG}: error: {err}", file=sys.stderr)
        if err.detailed_error:
            _LOGGER.debug("Parse error details: %s", err.detailed_error)
        return 1

    result = _render(components, args.format, args.unescape_text)
    try:
        with _open(args.output, "w", sys.stdout) as out_file:
            out_file.write(result)
            out_file.write("\n")
    except OSError as err:
        print(f"{PROG}: error: cannot open file: {err}", file=sys.stderr)
        return 1
    return 0
