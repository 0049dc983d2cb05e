"""CLI entry point for vimtrace.

Reads a captured Vim message history (``:redir`` of ``:messages``, or a
``verbosefile``), reconstructs the most recent stacktrace and prints it as
a quickfix list.

Usage:
    python -m vimtrace --help
    python -m vimtrace messages.txt --runtimepath ~/.vim
    python -m vimtrace messages.txt --introspection-json functions.json
    vim -q <(python -m vimtrace messages.txt --runtimepath ~/.vim)

Exit Codes:
    0 - Success: a stacktrace was found and printed
    1 - Input error: unreadable log, invalid introspection JSON
    2 - No trace: no error block found, or none could be parsed
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from vimtrace.adapters import (
    AdapterFileLogSource,
    AdapterLocalFilesystem,
    AdapterMappingIntrospection,
    AdapterRuntimePathIntrospection,
    AdapterStreamSink,
    AdapterTextLogSource,
)
from vimtrace.nodes.node_vim_stacktrace_compute.handlers import (
    ProtocolIntrospection,
    ProtocolLogSource,
    handle_stacktrace_compute,
)
from vimtrace.nodes.node_vim_stacktrace_compute.models import (
    ModelStacktraceInput,
    VimStacktraceSettings,
)

EXIT_OK = 0
EXIT_INPUT_ERROR = 1
EXIT_NO_TRACE = 2


def _build_parser() -> argparse.ArgumentParser:
    """Build and return the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="python -m vimtrace",
        description=(
            "Reconstruct the call stack of the most recent Vim script error "
            "from a message log and print it as a navigable quickfix list."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Resolve functions by scanning your runtime directories
  python -m vimtrace messages.txt --runtimepath ~/.vim --runtimepath ~/.vim/pack

  # Use captured ':verbose function' output
  python -m vimtrace messages.txt --introspection-json functions.json

  # Open the result in Vim
  vim -q <(python -m vimtrace messages.txt --runtimepath ~/.vim)
""",
    )

    parser.add_argument(
        "log",
        metavar="LOG",
        help="Path to the captured message log, or '-' to read from stdin.",
    )
    parser.add_argument(
        "--max-distance",
        type=int,
        default=None,
        metavar="INT",
        help=(
            "Maximum number of lines between adjacent error headers. "
            "Default: VIMTRACE_MAX_ADJACENCY_DISTANCE or 3"
        ),
    )

    introspection = parser.add_argument_group("function introspection")
    introspection.add_argument(
        "--runtimepath",
        action="append",
        default=[],
        metavar="DIR",
        help="Directory (or file) scanned for function definitions. Repeatable.",
    )
    introspection.add_argument(
        "--introspection-json",
        default=None,
        metavar="FILE",
        help="JSON object mapping function names to ':verbose function' lines.",
    )
    introspection.add_argument(
        "--no-definition-lines",
        action="store_true",
        default=False,
        help=(
            "Report only the defining file from --runtimepath scanning, "
            "locating definitions by scanning the file instead."
        ),
    )

    output = parser.add_argument_group("output")
    output.add_argument(
        "--format",
        choices=["quickfix", "json"],
        default="quickfix",
        dest="output_format",
        help="Output format. Default: quickfix",
    )
    output.add_argument(
        "--title",
        default=None,
        help="List title. Default: VIMTRACE_LIST_TITLE or 'Stacktrace'",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Log progress to stderr (-vv for debug output).",
    )
    return parser


def _build_log_source(source: str) -> ProtocolLogSource:
    if source == "-":
        return AdapterTextLogSource(sys.stdin.read())
    path = Path(source)
    if not path.is_file():
        raise FileNotFoundError(f"Log file not found: {source}")
    return AdapterFileLogSource(path)


def _build_introspection(args: argparse.Namespace) -> ProtocolIntrospection:
    if args.introspection_json:
        return AdapterMappingIntrospection.from_json_file(args.introspection_json)
    return AdapterRuntimePathIntrospection(
        args.runtimepath, include_line=not args.no_definition_lines
    )


def main(argv: list[str] | None = None) -> int:
    """Run the CLI and return the process exit code."""
    args = _build_parser().parse_args(argv)

    level = {0: logging.WARNING, 1: logging.INFO}.get(args.verbose, logging.DEBUG)
    logging.basicConfig(
        level=level, format="%(levelname)s %(name)s: %(message)s", stream=sys.stderr
    )

    try:
        log_source = _build_log_source(args.log)
        introspection = _build_introspection(args)
        settings = VimStacktraceSettings()
        input_data = ModelStacktraceInput(
            max_adjacency_distance=args.max_distance, title=args.title
        )
    except (OSError, ValueError, ValidationError) as e:
        print(f"vimtrace: {e}", file=sys.stderr)
        return EXIT_INPUT_ERROR

    result = handle_stacktrace_compute(
        input_data,
        log_source=log_source,
        introspection=introspection,
        filesystem=AdapterLocalFilesystem(),
        sink=AdapterStreamSink(sys.stdout, args.output_format),
        settings=settings,
    )

    if not result.success:
        print(f"vimtrace: {result.message}", file=sys.stderr)
        if args.verbose and result.warnings:
            print(json.dumps(result.warnings, indent=2), file=sys.stderr)
        return EXIT_NO_TRACE
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
