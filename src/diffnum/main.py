"""Main CLI entry point for diffnum."""

import argparse
import io
import logging
import os
import sys
from typing import List, Optional, TextIO

from . import __version__
from .ansi import strip_ansi
from .config import AnnotateConfig
from .diffpack import DiffState, annotate_stream, iter_records
from .errors import ConfigError, DiffNumError
from .logging_utils import configure_logging
from .serialize import AnnotationSerializer
from .settings import get_default_option_tokens

logger = logging.getLogger(__name__)

EXIT_FATAL = 1
EXIT_CONFIG = 2


def create_parser() -> argparse.ArgumentParser:
    """Create command line argument parser."""
    parser = argparse.ArgumentParser(
        prog="diffnum",
        description="Prefix unified diff lines with file paths and new-file line numbers",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Options (key=value):
  show_header=1           echo diff headers (default 1)
  show_hunk=1             echo @@ hunk headers (default: show_header)
  show_path=0             prefix body lines with the path (default: !show_header)
  show_binary=0           print a line for binary files when headers are hidden
                          (default: show_path && !show_header)
  allow_colons_in_path=1  permit ':' in paths (default: !show_path)
  color_line_number=      SGR code for the line number, e.g. 1;33
  color_path=             SGR code for the path
  color_separator=        SGR code for the ':' separator

Defaults can also be set with DIFFNUM_OPTIONS in the environment or a .env file.

Examples:
  git diff | diffnum
  git diff --color=always | diffnum show_path=1 color_line_number=33
  git diff | diffnum show_header=0 show_binary=1
        """,
    )

    parser.add_argument(
        "options",
        nargs="*",
        metavar="key=value",
        help="Option tokens; see the list below",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print a JSON document describing every output line instead of text",
    )
    parser.add_argument(
        "--log-level",
        help="Logging level for diagnostics on stderr (default: LOG_LEVEL or WARNING)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    return parser


def create_config(args: argparse.Namespace) -> AnnotateConfig:
    """Create configuration from environment defaults and command line tokens."""
    tokens = get_default_option_tokens() + list(args.options)
    return AnnotateConfig.from_tokens(tokens)


def report_fatal(prog: str, error: DiffNumError, stream: TextIO) -> None:
    """Write a fatal diagnostic: a blank line, then the color-stripped message."""
    stream.write("\n")
    stream.write(f"FATAL: {prog}: {strip_ansi(error.message)}\n")
    stream.flush()


def prepare_streams() -> None:
    """Make stdin/stdout pass undecodable bytes through and flush per line."""
    if isinstance(sys.stdin, io.TextIOWrapper):
        sys.stdin.reconfigure(errors="surrogateescape")
    if isinstance(sys.stdout, io.TextIOWrapper):
        sys.stdout.reconfigure(errors="surrogateescape", line_buffering=True)


def output_json(config: AnnotateConfig, source: TextIO, sink: TextIO) -> None:
    """Annotate the whole stream and print it as one JSON envelope."""
    serializer = AnnotationSerializer(config)
    state = DiffState()
    try:
        records = list(iter_records(source, config, state))
        result = serializer.create_success_envelope(
            serializer.serialize_output(records, state)
        )
    except DiffNumError as e:
        result = serializer.create_error_envelope(e.code, e.message, e.details)
        sink.write(serializer.to_json_string(result) + "\n")
        raise
    sink.write(serializer.to_json_string(result) + "\n")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level, default="WARNING")

    try:
        config = create_config(args)
    except ConfigError as e:
        report_fatal(parser.prog, e, sys.stderr)
        return EXIT_CONFIG

    try:
        prepare_streams()
        if args.json:
            output_json(config, sys.stdin, sys.stdout)
        else:
            annotate_stream(sys.stdin, sys.stdout, config)
        sys.stdout.flush()
        return 0

    except DiffNumError as e:
        # Output already written stays on stdout.
        sys.stdout.flush()
        logger.debug("Aborting on fatal diff error", extra={"code": e.code})
        report_fatal(parser.prog, e, sys.stderr)
        return EXIT_FATAL

    except BrokenPipeError:
        # Reader went away (e.g. `| head`); silence the flush at interpreter exit.
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())
        return 0


if __name__ == "__main__":
    sys.exit(main())
