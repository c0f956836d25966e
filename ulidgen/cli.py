"""Command-line entry point for ulidgen — like uuidgen, but for ULIDs.

Usage:
    ulidgen                                  # one ULID
    ulidgen -n 5 --lowercase                 # five monotonic ULIDs, lower case
    ulidgen --timestamp 1716214200123        # pin the millisecond timestamp
    ulidgen --datetime 2024-05-20T14:10:00Z  # pin via RFC 3339
    ulidgen --inspect 01JMCX2F5GKQJ3YZT4BXNRP8WH

Exit status:
    0  success
    1  generation / decode / configuration error (one ``error:`` line on stderr)
    2  usage error (argparse)

Generated identifiers are written only after the whole batch succeeded; a
mid-batch failure prints nothing on stdout.
"""

from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence

from ulidgen import __version__
from ulidgen.config import load_config
from ulidgen.constants import DEFAULT_COUNT, EXIT_FAILURE, EXIT_OK
from ulidgen.engine.identifier import IdentifierEngine
from ulidgen.errors import UlidgenError
from ulidgen.models.ulid import Case, GenerationRequest
from ulidgen.utils.logger import configure_logging, get_logger

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ulidgen",
        description="A command-line ULID generator — like uuidgen, but for ULIDs.",
    )
    parser.add_argument(
        "--inspect",
        metavar="ULID",
        help="Parse and display the components of an existing ULID.",
    )
    parser.add_argument(
        "--timestamp",
        type=int,
        metavar="MS",
        help="Pin the timestamp to a specific Unix epoch value in milliseconds.",
    )
    parser.add_argument(
        "--datetime",
        metavar="RFC3339",
        help="Pin the timestamp to an RFC 3339 / ISO 8601 datetime string.",
    )
    parser.add_argument(
        "-n",
        "--count",
        type=int,
        default=None,
        help=f"Number of ULIDs to generate (default: {DEFAULT_COUNT}).",
    )
    parser.add_argument(
        "-l",
        "--lowercase",
        action="store_true",
        help="Output in lowercase.",
    )
    parser.add_argument(
        "--config",
        metavar="PATH",
        help="Path to a config file (default: .ulidgen/config.yaml, ~/.ulidgen/config.yaml).",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        help="Override the configured log level (logs go to stderr).",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser


def main(
    argv: Optional[Sequence[str]] = None,
    engine: Optional[IdentifierEngine] = None,
) -> int:
    """Run the CLI and return the process exit status.

    Args:
        argv:   Arguments without the program name (``sys.argv[1:]`` if None).
        engine: Engine to use; tests inject one with a fake clock / random source.

    Raises:
        SystemExit: argparse usage errors (status 2), --help / --version (status 0),
                    config file errors (status 1).
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.inspect is not None:
        conflicting = [
            flag
            for flag, given in (
                ("--timestamp", args.timestamp is not None),
                ("--datetime", args.datetime is not None),
                ("--count", args.count is not None),
                ("--lowercase", args.lowercase),
            )
            if given
        ]
        if conflicting:
            parser.error(f"argument --inspect: not allowed with {', '.join(conflicting)}")

    config = load_config(args.config)
    configure_logging(
        log_level=args.log_level or config.logging.level,
        json_output=config.logging.json,
    )
    engine = engine or IdentifierEngine()

    try:
        if args.inspect is not None:
            lines = engine.inspect(args.inspect).lines()
        else:
            request = GenerationRequest(
                count=args.count if args.count is not None else DEFAULT_COUNT,
                pin_ms=args.timestamp,
                pin_datetime=args.datetime,
                case=Case.LOWER if args.lowercase else config.output.case,
            )
            lines = engine.generate_strings(request)
    except UlidgenError as exc:
        logger.debug("Command failed", code=exc.code)
        print(f"error: {exc.message}", file=sys.stderr)
        return EXIT_FAILURE

    sys.stdout.write("".join(f"{line}\n" for line in lines))
    return EXIT_OK


def run() -> None:
    """Console-script entry point (``ulidgen``)."""
    sys.exit(main())


if __name__ == "__main__":
    run()
