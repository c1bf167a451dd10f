"""Command line entry point.

Usage:
    melee-moves parse game.slp --extract-moves --format text
    melee-moves batch replays/ parsed/ --workers 4
    melee-moves aggregate parsed/ --format csv --output moves.csv
"""

import argparse
import logging
import os
import sys
from pathlib import Path

from melee_moves.aggregate import aggregate_directory
from melee_moves.errors import MeleeMovesError
from melee_moves.parse import parse_directory, parse_game
from melee_moves.report import OutputFormat, render

logger = logging.getLogger("melee_moves")

DEFAULT_FORMAT = OutputFormat.STRUCTURED.value
LOG_LEVEL_ENV = "MELEE_MOVES_LOG_LEVEL"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="melee-moves",
        description="Count moves in Slippi replays and aggregate move statistics.",
    )
    parser.add_argument(
        "--log-level",
        default=os.environ.get(LOG_LEVEL_ENV, "WARNING"),
        help=f"Logging level: {', '.join(LOG_LEVELS)} (default: WARNING, or ${LOG_LEVEL_ENV})",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("parse", help="Parse a single .slp replay")
    p.add_argument("replay", type=Path, help="Path to the .slp file")
    p.add_argument("--extract-moves", action="store_true", help="Count moves for each player")
    _add_output_args(p)

    a = sub.add_parser("aggregate", help="Aggregate a directory of parsed game records")
    a.add_argument("directory", type=Path, help="Directory of .json game records")
    a.add_argument("--workers", type=int, default=1, help="Worker processes (default: 1)")
    _add_output_args(a)

    b = sub.add_parser("batch", help="Parse every .slp under a directory into .json records")
    b.add_argument("input_dir", type=Path, help="Directory to search for .slp files")
    b.add_argument("output_dir", type=Path, help="Directory to write .json records to")
    b.add_argument("--no-moves", action="store_true", help="Skip move extraction")
    b.add_argument("--workers", type=int, default=1, help="Worker processes (default: 1)")

    return parser


def _add_output_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--format",
        default=DEFAULT_FORMAT,
        help="Output format: json, csv or text (default: json)",
    )
    parser.add_argument("-o", "--output", type=Path, help="Write output here instead of stdout")


def _emit(text: str, output: Path | None) -> None:
    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(text if text.endswith("\n") else text + "\n")
        logger.info("Output saved to %s", output)
    else:
        print(text.rstrip("\n"))


def _run(args: argparse.Namespace) -> int:
    if args.command == "batch":
        if not args.input_dir.is_dir():
            raise MeleeMovesError(f"input directory does not exist: {args.input_dir}")
        summary = parse_directory(
            args.input_dir, args.output_dir,
            extract_moves=not args.no_moves, workers=args.workers,
        )
        print(f"Successfully processed: {len(summary['processed'])} files")
        if summary["errors"]:
            print(f"Failed to process: {len(summary['errors'])} files")
        return 0

    # Validate the format before doing any work so nothing partial is written
    fmt = OutputFormat.parse(args.format)

    if args.command == "parse":
        value = parse_game(args.replay, extract_moves=args.extract_moves)
    else:
        if not args.directory.is_dir():
            raise MeleeMovesError(f"directory does not exist: {args.directory}")
        value = aggregate_directory(args.directory, workers=args.workers).stats

    _emit(render(value, fmt), args.output)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    # Covers the environment default as well as --log-level
    log_level = args.log_level.upper()
    if log_level not in LOG_LEVELS:
        parser.error(f"invalid log level: {args.log_level!r} (choose from {', '.join(LOG_LEVELS)})")

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        return _run(args)
    except MeleeMovesError as e:
        logger.error("%s", e)
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
