#!/usr/bin/env python3
"""
Generate raw report data from Noko snapshots for LLM processing.

Raw modes frame the output for reading in a terminal; clean modes print only
the data so it can be piped into an LLM.

Usage:
    uv run python src/scripts/generate_reports.py raw-geekbot 2
    uv run python src/scripts/generate_reports.py clean-geekbot 4 exclude-internal
    uv run python src/scripts/generate_reports.py clean-weekly
"""

import argparse
import sys
import traceback
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.config import GEEKBOT_DAYS_BACK, NO_ENTRIES_TEXT, WEEKLY_DAYS_BACK, ClassifierConfig
from services.standup import generate_geekbot_data, generate_weekly_data

COMMANDS = ["raw-geekbot", "clean-geekbot", "raw-weekly", "clean-weekly", "help"]

HELP_TEXT = """
LLM Report Data Generator

Commands:
  raw-geekbot [days] [exclude-internal]    Raw data for the daily standup (default: 1 day)
  clean-geekbot [days] [exclude-internal]  Same, without headers
  raw-weekly                               Raw data for the weekly update (7 days)
  clean-weekly                             Same, without headers
  help                                     Show this help message
"""


def print_framed(title: str, data: str):
    print(f"{title}:")
    print("=" * 60)
    print(data or NO_ENTRIES_TEXT)
    print("=" * 60)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate raw report data for LLM processing")
    parser.add_argument("command", nargs="?", default="help", choices=COMMANDS)
    parser.add_argument(
        "options",
        nargs="*",
        metavar="option",
        help="Days back and/or 'exclude-internal' (geekbot only)",
    )
    parser.add_argument("--exclude-internal", action="store_true", dest="exclude_internal")
    return parser


def parse_geekbot_options(options: list[str]) -> tuple[int, bool]:
    """
    Read the optional '[days] [exclude-internal]' tokens in any order.

    Unknown tokens are reported and ignored.

    Returns:
        Tuple of (days, exclude_internal)
    """
    days = GEEKBOT_DAYS_BACK
    exclude_internal = False
    for token in options:
        if token == "exclude-internal":
            exclude_internal = True
        elif token.isdigit():
            days = int(token)
        else:
            print(f"Warning: ignoring unknown option '{token}'", file=sys.stderr)
    return days, exclude_internal


def run(args: argparse.Namespace):
    config = ClassifierConfig.from_env()

    if args.command in ("raw-geekbot", "clean-geekbot"):
        days, exclude_option = parse_geekbot_options(args.options)
        exclude_internal = exclude_option or args.exclude_internal or config.exclude_internal
        if args.command == "raw-geekbot":
            print("Generating raw data for LLM processing (geekbot)...", file=sys.stderr)
        data = generate_geekbot_data(config, days, exclude_internal=exclude_internal)
        if args.command == "raw-geekbot":
            print_framed("Raw Geekbot Data", data)
        else:
            print(data or NO_ENTRIES_TEXT)

    elif args.command in ("raw-weekly", "clean-weekly"):
        if args.command == "raw-weekly":
            print("Generating raw data for LLM processing (weekly)...", file=sys.stderr)
        data = generate_weekly_data(config, WEEKLY_DAYS_BACK)
        if args.command == "raw-weekly":
            print_framed("Raw Weekly Data", data)
        else:
            print(data or NO_ENTRIES_TEXT)

    else:
        print(HELP_TEXT)


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    try:
        run(args)
    except Exception as e:
        print(f"\nError: {e}", file=sys.stderr)
        traceback.print_exc()
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
