#!/usr/bin/env python3
"""
Analyze team-wide resource utilization for SOW planning and meetings.

Breaks down hours by team member, maintenance vs professional services and
month, and compares the total with the SOW's contracted capacity.

Usage:
    uv run python src/scripts/team_analysis.py summary
    uv run python src/scripts/team_analysis.py both 2025-04-01
    uv run python src/scripts/team_analysis.py detailed 2025-06-01 2025-07-31 --xlsx output/team.xlsx
"""

import argparse
import sys
import traceback
from datetime import date
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.config import AnalysisConfig
from services.capacity import (
    analysis_to_json,
    analyze_team_data,
    generate_detailed_report,
    generate_summary_report,
    load_team_entries,
)
from services.reports import parse_date
from services.workbook import create_analysis_workbook

HELP_TEXT = """
Team Resource Analysis

Commands:
  summary [start] [end]    Executive summary against the SOW (default)
  detailed [start] [end]   Per-member, per-month and per-client breakdown
  both [start] [end]       Summary followed by the detailed report
  json [start] [end]       Full analysis as JSON
  help                     Show this help message

Dates are YYYY-MM-DD. start defaults to the SOW start date, end to today.
Add --xlsx PATH to also save the analysis as an Excel workbook.
"""


def _date_arg(value: str) -> date:
    try:
        return parse_date(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid date '{value}', expected YYYY-MM-DD")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Team resource analysis against the SOW")
    parser.add_argument(
        "command",
        nargs="?",
        default="summary",
        choices=["summary", "detailed", "both", "json", "help"],
    )
    parser.add_argument("start_date", nargs="?", type=_date_arg, help="YYYY-MM-DD, defaults to SOW start")
    parser.add_argument("end_date", nargs="?", type=_date_arg, help="YYYY-MM-DD, defaults to today")
    parser.add_argument("--xlsx", type=Path, help="Also save the analysis as an Excel workbook")
    return parser


def run(args: argparse.Namespace):
    config = AnalysisConfig.from_env()

    start_date = args.start_date or config.budget.contract_start
    end_date = args.end_date or date.today()
    print(f"Analyzing {config.project_name} team data since {start_date}...", file=sys.stderr)

    entries = load_team_entries(config, start_date, end_date)
    print(f"Loaded {len(entries)} entries from {start_date} to {end_date}", file=sys.stderr)

    analysis = analyze_team_data(entries, config, start_date, end_date)
    if analysis is None:
        print("No data found for this period. Try fetching more data first.")
        return

    if args.command == "summary":
        print(generate_summary_report(analysis, config))
    elif args.command == "detailed":
        print(generate_detailed_report(analysis))
    elif args.command == "both":
        print(generate_summary_report(analysis, config))
        print("\n" + "=" * 80 + "\n")
        print(generate_detailed_report(analysis))
    else:
        print(analysis_to_json(analysis))

    if args.xlsx:
        create_analysis_workbook(analysis, args.xlsx)


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    if args.command == "help":
        print(HELP_TEXT)
        return 0

    try:
        run(args)
    except Exception as e:
        print(f"\nError: {e}", file=sys.stderr)
        traceback.print_exc()
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
