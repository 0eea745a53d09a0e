#!/usr/bin/env python3
"""
Create the weekly office-hour and project updates from Noko snapshots.

Usage:
    uv run python src/scripts/llm_weekly.py
"""

import sys
import traceback
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.config import WEEKLY_DAYS_BACK, ClassifierConfig
from services.llm import format_with_llm
from services.standup import generate_weekly_data


def fallback_response(projects: list[str]) -> str:
    """Both reports with 'no updates' for every configured project."""
    lines = ["**REPORT 1: LSM Office Hour Update**"]
    for project in projects:
        lines.extend([f"{project} :large_green_circle:", "- No updates this week.", ""])

    lines.append("**REPORT 2: LSM Weekly Update**")
    for project in projects:
        lines.extend([
            f"## {project} Project Update",
            "**This Week:**",
            "- No significant activity",
            "",
            "**Next Week:**",
            "- Monitor for new issues and client requests",
            "- Continue maintenance activities",
            "",
            "**Status:** On track",
            "",
        ])
    return "\n".join(lines).rstrip()


def build_prompt(projects: list[str]) -> str:
    report_1 = "\n".join(
        f"{project} :large_green_circle:\n- [clean summary without hashtags]" for project in projects
    )
    report_2 = "\n".join(
        f"## {project} Project Update\n**This Week:** [summary of accomplishments]\n**Status:** On track"
        for project in projects
    )
    return (
        "Please process this time tracking data and create two clean reports "
        "by removing hashtags and summarizing activities:\n\n"
        f"**REPORT 1: LSM Office Hour Update**\n{report_1}\n\n"
        f"**REPORT 2: LSM Weekly Update**\n{report_2}"
    )


def create_weekly_update(config: ClassifierConfig) -> tuple[str, bool]:
    """Return (text, formatted); see create_geekbot_update."""
    raw_data = generate_weekly_data(config, WEEKLY_DAYS_BACK)
    if not raw_data:
        print("No entries found this week, using fallback response", file=sys.stderr)
        return fallback_response(config.projects), True

    prompt = build_prompt(config.projects)
    result = format_with_llm(raw_data, prompt, expected_marker="REPORT", check_errors=True)
    if result is None:
        return raw_data, False
    return result, True


def run():
    config = ClassifierConfig.from_env()
    text, formatted = create_weekly_update(config)
    if formatted:
        print(text)
        return

    print("LLM processing failed. Raw data for manual processing:")
    print("=" * 65)
    print(text)
    print("=" * 65)
    print("")
    print("MANUAL STEPS:")
    print("1. Copy the raw data above")
    print("2. Paste it into an LLM chat")
    print("3. Ask it to format the entries for both weekly report formats")


def main() -> int:
    """Main entry point."""
    try:
        run()
    except Exception as e:
        print(f"\nError: {e}", file=sys.stderr)
        traceback.print_exc()
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
