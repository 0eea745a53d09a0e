#!/usr/bin/env python3
"""
Create the daily Geekbot standup update from Noko snapshots with an LLM.

Looks back 4 days on Mondays (to include Friday) and 2 days otherwise. When
there is nothing to report a fixed fallback update is printed; when the LLM
tools fail the raw data is printed for manual formatting.

Usage:
    uv run python src/scripts/llm_geekbot.py
    uv run python src/scripts/llm_geekbot.py --exclude-internal
"""

import argparse
import sys
import traceback
from datetime import date
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.config import ClassifierConfig
from services.llm import format_with_llm
from services.reports import standup_days_back
from services.standup import generate_geekbot_data

SECTION_2_AND_3 = """**Section 2 (What will you do today?):**
Monitor for new issues on active client projects and respond
Be available for client communications and urgent requests
Continue ongoing LSM administrative and development tasks

**Section 3 (Anything blocking your progress?):**
No current blockers"""

FALLBACK_RESPONSE = f"""**Section 1 (What's new since your last update?):**
No new LSM project activities in the past day.

{SECTION_2_AND_3}"""

CATEGORIES = """Categories explained:
- Client Projects (DH, GovHub, MJFF, etc.): LSM client work and support
- LSM: General LSM administrative work, cross-project activities, and LSM infrastructure"""

INTERNAL_CATEGORY = "\n- Internal: Company-wide activities, internal tools, and administrative work"


def build_prompt(exclude_internal: bool) -> str:
    """Prompt for the primary LLM; mentions Internal only when it is included."""
    if exclude_internal:
        intro = (
            "The entries are categorized into client projects and general LSM work. "
            "Internal activities have been excluded from this report."
        )
        categories = CATEGORIES
        internal_section = ""
    else:
        intro = (
            "The entries are already categorized into client projects, "
            "general LSM work, and internal activities."
        )
        categories = CATEGORIES + INTERNAL_CATEGORY
        internal_section = "\nInternal:\n* [clean summary of internal activities]\n"

    return f"""When given this log of time tracking entries, organize the entries by category and summarize what has been accomplished. {intro} Do not summarize the time spent, just focus on a concise list of things accomplished. Remove all hashtags and time durations and create clean, professional summaries.

{categories}

Format the output for Geekbot's 3 questions:

**Section 1 (What's new since your last update?):**
[Client Project Name]:
* [clean summary item]

LSM:
* [clean summary of general LSM activities]
{internal_section}
{SECTION_2_AND_3}"""


FALLBACK_PROMPT = f"""Format the following time tracking entries for a Geekbot update. Remove hashtags and organize by project.

Format the output exactly like this:
**Section 1 (What's new since your last update?):**
- ProjectName: [activities]

{SECTION_2_AND_3}"""


def print_manual_steps(raw_data: str):
    print("LLM processing failed. Raw data for manual processing:")
    print("=" * 65)
    print(raw_data)
    print("=" * 65)
    print("")
    print("MANUAL STEPS:")
    print("1. Copy the raw data above")
    print("2. Paste it into an LLM chat")
    print("3. Ask it to format the entries for Geekbot with the three sections")


def create_geekbot_update(
    config: ClassifierConfig, exclude_internal: bool, today: date | None = None
) -> tuple[str, bool]:
    """
    Build the standup update.

    Returns:
        Tuple of (text, formatted). formatted is False when text is the raw
        data because both LLM tools failed.
    """
    days = standup_days_back(today)
    print(f"Looking back {days} day(s)...", file=sys.stderr)

    raw_data = generate_geekbot_data(config, days, exclude_internal=exclude_internal, today=today)
    if not raw_data:
        print("No recent entries found, using fallback response", file=sys.stderr)
        return FALLBACK_RESPONSE, True

    result = format_with_llm(raw_data, build_prompt(exclude_internal), FALLBACK_PROMPT)
    if result is None:
        return raw_data, False
    return result, True


def run(exclude_internal: bool):
    config = ClassifierConfig.from_env()
    exclude_internal = exclude_internal or config.exclude_internal
    if exclude_internal:
        print("LSM-only mode: Internal activities will be excluded", file=sys.stderr)
    if config.user_id is None:
        print("Warning: NOKO_USER_ID is not set, including every user's entries", file=sys.stderr)

    text, formatted = create_geekbot_update(config, exclude_internal)
    if formatted:
        print(text)
    else:
        print_manual_steps(text)


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Generate the daily Geekbot update")
    parser.add_argument(
        "--exclude-internal",
        "--lsm-only",
        action="store_true",
        help="Exclude Internal activities from the report",
    )
    args = parser.parse_args(argv)
    try:
        run(args.exclude_internal)
    except Exception as e:
        print(f"\nError: {e}", file=sys.stderr)
        traceback.print_exc()
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
