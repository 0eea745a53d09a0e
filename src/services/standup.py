"""
Raw standup and weekly report text, ready to hand to an LLM for rewriting.
"""

from datetime import date

from core.classification import group_entries
from core.config import ClassifierConfig
from core.entries import filter_by_date, load_project_entries
from models.entries import TimeEntry
from services.reports import format_duration, get_days_back_range


def format_entry_line(entry: TimeEntry) -> str:
    """'1h 30m - Jane D.: Fixed login bug (2025-06-02)'"""
    return (
        f"{format_duration(entry.minutes)} - {entry.user.short_name}: "
        f"{entry.description} ({entry.date.isoformat()})"
    )


def select_entries(
    entries: list[TimeEntry],
    start: date,
    end: date,
    user_id: int | None = None,
) -> list[TimeEntry]:
    """Entries within [start, end], optionally only those by one user."""
    in_range = filter_by_date(entries, start, end)
    if user_id is None:
        return in_range
    return [entry for entry in in_range if entry.user.id == user_id]


def render_buckets(
    entries: list[TimeEntry], config: ClassifierConfig, exclude_internal: bool = False
) -> str:
    """
    Render classified entries as sections of one line per entry.

    Returns an empty string when nothing survives classification.
    """
    grouped = group_entries(entries, config, exclude_internal=exclude_internal)
    if not grouped:
        return ""

    lines = []
    for bucket, bucket_entries in grouped.items():
        lines.append(f"=== {bucket.name} ===")
        lines.extend(format_entry_line(entry) for entry in bucket_entries)
        lines.append("")
    return "\n".join(lines).rstrip("\n") + "\n"


def build_report_text(
    entries: list[TimeEntry],
    config: ClassifierConfig,
    days: int,
    user_id: int | None = None,
    exclude_internal: bool = False,
    today: date | None = None,
) -> str:
    """Filter a loaded corpus to the last N days (and a user) and render it."""
    start, end = get_days_back_range(days, today)
    selected = select_entries(entries, start, end, user_id)
    return render_buckets(selected, config, exclude_internal=exclude_internal)


def generate_geekbot_data(
    config: ClassifierConfig,
    days: int,
    exclude_internal: bool = False,
    today: date | None = None,
) -> str:
    """The configured user's entries for the daily standup."""
    entries = load_project_entries(config.data_dir, config.projects)
    return build_report_text(
        entries, config, days, user_id=config.user_id,
        exclude_internal=exclude_internal, today=today,
    )


def generate_weekly_data(config: ClassifierConfig, days: int, today: date | None = None) -> str:
    """Everyone's entries for the weekly update; internal work is left out."""
    entries = load_project_entries(config.data_dir, config.projects)
    return build_report_text(entries, config, days, exclude_internal=True, today=today)
