"""
Formatting and date utilities shared by the standup and team reports.
"""

from datetime import date, datetime, timedelta


def format_duration(minutes: int) -> str:
    """Format minutes as '45m', '2h' or '2h 5m'."""
    hours, mins = divmod(minutes, 60)
    if hours == 0:
        return f"{mins}m"
    if mins == 0:
        return f"{hours}h"
    return f"{hours}h {mins}m"


def format_hours(hours: float) -> str:
    """One decimal place, e.g. '12.5'."""
    return f"{hours:.1f}"


def format_percent(part: float, whole: float) -> str:
    """Percentage with one decimal place; '0.0' when the whole is zero."""
    if not whole:
        return "0.0"
    return f"{part / whole * 100:.1f}"


def parse_date(date_str: str) -> date:
    """Parse YYYY-MM-DD."""
    return datetime.strptime(date_str, "%Y-%m-%d").date()


def get_days_back_range(days: int, today: date | None = None) -> tuple[date, date]:
    """
    Calculate the inclusive range covering the last N days.

    Returns:
        Tuple of (today - days, today)
    """
    today = today or date.today()
    return today - timedelta(days=days), today


def months_between(start: date, end: date) -> int:
    """Inclusive count of calendar months from start's month to end's month."""
    return (end.year - start.year) * 12 + (end.month - start.month) + 1


def standup_days_back(today: date | None = None) -> int:
    """Look back over the weekend on Mondays, otherwise two days."""
    today = today or date.today()
    return 4 if today.weekday() == 0 else 2
