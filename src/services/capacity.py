"""
Team capacity analysis against the SOW budget.

Folds a department's entries into per-member, per-work-type and per-month
totals, compares actual hours with the contracted monthly hours, and renders
Markdown reports for planning meetings.
"""

import sys
from datetime import date

from pydantic import BaseModel, Field, computed_field

from core.config import (
    PROFESSIONAL_SERVICES,
    SUPPORT_MAINTENANCE,
    WORK_TYPES,
    AnalysisConfig,
    WorkTypeRules,
)
from core.entries import filter_by_date, list_log_files, load_entries, warn
from models.entries import TimeEntry
from services.reports import format_hours, format_percent, months_between


# =============================================================================
# ANALYSIS MODELS
# =============================================================================


class HoursTally(BaseModel):
    """Running total for one leaf of the aggregation."""

    minutes: int = 0
    entries: int = 0

    @computed_field
    @property
    def hours(self) -> float:
        return self.minutes / 60

    def add(self, entry: TimeEntry) -> None:
        self.minutes += entry.minutes
        self.entries += 1


def _work_type_tallies() -> dict[str, HoursTally]:
    return {work_type: HoursTally() for work_type in WORK_TYPES}


class WorkTypeBreakdown(HoursTally):
    work_types: dict[str, HoursTally] = Field(default_factory=_work_type_tallies)

    def add_typed(self, entry: TimeEntry, work_type: str) -> None:
        self.add(entry)
        self.work_types[work_type].add(entry)

    def hours_for(self, work_type: str) -> float:
        return self.work_types[work_type].hours


class MemberBreakdown(WorkTypeBreakdown):
    email: str = ""


class CapacitySummary(BaseModel):
    expected_hours: float
    actual_hours: float
    utilization_rate: float | None
    remaining_capacity: float
    avg_monthly_hours: float
    expected_monthly_hours: float


class TeamAnalysis(BaseModel):
    project_name: str
    start_date: date
    end_date: date
    months_analyzed: int
    total_entries: int
    by_team_member: dict[str, MemberBreakdown] = Field(default_factory=dict)
    by_work_type: dict[str, HoursTally] = Field(default_factory=_work_type_tallies)
    by_month: dict[str, WorkTypeBreakdown] = Field(default_factory=dict)
    capacity: CapacitySummary | None = None

    @property
    def total_minutes(self) -> int:
        return sum(tally.minutes for tally in self.by_work_type.values())

    @computed_field
    @property
    def total_hours(self) -> float:
        return self.total_minutes / 60

    def members_by_hours(self) -> list[tuple[str, MemberBreakdown]]:
        return sorted(self.by_team_member.items(), key=lambda item: item[1].minutes, reverse=True)


# =============================================================================
# CLASSIFICATION & AGGREGATION
# =============================================================================


def categorize_work_type(entry: TimeEntry, rules: WorkTypeRules) -> str:
    """Professional Services on a matching tag or initiative keyword, else maintenance."""
    tag_names = [name.lower() for name in entry.tag_names()]
    has_pro_tag = any(pt.lower() in name for name in tag_names for pt in rules.professional_tags)

    description = entry.description.lower()
    has_pro_keyword = any(keyword.lower() in description for keyword in rules.professional_keywords)

    if has_pro_tag or has_pro_keyword:
        return PROFESSIONAL_SERVICES
    return SUPPORT_MAINTENANCE


def load_team_entries(config: AnalysisConfig, start: date, end: date) -> list[TimeEntry]:
    """Load the department's snapshots and keep entries within [start, end]."""
    logs_dir = config.logs_dir
    if not logs_dir.is_dir():
        warn(f"Data directory not found: {logs_dir}")
        return []

    files = list_log_files(logs_dir)
    print(f"Found {len(files)} data files", file=sys.stderr)
    return filter_by_date(load_entries(files), start, end)


def analyze_team_data(
    entries: list[TimeEntry],
    config: AnalysisConfig,
    start: date,
    end: date,
    today: date | None = None,
) -> TeamAnalysis | None:
    """
    Aggregate entries and compute capacity metrics.

    Returns None when there are no entries, so callers report "no data"
    instead of dividing by an empty corpus.
    """
    if not entries:
        return None

    today = today or date.today()
    budget = config.budget
    months_analyzed = max(1, months_between(budget.contract_start, today))

    analysis = TeamAnalysis(
        project_name=config.project_name,
        start_date=start,
        end_date=end,
        months_analyzed=months_analyzed,
        total_entries=len(entries),
    )

    for entry in entries:
        work_type = categorize_work_type(entry, config.rules)
        member_name = entry.user.full_name

        member = analysis.by_team_member.get(member_name)
        if member is None:
            member = MemberBreakdown(email=entry.user.email)
            analysis.by_team_member[member_name] = member
        member.add_typed(entry, work_type)

        analysis.by_work_type[work_type].add(entry)

        month = analysis.by_month.setdefault(entry.month_key, WorkTypeBreakdown())
        month.add_typed(entry, work_type)

    expected_hours = budget.monthly_hours * months_analyzed
    actual_hours = analysis.total_hours
    utilization = actual_hours / expected_hours * 100 if expected_hours else None

    analysis.capacity = CapacitySummary(
        expected_hours=expected_hours,
        actual_hours=actual_hours,
        utilization_rate=utilization,
        remaining_capacity=expected_hours - actual_hours,
        avg_monthly_hours=actual_hours / months_analyzed,
        expected_monthly_hours=budget.monthly_hours,
    )
    return analysis


def select_recommendations(utilization_rate: float | None, thresholds: list) -> list[str]:
    """Pick the recommendation lines for the first threshold the rate is under."""
    if utilization_rate is None:
        return []
    for bound, lines in thresholds:
        if bound is None or utilization_rate < bound:
            return list(lines)
    return []


# =============================================================================
# MARKDOWN REPORTS
# =============================================================================


def generate_summary_report(analysis: TeamAnalysis, config: AnalysisConfig) -> str:
    """Summary report for SOW planning and client meetings."""
    capacity = analysis.capacity
    budget = config.budget
    rate = capacity.utilization_rate
    rate_text = f"{rate:.1f}%" if rate is not None else "n/a"

    report = [
        f"# {analysis.project_name} Team Resource Analysis Summary",
        "*Generated for SOW planning and client meetings*",
        "",
        "## Key Metrics",
        f"- **Analysis Period**: {analysis.start_date} to {analysis.end_date}",
        f"- **Months Analyzed**: {analysis.months_analyzed}",
        f"- **Total Hours Used**: {format_hours(analysis.total_hours)} hours",
        f"- **SOW Utilization**: {rate_text} of contracted capacity",
        f"- **Remaining Capacity**: {format_hours(capacity.remaining_capacity)} hours",
        "",
        "## SOW Capacity Analysis",
        f"- **Contract Period**: {budget.contract_start} to {budget.contract_end}",
        f"- **Expected Hours/Month**: {format_hours(capacity.expected_monthly_hours)} hours"
        f" (${budget.monthly_budget:,.0f}/month at ${budget.hourly_rate:,.0f}/hour)",
        f"- **Actual Average/Month**: {format_hours(capacity.avg_monthly_hours)} hours",
        f"- **Under-utilization**: "
        f"{format_hours(capacity.expected_monthly_hours - capacity.avg_monthly_hours)} hours/month",
    ]
    if budget.contract_total_hours:
        report.append(
            f"- **Contract Total**: {format_hours(analysis.total_hours)} of "
            f"{format_hours(budget.contract_total_hours)} hours used"
        )

    report.append("")
    if rate is None:
        report.append(
            "**Key Finding**: SOW capacity unknown - "
            "no monthly hours budget is configured."
        )
    elif rate < 100:
        report.append(
            "**Key Finding**: Team is operating below SOW capacity - "
            "room for growth without additional resources."
        )
    else:
        report.append(
            "**Key Finding**: Team is at or above SOW capacity - "
            "may need additional resources for new initiatives."
        )
    report.append("")

    total_hours = analysis.total_hours
    report.append("## Work Type Distribution")
    for work_type in WORK_TYPES:
        hours = analysis.by_work_type[work_type].hours
        report.append(
            f"- **{work_type}**: {format_hours(hours)} hours ({format_percent(hours, total_hours)}%)"
        )
    report.append("")

    report.append("## Team Resource Utilization")
    for name, member in analysis.members_by_hours():
        per_month = member.hours / analysis.months_analyzed
        report.append(f"- **{name}**: {format_hours(member.hours)}h total ({format_hours(per_month)}h/month)")
        report.append(
            f"  - Maintenance: {format_hours(member.hours_for(SUPPORT_MAINTENANCE))}h"
            f" | Professional: {format_hours(member.hours_for(PROFESSIONAL_SERVICES))}h"
        )
    report.append("")

    report.append("## Recommendations")
    for index, line in enumerate(select_recommendations(rate, config.thresholds), start=1):
        report.append(f"{index}. {line}")

    return "\n".join(report)


def generate_detailed_report(analysis: TeamAnalysis) -> str:
    """Month-by-month and per-member breakdown."""
    report = [f"# {analysis.project_name} Team Analysis - Detailed Report", ""]

    report.append("## Monthly Hour Distribution")
    for month_key in sorted(analysis.by_month):
        month = analysis.by_month[month_key]
        report.append(f"### {month_key}")
        report.append(f"- Total: {format_hours(month.hours)} hours ({month.entries} entries)")
        report.append(
            f"- Maintenance: {format_hours(month.hours_for(SUPPORT_MAINTENANCE))}h"
            f" | Professional: {format_hours(month.hours_for(PROFESSIONAL_SERVICES))}h"
        )
        report.append("")

    report.append("## Individual Team Member Analysis")
    for name, member in analysis.members_by_hours():
        report.append(f"### {name} ({member.email})")
        report.append(f"- **Total Hours**: {format_hours(member.hours)} ({member.entries} entries)")
        report.append(
            f"- **Monthly Average**: {format_hours(member.hours / analysis.months_analyzed)} hours"
        )
        report.append(f"- **{SUPPORT_MAINTENANCE}**: {format_hours(member.hours_for(SUPPORT_MAINTENANCE))}h")
        report.append(f"- **{PROFESSIONAL_SERVICES}**: {format_hours(member.hours_for(PROFESSIONAL_SERVICES))}h")
        report.append("")

    return "\n".join(report)


def analysis_to_json(analysis: TeamAnalysis) -> str:
    return analysis.model_dump_json(indent=2)
