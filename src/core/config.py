"""
Configuration constants and environment setup.

Paths and defaults live at module level. The classifier and the capacity
analysis take explicit config objects built once by the calling script with
``from_env()``; nothing under core/ or services/ reads the environment itself.
"""

import os
import sys
from dataclasses import dataclass, field
from datetime import date, datetime
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# =============================================================================
# PATHS
# =============================================================================

PROJECT_ROOT = Path(__file__).parent.parent.parent
DATA_DIR = Path(os.environ.get("DATA_DIR", str(PROJECT_ROOT / "data")))
LOG_FILE_PREFIX = "noko"

# =============================================================================
# REPORT CONFIGURATION
# =============================================================================

DEFAULT_PROJECTS = ["CATIC", "SDSU"]
DEPARTMENT_MARKER = "[LSM]"
DEPARTMENT_LABEL = "LSM"
INTERNAL_LABEL = "Internal"
NO_PROJECT_LABEL = "(no project)"

# Tag substrings (case-insensitive) that mark company-internal work
INTERNAL_TAG_KEYWORDS = ("internal", "sales")

DEFAULT_CLIENT_PROJECTS = ["DH", "GovHub", "MJFF", "CATIC", "SDSU"]

WEEKLY_DAYS_BACK = 7
GEEKBOT_DAYS_BACK = 1
NO_ENTRIES_TEXT = "No entries found"

# =============================================================================
# TEAM ANALYSIS (SOW) CONFIGURATION
# =============================================================================

TEAM_PROJECT = "GovHub"
SOW_START_DATE = "2025-04-01"
SOW_END_DATE = "2026-03-31"
SOW_MONTHLY_HOURS = 200
SOW_HOURLY_RATE = 175

SUPPORT_MAINTENANCE = "Support & Maintenance"
PROFESSIONAL_SERVICES = "Professional Services"
WORK_TYPES = (SUPPORT_MAINTENANCE, PROFESSIONAL_SERVICES)

PROFESSIONAL_TAGS = ["professional", "consulting", "strategy", "design"]
PROFESSIONAL_KEYWORDS = [
    "behat", "playwright", "migration", "upgrade", "drupal 11",
    "govhub 2.0", "initiative", "acn", "cloud next", "storybook",
    "orchard", "auth0", "siteimprove", "figma",
]

# (upper bound on utilization %, recommendation lines); first bound that the
# rate falls under wins, the last entry has no bound.
RECOMMENDATION_THRESHOLDS = [
    (80.0, [
        "**Scale Current Team**: Under-utilizing SOW capacity - can increase current team hours",
        "**Accommodate Initiatives**: Room for new initiatives within existing contract",
        "**No Additional CS Resources Needed**: Current maintenance team can handle expanded scope",
    ]),
    (100.0, [
        "**Optimize Current Resources**: Approaching SOW limits but still have capacity",
        "**Selective Initiative Prioritization**: Can handle some new initiatives",
        "**Monitor Capacity**: May need CS resources for significant scope expansion",
    ]),
    (None, [
        "**Consider Client Services Resources**: At/above SOW capacity",
        "**Reduce Maintenance Hours**: To accommodate new initiatives within budget",
        "**SOW Amendment**: May need additional budget for expanded scope",
    ]),
]

# =============================================================================
# LLM CONFIGURATION
# =============================================================================

_timeout = os.environ.get("LLM_TIMEOUT_SECONDS", "").strip()
LLM_TIMEOUT_SECONDS = int(_timeout) if _timeout.isdigit() else 10
CLAUDE_FALLBACK_PATHS = [Path.home() / ".claude" / "local" / "claude"]


# =============================================================================
# ENVIRONMENT HELPERS
# =============================================================================


def _get_env_bool(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "y", "on"}


def _get_env_int(name: str) -> int | None:
    value = os.environ.get(name, "").strip()
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def _get_env_list(name: str, default: list[str]) -> list[str]:
    value = os.environ.get(name)
    if not value:
        return list(default)
    return [item.strip() for item in value.split(",") if item.strip()]


def _warn_bad_env(name: str, value: str, default):
    print(f"Warning: ignoring invalid {name}={value!r}, using {default}", file=sys.stderr)


def _get_env_float(name: str, default: float | None) -> float | None:
    value = os.environ.get(name, "").strip()
    if not value:
        return default
    try:
        return float(value)
    except ValueError:
        _warn_bad_env(name, value, default)
        return default


def _get_env_date(name: str, default: str) -> date:
    value = os.environ.get(name, "").strip()
    if value:
        try:
            return datetime.strptime(value, "%Y-%m-%d").date()
        except ValueError:
            _warn_bad_env(name, value, default)
    return datetime.strptime(default, "%Y-%m-%d").date()


# =============================================================================
# CONFIG OBJECTS
# =============================================================================


@dataclass
class ClassifierConfig:
    """Bucket ids and names used to classify entries for standup reports."""

    data_dir: Path = DATA_DIR
    projects: list[str] = field(default_factory=lambda: list(DEFAULT_PROJECTS))
    user_id: int | None = None
    internal_project_id: int | None = None
    department_project_ids: set[int] = field(default_factory=set)
    client_projects: list[str] = field(default_factory=lambda: list(DEFAULT_CLIENT_PROJECTS))
    department_label: str = DEPARTMENT_LABEL
    # Treat anything not tagged internal and not matched elsewhere as
    # department work instead of filing it under its own project name.
    untagged_as_department: bool = False
    exclude_internal: bool = False

    @classmethod
    def from_env(cls) -> "ClassifierConfig":
        """
        Build classifier config from environment variables.

        - DATA_DIR, PROJECTS (comma separated)
        - NOKO_USER_ID
        - NOKO_INTERNAL_PROJECT_ID
        - NOKO_LSM_PROJECT_ID, NOKO_AUX_PROJECT_IDS (comma separated)
        - LSM_CLIENT_PROJECTS (comma separated short names)
        - LSM_UNTAGGED_AS_DEPARTMENT, GEEKBOT_EXCLUDE_INTERNAL (true/false)
        """
        department_ids = set()
        primary = _get_env_int("NOKO_LSM_PROJECT_ID")
        if primary is not None:
            department_ids.add(primary)
        for aux in _get_env_list("NOKO_AUX_PROJECT_IDS", []):
            if aux.isdigit():
                department_ids.add(int(aux))

        return cls(
            data_dir=DATA_DIR,
            projects=_get_env_list("PROJECTS", DEFAULT_PROJECTS),
            user_id=_get_env_int("NOKO_USER_ID"),
            internal_project_id=_get_env_int("NOKO_INTERNAL_PROJECT_ID"),
            department_project_ids=department_ids,
            client_projects=_get_env_list("LSM_CLIENT_PROJECTS", DEFAULT_CLIENT_PROJECTS),
            untagged_as_department=_get_env_bool("LSM_UNTAGGED_AS_DEPARTMENT", False),
            exclude_internal=_get_env_bool("GEEKBOT_EXCLUDE_INTERNAL", False),
        )


@dataclass
class CapacityBudget:
    """Contracted capacity the team's actual hours are compared against."""

    monthly_hours: float = SOW_MONTHLY_HOURS
    contract_start: date = date(2025, 4, 1)
    contract_end: date = date(2026, 3, 31)
    contract_total_hours: float | None = None
    hourly_rate: float = SOW_HOURLY_RATE

    @property
    def monthly_budget(self) -> float:
        return self.monthly_hours * self.hourly_rate

    @classmethod
    def from_env(cls) -> "CapacityBudget":
        start = _get_env_date("SOW_START_DATE", SOW_START_DATE)
        end = _get_env_date("SOW_END_DATE", SOW_END_DATE)
        monthly = _get_env_float("SOW_MONTHLY_HOURS", SOW_MONTHLY_HOURS)
        total = _get_env_float("SOW_TOTAL_HOURS", None)
        return cls(
            monthly_hours=monthly,
            contract_start=start,
            contract_end=end,
            contract_total_hours=total,
            hourly_rate=_get_env_float("SOW_HOURLY_RATE", SOW_HOURLY_RATE),
        )


@dataclass
class WorkTypeRules:
    """Tag labels and description keywords that mark Professional Services."""

    professional_tags: list[str] = field(default_factory=lambda: list(PROFESSIONAL_TAGS))
    professional_keywords: list[str] = field(default_factory=lambda: list(PROFESSIONAL_KEYWORDS))


@dataclass
class AnalysisConfig:
    """Everything the team analysis needs, assembled at process start."""

    data_dir: Path = DATA_DIR
    project_name: str = TEAM_PROJECT
    budget: CapacityBudget = field(default_factory=CapacityBudget)
    rules: WorkTypeRules = field(default_factory=WorkTypeRules)
    thresholds: list = field(default_factory=lambda: list(RECOMMENDATION_THRESHOLDS))

    @property
    def logs_dir(self) -> Path:
        return self.data_dir / self.project_name / "logs"

    @classmethod
    def from_env(cls) -> "AnalysisConfig":
        return cls(
            data_dir=DATA_DIR,
            project_name=os.environ.get("TEAM_PROJECT", TEAM_PROJECT),
            budget=CapacityBudget.from_env(),
        )
