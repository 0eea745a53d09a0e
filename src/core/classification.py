"""
Entry classification into report buckets.
"""

from dataclasses import dataclass
from enum import Enum

from core.config import (
    DEPARTMENT_MARKER,
    INTERNAL_LABEL,
    INTERNAL_TAG_KEYWORDS,
    NO_PROJECT_LABEL,
    ClassifierConfig,
)
from models.entries import TimeEntry


class BucketKind(Enum):
    """Bucket kinds, in report order."""

    CLIENT_PROJECT = 1
    GENERAL_DEPARTMENT = 2
    INTERNAL = 3
    OTHER = 4


@dataclass(frozen=True)
class Bucket:
    kind: BucketKind
    name: str

    @property
    def sort_key(self) -> tuple[int, str]:
        return (self.kind.value, self.name.lower())


def has_internal_tag(entry: TimeEntry) -> bool:
    """Check for a tag naming internal or sales work (case-insensitive)."""
    return any(
        keyword in tag.name.lower()
        for tag in entry.tags
        for keyword in INTERNAL_TAG_KEYWORDS
    )


def is_internal(entry: TimeEntry, config: ClassifierConfig) -> bool:
    if has_internal_tag(entry):
        return True
    return (
        config.internal_project_id is not None
        and entry.project is not None
        and entry.project.id == config.internal_project_id
    )


def is_client_project(entry: TimeEntry) -> bool:
    """Client projects carry the department marker in their name."""
    return entry.project is not None and DEPARTMENT_MARKER in entry.project.name


def is_department_project(entry: TimeEntry, config: ClassifierConfig) -> bool:
    return entry.project is not None and entry.project.id in config.department_project_ids


def client_display_name(project_name: str, client_projects: list[str]) -> str:
    """
    Derive the display name for a marked client project.

    Strips a leading marker, then looks for a configured short name that
    contains, or is contained in, the remainder (case-insensitive). Falls
    back to the first word of the remainder.
    """
    stripped = project_name
    if stripped.startswith(DEPARTMENT_MARKER):
        stripped = stripped[len(DEPARTMENT_MARKER):]
    stripped = stripped.strip()
    if not stripped:
        return project_name.strip()

    lowered = stripped.lower()
    for short_name in client_projects:
        short_lower = short_name.lower()
        if short_lower and (short_lower in lowered or lowered in short_lower):
            return short_name
    return stripped.split()[0]


def classify_entry(entry: TimeEntry, config: ClassifierConfig) -> Bucket:
    """
    Assign an entry to exactly one bucket.

    Order: Internal, client project, general department, other. Internal is
    checked first so that internal-tagged time logged against a client
    project never shows up in the client's section.
    """
    if is_internal(entry, config):
        return Bucket(BucketKind.INTERNAL, INTERNAL_LABEL)

    if is_client_project(entry):
        return Bucket(
            BucketKind.CLIENT_PROJECT,
            client_display_name(entry.project.name, config.client_projects),
        )

    if is_department_project(entry, config) or config.untagged_as_department:
        return Bucket(BucketKind.GENERAL_DEPARTMENT, config.department_label)

    name = entry.project.name if entry.project and entry.project.name else NO_PROJECT_LABEL
    return Bucket(BucketKind.OTHER, name)


def group_entries(
    entries: list[TimeEntry], config: ClassifierConfig, exclude_internal: bool = False
) -> dict[Bucket, list[TimeEntry]]:
    """
    Group entries by bucket, buckets in report order, entries in input order.

    With exclude_internal, entries classified as Internal are dropped; they
    do not fall through to any other bucket.
    """
    grouped: dict[Bucket, list[TimeEntry]] = {}
    for entry in entries:
        bucket = classify_entry(entry, config)
        if exclude_internal and bucket.kind is BucketKind.INTERNAL:
            continue
        grouped.setdefault(bucket, []).append(entry)

    return {bucket: grouped[bucket] for bucket in sorted(grouped, key=lambda b: b.sort_key)}
