"""
Loading of pre-fetched Noko JSON snapshots.

Layout: <data_dir>/<Project>/logs/noko-<YYYY-MM-DD>.json, each file a JSON
array of entries. Unreadable files and malformed records are reported and
skipped; they never stop a report from being produced.
"""

import json
import sys
from collections.abc import Iterable
from datetime import date
from pathlib import Path

from pydantic import ValidationError

from core.config import LOG_FILE_PREFIX
from models.entries import TimeEntry


def warn(message: str) -> None:
    """Print a warning to stderr so report output on stdout stays clean."""
    print(f"Warning: {message}", file=sys.stderr)


def list_log_files(logs_dir: Path) -> list[Path]:
    """Return snapshot files in a logs directory, oldest first."""
    if not logs_dir.is_dir():
        return []
    return sorted(logs_dir.glob(f"{LOG_FILE_PREFIX}-*.json"))


def read_entries_file(filepath: Path) -> list[TimeEntry]:
    """
    Read and validate one snapshot file.

    Returns an empty list (after a warning) when the file is missing,
    unreadable, not JSON, or not a JSON array.
    """
    try:
        raw = json.loads(filepath.read_text(encoding="utf-8"))
    except FileNotFoundError:
        warn(f"File not found: {filepath}")
        return []
    except (OSError, json.JSONDecodeError) as e:
        warn(f"Could not read {filepath}: {e}")
        return []

    if not isinstance(raw, list):
        warn(f"Expected a JSON array in {filepath}, skipping")
        return []

    entries = []
    for index, record in enumerate(raw):
        try:
            entries.append(TimeEntry.model_validate(record))
        except ValidationError as e:
            warn(f"Skipping malformed entry #{index} in {filepath.name}: {e.error_count()} error(s)")
    return entries


def dedupe_entries(entries: Iterable[TimeEntry]) -> list[TimeEntry]:
    """Drop repeated entry ids, keeping the first occurrence in read order."""
    seen: set[int] = set()
    unique = []
    for entry in entries:
        if entry.id in seen:
            continue
        seen.add(entry.id)
        unique.append(entry)
    return unique


def load_entries(files: Iterable[Path]) -> list[TimeEntry]:
    """Concatenate entries from several files and de-duplicate by id."""
    all_entries: list[TimeEntry] = []
    for filepath in files:
        all_entries.extend(read_entries_file(filepath))
    return dedupe_entries(all_entries)


def load_project_entries(data_dir: Path, projects: Iterable[str]) -> list[TimeEntry]:
    """Load every snapshot for the given projects as one de-duplicated corpus."""
    files: list[Path] = []
    for project in projects:
        logs_dir = data_dir / project / "logs"
        project_files = list_log_files(logs_dir)
        if not project_files:
            warn(f"No data files for {project} in {logs_dir}")
        files.extend(project_files)
    return load_entries(files)


def filter_by_date(entries: Iterable[TimeEntry], start: date, end: date) -> list[TimeEntry]:
    """Keep entries dated within [start, end], both inclusive."""
    return [entry for entry in entries if start <= entry.date <= end]
