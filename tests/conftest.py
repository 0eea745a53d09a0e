"""
Pytest configuration and shared fixtures.
"""

import json
import sys
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from core.config import ClassifierConfig  # noqa: E402
from models.entries import TimeEntry  # noqa: E402

INTERNAL_PROJECT_ID = 700001
LSM_PROJECT_ID = 700100
AUX_PROJECT_ID = 700200


@pytest.fixture
def sample_entry_data():
    """Sample Noko entry record as it appears in a snapshot file."""
    return {
        "id": 1001,
        "date": "2025-06-02",
        "minutes": 90,
        "description": "Fixed login redirect bug",
        "user": {
            "id": 8372,
            "first_name": "Jane",
            "last_name": "Doe",
            "email": "jane.doe@example.com",
        },
        "project": {"id": 701450, "name": "[LSM] CATIC Support Retainer"},
        "tags": [],
    }


@pytest.fixture
def make_entry(sample_entry_data):
    """Factory for validated entries; keyword args override the sample record."""

    def _make(**overrides) -> TimeEntry:
        return TimeEntry.model_validate({**sample_entry_data, **overrides})

    return _make


@pytest.fixture
def classifier_config(tmp_path):
    return ClassifierConfig(
        data_dir=tmp_path,
        projects=["CATIC", "SDSU"],
        user_id=8372,
        internal_project_id=INTERNAL_PROJECT_ID,
        department_project_ids={LSM_PROJECT_ID, AUX_PROJECT_ID},
        client_projects=["DH", "GovHub", "MJFF", "CATIC", "SDSU", "Foo"],
    )


@pytest.fixture
def write_snapshot(tmp_path):
    """Write a list of entry records to <tmp>/<project>/logs/noko-<day>.json."""

    def _write(project: str, day: str, records: list[dict]) -> Path:
        logs_dir = tmp_path / project / "logs"
        logs_dir.mkdir(parents=True, exist_ok=True)
        filepath = logs_dir / f"noko-{day}.json"
        filepath.write_text(json.dumps(records), encoding="utf-8")
        return filepath

    return _write
