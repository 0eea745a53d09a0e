"""Tests for snapshot loading, validation and de-duplication."""

from datetime import date

from core.entries import (
    dedupe_entries,
    filter_by_date,
    list_log_files,
    load_entries,
    load_project_entries,
    read_entries_file,
)
from models.entries import TimeEntry


def test_optional_fields_are_normalized(sample_entry_data):
    record = {**sample_entry_data, "description": None, "tags": None}
    del record["project"]
    entry = TimeEntry.model_validate(record)
    assert entry.description == ""
    assert entry.tags == []
    assert entry.project is None


def test_short_name_without_last_name(make_entry):
    entry = make_entry(user={"id": 1, "first_name": "Cher", "last_name": ""})
    assert entry.user.short_name == "Cher"


def test_missing_file_is_empty(tmp_path, capsys):
    assert read_entries_file(tmp_path / "noko-2025-06-02.json") == []
    assert "not found" in capsys.readouterr().err


def test_invalid_json_is_empty(tmp_path, capsys):
    path = tmp_path / "noko-2025-06-02.json"
    path.write_text("{not json", encoding="utf-8")
    assert read_entries_file(path) == []
    assert "Could not read" in capsys.readouterr().err


def test_non_array_is_empty(tmp_path):
    path = tmp_path / "noko-2025-06-02.json"
    path.write_text('{"id": 1}', encoding="utf-8")
    assert read_entries_file(path) == []


def test_malformed_records_are_skipped(write_snapshot, sample_entry_data, capsys):
    bad = {**sample_entry_data, "id": 2, "minutes": -5}
    path = write_snapshot("CATIC", "2025-06-02", [sample_entry_data, bad])
    entries = read_entries_file(path)
    assert [entry.id for entry in entries] == [1001]
    assert "Skipping malformed entry #1" in capsys.readouterr().err


def test_dedupe_keeps_first_occurrence(make_entry):
    first = make_entry(id=1, description="first")
    second = make_entry(id=1, description="second")
    other = make_entry(id=2)
    assert dedupe_entries([first, other, second]) == [first, other]


def test_load_entries_dedupes_across_files(write_snapshot, sample_entry_data):
    a = write_snapshot("CATIC", "2025-06-01", [sample_entry_data])
    b = write_snapshot("CATIC", "2025-06-02", [sample_entry_data, {**sample_entry_data, "id": 2}])
    entries = load_entries([a, b])
    assert [entry.id for entry in entries] == [1001, 2]


def test_list_log_files_sorted_and_filtered(write_snapshot, tmp_path):
    write_snapshot("SDSU", "2025-06-03", [])
    write_snapshot("SDSU", "2025-06-01", [])
    (tmp_path / "SDSU" / "logs" / "notes.json").write_text("[]", encoding="utf-8")
    names = [path.name for path in list_log_files(tmp_path / "SDSU" / "logs")]
    assert names == ["noko-2025-06-01.json", "noko-2025-06-03.json"]


def test_missing_project_directory_is_a_warning(tmp_path, write_snapshot, sample_entry_data, capsys):
    write_snapshot("CATIC", "2025-06-02", [sample_entry_data])
    entries = load_project_entries(tmp_path, ["CATIC", "SDSU"])
    assert len(entries) == 1
    assert "No data files for SDSU" in capsys.readouterr().err


def test_filter_by_date_is_inclusive(make_entry):
    entries = [
        make_entry(id=1, date="2025-05-31"),
        make_entry(id=2, date="2025-06-01"),
        make_entry(id=3, date="2025-06-03"),
        make_entry(id=4, date="2025-06-04"),
    ]
    kept = filter_by_date(entries, date(2025, 6, 1), date(2025, 6, 3))
    assert [entry.id for entry in kept] == [2, 3]
