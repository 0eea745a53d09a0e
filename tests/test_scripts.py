"""Tests for the command-line entry points."""

from datetime import date, timedelta

import pytest

from core.config import AnalysisConfig, CapacityBudget
from scripts import generate_reports, team_analysis


@pytest.fixture
def use_classifier_config(monkeypatch, classifier_config):
    monkeypatch.setattr(generate_reports.ClassifierConfig, "from_env", classmethod(lambda cls: classifier_config))
    return classifier_config


@pytest.fixture
def use_analysis_config(monkeypatch, tmp_path):
    config = AnalysisConfig(
        data_dir=tmp_path,
        project_name="GovHub",
        budget=CapacityBudget(monthly_hours=200, contract_start=date.today().replace(day=1)),
    )
    monkeypatch.setattr(team_analysis.AnalysisConfig, "from_env", classmethod(lambda cls: config))
    return config


def test_clean_geekbot_without_data(use_classifier_config, capsys):
    generate_reports.main(["clean-geekbot"])
    assert capsys.readouterr().out.strip() == "No entries found"


def test_raw_geekbot_frames_output(use_classifier_config, write_snapshot, sample_entry_data, capsys):
    record = {**sample_entry_data, "date": date.today().isoformat()}
    write_snapshot("CATIC", date.today().isoformat(), [record])

    generate_reports.main(["raw-geekbot", "1"])
    out = capsys.readouterr().out
    assert out.startswith("Raw Geekbot Data:\n" + "=" * 60)
    assert "=== CATIC ===" in out


def test_clean_geekbot_exclude_internal(use_classifier_config, write_snapshot, sample_entry_data, capsys):
    record = {**sample_entry_data, "date": date.today().isoformat(), "tags": [{"name": "internal"}]}
    write_snapshot("CATIC", date.today().isoformat(), [record])

    generate_reports.main(["clean-geekbot", "1", "exclude-internal"])
    assert capsys.readouterr().out.strip() == "No entries found"


def test_help(use_classifier_config, capsys):
    generate_reports.main([])
    assert "LLM Report Data Generator" in capsys.readouterr().out


def test_team_analysis_no_data(use_analysis_config, capsys):
    assert team_analysis.main(["summary"]) == 0
    assert "No data found" in capsys.readouterr().out


def test_team_analysis_both_and_xlsx(use_analysis_config, write_snapshot, sample_entry_data, tmp_path, capsys):
    day = date.today().isoformat()
    write_snapshot("GovHub", day, [{**sample_entry_data, "date": day}])
    xlsx_path = tmp_path / "out" / "team.xlsx"

    assert team_analysis.main(["both", "--xlsx", str(xlsx_path)]) == 0
    out = capsys.readouterr().out
    assert "# GovHub Team Resource Analysis Summary" in out
    assert "=" * 80 in out
    assert "# GovHub Team Analysis - Detailed Report" in out
    assert xlsx_path.exists()


def test_team_analysis_rejects_bad_date(use_analysis_config):
    with pytest.raises(SystemExit):
        team_analysis.main(["summary", "not-a-date"])


def test_team_analysis_end_date_limits_range(use_analysis_config, write_snapshot, sample_entry_data, capsys):
    today = date.today()
    yesterday = today - timedelta(days=1)
    write_snapshot("GovHub", today.isoformat(), [{**sample_entry_data, "date": today.isoformat()}])

    team_analysis.main(["json", yesterday.isoformat(), yesterday.isoformat()])
    assert "No data found" in capsys.readouterr().out


def test_clean_geekbot_exclude_internal_without_days(use_classifier_config, write_snapshot, sample_entry_data, capsys):
    record = {**sample_entry_data, "date": date.today().isoformat(), "tags": [{"name": "internal"}]}
    write_snapshot("CATIC", date.today().isoformat(), [record])

    assert generate_reports.main(["clean-geekbot", "exclude-internal"]) == 0
    assert capsys.readouterr().out.strip() == "No entries found"


def test_geekbot_options_in_any_order(capsys):
    assert generate_reports.parse_geekbot_options([]) == (1, False)
    assert generate_reports.parse_geekbot_options(["exclude-internal", "3"]) == (3, True)
    assert generate_reports.parse_geekbot_options(["soon"]) == (1, False)
    assert "ignoring unknown option 'soon'" in capsys.readouterr().err


def test_generate_reports_reports_errors(monkeypatch, capsys):
    def broken(cls):
        raise RuntimeError("snapshot directory unreadable")

    monkeypatch.setattr(generate_reports.ClassifierConfig, "from_env", classmethod(broken))
    assert generate_reports.main(["clean-weekly"]) == 1
    err = capsys.readouterr().err
    assert "Error: snapshot directory unreadable" in err
    assert "Traceback" in err


def test_team_analysis_survives_bad_env(monkeypatch, tmp_path, capsys):
    monkeypatch.setenv("SOW_MONTHLY_HOURS", "abc")
    monkeypatch.setenv("SOW_START_DATE", "someday")
    monkeypatch.setattr(team_analysis.AnalysisConfig, "from_env", classmethod(
        lambda cls: AnalysisConfig(data_dir=tmp_path, project_name="GovHub", budget=CapacityBudget.from_env())
    ))

    assert team_analysis.main(["summary"]) == 0
    captured = capsys.readouterr()
    assert "No data found" in captured.out
    assert "invalid SOW_MONTHLY_HOURS='abc'" in captured.err


def test_team_analysis_help(use_analysis_config, capsys):
    assert team_analysis.main(["help"]) == 0
    out = capsys.readouterr().out
    assert "Team Resource Analysis" in out
    assert "--xlsx" in out
