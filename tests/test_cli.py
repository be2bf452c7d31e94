"""Tests for CLI functionality."""

import json
import sys
from pathlib import Path
from unittest.mock import Mock

import pytest

from launchlens import cli
from launchlens.core.exceptions import ProviderTransportError
from launchlens.core.models import ImpactSummary, SentimentResult, ThemeResult


@pytest.fixture
def csv_files(tmp_path):
    pre = tmp_path / "pre.csv"
    post = tmp_path / "post.csv"
    pre.write_text("id,review_text,rating\np1,Loved it,5\np2,Terrible app,1\n", encoding="utf-8")
    post.write_text("id,review_text,rating\nq1,Great,5\nq2,Better,5\n", encoding="utf-8")
    return pre, post


class _StubGateway:
    def __init__(self, fail=False):
        self.fail = fail

    def analyze_sentiments(self, reviews):
        if self.fail:
            raise ProviderTransportError("provider unreachable")
        return [SentimentResult(r.id, "positive" if r.rating >= 4 else "negative", 0.9) for r in reviews]

    def extract_themes(self, pre, post):
        return [ThemeResult("Speed", 1, 2, 100.0, "positive")]

    def generate_impact_summary(self, pre, post, comparison):
        return ImpactSummary(overall_success=True, success_score=88.0, executive_summary="Good launch.")


def test_inspect_prints_count(csv_files, capsys):
    cli.main(["inspect", str(csv_files[0])])
    out = capsys.readouterr().out
    assert "Parsed 2 reviews" in out
    assert "Loved it" in out


def test_inspect_malformed_exits_with_input_code(tmp_path):
    bad = tmp_path / "bad.csv"
    bad.write_text("id,rating\n1,2,3\n", encoding="utf-8")
    with pytest.raises(SystemExit) as exc_info:
        cli.main(["inspect", str(bad)])
    assert exc_info.value.code == 2


def test_analyze_writes_report(csv_files, tmp_path, monkeypatch, capsys):
    monkeypatch.setattr(cli.LLMServiceFactory, "create", staticmethod(lambda: _StubGateway()))
    out_file = tmp_path / "report.json"

    cli.main(["analyze", str(csv_files[0]), str(csv_files[1]), "--out", str(out_file)])

    report = json.loads(out_file.read_text(encoding="utf-8"))
    assert report["comparison"]["sentiment_shift"] == pytest.approx(50.0)
    assert report["impact"]["success_score"] == 88.0
    assert report["metadata"]["export_timestamp"]
    out = capsys.readouterr().out
    assert "Sentiment shift: +50.0 points" in out
    assert "Verdict: SUCCESS" in out


def test_analyze_provider_failure_exits_with_server_code(csv_files, monkeypatch):
    monkeypatch.setattr(cli.LLMServiceFactory, "create", staticmethod(lambda: _StubGateway(fail=True)))
    with pytest.raises(SystemExit) as exc_info:
        cli.main(["analyze", str(csv_files[0]), str(csv_files[1])])
    assert exc_info.value.code == 1


def test_export_pretty(tmp_path, capsys):
    src = tmp_path / "report.json"
    src.write_text(json.dumps({"analyzed_at": "2024-01-01T00:00:00+00:00"}), encoding="utf-8")

    cli.main(["export", "--in", str(src), "--pretty"])
    assert '"analyzed_at": "2024-01-01T00:00:00+00:00"' in capsys.readouterr().out


def test_export_to_file(tmp_path):
    src = tmp_path / "report.json"
    src.write_text(json.dumps({"impact": {}}), encoding="utf-8")

    cli.main(["export", "--in", str(src)])
    exported = json.loads((tmp_path / "report_export.json").read_text(encoding="utf-8"))
    assert exported["impact"] == {}
    assert exported["metadata"]["export_timestamp"]


def test_version_flag(capsys):
    with pytest.raises(SystemExit) as exc_info:
        cli.main(["--version"])
    assert exc_info.value.code == 0
    assert "1.0.0" in capsys.readouterr().out


class TestUiCommand:

    def test_runs_streamlit_on_the_dashboard(self, monkeypatch):
        calls = []
        monkeypatch.setattr(cli.subprocess, "run", lambda cmd: calls.append(cmd) or Mock(returncode=0))

        cli.main(["ui", "--port", "8600"])

        (command,) = calls
        assert command[:4] == [sys.executable, "-m", "streamlit", "run"]
        assert Path(command[4]) == cli.DASHBOARD_PATH
        assert cli.DASHBOARD_PATH.parts[-3:] == ("launchlens", "ui", "streamlit_app.py")
        assert command[5:] == ["--server.port", "8600"]

    def test_dashboard_failure_sets_exit_status(self, monkeypatch):
        monkeypatch.setattr(cli.subprocess, "run", lambda cmd: Mock(returncode=3))
        with pytest.raises(SystemExit) as exc_info:
            cli.main(["ui"])
        assert exc_info.value.code == 3

    def test_missing_dashboard_is_a_config_error(self, monkeypatch, tmp_path):
        monkeypatch.setattr(cli, "DASHBOARD_PATH", tmp_path / "gone.py")
        run = Mock()
        monkeypatch.setattr(cli.subprocess, "run", run)
        with pytest.raises(SystemExit) as exc_info:
            cli.main(["ui"])
        assert exc_info.value.code == 1
        run.assert_not_called()
