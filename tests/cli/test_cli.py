"""Tests for the typer CLI."""

import json

import pytest
from typer.testing import CliRunner

from riskmap import __version__
from riskmap.cli import app
from riskmap.cli._common import default_export_path

runner = CliRunner()


class TestCliBasics:
    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_help_lists_commands(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "export" in result.output
        assert "report" in result.output

    def test_default_export_path(self):
        from datetime import datetime

        path = default_export_path(datetime(2024, 3, 5, 7, 8, 9))
        assert path.name == "riskmap-data-20240305-070809.json"


class TestErrors:
    def test_not_a_repository_exits_1(self, tmp_path):
        result = runner.invoke(app, ["report", "--repo", str(tmp_path), "--quiet"])
        assert result.exit_code == 1
        assert "Error" in result.output

    def test_invalid_config_exits_1(self, git_repo):
        (git_repo / "riskmap.toml").write_text("[coupling]\nmin_cochange = 0\n")
        result = runner.invoke(app, ["report", "--repo", str(git_repo), "--quiet"])
        assert result.exit_code == 1

    def test_unknown_format_rejected(self, git_repo):
        result = runner.invoke(app, ["report", "--repo", str(git_repo), "--format", "xml"])
        assert result.exit_code != 0


class TestExport:
    def test_writes_json(self, git_repo, tmp_path):
        out = tmp_path / "out" / "data.json"
        result = runner.invoke(
            app, ["export", "--repo", str(git_repo), "--out", str(out), "--quiet"]
        )
        assert result.exit_code == 0, result.output
        data = json.loads(out.read_text())
        assert data["hotspots"][0]["path"] == "src/app/core.clj"
        assert data["raw"] is None

    def test_include_raw(self, git_repo, tmp_path):
        out = tmp_path / "data.json"
        result = runner.invoke(
            app,
            ["export", "-r", str(git_repo), "-o", str(out), "--include-raw", "--quiet"],
        )
        assert result.exit_code == 0, result.output
        data = json.loads(out.read_text())
        assert len(data["raw"]["commits"]) == 3

    def test_since_filters_history(self, git_repo, tmp_path):
        out = tmp_path / "data.json"
        result = runner.invoke(
            app,
            ["export", "-r", str(git_repo), "-o", str(out), "--since", "2024-01-08", "-q"],
        )
        assert result.exit_code == 0, result.output
        data = json.loads(out.read_text())
        assert data["params"]["since"] == "2024-01-08"
        assert [h["path"] for h in data["hotspots"]] == ["src/app/core.clj"]


class TestReport:
    def test_rich_output(self, git_repo):
        result = runner.invoke(app, ["report", "--repo", str(git_repo), "--top", "5", "-q"])
        assert result.exit_code == 0, result.output
        assert "src/app/core.clj" in result.output

    @pytest.mark.parametrize("fmt", ["csv", "json"])
    def test_machine_formats(self, git_repo, fmt):
        result = runner.invoke(app, ["report", "-r", str(git_repo), "-f", fmt, "-q"])
        assert result.exit_code == 0, result.output
        assert "src/app/core.clj" in result.output

    def test_out_also_writes_json(self, git_repo, tmp_path):
        out = tmp_path / "report.json"
        result = runner.invoke(
            app, ["report", "-r", str(git_repo), "--out", str(out), "-f", "csv", "-q"]
        )
        assert result.exit_code == 0, result.output
        data = json.loads(out.read_text())
        assert data["raw"] is not None
