"""Tests for the check command."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from folio.cli import cli
from tests.conftest import write_page, write_post


@pytest.mark.usefixtures("_isolated_site")
class TestCheckCommand:
    def test_fresh_site_is_clean(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["check"])
        assert result.exit_code == 0, result.output
        assert "No issues found." in result.stdout

    def test_reports_issues(self, cli_runner: CliRunner, site_root: Path) -> None:
        write_post(site_root, "2024-01-01-untitled.md")
        result = cli_runner.invoke(cli, ["check"])
        assert result.exit_code == 0, result.output
        assert "Missing 'title'" in result.stdout
        assert "1 errors" in result.stdout

    def test_strict_exits_on_errors(self, cli_runner: CliRunner, site_root: Path) -> None:
        write_post(site_root, "2024-01-01-untitled.md")
        assert cli_runner.invoke(cli, ["check", "--strict"]).exit_code == 1

    def test_strict_clean_site(self, cli_runner: CliRunner) -> None:
        assert cli_runner.invoke(cli, ["check", "--strict"]).exit_code == 0

    def test_errors_only(self, cli_runner: CliRunner, site_root: Path) -> None:
        write_page(site_root, "again.html", title="Blog")
        warnings = json.loads(cli_runner.invoke(cli, ["--json", "check"]).stdout)["data"]
        errors = json.loads(cli_runner.invoke(cli, ["--json", "check", "--errors-only"]).stdout)["data"]
        assert warnings["count"] > 0
        assert all(i["severity"] == "warning" for i in warnings["issues"])
        assert errors["count"] == 0

    def test_min_severity_matches_errors_only(self, cli_runner: CliRunner, site_root: Path) -> None:
        write_post(site_root, "2024-01-01-untitled.md")
        write_page(site_root, "again.html", title="Blog")
        a = json.loads(cli_runner.invoke(cli, ["--json", "check", "--min-severity", "error"]).stdout)
        b = json.loads(cli_runner.invoke(cli, ["--json", "check", "--errors-only"]).stdout)
        assert a["data"] == b["data"]
        assert a["data"]["error_count"] == a["data"]["count"] == 1

    def test_invalid_severity(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["check", "--min-severity", "info"])
        assert result.exit_code == 2

    def test_fix(self, cli_runner: CliRunner, site_root: Path) -> None:
        (site_root / "_posts" / "2024-01-01-bare-post.md").write_text("Just text.\n")
        result = cli_runner.invoke(cli, ["check", "--fix"])
        assert result.exit_code == 0, result.output
        assert "fixes_applied: 2" in result.stdout
        assert cli_runner.invoke(cli, ["check", "--strict"]).exit_code == 0
