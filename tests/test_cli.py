"""
Tests for the CLI interface.
"""
from datetime import date, timedelta
from unittest.mock import patch

import pytest
from rich.console import Console
from typer.testing import CliRunner

from conftest import assistant_entry, write_session

from claude_token_tracker.cli.main import app, EXIT_CODE_PASS, EXIT_CODE_FAIL
from claude_token_tracker.demo.seed_demo_data import write_demo_logs

runner = CliRunner()

MY_PROJECT = "C:\\Users\\dev\\Repos\\my-project"


@pytest.fixture(autouse=True)
def wide_console():
    """Render tables wide enough that cells are never wrapped."""
    with patch('claude_token_tracker.cli.main.console', Console(width=200)):
        yield


@pytest.fixture
def demo_dir(tmp_path):
    """Demo session logs dated today and yesterday."""
    return str(write_demo_logs(tmp_path / "projects", date.today()))


@pytest.fixture
def missing_dir(tmp_path):
    return str(tmp_path / "does-not-exist")


class TestCLI:
    """Test CLI commands."""

    def test_no_command_prints_hint(self, demo_dir):
        """Running without a command points at --help."""
        result = runner.invoke(app, ["--projects-dir", demo_dir])

        assert result.exit_code == EXIT_CODE_PASS
        assert "--help" in result.output

    def test_today_all_projects(self, demo_dir):
        """Today's usage across projects in tokens."""
        result = runner.invoke(app, ["--projects-dir", demo_dir, "today"])

        assert result.exit_code == EXIT_CODE_PASS
        assert "Claude: 2.0k in / 500 out" in result.output
        assert "Requests: 2" in result.output

    def test_today_with_unit_override(self, demo_dir):
        """The unit option replaces the configured unit."""
        result = runner.invoke(app, ["--projects-dir", demo_dir, "today", "--unit", "cost_usd"])

        assert result.exit_code == EXIT_CODE_PASS
        # (2000 * 5 + 500 * 25 + 2000 * 10 + 8000 * 0.5) / 1M
        assert "Claude: $0.0465" in result.output

    def test_today_for_workspace_without_logs(self, demo_dir):
        """A workspace with no usage today is not an error."""
        result = runner.invoke(app, ["--projects-dir", demo_dir, "today", "--workspace", "/home/dev/src/api-server"])

        assert result.exit_code == EXIT_CODE_PASS
        assert "No usage today" in result.output

    def test_today_without_logs(self, missing_dir):
        """No projects directory shows no usage."""
        result = runner.invoke(app, ["--projects-dir", missing_dir, "today"])

        assert result.exit_code == EXIT_CODE_PASS
        assert "No usage today" in result.output

    def test_daily(self, demo_dir):
        """Each day with usage gets a row."""
        result = runner.invoke(app, ["--projects-dir", demo_dir, "daily"])

        assert result.exit_code == EXIT_CODE_PASS
        assert date.today().isoformat() in result.output
        assert (date.today() - timedelta(days=1)).isoformat() in result.output
        assert "Token Count" in result.output

    def test_daily_without_logs(self, missing_dir):
        """Missing logs give a friendly message."""
        result = runner.invoke(app, ["--projects-dir", missing_dir, "daily"])

        assert result.exit_code == EXIT_CODE_PASS
        assert "No Claude projects directory found" in result.output

    def test_models_for_workspace(self, demo_dir):
        """Per-model totals for one project with a grand total."""
        result = runner.invoke(app, ["--projects-dir", demo_dir, "models", "--workspace", MY_PROJECT])

        assert result.exit_code == EXIT_CODE_PASS
        assert "my project" in result.output
        assert "Opus 4.6" in result.output
        assert "Sonnet 4.5" in result.output
        assert "Total" in result.output
        assert "kWh" in result.output

    def test_models_for_unknown_workspace(self, demo_dir):
        """A workspace without logs shows an empty state."""
        result = runner.invoke(app, ["--projects-dir", demo_dir, "models", "--workspace", "/tmp/elsewhere"])

        assert result.exit_code == EXIT_CODE_PASS
        assert "No usage data for this project" in result.output

    def test_projects_breakdown(self, demo_dir):
        """Every project with usage is listed with totals."""
        result = runner.invoke(app, ["--projects-dir", demo_dir, "projects"])

        assert result.exit_code == EXIT_CODE_PASS
        assert "my project" in result.output
        assert "api server" in result.output
        assert "Day Total" in result.output
        assert "Project Total" in result.output
        assert "All Projects Total" in result.output
        assert "Input: 6,500" in result.output
        assert "Requests: 4" in result.output

    def test_status_reports_skipped_lines(self, demo_dir):
        """Status shows what was read and skipped."""
        result = runner.invoke(app, ["--projects-dir", demo_dir, "status"])

        assert result.exit_code == EXIT_CODE_PASS
        assert "Projects with usage: 2" in result.output
        assert "Session files read: 3" in result.output
        assert "1 malformed lines" in result.output

    def test_status_without_logs(self, missing_dir):
        """Status without logs is not a failure."""
        result = runner.invoke(app, ["--projects-dir", missing_dir, "status"])

        assert result.exit_code == EXIT_CODE_PASS
        assert "No Claude projects directory found" in result.output

    def test_config_display_unit(self, demo_dir, tmp_path):
        """The configured display unit is used."""
        config_path = tmp_path / "tracker.yaml"
        config_path.write_text("display_unit: energy_kwh\n", encoding="utf-8")

        result = runner.invoke(app, ["--config", str(config_path), "--projects-dir", demo_dir, "today"])

        assert result.exit_code == EXIT_CODE_PASS
        assert "kWh" in result.output

    def test_config_projects_dir(self, demo_dir, tmp_path):
        """The projects directory can come from the config file."""
        config_path = tmp_path / "tracker.yaml"
        config_path.write_text(f"projects_dir: '{demo_dir}'\n", encoding="utf-8")

        result = runner.invoke(app, ["--config", str(config_path), "status"])

        assert result.exit_code == EXIT_CODE_PASS
        assert "Projects with usage: 2" in result.output

    def test_invalid_config_fails(self, tmp_path):
        """A bad config file exits with the failure code."""
        config_path = tmp_path / "tracker.yaml"
        config_path.write_text("display_unit: joules\n", encoding="utf-8")

        result = runner.invoke(app, ["--config", str(config_path), "today"])

        assert result.exit_code == EXIT_CODE_FAIL
        assert "Error loading config" in result.output

    def test_missing_config_fails(self, tmp_path):
        """A missing config file exits with the failure code."""
        result = runner.invoke(app, ["--config", str(tmp_path / "nope.yaml"), "today"])

        assert result.exit_code == EXIT_CODE_FAIL


class TestMarkupInNames:
    """Paths and project names are printed literally."""

    def test_unknown_workspace_with_brackets(self, demo_dir):
        """A closing-tag-like folder name does not break rendering."""
        result = runner.invoke(app, ["--projects-dir", demo_dir, "models", "--workspace", "/tmp/[/]weird"])

        assert result.exit_code == EXIT_CODE_PASS
        assert "[/]weird" in result.output
        assert "No usage data for this project" in result.output

    def test_project_name_with_style_tag(self, tmp_path):
        """A project called like a style tag is shown as text."""
        root = tmp_path / "projects"
        write_session(root / "-work-Repos-[red]app" / "s.jsonl", [assistant_entry()])

        models_result = runner.invoke(app, ["--projects-dir", str(root), "models", "--workspace", "/work/Repos/[red]app"])
        projects_result = runner.invoke(app, ["--projects-dir", str(root), "projects"])

        assert models_result.exit_code == EXIT_CODE_PASS
        assert "[red]app" in models_result.output
        assert projects_result.exit_code == EXIT_CODE_PASS
        assert "[red]app" in projects_result.output
