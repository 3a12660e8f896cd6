"""Unit tests for the eventscan CLI."""

import json

import pytest
from typer.testing import CliRunner

from eventscan import __version__
from eventscan.cli import app
from eventscan.samples import BROKEN_EVENT, VALID_EVENT


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path, monkeypatch):
    """Keep config search away from any .eventscan.json above the test run."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("eventscan.config.find_config_file", lambda: None)
    return tmp_path


class TestScanCLI:
    """Test the scan command."""

    def test_valid_event_from_stdin(self, runner):
        result = runner.invoke(app, ["scan"], input=json.dumps(VALID_EVENT))

        assert result.exit_code == 0
        assert "All checks passed" in result.stdout
        assert "No issues" in result.stdout

    def test_broken_event_from_file(self, runner, tmp_path):
        event_file = tmp_path / "event.json"
        event_file.write_text(json.dumps(BROKEN_EVENT), encoding="utf-8")

        result = runner.invoke(app, ["scan", str(event_file)])

        assert result.exit_code == 1
        assert "6 issues detected · 3 errors." in result.stdout
        assert "eventName" in result.stdout
        assert "Domain rules" in result.stdout

    def test_json_format(self, runner):
        result = runner.invoke(app, ["scan", "-", "--format", "json"], input=json.dumps(BROKEN_EVENT))

        assert result.exit_code == 1
        report = json.loads(result.stdout)
        assert report["passed"] is False
        assert report["counts"] == {"total": 6, "errors": 3, "warnings": 3}
        assert report["issues"][0] == {
            "category": "required",
            "field": "event_name",
            "message": 'Missing required field "event_name".',
            "severity": "error",
        }
        domain = [i for i in report["issues"] if i["category"] == "domain"]
        assert domain[0]["message"].endswith("[LOGIN, LOGOUT, PURCHASE, VIEW].")

    def test_markdown_format(self, runner):
        result = runner.invoke(app, ["scan", "--format", "markdown"], input=json.dumps(VALID_EVENT))

        assert result.exit_code == 0
        assert "# Event Scan Report" in result.stdout
        assert "**Passed:** yes" in result.stdout

    def test_warnings_only_exit_zero(self, runner):
        event = dict(VALID_EVENT, action_type="CLICK")

        result = runner.invoke(app, ["scan"], input=json.dumps(event))

        assert result.exit_code == 0
        assert "warnings only" in result.stdout

    def test_invalid_json(self, runner):
        result = runner.invoke(app, ["scan"], input="{not json")

        assert result.exit_code == 1
        assert "JSON error" in result.stdout
        assert "Cannot scan: invalid JSON." in result.stdout

    def test_array_input(self, runner):
        result = runner.invoke(app, ["scan"], input="[1, 2]")

        assert result.exit_code == 1
        assert "single JSON object" in result.stdout

    def test_blank_input(self, runner):
        result = runner.invoke(app, ["scan"], input="   \n")

        assert result.exit_code == 1
        assert "No event provided" in result.stdout

    def test_invalid_format(self, runner):
        result = runner.invoke(app, ["scan", "--format", "xml"], input="{}")

        assert result.exit_code == 1
        assert "Invalid format" in result.stdout

    def test_custom_config(self, runner, tmp_path):
        config_file = tmp_path / "rules.json"
        config_file.write_text(json.dumps({"requiredFields": ["id"]}), encoding="utf-8")

        result = runner.invoke(
            app, ["scan", "--config", str(config_file), "--format", "json"], input='{"name": "x"}'
        )

        assert result.exit_code == 1
        report = json.loads(result.stdout)
        assert [(i["field"], i["severity"]) for i in report["issues"]] == [("id", "error")]

    def test_missing_config_file(self, runner, tmp_path):
        result = runner.invoke(app, ["scan", "--config", str(tmp_path / "nope.json")], input="{}")

        assert result.exit_code == 1
        assert "Config file not found" in result.stdout

    def test_unreadable_event_file(self, runner, tmp_path):
        result = runner.invoke(app, ["scan", str(tmp_path / "missing.json")])

        assert result.exit_code == 1
        assert "Cannot read" in result.stdout

    def test_undecodable_event_file(self, runner, tmp_path):
        event_file = tmp_path / "event.json"
        event_file.write_bytes(b'{"a": "\xff"}')

        result = runner.invoke(app, ["scan", str(event_file)])

        assert result.exit_code == 1
        assert "Cannot read" in result.stdout
        assert not isinstance(result.exception, UnicodeDecodeError)

    def test_config_path_is_directory(self, runner, tmp_path):
        result = runner.invoke(app, ["scan", "--config", str(tmp_path)], input="{}")

        assert result.exit_code == 1
        assert "Failed to load config" in result.stdout


class TestExampleCLI:
    """Test the example command."""

    @pytest.mark.parametrize("name,event", [("valid", VALID_EVENT), ("broken", BROKEN_EVENT)])
    def test_prints_example(self, runner, name, event):
        result = runner.invoke(app, ["example", name])

        assert result.exit_code == 0
        assert json.loads(result.stdout) == event

    def test_unknown_example(self, runner):
        result = runner.invoke(app, ["example", "weird"])

        assert result.exit_code == 1
        assert "Unknown example" in result.stdout


class TestConfigCLI:
    """Test the config and version commands."""

    def test_shows_defaults(self, runner):
        result = runner.invoke(app, ["config"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["namingConvention"] == "snake_case"
        assert data["requiredFields"][0] == "event_name"

    def test_version(self, runner):
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.stdout
