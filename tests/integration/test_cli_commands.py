"""
Tests for CLI commands.

These tests verify the command-line interface functionality including:
- simulate writing a reading stream
- analyze replaying a stream in text and JSON form
- config show/set/unset round trips
"""

import json

import pytest

from click.testing import CliRunner

from rovocs.cli import cli
from rovocs.readings import write_readings
from rovocs.simulation import generate_session
from tests.helpers.synthetic_data import START, constant_stream


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def breath_csv(tmp_path):
    """A 5-minute simulated stream with two exhalations."""
    path = tmp_path / "breaths.csv"
    readings = generate_session(
        300.0, breath_offsets=(120.0, 200.0), start=START, seed=7
    )
    write_readings(readings, path)
    return path


class TestVersion:
    def test_version(self, cli_runner):
        result = cli_runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "rovocs" in result.output


class TestSimulate:
    def test_writes_csv(self, cli_runner, tmp_path):
        output = tmp_path / "sim.csv"

        result = cli_runner.invoke(
            cli,
            ["simulate", str(output), "--duration", "20", "--seed", "1"],
        )

        assert result.exit_code == 0, result.output
        assert "Wrote 10 readings" in result.output
        assert output.read_text().startswith("id,tvoc,eco2")

    def test_rejects_non_positive_interval(self, cli_runner, tmp_path):
        result = cli_runner.invoke(
            cli, ["simulate", str(tmp_path / "x.csv"), "--interval", "0"]
        )
        assert result.exit_code != 0


class TestAnalyze:
    def test_text_report(self, cli_runner, breath_csv):
        result = cli_runner.invoke(cli, ["analyze", str(breath_csv)])

        assert result.exit_code == 0, result.output
        assert "Processed 150 readings" in result.output
        assert "Detected 2 breath(s)" in result.output
        assert "Breath #2" in result.output
        assert "Quality:" in result.output

    def test_json_report(self, cli_runner, breath_csv):
        result = cli_runner.invoke(cli, ["analyze", str(breath_csv), "--json"])

        assert result.exit_code == 0, result.output
        payload = json.loads(result.output)
        assert payload["readings"] == 150
        assert payload["baseline"]["is_stable"] is True
        assert len(payload["breaths"]) == 2

        first = payload["breaths"][0]
        assert first["event"]["is_complete"] is True
        assert [m["channel"] for m in first["metrics"]] == ["tvoc", "eco2"]
        assert first["quality"]["overall"] in {"excellent", "fair", "poor"}
        assert payload["open_event"] is None

    def test_json_without_quality(self, cli_runner, breath_csv):
        result = cli_runner.invoke(
            cli, ["analyze", str(breath_csv), "--json", "--no-quality"]
        )

        payload = json.loads(result.output)
        assert "quality" not in payload["breaths"][0]

    def test_short_stream_never_stabilizes(self, cli_runner, tmp_path):
        path = tmp_path / "short.csv"
        write_readings(constant_stream(10), path)

        result = cli_runner.invoke(cli, ["analyze", str(path)])

        assert result.exit_code == 0
        assert "never stabilized" in result.output

    def test_malformed_csv_fails(self, cli_runner, tmp_path):
        path = tmp_path / "bad.csv"
        path.write_text("id,tvoc\n1,50\n")

        result = cli_runner.invoke(cli, ["analyze", str(path)])

        assert result.exit_code != 0
        assert "missing column" in result.output

    def test_uses_configured_thresholds(self, cli_runner, breath_csv):
        cli_runner.invoke(cli, ["config", "set", "breath_threshold", "5.0"])

        result = cli_runner.invoke(cli, ["analyze", str(breath_csv), "--json"])

        assert json.loads(result.output)["breaths"] == []

    def test_invalid_config_fails(self, cli_runner, breath_csv, config_path):
        config_path.write_text("[analyzer]\nbogus = 1\n")

        result = cli_runner.invoke(cli, ["analyze", str(breath_csv)])

        assert result.exit_code != 0
        assert "bogus" in result.output


class TestConfigCommands:
    def test_show_defaults(self, cli_runner):
        result = cli_runner.invoke(cli, ["config", "show"])

        assert result.exit_code == 0
        assert "No config file" in result.output
        assert "breath_threshold = 0.15  (default)" in result.output

    def test_set_show_unset(self, cli_runner, config_path):
        result = cli_runner.invoke(cli, ["config", "set", "breath_threshold", "0.2"])
        assert result.exit_code == 0, result.output
        assert "breath_threshold = 0.2" in result.output
        assert config_path.exists()

        result = cli_runner.invoke(cli, ["config", "show"])
        assert "breath_threshold = 0.2\n" in result.output

        result = cli_runner.invoke(cli, ["config", "unset", "breath_threshold"])
        assert "Removed breath_threshold" in result.output
        assert not config_path.exists()

    def test_set_invalid_value(self, cli_runner):
        result = cli_runner.invoke(
            cli, ["config", "set", "baseline_window_size", "-3"]
        )
        assert result.exit_code != 0
        assert "baseline_window_size" in result.output

    def test_unset_unknown(self, cli_runner):
        result = cli_runner.invoke(cli, ["config", "unset", "breath_threshold"])
        assert "was not configured" in result.output
