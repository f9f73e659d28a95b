"""End-to-End-Tests der Kommandozeile über click.testing.CliRunner."""

import pytest
from click.testing import CliRunner

from main import cli


@pytest.fixture
def runner(tmp_path, monkeypatch):
    """Arbeitsverzeichnis mit Einstellungen und Demo-Daten (Schule S0001)."""
    monkeypatch.chdir(tmp_path)
    runner = CliRunner()
    result = runner.invoke(cli, ["setup"])
    assert result.exit_code == 0, result.output
    result = runner.invoke(cli, ["generate", "--seed", "1"])
    assert result.exit_code == 0, result.output
    return runner


def test_help():
    result = CliRunner().invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "schedule" in result.output


def test_without_setup_aborts(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    result = CliRunner().invoke(cli, ["range", "S0001"])
    assert result.exit_code == 1
    assert "Keine Konfiguration" in result.output


class TestLevelCommands:
    def test_show_default(self, runner):
        result = runner.invoke(cli, ["level", "show", "S0001", "BASIC"])
        assert result.exit_code == 0, result.output
        assert "Mittagspause" in result.output

    def test_generate_registers_school(self, runner):
        result = runner.invoke(cli, ["config", "show"])
        assert "S0001" in result.output

    def test_invalid_block_rejected(self, runner):
        result = runner.invoke(cli, ["level", "save", "S0001", "BASIC", "--block", "50"])
        assert result.exit_code == 1
        assert "Vielfaches" in result.output

    def test_malformed_time_rejected(self, runner):
        result = runner.invoke(cli, ["level", "save", "S0001", "BASIC", "--start", "8"])
        assert result.exit_code == 1

    def test_unmanaged_school_denied(self, runner):
        result = runner.invoke(cli, ["level", "show", "S9999", "BASIC"])
        assert result.exit_code == 1
        assert "Fehler" in result.output

    def test_second_save_marks_schedules(self, runner):
        first = runner.invoke(cli, ["level", "save", "S0001", "BASIC", "--start", "08:30"])
        assert first.exit_code == 0, first.output
        assert "veraltet" not in first.output

        second = runner.invoke(cli, ["level", "save", "S0001", "BASIC", "--start", "09:00"])
        assert second.exit_code == 0, second.output
        assert "16 Stundenpläne als veraltet markiert" in second.output

        stats = runner.invoke(cli, ["schedule", "stats", "S0001"])
        assert stats.exit_code == 0
        assert "67%" in stats.output

    def test_range_from_level_configs(self, runner):
        runner.invoke(cli, ["level", "save", "S0001", "MIDDLE", "--start", "07:30"])
        result = runner.invoke(cli, ["range", "S0001"])
        assert result.exit_code == 0
        assert "07:30" in result.output
        assert "level_configs" in result.output


def test_validate_generated_data(runner):
    result = runner.invoke(cli, ["validate"])
    assert result.exit_code == 0, result.output
    assert "KONSISTENT" in result.output
