"""Tests for the root cfxlink CLI."""

import pytest
from click.testing import CliRunner

from cfxlink import __version__
from cfxlink.cli import cli


def test_cli_help(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "cfxlink" in result.output


def test_cli_version(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


@pytest.mark.usefixtures("_isolated_cwd")
def test_cli_no_args(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, [])
    assert result.exit_code == 0
    assert "Usage" in result.output


# --- Global flags ---


@pytest.mark.parametrize("flag", ["--json", "-q", "-v", "--log-json"])
def test_global_flag_accepted(cli_runner: CliRunner, flag: str) -> None:
    result = cli_runner.invoke(cli, [flag, "--version"])
    assert result.exit_code == 0


def test_config_option_accepted(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["-c", "/tmp/missing-cfxlink.toml", "--version"])
    assert result.exit_code == 0


@pytest.mark.usefixtures("_isolated_cwd")
def test_invalid_config_is_reported(cli_runner: CliRunner, tmp_path) -> None:
    (tmp_path / "cfxlink.toml").write_text("[references\n")
    result = cli_runner.invoke(cli, ["label", "top"])
    assert result.exit_code == 1
    assert "Invalid TOML" in result.output


@pytest.mark.usefixtures("_isolated_cwd")
def test_unknown_command(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["frobnicate"])
    assert result.exit_code == 2
