"""Tests for CLI commands using Click's CliRunner."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

from click.testing import CliRunner

from sbomfix import __version__
from sbomfix.cli import main
from sbomfix.errors import SbomNotFoundError


def test_main_help():
    runner = CliRunner()
    result = runner.invoke(main, ["--help"])
    assert result.exit_code == 0
    assert "sbomfix" in result.output
    assert "generate" in result.output
    assert "scan" in result.output
    assert "server" in result.output


def test_main_version():
    runner = CliRunner()
    result = runner.invoke(main, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_scan_help():
    runner = CliRunner()
    result = runner.invoke(main, ["scan", "--help"])
    assert result.exit_code == 0
    assert "--advanced" in result.output


def test_generate_requires_source():
    runner = CliRunner()
    result = runner.invoke(main, ["generate"])
    assert result.exit_code != 0


@patch("sbomfix.cli.scan.RemediationService.from_config")
def test_scan_without_sbom_exits_1(mock_from_config: MagicMock):
    service = MagicMock()
    service.scan.side_effect = SbomNotFoundError()
    mock_from_config.return_value = service

    result = CliRunner().invoke(main, ["scan"])
    assert result.exit_code == 1
    service.close.assert_called_once()


@patch("sbomfix.cli.scan.RemediationService.from_config")
def test_scan_writes_output(mock_from_config: MagicMock, tmp_path, service):
    service.store.save("{}")
    mock_from_config.return_value = service
    out = tmp_path / "fix.sh"

    result = CliRunner().invoke(main, ["scan", "--output", str(out)])
    assert result.exit_code == 0
    assert out.read_text() == "pip install --upgrade requests==2.31.0"


@patch("sbomfix.cli.generate.RemediationService.from_config")
def test_generate_calls_service(mock_from_config: MagicMock, service):
    mock_from_config.return_value = service
    result = CliRunner().invoke(main, ["generate", "alpine:3.19"])
    assert result.exit_code == 0
    service.resolver.resolve.assert_called_once_with("alpine:3.19")
