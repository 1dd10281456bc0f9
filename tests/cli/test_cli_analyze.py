# tests/cli/test_cli_analyze.py
"""
Tests for the `kubefit analyze` command and the version flags.
"""

import json

import pytest
from typer.testing import CliRunner

from kubefit import __version__
from kubefit.cli import app
from kubefit.core.exceptions import ClusterUnreachableError

runner = CliRunner()


@pytest.fixture
def mock_analyzer(mocker, sample_report):
    analyzer = mocker.MagicMock()
    analyzer.run = mocker.AsyncMock(return_value=sample_report)
    analyzer.close = mocker.AsyncMock()
    factory = mocker.patch("kubefit.cli.analyze.get_analyzer", return_value=analyzer)
    analyzer.factory = factory
    return analyzer


@pytest.fixture
def mock_reporter(mocker):
    return mocker.patch("kubefit.cli.analyze.ConsoleReporter")


def test_analyze_renders_report_and_exits_zero(mock_analyzer, mock_reporter, sample_report):
    # Unschedulable nodes are a finding, not a failure.
    result = runner.invoke(app, ["analyze"])

    assert result.exit_code == 0
    mock_analyzer.factory.assert_called_once_with(kubeconfig=None, max_workers=None)
    mock_reporter.return_value.report.assert_called_once_with(sample_report)
    mock_analyzer.close.assert_awaited_once()


def test_analyze_passes_request_and_workers(mock_analyzer, mock_reporter, tmp_path):
    kubeconfig = tmp_path / "config"
    kubeconfig.write_text("apiVersion: v1\n")

    result = runner.invoke(app, ["analyze", "-k", str(kubeconfig), "-c", "250m", "-m", "1Gi", "--workers", "3"])

    assert result.exit_code == 0
    mock_analyzer.factory.assert_called_once_with(kubeconfig=str(kubeconfig), max_workers=3)
    request = mock_analyzer.run.await_args.args[0]
    assert (request.cpu_raw, request.cpu) == ("250m", 250)
    assert (request.memory_raw, request.memory) == ("1Gi", 1024)


def test_analyze_missing_kubeconfig_exits_one(mock_analyzer, mock_reporter):
    result = runner.invoke(app, ["analyze", "--kubeconfig", "/nope/kubeconfig"])

    assert result.exit_code == 1
    assert "kubeconfig not found at /nope/kubeconfig" in result.output
    mock_analyzer.run.assert_not_called()


def test_analyze_unreachable_cluster_exits_one(mock_analyzer, mock_reporter):
    mock_analyzer.run.side_effect = ClusterUnreachableError("No nodes found or unable to connect to cluster")

    result = runner.invoke(app, ["analyze"])

    assert result.exit_code == 1
    assert "Error: No nodes found or unable to connect to cluster" in result.output
    mock_analyzer.close.assert_awaited_once()
    mock_reporter.return_value.report.assert_not_called()


def test_analyze_exports_json(mock_analyzer, mock_reporter, tmp_path):
    out = tmp_path / "report.json"

    result = runner.invoke(app, ["analyze", "--output", "json", "--output-path", str(out)])

    assert result.exit_code == 0
    assert json.loads(out.read_text(encoding="utf-8"))["summary"][0]["node"] == "gpu-node"
    assert f"Report exported to: {out}" in result.output
    mock_reporter.return_value.report.assert_not_called()


def test_analyze_exports_csv_to_default_path(mock_analyzer, mock_reporter, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    result = runner.invoke(app, ["analyze", "--output", "CSV"])

    assert result.exit_code == 0
    assert (tmp_path / "kubefit-summary.csv").exists()


@pytest.mark.parametrize(
    "args",
    [
        ["analyze", "--output", "xml"],
        ["analyze", "--output-path", "report.json"],
        ["analyze", "--workers", "0"],
    ],
)
def test_analyze_rejects_invalid_options(mock_analyzer, mock_reporter, args):
    result = runner.invoke(app, args)

    assert result.exit_code == 2
    mock_analyzer.run.assert_not_called()


def test_version_command():
    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert f"kubefit version: {__version__}" in result.output


def test_version_flag():
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert f"kubefit version: {__version__}" in result.output


def test_log_level_override(mocker, mock_analyzer, mock_reporter):
    configure = mocker.patch("kubefit.cli.main.configure_logging")

    result = runner.invoke(app, ["--log-level", "debug", "analyze"])

    assert result.exit_code == 0
    configure.assert_called_once_with("debug")
    mock_reporter.return_value.report.assert_called_once()
