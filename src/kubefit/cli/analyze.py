# src/kubefit/cli/analyze.py
"""
Implements the `analyze` command: DaemonSet placement analysis of every node.
"""

import asyncio
import logging
import sys
import traceback
from pathlib import Path
from typing import Optional

import typer
from typing_extensions import Annotated

from ..core.analyzer import build_request
from ..core.exceptions import ClusterUnreachableError, KubeconfigNotFoundError
from ..core.factory import get_analyzer
from ..exporters.csv_exporter import CSVExporter
from ..exporters.json_exporter import JSONExporter
from ..models.cli import ClusterOptions, OutputOptions, RequestOptions
from ..models.resources import ClusterReport
from ..reporters.console_reporter import ConsoleReporter

logger = logging.getLogger(__name__)

app = typer.Typer(help="Analyze cluster nodes for DaemonSet placement.", add_completion=False)


async def handle_export(report: ClusterReport, output_options: OutputOptions):
    """Handles writing the report to a file."""
    if output_options.format == "csv":
        exporter = CSVExporter()
    else:
        exporter = JSONExporter()

    output_path = Path(output_options.output_path or Path.cwd() / exporter.DEFAULT_FILENAME)

    try:
        written_path = await exporter.export(report, str(output_path))
    except Exception as e:
        logger.error(f"Failed to export report to {output_path}: {e}")
        logger.error(traceback.format_exc())
        raise typer.Exit(code=1)

    logger.info(f"Successfully exported report to {written_path}")
    print(f"Report exported to: {written_path}", file=sys.stderr)


@app.callback(invoke_without_command=True)
def analyze(
    ctx: typer.Context,
    kubeconfig: Annotated[
        Optional[Path],
        typer.Option("--kubeconfig", "-k", help="Path to kubeconfig (default: $KUBECONFIG or ~/.kube/config)."),
    ] = None,
    cpu: Annotated[
        Optional[str], typer.Option("--cpu", "-c", help="DaemonSet CPU request (default: 100m).")
    ] = None,
    memory: Annotated[
        Optional[str], typer.Option("--memory", "-m", help="DaemonSet memory request (default: 500Mi).")
    ] = None,
    workers: Annotated[
        Optional[int], typer.Option("--workers", help="Maximum number of nodes analyzed concurrently.")
    ] = None,
    output_format: Annotated[
        Optional[str],
        typer.Option(
            "--output",
            help="Output format (json/csv). If set, writes to a file instead of the console.",
            case_sensitive=False,
        ),
    ] = None,
    output_path: Annotated[
        Optional[Path],
        typer.Option(
            "--output-path",
            help="Output file path. Default: './kubefit-report.json' or './kubefit-summary.csv'",
            exists=False,
            dir_okay=False,
            writable=True,
        ),
    ] = None,
):
    """
    Analyze Kubernetes cluster nodes for DaemonSet placement.

    Shows taints, available resources and Helm install guidance.
    """
    if ctx.invoked_subcommand is not None:
        return

    cluster = ClusterOptions(kubeconfig=kubeconfig, workers=workers)
    request_options = RequestOptions(cpu=cpu, memory=memory)
    output = OutputOptions(output_format=output_format, output_path=output_path)

    try:
        kubeconfig_path = cluster.resolve_kubeconfig()
    except KubeconfigNotFoundError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    request = build_request(request_options.cpu, request_options.memory)

    async def _analyze_async():
        analyzer = get_analyzer(kubeconfig=kubeconfig_path, max_workers=cluster.workers)
        try:
            report = await analyzer.run(request)
        finally:
            await analyzer.close()

        if output.is_enabled:
            await handle_export(report, output)
        else:
            ConsoleReporter().report(report)

    try:
        asyncio.run(_analyze_async())
    except ClusterUnreachableError as e:
        logger.error("Placement analysis aborted: %s", e)
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    except typer.Exit:
        raise
    except Exception as e:
        logger.error(f"An unexpected error occurred: {e}")
        logger.error("Placement analysis failed: %s", traceback.format_exc())
        raise typer.Exit(code=1)
