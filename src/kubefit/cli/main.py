# src/kubefit/cli/main.py
"""
Entry point of the kubefit CLI: logging setup, version reporting and the
`analyze` sub-command.
"""

import logging
from typing import Optional

import typer
from typing_extensions import Annotated

from ..core.config import config
from . import analyze

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"

logger = logging.getLogger(__name__)


def configure_logging(level: Optional[str] = None):
    """Configures the root logger; an explicit level replaces any earlier setup."""
    logging.basicConfig(level=(level or config.LOG_LEVEL).upper(), format=LOG_FORMAT, force=level is not None)


configure_logging()


app = typer.Typer(
    name="kubefit",
    help="Check whether a DaemonSet fits on every node of a Kubernetes cluster before deploying it.",
    add_completion=False,
)


def _echo_version():
    from .. import __version__

    typer.echo(f"kubefit version: {__version__}")


def version_callback(value: bool):
    if value:
        _echo_version()
        raise typer.Exit()


@app.command()
def version():
    """
    Show the version of kubefit.
    """
    _echo_version()


@app.callback()
def main(
    version: Annotated[
        Optional[bool],
        typer.Option("--version", "-v", callback=version_callback, is_eager=True, help="Show the version and exit."),
    ] = None,
    log_level: Annotated[
        Optional[str],
        typer.Option("--log-level", help="Override LOG_LEVEL for this run (DEBUG, INFO, WARNING, ...)."),
    ] = None,
):
    """
    Pre-deployment DaemonSet placement checks for Kubernetes.
    """
    if log_level:
        configure_logging(log_level)
        logger.debug("Log level set to %s.", log_level.upper())


app.add_typer(analyze.app, name="analyze")


if __name__ == "__main__":
    app()
