# src/kubefit/models/cli.py
"""
Data models for kubefit CLI command options.
They validate raw CLI parameters before any cluster call is made.
"""

import os
from pathlib import Path
from typing import Optional

import typer

from ..core.config import config
from ..core.exceptions import KubeconfigNotFoundError


class ClusterOptions:
    """Which cluster to analyze and how many nodes to analyze at once."""

    def __init__(self, kubeconfig: Optional[Path] = None, workers: Optional[int] = None):
        self.kubeconfig = str(kubeconfig.expanduser()) if kubeconfig else None
        self.workers = workers
        self._validate()

    def _validate(self):
        if self.workers is not None and self.workers < 1:
            raise typer.BadParameter("--workers must be at least 1.")

    def resolve_kubeconfig(self) -> Optional[str]:
        """
        Returns the kubeconfig to load: the explicit one, else the configured
        default when that file exists, else None (in-cluster configuration).

        Raises:
            KubeconfigNotFoundError: If an explicit kubeconfig does not exist.
        """
        if self.kubeconfig:
            if not os.path.isfile(self.kubeconfig):
                raise KubeconfigNotFoundError(f"kubeconfig not found at {self.kubeconfig}")
            return self.kubeconfig
        if os.path.isfile(config.KUBECONFIG):
            return config.KUBECONFIG
        return None


class RequestOptions:
    """The DaemonSet pod request to evaluate."""

    def __init__(self, cpu: Optional[str] = None, memory: Optional[str] = None):
        self.cpu = cpu if cpu is not None else config.DS_CPU_REQUEST
        self.memory = memory if memory is not None else config.DS_MEMORY_REQUEST


class OutputOptions:
    """File export options. Console output is used when no format is given."""

    FORMATS = ("json", "csv")

    def __init__(self, output_format: Optional[str] = None, output_path: Optional[Path] = None):
        self.format = output_format.lower() if output_format else None
        self.output_path = output_path
        self._validate()

    def _validate(self):
        if self.format and self.format not in self.FORMATS:
            raise typer.BadParameter(f"Invalid output format '{self.format}'. Use 'json' or 'csv'.")
        if self.output_path and not self.format:
            raise typer.BadParameter("--output-path requires --output.")

    @property
    def is_enabled(self) -> bool:
        return self.format is not None
