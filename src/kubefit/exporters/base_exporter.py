from __future__ import annotations

from abc import ABC, abstractmethod

from ..models.resources import ClusterReport


class BaseExporter(ABC):
    """Abstract base class for file exporters of a cluster report.

    Subclasses provide a DEFAULT_FILENAME and implement `export`.
    """

    DEFAULT_FILENAME: str = "kubefit-report"

    @abstractmethod
    async def export(self, report: ClusterReport, path: str | None = None) -> str:
        """Write the report to disk. Return the written path."""
        raise NotImplementedError()
