# src/kubefit/reporters/base_reporter.py
"""
Base class for presenting a ClusterReport.
"""
from abc import ABC, abstractmethod

from ..models.resources import ClusterReport


class BaseReporter(ABC):
    @abstractmethod
    def report(self, report: ClusterReport):
        """Renders a finished placement analysis."""
        pass
