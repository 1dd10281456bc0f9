# src/kubefit/collectors/base_collector.py
"""
Abstract base class for the read-only cluster collectors.

Collectors never raise on API failures: they log and return an empty result,
leaving it to the analyzer to decide whether absence is fatal (node
enumeration) or a degraded feature (metrics, priority classes).
"""

from abc import ABC, abstractmethod
from typing import Any, Optional


class BaseCollector(ABC):
    """
    Abstract Base Class for all cluster collectors.
    """

    def __init__(self, kubeconfig: Optional[str] = None):
        self.kubeconfig = kubeconfig
        self._api = None

    @abstractmethod
    async def _create_client(self):
        """Returns a configured API client, or None when no config could be loaded."""
        pass

    async def _ensure_client(self):
        """Lazily initialize the Kubernetes client using the centralized loader."""
        if self._api:
            return self._api

        self._api = await self._create_client()
        return self._api

    @abstractmethod
    async def collect(self, *args, **kwargs) -> Any:
        """
        Fetch data from the cluster and return it as kubefit models.
        """
        pass

    async def close(self):
        """Close the Kubernetes API client if it exists."""
        if self._api:
            await self._api.api_client.close()
            self._api = None
