# src/kubefit/collectors/metrics_collector.py
"""
Collects live pod usage from the metrics.k8s.io API (metrics-server).

The dataset is optional: when metrics-server is not installed or returns no
rows, ``collect`` returns ``None`` and the over-provisioning report is
suppressed instead of failing the run.
"""

import logging
from typing import List, Optional

from kubernetes_asyncio.client.rest import ApiException

from ..core.k8s_client import get_custom_objects_api
from ..models.resources import PodUsageRecord
from ..utils.k8s_utils import parse_cpu_usage, parse_memory_usage
from .base_collector import BaseCollector

logger = logging.getLogger(__name__)

METRICS_GROUP = "metrics.k8s.io"
METRICS_VERSION = "v1beta1"


class MetricsCollector(BaseCollector):
    """Reads per-pod CPU and memory usage summed over containers."""

    async def _create_client(self):
        return await get_custom_objects_api(self.kubeconfig)

    async def collect(self) -> Optional[List[PodUsageRecord]]:
        api = await self._ensure_client()
        if not api:
            logger.debug("Kubernetes client not configured; skipping pod metrics.")
            return None

        try:
            data = await api.list_cluster_custom_object(METRICS_GROUP, METRICS_VERSION, "pods")
        except ApiException as e:
            logger.warning("Pod metrics unavailable (metrics-server not reachable): %s", e.reason)
            return None
        except Exception as e:
            logger.warning("Unexpected error while reading pod metrics: %s", e)
            return None

        records = []
        for item in (data or {}).get("items", []):
            metadata = item.get("metadata", {})
            name = metadata.get("name")
            namespace = metadata.get("namespace")
            if not name or not namespace:
                continue
            containers = item.get("containers") or []
            records.append(
                PodUsageRecord(
                    namespace=namespace,
                    name=name,
                    cpu_used=sum(parse_cpu_usage(c.get("usage", {}).get("cpu")) for c in containers),
                    memory_used=sum(parse_memory_usage(c.get("usage", {}).get("memory")) for c in containers),
                )
            )

        if not records:
            logger.warning("metrics.k8s.io returned no pod metrics.")
            return None

        logger.debug("Collected usage for %d pods.", len(records))
        return records
