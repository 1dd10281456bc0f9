# src/kubefit/collectors/pod_collector.py
"""
Collects resource 'request' data (CPU, memory) for the pods bound to a node
from the Kubernetes API.
"""

import logging
from typing import List

from kubernetes_asyncio.client.rest import ApiException

from ..core.k8s_client import get_core_v1_api
from ..models.resources import PodRequestRecord, ResourceKind, ResourceQuantity
from ..utils.k8s_utils import sum_requests
from .base_collector import BaseCollector

logger = logging.getLogger(__name__)

TERMINAL_PHASES = ("Succeeded", "Failed")


class PodCollector(BaseCollector):
    """
    Connects to the K8s API to find the summed container resource requests
    of every pod scheduled on a node.
    """

    async def _create_client(self):
        api = await get_core_v1_api(self.kubeconfig)
        if api:
            logger.debug("PodCollector initialized with centralized config.")
        else:
            logger.warning("PodCollector could not initialize Kubernetes client.")
        return api

    async def collect(self, node_name: str) -> List[PodRequestRecord]:
        """
        Fetches all pods on ``node_name`` and sums their container requests.
        Pods without any request are kept with zero totals.
        """
        records: List[PodRequestRecord] = []
        api = await self._ensure_client()

        # If there's no configured Kubernetes client, return empty list.
        if not api:
            logger.debug("Kubernetes client not configured; skipping pod collection.")
            return records

        try:
            pod_list = await api.list_pod_for_all_namespaces(
                field_selector=f"spec.nodeName={node_name}", watch=False
            )
        except ApiException as e:
            logger.warning("Kubernetes API error while listing pods on node '%s': %s", node_name, e)
            return []
        except Exception as e:
            logger.error(f"Error listing pods on node '{node_name}': {e}", exc_info=True)
            return []

        for pod in pod_list.items or []:
            containers = (pod.spec.containers if pod.spec else None) or []
            cpu_requests = []
            memory_requests = []
            for container in containers:
                requests = (container.resources.requests if container.resources else None) or {}
                cpu_requests.append(requests.get("cpu"))
                memory_requests.append(requests.get("memory"))

            records.append(
                PodRequestRecord(
                    namespace=pod.metadata.namespace,
                    name=pod.metadata.name,
                    phase=pod.status.phase if pod.status else None,
                    cpu=ResourceQuantity(kind=ResourceKind.CPU, value=sum_requests(cpu_requests, ResourceKind.CPU)),
                    memory=ResourceQuantity(
                        kind=ResourceKind.MEMORY, value=sum_requests(memory_requests, ResourceKind.MEMORY)
                    ),
                )
            )

        logger.debug(f"Collected {len(records)} pod request records on node '{node_name}'.")
        return records


def is_running(record: PodRequestRecord) -> bool:
    """True unless the pod has reached a terminal phase."""
    return record.phase not in TERMINAL_PHASES
