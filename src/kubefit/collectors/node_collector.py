# src/kubefit/collectors/node_collector.py

import logging
from typing import List

from kubernetes_asyncio.client.rest import ApiException

from ..core.k8s_client import get_core_v1_api
from ..models.resources import NodeSnapshot, ResourceTotals, Taint
from ..utils.k8s_utils import parse_count, parse_cpu, parse_memory
from .base_collector import BaseCollector

logger = logging.getLogger(__name__)


class NodeCollector(BaseCollector):
    """Enumerates nodes and reads readiness, taints and allocatable capacity."""

    async def _create_client(self):
        return await get_core_v1_api(self.kubeconfig)

    async def collect(self) -> List[str]:
        """
        Lists the names of all nodes in the cluster.

        Returns:
            list: Node names in API order. Empty when the cluster cannot be
                  reached or has no nodes.
        """
        api = await self._ensure_client()
        if not api:
            logger.debug("Kubernetes client not configured; skipping node enumeration.")
            return []

        try:
            nodes = await api.list_node(watch=False)
        except ApiException as e:
            logger.error("Kubernetes API error while listing nodes: %s", e)
            return []
        except Exception as e:
            logger.error("An unexpected error occurred while listing nodes: %s", e)
            return []

        names = [node.metadata.name for node in nodes.items or []]
        if not names:
            logger.warning("No nodes found in the cluster.")
        else:
            logger.info("Found %d nodes.", len(names))
        return names

    async def describe(self, node_name: str) -> NodeSnapshot:
        """
        Reads one node's Ready condition, taints and allocatable resources.

        A failed read yields a snapshot with no data (not ready, no taints,
        zero allocatable) so the node still shows up in the report.
        """
        empty = NodeSnapshot(name=node_name)
        api = await self._ensure_client()
        if not api:
            return empty

        try:
            node = await api.read_node(name=node_name)
        except ApiException as e:
            logger.warning("Kubernetes API error while reading node '%s': %s", node_name, e)
            return empty
        except Exception as e:
            logger.warning("Unexpected error while reading node '%s': %s", node_name, e)
            return empty

        snapshot = NodeSnapshot(
            name=node_name,
            ready=self._is_ready(node),
            taints=self._extract_taints(node),
            allocatable=self._extract_allocatable(node),
        )
        logger.debug(
            " -> Node '%s': ready=%s, taints=%d, allocatable=%s",
            node_name,
            snapshot.ready,
            len(snapshot.taints),
            snapshot.allocatable,
        )
        return snapshot

    def _is_ready(self, node) -> bool:
        status = getattr(node, "status", None)
        for condition in getattr(status, "conditions", None) or []:
            if condition.type == "Ready":
                return condition.status == "True"
        return False

    def _extract_taints(self, node) -> List[Taint]:
        spec = getattr(node, "spec", None)
        taints = []
        for taint in getattr(spec, "taints", None) or []:
            if not taint.key:
                continue
            taints.append(Taint(key=taint.key, value=taint.value or None, effect=taint.effect or ""))
        return taints

    def _extract_allocatable(self, node) -> ResourceTotals:
        status = getattr(node, "status", None)
        allocatable = getattr(status, "allocatable", None) or {}
        return ResourceTotals(
            cpu=parse_cpu(allocatable.get("cpu")),
            memory=parse_memory(allocatable.get("memory")),
            pods=parse_count(allocatable.get("pods")),
        )
