# src/kubefit/core/analyzer.py
import asyncio
import logging
from typing import List, Optional, Sequence

from ..collectors.metrics_collector import MetricsCollector
from ..collectors.node_collector import NodeCollector
from ..collectors.pod_collector import PodCollector, is_running
from ..collectors.priority_class_collector import PriorityClassCollector
from ..core.config import config
from ..models.resources import (
    ClusterReport,
    DaemonSetRequest,
    NodeAnalysis,
    PodUsageRecord,
    PriorityClassInfo,
    ResourceTotals,
    SummaryRow,
    Taint,
)
from ..utils.k8s_utils import parse_cpu, parse_memory
from .evaluator import evaluate
from .exceptions import ClusterUnreachableError
from .guidance import recommend_priority_class
from .overprovisioning import dimension_for, find_overprovisioned

logger = logging.getLogger(__name__)


def build_request(cpu: Optional[str] = None, memory: Optional[str] = None) -> DaemonSetRequest:
    """Normalizes the DaemonSet request, falling back to the configured defaults."""
    cpu_raw = cpu if cpu is not None else config.DS_CPU_REQUEST
    memory_raw = memory if memory is not None else config.DS_MEMORY_REQUEST
    request = DaemonSetRequest(
        cpu_raw=cpu_raw,
        memory_raw=memory_raw,
        cpu=parse_cpu(cpu_raw),
        memory=parse_memory(memory_raw),
    )
    if cpu_raw and request.cpu == 0:
        logger.warning("DaemonSet CPU request '%s' could not be parsed; evaluating as 0m.", cpu_raw)
    if memory_raw and request.memory == 0:
        logger.warning("DaemonSet memory request '%s' could not be parsed; evaluating as 0Mi.", memory_raw)
    return request


def build_cluster_report(
    results: Sequence[NodeAnalysis],
    request: DaemonSetRequest,
    priority_classes: Sequence[PriorityClassInfo] = (),
    metrics_available: bool = True,
    kubeconfig: Optional[str] = None,
    name_width: Optional[int] = None,
) -> ClusterReport:
    """
    Folds per-node results (in enumeration order) into the cluster report:
    schedulable rows first in the summary, and taints deduplicated by
    (key, effect) in first-seen order.
    """
    width = name_width or config.NODE_NAME_WIDTH

    rows = []
    for result in results:
        available = result.snapshot.available
        rows.append(
            SummaryRow(
                node=result.snapshot.name[:width],
                available_cpu=available.cpu,
                available_memory=available.memory,
                available_pods=available.pods,
                can_schedule=result.verdict.can_schedule,
                verdict=result.verdict.label,
            )
        )
    summary = [row for row in rows if row.can_schedule] + [row for row in rows if not row.can_schedule]

    seen = set()
    legend: List[Taint] = []
    for result in results:
        for taint in result.snapshot.taints:
            effect = taint.classified_effect
            if effect is None:
                continue
            if (taint.key, effect) in seen:
                continue
            seen.add((taint.key, effect))
            legend.append(Taint(key=taint.key, effect=effect.value))

    return ClusterReport(
        kubeconfig=kubeconfig,
        request=request,
        priority_classes=list(priority_classes),
        recommended_priority_class=recommend_priority_class(priority_classes),
        nodes=list(results),
        summary=summary,
        taint_legend=legend,
        metrics_available=metrics_available,
    )


class PlacementAnalyzer:
    """Orchestrates collection, per-node evaluation and the final fold."""

    def __init__(
        self,
        node_collector: NodeCollector,
        pod_collector: PodCollector,
        metrics_collector: MetricsCollector,
        priority_class_collector: PriorityClassCollector,
        max_workers: Optional[int] = None,
        threshold_percent: Optional[int] = None,
        top_n: Optional[int] = None,
        kubeconfig: Optional[str] = None,
    ):
        self.node_collector = node_collector
        self.pod_collector = pod_collector
        self.metrics_collector = metrics_collector
        self.priority_class_collector = priority_class_collector
        self.max_workers = max_workers or config.MAX_WORKERS
        self.threshold_percent = threshold_percent or config.OVERPROVISION_THRESHOLD_PERCENT
        self.top_n = top_n or config.OVERPROVISION_TOP_N
        self.kubeconfig = kubeconfig

    async def run(self, request: DaemonSetRequest) -> ClusterReport:
        """
        Analyzes every node for the given DaemonSet request.

        Raises:
            ClusterUnreachableError: If node enumeration returns no nodes.
        """
        logger.info("Starting placement analysis (cpu=%sm, memory=%sMi)...", request.cpu, request.memory)

        node_names = await self.node_collector.collect()
        if not node_names:
            raise ClusterUnreachableError("No nodes found or unable to connect to cluster")

        priority_classes, usage = await asyncio.gather(
            self.priority_class_collector.collect(),
            self.metrics_collector.collect(),
        )
        if usage is None:
            logger.info("Live pod metrics unavailable; over-provisioning reports are suppressed.")

        semaphore = asyncio.Semaphore(min(self.max_workers, len(node_names)))

        async def _bounded(name: str) -> NodeAnalysis:
            async with semaphore:
                return await self.analyze_node(name, request, usage)

        results = await asyncio.gather(*(_bounded(name) for name in node_names))

        logger.info("Analyzed %d nodes.", len(results))
        return build_cluster_report(
            results,
            request,
            priority_classes=priority_classes,
            metrics_available=usage is not None,
            kubeconfig=self.kubeconfig,
        )

    async def analyze_node(
        self,
        node_name: str,
        request: DaemonSetRequest,
        usage: Optional[List[PodUsageRecord]],
    ) -> NodeAnalysis:
        """Fetches one node and its pods, then evaluates them."""
        described, pods = await asyncio.gather(
            self.node_collector.describe(node_name),
            self.pod_collector.collect(node_name),
        )

        # Requests are summed over every pod bound to the node; only the pod
        # count leaves out pods in a terminal phase.
        requested = ResourceTotals(
            cpu=sum(pod.cpu.value for pod in pods),
            memory=sum(pod.memory.value for pod in pods),
            pods=sum(1 for pod in pods if is_running(pod)),
        )
        snapshot = described.model_copy(update={"requested": requested})
        verdict = evaluate(snapshot, request)

        overprovisioning = None
        dimension = dimension_for(verdict)
        if dimension is not None:
            overprovisioning = find_overprovisioned(
                node_name,
                dimension,
                pods,
                usage,
                threshold_percent=self.threshold_percent,
                top_n=self.top_n,
            )

        return NodeAnalysis(snapshot=snapshot, verdict=verdict, overprovisioning=overprovisioning)

    async def close(self):
        """Closes every collector's API client."""
        for collector in (
            self.node_collector,
            self.pod_collector,
            self.metrics_collector,
            self.priority_class_collector,
        ):
            try:
                await collector.close()
            except Exception as e:
                logger.debug("Error closing %s: %s", type(collector).__name__, e)
