# src/kubefit/core/overprovisioning.py

import logging
from typing import Dict, List, Optional, Sequence, Tuple

from ..models.resources import (
    OverProvisionedEntry,
    OverProvisioningReport,
    PodRequestRecord,
    PodUsageRecord,
    ReasonCode,
    ResourceKind,
    SchedulabilityVerdict,
)

logger = logging.getLogger(__name__)


def dimension_for(verdict: SchedulabilityVerdict) -> Optional[ResourceKind]:
    """Picks the dimension to inspect on a node short of resources: CPU wins over memory."""
    if ReasonCode.INSUFFICIENT_CPU in verdict.reasons:
        return ResourceKind.CPU
    if ReasonCode.INSUFFICIENT_MEMORY in verdict.reasons:
        return ResourceKind.MEMORY
    return None


def find_overprovisioned(
    node_name: str,
    dimension: ResourceKind,
    requests: Sequence[PodRequestRecord],
    usage: Optional[Sequence[PodUsageRecord]],
    threshold_percent: int = 50,
    top_n: int = 10,
) -> OverProvisioningReport:
    """
    Finds pods on a node whose live usage is below ``threshold_percent`` of
    their request in ``dimension``.

    :param usage: Live usage rows, or None when the metrics source is unavailable.
    :return: At most ``top_n`` entries, largest request in ``dimension`` first.
    """
    if usage is None:
        return OverProvisioningReport(
            dimension=dimension, threshold_percent=threshold_percent, metrics_available=False
        )

    usage_by_pod: Dict[Tuple[str, str], PodUsageRecord] = {(u.namespace, u.name): u for u in usage}

    flagged: List[OverProvisionedEntry] = []
    for record in requests:
        used = usage_by_pod.get((record.namespace, record.name))
        if used is None:
            continue

        requested = record.requested(dimension)
        # A zero request has no meaningful usage ratio.
        if requested <= 0:
            continue
        if used.used(dimension) * 100 // requested >= threshold_percent:
            continue

        flagged.append(
            OverProvisionedEntry(
                namespace=record.namespace,
                name=record.name,
                cpu_requested=record.cpu.value,
                cpu_used=used.cpu_used,
                memory_requested=record.memory.value,
                memory_used=used.memory_used,
            )
        )

    key = (lambda e: e.cpu_requested) if dimension == ResourceKind.CPU else (lambda e: e.memory_requested)
    flagged.sort(key=key, reverse=True)
    logger.debug(
        "Node '%s': %d over-provisioned pods by %s (showing %d).",
        node_name,
        len(flagged),
        dimension.value,
        min(len(flagged), top_n),
    )
    return OverProvisioningReport(dimension=dimension, threshold_percent=threshold_percent, entries=flagged[:top_n])
