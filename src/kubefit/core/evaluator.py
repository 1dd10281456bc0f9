# src/kubefit/core/evaluator.py
"""
Admission check: would a DaemonSet pod with the given request fit on a node?

Every check runs and reasons accumulate in a fixed order. Taints never make a
node unschedulable on their own; they only mean the DaemonSet needs matching
tolerations, which are not verified here.
"""

import logging

from ..models.resources import DaemonSetRequest, NodeSnapshot, ReasonCode, SchedulabilityVerdict

logger = logging.getLogger(__name__)


def evaluate(node: NodeSnapshot, request: DaemonSetRequest) -> SchedulabilityVerdict:
    available = node.available
    blocking = []

    if not node.ready:
        blocking.append(ReasonCode.NOT_READY)
    if available.cpu < request.cpu:
        blocking.append(ReasonCode.INSUFFICIENT_CPU)
    if available.memory < request.memory:
        blocking.append(ReasonCode.INSUFFICIENT_MEMORY)
    if available.pods < 1:
        blocking.append(ReasonCode.MAX_PODS_REACHED)

    requires_tolerations = bool(node.taints)
    reasons = blocking + ([ReasonCode.HAS_TAINTS] if requires_tolerations else [])

    verdict = SchedulabilityVerdict(
        can_schedule=not blocking,
        requires_tolerations=requires_tolerations,
        reasons=reasons,
    )
    logger.debug("Node '%s' verdict: %s", node.name, verdict.label)
    return verdict
