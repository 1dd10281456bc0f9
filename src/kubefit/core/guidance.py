# src/kubefit/core/guidance.py
"""
Helm install guidance derived from an analysis: tolerations for every taint
found in the cluster and the priority class the DaemonSet should run with.
"""

from typing import List, Optional, Sequence

from ..models.resources import PriorityClassInfo, Taint

PREFERRED_PRIORITY_CLASSES = ("system-node-critical", "system-cluster-critical")

# Value prefix used by the agent's DaemonSet chart.
HELM_VALUE_PREFIX = "daemonset"


def recommend_priority_class(classes: Sequence[PriorityClassInfo]) -> Optional[str]:
    names = {c.name for c in classes}
    for candidate in PREFERRED_PRIORITY_CLASSES:
        if candidate in names:
            return candidate
    return None


def build_helm_set_flags(taints: Sequence[Taint], priority_class: Optional[str] = None) -> List[str]:
    """
    Returns ``--set`` arguments tolerating each taint, in legend order.

    Tolerations use ``operator=Exists`` so they match whatever value the
    taint carries.
    """
    flags = []
    for index, taint in enumerate(taints):
        base = f"{HELM_VALUE_PREFIX}.tolerations[{index}]"
        flags.append(f"--set '{base}.key={taint.key}'")
        flags.append(f"--set '{base}.operator=Exists'")
        flags.append(f"--set '{base}.effect={taint.effect}'")
    if priority_class:
        flags.append(f"--set {HELM_VALUE_PREFIX}.priorityClassName={priority_class}")
    return flags
