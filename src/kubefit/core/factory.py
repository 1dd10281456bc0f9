# src/kubefit/core/factory.py
"""
Factory functions to instantiate the PlacementAnalyzer with its collectors.
"""

import logging
from typing import Optional

from ..collectors.metrics_collector import MetricsCollector
from ..collectors.node_collector import NodeCollector
from ..collectors.pod_collector import PodCollector
from ..collectors.priority_class_collector import PriorityClassCollector
from .analyzer import PlacementAnalyzer

logger = logging.getLogger(__name__)


def get_analyzer(kubeconfig: Optional[str] = None, max_workers: Optional[int] = None) -> PlacementAnalyzer:
    """
    Builds a PlacementAnalyzer whose collectors all read from ``kubeconfig``
    (or the in-cluster / default configuration when None).
    """
    logger.debug("Creating PlacementAnalyzer (kubeconfig=%s, max_workers=%s).", kubeconfig, max_workers)
    return PlacementAnalyzer(
        node_collector=NodeCollector(kubeconfig),
        pod_collector=PodCollector(kubeconfig),
        metrics_collector=MetricsCollector(kubeconfig),
        priority_class_collector=PriorityClassCollector(kubeconfig),
        max_workers=max_workers,
        kubeconfig=kubeconfig,
    )
