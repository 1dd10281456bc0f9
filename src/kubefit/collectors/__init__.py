from .metrics_collector import MetricsCollector
from .node_collector import NodeCollector
from .pod_collector import PodCollector
from .priority_class_collector import PriorityClassCollector

__all__ = [
    "MetricsCollector",
    "NodeCollector",
    "PodCollector",
    "PriorityClassCollector",
]
