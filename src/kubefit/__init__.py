"""kubefit: DaemonSet placement-feasibility analysis for Kubernetes clusters."""

__version__ = "1.2.0"
