# tests/conftest.py

import pytest

from kubefit.core.analyzer import build_cluster_report
from kubefit.core.config import config
from kubefit.models.resources import (
    DaemonSetRequest,
    NodeAnalysis,
    NodeSnapshot,
    OverProvisionedEntry,
    OverProvisioningReport,
    PodRequestRecord,
    PodUsageRecord,
    PriorityClassInfo,
    ReasonCode,
    ResourceKind,
    ResourceQuantity,
    ResourceTotals,
    SchedulabilityVerdict,
    Taint,
)


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    """
    Autouse fixture keeping tests isolated from the caller's environment:
    the default kubeconfig never exists, so no real cluster is ever contacted.
    """
    monkeypatch.setattr(config, "KUBECONFIG", "/nonexistent/kubeconfig")
    monkeypatch.setattr(config, "DS_CPU_REQUEST", "100m")
    monkeypatch.setattr(config, "DS_MEMORY_REQUEST", "500Mi")
    monkeypatch.setattr(config, "MAX_WORKERS", 8)


@pytest.fixture
def ds_request():
    """The default DaemonSet request: 100m CPU, 500Mi memory."""
    return DaemonSetRequest(cpu_raw="100m", memory_raw="500Mi", cpu=100, memory=500)


@pytest.fixture
def make_snapshot():
    """Factory for NodeSnapshot objects with ample headroom by default."""

    def _make(
        name="node-1",
        ready=True,
        taints=None,
        allocatable=(4000, 8000, 110),
        requested=(0, 0, 0),
    ):
        return NodeSnapshot(
            name=name,
            ready=ready,
            taints=taints or [],
            allocatable=ResourceTotals(cpu=allocatable[0], memory=allocatable[1], pods=allocatable[2]),
            requested=ResourceTotals(cpu=requested[0], memory=requested[1], pods=requested[2]),
        )

    return _make


@pytest.fixture
def gpu_taint():
    return Taint(key="dedicated", value="gpu", effect="NoSchedule")


@pytest.fixture
def make_pod_request():
    """Factory for PodRequestRecord objects from already-normalized values."""

    def _make(name, cpu=0, memory=0, namespace="default", phase="Running"):
        return PodRequestRecord(
            namespace=namespace,
            name=name,
            phase=phase,
            cpu=ResourceQuantity(kind=ResourceKind.CPU, value=cpu),
            memory=ResourceQuantity(kind=ResourceKind.MEMORY, value=memory),
        )

    return _make


@pytest.fixture
def make_pod_usage():
    def _make(name, cpu=0, memory=0, namespace="default"):
        return PodUsageRecord(namespace=namespace, name=name, cpu_used=cpu, memory_used=memory)

    return _make


@pytest.fixture
def sample_report(make_snapshot, ds_request, gpu_taint):
    """A two-node report: one tainted but fit node, one out of CPU with an idle pod."""
    fit = NodeAnalysis(
        snapshot=make_snapshot("gpu-node", taints=[gpu_taint], requested=(1000, 2000, 10)),
        verdict=SchedulabilityVerdict(
            can_schedule=True, requires_tolerations=True, reasons=[ReasonCode.HAS_TAINTS]
        ),
    )
    full = NodeAnalysis(
        snapshot=make_snapshot("cpu-node", allocatable=(2000, 8000, 110), requested=(1950, 4096, 30)),
        verdict=SchedulabilityVerdict(can_schedule=False, reasons=[ReasonCode.INSUFFICIENT_CPU]),
        overprovisioning=OverProvisioningReport(
            dimension=ResourceKind.CPU,
            entries=[
                OverProvisionedEntry(
                    namespace="batch",
                    name="reporting-0",
                    cpu_requested=1000,
                    cpu_used=40,
                    memory_requested=2048,
                    memory_used=300,
                )
            ],
        ),
    )
    return build_cluster_report(
        [full, fit],
        ds_request,
        priority_classes=[PriorityClassInfo(name="system-node-critical", value=2000001000)],
        kubeconfig="/home/ops/.kube/config",
    )
