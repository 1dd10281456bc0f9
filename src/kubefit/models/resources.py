# src/kubefit/models/resources.py
"""
Pydantic data models shared by the collectors, the admission evaluator, the
over-provisioning detector and the reporters.

Every model is frozen: each analysis run builds these objects from a single
pass over the cluster and nothing mutates them afterwards.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ResourceKind(str, Enum):
    """Resource dimensions the analyzer compares."""

    CPU = "cpu"
    MEMORY = "memory"


class TaintEffect(str, Enum):
    """Taint effects recognised when classifying taints."""

    NO_SCHEDULE = "NoSchedule"
    NO_EXECUTE = "NoExecute"
    PREFER_NO_SCHEDULE = "PreferNoSchedule"


class ReasonCode(str, Enum):
    """
    Reasons attached to a scheduling verdict. The declaration order is the
    order in which reasons are reported.
    """

    NOT_READY = "NotReady"
    INSUFFICIENT_CPU = "InsufficientCPU"
    INSUFFICIENT_MEMORY = "InsufficientMemory"
    MAX_PODS_REACHED = "MaxPodsReached"
    HAS_TAINTS = "HasTaints"


class ResourceQuantity(BaseModel):
    """A CPU (millicores) or memory (mebibytes) amount."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: ResourceKind
    value: int = Field(0, ge=0, description="Millicores for CPU, mebibytes for memory")


class Taint(BaseModel):
    """A node taint as reported by the API server."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    key: str
    value: Optional[str] = None
    effect: str = ""

    @property
    def classified_effect(self) -> Optional[TaintEffect]:
        try:
            return TaintEffect(self.effect)
        except ValueError:
            return None

    @property
    def raw(self) -> str:
        """The taint in ``key=value:effect`` form."""
        return f"{self.key}={self.value or ''}:{self.effect}"


class ResourceTotals(BaseModel):
    """CPU (m), memory (Mi) and pod count for one node."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    cpu: int = 0
    memory: int = 0
    pods: int = 0

    def __sub__(self, other: "ResourceTotals") -> "ResourceTotals":
        return ResourceTotals(
            cpu=self.cpu - other.cpu,
            memory=self.memory - other.memory,
            pods=self.pods - other.pods,
        )


class NodeSnapshot(BaseModel):
    """
    Point-in-time view of a node.

    Attributes:
        name: Node name
        ready: Whether the node's Ready condition is "True"
        taints: Taints in API order
        allocatable: Allocatable CPU, memory and pod capacity
        requested: Summed pod requests and the count of non-terminal pods
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(..., description="Node name")
    ready: bool = Field(False, description="Ready condition")
    taints: List[Taint] = Field(default_factory=list)
    allocatable: ResourceTotals = Field(default_factory=ResourceTotals)
    requested: ResourceTotals = Field(default_factory=ResourceTotals)

    @property
    def available(self) -> ResourceTotals:
        # Not clamped: an overcommitted node reports negative headroom.
        return self.allocatable - self.requested


class PodRequestRecord(BaseModel):
    """Resource requests of one pod, summed over its containers."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    namespace: str
    name: str
    phase: Optional[str] = None
    cpu: ResourceQuantity = Field(default_factory=lambda: ResourceQuantity(kind=ResourceKind.CPU))
    memory: ResourceQuantity = Field(default_factory=lambda: ResourceQuantity(kind=ResourceKind.MEMORY))

    def requested(self, kind: ResourceKind) -> int:
        return self.cpu.value if kind == ResourceKind.CPU else self.memory.value


class PodUsageRecord(BaseModel):
    """Live usage of one pod as reported by the metrics API."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    namespace: str
    name: str
    cpu_used: int = Field(0, ge=0, description="Millicores")
    memory_used: int = Field(0, ge=0, description="Mebibytes")

    def used(self, kind: ResourceKind) -> int:
        return self.cpu_used if kind == ResourceKind.CPU else self.memory_used


class DaemonSetRequest(BaseModel):
    """The DaemonSet pod request being evaluated, raw and normalized."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    cpu_raw: str = "100m"
    memory_raw: str = "500Mi"
    cpu: int = Field(100, description="Millicores")
    memory: int = Field(500, description="Mebibytes")


class SchedulabilityVerdict(BaseModel):
    """Outcome of the admission check for one node."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    can_schedule: bool = True
    requires_tolerations: bool = False
    reasons: List[ReasonCode] = Field(default_factory=list)

    @property
    def label(self) -> str:
        """Verdict string, e.g. ``YES``, ``YES* (HasTaints)`` or ``NO (InsufficientCPU)``."""
        label = "YES" if self.can_schedule else "NO"
        if self.requires_tolerations:
            label += "*"
        if self.reasons:
            label += " (" + ", ".join(reason.value for reason in self.reasons) + ")"
        return label


class OverProvisionedEntry(BaseModel):
    """A pod using less than the threshold share of its request."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    namespace: str
    name: str
    cpu_requested: int = 0
    cpu_used: int = 0
    memory_requested: int = 0
    memory_used: int = 0


class OverProvisioningReport(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    dimension: ResourceKind
    threshold_percent: int = 50
    metrics_available: bool = True
    entries: List[OverProvisionedEntry] = Field(default_factory=list)


class NodeAnalysis(BaseModel):
    """Everything computed for a single node."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    snapshot: NodeSnapshot
    verdict: SchedulabilityVerdict
    overprovisioning: Optional[OverProvisioningReport] = None


class PriorityClassInfo(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str
    value: int = 0


class SummaryRow(BaseModel):
    """One line of the cluster summary table."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    node: str = Field(..., description="Node name truncated to the display width")
    available_cpu: int
    available_memory: int
    available_pods: int
    can_schedule: bool
    verdict: str


class ClusterReport(BaseModel):
    """Result of one analysis run, ready for rendering or export."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    generated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    kubeconfig: Optional[str] = None
    request: DaemonSetRequest
    priority_classes: List[PriorityClassInfo] = Field(default_factory=list)
    recommended_priority_class: Optional[str] = None
    nodes: List[NodeAnalysis] = Field(default_factory=list)
    summary: List[SummaryRow] = Field(default_factory=list)
    taint_legend: List[Taint] = Field(default_factory=list)
    metrics_available: bool = True
