# src/kubefit/reporters/console_reporter.py
"""
A reporter that displays the placement analysis in the console.
"""

import logging
from typing import List, Optional

from rich.console import Console
from rich.rule import Rule
from rich.table import Table

from ..core.guidance import build_helm_set_flags
from ..models.resources import ClusterReport, NodeAnalysis, OverProvisioningReport, ResourceKind, SummaryRow
from .base_reporter import BaseReporter

logger = logging.getLogger(__name__)

METRICS_UNAVAILABLE = "(metrics-server unavailable - cannot show over-provisioned pods)"


class ConsoleReporter(BaseReporter):
    """
    Renders a ClusterReport to the console using the 'rich' library.
    """

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def report(self, report: ClusterReport):
        self.report_header(report)
        self.report_priority_classes(report)
        self.console.print(Rule("Node Details", style="bold"))
        for node in report.nodes:
            self.report_node(node)
        self.report_summary(report.summary)
        self.report_footer(report)
        self.report_taints(report)

    def report_header(self, report: ClusterReport):
        from .. import __version__

        request = report.request
        self.console.print(Rule(f"DaemonSet Placement Analysis v{__version__}", style="bold magenta"))
        self.console.print(f"Date:              {report.generated_at:%Y-%m-%d %H:%M:%S}")
        self.console.print(f"Kubeconfig:        {report.kubeconfig or '<in-cluster/default>'}")
        self.console.print(f"DaemonSet CPU:     {request.cpu_raw}")
        self.console.print(f"DaemonSet Memory:  {request.memory_raw}")
        self.console.print()

    def report_priority_classes(self, report: ClusterReport):
        if not report.priority_classes:
            self.console.print("No PriorityClasses found (using default scheduling priority)", style="yellow")
            self.console.print()
            return

        table = Table(title="Priority Classes", header_style="bold magenta")
        table.add_column("Name", style="cyan")
        table.add_column("Value", justify="right")
        for priority_class in report.priority_classes:
            table.add_row(priority_class.name, str(priority_class.value))
        self.console.print(table)

    def report_node(self, node: NodeAnalysis):
        snapshot = node.snapshot
        allocatable, requested, available = snapshot.allocatable, snapshot.requested, snapshot.available
        taints = ", ".join(taint.raw for taint in snapshot.taints) or "<none>"
        style = "green" if node.verdict.can_schedule else "red"

        self.console.print()
        self.console.print(f"[bold]Node: {snapshot.name}[/]")
        self.console.print(f"  Ready:           {snapshot.ready}")
        self.console.print(f"  Taints:          {taints}", markup=False)
        self.console.print(
            f"  Allocatable:     CPU={allocatable.cpu}m  Mem={allocatable.memory}Mi  Pods={allocatable.pods}"
        )
        self.console.print(
            f"  Requested:       CPU={requested.cpu}m  Mem={requested.memory}Mi  Pods={requested.pods}"
            "  (pod specs, not actual usage)"
        )
        self.console.print(
            f"  Available:       CPU={available.cpu}m  Mem={available.memory}Mi  Pods={available.pods}"
            "  (scheduling headroom)"
        )
        self.console.print(f"  Can Schedule:    [{style}]{node.verdict.label}[/]")

        if node.overprovisioning is not None:
            self.report_overprovisioned(node.overprovisioning)

    def report_overprovisioned(self, overprovisioning: OverProvisioningReport):
        if not overprovisioning.metrics_available:
            self.console.print(f"  {METRICS_UNAVAILABLE}", style="yellow")
            return

        label = "CPU" if overprovisioning.dimension == ResourceKind.CPU else "MEM"
        table = Table(
            title=(
                f"Over-provisioned pods (using <{overprovisioning.threshold_percent}% of requested {label}), "
                f"sorted by REQ {label}"
            ),
            header_style="bold magenta",
        )
        table.add_column("Pod", style="cyan")
        table.add_column("REQ CPU", justify="right")
        table.add_column("USE CPU", justify="right")
        table.add_column("REQ MEM", justify="right")
        table.add_column("USE MEM", justify="right")
        for entry in overprovisioning.entries:
            table.add_row(
                f"{entry.namespace}/{entry.name}",
                f"{entry.cpu_requested}m",
                f"{entry.cpu_used}m",
                f"{entry.memory_requested}Mi",
                f"{entry.memory_used}Mi",
            )
        self.console.print(table)

    def report_summary(self, rows: List[SummaryRow]):
        table = Table(title="Summary", header_style="bold magenta", show_lines=False)
        table.add_column("Node", style="cyan")
        table.add_column("CPU(m)", justify="right")
        table.add_column("MEM(Mi)", justify="right")
        table.add_column("Pods", justify="right")
        table.add_column("Schedulable")
        for row in rows:
            style = "green" if row.can_schedule else "red"
            table.add_row(
                row.node,
                str(row.available_cpu),
                str(row.available_memory),
                str(row.available_pods),
                f"[{style}]{row.verdict}[/]",
            )
        self.console.print()
        self.console.print(table)

    def report_footer(self, report: ClusterReport):
        request = report.request
        self.console.print()
        self.console.print("* = Requires tolerations (see below)")
        self.console.print()
        self.console.print("NOTE: CPU/MEM values are from pod resource REQUESTS, not actual usage.", style="dim")
        self.console.print("      Use 'kubectl top nodes' to see real-time usage metrics.", style="dim")
        self.console.print()
        self.console.print(
            f"DaemonSet Requirements: CPU={request.cpu_raw} ({request.cpu}m), "
            f"Memory={request.memory_raw} ({request.memory}Mi)"
        )

    def report_taints(self, report: ClusterReport):
        if report.taint_legend:
            self.console.print()
            self.console.print(Rule("Taints Found", style="bold"))
            self.console.print("The following taints were found in the cluster:")
            self.console.print()
            for taint in report.taint_legend:
                self.console.print(f"  - {taint.key} ({taint.effect})", markup=False)

        flags = build_helm_set_flags(report.taint_legend, report.recommended_priority_class)
        if flags:
            self.console.print()
            self.console.print(Rule("Helm Install Guidance", style="bold"))
            self.console.print("Add the following to your helm install command:")
            self.console.print()
            for flag in flags:
                self.console.print(f"  {flag}", markup=False)
