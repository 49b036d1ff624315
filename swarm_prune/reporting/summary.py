"""Reclaimed-space aggregation and console text for prune runs."""

from __future__ import annotations

from dataclasses import dataclass, field

from swarm_prune.domain.models import (
    Node,
    NodeResult,
    OperationFailure,
    OperationKind,
    OperationOutcome,
    OperationSuccess,
    ReclaimReport,
)
from swarm_prune.utils.units import human_size

SECTION_TITLES: dict[OperationKind, str] = {
    OperationKind.CONTAINERS: "Containers",
    OperationKind.IMAGES: "Images",
    OperationKind.VOLUMES: "Volumes",
    OperationKind.NETWORKS: "Networks",
}


def contribution(outcome: OperationOutcome) -> int:
    """Bytes an outcome adds to the totals; failures add nothing."""
    if isinstance(outcome, OperationSuccess) and isinstance(outcome.report, ReclaimReport):
        return outcome.report.space_reclaimed
    return 0


@dataclass(slots=True)
class AggregateTotals:
    total: int = 0
    subtotals: list[tuple[Node, int]] = field(default_factory=list)

    def add(self, result: NodeResult) -> int:
        subtotal = sum(contribution(outcome) for outcome in result.outcomes)
        self.total += subtotal
        self.subtotals.append((result.node, subtotal))
        return subtotal


def format_node_header(node: Node, marker: str = "######") -> str:
    return f"{marker}  {node.hostname}  {node.role}"


def format_reclaim_report(report: ReclaimReport) -> str:
    title = SECTION_TITLES.get(report.kind, report.kind.value.capitalize())
    if not report.deleted:
        return f"    No {title} Deleted"

    lines = [f"    Deleted {title}:"]
    for item in report.deleted:
        if report.kind is OperationKind.IMAGES:
            lines.append(f"        {item.action}: {item.identifier}")
        else:
            lines.append(f"        {item.identifier}")
    return "\n".join(lines)


def format_failure(node: Node, failure: OperationFailure) -> str:
    verb = "report" if failure.kind is OperationKind.DISK_USAGE else "prune"
    return f"  ERROR: {failure.kind.value} {verb} failed on {node.hostname}: {failure.cause}"


def format_node_total(subtotal: int) -> str:
    return f"  Node reclaimed space: {human_size(subtotal)}"


def format_grand_total(total: int) -> str:
    return f"\n  Total Swarm reclaimed space: {human_size(total)}"


def reports_space(kinds: tuple[OperationKind, ...]) -> bool:
    """Only runs that include a sized prune print space lines."""
    return any(kind not in (OperationKind.NETWORKS, OperationKind.DISK_USAGE) for kind in kinds)
