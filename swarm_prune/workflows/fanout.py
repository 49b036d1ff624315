"""Sequential per-node fan-out with isolated operation failures."""

from __future__ import annotations

from typing import Any, Sequence

from swarm_prune.adapters.docker_adapter import ClientFactory
from swarm_prune.domain.models import (
    CommandOptions,
    DiskUsageReport,
    Node,
    NodeResult,
    OperationFailure,
    OperationKind,
    OperationOutcome,
    OperationSuccess,
)
from swarm_prune.orchestration.operations import run_operation
from swarm_prune.reporting.disk_usage import NODE_FOOTER, NODE_MARKER, render_disk_usage
from swarm_prune.reporting.summary import (
    AggregateTotals,
    format_failure,
    format_grand_total,
    format_node_header,
    format_node_total,
    format_reclaim_report,
    reports_space,
)
from swarm_prune.utils.logging import get_structured_logger, log_operation_event


def execute_on_node(
    node: Node,
    kinds: Sequence[OperationKind],
    *,
    client_factory: ClientFactory,
    node_port: int,
    options: CommandOptions = CommandOptions(),
    workflow_step: str = "node_prune",
) -> NodeResult:
    """Run each operation against ``node`` with its own client.

    Every failure, including building the client, is recorded and the
    remaining operations still run.
    """
    logger = get_structured_logger()
    address = node.address(node_port)
    result = NodeResult(node=node)

    for kind in kinds:
        log_operation_event(
            logger,
            workflow_step=workflow_step,
            node=node.hostname,
            operation=kind.value,
            status="attempted",
            message=f"Calling {address}",
        )
        client = None
        outcome: OperationOutcome
        try:
            client = client_factory(address)
            report = run_operation(client, kind, all_images=options.all_images)
            outcome = OperationSuccess(kind=kind, report=report)
            log_operation_event(
                logger,
                workflow_step=workflow_step,
                node=node.hostname,
                operation=kind.value,
                status="succeeded",
                message="Operation succeeded",
            )
        except Exception as exc:  # one failing call must not stop the run
            outcome = OperationFailure(kind=kind, cause=str(exc), error_type=type(exc).__name__)
            log_operation_event(
                logger,
                workflow_step=workflow_step,
                node=node.hostname,
                operation=kind.value,
                status="failed",
                error_code=type(exc).__name__.upper(),
                error_message=str(exc),
                message="Operation raised exception",
            )
        finally:
            if client is not None:
                client.close()

        result.outcomes.append(outcome)

    return result


def _print_outcome(node: Node, outcome: OperationOutcome, *, verbose: bool) -> None:
    if isinstance(outcome, OperationFailure):
        print(format_failure(node, outcome))
    elif isinstance(outcome.report, DiskUsageReport):
        print(render_disk_usage(outcome.report, verbose=verbose))
    else:
        print(format_reclaim_report(outcome.report))


def run_fanout(
    nodes: Sequence[Node],
    kinds: Sequence[OperationKind],
    *,
    client_factory: ClientFactory,
    node_port: int,
    options: CommandOptions = CommandOptions(),
) -> dict[str, Any]:
    """Visit nodes in order, print each node's results and the running totals."""
    kinds = tuple(kinds)
    read_only = kinds == (OperationKind.DISK_USAGE,)
    show_space = reports_space(kinds)
    workflow_step = "node_disk_usage" if read_only else "node_prune"
    totals = AggregateTotals()
    results: list[NodeResult] = []

    for node in nodes:
        print(format_node_header(node, NODE_MARKER if read_only else "######"))
        result = execute_on_node(
            node,
            kinds,
            client_factory=client_factory,
            node_port=node_port,
            options=options,
            workflow_step=workflow_step,
        )
        for outcome in result.outcomes:
            _print_outcome(node, outcome, verbose=options.verbose)

        subtotal = totals.add(result)
        if read_only:
            print(NODE_FOOTER)
        elif show_space:
            print(format_node_total(subtotal))
        results.append(result)

    if show_space:
        print(format_grand_total(totals.total))

    return {
        "results": results,
        "totals": totals,
        "failed_operations": sum(len(result.failures) for result in results),
    }
