"""Command runs: manager gate, confirmation, enumeration, fan-out."""

from __future__ import annotations

import logging

from swarm_prune.adapters.docker_adapter import ClientFactory, client_factory_for
from swarm_prune.config import RuntimeConfig
from swarm_prune.domain.models import PRUNE_KINDS, CommandOptions, OperationKind
from swarm_prune.orchestration.cluster import list_nodes, require_manager
from swarm_prune.utils.prompt import InputFn, verify_ok
from swarm_prune.workflows.fanout import run_fanout

COMMAND_KINDS: dict[str, tuple[OperationKind, ...]] = {
    "system": PRUNE_KINDS,
    "containers": (OperationKind.CONTAINERS,),
    "images": (OperationKind.IMAGES,),
    "volumes": (OperationKind.VOLUMES,),
    "networks": (OperationKind.NETWORKS,),
    "df": (OperationKind.DISK_USAGE,),
}
READ_ONLY_COMMANDS = frozenset({"df"})
DECLINED_MESSAGE = "Ok, will not do anything. exiting now."

logger = logging.getLogger(__name__)


def run_command(
    command: str,
    config: RuntimeConfig,
    options: CommandOptions = CommandOptions(),
    *,
    client_factory: ClientFactory | None = None,
    input_fn: InputFn | None = None,
) -> int:
    """Run one command across the swarm and return the process exit code.

    Fatal errors (bad manager address, failed role check, non-manager
    target, failed node listing) propagate as ``SwarmPruneError`` before any
    destructive call. Per-node operation failures never change the exit code.
    """
    kinds = COMMAND_KINDS[command]
    factory = client_factory or client_factory_for(config)

    manager = factory(config.host)
    try:
        require_manager(manager)
        logger.info("Confirmed %s is a swarm manager", config.host)

        if command not in READ_ONLY_COMMANDS and not verify_ok(options.force, input_fn=input_fn):
            print(DECLINED_MESSAGE)
            return 0

        nodes = list_nodes(manager)
    finally:
        manager.close()

    outcome = run_fanout(
        nodes,
        kinds,
        client_factory=factory,
        node_port=config.node_port,
        options=options,
    )
    logger.info(
        "Command %s completed: nodes=%s failed_operations=%s reclaimed=%s",
        command,
        len(nodes),
        outcome["failed_operations"],
        outcome["totals"].total,
    )
    return 0
