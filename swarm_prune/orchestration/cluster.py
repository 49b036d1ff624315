from __future__ import annotations

import logging
from typing import Any

from docker.errors import DockerException
from requests.exceptions import RequestException

from swarm_prune.domain.errors import EnumerationError, NotManagerError, RoleCheckError
from swarm_prune.domain.models import Node

MANAGER_ROLE = "manager"

logger = logging.getLogger(__name__)


def list_nodes(client: Any) -> list[Node]:
    """Return every swarm node in the order the manager lists them."""
    try:
        payload = client.nodes()
    except (DockerException, RequestException) as exc:
        raise EnumerationError(f"unable to list swarm nodes: {exc}") from exc

    nodes = [Node.from_api(item) for item in payload or []]
    logger.info("Enumerated %s swarm nodes", len(nodes))
    return nodes


def is_swarm_manager(client: Any) -> bool:
    try:
        info = client.info()
    except (DockerException, RequestException) as exc:
        raise RoleCheckError(f"unable to query node info: {exc}") from exc

    swarm = info.get("Swarm") or {}
    node_id = swarm.get("NodeID") or ""
    if not node_id:
        state = swarm.get("LocalNodeState") or "inactive"
        raise RoleCheckError(f"this node is not part of a swarm (state: {state})")

    try:
        payload = client.inspect_node(node_id)
    except (DockerException, RequestException) as exc:
        raise RoleCheckError(f"unable to inspect node {node_id}: {exc}") from exc

    node = Node.from_api(payload)
    return node.has_manager_status and node.role == MANAGER_ROLE


def require_manager(client: Any) -> None:
    if not is_swarm_manager(client):
        raise NotManagerError("This script needs to run on a swarm manager.")
