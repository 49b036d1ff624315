from __future__ import annotations

import logging
from typing import Any

import pytest

from swarm_prune.utils.logging import STRUCTURED_LOGGER_NAME

MANAGER_HOST = "unix:///var/run/docker.sock"
DESTRUCTIVE_METHODS = frozenset({"prune_containers", "prune_images", "prune_volumes", "prune_networks"})

DEFAULT_RESPONSES: dict[str, Any] = {
    "prune_containers": {"ContainersDeleted": None, "SpaceReclaimed": 0},
    "prune_images": {"ImagesDeleted": None, "SpaceReclaimed": 0},
    "prune_volumes": {"VolumesDeleted": None, "SpaceReclaimed": 0},
    "prune_networks": {"NetworksDeleted": None},
    "df": {"LayersSize": 0, "Images": [], "Containers": [], "Volumes": []},
}


def api_node(node_id: str, hostname: str, role: str = "worker", *, manager: bool = False) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "ID": node_id,
        "Description": {"Hostname": hostname},
        "Spec": {"Role": role},
        "Status": {"State": "ready"},
    }
    if manager:
        payload["ManagerStatus"] = {"Leader": True, "Reachability": "reachable"}
    return payload


class FakeEngineClient:
    def __init__(self, swarm: FakeSwarm, host: str) -> None:
        self.swarm = swarm
        self.host = host

    def _call(self, method: str, **kwargs: Any) -> Any:
        self.swarm.calls.append((self.host, method, kwargs))
        return self.swarm.respond(self.host, method)

    def info(self) -> Any:
        return self._call("info")

    def inspect_node(self, node_id: str) -> Any:
        return self._call("inspect_node", node_id=node_id)

    def nodes(self) -> Any:
        return self._call("nodes")

    def prune_containers(self, filters: Any = None) -> Any:
        return self._call("prune_containers", filters=filters)

    def prune_images(self, filters: Any = None) -> Any:
        return self._call("prune_images", filters=filters)

    def prune_volumes(self, filters: Any = None) -> Any:
        return self._call("prune_volumes", filters=filters)

    def prune_networks(self, filters: Any = None) -> Any:
        return self._call("prune_networks", filters=filters)

    def df(self) -> Any:
        return self._call("df")

    def close(self) -> None:
        self.swarm.closed.append(self.host)


class FakeSwarm:
    """Scriptable stand-in for the Engine API of every host in a swarm."""

    def __init__(
        self,
        nodes: list[dict[str, Any]] | None = None,
        *,
        manager_role: str = "manager",
        manager_status: bool = True,
    ) -> None:
        self.nodes = nodes if nodes is not None else []
        self.calls: list[tuple[str, str, dict[str, Any]]] = []
        self.closed: list[str] = []
        self.built: list[str] = []
        self.responses: dict[tuple[str, str], Any] = {
            (MANAGER_HOST, "info"): {"Swarm": {"NodeID": "mgr-1", "LocalNodeState": "active"}},
            (MANAGER_HOST, "inspect_node"): api_node("mgr-1", "manager-1", manager_role, manager=manager_status),
        }
        self.unreachable: set[str] = set()

    def set_response(self, host: str, method: str, value: Any) -> None:
        self.responses[(host, method)] = value

    def respond(self, host: str, method: str) -> Any:
        if method == "nodes" and (host, method) not in self.responses:
            return self.nodes
        value = self.responses.get((host, method), DEFAULT_RESPONSES.get(method))
        if isinstance(value, Exception):
            raise value
        return value

    def factory(self, host: str) -> FakeEngineClient:
        self.built.append(host)
        if host in self.unreachable:
            raise ConnectionError(f"cannot build client for {host}")
        return FakeEngineClient(self, host)

    def methods(self) -> list[str]:
        return [method for _, method, _ in self.calls]

    def destructive_calls(self) -> list[tuple[str, str, dict[str, Any]]]:
        return [call for call in self.calls if call[1] in DESTRUCTIVE_METHODS]


@pytest.fixture
def two_node_swarm() -> FakeSwarm:
    return FakeSwarm(
        [
            api_node("n1", "node-a", "manager", manager=True),
            api_node("n2", "node-b", "worker"),
        ]
    )


@pytest.fixture(autouse=True)
def _reset_structured_logger():
    yield
    logger = logging.getLogger(STRUCTURED_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
