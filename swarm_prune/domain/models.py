from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union


class OperationKind(str, Enum):
    CONTAINERS = "containers"
    IMAGES = "images"
    VOLUMES = "volumes"
    NETWORKS = "networks"
    DISK_USAGE = "disk-usage"


PRUNE_KINDS: tuple[OperationKind, ...] = (
    OperationKind.CONTAINERS,
    OperationKind.IMAGES,
    OperationKind.NETWORKS,
    OperationKind.VOLUMES,
)


@dataclass(frozen=True, slots=True)
class TlsOptions:
    ca_cert: str = ""
    client_cert: str = ""
    client_key: str = ""
    verify: bool = False

    @property
    def is_complete(self) -> bool:
        return bool(self.ca_cert and self.client_cert and self.client_key)

    @property
    def is_partial(self) -> bool:
        return not self.is_complete and bool(self.ca_cert or self.client_cert or self.client_key)


@dataclass(frozen=True, slots=True)
class Node:
    node_id: str
    hostname: str
    role: str
    has_manager_status: bool = False

    def address(self, port: int) -> str:
        return f"tcp://{self.hostname}:{port}"

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> Node:
        description = payload.get("Description") or {}
        spec = payload.get("Spec") or {}
        return cls(
            node_id=str(payload.get("ID") or ""),
            hostname=str(description.get("Hostname") or ""),
            role=str(spec.get("Role") or ""),
            has_manager_status=payload.get("ManagerStatus") is not None,
        )


@dataclass(frozen=True, slots=True)
class DeletedObject:
    identifier: str
    action: str = "deleted"


@dataclass(frozen=True, slots=True)
class ReclaimReport:
    kind: OperationKind
    deleted: tuple[DeletedObject, ...] = ()
    space_reclaimed: int = 0


@dataclass(frozen=True, slots=True)
class ImageUsage:
    image_id: str
    repo_tags: tuple[str, ...] = ()
    size: int = 0
    shared_size: int = 0
    containers: int = 0

    @property
    def unique_size(self) -> int:
        if self.shared_size < 0:
            return self.size
        return self.size - self.shared_size


@dataclass(frozen=True, slots=True)
class ContainerUsage:
    container_id: str
    image: str = ""
    names: tuple[str, ...] = ()
    size_rw: int = 0
    state: str = ""
    status: str = ""


@dataclass(frozen=True, slots=True)
class VolumeUsage:
    name: str
    size: int = -1
    ref_count: int = -1


@dataclass(frozen=True, slots=True)
class DiskUsageReport:
    layers_size: int = 0
    images: tuple[ImageUsage, ...] = ()
    containers: tuple[ContainerUsage, ...] = ()
    volumes: tuple[VolumeUsage, ...] = ()
    kind: OperationKind = OperationKind.DISK_USAGE


@dataclass(frozen=True, slots=True)
class OperationSuccess:
    kind: OperationKind
    report: ReclaimReport | DiskUsageReport


@dataclass(frozen=True, slots=True)
class OperationFailure:
    kind: OperationKind
    cause: str
    error_type: str = "Exception"


OperationOutcome = Union[OperationSuccess, OperationFailure]


@dataclass(slots=True)
class NodeResult:
    node: Node
    outcomes: list[OperationOutcome] = field(default_factory=list)

    @property
    def failures(self) -> list[OperationFailure]:
        return [outcome for outcome in self.outcomes if isinstance(outcome, OperationFailure)]


@dataclass(frozen=True, slots=True)
class CommandOptions:
    force: bool = False
    all_images: bool = False
    verbose: bool = False
