"""One Engine API call per operation kind, converted into report objects."""

from __future__ import annotations

from typing import Any

from swarm_prune.domain.models import (
    ContainerUsage,
    DeletedObject,
    DiskUsageReport,
    ImageUsage,
    OperationKind,
    ReclaimReport,
    VolumeUsage,
)


def image_prune_filters(all_images: bool) -> dict[str, bool]:
    """Dangling-only unless ``all_images``, which targets every unreferenced image."""
    return {"dangling": not all_images}


def _ids(items: list[Any] | None) -> tuple[DeletedObject, ...]:
    return tuple(DeletedObject(identifier=str(item)) for item in items or [])


def _space(payload: dict[str, Any]) -> int:
    return int(payload.get("SpaceReclaimed") or 0)


def prune_containers(client: Any) -> ReclaimReport:
    payload = client.prune_containers() or {}
    return ReclaimReport(
        kind=OperationKind.CONTAINERS,
        deleted=_ids(payload.get("ContainersDeleted")),
        space_reclaimed=_space(payload),
    )


def prune_images(client: Any, *, all_images: bool = False) -> ReclaimReport:
    payload = client.prune_images(filters=image_prune_filters(all_images)) or {}
    deleted: list[DeletedObject] = []
    for entry in payload.get("ImagesDeleted") or []:
        untagged = entry.get("Untagged")
        if untagged:
            deleted.append(DeletedObject(identifier=str(untagged), action="untagged"))
        else:
            deleted.append(DeletedObject(identifier=str(entry.get("Deleted") or "")))
    return ReclaimReport(
        kind=OperationKind.IMAGES,
        deleted=tuple(deleted),
        space_reclaimed=_space(payload),
    )


def prune_volumes(client: Any) -> ReclaimReport:
    payload = client.prune_volumes() or {}
    return ReclaimReport(
        kind=OperationKind.VOLUMES,
        deleted=_ids(payload.get("VolumesDeleted")),
        space_reclaimed=_space(payload),
    )


def prune_networks(client: Any) -> ReclaimReport:
    # The networks prune response has no size field.
    payload = client.prune_networks() or {}
    return ReclaimReport(kind=OperationKind.NETWORKS, deleted=_ids(payload.get("NetworksDeleted")))


def _int(value: Any, default: int = 0) -> int:
    return default if value is None else int(value)


def _image_usage(item: dict[str, Any]) -> ImageUsage:
    return ImageUsage(
        image_id=str(item.get("Id") or ""),
        repo_tags=tuple(item.get("RepoTags") or ()),
        size=_int(item.get("Size")),
        shared_size=_int(item.get("SharedSize"), -1),
        containers=int(item.get("Containers") or 0),
    )


def _container_usage(item: dict[str, Any]) -> ContainerUsage:
    return ContainerUsage(
        container_id=str(item.get("Id") or ""),
        image=str(item.get("Image") or ""),
        names=tuple(name.lstrip("/") for name in item.get("Names") or ()),
        size_rw=int(item.get("SizeRw") or 0),
        state=str(item.get("State") or ""),
        status=str(item.get("Status") or ""),
    )


def _volume_usage(item: dict[str, Any]) -> VolumeUsage:
    usage = item.get("UsageData") or {}
    return VolumeUsage(
        name=str(item.get("Name") or ""),
        size=_int(usage.get("Size"), -1),
        ref_count=_int(usage.get("RefCount"), -1),
    )


def disk_usage(client: Any) -> DiskUsageReport:
    payload = client.df() or {}
    return DiskUsageReport(
        layers_size=int(payload.get("LayersSize") or 0),
        images=tuple(_image_usage(item) for item in payload.get("Images") or []),
        containers=tuple(_container_usage(item) for item in payload.get("Containers") or []),
        volumes=tuple(_volume_usage(item) for item in payload.get("Volumes") or []),
    )


def run_operation(
    client: Any,
    kind: OperationKind,
    *,
    all_images: bool = False,
) -> ReclaimReport | DiskUsageReport:
    """Issue exactly one remote call for ``kind`` and return its report."""
    if kind is OperationKind.CONTAINERS:
        return prune_containers(client)
    if kind is OperationKind.IMAGES:
        return prune_images(client, all_images=all_images)
    if kind is OperationKind.VOLUMES:
        return prune_volumes(client)
    if kind is OperationKind.NETWORKS:
        return prune_networks(client)
    if kind is OperationKind.DISK_USAGE:
        return disk_usage(client)
    raise ValueError(f"Unsupported operation kind: {kind!r}")
