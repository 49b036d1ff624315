"""Text rendering for per-node disk usage reports."""

from __future__ import annotations

from typing import Sequence

from swarm_prune.domain.models import ContainerUsage, DiskUsageReport, ImageUsage
from swarm_prune.utils.units import human_size

NODE_MARKER = "##########"
NODE_FOOTER = "#" * 45


def render_table(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> str:
    widths = [len(h) for h in headers]
    for row in rows:
        for idx, cell in enumerate(row):
            widths[idx] = max(widths[idx], len(str(cell)))

    lines = ["   ".join(headers[idx].ljust(widths[idx]) for idx in range(len(headers))).rstrip()]
    for row in rows:
        lines.append("   ".join(str(row[idx]).ljust(widths[idx]) for idx in range(len(headers))).rstrip())
    return "\n".join(lines)


def short_id(identifier: str) -> str:
    return identifier.split(":", 1)[-1][:12]


ACTIVE_CONTAINER_STATES = frozenset({"running", "paused", "restarting"})


def _is_active(container: ContainerUsage) -> bool:
    return container.state in ACTIVE_CONTAINER_STATES


def _with_percent(reclaimable: int, total: int) -> str:
    if total > 0:
        return f"{human_size(reclaimable)} ({reclaimable * 100 // total}%)"
    return human_size(reclaimable)


def _sized(value: int) -> str:
    return "N/A" if value < 0 else human_size(value)


def _split_tag(repo_tag: str) -> tuple[str, str]:
    repository, sep, tag = repo_tag.rpartition(":")
    if not sep or "/" in tag:
        return repo_tag, "<none>"
    return repository, tag


def _image_rows(image: ImageUsage) -> list[list[str]]:
    pairs = [_split_tag(t) for t in image.repo_tags if t != "<none>:<none>"] or [("<none>", "<none>")]
    rows = []
    for repository, tag in pairs:
        rows.append(
            [
                repository,
                tag,
                short_id(image.image_id),
                human_size(image.size),
                _sized(image.shared_size),
                human_size(image.unique_size),
                str(image.containers),
            ]
        )
    return rows


def summary_rows(report: DiskUsageReport) -> list[list[str]]:
    used_by_images = sum(
        image.size - image.shared_size
        for image in report.images
        if image.containers > 0 and image.shared_size >= 0
    )
    images_reclaimable = max(report.layers_size - used_by_images, 0)

    containers_size = sum(c.size_rw for c in report.containers)
    containers_reclaimable = sum(c.size_rw for c in report.containers if not _is_active(c))

    sized_volumes = [v for v in report.volumes if v.size >= 0]
    volumes_size = sum(v.size for v in sized_volumes)
    volumes_reclaimable = sum(v.size for v in sized_volumes if v.ref_count == 0)

    return [
        [
            "Images",
            str(len(report.images)),
            str(sum(1 for image in report.images if image.containers > 0)),
            human_size(report.layers_size),
            _with_percent(images_reclaimable, report.layers_size),
        ],
        [
            "Containers",
            str(len(report.containers)),
            str(sum(1 for c in report.containers if _is_active(c))),
            human_size(containers_size),
            _with_percent(containers_reclaimable, containers_size),
        ],
        [
            "Local Volumes",
            str(len(report.volumes)),
            str(sum(1 for v in report.volumes if v.ref_count > 0)),
            human_size(volumes_size),
            _with_percent(volumes_reclaimable, volumes_size),
        ],
    ]


def render_disk_usage(report: DiskUsageReport, *, verbose: bool = False) -> str:
    if not verbose:
        return render_table(["TYPE", "TOTAL", "ACTIVE", "SIZE", "RECLAIMABLE"], summary_rows(report))

    image_rows = [row for image in report.images for row in _image_rows(image)]
    container_rows = [
        [
            short_id(c.container_id),
            c.image,
            human_size(c.size_rw),
            c.status,
            ", ".join(c.names),
        ]
        for c in report.containers
    ]
    volume_rows = [
        [v.name, "N/A" if v.ref_count < 0 else str(v.ref_count), _sized(v.size)]
        for v in report.volumes
    ]

    sections = [
        "Images space usage:\n\n"
        + render_table(
            ["REPOSITORY", "TAG", "IMAGE ID", "SIZE", "SHARED SIZE", "UNIQUE SIZE", "CONTAINERS"],
            image_rows,
        ),
        "Containers space usage:\n\n"
        + render_table(["CONTAINER ID", "IMAGE", "SIZE", "STATUS", "NAMES"], container_rows),
        "Local Volumes space usage:\n\n" + render_table(["VOLUME NAME", "LINKS", "SIZE"], volume_rows),
    ]
    return "\n\n".join(sections)
