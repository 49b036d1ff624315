"""Runtime configuration resolved once from CLI arguments and environment."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field

from swarm_prune.domain.models import TlsOptions

DEFAULT_HOST = "unix:///var/run/docker.sock"
DEFAULT_API_VERSION = "1.25"
DEFAULT_NODE_PORT = 2375
DEFAULT_LOG_LEVEL = "WARNING"

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RuntimeConfig:
    host: str = DEFAULT_HOST
    tls: TlsOptions = field(default_factory=TlsOptions)
    api_version: str = DEFAULT_API_VERSION
    node_port: int = DEFAULT_NODE_PORT
    log_level: str = DEFAULT_LOG_LEVEL


def env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in {"1", "true", "yes", "on"}


def _resolve_node_port() -> int:
    raw = os.getenv("SWARM_PRUNE_NODE_PORT", "").strip()
    if not raw:
        return DEFAULT_NODE_PORT
    try:
        port = int(raw)
    except ValueError as exc:
        raise ValueError(f"SWARM_PRUNE_NODE_PORT must be an integer, got {raw!r}") from exc
    if not 0 < port < 65536:
        raise ValueError(f"SWARM_PRUNE_NODE_PORT out of range: {port}")
    return port


def resolve_config(
    *,
    host: str | None = None,
    tls: TlsOptions | None = None,
    log_level: str | None = None,
) -> RuntimeConfig:
    api_version = os.getenv("DOCKER_API_VERSION", "").strip() or DEFAULT_API_VERSION
    config = RuntimeConfig(
        host=host or DEFAULT_HOST,
        tls=tls or TlsOptions(),
        api_version=api_version,
        node_port=_resolve_node_port(),
        log_level=(log_level or DEFAULT_LOG_LEVEL).upper(),
    )
    logger.debug(
        "Resolved runtime config (host=%s, api_version=%s, node_port=%s, tls=%s)",
        config.host,
        config.api_version,
        config.node_port,
        config.tls.is_complete,
    )
    return config
