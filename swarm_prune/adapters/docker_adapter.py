from __future__ import annotations

import logging
import platform
from functools import partial
from typing import Any, Callable

import docker
from docker.errors import DockerException, TLSParameterError
from docker.tls import TLSConfig

from swarm_prune.config import DEFAULT_API_VERSION, RuntimeConfig
from swarm_prune.domain.errors import ClientConnectionError
from swarm_prune.domain.models import TlsOptions

logger = logging.getLogger(__name__)

ClientFactory = Callable[[str], Any]


def client_user_agent(api_version: str = DEFAULT_API_VERSION) -> str:
    return f"Docker-Client/{api_version} ({platform.system().lower()})"


def build_tls_config(tls: TlsOptions) -> TLSConfig | None:
    """Return a client TLS config, or None when any credential path is missing."""
    if not tls.is_complete:
        if tls.is_partial:
            logger.warning(
                "Incomplete TLS material (--tlscacert, --tlscert and --tlskey are all required); "
                "using a plain connection"
            )
        return None

    try:
        return TLSConfig(
            client_cert=(tls.client_cert, tls.client_key),
            ca_cert=tls.ca_cert,
            verify=tls.ca_cert if tls.verify else False,
        )
    except TLSParameterError as exc:
        raise ClientConnectionError(f"invalid TLS material: {exc}") from exc


def build_client(
    host: str,
    tls: TlsOptions | None = None,
    api_version: str = DEFAULT_API_VERSION,
) -> docker.APIClient:
    """Build an Engine API client for ``host`` pinned to ``api_version``.

    No request is made here; connection problems surface on the first call.
    """
    tls_config = build_tls_config(tls or TlsOptions())
    try:
        client = docker.APIClient(
            base_url=host,
            version=api_version,
            tls=tls_config or False,
            user_agent=client_user_agent(api_version),
        )
    except DockerException as exc:
        raise ClientConnectionError(f"cannot connect to {host!r}: {exc}") from exc

    logger.debug("Built client for %s (api_version=%s, tls=%s)", host, api_version, tls_config is not None)
    return client


def client_factory_for(config: RuntimeConfig) -> ClientFactory:
    """Return a host -> client callable sharing the config's TLS and API version."""
    return partial(build_client, tls=config.tls, api_version=config.api_version)
