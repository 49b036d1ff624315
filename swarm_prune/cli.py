"""Top-level swarm-prune command line interface."""

from __future__ import annotations

import argparse
import logging
import os
from typing import Sequence

from swarm_prune.config import DEFAULT_HOST, DEFAULT_LOG_LEVEL, RuntimeConfig, env_flag, resolve_config
from swarm_prune.domain.errors import SwarmPruneError
from swarm_prune.domain.models import CommandOptions, TlsOptions
from swarm_prune.jobs.commands import run_command
from swarm_prune.utils.logging import configure_logging

PROG = "swarm-prune"
VERSION = "v0.1"

logger = logging.getLogger(__name__)


def _add_force(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("-F", "--force", action="store_true", help="Do not prompt for confirmation")


def _add_all(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-A",
        "--all",
        dest="all_images",
        action="store_true",
        help="Remove all images without at least one container associated to them",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=PROG, description="swarm wide prune command")
    parser.add_argument("--version", action="version", version=f"{PROG} {VERSION}")
    parser.add_argument(
        "-H",
        "--host",
        default=os.getenv("DOCKER_HOST", DEFAULT_HOST),
        help="Docker Swarm manager host url",
    )
    parser.add_argument("--tlscacert", default="", help="TLS CA cert")
    parser.add_argument("--tlscert", default="", help="TLS cert")
    parser.add_argument("--tlskey", default="", help="TLS key")
    parser.add_argument(
        "--tlsverify",
        action="store_true",
        default=env_flag("DOCKER_TLS_VERIFY"),
        help="Verify the remote daemon certificate against --tlscacert",
    )
    parser.add_argument(
        "--log-level",
        default=os.getenv("SWARM_PRUNE_LOG_LEVEL", DEFAULT_LOG_LEVEL),
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        type=str.upper,
        help="Diagnostic log level (logs go to stderr)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    system_parser = subparsers.add_parser(
        "system",
        help="Remove stopped containers, unused volumes, dangling images and unused networks",
        description="WARNING! This will remove all stopped containers, orphaned in your swarm",
    )
    _add_force(system_parser)
    _add_all(system_parser)

    containers_parser = subparsers.add_parser(
        "containers",
        help="Prune containers swarm wide",
        description="WARNING! This will remove all stopped containers in your swarm",
    )
    _add_force(containers_parser)

    images_parser = subparsers.add_parser(
        "images",
        help="Prune images swarm wide",
        description="This will remove all dangling images.",
    )
    _add_force(images_parser)
    _add_all(images_parser)

    volumes_parser = subparsers.add_parser(
        "volumes",
        help="Prune volumes swarm wide",
        description="WARNING: This will remove all volumes not used by at least one container",
    )
    _add_force(volumes_parser)

    networks_parser = subparsers.add_parser(
        "networks",
        help="Prune networks swarm wide",
        description="WARNING: This will remove all networks not being used",
    )
    _add_force(networks_parser)

    df_parser = subparsers.add_parser(
        "df",
        help="Run docker system df on all nodes",
        description="This will show disk usage for all nodes.",
    )
    df_parser.add_argument("-V", "--verbose", action="store_true", help="Verbose output")

    for sub in (system_parser, containers_parser, images_parser, volumes_parser, networks_parser, df_parser):
        sub.set_defaults(handler=_handle_command)

    return parser


def _options_from_args(args: argparse.Namespace) -> CommandOptions:
    return CommandOptions(
        force=getattr(args, "force", False),
        all_images=getattr(args, "all_images", False),
        verbose=getattr(args, "verbose", False),
    )


def _handle_command(args: argparse.Namespace, config: RuntimeConfig) -> int:
    try:
        return run_command(args.command, config, _options_from_args(args))
    except SwarmPruneError as exc:
        logger.debug("Command %s aborted", args.command, exc_info=True)
        print(f"ERROR: {exc}")
        return 1


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        config = resolve_config(
            host=args.host,
            tls=TlsOptions(
                ca_cert=args.tlscacert,
                client_cert=args.tlscert,
                client_key=args.tlskey,
                verify=args.tlsverify,
            ),
            log_level=args.log_level,
        )
    except ValueError as exc:
        parser.error(str(exc))

    configure_logging(config.log_level)
    return args.handler(args, config)


if __name__ == "__main__":
    raise SystemExit(main())
