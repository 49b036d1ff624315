from __future__ import annotations


class SwarmPruneError(RuntimeError):
    """Base class for errors that abort a whole command."""


class ClientConnectionError(SwarmPruneError, ConnectionError):
    """Raised when an Engine API client cannot be built for an address."""


class EnumerationError(SwarmPruneError):
    """Raised when the swarm node listing cannot be fetched."""


class RoleCheckError(SwarmPruneError):
    """Raised when the manager role check itself fails."""


class NotManagerError(SwarmPruneError):
    """Raised when the target node is confirmed not to be a swarm manager."""
