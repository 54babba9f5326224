"""Core primitives for philips-remote."""

from .aliases import (
    DEFAULT_COMMAND_ALIASES,
    CommandAliases,
    build_aliases,
    resolve_candidates,
)
from .models import (
    CommandResult,
    ConnectivityResult,
    DeviceAddress,
    DiscoveryResult,
    FailureKind,
    split_host_port,
)
from .protocols import KeySender, TVAdapter

__all__ = [
    "CommandAliases",
    "CommandResult",
    "ConnectivityResult",
    "DEFAULT_COMMAND_ALIASES",
    "DeviceAddress",
    "DiscoveryResult",
    "FailureKind",
    "KeySender",
    "TVAdapter",
    "build_aliases",
    "resolve_candidates",
    "split_host_port",
]
