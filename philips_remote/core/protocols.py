"""Protocol definitions for TV adapters."""

from __future__ import annotations

from typing import Protocol

from .models import CommandResult, ConnectivityResult, DiscoveryResult


class KeySender(Protocol):
    """Minimal contract the dispatcher needs from a TV adapter."""

    async def send_key(self, command: str) -> CommandResult:
        """Send one wire command and report the outcome without raising."""
        ...


class TVAdapter(KeySender, Protocol):
    """Full set of operations a TV adapter exposes to callers."""

    async def probe(self) -> ConnectivityResult:
        """Check whether the TV answers its system-info endpoint."""
        ...

    async def discover(self) -> DiscoveryResult:
        """Fetch the list of keys the TV reports as supported."""
        ...

    async def aclose(self) -> None:
        """Release network resources."""
        ...
