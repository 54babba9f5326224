"""Logical command dispatch with alias fallback."""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable

from . import constants
from .core import (
    DEFAULT_COMMAND_ALIASES,
    CommandAliases,
    CommandResult,
    KeySender,
    resolve_candidates,
)

LOGGER = logging.getLogger(__name__)

SleepFunc = Callable[[float], Awaitable[None]]


class CommandDispatcher:
    """Resolve a logical command to wire candidates and try them in order.

    Candidates are sent one at a time with ``retry_pause`` seconds between
    them. The first HTTP 200 wins. When every candidate fails the original
    logical command is sent once more as a last resort, and that outcome is
    returned even if it repeats the final candidate.
    """

    def __init__(
        self,
        sender: KeySender,
        *,
        aliases: CommandAliases = DEFAULT_COMMAND_ALIASES,
        retry_pause: float = constants.DEFAULT_RETRY_PAUSE_SECONDS,
        sleep: SleepFunc = asyncio.sleep,
    ) -> None:
        self._sender = sender
        self._aliases = aliases
        self._retry_pause = max(0.0, retry_pause)
        self._sleep = sleep

    @property
    def aliases(self) -> CommandAliases:
        return self._aliases

    def candidates_for(self, command: str) -> tuple[str, ...]:
        return resolve_candidates(command, self._aliases)

    async def dispatch(self, command: str) -> CommandResult:
        if not command or not command.strip():
            raise ValueError("Command cannot be empty")

        candidates = self.candidates_for(command)
        LOGGER.info("Processing command %s (%d candidate(s))", command, len(candidates))

        attempt = 0
        while attempt < len(candidates):
            candidate = candidates[attempt]
            LOGGER.debug(
                "Trying candidate %d/%d: %s", attempt + 1, len(candidates), candidate
            )
            result = await self._sender.send_key(candidate)
            if result.success:
                LOGGER.info("Command %s succeeded as %s", command, candidate)
                return result

            LOGGER.info("Candidate %s failed: %s", candidate, result.error)
            attempt += 1
            if attempt < len(candidates):
                await self._sleep(self._retry_pause)

        LOGGER.warning(
            "All candidates failed for %s; retrying the original command", command
        )
        return await self._sender.send_key(command)
