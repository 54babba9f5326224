"""High-level remote control operations used by front ends."""

from __future__ import annotations

import asyncio
from typing import Optional

import aiohttp

from .adapters import PhilipsTVClient
from .config import RemoteConfig
from .core import CommandResult, ConnectivityResult, DiscoveryResult, TVAdapter
from .dispatcher import CommandDispatcher, SleepFunc


class RemoteControl:
    """Entry points a GUI or CLI calls: send, check, discover."""

    def __init__(
        self,
        config: RemoteConfig,
        *,
        session: Optional[aiohttp.ClientSession] = None,
        client: Optional[TVAdapter] = None,
        sleep: SleepFunc = asyncio.sleep,
    ) -> None:
        self.config = config
        self._sleep = sleep
        self.client: TVAdapter = client or PhilipsTVClient(
            config.address,
            session=session,
            command_timeout=config.commands.timeout_seconds,
            probe_timeout=config.probe.timeout_seconds,
        )
        self.dispatcher = CommandDispatcher(
            self.client,
            aliases=config.aliases,
            retry_pause=config.commands.retry_pause_seconds,
            sleep=sleep,
        )

    async def __aenter__(self) -> RemoteControl:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.client.aclose()

    async def send_command(self, command: str) -> CommandResult:
        delay = self.config.commands.send_delay_seconds
        if delay > 0:
            await self._sleep(delay)
        return await self.dispatcher.dispatch(command)

    async def check_connection(self) -> ConnectivityResult:
        return await self.client.probe()

    async def discover_commands(self) -> DiscoveryResult:
        return await self.client.discover()
