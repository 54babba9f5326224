"""Local HTTP bridge exposing remote control operations to a front end."""

from __future__ import annotations

import contextlib
import logging
from typing import Optional

from aiohttp import web

from .remote import RemoteControl

LOGGER = logging.getLogger(__name__)


class RemoteBridge:
    """Minimal HTTP server a GUI calls instead of talking to the TV directly.

    Device-side failures are part of the returned record, so every handled
    call answers 200; only malformed requests get a 4xx.
    """

    def __init__(self, remote: RemoteControl, host: str, port: int) -> None:
        self._remote = remote
        self._host = host
        self._port = port
        self._runner: Optional[web.AppRunner] = None
        self._site: Optional[web.TCPSite] = None

    def build_app(self) -> web.Application:
        app = web.Application()
        app.router.add_post("/command", self._handle_command)
        app.router.add_get("/connection", self._handle_connection)
        app.router.add_get("/commands", self._handle_discovery)
        return app

    async def start(self) -> None:
        self._runner = web.AppRunner(self.build_app())
        await self._runner.setup()
        self._site = web.TCPSite(self._runner, self._host, self._port)
        await self._site.start()
        LOGGER.info("Remote bridge listening on http://%s:%s", self._host, self._port)

    async def stop(self) -> None:
        with contextlib.suppress(Exception):
            if self._site is not None:
                await self._site.stop()
        if self._runner is not None:
            await self._runner.cleanup()
        self._site = None
        self._runner = None

    async def _handle_command(self, request: web.Request) -> web.Response:
        try:
            body = await request.json()
        except ValueError:
            return web.json_response({"error": "Request body must be JSON"}, status=400)

        command = body.get("command") if isinstance(body, dict) else None
        if not isinstance(command, str) or not command.strip():
            return web.json_response(
                {"error": "Field 'command' must be a non-empty string"}, status=400
            )

        result = await self._remote.send_command(command.strip())
        return web.json_response(result.as_dict())

    async def _handle_connection(self, request: web.Request) -> web.Response:
        result = await self._remote.check_connection()
        return web.json_response(result.as_dict())

    async def _handle_discovery(self, request: web.Request) -> web.Response:
        result = await self._remote.discover_commands()
        return web.json_response(result.as_dict())
