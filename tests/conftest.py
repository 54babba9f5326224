import asyncio
from dataclasses import dataclass, field
from typing import Any

import pytest_asyncio
from aiohttp import web

from philips_remote.core import DeviceAddress


@dataclass
class FakeTVState:
    """Scripted behaviour for the fake Philips TV."""

    key_status: dict[str, int] = field(default_factory=dict)
    default_key_status: int = 200
    system_status: int = 200
    system_body: str = '{"name": "55PUS7304", "nettvversion": "6.5"}'
    keys_status: int = 200
    keys_body: str = '["Standby", "Home", "Confirm"]'
    hang: bool = False
    received_keys: list[str] = field(default_factory=list)
    received_headers: list[dict[str, str]] = field(default_factory=list)
    release: asyncio.Event = field(default_factory=asyncio.Event)
    request_seen: asyncio.Event = field(default_factory=asyncio.Event)


class FakeTV:
    def __init__(self, port: int, state: FakeTVState) -> None:
        self.port = port
        self.state = state

    @property
    def address(self) -> DeviceAddress:
        return DeviceAddress("127.0.0.1", self.port)


@pytest_asyncio.fixture
async def fake_tv(unused_tcp_port_factory):
    state = FakeTVState()

    async def _maybe_hang() -> None:
        state.request_seen.set()
        if state.hang:
            await state.release.wait()

    async def key_post_handler(request: web.Request):
        body: Any = await request.json()
        key = body.get("key", "")
        state.received_keys.append(key)
        state.received_headers.append(dict(request.headers))
        await _maybe_hang()
        status = state.key_status.get(key, state.default_key_status)
        return web.Response(status=status, text="" if status == 200 else "busy")

    async def key_get_handler(request: web.Request):
        await _maybe_hang()
        return web.Response(status=state.keys_status, text=state.keys_body)

    async def system_handler(request: web.Request):
        await _maybe_hang()
        return web.Response(status=state.system_status, text=state.system_body)

    app = web.Application()
    app.router.add_post("/1/input/key", key_post_handler)
    app.router.add_get("/1/input/key", key_get_handler)
    app.router.add_get("/1/system", system_handler)

    runner = web.AppRunner(app)
    await runner.setup()

    port = unused_tcp_port_factory()
    site = web.TCPSite(runner, "127.0.0.1", port)
    await site.start()

    try:
        yield FakeTV(port, state)
    finally:
        state.release.set()
        await runner.cleanup()

