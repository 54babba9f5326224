"""Tests for the Philips TV adapter against a fake device."""

import asyncio

import pytest

from philips_remote.adapters import PhilipsTVClient
from philips_remote.adapters.philips import DISCOVERY_PARSE_ERROR
from philips_remote.core import DeviceAddress, FailureKind


@pytest.mark.asyncio
async def test_send_key_success(fake_tv):
    async with PhilipsTVClient(fake_tv.address) as client:
        result = await client.send_key("VolumeUp")

    assert result.success is True
    assert result.command == "VolumeUp"
    assert result.status_code == 200
    assert result.error is None
    assert fake_tv.state.received_keys == ["VolumeUp"]

    headers = fake_tv.state.received_headers[0]
    assert headers["Content-Type"] == "application/json"
    assert headers["User-Agent"] == "Philips-TV-Remote/1.0"


@pytest.mark.asyncio
async def test_send_key_service_unavailable(fake_tv):
    fake_tv.state.key_status["Confirm"] = 503

    async with PhilipsTVClient(fake_tv.address) as client:
        result = await client.send_key("Confirm")

    assert result.success is False
    assert result.status_code == 503
    assert result.failure is FailureKind.SERVICE_UNAVAILABLE
    assert result.error == "Service Unavailable (503)"
    assert result.response == "busy"


@pytest.mark.asyncio
async def test_send_key_unexpected_status(fake_tv):
    fake_tv.state.default_key_status = 404

    async with PhilipsTVClient(fake_tv.address) as client:
        result = await client.send_key("Bogus")

    assert result.success is False
    assert result.failure is FailureKind.DEVICE_REJECTED
    assert result.error == "HTTP 404: Not Found"


@pytest.mark.asyncio
async def test_send_key_network_error(unused_tcp_port):
    address = DeviceAddress("127.0.0.1", unused_tcp_port)

    async with PhilipsTVClient(address) as client:
        result = await client.send_key("Home")

    assert result.success is False
    assert result.failure is FailureKind.NETWORK
    assert result.status_code is None
    assert result.error


@pytest.mark.asyncio
async def test_send_key_timeout(fake_tv):
    fake_tv.state.hang = True

    async with PhilipsTVClient(fake_tv.address, command_timeout=0.2) as client:
        result = await client.send_key("Home")

    assert result.success is False
    assert result.failure is FailureKind.TIMEOUT
    assert result.error == "Request timeout"


@pytest.mark.asyncio
async def test_probe_reports_model_and_version(fake_tv):
    async with PhilipsTVClient(fake_tv.address) as client:
        status = await client.probe()

    assert status.connected is True
    assert status.address == "127.0.0.1"
    assert status.model == "55PUS7304"
    assert status.version == "6.5"
    assert status.system_info == {"name": "55PUS7304", "nettvversion": "6.5"}


@pytest.mark.asyncio
async def test_probe_defaults_missing_fields(fake_tv):
    fake_tv.state.system_body = '{"country": "NL"}'

    async with PhilipsTVClient(fake_tv.address) as client:
        status = await client.probe()

    assert status.connected is True
    assert status.model == "Philips TV"
    assert status.version == "Unknown"


@pytest.mark.asyncio
async def test_probe_invalid_json_still_connected(fake_tv):
    fake_tv.state.system_body = "<html>not json</html>"

    async with PhilipsTVClient(fake_tv.address) as client:
        status = await client.probe()

    assert status.connected is True
    assert status.system_info == "<html>not json</html>"
    assert status.model is None
    assert status.error is None


@pytest.mark.asyncio
async def test_probe_non_200_is_disconnected(fake_tv):
    fake_tv.state.system_status = 500

    async with PhilipsTVClient(fake_tv.address) as client:
        status = await client.probe()

    assert status.connected is False
    assert status.failure is FailureKind.DEVICE_REJECTED
    assert status.error == "HTTP 500: Internal Server Error"


@pytest.mark.asyncio
async def test_probe_network_error(unused_tcp_port):
    address = DeviceAddress("127.0.0.1", unused_tcp_port)

    async with PhilipsTVClient(address) as client:
        status = await client.probe()

    assert status.connected is False
    assert status.failure is FailureKind.NETWORK
    assert status.error


@pytest.mark.asyncio
async def test_probe_times_out_when_tv_never_answers(fake_tv):
    fake_tv.state.hang = True
    loop = asyncio.get_running_loop()

    async with PhilipsTVClient(fake_tv.address, probe_timeout=0.2) as client:
        started = loop.time()
        status = await client.probe()
        elapsed = loop.time() - started

    assert status.connected is False
    assert status.failure is FailureKind.TIMEOUT
    assert status.error == "Connection timeout"
    assert 0.15 <= elapsed < 2.0


@pytest.mark.asyncio
async def test_default_bounds_are_three_and_five_seconds(monkeypatch):
    bounds: list[float] = []

    async def expired_request(method, path, *, headers, timeout, data=None):
        bounds.append(timeout)
        raise asyncio.TimeoutError

    client = PhilipsTVClient(DeviceAddress("192.0.2.1"))
    monkeypatch.setattr(client, "_request", expired_request)

    status = await client.probe()
    result = await client.send_key("Home")
    discovery = await client.discover()
    await client.aclose()

    assert bounds == [3.0, 5.0, 3.0]
    assert status.connected is False
    assert status.error == "Connection timeout"
    assert result.failure is FailureKind.TIMEOUT
    assert discovery.failure is FailureKind.TIMEOUT


@pytest.mark.asyncio
async def test_probe_is_idempotent(fake_tv):
    async with PhilipsTVClient(fake_tv.address) as client:
        first = await client.probe()
        second = await client.probe()

    assert first == second
    assert first.as_dict() == second.as_dict()


@pytest.mark.asyncio
async def test_discover_parses_key_list(fake_tv):
    async with PhilipsTVClient(fake_tv.address) as client:
        discovery = await client.discover()

    assert discovery.success is True
    assert discovery.available_commands == ["Standby", "Home", "Confirm"]
    assert discovery.as_dict()["availableCommands"] == ["Standby", "Home", "Confirm"]


@pytest.mark.asyncio
async def test_discover_network_error(unused_tcp_port):
    address = DeviceAddress("127.0.0.1", unused_tcp_port)

    async with PhilipsTVClient(address) as client:
        discovery = await client.discover()

    assert discovery.success is False
    assert discovery.failure is FailureKind.NETWORK


@pytest.mark.asyncio
async def test_send_key_rejects_empty_command(fake_tv):
    async with PhilipsTVClient(fake_tv.address) as client:
        with pytest.raises(ValueError):
            await client.send_key("")


@pytest.mark.parametrize("status", [200, 404, 405])
@pytest.mark.asyncio
async def test_discover_non_json_is_parse_error_whatever_the_status(fake_tv, status):
    fake_tv.state.keys_status = status
    fake_tv.state.keys_body = "Method not allowed"

    async with PhilipsTVClient(fake_tv.address) as client:
        discovery = await client.discover()

    assert discovery.success is False
    assert discovery.failure is FailureKind.MALFORMED_RESPONSE
    assert discovery.error == DISCOVERY_PARSE_ERROR


@pytest.mark.asyncio
async def test_discover_accepts_json_list_on_non_200(fake_tv):
    fake_tv.state.keys_status = 404
    fake_tv.state.keys_body = '["Home"]'

    async with PhilipsTVClient(fake_tv.address) as client:
        discovery = await client.discover()

    assert discovery.success is True
    assert discovery.available_commands == ["Home"]


class FakeClock:
    """Offsets the running loop's clock so timers fire without real waiting."""

    def __init__(self, loop: asyncio.AbstractEventLoop) -> None:
        self._real_time = loop.time
        self.offset = 0.0

    def time(self) -> float:
        return self._real_time() + self.offset

    def advance(self, seconds: float) -> None:
        self.offset += seconds


@pytest.mark.asyncio
async def test_probe_gives_up_after_three_seconds_on_fake_clock(monkeypatch, fake_tv):
    fake_tv.state.hang = True
    loop = asyncio.get_running_loop()
    clock = FakeClock(loop)
    monkeypatch.setattr(loop, "time", clock.time)

    async with PhilipsTVClient(fake_tv.address) as client:
        task = asyncio.create_task(client.probe())
        await asyncio.wait_for(fake_tv.state.request_seen.wait(), timeout=1.0)

        clock.advance(2.9)
        await asyncio.sleep(0.05)
        assert not task.done()

        clock.advance(0.2)
        status = await asyncio.wait_for(task, timeout=1.0)

    assert status.connected is False
    assert status.failure is FailureKind.TIMEOUT
    assert status.error == "Connection timeout"
