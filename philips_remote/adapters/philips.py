"""Philips TV adapter for the local JSON API on port 1925."""

from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

import aiohttp

from .. import constants
from ..core import (
    CommandResult,
    ConnectivityResult,
    DeviceAddress,
    DiscoveryResult,
    FailureKind,
)

LOGGER = logging.getLogger(__name__)

KEY_ENDPOINT = "input/key"
SYSTEM_ENDPOINT = "system"

DEFAULT_MODEL_NAME = "Philips TV"
DEFAULT_VERSION = "Unknown"

DISCOVERY_PARSE_ERROR = "Could not parse the command list response"


@dataclass(slots=True)
class _RawResponse:
    status: int
    reason: str
    body: str
    headers: dict[str, str]

    @property
    def status_line(self) -> str:
        return f"HTTP {self.status}: {self.reason}"


class PhilipsTVClient:
    """Sends keys to a Philips TV and queries its status endpoints.

    Every public operation resolves to a result record; transport errors,
    timeouts and unexpected statuses are reported through the record rather
    than raised.
    """

    def __init__(
        self,
        address: DeviceAddress,
        *,
        session: Optional[aiohttp.ClientSession] = None,
        command_timeout: float = constants.DEFAULT_COMMAND_TIMEOUT_SECONDS,
        probe_timeout: float = constants.DEFAULT_PROBE_TIMEOUT_SECONDS,
    ) -> None:
        self.address = address
        self.command_timeout = command_timeout
        self.probe_timeout = probe_timeout

        self._session: Optional[aiohttp.ClientSession] = session
        self._owns_session = session is None

    async def __aenter__(self) -> PhilipsTVClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    async def send_key(self, command: str) -> CommandResult:
        """POST ``{"key": command}`` to the key-input endpoint."""

        if not command:
            raise ValueError("Command cannot be empty")

        body = json.dumps({"key": command})
        headers = {
            "Content-Type": "application/json",
            "User-Agent": constants.USER_AGENT,
            "Accept": "*/*",
            "Connection": "close",
        }
        url = self.address.url(KEY_ENDPOINT)
        LOGGER.debug(
            "Sending key request: POST %s headers=%s body=%s", url, headers, body
        )

        try:
            response = await self._request(
                "POST",
                KEY_ENDPOINT,
                headers=headers,
                data=body,
                timeout=self.command_timeout,
            )
        except asyncio.TimeoutError:
            LOGGER.warning("Timed out sending %s to %s", command, self.address.host)
            return CommandResult(
                success=False,
                command=command,
                error="Request timeout",
                failure=FailureKind.TIMEOUT,
            )
        except aiohttp.ClientError as exc:
            LOGGER.warning("Network error sending %s: %s", command, exc)
            return CommandResult(
                success=False,
                command=command,
                error=str(exc),
                failure=FailureKind.NETWORK,
            )

        LOGGER.debug(
            "Key response: status=%s %s headers=%s body=%s",
            response.status,
            response.reason,
            response.headers,
            response.body,
        )

        if response.status == 200:
            LOGGER.info("Command %s accepted", command)
            return CommandResult(
                success=True,
                command=command,
                status_code=response.status,
                response=response.body,
                headers=response.headers,
            )

        if response.status == 503:
            LOGGER.warning("TV rejected %s: service unavailable (503)", command)
            return CommandResult(
                success=False,
                command=command,
                status_code=response.status,
                response=response.body,
                error=f"Service Unavailable ({response.status})",
                failure=FailureKind.SERVICE_UNAVAILABLE,
            )

        LOGGER.warning("Unexpected response for %s: %s", command, response.status)
        return CommandResult(
            success=False,
            command=command,
            status_code=response.status,
            response=response.body,
            error=response.status_line,
            failure=FailureKind.DEVICE_REJECTED,
        )

    async def probe(self) -> ConnectivityResult:
        """Single GET against the system-info endpoint."""

        host = self.address.host
        LOGGER.debug("Checking connection: GET %s", self.address.url(SYSTEM_ENDPOINT))

        try:
            response = await self._request(
                "GET",
                SYSTEM_ENDPOINT,
                headers=self._json_headers(),
                timeout=self.probe_timeout,
            )
        except asyncio.TimeoutError:
            LOGGER.info("Connection check to %s timed out", host)
            return ConnectivityResult(
                connected=False,
                address=host,
                error="Connection timeout",
                failure=FailureKind.TIMEOUT,
            )
        except aiohttp.ClientError as exc:
            LOGGER.info("Connection check to %s failed: %s", host, exc)
            return ConnectivityResult(
                connected=False,
                address=host,
                error=str(exc),
                failure=FailureKind.NETWORK,
            )

        if response.status != 200:
            LOGGER.info("TV at %s answered with status %s", host, response.status)
            return ConnectivityResult(
                connected=False,
                address=host,
                error=response.status_line,
                failure=FailureKind.DEVICE_REJECTED,
            )

        try:
            system_info = json.loads(response.body)
        except ValueError:
            # The TV answered, so it is reachable even without a usable payload.
            LOGGER.info("TV at %s answered with invalid JSON: %s", host, response.body)
            return ConnectivityResult(
                connected=True, address=host, system_info=response.body
            )

        fields: Mapping[str, Any] = system_info if isinstance(system_info, dict) else {}
        LOGGER.info("TV connected at %s: %s", host, system_info)
        return ConnectivityResult(
            connected=True,
            address=host,
            system_info=system_info,
            model=fields.get("name") or DEFAULT_MODEL_NAME,
            version=fields.get("nettvversion") or DEFAULT_VERSION,
        )

    async def discover(self) -> DiscoveryResult:
        """GET the key-input endpoint and parse the supported key list."""

        try:
            response = await self._request(
                "GET",
                KEY_ENDPOINT,
                headers=self._json_headers(),
                timeout=self.probe_timeout,
            )
        except asyncio.TimeoutError:
            return DiscoveryResult(
                success=False, error="Request timeout", failure=FailureKind.TIMEOUT
            )
        except aiohttp.ClientError as exc:
            LOGGER.info("Command discovery failed: %s", exc)
            return DiscoveryResult(
                success=False, error=str(exc), failure=FailureKind.NETWORK
            )

        # Firmwares answer this GET with assorted statuses; only the body counts.
        try:
            commands = json.loads(response.body)
        except ValueError:
            LOGGER.info(
                "Command discovery returned non-JSON body (status %s): %s",
                response.status,
                response.body,
            )
            return DiscoveryResult(
                success=False,
                error=DISCOVERY_PARSE_ERROR,
                failure=FailureKind.MALFORMED_RESPONSE,
            )

        return DiscoveryResult(success=True, available_commands=commands)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _json_headers() -> dict[str, str]:
        return {
            "User-Agent": constants.USER_AGENT,
            "Accept": "application/json",
            "Connection": "close",
        }

    async def _ensure_session(self) -> aiohttp.ClientSession:
        if self._session is None:
            timeout = aiohttp.ClientTimeout(total=None)
            self._session = aiohttp.ClientSession(timeout=timeout)
            self._owns_session = True
        return self._session

    async def _request(
        self,
        method: str,
        path: str,
        *,
        headers: Mapping[str, str],
        timeout: float,
        data: Optional[str] = None,
    ) -> _RawResponse:
        """Issue one request and read the whole body within ``timeout``.

        Raises:
            asyncio.TimeoutError: If the exchange exceeds ``timeout``.
            aiohttp.ClientError: If the connection fails.
        """

        session = await self._ensure_session()
        url = self.address.url(path)

        async with asyncio.timeout(timeout):
            async with session.request(
                method, url, headers=dict(headers), data=data
            ) as response:
                body = await response.text(errors="replace")
                return _RawResponse(
                    status=response.status,
                    reason=response.reason or "",
                    body=body,
                    headers=dict(response.headers),
                )
