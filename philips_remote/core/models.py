"""Domain models for device addressing and request outcomes."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from .. import constants


class FailureKind(str, Enum):
    """Why a request to the TV did not succeed."""

    DEVICE_REJECTED = "device_rejected"
    """The TV answered with a status other than 200 or 503."""

    SERVICE_UNAVAILABLE = "service_unavailable"
    """The TV answered 503; it is busy rather than refusing the command."""

    NETWORK = "network"
    """Connection refused, DNS failure, reset, etc."""

    TIMEOUT = "timeout"
    """No response within the request bound."""

    MALFORMED_RESPONSE = "malformed_response"
    """The body was not valid JSON where JSON was expected."""


@dataclass(frozen=True, slots=True)
class DeviceAddress:
    host: str
    port: int = constants.DEFAULT_TV_PORT
    api_version: str = constants.DEFAULT_API_VERSION

    @property
    def base_url(self) -> str:
        host = f"[{self.host}]" if ":" in self.host else self.host
        return f"http://{host}:{self.port}/{self.api_version}"

    def url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"


def split_host_port(value: str) -> Tuple[str, Optional[int]]:
    """Split ``host``, ``host:port``, ``[v6]`` or ``[v6]:port``.

    A bare IPv6 literal such as ``fe80::1`` has no port.
    """

    value = value.strip()
    if value.startswith("["):
        literal, _, rest = value[1:].partition("]")
        port_part = rest[1:] if rest.startswith(":") else ""
        return literal, int(port_part) if port_part.isdigit() else None

    if value.count(":") == 1:
        host_part, port_part = value.split(":")
        if host_part and port_part.isdigit():
            return host_part, int(port_part)

    return value, None


@dataclass(slots=True)
class CommandResult:
    success: bool
    command: str
    status_code: Optional[int] = None
    response: Optional[str] = None
    headers: Dict[str, str] = field(default_factory=dict)
    error: Optional[str] = None
    failure: Optional[FailureKind] = None

    def as_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"success": self.success, "command": self.command}
        if self.status_code is not None:
            payload["statusCode"] = self.status_code
        if self.response is not None:
            payload["response"] = self.response
        if self.success:
            payload["headers"] = dict(self.headers)
        else:
            payload["error"] = self.error
            payload["failure"] = self.failure.value if self.failure else None
        return payload


@dataclass(slots=True)
class ConnectivityResult:
    connected: bool
    address: str
    system_info: Any = None
    model: Optional[str] = None
    version: Optional[str] = None
    error: Optional[str] = None
    failure: Optional[FailureKind] = None

    def as_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"connected": self.connected, "ip": self.address}
        if self.system_info is not None:
            payload["systemInfo"] = self.system_info
        if self.model is not None:
            payload["model"] = self.model
        if self.version is not None:
            payload["version"] = self.version
        if not self.connected:
            payload["error"] = self.error
            payload["failure"] = self.failure.value if self.failure else None
        return payload


@dataclass(slots=True)
class DiscoveryResult:
    success: bool
    available_commands: Any = None
    error: Optional[str] = None
    failure: Optional[FailureKind] = None

    def as_dict(self) -> Dict[str, Any]:
        if self.success:
            return {"success": True, "availableCommands": self.available_commands}
        return {
            "success": False,
            "error": self.error,
            "failure": self.failure.value if self.failure else None,
        }
