"""Configuration loader for philips-remote."""

from __future__ import annotations

from configparser import ConfigParser
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from . import constants
from .core import (
    DEFAULT_COMMAND_ALIASES,
    CommandAliases,
    DeviceAddress,
    build_aliases,
    split_host_port,
)


@dataclass(slots=True)
class TVConfig:
    host: str = constants.DEFAULT_TV_HOST
    port: int = constants.DEFAULT_TV_PORT
    api_version: str = constants.DEFAULT_API_VERSION

    @property
    def address(self) -> DeviceAddress:
        return DeviceAddress(self.host, self.port, self.api_version)


@dataclass(slots=True)
class CommandConfig:
    timeout_seconds: float = constants.DEFAULT_COMMAND_TIMEOUT_SECONDS
    send_delay_seconds: float = constants.DEFAULT_SEND_DELAY_SECONDS  # Pause before every command to avoid flooding the TV
    retry_pause_seconds: float = constants.DEFAULT_RETRY_PAUSE_SECONDS


@dataclass(slots=True)
class ProbeConfig:
    timeout_seconds: float = constants.DEFAULT_PROBE_TIMEOUT_SECONDS


@dataclass(slots=True)
class LoggingConfig:
    level: str = "INFO"
    path: Optional[Path] = None
    log_network: bool = False


@dataclass(slots=True)
class BridgeConfig:
    host: str = constants.DEFAULT_BRIDGE_HOST
    port: int = constants.DEFAULT_BRIDGE_PORT


@dataclass(slots=True)
class RemoteConfig:
    tv: TVConfig
    commands: CommandConfig
    probe: ProbeConfig
    logging: LoggingConfig
    bridge: BridgeConfig
    raw: ConfigParser
    path: Path
    aliases: CommandAliases = field(default_factory=lambda: DEFAULT_COMMAND_ALIASES)

    @property
    def address(self) -> DeviceAddress:
        return self.tv.address


def _parse_list(value: str, *, default: Iterable[str]) -> List[str]:
    if not value:
        return list(default)
    return [item.strip() for item in value.split(",") if item.strip()]


def _positive(value: float, default: float) -> float:
    return value if value > 0 else default


def load_config(path: Optional[Path] = None) -> RemoteConfig:
    """Load configuration from disk, applying defaults where necessary."""

    config_path = path or constants.DEFAULT_CONFIG_PATH
    # Alias keys are button names, which are case-sensitive.
    parser = ConfigParser()
    parser.optionxform = str  # type: ignore[assignment,method-assign]
    parser.read_dict(
        {
            "tv": {
                "host": constants.DEFAULT_TV_HOST,
                "port": str(constants.DEFAULT_TV_PORT),
                "api_version": constants.DEFAULT_API_VERSION,
            },
            "commands": {
                "timeout_seconds": str(constants.DEFAULT_COMMAND_TIMEOUT_SECONDS),
                "send_delay_seconds": str(constants.DEFAULT_SEND_DELAY_SECONDS),
                "retry_pause_seconds": str(constants.DEFAULT_RETRY_PAUSE_SECONDS),
            },
            "probe": {
                "timeout_seconds": str(constants.DEFAULT_PROBE_TIMEOUT_SECONDS),
            },
            "aliases": {},
            "logging": {
                "level": "INFO",
                "log_network": "false",
            },
            "bridge": {
                "host": constants.DEFAULT_BRIDGE_HOST,
                "port": str(constants.DEFAULT_BRIDGE_PORT),
            },
        }
    )

    if config_path.exists():
        parser.read(config_path)

    host_value, parsed_port = split_host_port(parser.get("tv", "host"))
    port_value = parser.getint("tv", "port", fallback=constants.DEFAULT_TV_PORT)
    parser.set("tv", "host", host_value)

    if parsed_port is not None:
        port_value = parsed_port
        parser.set("tv", "port", str(parsed_port))

    tv = TVConfig(
        host=host_value,
        port=port_value,
        api_version=parser.get("tv", "api_version").strip("/ ")
        or constants.DEFAULT_API_VERSION,
    )

    commands = CommandConfig(
        timeout_seconds=_positive(
            parser.getfloat(
                "commands",
                "timeout_seconds",
                fallback=constants.DEFAULT_COMMAND_TIMEOUT_SECONDS,
            ),
            constants.DEFAULT_COMMAND_TIMEOUT_SECONDS,
        ),
        send_delay_seconds=max(
            0.0,
            parser.getfloat(
                "commands",
                "send_delay_seconds",
                fallback=constants.DEFAULT_SEND_DELAY_SECONDS,
            ),
        ),
        retry_pause_seconds=max(
            0.0,
            parser.getfloat(
                "commands",
                "retry_pause_seconds",
                fallback=constants.DEFAULT_RETRY_PAUSE_SECONDS,
            ),
        ),
    )

    probe = ProbeConfig(
        timeout_seconds=_positive(
            parser.getfloat(
                "probe",
                "timeout_seconds",
                fallback=constants.DEFAULT_PROBE_TIMEOUT_SECONDS,
            ),
            constants.DEFAULT_PROBE_TIMEOUT_SECONDS,
        ),
    )

    alias_overrides: Dict[str, List[str]] = {
        name: _parse_list(value, default=[])
        for name, value in parser.items("aliases")
    }

    log_path_value = parser.get("logging", "path", fallback="").strip()
    logging_config = LoggingConfig(
        level=parser.get("logging", "level", fallback="INFO"),
        path=Path(log_path_value).expanduser() if log_path_value else None,
        log_network=parser.getboolean("logging", "log_network", fallback=False),
    )

    bridge = BridgeConfig(
        host=parser.get("bridge", "host", fallback=constants.DEFAULT_BRIDGE_HOST),
        port=parser.getint("bridge", "port", fallback=constants.DEFAULT_BRIDGE_PORT),
    )

    return RemoteConfig(
        tv=tv,
        commands=commands,
        probe=probe,
        logging=logging_config,
        bridge=bridge,
        raw=parser,
        path=config_path,
        aliases=build_aliases(alias_overrides),
    )


def save_config(config: RemoteConfig) -> None:
    """Persist the current configuration to disk."""

    config_path = config.path
    config_path.parent.mkdir(parents=True, exist_ok=True)
    with config_path.open("w", encoding="utf-8") as stream:
        config.raw.write(stream)
