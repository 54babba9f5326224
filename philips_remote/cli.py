"""Command-line interface for philips-remote."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any, Awaitable, Callable, Optional

from . import constants
from .app import PhilipsRemoteApp
from .config import RemoteConfig, load_config
from .core import split_host_port
from .logging import configure_logging
from .remote import RemoteControl

LOGGER = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="philips-remote", description="Remote control for Philips Smart TVs"
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=constants.DEFAULT_CONFIG_PATH,
        help=f"Path to configuration file (default: {constants.DEFAULT_CONFIG_PATH})",
    )
    parser.add_argument(
        "--host",
        help="TV address as host, host:port or [ipv6]:port (overrides the config file)",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log every request and response"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    send_parser = subparsers.add_parser("send", help="Send a remote control command")
    send_parser.add_argument("key", help="Logical command, e.g. Confirm or VolumeUp")

    subparsers.add_parser("check", help="Check connectivity with the TV")
    subparsers.add_parser("discover", help="List the keys the TV reports")
    subparsers.add_parser("serve", help="Run the local HTTP bridge")
    subparsers.add_parser(
        "show-config", help="Print the resolved configuration and exit"
    )

    return parser


def _apply_host_override(config: RemoteConfig, host: Optional[str]) -> None:
    if not host:
        return
    host_part, port = split_host_port(host)
    config.tv.host = host_part
    if port is not None:
        config.tv.port = port


def _run_once(
    config: RemoteConfig, operation: Callable[[RemoteControl], Awaitable[Any]]
) -> Any:
    async def _runner() -> Any:
        async with RemoteControl(config) as remote:
            return await operation(remote)

    return asyncio.run(_runner())


def _print_result(payload: dict[str, Any]) -> None:
    print(json.dumps(payload, indent=2, ensure_ascii=False))


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    config = load_config(args.config)
    _apply_host_override(config, args.host)

    if args.command == "serve":
        PhilipsRemoteApp.start(config)
        return 0

    if args.command == "show-config":
        print(f"Configuration loaded from {config.path!s}\n")
        for section in config.raw.sections():
            print(f"[{section}]")
            for key, value in config.raw[section].items():
                print(f"{key} = {value}")
            print()
        return 0

    configure_logging(
        "DEBUG" if args.verbose else config.logging.level,
        log_path=config.logging.path,
        log_network=config.logging.log_network,
    )

    if args.command == "send":
        try:
            result = _run_once(config, lambda remote: remote.send_command(args.key))
        except ValueError as exc:
            LOGGER.error("Invalid command: %s", exc)
            return 1
        _print_result(result.as_dict())
        return 0 if result.success else 1

    if args.command == "check":
        status = _run_once(config, lambda remote: remote.check_connection())
        _print_result(status.as_dict())
        return 0 if status.connected else 1

    if args.command == "discover":
        discovery = _run_once(config, lambda remote: remote.discover_commands())
        _print_result(discovery.as_dict())
        return 0 if discovery.success else 1

    LOGGER.error("Unknown command: %s", args.command)
    return 1


if __name__ == "__main__":
    sys.exit(main())
