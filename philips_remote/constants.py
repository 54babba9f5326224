"""Constants used across the philips-remote package."""

from __future__ import annotations

from pathlib import Path

APP_NAME = "philips-remote"
DEFAULT_CONFIG_FILENAME = f"{APP_NAME}.cfg"
DEFAULT_CONFIG_PATH = Path.home() / ".config" / APP_NAME / DEFAULT_CONFIG_FILENAME

DEFAULT_TV_HOST = "192.168.1.191"
DEFAULT_TV_PORT = 1925
DEFAULT_API_VERSION = "1"

USER_AGENT = "Philips-TV-Remote/1.0"

DEFAULT_COMMAND_TIMEOUT_SECONDS = 5.0
DEFAULT_PROBE_TIMEOUT_SECONDS = 3.0
DEFAULT_SEND_DELAY_SECONDS = 0.1
DEFAULT_RETRY_PAUSE_SECONDS = 0.2

DEFAULT_BRIDGE_HOST = "127.0.0.1"
DEFAULT_BRIDGE_PORT = 8765
