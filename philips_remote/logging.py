"""Logging configuration helpers."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

# Request/response dumps for every key press are logged here at DEBUG.
WIRE_LOGGER = "philips_remote.adapters"

_AIOHTTP_LOGGERS = ("aiohttp.access", "aiohttp.client", "aiohttp.server")


def _build_handlers(log_path: Optional[Path]) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if log_path:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))
    return handlers


def configure_logging(
    level: str = "INFO", *, log_path: Optional[Path] = None, log_network: bool = False
) -> None:
    """Replace the root handlers with console (and optional file) output.

    ``log_network`` forces the TV wire logger to DEBUG regardless of
    ``level`` and lets aiohttp's loggers through; otherwise aiohttp is held
    at WARNING so the bridge does not log every GUI poll.
    """

    logging.captureWarnings(True)
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=_build_handlers(log_path),
        force=True,
    )

    wire_level = logging.DEBUG if log_network else logging.NOTSET
    logging.getLogger(WIRE_LOGGER).setLevel(wire_level)

    aiohttp_level = logging.NOTSET if log_network else logging.WARNING
    for name in _AIOHTTP_LOGGERS:
        logging.getLogger(name).setLevel(aiohttp_level)
