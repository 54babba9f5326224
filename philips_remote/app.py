"""Long-running service hosting the remote bridge."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from .bridge import RemoteBridge
from .config import RemoteConfig, load_config
from .logging import configure_logging
from .remote import RemoteControl

LOGGER = logging.getLogger(__name__)


class PhilipsRemoteApp:
    """Owns the TV client and bridge server for the lifetime of the process."""

    def __init__(self, config: Optional[RemoteConfig] = None) -> None:
        self._config = config or load_config()
        self._shutdown_event: Optional[asyncio.Event] = None

    @property
    def config(self) -> RemoteConfig:
        return self._config

    async def run(self) -> None:
        self._shutdown_event = asyncio.Event()
        config = self._config

        LOGGER.info(
            "philips-remote starting with config %s (tv=%s)",
            config.path,
            config.address.base_url,
        )

        async with RemoteControl(config) as remote:
            bridge = RemoteBridge(remote, config.bridge.host, config.bridge.port)
            await bridge.start()
            try:
                status = await remote.check_connection()
                if status.connected:
                    LOGGER.info("TV reachable: %s (%s)", status.model, status.version)
                else:
                    LOGGER.warning("TV not reachable yet: %s", status.error)
                await self._shutdown_event.wait()
            except asyncio.CancelledError:
                LOGGER.info("philips-remote received shutdown signal")
                raise
            finally:
                await bridge.stop()

    def request_shutdown(self) -> None:
        if self._shutdown_event is not None:
            self._shutdown_event.set()

    @classmethod
    def start(cls, config: Optional[RemoteConfig] = None) -> None:
        instance = cls(config=config)
        configure_logging(
            instance._config.logging.level,
            log_path=instance._config.logging.path,
            log_network=instance._config.logging.log_network,
        )
        try:
            asyncio.run(instance.run())
        except KeyboardInterrupt:
            LOGGER.info("philips-remote received shutdown signal")
