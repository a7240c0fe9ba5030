from __future__ import annotations

import asyncio
import logging
import time

from hostdash.collectors.base import BaseCollector

logger = logging.getLogger(__name__)


class ReachabilityProber(BaseCollector):
    """Estimates internet latency from a bare TCP handshake.

    Tries ``primary`` then ``fallback`` once each; no payload is sent.
    The handshake is bounded only by the OS connect timeout.
    """

    name = "reachability"

    def __init__(
        self,
        primary: str = "8.8.8.8",
        fallback: str = "1.1.1.1",
        port: int = 53,
    ) -> None:
        self.targets = (primary, fallback)
        self.port = port

    async def probe(self) -> float | None:
        """Return handshake latency in milliseconds, or None if unreachable."""
        for host in self.targets:
            try:
                return await self._handshake_ms(host)
            except OSError as exc:
                logger.debug("Probe %s:%d failed: %r", host, self.port, exc)
        return None

    async def _handshake_ms(self, host: str) -> float:
        start = time.perf_counter()
        _, writer = await asyncio.open_connection(host, self.port)
        elapsed_ms = (time.perf_counter() - start) * 1000.0

        writer.close()
        try:
            await writer.wait_closed()
        except OSError:
            pass
        return elapsed_ms
