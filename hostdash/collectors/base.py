from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class BaseCollector:
    """Common base for every snapshot source.

    A source's operations may raise; ``guard`` / ``guard_async`` turn a
    failure into the caller-supplied default and log it, so one broken
    source never takes the rest of the snapshot down with it.
    """

    name: str = "base"

    def guard(self, label: str, func: Callable[..., T], default: T, *args: Any) -> T:
        try:
            return func(*args)
        except Exception as exc:
            logger.info("Collector [%s] %s failed: %r", self.name, label, exc)
            return default

    async def guard_async(
        self,
        label: str,
        func: Callable[..., Awaitable[T]],
        default: T,
        *args: Any,
    ) -> T:
        try:
            return await func(*args)
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            logger.info("Collector [%s] %s failed: %r", self.name, label, exc)
            return default
