"""Lifespan middleware - opens the pool on startup, releases clients on shutdown."""

import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import Any

from psycopg_pool import AsyncConnectionPool

logger = logging.getLogger(__name__)


class LifespanMiddleware:
    """Opens the connection pool on startup; closes it and HTTP clients on shutdown."""

    def __init__(
        self,
        pool: AsyncConnectionPool,
        closers: Sequence[Callable[[], Awaitable[None]]] = (),
    ) -> None:
        self._pool = pool
        self._closers = closers

    async def process_startup(
        self, scope: dict[str, Any], event: dict[str, Any]
    ) -> None:
        await self._pool.open()
        logger.info("Database pool opened")

    async def process_shutdown(
        self, scope: dict[str, Any], event: dict[str, Any]
    ) -> None:
        for close in self._closers:
            await close()
        await self._pool.close()
        logger.info("Database pool closed")
