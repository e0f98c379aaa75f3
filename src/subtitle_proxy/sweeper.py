"""Background task that periodically sweeps expired cache entries."""

import asyncio
import contextlib
import logging

from subtitle_proxy.cache import ResponseCache

logger = logging.getLogger(__name__)


class CacheSweeper:
    """Runs ``cache.sweep()`` every ``interval`` seconds while entered.

    Entering is reference counted, so nested users (the HTTP app and each
    MCP session) share a single task.
    """

    def __init__(self, cache: ResponseCache, interval: float = 3600):
        self._cache = cache
        self._interval = interval
        self._task: asyncio.Task | None = None
        self._users = 0

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            try:
                removed = self._cache.sweep()
            except Exception:
                logger.exception("Cache sweep failed")
                continue
            if removed:
                logger.info(f"Cache sweep removed {removed} expired entries")

    async def __aenter__(self) -> "CacheSweeper":
        self._users += 1
        if self._task is None:
            self._task = asyncio.create_task(self._run())
            logger.debug(f"Cache sweeper started (every {self._interval}s)")
        return self

    async def __aexit__(self, *exc_info) -> None:
        self._users -= 1
        if self._users > 0 or self._task is None:
            return
        task, self._task = self._task, None
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
        logger.debug("Cache sweeper stopped")
