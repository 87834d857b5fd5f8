# link_scout/crawler/pool.py
"""
Fixed-size pool of page fetchers.

Usage::

    async with FetcherPool(backend, size=15, should_block=predicate) as pool:
        async with pool.lease() as fetcher:
            snapshot = await fetcher.navigate(url, timeout=20.0, wait_until="domcontentloaded")

A fetcher is owned by one caller between :meth:`FetcherPool.acquire` and
:meth:`FetcherPool.release`. The pool never replaces a fetcher that was not
released, so every acquire must be paired with a release; :meth:`lease` does
that on every exit path.
"""
from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, List

from link_scout.crawler.fetcher import BlockPredicate, FetcherBackend, PageFetcher
from link_scout.logger import logger


class FetcherPool:
    """Hands out reusable fetchers, suspending callers while all are leased."""

    def __init__(self, backend: FetcherBackend, size: int, should_block: BlockPredicate) -> None:
        if size < 1:
            raise ValueError("pool size must be >= 1")
        self.backend = backend
        self.size = size
        self.should_block = should_block
        self._fetchers: List[PageFetcher] = []
        self._available: asyncio.Queue[PageFetcher] = asyncio.Queue()
        self._leased = 0
        self._peak_leased = 0
        self._started = False

    async def __aenter__(self) -> FetcherPool:
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.stop()

    async def start(self) -> None:
        """Start the backend and create all fetchers up front.

        If the backend or any fetcher fails to start, whatever was already
        created is closed and the backend stopped before the error propagates.
        """
        if self._started:
            return
        try:
            await self.backend.start()
            for _ in range(self.size):
                fetcher = await self.backend.new_fetcher(self.should_block)
                self._fetchers.append(fetcher)
                self._available.put_nowait(fetcher)
        except BaseException:
            logger.error("Fetcher pool failed to start after %d of %d fetchers", len(self._fetchers), self.size)
            await self._teardown()
            raise
        self._started = True
        logger.debug("Fetcher pool started with %d fetchers", self.size)

    async def stop(self) -> None:
        if not self._started:
            return
        await self._teardown()
        self._started = False
        logger.debug("Fetcher pool stopped")

    async def _teardown(self) -> None:
        for fetcher in self._fetchers:
            try:
                await fetcher.close()
            except Exception as e:
                logger.warning("Error closing fetcher: %s", e)
        self._fetchers.clear()
        self._available = asyncio.Queue()
        await self.backend.stop()

    async def acquire(self) -> PageFetcher:
        """Wait for a free fetcher and take exclusive ownership of it."""
        if not self._started:
            raise RuntimeError("Fetcher pool not started. Call start() first.")
        fetcher = await self._available.get()
        self._leased += 1
        self._peak_leased = max(self._peak_leased, self._leased)
        return fetcher

    def release(self, fetcher: PageFetcher) -> None:
        """Give *fetcher* back to the pool."""
        self._leased -= 1
        self._available.put_nowait(fetcher)

    @asynccontextmanager
    async def lease(self) -> AsyncIterator[PageFetcher]:
        fetcher = await self.acquire()
        try:
            yield fetcher
        finally:
            self.release(fetcher)

    @property
    def available_count(self) -> int:
        return self._available.qsize()

    @property
    def leased_count(self) -> int:
        return self._leased

    @property
    def peak_leased(self) -> int:
        """Highest number of fetchers leased at the same time so far."""
        return self._peak_leased

    @property
    def is_started(self) -> bool:
        return self._started


__all__ = ["FetcherPool"]
