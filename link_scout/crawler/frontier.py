# link_scout/crawler/frontier.py
"""
Frontier: pending work plus the dedup guards of one crawl.

The pending queue is FIFO, so exploration is approximately breadth-first:
links found while a batch runs are appended behind everything already queued.

None of the mutating methods await, so within one event loop each call runs
to completion before any other coroutine touches the frontier.
"""
from __future__ import annotations

import asyncio
from collections import deque
from typing import Deque, List, Set

from link_scout.crawler.models import ROOT_REFERRER, CrawlState, FrontierEntry


class Frontier:
    def __init__(self) -> None:
        self._pending: Deque[FrontierEntry] = deque()
        self._in_flight: Set[str] = set()
        self._visited: Set[str] = set()
        self._changed = asyncio.Event()

    def state_of(self, url: str) -> CrawlState:
        if url in self._visited:
            return CrawlState.VISITED
        if url in self._in_flight:
            return CrawlState.IN_FLIGHT
        return CrawlState.UNSEEN

    def is_known(self, url: str) -> bool:
        """True once *url* has been dispatched, whether or not it finished."""
        return url in self._visited or url in self._in_flight

    def enqueue(self, url: str, referrer: str = ROOT_REFERRER) -> bool:
        """Queue *url* unless it is already in flight or visited."""
        if self.is_known(url):
            return False
        self._pending.append(FrontierEntry(url, referrer))
        self._changed.set()
        return True

    def dequeue_batch(self, max_n: int) -> List[FrontierEntry]:
        """
        Pop up to *max_n* entries and move them to IN_FLIGHT.

        The same URL may sit in the queue several times (found on several
        pages before its first attempt started); stale copies are dropped here.
        """
        batch: List[FrontierEntry] = []
        while self._pending and len(batch) < max_n:
            entry = self._pending.popleft()
            if self.is_known(entry.url):
                continue
            self._in_flight.add(entry.url)
            batch.append(entry)
        return batch

    def mark_visited(self, url: str) -> None:
        self._in_flight.discard(url)
        self._visited.add(url)
        self._changed.set()

    def is_quiescent(self) -> bool:
        return not self._pending and not self._in_flight

    async def wait_for_work(self) -> None:
        """Suspend while nothing is pending but attempts are still running."""
        while not self._pending and self._in_flight:
            self._changed.clear()
            await self._changed.wait()

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    @property
    def in_flight_count(self) -> int:
        return len(self._in_flight)

    @property
    def visited_count(self) -> int:
        return len(self._visited)


__all__ = ["Frontier"]
