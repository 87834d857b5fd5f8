# link_scout/crawler/dispatcher.py
"""
Drives the frontier to quiescence in batches.

Each round takes up to ``concurrency`` entries, runs their attempts together
and waits for the whole batch before taking the next one, so links found in
batch N are queued before batch N+1 is assembled.
"""
from __future__ import annotations

import asyncio
import time

from link_scout.aggregator import CrawlReport
from link_scout.crawler.session import CrawlSession
from link_scout.crawler.worker import CrawlWorker
from link_scout.logger import logger


class Dispatcher:
    def __init__(self, session: CrawlSession, worker: CrawlWorker, concurrency: int = 10) -> None:
        if concurrency < 1:
            raise ValueError("concurrency must be >= 1")
        self.session = session
        self.worker = worker
        self.concurrency = concurrency
        self.batches = 0

    async def run(self) -> CrawlReport:
        frontier = self.session.frontier
        self.session.seed()
        logger.info("Crawl started: %s (concurrency %d)", self.session.start_url, self.concurrency)
        start = time.monotonic()

        while not frontier.is_quiescent():
            batch = frontier.dequeue_batch(self.concurrency)
            if not batch:
                await frontier.wait_for_work()
                continue
            self.batches += 1
            await asyncio.gather(*(self.worker.attempt(entry) for entry in batch))

        report = self.session.report
        duration = time.monotonic() - start
        logger.info(
            "Finished: %d pages in %.2f s, %d broken, %d failed",
            report.visited,
            duration,
            len(report.broken),
            len(report.failed),
        )
        return report


__all__ = ["Dispatcher"]
