# File: link_scout/engine.py
"""link_scout.engine: wiring of backend, pool, session and dispatcher for one crawl."""

from __future__ import annotations

from typing import Optional

from link_scout.aggregator import CrawlReport
from link_scout.config import CrawlerConfig
from link_scout.crawler.dispatcher import Dispatcher
from link_scout.crawler.fetcher import (
    FetcherBackend,
    HttpBackend,
    PlaywrightBackend,
    make_block_predicate,
)
from link_scout.crawler.pool import FetcherPool
from link_scout.crawler.session import CrawlSession
from link_scout.crawler.worker import CrawlWorker
from link_scout.logger import logger

__all__ = ["build_backend", "start_scan"]


def build_backend(config: CrawlerConfig) -> FetcherBackend:
    """Create the fetcher backend named by ``config.backend``."""
    if config.backend == "http":
        return HttpBackend(timeout=config.navigation_timeout, user_agent=config.user_agent)
    return PlaywrightBackend(
        headless=config.headless,
        timeout=config.navigation_timeout,
        browser_args=config.browser_args,
        user_agent=config.user_agent,
    )


async def start_scan(
    config: CrawlerConfig, backend: Optional[FetcherBackend] = None
) -> CrawlReport:
    """Crawl the origin of ``config.start_url`` and return the collected report."""
    backend = backend if backend is not None else build_backend(config)
    session = CrawlSession(start_url=str(config.start_url), origin=config.origin)
    should_block = make_block_predicate(config.blocked_extensions)

    logger.info("Crawling %s with the %s backend", session.start_url, config.backend)
    async with FetcherPool(backend, config.pool_size, should_block) as pool:
        worker = CrawlWorker(
            session,
            pool,
            timeout=config.navigation_timeout,
            wait_until=config.wait_until,
            not_found_phrases=config.not_found_phrases,
        )
        dispatcher = Dispatcher(session, worker, concurrency=config.concurrency)
        return await dispatcher.run()
