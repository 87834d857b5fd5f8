# link_scout/crawler/worker.py
"""
One crawl attempt: lease a fetcher, load the page, classify it, queue its links.

Whatever happens inside an attempt, it ends with the URL marked visited, the
fetcher back in the pool and the visit counted once. Errors never leave
:meth:`CrawlWorker.attempt`.
"""
from __future__ import annotations

from typing import Iterable, List

from link_scout.config import DEFAULT_NOT_FOUND_PHRASES
from link_scout.crawler.classifier import classify
from link_scout.crawler.fetcher import TransportAbort
from link_scout.crawler.models import FrontierEntry, Verdict
from link_scout.crawler.pool import FetcherPool
from link_scout.crawler.session import CrawlSession
from link_scout.logger import logger
from link_scout.utils import crawlable_links


class CrawlWorker:
    def __init__(
        self,
        session: CrawlSession,
        pool: FetcherPool,
        *,
        timeout: float = 20.0,
        wait_until: str = "domcontentloaded",
        not_found_phrases: Iterable[str] = DEFAULT_NOT_FOUND_PHRASES,
    ) -> None:
        self.session = session
        self.pool = pool
        self.timeout = timeout
        self.wait_until = wait_until
        self.not_found_phrases = tuple(not_found_phrases)
        self.attempts = 0

    async def attempt(self, entry: FrontierEntry) -> Verdict | None:
        """Crawl ``entry.url``; returns the verdict or ``None`` when nothing was classified."""
        url, referrer = entry.url, entry.referrer
        frontier, report = self.session.frontier, self.session.report
        self.attempts += 1
        logger.info("[%d] Visiting: %s", self.attempts, url)

        verdict: Verdict | None = None
        try:
            async with self.pool.lease() as fetcher:
                snapshot = await fetcher.navigate(
                    url, timeout=self.timeout, wait_until=self.wait_until
                )
                if snapshot is None:
                    logger.debug("No response for %s", url)
                    return None

                verdict = classify(snapshot, self.not_found_phrases)
                if verdict.is_broken:
                    report.record_broken(url, referrer, verdict)
                    logger.warning(
                        "404 (%s): %s (found on: %s)", verdict.value, url, referrer
                    )
                    return verdict

                queued = self._enqueue_links(url, snapshot.hrefs)
                logger.debug("%s: %d links, %d new", url, len(snapshot.hrefs), queued)
                return verdict
        except TransportAbort:
            return None
        except Exception as exc:
            report.record_failure(url, referrer, str(exc))
            logger.warning("Error navigating %s: %s", url, exc)
            return None
        finally:
            frontier.mark_visited(url)
            report.record_visit()

    def _enqueue_links(self, url: str, hrefs: List[str]) -> int:
        frontier = self.session.frontier
        queued = 0
        for link in crawlable_links(hrefs, self.session.origin):
            if frontier.enqueue(link, url):
                queued += 1
        return queued


__all__ = ["CrawlWorker"]
