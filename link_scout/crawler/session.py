# link_scout/crawler/session.py
"""State owned by one crawl run, shared by the dispatcher and its workers."""
from __future__ import annotations

from dataclasses import dataclass, field

from link_scout.aggregator import CrawlReport
from link_scout.crawler.frontier import Frontier
from link_scout.crawler.models import ROOT_REFERRER
from link_scout.utils import origin_of


@dataclass
class CrawlSession:
    start_url: str
    origin: str = ""
    frontier: Frontier = field(default_factory=Frontier)
    report: CrawlReport = field(init=False)

    def __post_init__(self) -> None:
        if not self.origin:
            self.origin = origin_of(self.start_url)
        self.report = CrawlReport(start_url=self.start_url)

    def seed(self) -> bool:
        """Queue the start URL with the root referrer."""
        return self.frontier.enqueue(self.start_url, ROOT_REFERRER)


__all__ = ["CrawlSession"]
