# File: link_scout/aggregator.py
"""link_scout.aggregator: results collected while crawling one origin."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Tuple

from link_scout.crawler.models import Verdict


@dataclass(slots=True)
class BrokenPage:
    """A page classified as not found, and the first page that linked to it."""

    url: str
    referrer: str
    reason: str


@dataclass(slots=True)
class FailedPage:
    """A page whose attempt ended in a navigation error; never retried."""

    url: str
    referrer: str
    error: str


@dataclass(slots=True)
class CrawlReport:
    """Visited count plus broken and failed pages, keyed by URL."""

    start_url: str
    visited: int = 0
    broken: Dict[str, BrokenPage] = field(default_factory=dict)
    failed: Dict[str, FailedPage] = field(default_factory=dict)

    def record_visit(self) -> int:
        self.visited += 1
        return self.visited

    def record_broken(self, url: str, referrer: str, verdict: Verdict) -> bool:
        """Store *url* as broken. The first referrer wins; returns False for repeats."""
        if url in self.broken:
            return False
        self.broken[url] = BrokenPage(url=url, referrer=referrer, reason=verdict.value)
        return True

    def record_failure(self, url: str, referrer: str, error: str) -> bool:
        if url in self.failed:
            return False
        self.failed[url] = FailedPage(url=url, referrer=referrer, error=error)
        return True

    def rows(self) -> List[Tuple[str, str]]:
        """``(broken url, referrer)`` pairs in discovery order."""
        return [(page.url, page.referrer) for page in self.broken.values()]

    def as_dict(self) -> Dict[str, Any]:
        return {
            "start_url": self.start_url,
            "visited": self.visited,
            "broken": [asdict(page) for page in self.broken.values()],
            "failed": [asdict(page) for page in self.failed.values()],
        }

    def json(self, *, pretty: bool = False) -> str:
        return json.dumps(self.as_dict(), ensure_ascii=False, indent=2 if pretty else None)


__all__ = ["BrokenPage", "FailedPage", "CrawlReport"]
