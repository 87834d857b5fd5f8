# link_scout/crawler/models.py
"""
Data models for the LinkScout crawler.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

#: referrer recorded for the start URL
ROOT_REFERRER = "Root"


class CrawlState(Enum):
    """Lifecycle of a URL inside one crawl: UNSEEN -> IN_FLIGHT -> VISITED."""

    UNSEEN = "unseen"
    IN_FLIGHT = "in_flight"
    VISITED = "visited"


class Verdict(Enum):
    """Outcome of classifying a fetched page."""

    HEALTHY = "healthy"
    NOT_FOUND_STATUS = "status"
    NOT_FOUND_HEURISTIC = "heuristic"

    @property
    def is_broken(self) -> bool:
        return self is not Verdict.HEALTHY


@dataclass(frozen=True, slots=True)
class FrontierEntry:
    """A URL waiting for a crawl attempt and the page it was found on."""

    url: str
    referrer: str = ROOT_REFERRER


@dataclass(slots=True)
class PageSnapshot:
    """What a fetcher saw after navigating: status, visible text and anchors."""

    url: str
    status: Optional[int]
    text: str = ""
    hrefs: List[str] = field(default_factory=list)
