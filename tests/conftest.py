# File: tests/conftest.py
from __future__ import annotations

import asyncio
from typing import Callable, Dict, List, Optional, Union

import pytest

from link_scout.config import CrawlerConfig
from link_scout.crawler.fetcher import BlockPredicate, NavigationError, TransportAbort
from link_scout.crawler.models import PageSnapshot

BASE = "https://example.com"

#: a page served by the fake site: a snapshot, an exception to raise, or None for "no response"
FakePage = Union[PageSnapshot, Exception, None]


def page(url: str, *links: str, status: int = 200, text: str = "Welcome") -> PageSnapshot:
    """Build a snapshot whose anchors are *links* (already absolute)."""
    return PageSnapshot(url=url, status=status, text=text, hrefs=list(links))


class FakeFetcher:
    """Serves snapshots from a dict instead of a browser; unknown URLs are 404."""

    def __init__(self, site: Dict[str, FakePage], should_block: BlockPredicate, calls: List[str],
                 delay: float = 0.0) -> None:
        self.site = site
        self.should_block = should_block
        self.calls = calls
        self.delay = delay
        self.closed = False

    async def navigate(self, url: str, *, timeout: float, wait_until: str = "domcontentloaded"
                       ) -> Optional[PageSnapshot]:
        if self.should_block(url):
            raise TransportAbort(url, "blocked extension")
        self.calls.append(url)
        await asyncio.sleep(self.delay)
        if url not in self.site:
            return PageSnapshot(url=url, status=404, text="Not Found")
        result = self.site[url]
        if isinstance(result, Exception):
            raise result
        return result

    async def close(self) -> None:
        self.closed = True


class FakeBackend:
    def __init__(self, site: Dict[str, FakePage], delay: float = 0.0) -> None:
        self.site = site
        self.delay = delay
        self.calls: List[str] = []
        self.fetchers: List[FakeFetcher] = []
        self.started = False
        self.stopped = False

    async def start(self) -> None:
        self.started = True

    async def new_fetcher(self, should_block: BlockPredicate) -> FakeFetcher:
        fetcher = FakeFetcher(self.site, should_block, self.calls, self.delay)
        self.fetchers.append(fetcher)
        return fetcher

    async def stop(self) -> None:
        self.stopped = True


@pytest.fixture()
def make_config() -> Callable[..., CrawlerConfig]:
    """Return a factory of valid configs rooted at ``https://example.com/``."""

    def _make(**overrides) -> CrawlerConfig:
        data = dict(
            start_url=f"{BASE}/",
            concurrency=3,
            pool_size=3,
            navigation_timeout=2.0,
            backend="http",
        )
        data.update(overrides)
        return CrawlerConfig(**data)

    return _make


@pytest.fixture()
def scenario_site() -> Dict[str, FakePage]:
    """
    A -> B (clean), A -> C (missing, 404), B -> D (200 rendering "Not Found").
    """
    a, b, c, d = f"{BASE}/", f"{BASE}/b", f"{BASE}/c", f"{BASE}/d"
    return {
        a: page(a, b, c),
        b: page(b, d, text="About us"),
        d: page(d, status=200, text="Sorry, Not Found"),
    }


@pytest.fixture()
def navigation_error() -> NavigationError:
    return NavigationError(f"{BASE}/slow", "Timeout 2000ms exceeded")
