# link_scout/crawler/fetcher.py
"""
Page fetchers: navigate to a URL and report status, visible text and anchors.

Two backends share one contract:

* :class:`PlaywrightBackend` renders pages in headless Chromium, so client-side
  routes and script-built navigation are seen the way a visitor sees them.
* :class:`HttpBackend` issues plain GET requests with aiohttp and parses the
  markup with BeautifulSoup. No scripts run.

Every fetcher is created with a ``should_block(url)`` predicate. Blocked
requests are aborted and surface as :class:`TransportAbort`.
"""
from __future__ import annotations

import asyncio
from typing import Callable, Iterable, List, Optional, Protocol, Sequence
from urllib.parse import urljoin

from aiohttp import ClientError, ClientSession, ClientTimeout
from bs4 import BeautifulSoup
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import async_playwright

from link_scout.crawler.models import PageSnapshot
from link_scout.logger import logger

BlockPredicate = Callable[[str], bool]

_TEXT_SCRIPT = "() => document.body ? document.body.innerText : ''"
_HREFS_SCRIPT = "anchors => anchors.map(a => a.href)"
# navigation errors that come from a deliberate abort or a file download
_ABORT_MARKERS = ("ERR_ABORTED", "Download is starting")


class FetchError(Exception):
    """Base class for errors raised by a fetcher."""

    def __init__(self, url: str, reason: str = "") -> None:
        super().__init__(f"{url}: {reason}" if reason else url)
        self.url = url
        self.reason = reason


class TransportAbort(FetchError):
    """The request was aborted on purpose by the block predicate."""


class NavigationError(FetchError):
    """Timeout, DNS, connection or page-evaluation failure."""


def make_block_predicate(extensions: Iterable[str]) -> BlockPredicate:
    """Build ``should_block(url)``: true when the URL ends with a denied extension."""
    suffixes = tuple(ext.lower() for ext in extensions)

    def should_block(url: str) -> bool:
        return bool(suffixes) and url.lower().endswith(suffixes)

    return should_block


class PageFetcher(Protocol):
    async def navigate(
        self, url: str, *, timeout: float, wait_until: str
    ) -> Optional[PageSnapshot]:
        """Load *url*. ``None`` means the navigation produced no response."""
        ...

    async def close(self) -> None:
        ...


class FetcherBackend(Protocol):
    async def start(self) -> None:
        ...

    async def new_fetcher(self, should_block: BlockPredicate) -> PageFetcher:
        ...

    async def stop(self) -> None:
        ...


# --------------------------------------------------------------------------- #
#                                 Playwright                                  #
# --------------------------------------------------------------------------- #


class PlaywrightFetcher:
    """One reusable browser tab."""

    def __init__(self, page) -> None:
        self._page = page

    async def navigate(
        self, url: str, *, timeout: float, wait_until: str = "domcontentloaded"
    ) -> Optional[PageSnapshot]:
        try:
            response = await self._page.goto(url, wait_until=wait_until, timeout=timeout * 1000)
        except PlaywrightError as exc:
            if any(marker in str(exc) for marker in _ABORT_MARKERS):
                raise TransportAbort(url, "aborted") from exc
            raise NavigationError(url, _first_line(exc)) from exc
        if response is None:
            return None

        try:
            text = await self._page.evaluate(_TEXT_SCRIPT)
            hrefs = await self._page.eval_on_selector_all("a[href]", _HREFS_SCRIPT)
        except PlaywrightError as exc:
            raise NavigationError(url, _first_line(exc)) from exc
        return PageSnapshot(url=url, status=response.status, text=text or "", hrefs=list(hrefs))

    async def close(self) -> None:
        await self._page.close()


class PlaywrightBackend:
    """Launches Chromium once and opens one tab per fetcher."""

    def __init__(
        self,
        *,
        headless: bool = True,
        timeout: float = 20.0,
        browser_args: Sequence[str] = (),
        user_agent: Optional[str] = None,
    ) -> None:
        self.headless = headless
        self.timeout = timeout
        self.browser_args = list(browser_args)
        self.user_agent = user_agent
        self._playwright = None
        self._browser = None
        self._context = None

    async def start(self) -> None:
        self._playwright = await async_playwright().start()
        self._browser = await self._playwright.chromium.launch(
            headless=self.headless, args=self.browser_args
        )
        context_options = {"ignore_https_errors": True}
        if self.user_agent:
            context_options["user_agent"] = self.user_agent
        self._context = await self._browser.new_context(**context_options)
        self._context.set_default_timeout(self.timeout * 1000)
        logger.info("Chromium started (headless=%s)", self.headless)

    async def new_fetcher(self, should_block: BlockPredicate) -> PlaywrightFetcher:
        if self._context is None:
            raise RuntimeError("Backend not started. Call start() first.")
        page = await self._context.new_page()

        async def _route(route) -> None:
            if should_block(route.request.url):
                await route.abort("aborted")
            else:
                await route.continue_()

        await page.route("**/*", _route)
        return PlaywrightFetcher(page)

    async def stop(self) -> None:
        if self._browser is not None:
            try:
                await self._browser.close()
            except Exception as e:
                logger.warning("Error closing browser: %s", e)
            self._browser = None
            self._context = None
        if self._playwright is not None:
            try:
                await self._playwright.stop()
            except Exception as e:
                logger.warning("Error stopping playwright: %s", e)
            self._playwright = None


# --------------------------------------------------------------------------- #
#                                  aiohttp                                    #
# --------------------------------------------------------------------------- #


class HttpFetcher:
    """Static fetcher: one GET per navigation, anchors taken from the raw markup."""

    def __init__(self, session: ClientSession, should_block: BlockPredicate) -> None:
        self._session = session
        self._should_block = should_block

    async def navigate(
        self, url: str, *, timeout: float, wait_until: str = "domcontentloaded"
    ) -> Optional[PageSnapshot]:
        if self._should_block(url):
            raise TransportAbort(url, "blocked extension")
        try:
            async with self._session.get(url, timeout=ClientTimeout(total=timeout)) as resp:
                status = resp.status
                mime = resp.headers.get("Content-Type", "").split(";", 1)[0].strip().lower()
                if "html" not in mime:
                    return PageSnapshot(url=url, status=status)
                markup = await resp.text(errors="replace")
                final_url = str(resp.url)
        except (ClientError, asyncio.TimeoutError) as exc:
            raise NavigationError(url, str(exc) or type(exc).__name__) from exc

        soup = BeautifulSoup(markup, "html.parser")
        hrefs = _absolute_hrefs(soup, final_url)
        for tag in soup(["script", "style", "noscript", "template"]):
            tag.decompose()
        text = soup.body.get_text(" ", strip=True) if soup.body else soup.get_text(" ", strip=True)
        return PageSnapshot(url=url, status=status, text=text, hrefs=hrefs)

    async def close(self) -> None:
        # the session belongs to the backend
        return None


class HttpBackend:
    """Shares one aiohttp session between all fetchers of a pool."""

    def __init__(self, *, timeout: float = 20.0, user_agent: Optional[str] = None) -> None:
        self.timeout = timeout
        self.user_agent = user_agent
        self.session: Optional[ClientSession] = None

    async def start(self) -> None:
        headers = {"User-Agent": self.user_agent} if self.user_agent else None
        self.session = ClientSession(
            timeout=ClientTimeout(total=self.timeout),
            headers=headers,
            raise_for_status=False,
        )

    async def new_fetcher(self, should_block: BlockPredicate) -> HttpFetcher:
        if self.session is None:
            raise RuntimeError("Session not initialized")
        return HttpFetcher(self.session, should_block)

    async def stop(self) -> None:
        if self.session and not self.session.closed:
            await self.session.close()
        self.session = None


def _absolute_hrefs(soup: BeautifulSoup, base_url: str) -> List[str]:
    hrefs: List[str] = []
    for a in soup.find_all("a", href=True):
        href = a.get("href")
        if isinstance(href, str) and href.strip():
            hrefs.append(urljoin(base_url, href.strip()))
    return hrefs


def _first_line(exc: BaseException) -> str:
    text = str(exc).strip()
    return text.splitlines()[0] if text else type(exc).__name__


__all__ = (
    "BlockPredicate",
    "FetchError",
    "TransportAbort",
    "NavigationError",
    "make_block_predicate",
    "PageFetcher",
    "FetcherBackend",
    "PlaywrightFetcher",
    "PlaywrightBackend",
    "HttpFetcher",
    "HttpBackend",
)
