# PlaywrightFetcher / PlaywrightBackend against mocked playwright objects (no browser needed)
from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from link_scout.crawler.fetcher import (
    NavigationError,
    PlaywrightBackend,
    PlaywrightFetcher,
    TransportAbort,
    make_block_predicate,
)

URL = "https://example.com/page"


def _page(status=200, text="Hello", hrefs=None):
    page = MagicMock()
    response = MagicMock()
    response.status = status
    page.goto = AsyncMock(return_value=response)
    page.evaluate = AsyncMock(return_value=text)
    page.eval_on_selector_all = AsyncMock(return_value=hrefs or [])
    page.close = AsyncMock()
    return page


@pytest.mark.asyncio()
async def test_navigate_returns_snapshot():
    page = _page(status=404, text="Gone", hrefs=["https://example.com/a"])
    snapshot = await PlaywrightFetcher(page).navigate(URL, timeout=20.0, wait_until="domcontentloaded")

    page.goto.assert_awaited_once_with(URL, wait_until="domcontentloaded", timeout=20000.0)
    assert snapshot.status == 404
    assert snapshot.text == "Gone"
    assert snapshot.hrefs == ["https://example.com/a"]


@pytest.mark.asyncio()
async def test_navigate_without_response():
    page = _page()
    page.goto.return_value = None
    assert await PlaywrightFetcher(page).navigate(URL, timeout=1.0) is None
    page.evaluate.assert_not_awaited()


@pytest.mark.asyncio()
@pytest.mark.parametrize(
    "message",
    ["net::ERR_ABORTED at https://example.com/menu.pdf", "Download is starting"],
)
async def test_aborts_become_transport_abort(message):
    page = _page()
    page.goto.side_effect = PlaywrightError(message)
    with pytest.raises(TransportAbort):
        await PlaywrightFetcher(page).navigate(URL, timeout=1.0)


@pytest.mark.asyncio()
async def test_timeout_becomes_navigation_error():
    page = _page()
    page.goto.side_effect = PlaywrightTimeoutError("Timeout 1000ms exceeded.\n=== logs ===")
    with pytest.raises(NavigationError) as info:
        await PlaywrightFetcher(page).navigate(URL, timeout=1.0)
    assert info.value.reason == "Timeout 1000ms exceeded."


@pytest.mark.asyncio()
async def test_evaluation_error_becomes_navigation_error():
    page = _page()
    page.evaluate.side_effect = PlaywrightError("Execution context was destroyed")
    with pytest.raises(NavigationError):
        await PlaywrightFetcher(page).navigate(URL, timeout=1.0)


@pytest.mark.asyncio()
async def test_new_fetcher_installs_blocking_route():
    page = _page()
    page.route = AsyncMock()
    context = MagicMock()
    context.new_page = AsyncMock(return_value=page)

    backend = PlaywrightBackend()
    backend._context = context
    await backend.new_fetcher(make_block_predicate([".pdf"]))

    pattern, handler = page.route.await_args.args
    assert pattern == "**/*"

    blocked = MagicMock()
    blocked.request.url = "https://example.com/menu.pdf"
    blocked.abort = AsyncMock()
    blocked.continue_ = AsyncMock()
    await handler(blocked)
    blocked.abort.assert_awaited_once_with("aborted")
    blocked.continue_.assert_not_awaited()

    allowed = MagicMock()
    allowed.request.url = "https://example.com/about"
    allowed.abort = AsyncMock()
    allowed.continue_ = AsyncMock()
    await handler(allowed)
    allowed.continue_.assert_awaited_once()
    allowed.abort.assert_not_awaited()


@pytest.mark.asyncio()
async def test_new_fetcher_requires_start():
    with pytest.raises(RuntimeError):
        await PlaywrightBackend().new_fetcher(make_block_predicate([]))
