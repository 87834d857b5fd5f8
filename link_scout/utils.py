# File: link_scout/utils.py
"""link_scout.utils: URL helpers used when deciding which links to follow."""

from __future__ import annotations

from typing import Iterable, List, Sequence
from urllib.parse import urlsplit

from link_scout.logger import logger

__all__: Sequence[str] = (
    "origin_of",
    "is_same_origin",
    "has_fragment",
    "crawlable_links",
    "remove_duplicates",
)


def origin_of(url: str) -> str:
    """Return ``scheme://netloc`` of *url* (scheme and host lower-cased)."""
    parts = urlsplit(url)
    return f"{parts.scheme.lower()}://{parts.netloc.lower()}"


def is_same_origin(url: str, origin: str) -> bool:
    """True when *url* is an http(s) URL with exactly the given origin."""
    try:
        parts = urlsplit(url)
    except ValueError:
        logger.debug("Unparsable URL skipped: %s", url)
        return False
    if parts.scheme.lower() not in ("http", "https"):
        return False
    return origin_of(url) == origin.lower()


def has_fragment(url: str) -> bool:
    """Links carrying ``#`` are skipped outright, not stripped."""
    return "#" in url


def remove_duplicates(urls: Iterable[str]) -> List[str]:
    """Drop repeated URLs while keeping their first-seen order."""
    return list(dict.fromkeys(urls))


def crawlable_links(hrefs: Iterable[str], origin: str) -> List[str]:
    """Filter *hrefs* down to same-origin links without fragments, in page order."""
    links = [href for href in hrefs if not has_fragment(href) and is_same_origin(href, origin)]
    return remove_duplicates(links)
