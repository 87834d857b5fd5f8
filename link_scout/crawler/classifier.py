# link_scout/crawler/classifier.py
"""
Decide whether a fetched page is a "not found" page.

Two checks run in order: the HTTP status, then the visible text. The text
check catches single-page applications that answer 200 and render their
error view on the client.
"""
from __future__ import annotations

from typing import Iterable

from link_scout.config import DEFAULT_NOT_FOUND_PHRASES
from link_scout.crawler.models import PageSnapshot, Verdict

NOT_FOUND_STATUS = 404


def looks_like_not_found(text: str, phrases: Iterable[str] = DEFAULT_NOT_FOUND_PHRASES) -> bool:
    lowered = text.lower()
    return any(phrase.lower() in lowered for phrase in phrases)


def classify(snapshot: PageSnapshot, phrases: Iterable[str] = DEFAULT_NOT_FOUND_PHRASES) -> Verdict:
    # only 404 counts, not every 4xx
    if snapshot.status == NOT_FOUND_STATUS:
        return Verdict.NOT_FOUND_STATUS
    if looks_like_not_found(snapshot.text, phrases):
        return Verdict.NOT_FOUND_HEURISTIC
    return Verdict.HEALTHY


__all__ = ["NOT_FOUND_STATUS", "classify", "looks_like_not_found"]
