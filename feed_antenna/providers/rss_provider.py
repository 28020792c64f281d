from __future__ import annotations

import time
from typing import Optional

import feedparser
import requests

from ..config import DEFAULT_USER_AGENT
from ..models import FeedDocument, Source
from .base import BaseFeedProvider

CHUNK_SIZE = 1024


class FeedParseError(ValueError):
    """The response body could not be parsed as a feed."""


class FetchTimeout(requests.Timeout):
    """The whole download took longer than the per-source budget."""


class RSSFeedProvider(BaseFeedProvider):
    """Downloads RSS/Atom feeds with requests and parses them with feedparser."""

    def __init__(self, user_agent: str = DEFAULT_USER_AGENT, session: Optional[requests.Session] = None) -> None:
        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "User-Agent": user_agent,
                "Accept": "application/rss+xml, application/atom+xml, application/xml;q=0.9, */*;q=0.8",
            }
        )

    def fetch(self, source: Source, timeout: float = 15.0) -> FeedDocument:
        deadline = time.monotonic() + timeout
        with self._session.get(source.url, timeout=timeout, stream=True) as response:
            response.raise_for_status()
            chunks = []
            for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                chunks.append(chunk)
                if time.monotonic() > deadline:
                    raise FetchTimeout(f"Download of {source.url} exceeded {timeout:.1f}s")
        return parse_feed(b"".join(chunks))


def parse_feed(content: bytes | str) -> FeedDocument:
    feed = feedparser.parse(content)
    entries = list(feed.entries or [])
    # feedparser is lenient; only reject when nothing usable came out
    if feed.get("bozo") and not entries:
        raise FeedParseError(f"Malformed feed: {feed.get('bozo_exception')}")
    title = (feed.feed or {}).get("title") or ""
    return FeedDocument(entries=entries, title=title)
