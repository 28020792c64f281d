from __future__ import annotations

from typing import Mapping, Union

from ..models import FeedDocument, Source
from .base import BaseFeedProvider


class StaticFeedProvider(BaseFeedProvider):
    """Serves canned feeds keyed by url for offline development and tests.

    A value that is an exception instance is raised instead of returned, which
    is how a failing source is simulated.
    """

    def __init__(self, feeds: Mapping[str, Union[FeedDocument, Exception]]) -> None:
        self._feeds = dict(feeds)

    def fetch(self, source: Source, timeout: float = 15.0) -> FeedDocument:
        try:
            feed = self._feeds[source.url]
        except KeyError:
            raise LookupError(f"No canned feed for {source.url}") from None
        if isinstance(feed, Exception):
            raise feed
        return feed
