from .base import BaseFeedProvider
from .mock_provider import StaticFeedProvider
from .rss_provider import RSSFeedProvider

__all__ = ["BaseFeedProvider", "RSSFeedProvider", "StaticFeedProvider"]
