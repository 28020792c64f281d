from __future__ import annotations

from abc import ABC, abstractmethod

from ..models import FeedDocument, Source


class BaseFeedProvider(ABC):
    """Abstract base class for feed retrieval and parsing."""

    @abstractmethod
    def fetch(self, source: Source, timeout: float = 15.0) -> FeedDocument:
        """Return the parsed feed for ``source`` or raise on any failure."""
