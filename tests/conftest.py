from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from feed_antenna.config import AntennaConfig
from feed_antenna.models import FeedDocument, Source

BASE_TIME = datetime(2025, 8, 3, 12, 0, tzinfo=timezone.utc)


def make_entries(count: int, prefix: str, start: datetime = BASE_TIME, step_minutes: int = 7) -> list[dict]:
    return [
        {
            "title": f"{prefix} story {i}",
            "link": f"https://{prefix.lower()}.example.com/{i}",
            "published": (start - timedelta(minutes=step_minutes * i)).strftime("%a, %d %b %Y %H:%M:%S +0000"),
        }
        for i in range(count)
    ]


def make_document(count: int, prefix: str, title: str = "", **kwargs) -> FeedDocument:
    return FeedDocument(entries=make_entries(count, prefix, **kwargs), title=title)


@pytest.fixture
def config(tmp_path) -> AntennaConfig:
    return AntennaConfig(output_path=str(tmp_path / "antenna.json"), refresh_interval=60.0, max_workers=4)


@pytest.fixture
def sources() -> list[Source]:
    return [
        Source(label="Mainichi Technology Desk", url="https://a.example.com/rss"),
        Source(label="Broken", url="https://b.example.com/rss"),
        Source(label="Tiny", url="https://c.example.com/rss"),
    ]
