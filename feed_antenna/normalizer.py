from __future__ import annotations

import calendar
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Any, List, Optional, Sequence

from .models import EPOCH, FeedDocument, Item, RawEntry, Source

_PRIMARY_DATE_FIELDS = ("published_parsed", "published", "pubDate")
_SECONDARY_DATE_FIELDS = ("updated_parsed", "updated", "dc_date", "date")


def normalize_document(source: Source, document: FeedDocument) -> List[Item]:
    return [normalize_entry(entry, source, document.title) for entry in document.entries]


def normalize_entry(entry: RawEntry, source: Source, feed_title: str = "") -> Item:
    return Item(
        title=_text(entry.get("title")),
        link=_text(entry.get("link")),
        published_at=extract_published_at(entry),
        source=source.label or feed_title or "",
    )


def extract_published_at(entry: RawEntry) -> datetime:
    """Primary date, then the alternate date field, then the epoch."""
    return (
        _first_date(entry, _PRIMARY_DATE_FIELDS)
        or _first_date(entry, _SECONDARY_DATE_FIELDS)
        or EPOCH
    )


def parse_date(value: Any) -> Optional[datetime]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return _as_utc(value)
    if isinstance(value, str):
        return _parse_date_string(value.strip())
    # feedparser hands back time.struct_time in UTC
    try:
        return datetime.fromtimestamp(calendar.timegm(value), tz=timezone.utc)
    except (TypeError, ValueError, OverflowError):
        return None


def _first_date(entry: RawEntry, fields: Sequence[str]) -> Optional[datetime]:
    for name in fields:
        parsed = parse_date(entry.get(name))
        if parsed is not None:
            return parsed
    return None


def _parse_date_string(value: str) -> Optional[datetime]:
    if not value:
        return None
    try:
        parsed = parsedate_to_datetime(value)
    except (TypeError, ValueError, IndexError):
        parsed = None
    if parsed is not None:
        return _as_utc(parsed)
    try:
        return _as_utc(datetime.fromisoformat(value.replace("Z", "+00:00")))
    except ValueError:
        return None


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""
