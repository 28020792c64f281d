from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

from feed_antenna.models import Item
from feed_antenna.presentation import (
    LINK_REL,
    format_heading,
    format_time,
    render_page,
    truncate_source,
)

JST = timezone(timedelta(hours=9))


def _item(when: datetime, source: str = "Source") -> Item:
    return Item(title="t", link="https://x", published_at=when, source=source)


def test_heading_formats():
    assert format_heading(date(2025, 8, 3), "ja") == "2025年8月3日（日）"
    assert format_heading(date(2025, 8, 4), "en") == "Monday, August 4, 2025"


def test_time_is_zero_padded():
    assert format_time(datetime(2025, 1, 1, 7, 5)) == "07:05"


def test_truncate_source():
    assert truncate_source("Mainichi Technology Desk") == "Mainichi Te"
    assert truncate_source("Short") == "Short"
    assert truncate_source("") == ""


def test_sections_split_on_local_day_change():
    items = [
        _item(datetime(2025, 8, 3, 14, 30, tzinfo=timezone.utc)),  # 23:30 JST on the 3rd
        _item(datetime(2025, 8, 3, 15, 10, tzinfo=timezone.utc) - timedelta(hours=1)),  # 23:10 JST
        _item(datetime(2025, 8, 2, 15, 5, tzinfo=timezone.utc)),  # 00:05 JST on the 3rd
        _item(datetime(2025, 8, 2, 14, 59, tzinfo=timezone.utc)),  # 23:59 JST on the 2nd
    ]
    sections = render_page(items, tz=JST, locale="ja")
    assert [section.heading for section in sections] == ["2025年8月3日（日）", "2025年8月2日（土）"]
    assert [row["time"] for row in sections[0].rows] == ["23:30", "23:10", "00:05"]
    assert [row["time"] for row in sections[1].rows] == ["23:59"]


def test_heading_repeats_when_day_returns():
    items = [
        _item(datetime(2025, 8, 3, 1, tzinfo=JST)),
        _item(datetime(2025, 8, 2, 1, tzinfo=JST)),
        _item(datetime(2025, 8, 3, 2, tzinfo=JST)),
    ]
    assert len(render_page(items, tz=JST)) == 3


def test_rows_carry_link_semantics_and_short_labels():
    rows = render_page([_item(datetime(2025, 8, 3, tzinfo=JST), "A very long source label")], tz=JST)[0].rows
    assert rows[0]["source"] == "A very long"
    assert rows[0]["target"] == "_blank"
    assert rows[0]["rel"] == LINK_REL == "noopener noreferrer"
