"""Formatting rules the renderer applies to a page of items.

These are kept free of any templating so they can be checked without a
rendering environment.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, tzinfo
from typing import Any, Dict, Iterable, List, Optional
from zoneinfo import ZoneInfo

from .models import Item

SOURCE_LABEL_WIDTH = 11
LINK_TARGET = "_blank"
LINK_REL = "noopener noreferrer"

_WEEKDAYS = {
    "ja": ("月", "火", "水", "木", "金", "土", "日"),
    "en": ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"),
}
_EN_MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


@dataclass(slots=True)
class DateSection:
    heading: str
    rows: List[Dict[str, str]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"heading": self.heading, "rows": list(self.rows)}


def resolve_timezone(name: Optional[str]) -> Optional[tzinfo]:
    """``None`` means the host's local zone."""
    return ZoneInfo(name) if name else None


def to_local(value: datetime, tz: Optional[tzinfo] = None) -> datetime:
    return value.astimezone(tz) if tz is not None else value.astimezone()


def format_heading(day: date, locale: str = "ja") -> str:
    weekday = _WEEKDAYS[locale][day.weekday()]
    if locale == "ja":
        return f"{day.year}年{day.month}月{day.day}日（{weekday}）"
    return f"{weekday}, {_EN_MONTHS[day.month - 1]} {day.day}, {day.year}"


def format_time(value: datetime) -> str:
    return f"{value.hour:02d}:{value.minute:02d}"


def truncate_source(label: str, width: int = SOURCE_LABEL_WIDTH) -> str:
    return label[:width] if label else ""


def render_page(
    items: Iterable[Item],
    tz: Optional[tzinfo] = None,
    locale: str = "ja",
    width: int = SOURCE_LABEL_WIDTH,
) -> List[DateSection]:
    """Group rows under a heading whenever the local calendar day changes."""
    sections: List[DateSection] = []
    last_day: Optional[date] = None
    for item in items:
        local = to_local(item.published_at, tz)
        if local.date() != last_day:
            last_day = local.date()
            sections.append(DateSection(heading=format_heading(last_day, locale)))
        sections[-1].rows.append(
            {
                "source": truncate_source(item.source, width),
                "time": format_time(local),
                "title": item.title,
                "link": item.link,
                "target": LINK_TARGET,
                "rel": LINK_REL,
            }
        )
    return sections
