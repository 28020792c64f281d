from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional, Sequence

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

RawEntry = Mapping[str, Any]


@dataclass(frozen=True, slots=True)
class Source:
    """One labeled feed endpoint to poll."""

    label: str
    url: str


@dataclass(slots=True)
class FeedDocument:
    """Entries returned by a provider for one source, plus the feed's own title."""

    entries: List[RawEntry] = field(default_factory=list)
    title: str = ""


@dataclass(frozen=True, slots=True)
class Item:
    """Normalized feed entry."""

    title: str
    link: str
    published_at: datetime
    source: str

    def to_dict(self) -> Dict[str, str]:
        return {
            "title": self.title,
            "link": self.link,
            "published_at": self.published_at.isoformat(),
            "source": self.source,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Item":
        return cls(
            title=data.get("title") or "",
            link=data.get("link") or "",
            published_at=datetime.fromisoformat(data["published_at"]),
            source=data.get("source") or "",
        )


@dataclass(frozen=True, slots=True)
class AggregateResult:
    items: Sequence[Item]
    total_count: int


@dataclass(frozen=True, slots=True)
class Page:
    index: int
    items: Sequence[Item]


@dataclass(frozen=True, slots=True)
class NavGroup:
    group_index: int
    first_page: int
    last_page: int


@dataclass(frozen=True, slots=True)
class NavigationState:
    """What both navigation regions show for the current page."""

    current_page: int
    group_index: int
    pages: Sequence[int]
    previous_group_page: Optional[int] = None
    next_group_page: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "current_page": self.current_page,
            "group_index": self.group_index,
            "pages": list(self.pages),
            "previous_group_page": self.previous_group_page,
            "next_group_page": self.next_group_page,
        }


@dataclass(slots=True)
class CycleReport:
    """Outcome of one pipeline tick."""

    started_at: datetime
    finished_at: Optional[datetime] = None
    # keyed by source url; labels need not be unique
    source_counts: Dict[str, int] = field(default_factory=dict)
    failed_sources: List[Source] = field(default_factory=list)
    total_count: int = 0
    total_pages: int = 0
    published: bool = False
    aborted: bool = False
