from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

DEFAULT_ITEMS_PER_PAGE = 100
DEFAULT_MAX_ITEMS = 2000
DEFAULT_NAV_GROUP_SIZE = 5
DEFAULT_REFRESH_SECONDS = 180.0
DEFAULT_USER_AGENT = "feed-antenna/1.0 (+https://github.com/feed-antenna)"


@dataclass(slots=True)
class AntennaConfig:
    """Runtime configuration for one antenna pipeline."""

    items_per_page: int = DEFAULT_ITEMS_PER_PAGE
    max_items: int = DEFAULT_MAX_ITEMS
    nav_group_size: int = DEFAULT_NAV_GROUP_SIZE
    refresh_interval: float = DEFAULT_REFRESH_SECONDS
    fetch_timeout: float = 15.0
    max_workers: int = 8
    sources_path: Optional[str] = None
    output_path: str = "antenna.json"
    user_agent: str = DEFAULT_USER_AGENT
    timezone: Optional[str] = None
    locale: str = "ja"
    source_label_width: int = 11

    def __post_init__(self) -> None:
        for name in (
            "items_per_page",
            "max_items",
            "nav_group_size",
            "refresh_interval",
            "fetch_timeout",
            "max_workers",
            "source_label_width",
        ):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive")
        if self.locale not in ("ja", "en"):
            raise ValueError(f"Unsupported locale {self.locale!r}")

    @classmethod
    def from_env(cls) -> "AntennaConfig":
        import os

        return cls(
            items_per_page=_parse_int(os.getenv("ANTENNA_ITEMS_PER_PAGE"), "ANTENNA_ITEMS_PER_PAGE", DEFAULT_ITEMS_PER_PAGE),
            max_items=_parse_int(os.getenv("ANTENNA_MAX_ITEMS"), "ANTENNA_MAX_ITEMS", DEFAULT_MAX_ITEMS),
            nav_group_size=_parse_int(os.getenv("ANTENNA_NAV_GROUP_SIZE"), "ANTENNA_NAV_GROUP_SIZE", DEFAULT_NAV_GROUP_SIZE),
            refresh_interval=_parse_float(os.getenv("ANTENNA_REFRESH_SECONDS"), "ANTENNA_REFRESH_SECONDS", DEFAULT_REFRESH_SECONDS),
            fetch_timeout=_parse_float(os.getenv("ANTENNA_FETCH_TIMEOUT"), "ANTENNA_FETCH_TIMEOUT", 15.0),
            max_workers=_parse_int(os.getenv("ANTENNA_MAX_WORKERS"), "ANTENNA_MAX_WORKERS", 8),
            sources_path=os.getenv("ANTENNA_SOURCES") or None,
            output_path=os.getenv("ANTENNA_OUTPUT") or "antenna.json",
            user_agent=os.getenv("ANTENNA_USER_AGENT") or DEFAULT_USER_AGENT,
            timezone=os.getenv("ANTENNA_TIMEZONE") or None,
            locale=os.getenv("ANTENNA_LOCALE") or "ja",
        )


def _parse_int(value: Optional[str], name: str, default: int) -> int:
    if value is None or value.strip() == "":
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer if set") from None


def _parse_float(value: Optional[str], name: str, default: float) -> float:
    if value is None or value.strip() == "":
        return default
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"{name} must be a number if set") from None
