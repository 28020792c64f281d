from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from feed_antenna.models import AggregateResult, Item, NavGroup
from feed_antenna.paginator import navigation, nav_groups, paginate, total_pages_for


def _result(count: int) -> AggregateResult:
    start = datetime(2025, 1, 1, tzinfo=timezone.utc)
    items = tuple(
        Item(title=str(i), link="", published_at=start - timedelta(minutes=i), source="s") for i in range(count)
    )
    return AggregateResult(items=items, total_count=count)


@pytest.mark.parametrize(
    "count, expected",
    [(0, 0), (1, 1), (100, 1), (101, 2), (260, 3), (2000, 20)],
)
def test_total_pages(count, expected):
    assert total_pages_for(count, 100) == expected
    assert paginate(_result(count), 100, 5).total_pages == expected


def test_pages_are_exact_slices():
    result = _result(260)
    pagination = paginate(result, 100, 5)
    assert [len(page.items) for page in pagination.pages] == [100, 100, 60]
    for page in pagination.pages:
        start = (page.index - 1) * 100
        assert tuple(page.items) == tuple(result.items[start : min(page.index * 100, 260)])


def test_page_out_of_range():
    pagination = paginate(_result(10), 100, 5)
    with pytest.raises(IndexError):
        pagination.page(2)
    with pytest.raises(IndexError):
        pagination.page(0)


def test_navigation_middle_group():
    nav = navigation(6, total_pages=12, nav_group_size=5)
    assert nav.group_index == 1
    assert nav.previous_group_page == 5
    assert nav.next_group_page == 11
    assert list(nav.pages) == [6, 7, 8, 9, 10]


def test_navigation_first_and_last_group():
    first = navigation(1, total_pages=12, nav_group_size=5)
    assert first.previous_group_page is None
    assert first.next_group_page == 6
    assert list(first.pages) == [1, 2, 3, 4, 5]

    last = navigation(12, total_pages=12, nav_group_size=5)
    assert last.previous_group_page == 10
    assert last.next_group_page is None
    assert list(last.pages) == [11, 12]


def test_navigation_single_group_has_no_arrows():
    nav = navigation(2, total_pages=3, nav_group_size=5)
    assert nav.previous_group_page is None
    assert nav.next_group_page is None
    assert list(nav.pages) == [1, 2, 3]


def test_navigation_without_pages():
    nav = navigation(1, total_pages=0, nav_group_size=5)
    assert list(nav.pages) == []
    assert nav.previous_group_page is None and nav.next_group_page is None


def test_nav_groups():
    assert nav_groups(12, 5) == [NavGroup(0, 1, 5), NavGroup(1, 6, 10), NavGroup(2, 11, 12)]
    assert nav_groups(0, 5) == []
