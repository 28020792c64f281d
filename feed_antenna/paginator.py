"""Page slicing and navigation grouping over an aggregated item list.

Pages are 1-based. Navigation shows one group of ``nav_group_size`` page
numbers at a time; the "previous" arrow lands on the last page of the prior
group and the "next" arrow on the first page of the following group.
"""

from __future__ import annotations

from dataclasses import dataclass
import math
from typing import List, Sequence

from .models import AggregateResult, Item, NavGroup, NavigationState, Page


def total_pages_for(total_count: int, items_per_page: int) -> int:
    if total_count <= 0:
        return 0
    return math.ceil(total_count / items_per_page)


@dataclass(frozen=True, slots=True)
class Pagination:
    items: Sequence[Item]
    items_per_page: int
    nav_group_size: int
    total_pages: int

    @property
    def total_count(self) -> int:
        return len(self.items)

    @property
    def pages(self) -> List[Page]:
        return [self.page(index) for index in range(1, self.total_pages + 1)]

    def page(self, index: int) -> Page:
        if index < 1 or index > self.total_pages:
            raise IndexError(f"Page {index} out of range 1..{self.total_pages}")
        start = (index - 1) * self.items_per_page
        end = min(index * self.items_per_page, self.total_count)
        return Page(index=index, items=tuple(self.items[start:end]))

    @property
    def nav_groups(self) -> List[NavGroup]:
        return nav_groups(self.total_pages, self.nav_group_size)

    def navigation(self, current_page: int = 1) -> NavigationState:
        return navigation(current_page, self.total_pages, self.nav_group_size)


def paginate(result: AggregateResult, items_per_page: int, nav_group_size: int) -> Pagination:
    if items_per_page <= 0 or nav_group_size <= 0:
        raise ValueError("items_per_page and nav_group_size must be positive")
    return Pagination(
        items=tuple(result.items),
        items_per_page=items_per_page,
        nav_group_size=nav_group_size,
        total_pages=total_pages_for(result.total_count, items_per_page),
    )


def nav_groups(total_pages: int, nav_group_size: int) -> List[NavGroup]:
    groups: List[NavGroup] = []
    for group_index in range(math.ceil(total_pages / nav_group_size) if total_pages > 0 else 0):
        first = group_index * nav_group_size + 1
        groups.append(
            NavGroup(
                group_index=group_index,
                first_page=first,
                last_page=min(first + nav_group_size - 1, total_pages),
            )
        )
    return groups


def navigation(current_page: int, total_pages: int, nav_group_size: int) -> NavigationState:
    if total_pages <= 0:
        return NavigationState(current_page=1, group_index=0, pages=())
    current_page = min(max(current_page, 1), total_pages)
    total_groups = math.ceil(total_pages / nav_group_size)
    group_index = (current_page - 1) // nav_group_size
    first = group_index * nav_group_size + 1
    last = min(first + nav_group_size - 1, total_pages)
    return NavigationState(
        current_page=current_page,
        group_index=group_index,
        pages=tuple(range(first, last + 1)),
        previous_group_page=group_index * nav_group_size if group_index > 0 else None,
        next_group_page=(group_index + 1) * nav_group_size + 1 if group_index < total_groups - 1 else None,
    )
