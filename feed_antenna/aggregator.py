from __future__ import annotations

from itertools import chain
from typing import Iterable, Sequence

from .models import AggregateResult, Item


def aggregate(batches: Iterable[Sequence[Item]], max_items: int) -> AggregateResult:
    """Merge per-source items newest first and keep at most ``max_items``.

    ``sorted`` is stable with ``reverse=True`` too, so items sharing a
    timestamp keep the order in which their batches were concatenated. No
    cross-source deduplication is done.
    """
    merged = list(chain.from_iterable(batches))
    ordered = sorted(merged, key=lambda item: item.published_at, reverse=True)
    capped = tuple(ordered[:max_items])
    return AggregateResult(items=capped, total_count=len(capped))
