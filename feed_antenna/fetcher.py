from __future__ import annotations

from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
import logging
import threading
import time
from typing import Callable, Dict, List, Optional, Sequence, Set, Tuple

from .models import FeedDocument, Source
from .providers.base import BaseFeedProvider

logger = logging.getLogger(__name__)

FetchResult = Tuple[Source, FeedDocument, bool]

_POLL_FLOOR = 0.01


def fetch_source(provider: BaseFeedProvider, source: Source, timeout: float) -> Tuple[FeedDocument, bool]:
    """Fetch one source; never raises. The flag is False when the source failed."""
    try:
        document = provider.fetch(source, timeout=timeout)
    except Exception as exc:
        logger.warning("Fetch failed for %s (%s): %s", source.label, source.url, exc)
        return FeedDocument(), False
    logger.info("Fetched %s: %d entries", source.label, len(document.entries))
    return document, True


def fetch_all(
    sources: Sequence[Source],
    provider: BaseFeedProvider,
    max_workers: int = 8,
    timeout: float = 15.0,
    should_stop: Optional[Callable[[], bool]] = None,
) -> List[FetchResult]:
    """Fetch every source in parallel and return results in completion order.

    Each source gets ``timeout`` seconds from the moment its worker picks it
    up. A source still running past that is recorded as failed and abandoned;
    the pool is shut down without waiting for it.
    """
    if not sources:
        return []

    started: Dict[int, float] = {}
    started_lock = threading.Lock()

    def _task(index: int, source: Source) -> FetchResult:
        with started_lock:
            started[index] = time.monotonic()
        if should_stop is not None and should_stop():
            return source, FeedDocument(), False
        document, ok = fetch_source(provider, source, timeout)
        return source, document, ok

    results: List[FetchResult] = []
    pool = ThreadPoolExecutor(max_workers=max(1, min(max_workers, len(sources))), thread_name_prefix="antenna-fetch")
    try:
        futures: Dict[Future, int] = {pool.submit(_task, index, source): index for index, source in enumerate(sources)}
        pending: Set[Future] = set(futures)
        while pending:
            done, _ = wait(pending, timeout=_next_deadline(pending, futures, started, started_lock, timeout), return_when=FIRST_COMPLETED)
            for future in done:
                pending.discard(future)
                results.append(future.result())
            now = time.monotonic()
            with started_lock:
                overdue = [f for f in pending if futures[f] in started and now - started[futures[f]] >= timeout]
            for future in overdue:
                pending.discard(future)
                source = sources[futures[future]]
                logger.warning("Fetch failed for %s (%s): no response within %.1fs", source.label, source.url, timeout)
                results.append((source, FeedDocument(), False))
    finally:
        pool.shutdown(wait=False, cancel_futures=True)
    return results


def _next_deadline(
    pending: Set[Future],
    futures: Dict[Future, int],
    started: Dict[int, float],
    started_lock: threading.Lock,
    timeout: float,
) -> float:
    now = time.monotonic()
    with started_lock:
        remaining = [timeout - (now - started[futures[f]]) for f in pending if futures[f] in started]
    if not remaining:
        return timeout
    return max(min(remaining), _POLL_FLOOR)
