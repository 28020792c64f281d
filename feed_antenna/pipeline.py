from __future__ import annotations

from datetime import datetime, timezone
import logging
import threading
from typing import Iterable, List, Optional, Sequence, Tuple

from .aggregator import aggregate
from .artifact import ArtifactPublisher, ArtifactWriteError, build_view_model
from .config import AntennaConfig
from .fetcher import FetchResult, fetch_all
from .models import AggregateResult, CycleReport, Item, Source
from .normalizer import normalize_document
from .paginator import Pagination, paginate
from .providers.base import BaseFeedProvider
from .providers.rss_provider import RSSFeedProvider

logger = logging.getLogger(__name__)


class AntennaPipeline:
    """Fetches, merges, caps and paginates all sources, then publishes the artifact."""

    def __init__(
        self,
        sources: Iterable[Source],
        config: Optional[AntennaConfig] = None,
        provider: Optional[BaseFeedProvider] = None,
        publisher: Optional[ArtifactPublisher] = None,
    ) -> None:
        self.config = config or AntennaConfig.from_env()
        self.sources: List[Source] = list(sources)
        if not self.sources:
            raise RuntimeError("No sources configured for AntennaPipeline")
        self.provider = provider or RSSFeedProvider(user_agent=self.config.user_agent)
        self.publisher = publisher or ArtifactPublisher(self.config.output_path)

    def fetch(self, stop_event: Optional[threading.Event] = None) -> List[FetchResult]:
        return fetch_all(
            self.sources,
            self.provider,
            max_workers=self.config.max_workers,
            timeout=self.config.fetch_timeout,
            should_stop=stop_event.is_set if stop_event is not None else None,
        )

    def build(self, fetched: Sequence[FetchResult]) -> Tuple[AggregateResult, Pagination]:
        batches: List[List[Item]] = [normalize_document(source, document) for source, document, _ in fetched]
        result = aggregate(batches, self.config.max_items)
        logger.info("Merged %d items from %d sources", result.total_count, len(fetched))
        return result, paginate(result, self.config.items_per_page, self.config.nav_group_size)

    def run_once(self, stop_event: Optional[threading.Event] = None) -> CycleReport:
        report = CycleReport(started_at=datetime.now(timezone.utc))
        fetched = self.fetch(stop_event)
        for source, document, ok in fetched:
            report.source_counts[source.url] = len(document.entries)
            if not ok:
                report.failed_sources.append(source)
        if _stopping(stop_event):
            return _abort(report, "fetch")

        result, pagination = self.build(fetched)
        report.total_count = result.total_count
        report.total_pages = pagination.total_pages
        if _stopping(stop_event):
            return _abort(report, "pagination")

        view_model = build_view_model(result, pagination, generated_at=datetime.now(timezone.utc))
        try:
            self.publisher.publish(view_model)
            report.published = True
        except ArtifactWriteError:
            logger.exception("Artifact publish failed; keeping the previous artifact")
        report.finished_at = datetime.now(timezone.utc)
        return report


def _stopping(stop_event: Optional[threading.Event]) -> bool:
    return stop_event is not None and stop_event.is_set()


def _abort(report: CycleReport, stage: str) -> CycleReport:
    logger.info("Cycle aborted after %s stage", stage)
    report.aborted = True
    report.finished_at = datetime.now(timezone.utc)
    return report
