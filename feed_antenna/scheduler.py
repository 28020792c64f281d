from __future__ import annotations

from datetime import datetime
import enum
import logging
import threading
from typing import Optional

from .models import CycleReport
from .pipeline import AntennaPipeline

logger = logging.getLogger(__name__)


class SchedulerState(enum.Enum):
    IDLE = "idle"
    RUNNING = "running"


class Scheduler:
    """Runs the pipeline now, then again ``interval`` seconds after each cycle ends.

    Cycles never overlap: a ``tick`` that arrives while one is in flight is
    skipped. ``stop`` lets the in-flight cycle wind down at its next stage
    boundary and ends the loop.
    """

    def __init__(self, pipeline: AntennaPipeline, interval: Optional[float] = None) -> None:
        self.pipeline = pipeline
        self.interval = interval if interval is not None else pipeline.config.refresh_interval
        self.state = SchedulerState.IDLE
        self.last_report: Optional[CycleReport] = None
        self.last_success: Optional[datetime] = None
        self._stop = threading.Event()
        self._cycle_lock = threading.Lock()
        self._thread: Optional[threading.Thread] = None

    @property
    def stopped(self) -> bool:
        return self._stop.is_set()

    def tick(self) -> Optional[CycleReport]:
        if not self._cycle_lock.acquire(blocking=False):
            logger.warning("Previous cycle still running; skipping this tick")
            return None
        try:
            self.state = SchedulerState.RUNNING
            report = self.pipeline.run_once(stop_event=self._stop)
            self.last_report = report
            if report.published:
                self.last_success = report.finished_at
            return report
        finally:
            self.state = SchedulerState.IDLE
            self._cycle_lock.release()

    def run_forever(self) -> None:
        logger.info("Scheduler started (interval %.0fs, %d sources)", self.interval, len(self.pipeline.sources))
        while not self._stop.is_set():
            try:
                self.tick()
            except Exception:
                logger.exception("Cycle failed")
            if self._stop.wait(self.interval):
                break
        logger.info("Scheduler stopped")

    def start(self) -> threading.Thread:
        if self._thread is not None and self._thread.is_alive():
            return self._thread
        self._stop.clear()
        self._thread = threading.Thread(target=self.run_forever, name="antenna-scheduler", daemon=True)
        self._thread.start()
        return self._thread

    def stop(self, timeout: Optional[float] = None) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
