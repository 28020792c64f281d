from __future__ import annotations

from datetime import datetime, timezone
import json
import logging
import os
from pathlib import Path
import tempfile
import threading
from typing import Any, Dict, Optional, Union

from .models import AggregateResult
from .paginator import Pagination

logger = logging.getLogger(__name__)


class ArtifactWriteError(RuntimeError):
    """The artifact could not be written; the previous one is still in place."""


def build_view_model(
    result: AggregateResult,
    pagination: Pagination,
    generated_at: Optional[datetime] = None,
) -> Dict[str, Any]:
    """Self-contained data the renderer re-slices into pages on the client."""
    generated_at = generated_at or datetime.now(timezone.utc)
    return {
        "items": [item.to_dict() for item in result.items],
        "total_count": result.total_count,
        "items_per_page": pagination.items_per_page,
        "total_pages": pagination.total_pages,
        "nav_group_size": pagination.nav_group_size,
        "generated_at": generated_at.isoformat(),
    }


def dumps_view_model(view_model: Dict[str, Any]) -> str:
    return json.dumps(view_model, ensure_ascii=False, separators=(",", ":"))


class ArtifactPublisher:
    """Writes the artifact with build-then-swap and keeps the latest copy in memory."""

    def __init__(self, output_path: Union[str, Path]) -> None:
        self._path = Path(output_path)
        self._lock = threading.Lock()
        self._latest: Optional[Dict[str, Any]] = None
        self._published_at: Optional[datetime] = None

    @property
    def path(self) -> Path:
        return self._path

    def latest(self) -> Optional[Dict[str, Any]]:
        with self._lock:
            return self._latest

    @property
    def published_at(self) -> Optional[datetime]:
        with self._lock:
            return self._published_at

    def publish(self, view_model: Dict[str, Any]) -> Path:
        payload = dumps_view_model(view_model)
        directory = self._path.parent
        tmp_name: Optional[str] = None
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=directory, prefix=f".{self._path.name}.", suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(payload)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_name, self._path)
        except OSError as exc:
            if tmp_name is not None:
                _safe_unlink(tmp_name)
            raise ArtifactWriteError(f"Could not write artifact {self._path}: {exc}") from exc
        with self._lock:
            self._latest = view_model
            self._published_at = datetime.now(timezone.utc)
        logger.info("Published %s (%d items)", self._path, len(view_model.get("items", [])))
        return self._path


def _safe_unlink(path: str) -> None:
    try:
        os.unlink(path)
    except FileNotFoundError:
        pass
    except OSError as exc:
        logger.warning("Could not remove temp artifact %s: %s", path, exc)
