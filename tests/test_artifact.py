from __future__ import annotations

from datetime import datetime, timezone
import json
import os

import pytest

from feed_antenna.aggregator import aggregate
from feed_antenna.artifact import ArtifactPublisher, ArtifactWriteError, build_view_model
from feed_antenna.models import Item
from feed_antenna.paginator import paginate

GENERATED = datetime(2025, 8, 3, 12, 0, tzinfo=timezone.utc)


def _view_model(count: int = 3) -> dict:
    items = [
        Item(title=f"t{i}", link=f"https://x/{i}", published_at=datetime(2025, 8, 3, i, tzinfo=timezone.utc), source="S")
        for i in range(count)
    ]
    result = aggregate([items], max_items=2000)
    return build_view_model(result, paginate(result, 2, 5), generated_at=GENERATED)


def test_view_model_embeds_all_items_and_parameters():
    view_model = _view_model(3)
    assert view_model["items_per_page"] == 2
    assert view_model["total_pages"] == 2
    assert view_model["nav_group_size"] == 5
    assert view_model["total_count"] == 3
    assert [item["title"] for item in view_model["items"]] == ["t2", "t1", "t0"]
    assert view_model["items"][0] == {
        "title": "t2",
        "link": "https://x/2",
        "published_at": "2025-08-03T02:00:00+00:00",
        "source": "S",
    }
    assert view_model["generated_at"] == GENERATED.isoformat()


def test_publish_writes_json_and_snapshot(tmp_path):
    publisher = ArtifactPublisher(tmp_path / "out" / "antenna.json")
    assert publisher.latest() is None
    path = publisher.publish(_view_model())
    assert json.loads(path.read_text(encoding="utf-8"))["total_count"] == 3
    assert publisher.latest()["total_count"] == 3
    assert publisher.published_at is not None
    assert os.listdir(tmp_path / "out") == ["antenna.json"]


def test_failed_write_keeps_previous_artifact(tmp_path, monkeypatch):
    publisher = ArtifactPublisher(tmp_path / "antenna.json")
    publisher.publish(_view_model(3))
    before = (tmp_path / "antenna.json").read_bytes()

    def broken_replace(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr("feed_antenna.artifact.os.replace", broken_replace)
    with pytest.raises(ArtifactWriteError, match="disk full"):
        publisher.publish(_view_model(1))

    assert (tmp_path / "antenna.json").read_bytes() == before
    assert publisher.latest()["total_count"] == 3
    assert os.listdir(tmp_path) == ["antenna.json"]
