from __future__ import annotations

import logging
import os

from flask import Flask, abort, jsonify

from feed_antenna import AntennaConfig, AntennaPipeline, Scheduler
from feed_antenna.models import Item
from feed_antenna.paginator import navigation
from feed_antenna.presentation import format_time, render_page, resolve_timezone, to_local
from feed_antenna.sources import SourceListError, load_sources


def create_app(scheduler: Scheduler) -> Flask:
    app = Flask(__name__)
    config = scheduler.pipeline.config
    publisher = scheduler.pipeline.publisher
    tz = resolve_timezone(config.timezone)

    @app.get("/health")
    def healthcheck():
        last_success = scheduler.last_success
        return {
            "status": "ok",
            "state": scheduler.state.value,
            "last_update": format_time(to_local(last_success, tz)) if last_success else None,
        }

    @app.get("/artifact")
    def artifact():
        view_model = publisher.latest()
        if view_model is None:
            abort(404)
        return jsonify(view_model)

    @app.get("/pages/<int:page>")
    def page(page: int):
        view_model = publisher.latest()
        if view_model is None or not 1 <= page <= view_model["total_pages"]:
            abort(404)
        per_page = view_model["items_per_page"]
        try:
            items = [Item.from_dict(raw) for raw in view_model["items"][(page - 1) * per_page : page * per_page]]
            sections = render_page(items, tz=tz, locale=config.locale, width=config.source_label_width)
        except Exception:
            app.logger.exception("Uncaught exception when rendering page %s", page)
            return jsonify({"error": "Unexpected server error"}), 500
        # both navigation regions render from this one state
        nav = navigation(page, view_model["total_pages"], view_model["nav_group_size"]).to_dict()
        return jsonify(
            {
                "page": page,
                "total_pages": view_model["total_pages"],
                "sections": [section.to_dict() for section in sections],
                "navigation": {"top": nav, "bottom": nav},
            }
        )

    return app


if __name__ == "__main__":
    logging.basicConfig(level=os.getenv("ANTENNA_LOG_LEVEL", "INFO").upper())
    _config = AntennaConfig.from_env()
    if not _config.sources_path:
        raise SystemExit("ANTENNA_SOURCES must point at a source list")
    try:
        _sources = load_sources(_config.sources_path)
    except SourceListError as exc:
        raise SystemExit(f"Cannot start: {exc}") from exc
    _scheduler = Scheduler(AntennaPipeline(_sources, config=_config))
    _scheduler.start()
    create_app(_scheduler).run(host="0.0.0.0", port=int(os.getenv("PORT", "8008")))
