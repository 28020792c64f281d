from __future__ import annotations

import logging
import os
import signal
import sys

from .config import AntennaConfig
from .pipeline import AntennaPipeline
from .scheduler import Scheduler
from .sources import SourceListError, load_sources

logger = logging.getLogger("feed_antenna")


def main() -> int:
    logging.basicConfig(
        level=os.getenv("ANTENNA_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        config = AntennaConfig.from_env()
        if not config.sources_path:
            raise SourceListError("ANTENNA_SOURCES is not set")
        sources = load_sources(config.sources_path)
    except ValueError as exc:
        logger.error("Cannot start: %s", exc)
        return 1

    scheduler = Scheduler(AntennaPipeline(sources, config=config))

    def _shutdown(signum, frame):
        logger.info("Received signal %s, finishing current cycle", signum)
        scheduler.stop()

    signal.signal(signal.SIGINT, _shutdown)
    signal.signal(signal.SIGTERM, _shutdown)
    scheduler.run_forever()
    return 0


if __name__ == "__main__":
    sys.exit(main())
