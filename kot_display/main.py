"""Entry point for the KOT display Textual app."""

from __future__ import annotations

import logging

from kot_display import config
from kot_display.buckets import BucketLayout
from kot_display.display_app import KotDisplayApp
from kot_display.engine import OrderBoard
from kot_display.feeds import FeedClient

logger = logging.getLogger(__name__)


def configure_logging(path: str = config.DEBUG_LOG_PATH, level: str = config.LOG_LEVEL) -> None:
    """Send logs to a file; the terminal belongs to the display."""
    root = logging.getLogger()
    root.setLevel(level)
    try:
        handler = logging.FileHandler(path, encoding="utf-8")
    except OSError:
        # No writable log file: run without one.
        return
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
    root.addHandler(handler)


def build_app() -> KotDisplayApp:
    """Wire feed client, board and app from runtime config."""
    layout = BucketLayout.from_config(config.BUCKET_LAYOUT)
    client = FeedClient(config.API_BASE, timeout=config.REQUEST_TIMEOUT_SECONDS)
    board = OrderBoard(client, layout, highlight_seconds=config.HIGHLIGHT_SECONDS)
    logger.info("Starting KOT display: base=%s layout=%s", config.API_BASE, layout.name)
    return KotDisplayApp(board, poll_seconds=config.POLL_SECONDS, clock_seconds=config.CLOCK_SECONDS)


def main() -> None:
    """Run the Textual application."""
    configure_logging()
    build_app().run()


if __name__ == "__main__":
    main()
