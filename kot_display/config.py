"""Runtime configuration defaults for feeds, polling and logging."""

from __future__ import annotations

import os

API_BASE = os.getenv("KOT_API_BASE", "http://localhost:3000/api")

# One of the names in constant.BUCKET_LAYOUTS.
BUCKET_LAYOUT = os.getenv("KOT_BUCKET_LAYOUT", "kitchen_bar")

POLL_SECONDS = float(os.getenv("KOT_POLL_SECONDS", "5"))
CLOCK_SECONDS = float(os.getenv("KOT_CLOCK_SECONDS", "1"))
HIGHLIGHT_SECONDS = float(os.getenv("KOT_HIGHLIGHT_SECONDS", "3"))
REQUEST_TIMEOUT_SECONDS = float(os.getenv("KOT_REQUEST_TIMEOUT", "10"))

DEBUG_LOG_PATH = os.getenv("KOT_DEBUG_LOG", "/tmp/kot-display-debug.log")
LOG_LEVEL = os.getenv("KOT_LOG_LEVEL", "INFO").upper()
