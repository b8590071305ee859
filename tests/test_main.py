from __future__ import annotations

import logging
from pathlib import Path

import pytest

from kot_display import config, main


def test_configure_logging_writes_to_file(tmp_path: Path) -> None:
    log_file = tmp_path / "kot.log"
    root = logging.getLogger()
    before = list(root.handlers)
    level = root.level
    try:
        main.configure_logging(str(log_file), "DEBUG")
        logging.getLogger("kot_display.test").debug("hello board")
        for handler in root.handlers:
            handler.flush()
    finally:
        for handler in root.handlers[:]:
            if handler not in before:
                root.removeHandler(handler)
                handler.close()
        root.setLevel(level)

    assert "hello board" in log_file.read_text(encoding="utf-8")


def test_configure_logging_tolerates_unwritable_path(tmp_path: Path) -> None:
    root = logging.getLogger()
    before = list(root.handlers)

    main.configure_logging(str(tmp_path / "missing" / "kot.log"), "INFO")

    assert root.handlers == before


def test_build_app_uses_configured_layout(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config, "BUCKET_LAYOUT", "restaurant_bar")
    monkeypatch.setattr(config, "API_BASE", "http://testserver/api")

    app = main.build_app()

    assert app.board.layout.bucket_names == ("restaurant", "bar-kitchen", "bar-drinks")
    assert app.board.client.base_url == "http://testserver/api"
