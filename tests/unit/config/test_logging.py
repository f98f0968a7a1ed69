"""
Tests for logging configuration.
"""

from __future__ import annotations

import logging
from pathlib import Path

from vidshare.config.logging import configure_logging


def _installed() -> list[logging.Handler]:
    return [
        h
        for h in logging.getLogger("vidshare").handlers
        if getattr(h, "_vidshare_handler", False)
    ]


def test_repeated_calls_do_not_duplicate_handlers() -> None:
    configure_logging("DEBUG")
    configure_logging("WARNING")

    assert len(_installed()) == 1
    assert logging.getLogger("vidshare").level == logging.WARNING


def test_file_handler_receives_records(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "vidshare.log"
    configure_logging("INFO", log_file=log_file)

    logging.getLogger("vidshare.test").info("hello %s", "file")
    for handler in _installed():
        handler.flush()

    content = log_file.read_text()
    assert "hello file" in content
    assert "[-]" in content
    for handler in _installed():
        handler.close()
    configure_logging("INFO")
