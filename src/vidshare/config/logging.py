"""
Logging setup shared by the API server and the CLI.
"""

from __future__ import annotations

import logging
from pathlib import Path

from vidshare.api.middleware.request_id import RequestIdFilter

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: str = "INFO", log_file: Path | None = None) -> None:
    """
    Attach handlers to the ``vidshare`` logger.

    Safe to call more than once: existing handlers installed by a previous
    call are replaced rather than duplicated. Records carry the current
    request id, or "-" outside a request.

    Parameters
    ----------
    level : str
        Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    log_file : Path | None
        Optional file to receive the same records as the console.
    """
    root_logger = logging.getLogger("vidshare")
    root_logger.setLevel(level)

    for handler in list(root_logger.handlers):
        if getattr(handler, "_vidshare_handler", False):
            root_logger.removeHandler(handler)

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    handlers: list[logging.Handler] = [logging.StreamHandler()]

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, mode="a"))

    for handler in handlers:
        handler.setFormatter(formatter)
        handler.addFilter(RequestIdFilter())
        handler._vidshare_handler = True  # type: ignore[attr-defined]
        root_logger.addHandler(handler)
