"""Centralized logging setup and structured-logging helpers.

Log level and file come from the environment (``DROPPER_LOG_LEVEL``,
``DROPPER_LOG_FILE``) so the CLI can set them before anything logs.
"""
from __future__ import annotations

import logging
import os
import sys
import time
from typing import Any, Dict, Optional
from urllib.parse import urlsplit, urlunsplit

from constants import Constants

_HANDLER_TAG = "_dropper_handler"


def configure_logging() -> None:
    """Install dropper's handlers on the root logger once."""
    root = logging.getLogger()
    level_name = os.environ.get("DROPPER_LOG_LEVEL", "INFO").upper()
    root.setLevel(getattr(logging, level_name, logging.INFO))

    if any(getattr(h, _HANDLER_TAG, False) for h in root.handlers):
        return

    formatter = logging.Formatter(Constants.LOG_FORMAT)
    handlers = [logging.StreamHandler(sys.stderr)]
    log_file = os.environ.get("DROPPER_LOG_FILE")
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)
        setattr(handler, _HANDLER_TAG, True)
        root.addHandler(handler)


def extra_context(**fields: Any) -> Dict[str, Any]:
    """Build the ``extra`` mapping for a structured log record, dropping None values."""
    return {"ctx": {k: v for k, v in fields.items() if v is not None}}


def is_debug_enabled(logger: logging.Logger) -> bool:
    return logger.isEnabledFor(logging.DEBUG)


def safe_url(url: Optional[str]) -> str:
    """Strip credentials, query and fragment from a URL for logging."""
    if not url:
        return ""
    try:
        parts = urlsplit(url)
    except ValueError:
        return url
    netloc = parts.hostname or ""
    if parts.port:
        netloc = f"{netloc}:{parts.port}"
    return urlunsplit((parts.scheme, netloc, parts.path, "", ""))


class Timer:
    """Context manager measuring elapsed wall time."""

    def __init__(self) -> None:
        self._start = 0.0
        self._end: Optional[float] = None

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter()
        return self

    def __exit__(self, *exc_info) -> None:
        self._end = time.perf_counter()

    def duration_ms(self) -> int:
        end = self._end if self._end is not None else time.perf_counter()
        return int((end - self._start) * 1000)
