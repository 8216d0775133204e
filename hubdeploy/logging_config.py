"""Logging setup shared by the API and the CLI."""

from __future__ import annotations

import logging
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)-5s [%(name)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: Optional[str] = None) -> None:
    """Install a single stream handler on the root logger."""
    root = logging.getLogger()
    resolved = logging.getLevelName((level or "INFO").upper())
    if not isinstance(resolved, int):
        resolved = logging.INFO
    root.setLevel(resolved)
    if any(getattr(handler, "_hubdeploy", False) for handler in root.handlers):
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    handler._hubdeploy = True  # type: ignore[attr-defined]
    root.addHandler(handler)
    # httpx logs every request at INFO; the transport already does that at DEBUG
    logging.getLogger("httpx").setLevel(logging.WARNING)
