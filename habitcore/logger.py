"""Logging setup for habitcore."""

from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path

FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logger(
    log_file: str | Path = "habitcore.log",
    max_bytes: int = 10_000_000,
    backup_count: int = 5,
    level: int = logging.INFO,
) -> logging.Logger:
    """Attach a rotating file handler to the ``habitcore`` logger.

    Calling it again with the same file does not add a second handler.
    """
    path = Path(log_file)
    path.parent.mkdir(exist_ok=True, parents=True)
    logger = logging.getLogger("habitcore")
    logger.setLevel(level)
    target = os.path.abspath(path)
    for existing in logger.handlers:
        if isinstance(existing, RotatingFileHandler) and existing.baseFilename == target:
            return logger
    handler = RotatingFileHandler(path, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8")
    handler.setFormatter(logging.Formatter(FORMAT))
    logger.addHandler(handler)
    return logger
