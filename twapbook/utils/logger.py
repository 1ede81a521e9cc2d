"""Console + optional rotating‑file logger shared by every component."""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

ROOT_LOGGER = "twapbook"
COL_FMT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FMT = "%Y-%m-%d %H:%M:%S"
DEFAULT_MAX_BYTES = 5 * 1024 * 1024
DEFAULT_BACKUP_COUNT = 3


def _build_handler(
    to_file: Optional[Path] = None,
    max_bytes: int = DEFAULT_MAX_BYTES,
    backup_count: int = DEFAULT_BACKUP_COUNT,
) -> logging.Handler:
    if to_file:
        to_file.parent.mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(to_file, maxBytes=max_bytes, backupCount=backup_count)
    else:
        handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(fmt=COL_FMT, datefmt=DATE_FMT))
    return handler


def setup_logger(
    level: str = "INFO",
    path: str | None = None,
    max_bytes: int = DEFAULT_MAX_BYTES,
    backup_count: int = DEFAULT_BACKUP_COUNT,
) -> logging.Logger:
    """Create and return the package logger, configured once per process.

    *max_bytes* and *backup_count* size the rotating file used when *path*
    is given; a later call returns the logger unchanged.
    """
    root = logging.getLogger(ROOT_LOGGER)
    if root.handlers:  # already configured
        return root

    lvl = getattr(logging, level.upper(), logging.INFO)
    root.setLevel(lvl)

    root.addHandler(_build_handler())
    if path:
        root.addHandler(_build_handler(Path(path), max_bytes, backup_count))
        root.debug("Logging to %s (rotating at %d bytes, %d backups)", path, max_bytes, backup_count)

    return root


def get_child_logger(parent: Optional[logging.Logger], name: str) -> logging.Logger:
    """Return a namespaced child logger under *parent* (the package logger if None)."""
    if parent is None:
        parent = logging.getLogger(ROOT_LOGGER)
    return parent.getChild(name)
