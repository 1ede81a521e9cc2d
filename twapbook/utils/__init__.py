"""Utility helpers shared across the package (logging, metrics)."""

from .logger import setup_logger, get_child_logger
from .metrics import Metrics

__all__ = [
    "setup_logger",
    "get_child_logger",
    "Metrics",
]
