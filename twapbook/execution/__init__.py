"""Drivers that feed order events into the book and analytics."""

from .session import SessionStep, TwapSession

__all__ = [
    "SessionStep",
    "TwapSession",
]
