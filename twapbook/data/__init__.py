"""Order event input (line records & pandas frames)."""

from .events import (
    EraseEvent,
    EventParseError,
    InsertEvent,
    OrderEvent,
    iter_events,
    parse_line,
    read_events,
)

__all__ = [
    "EraseEvent",
    "EventParseError",
    "InsertEvent",
    "OrderEvent",
    "iter_events",
    "parse_line",
    "read_events",
]
