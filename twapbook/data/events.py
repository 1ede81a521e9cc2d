"""Order events and the line-oriented event file format.

Each non-blank line holds one event::

    <time> I <order_id> <price>
    <time> E <order_id>

``time`` is milliseconds since the start of the trading day. Lines starting
with ``#`` are comments.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, Optional, Union

INSERT = "I"
ERASE = "E"

logger = logging.getLogger(__name__)


class EventParseError(ValueError):
    """Raised for a record that is not a valid insert or erase event."""

    def __init__(self, message: str, lineno: Optional[int] = None, line: str = ""):
        self.lineno = lineno
        self.line = line
        where = f"line {lineno}: " if lineno is not None else ""
        super().__init__(f"{where}{message}")


@dataclass(frozen=True)
class InsertEvent:
    time: int
    order_id: int
    price: float

    action = INSERT


@dataclass(frozen=True)
class EraseEvent:
    time: int
    order_id: int

    action = ERASE


OrderEvent = Union[InsertEvent, EraseEvent]


def _to_int(token: str, what: str, lineno, line) -> int:
    try:
        value = int(token)
    except ValueError:
        raise EventParseError(f"{what} must be an integer, got {token!r}", lineno, line) from None
    if value < 0:
        raise EventParseError(f"{what} must be non-negative, got {value}", lineno, line)
    return value


def parse_line(line: str, lineno: Optional[int] = None) -> Optional[OrderEvent]:
    """Parse one record. Returns ``None`` for blank and comment lines."""
    stripped = line.strip()
    if not stripped or stripped.startswith("#"):
        return None

    fields = stripped.split()
    if len(fields) < 3:
        raise EventParseError("expected '<time> I|E <order_id> [price]'", lineno, line)

    time = _to_int(fields[0], "time", lineno, line)
    action = fields[1].upper()
    order_id = _to_int(fields[2], "order id", lineno, line)

    if action == INSERT:
        if len(fields) != 4:
            raise EventParseError("insert needs exactly one price", lineno, line)
        try:
            price = float(fields[3])
        except ValueError:
            raise EventParseError(f"price must be a number, got {fields[3]!r}", lineno, line) from None
        if price != price:  # NaN
            raise EventParseError("price must not be NaN", lineno, line)
        return InsertEvent(time, order_id, price)

    if action == ERASE:
        if len(fields) != 3:
            raise EventParseError("erase takes no price", lineno, line)
        return EraseEvent(time, order_id)

    raise EventParseError(f"unknown action {fields[1]!r}", lineno, line)


def iter_events(lines: Iterable[str], strict: bool = True) -> Iterator[OrderEvent]:
    """Yield events from *lines*; in lenient mode bad records are logged and skipped."""
    for lineno, line in enumerate(lines, start=1):
        try:
            event = parse_line(line, lineno)
        except EventParseError as exc:
            if strict:
                raise
            logger.warning("Skipping malformed event (%s)", exc)
            continue
        if event is not None:
            yield event


def read_events(path: Union[str, Path], strict: bool = True) -> Iterator[OrderEvent]:
    """Stream events from an event file."""
    path = Path(path)
    with path.open("r", encoding="utf-8") as f:
        yield from iter_events(f, strict=strict)


def format_event(event: OrderEvent) -> str:
    if isinstance(event, InsertEvent):
        return f"{event.time} {INSERT} {event.order_id} {event.price}"
    return f"{event.time} {ERASE} {event.order_id}"
