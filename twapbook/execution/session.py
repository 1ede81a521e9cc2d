"""Session driver: applies order events to the book and feeds the TWAP."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional

from twapbook.analytics.twap import TwapAccumulator
from twapbook.book.order_book import OrderBook
from twapbook.data.events import EraseEvent, InsertEvent, OrderEvent, format_event
from twapbook.utils.logger import get_child_logger
from twapbook.utils.metrics import Metrics


@dataclass(frozen=True)
class SessionStep:
    """State of the session right after one event was applied."""

    time: int
    action: str
    order_id: int
    max_price: Optional[float]
    twap: Optional[float]
    applied: bool = True


def _fmt(price: Optional[float]) -> str:
    return "nan" if price is None else f"{price:g}"


class TwapSession:
    """Owns one OrderBook and one TwapAccumulator for a trading session.

    Every event mutates the book first; the resulting best price is then
    observed by the accumulator at the event's time.
    """

    def __init__(
        self,
        logger: Optional[logging.Logger] = None,
        metrics: Optional[Metrics] = None,
        trace: bool = False,
    ):
        self._logger = get_child_logger(logger, "session")
        self._metrics = metrics if metrics is not None else Metrics()
        self._trace = trace

        self._book = OrderBook()
        self._twap = TwapAccumulator()

    # ---------- Accessors ---------- #

    @property
    def book(self) -> OrderBook:
        return self._book

    @property
    def metrics(self) -> Metrics:
        return self._metrics

    @property
    def max_price(self) -> Optional[float]:
        return self._book.max_price()

    @property
    def twap(self) -> Optional[float]:
        return self._twap.average()

    # ---------- Event loop ---------- #

    def apply(self, event: OrderEvent) -> SessionStep:
        """Apply *event* and sample the best price at its time."""
        if isinstance(event, InsertEvent):
            applied = self._book.insert(event.order_id, event.price)
            kind = "insert"
        elif isinstance(event, EraseEvent):
            applied = self._book.erase(event.order_id)
            kind = "erase"
        else:
            raise TypeError(f"Unsupported event type: {type(event).__name__}")

        if applied:
            self._metrics.incr(f"{kind}s_applied")
        else:
            self._metrics.incr(f"{kind}s_ignored")
            self._logger.debug("Ignored %s for order %s at t=%s", kind, event.order_id, event.time)

        max_price = self._book.max_price()
        self._twap.next_price(event.time, max_price)
        step = SessionStep(
            time=event.time,
            action=event.action,
            order_id=event.order_id,
            max_price=max_price,
            twap=self._twap.average(),
            applied=applied,
        )

        self._metrics.incr("events")
        self._metrics.set("live_orders", len(self._book))
        if self._trace:
            self._logger.info(
                "%-24s max=%s twap=%s", format_event(event), _fmt(step.max_price), _fmt(step.twap)
            )
        return step

    def run(self, events: Iterable[OrderEvent]) -> Iterator[SessionStep]:
        """Apply *events* in order, yielding one step per event."""
        for event in events:
            yield self.apply(event)

    def replay(self, events: Iterable[OrderEvent]) -> Optional[float]:
        """Apply every event and return the final TWAP."""
        last: Optional[SessionStep] = None
        for last in self.run(events):
            pass
        if last is not None:
            self._logger.info(
                "Replayed %d events ending at t=%s, %d live orders, TWAP=%s",
                int(self._metrics.get("events")),
                last.time,
                len(self._book),
                _fmt(self.twap),
            )
        return self.twap
