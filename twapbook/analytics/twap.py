from dataclasses import dataclass, field
from typing import Optional

from twapbook.book.order_book import NO_PRICE


@dataclass
class TwapAccumulator:
    """Running time-weighted average of a piecewise-constant price signal.

    A sample only contributes once the next one arrives, since that is when
    the duration it held becomes known. Intervals that start at ``NO_PRICE``
    are gaps: they are excluded from the average and from ``elapsed_time``.
    """

    last_time: Optional[int] = field(default=None, init=False)
    last_price: Optional[float] = field(default=NO_PRICE, init=False)
    running_average: Optional[float] = field(default=NO_PRICE, init=False)
    elapsed_time: int = field(default=0, init=False)
    _started: bool = field(default=False, init=False, repr=False)

    def next_price(self, time: int, price: Optional[float]) -> None:
        """Record the price in effect from *time* onwards."""
        if self._started and self.last_price is not NO_PRICE:
            self._integrate(time - self.last_time, self.last_price)

        self.last_time = time
        self.last_price = price
        self._started = True

    def _integrate(self, dt: int, price: float) -> None:
        if self.elapsed_time == 0:
            self.running_average = price
            self.elapsed_time = dt
            return

        new_total = self.elapsed_time + dt
        self.running_average = (
            self.running_average * (self.elapsed_time / new_total)
            + price * (dt / new_total)
        )
        self.elapsed_time = new_total

    def average(self) -> Optional[float]:
        """Time-weighted average so far, ``NO_PRICE`` if nothing was integrated."""
        return self.running_average

    @property
    def defined(self) -> bool:
        return self.running_average is not NO_PRICE

    def reset(self) -> None:
        """Forget every sample and start a new session."""
        self.last_time = None
        self.last_price = NO_PRICE
        self.running_average = NO_PRICE
        self.elapsed_time = 0
        self._started = False
