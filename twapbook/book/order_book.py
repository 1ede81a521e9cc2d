"""In‑memory order book tracking live orders and the best (max) price."""

from __future__ import annotations

from typing import Dict, Iterator, Optional, Tuple

from sortedcontainers import SortedDict

NO_PRICE: Optional[float] = None


class OrderBook:
    """Live orders of a single instrument plus a derived price histogram.

    ``_orders`` maps ``order_id -> price``; ``_price_counts`` maps each live
    price to the number of orders resting at it. Both are only mutated
    together through :meth:`insert` and :meth:`erase`.
    """

    def __init__(self):
        self._orders: Dict[int, float] = {}
        self._price_counts: SortedDict = SortedDict()  # price -> count (> 0)

    # ---------- Maintenance ---------- #

    def insert(self, order_id: int, price: float) -> bool:
        """Add a live order. A known *order_id* is ignored (first price wins)."""
        if order_id in self._orders:
            return False
        self._orders[order_id] = price
        self._price_counts[price] = self._price_counts.get(price, 0) + 1
        return True

    def erase(self, order_id: int) -> bool:
        """Remove a live order. Unknown ids are ignored."""
        if order_id not in self._orders:
            return False
        price = self._orders.pop(order_id)
        count = self._price_counts[price] - 1
        if count <= 0:
            del self._price_counts[price]
        else:
            self._price_counts[price] = count
        return True

    # ---------- Core quotes ---------- #

    def max_price(self) -> Optional[float]:
        """Highest live price, or ``NO_PRICE`` when the book is empty."""
        if not self._price_counts:
            return NO_PRICE
        return self._price_counts.peekitem(-1)[0]

    # ---------- Introspection ---------- #

    def price_of(self, order_id: int) -> Optional[float]:
        return self._orders.get(order_id)

    def count_at(self, price: float) -> int:
        return self._price_counts.get(price, 0)

    def levels(self) -> Iterator[Tuple[float, int]]:
        """Yield ``(price, count)`` from the best price down."""
        for price in reversed(self._price_counts):
            yield price, self._price_counts[price]

    def __contains__(self, order_id: int) -> bool:
        return order_id in self._orders

    def __len__(self) -> int:
        return len(self._orders)

    def __repr__(self) -> str:
        return f"OrderBook(orders={len(self._orders)}, max_price={self.max_price()})"
