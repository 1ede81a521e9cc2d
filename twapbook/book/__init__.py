"""Live order state for a single instrument."""

from .order_book import NO_PRICE, OrderBook

__all__ = [
    "NO_PRICE",
    "OrderBook",
]
