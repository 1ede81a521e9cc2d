"""Price analytics derived from the live book."""

from .twap import TwapAccumulator

__all__ = [
    "TwapAccumulator",
]
