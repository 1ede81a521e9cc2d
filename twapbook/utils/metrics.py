"""Simple Prometheus‑style counters for a replay session."""

from __future__ import annotations

from collections import defaultdict
from pathlib import Path
from typing import Dict


class Metrics:
    """Counter & gauge collector that can dump itself to a textfile."""

    def __init__(self, path: str | Path | None = None, prefix: str = "twapbook"):
        self._metrics: Dict[str, float] = defaultdict(float)
        self._path = Path(path) if path else None
        self._prefix = prefix

    def incr(self, key: str, amt: float = 1.0):
        self._metrics[key] += amt

    def set(self, key: str, val: float):
        self._metrics[key] = val

    def get(self, key: str) -> float:
        return self._metrics.get(key, 0.0)

    def snapshot(self) -> Dict[str, float]:
        return dict(self._metrics)

    def render(self) -> str:
        return "".join(f"{self._prefix}_{k} {v}\n" for k, v in sorted(self._metrics.items()))

    def flush(self, path: str | Path | None = None):
        target = Path(path) if path else self._path
        if target is None:
            raise ValueError("No metrics path configured")
        target.write_text(self.render())
