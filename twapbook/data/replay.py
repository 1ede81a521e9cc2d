"""Tabular replay of an event file through a session, pandas in / pandas out."""

from __future__ import annotations

from dataclasses import asdict
from pathlib import Path
from typing import Iterator, List, Optional, Union

import pandas as pd

from twapbook.data.events import (
    ERASE,
    INSERT,
    EraseEvent,
    EventParseError,
    InsertEvent,
    OrderEvent,
    read_events,
)
from twapbook.execution.session import TwapSession

EVENT_COLUMNS = ["time", "action", "order_id", "price"]
STEP_COLUMNS = ["time", "action", "order_id", "max_price", "twap", "applied"]
EVENT_DTYPES = {"time": "int64", "action": str, "order_id": "int64", "price": "float64"}


def load_events_frame(path: Union[str, Path], strict: bool = True) -> pd.DataFrame:
    """Read an event file into a ``time, action, order_id, price`` frame.

    Records go through the same parser as :func:`read_events`, so malformed
    lines raise :class:`EventParseError` with their line number, or are
    skipped with a warning when *strict* is false. Erase rows carry a NaN
    price.
    """
    records = [
        (event.time, event.action, event.order_id, getattr(event, "price", float("nan")))
        for event in read_events(path, strict=strict)
    ]
    df = pd.DataFrame.from_records(records, columns=EVENT_COLUMNS)
    return df.astype(EVENT_DTYPES)


def _validate_frame(df: pd.DataFrame) -> None:
    missing = [c for c in EVENT_COLUMNS if c not in df.columns]
    if missing:
        raise EventParseError(f"missing columns: {', '.join(missing)}")

    bad_action = ~df["action"].isin([INSERT, ERASE])
    if bad_action.any():
        row = df.index[bad_action][0]
        raise EventParseError(f"unknown action {df.at[row, 'action']!r} in row {row}")

    bad_price = (df["action"] == INSERT) & df["price"].isna()
    if bad_price.any():
        row = df.index[bad_price][0]
        raise EventParseError(f"insert without a price in row {row}")

    priced_erase = (df["action"] == ERASE) & df["price"].notna()
    if priced_erase.any():
        row = df.index[priced_erase][0]
        raise EventParseError(f"erase with a price in row {row}")

    if (df["time"] < 0).any() or (df["order_id"] < 0).any():
        raise EventParseError("time and order id must be non-negative")


def frame_to_events(df: pd.DataFrame) -> Iterator[OrderEvent]:
    for row in df.itertuples(index=False):
        if row.action == INSERT:
            yield InsertEvent(int(row.time), int(row.order_id), float(row.price))
        else:
            yield EraseEvent(int(row.time), int(row.order_id))


def replay_frame(df: pd.DataFrame, session: Optional[TwapSession] = None) -> pd.DataFrame:
    """Run every row through *session* and return one row per resulting step."""
    _validate_frame(df)
    if session is None:
        session = TwapSession()

    records: List[dict] = [asdict(step) for step in session.run(frame_to_events(df))]
    steps = pd.DataFrame.from_records(records, columns=STEP_COLUMNS)
    return steps.astype({"max_price": "float64", "twap": "float64"})
