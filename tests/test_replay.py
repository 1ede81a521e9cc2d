"""Tests for the pandas replay helpers."""

import math

import pandas as pd
import pytest

from twapbook.data.events import EraseEvent, EventParseError, InsertEvent
from twapbook.data.replay import STEP_COLUMNS, frame_to_events, load_events_frame, replay_frame
from twapbook.execution.session import TwapSession


def test_load_events_frame(events_file):
    df = load_events_frame(events_file)

    assert list(df.columns) == ["time", "action", "order_id", "price"]
    assert len(df) == 6
    assert df["time"].tolist() == [1000, 2000, 2200, 2400, 2500, 4000]
    assert df["action"].tolist() == ["I", "I", "I", "E", "E", "E"]
    assert df["price"].iloc[:3].tolist() == [10.0, 13.0, 13.0]
    assert df["price"].iloc[3:].isna().all()


def test_frame_to_events(events_file):
    events = list(frame_to_events(load_events_frame(events_file)))
    assert events[1] == InsertEvent(2000, 101, 13.0)
    assert events[3] == EraseEvent(2400, 101)


def test_replay_frame(events_file):
    steps = replay_frame(load_events_frame(events_file))

    assert list(steps.columns) == STEP_COLUMNS
    assert steps["max_price"].iloc[:5].tolist() == [10.0, 13.0, 13.0, 13.0, 10.0]
    assert math.isnan(steps["max_price"].iloc[-1])
    assert math.isnan(steps["twap"].iloc[0])
    assert steps["twap"].iloc[-1] == pytest.approx(10.5)
    assert steps["applied"].all()


def test_replay_frame_uses_given_session(events_file):
    session = TwapSession()
    replay_frame(load_events_frame(events_file), session)
    assert session.twap == pytest.approx(10.5)
    assert session.metrics.get("events") == 6


def test_replay_empty_frame():
    df = pd.DataFrame({"time": [], "action": [], "order_id": [], "price": []})
    steps = replay_frame(df)
    assert steps.empty
    assert list(steps.columns) == STEP_COLUMNS


def test_lowercase_actions_are_accepted(tmp_path):
    path = tmp_path / "events.txt"
    path.write_text("10 i 1 2.5\n20 e 1\n")
    df = load_events_frame(path)
    assert df["action"].tolist() == ["I", "E"]


@pytest.mark.parametrize(
    "content, lineno",
    [
        ("10 X 1 2.5\n", 1),
        ("10 I 1\n20 E 1\n", 1),
        ("1 I 1 10.0\nabc I 1 10.0\n", 2),
        ("1 I 1 10.0\n2 I 2 11.0 junk\n", 2),
        ("1 I 1 10.0\n2 E 1 5.0\n", 2),
    ],
)
def test_load_events_frame_rejects_bad_rows(tmp_path, content, lineno):
    path = tmp_path / "events.txt"
    path.write_text(content)
    with pytest.raises(EventParseError) as excinfo:
        load_events_frame(path)
    assert excinfo.value.lineno == lineno


def test_load_events_frame_lenient_skips_bad_rows(tmp_path):
    path = tmp_path / "events.txt"
    path.write_text("1 I 1 10.0\n2 E 1 5.0\nabc I 2 3.0\n3 E 1\n")
    df = load_events_frame(path, strict=False)
    assert df["action"].tolist() == ["I", "E"]
    assert df["time"].tolist() == [1, 3]


def test_comment_only_file_gives_empty_frame(tmp_path):
    path = tmp_path / "events.txt"
    path.write_text("# nothing yet\n\n")
    df = load_events_frame(path)
    assert df.empty
    assert list(df.columns) == ["time", "action", "order_id", "price"]
    assert replay_frame(df).empty


@pytest.mark.parametrize(
    "row",
    [
        {"time": 2, "action": "E", "order_id": 1, "price": 5.0},
        {"time": 2, "action": "I", "order_id": 1, "price": float("nan")},
        {"time": 2, "action": "Q", "order_id": 1, "price": 1.0},
        {"time": -2, "action": "E", "order_id": 1, "price": float("nan")},
    ],
)
def test_replay_frame_rejects_invalid_rows(row):
    with pytest.raises(EventParseError):
        replay_frame(pd.DataFrame([row]))
