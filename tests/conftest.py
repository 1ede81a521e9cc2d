"""Shared fixtures for the twapbook test suite."""

import logging

import pytest

from twapbook.book.order_book import NO_PRICE, OrderBook
from twapbook.execution.session import TwapSession
from twapbook.utils.logger import ROOT_LOGGER

# Event file of the reference session; the book's best price after each event
# is 10, 13, 13, 13, 10, none.
SAMPLE_EVENTS = """\
# time action order_id price
1000 I 100 10.0
2000 I 101 13.0
2200 I 102 13.0
2400 E 101
2500 E 102
4000 E 100
"""

# (time, best price) samples and the average expected after each of them.
GOLDEN_TRACE = [
    (1000, NO_PRICE, NO_PRICE),
    (2000, 10.0, NO_PRICE),
    (2200, 13.0, 10.0),
    (2400, 13.0, 11.5),
    (2500, 10.0, 11.8),
    (4000, NO_PRICE, 10.45),
]


@pytest.fixture
def book():
    return OrderBook()


@pytest.fixture
def session():
    return TwapSession()


@pytest.fixture
def events_file(tmp_path):
    path = tmp_path / "events.txt"
    path.write_text(SAMPLE_EVENTS)
    return path


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers so every test configures the package logger afresh."""
    yield
    root = logging.getLogger(ROOT_LOGGER)
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    root.setLevel(logging.NOTSET)


@pytest.fixture
def golden_trace():
    return list(GOLDEN_TRACE)
