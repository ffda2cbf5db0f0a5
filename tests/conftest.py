"""Pytest configuration and shared fixtures."""

from decimal import Decimal
from typing import Callable

import pytest

from mma_app.data.models import Level, OrderBook, Side, Trade


def make_book(bids, asks, timestamp: int = 1696435200) -> OrderBook:
    """Build an OrderBook from (price, quantity) string/number pairs."""
    return OrderBook(
        bids=tuple(Level(price=Decimal(str(p)), quantity=Decimal(str(q))) for p, q in bids),
        asks=tuple(Level(price=Decimal(str(p)), quantity=Decimal(str(q))) for p, q in asks),
        timestamp=timestamp,
    )


def make_trade(price, quantity, side: str = "buy", timestamp: int = 1000) -> Trade:
    """Build a Trade from plain values."""
    return Trade(
        price=Decimal(str(price)),
        quantity=Decimal(str(quantity)),
        side=Side(side),
        timestamp=timestamp,
    )


@pytest.fixture
def book_factory() -> Callable[..., OrderBook]:
    return make_book


@pytest.fixture
def trade_factory() -> Callable[..., Trade]:
    return make_trade


@pytest.fixture
def sample_order_book() -> OrderBook:
    """Small two-level book with equal volume on both sides."""
    return make_book(
        bids=[("100.00", "2"), ("99.50", "3")],
        asks=[("100.50", "1"), ("101.00", "4")],
    )


@pytest.fixture
def deep_order_book() -> OrderBook:
    """Three-level BTC-style book."""
    return make_book(
        bids=[("50000.00", "1.5"), ("49999.50", "2.3"), ("49999.00", "0.8")],
        asks=[("50001.00", "1.2"), ("50001.50", "1.8"), ("50002.00", "2.5")],
    )


@pytest.fixture
def empty_order_book() -> OrderBook:
    return OrderBook(bids=(), asks=(), timestamp=0)


@pytest.fixture
def sample_trades() -> list[Trade]:
    """Four alternating trades, one second apart."""
    return [
        make_trade("50000.0", "1.0", "buy", 1000),
        make_trade("50001.0", "0.5", "sell", 1001),
        make_trade("50002.0", "2.0", "buy", 1002),
        make_trade("50003.0", "0.3", "sell", 1003),
    ]


@pytest.fixture
def sample_payloads() -> dict:
    """Raw exchange-style payloads."""
    return {
        "book": {
            "bids": [["100.00", "2", "0", "1"], ["99.50", "3", "0", "2"]],
            "asks": [["100.50", "1", "0", "1"], ["101.00", "4", "0", "3"]],
            "ts": "1696435200",
        },
        "trades": [
            {"price": "100.0", "size": "5", "side": "buy", "ts": 1000},
            {"price": "100.0", "size": "15", "side": "SELL", "ts": 1001},
        ],
    }
