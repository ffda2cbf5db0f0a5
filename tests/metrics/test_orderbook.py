"""Tests for order book analysis"""

import random
from decimal import Decimal

import pytest
from mma_app.data.models import Level, OrderBook
from mma_app.metrics.orderbook import (
    OrderBookMetrics,
    SpreadMetrics,
    analyze_orderbook,
    best_ask,
    best_bid,
    calculate_imbalance,
    calculate_notional_value,
    calculate_spread,
    mid_price,
    total_volume,
)


class TestSpread:
    """Test bid-ask spread calculation"""

    def test_spread_scenario(self, sample_order_book):
        """Spread is best ask minus best bid, percentage relative to mid"""
        spread = calculate_spread(sample_order_book)

        assert isinstance(spread, SpreadMetrics)
        assert spread.absolute == Decimal("0.50")
        # 0.50 / 100.25 * 100 = 0.4987...
        assert abs(spread.percentage - Decimal("0.4988")) < Decimal("0.0001")

    def test_spread_deep_book(self, deep_order_book):
        """Spread uses only the top level of each side"""
        spread = calculate_spread(deep_order_book)

        assert spread.absolute == Decimal("1.00")
        assert Decimal("0.0019") < spread.percentage < Decimal("0.0021")

    def test_spread_empty_book(self, empty_order_book):
        """Empty book has no spread"""
        assert calculate_spread(empty_order_book) is None

    def test_spread_one_sided_book(self, book_factory):
        """Spread requires both sides"""
        bids_only = book_factory(bids=[("100", "1")], asks=[])
        asks_only = book_factory(bids=[], asks=[("101", "1")])

        assert calculate_spread(bids_only) is None
        assert calculate_spread(asks_only) is None

    def test_spread_matches_best_prices(self, book_factory):
        """Absolute spread always equals best_ask - best_bid for two-sided books"""
        rng = random.Random(7)
        for _ in range(25):
            bid = Decimal(rng.randint(1000, 5000)) / Decimal("10")
            ask = bid + Decimal(rng.randint(1, 50)) / Decimal("100")
            book = book_factory(bids=[(bid, "1")], asks=[(ask, "2")])

            assert calculate_spread(book).absolute == best_ask(book) - best_bid(book)


class TestTopOfBook:
    """Test best bid/ask and mid price extraction"""

    def test_best_prices(self, deep_order_book):
        assert best_bid(deep_order_book) == Decimal("50000.00")
        assert best_ask(deep_order_book) == Decimal("50001.00")
        assert mid_price(deep_order_book) == Decimal("50000.50")

    def test_mid_price_scenario(self, sample_order_book):
        assert mid_price(sample_order_book) == Decimal("100.25")

    def test_empty_book(self, empty_order_book):
        assert best_bid(empty_order_book) is None
        assert best_ask(empty_order_book) is None
        assert mid_price(empty_order_book) is None

    def test_mid_price_needs_both_sides(self, book_factory):
        book = book_factory(bids=[("100", "1")], asks=[])

        assert best_bid(book) == Decimal("100")
        assert best_ask(book) is None
        assert mid_price(book) is None


class TestImbalance:
    """Test order book imbalance"""

    def test_balanced_book(self, sample_order_book):
        """(5 - 5) / 10 = 0"""
        assert calculate_imbalance(sample_order_book) == Decimal("0")

    def test_imbalance_all_levels(self, deep_order_book):
        """(4.6 - 5.5) / 10.1 ≈ -0.089"""
        imbalance = calculate_imbalance(deep_order_book, None)

        assert imbalance == Decimal("-0.9") / Decimal("10.1")
        assert Decimal("-0.1") < imbalance < Decimal("-0.08")

    def test_imbalance_with_depth(self, deep_order_book):
        """Only the first level: (1.5 - 1.2) / 2.7 ≈ 0.111"""
        imbalance = calculate_imbalance(deep_order_book, depth=1)

        assert Decimal("0.1") < imbalance < Decimal("0.12")

    def test_depth_beyond_levels_is_clamped(self, deep_order_book):
        assert calculate_imbalance(deep_order_book, depth=50) == calculate_imbalance(deep_order_book)

    def test_zero_volume_is_neutral(self, empty_order_book, book_factory):
        """Both volumes zero yields 0 instead of dividing by zero"""
        zero_levels = book_factory(bids=[("100", "0")], asks=[("101", "0")])

        assert calculate_imbalance(empty_order_book) == Decimal("0")
        assert calculate_imbalance(zero_levels) == Decimal("0")

    def test_depth_zero(self, deep_order_book):
        assert calculate_imbalance(deep_order_book, depth=0) == Decimal("0")

    def test_one_sided_books(self, book_factory):
        bids_only = book_factory(bids=[("100", "3")], asks=[])
        asks_only = book_factory(bids=[], asks=[("101", "3")])

        assert calculate_imbalance(bids_only) == Decimal("1")
        assert calculate_imbalance(asks_only) == Decimal("-1")

    def test_imbalance_bounds(self, book_factory):
        """Imbalance stays within [-1, 1] for arbitrary valid volumes"""
        rng = random.Random(42)
        for _ in range(50):
            bids = [(Decimal(100 - i), Decimal(rng.randint(0, 1000)) / Decimal("10")) for i in range(rng.randint(0, 5))]
            asks = [(Decimal(101 + i), Decimal(rng.randint(0, 1000)) / Decimal("10")) for i in range(rng.randint(0, 5))]
            imbalance = calculate_imbalance(book_factory(bids=bids, asks=asks), None)

            assert Decimal("-1") <= imbalance <= Decimal("1")


class TestTotalVolume:
    """Test per-side volume aggregation"""

    def test_total_volume(self, deep_order_book):
        assert total_volume(deep_order_book.bids, None) == Decimal("4.6")
        assert total_volume(deep_order_book.asks) == Decimal("5.5")

    def test_total_volume_with_depth(self, deep_order_book):
        assert total_volume(deep_order_book.bids, 2) == Decimal("3.8")

    def test_total_volume_depth_zero(self, deep_order_book):
        assert total_volume(deep_order_book.bids, 0) == Decimal("0")

    def test_total_volume_empty(self):
        assert total_volume((), None) == Decimal("0")


class TestNotionalValue:
    """Test notional value calculation"""

    def test_notional_value_calculation(self):
        levels = [
            Level(price=Decimal("100"), quantity=Decimal("10")),
            Level(price=Decimal("101"), quantity=Decimal("5")),
            Level(price=Decimal("102"), quantity=Decimal("3")),
        ]

        # 100*10 + 101*5 + 102*3 = 1000 + 505 + 306 = 1811
        assert calculate_notional_value(levels) == Decimal("1811")
        assert calculate_notional_value(levels, depth=1) == Decimal("1000")

    def test_notional_value_empty_levels(self):
        assert calculate_notional_value([]) == Decimal("0")


class TestAnalyzeOrderBook:
    """Test the bundled snapshot analysis"""

    def test_analyze_orderbook(self, sample_order_book):
        metrics = analyze_orderbook(sample_order_book)

        assert isinstance(metrics, OrderBookMetrics)
        assert metrics.timestamp == sample_order_book.timestamp
        assert metrics.best_bid == Decimal("100.00")
        assert metrics.best_ask == Decimal("100.50")
        assert metrics.mid_price == Decimal("100.25")
        assert metrics.spread.absolute == Decimal("0.50")
        assert metrics.imbalance == Decimal("0")
        assert metrics.bid_volume == Decimal("5")
        assert metrics.ask_volume == Decimal("5")
        # 100*2 + 99.5*3 = 498.5; 100.5*1 + 101*4 = 504.5
        assert metrics.notional_bids == Decimal("498.5")
        assert metrics.notional_asks == Decimal("504.5")

    def test_analyze_empty_book(self, empty_order_book):
        metrics = analyze_orderbook(empty_order_book)

        assert metrics.spread is None
        assert metrics.mid_price is None
        assert metrics.imbalance == Decimal("0")

    def test_metrics_are_immutable(self, sample_order_book):
        metrics = analyze_orderbook(sample_order_book)

        with pytest.raises(AttributeError):
            metrics.imbalance = Decimal("1")

    def test_book_input_not_mutated(self, sample_order_book):
        bids_before = sample_order_book.bids
        analyze_orderbook(sample_order_book, depth=1)

        assert sample_order_book.bids == bids_before
        assert isinstance(sample_order_book, OrderBook)
