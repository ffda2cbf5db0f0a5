"""Tests for the metrics calculator"""

from decimal import Decimal
from unittest.mock import patch

import pytest
from mma_app.config.defaults import DefaultConfig, PatternParams, ProfileParams, TapeParams, BookParams
from mma_app.data.models import Level, OrderBook
from mma_app.data.validators import ValidationError
from mma_app.errors import MetricsCalculationError, MissingDataError
from mma_app.metrics.calculator import MetricsCalculator
from mma_app.models.metrics import MetricsSnapshot
from mma_app.patterns import PatternType


@pytest.fixture
def calculator() -> MetricsCalculator:
    config = DefaultConfig(
        book=BookParams(depth=None),
        tape=TapeParams(block_threshold=Decimal("1.5"), cluster_time_window=2, min_cluster_size=3),
        profile=ProfileParams(tick_size=Decimal("1")),
        patterns=PatternParams(
            iceberg_min_fills=2,
            spoofing_threshold=Decimal("4"),
            support_resistance_threshold=Decimal("3"),
            absorption_volume_threshold=Decimal("100"),
        ),
    )
    return MetricsCalculator(config)


class TestMetricsCalculator:
    """Test full snapshot calculation"""

    def test_book_and_trades(self, calculator, sample_order_book, sample_trades):
        snapshot = calculator.calculate_metrics(sample_order_book, sample_trades, instrument_id="BTC-USD")

        assert isinstance(snapshot, MetricsSnapshot)
        assert snapshot.timestamp == sample_order_book.timestamp
        assert snapshot.book.mid_price == Decimal("100.25")
        assert snapshot.book.imbalance == Decimal("0")
        assert snapshot.weighted_mid_price is not None
        assert snapshot.trade_count == 4
        assert snapshot.pressure.net_volume == Decimal("2.2")
        assert snapshot.delta == Decimal("2.2")
        assert snapshot.cvd[-1] == (1003, Decimal("2.2"))
        assert snapshot.vwap == Decimal("190005.4") / Decimal("3.8")
        assert snapshot.aggression_ratio == Decimal("3.0") / Decimal("3.8")
        assert snapshot.block_trade_count == 1
        assert snapshot.cluster_starts == (0,)
        assert snapshot.volume_profile.poc == Decimal("50002")

    def test_patterns_included(self, calculator, sample_order_book, sample_trades):
        snapshot = calculator.calculate_metrics(sample_order_book, sample_trades)

        # Ask at 101.00 holds 4: spoofing (>= 4) and resistance (>= 3); bid 99.50 holds 3: support
        kinds = [(p.price, p.pattern_type) for p in snapshot.patterns]
        assert (Decimal("99.50"), PatternType.SUPPORT) in kinds
        assert (Decimal("101.00"), PatternType.SPOOFING) in kinds
        assert (Decimal("101.00"), PatternType.RESISTANCE) in kinds
        assert [p.price for p in snapshot.patterns] == sorted(p.price for p in snapshot.patterns)

    def test_book_only(self, calculator, sample_order_book):
        snapshot = calculator.calculate_metrics(book=sample_order_book)

        assert snapshot.has_book_data()
        assert not snapshot.has_trade_data()
        assert snapshot.vwap is None
        assert snapshot.cvd == ()
        assert snapshot.volume_profile is None

    def test_trades_only(self, calculator, sample_trades):
        snapshot = calculator.calculate_metrics(trades=sample_trades)

        assert snapshot.book is None
        assert snapshot.weighted_mid_price is None
        assert snapshot.timestamp == 1003

    def test_empty_trade_batch(self, calculator):
        snapshot = calculator.calculate_metrics(trades=[])

        assert snapshot.timestamp is None
        assert snapshot.trade_count == 0
        assert snapshot.patterns == ()

    def test_no_inputs(self, calculator):
        with pytest.raises(MissingDataError):
            calculator.calculate_metrics()

    def test_invalid_book_rejected(self, calculator):
        book = OrderBook(
            bids=(Level(price=Decimal("99"), quantity=Decimal("1")),
                  Level(price=Decimal("100"), quantity=Decimal("1"))),
            asks=(),
            timestamp=1,
        )

        with pytest.raises(ValidationError):
            calculator.calculate_metrics(book=book)

    def test_analytic_failure_is_wrapped(self, calculator, sample_trades):
        with patch("mma_app.metrics.calculator.calculate_vwap", side_effect=ArithmeticError("boom")):
            with pytest.raises(MetricsCalculationError) as exc_info:
                calculator.calculate_metrics(trades=sample_trades)

        assert exc_info.value.metric_name == "vwap"
        assert exc_info.value.recoverable is False

    def test_default_config(self, sample_order_book):
        snapshot = MetricsCalculator().calculate_metrics(book=sample_order_book)

        assert snapshot.book.spread.absolute == Decimal("0.50")


class TestMetricsSnapshot:
    """Test snapshot helpers"""

    def test_snapshot_is_hashable(self, calculator, sample_order_book, sample_trades):
        snapshot = calculator.calculate_metrics(sample_order_book, sample_trades)

        assert hash(snapshot) == hash(calculator.calculate_metrics(sample_order_book, sample_trades))
        assert isinstance(snapshot.cvd, tuple)
        assert isinstance(snapshot.patterns, tuple)

    def test_sequences_stored_as_tuples(self):
        snapshot = MetricsSnapshot(timestamp=1, cluster_starts=[0, 4])

        assert snapshot.cluster_starts == (0, 4)

    def test_bias(self, calculator, book_factory, trade_factory):
        bid_heavy = book_factory(bids=[("100", "9")], asks=[("101", "1")])
        ask_heavy = book_factory(bids=[("100", "1")], asks=[("101", "9")])
        buys = [trade_factory("100", "1", "buy", 1)]
        sells = [trade_factory("100", "1", "sell", 1)]

        assert calculator.calculate_metrics(bid_heavy, buys).get_bias() == "bullish"
        assert calculator.calculate_metrics(ask_heavy, sells).get_bias() == "bearish"
        assert calculator.calculate_metrics(bid_heavy, sells).get_bias() == "neutral"
