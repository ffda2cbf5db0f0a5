"""Main metrics calculator for coordinating all analytics over one book and trade batch"""

from typing import TYPE_CHECKING, Callable, Optional, Sequence, TypeVar

from ..config.defaults import DefaultConfig, get_default_config
from ..data.models import OrderBook, Trade
from ..data.validators import DataValidator
from ..errors import MetricsCalculationError, MissingDataError
from ..logging import get_analytics_logger
from ..patterns.detector import detect_all_patterns
from .orderbook import analyze_orderbook
from .tape import (
    calculate_aggression_ratio,
    calculate_trade_pressure,
    calculate_vwap,
    detect_trade_clusters,
    identify_block_trades,
)
from .volume import calculate_cvd, calculate_delta, calculate_volume_profile, weighted_mid_price

if TYPE_CHECKING:
    from ..models.metrics import MetricsSnapshot

T = TypeVar("T")


class MetricsCalculator:
    """
    Main metrics calculator that runs every analytic with configured parameters

    The calculator holds configuration only; each call is independent and
    nothing is carried between calls.
    """

    def __init__(self, config: Optional[DefaultConfig] = None, validate_inputs: bool = True):
        self.config = config or get_default_config()
        self.validate_inputs = validate_inputs
        self.validator = DataValidator({
            "reject_crossed_book": self.config.book.reject_crossed_book,
        })

    def calculate_metrics(self, book: Optional[OrderBook] = None,
                          trades: Optional[Sequence[Trade]] = None,
                          instrument_id: Optional[str] = None) -> "MetricsSnapshot":
        """
        Calculate all metrics for a book snapshot and/or a trade batch

        Args:
            book: Optional order book snapshot
            trades: Optional trade batch (any order)
            instrument_id: Optional identifier bound into log context

        Returns:
            MetricsSnapshot with every applicable metric

        Raises:
            MissingDataError: If neither a book nor trades are supplied
            ValidationError: If input validation is enabled and fails
            MetricsCalculationError: If an analytic fails unexpectedly
        """
        from ..models.metrics import MetricsSnapshot

        log = get_analytics_logger(__name__, instrument_id=instrument_id)

        if book is None and trades is None:
            raise MissingDataError("Order book or trades required for metrics calculation",
                                   data_type="book_or_trades")

        trades = list(trades) if trades is not None else []

        if self.validate_inputs:
            if book is not None:
                self.validator.validate_order_book(book)
            self.validator.validate_trades(trades)

        book_params = self.config.book
        tape_params = self.config.tape
        profile_params = self.config.profile

        book_metrics = None
        wmid = None
        if book is not None:
            book_metrics = self._run("orderbook", lambda: analyze_orderbook(book, book_params.depth))
            wmid = self._run("weighted_mid_price", lambda: weighted_mid_price(book))

        snapshot_kwargs = {}
        if trades:
            snapshot_kwargs = {
                "pressure": self._run("trade_pressure", lambda: calculate_trade_pressure(trades)),
                "aggression_ratio": self._run("aggression_ratio", lambda: calculate_aggression_ratio(trades)),
                "vwap": self._run("vwap", lambda: calculate_vwap(trades)),
                "delta": self._run("delta", lambda: calculate_delta(trades)),
                "cvd": self._run("cvd", lambda: calculate_cvd(trades)),
                "block_trade_count": len(self._run(
                    "block_trades", lambda: identify_block_trades(trades, tape_params.block_threshold)
                )),
                "cluster_starts": self._run("trade_clusters", lambda: detect_trade_clusters(
                    trades, tape_params.cluster_time_window, tape_params.min_cluster_size
                )),
                "volume_profile": self._run("volume_profile", lambda: calculate_volume_profile(
                    trades, profile_params.tick_size, profile_params.value_area_pct
                )),
            }

        patterns = self._run("patterns", lambda: detect_all_patterns(book, trades, self.config.patterns))

        timestamp = book.timestamp if book is not None else max(t.timestamp for t in trades) if trades else None

        snapshot = MetricsSnapshot(
            timestamp=timestamp,
            book=book_metrics,
            weighted_mid_price=wmid,
            trade_count=len(trades),
            patterns=patterns,
            **snapshot_kwargs,
        )

        log.info(
            "Metrics calculated",
            timestamp=timestamp,
            trade_count=len(trades),
            has_book=book is not None,
            pattern_count=len(patterns),
            bias=snapshot.get_bias(),
        )
        return snapshot

    def _run(self, metric_name: str, func: Callable[[], T]) -> T:
        """Run one analytic, wrapping unexpected failures with the metric name"""
        try:
            return func()
        except (ArithmeticError, TypeError, ValueError, AttributeError) as e:
            raise MetricsCalculationError(
                f"{metric_name} calculation failed: {e}",
                metric_name=metric_name,
            ) from e
