"""Data models for metrics snapshots"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from ..metrics.orderbook import OrderBookMetrics
from ..metrics.tape import TradePressure
from ..metrics.volume import VolumeProfile
from ..patterns.models import AnyPattern


@dataclass(frozen=True)
class MetricsSnapshot:
    """Every analytic computed for one book snapshot and/or one trade batch"""

    timestamp: Optional[int]
    book: Optional[OrderBookMetrics] = None
    weighted_mid_price: Optional[Decimal] = None
    trade_count: int = 0
    pressure: Optional[TradePressure] = None
    aggression_ratio: Optional[Decimal] = None
    vwap: Optional[Decimal] = None
    delta: Optional[Decimal] = None
    cvd: tuple[tuple[int, Decimal], ...] = ()
    block_trade_count: int = 0
    cluster_starts: tuple[int, ...] = ()
    volume_profile: Optional[VolumeProfile] = None
    patterns: tuple[AnyPattern, ...] = ()

    def __post_init__(self):
        # Sequences are stored as tuples so the snapshot stays hashable
        object.__setattr__(self, "cvd", tuple(self.cvd))
        object.__setattr__(self, "cluster_starts", tuple(self.cluster_starts))
        object.__setattr__(self, "patterns", tuple(self.patterns))

    def has_book_data(self) -> bool:
        return self.book is not None

    def has_trade_data(self) -> bool:
        return self.trade_count > 0

    def get_bias(self) -> str:
        """
        Coarse directional read combining book imbalance and trade delta.

        Returns:
            'bullish' when both lean to buyers, 'bearish' when both lean to
            sellers, otherwise 'neutral'
        """
        imbalance = self.book.imbalance if self.book is not None else Decimal("0")
        delta = self.delta if self.delta is not None else Decimal("0")

        if imbalance > 0 and delta > 0:
            return "bullish"
        if imbalance < 0 and delta < 0:
            return "bearish"
        return "neutral"
