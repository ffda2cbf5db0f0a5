"""Tape reading: trade classification, pressure, block trades, clusters and VWAP"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Optional, Sequence

from ..data.models import Side, Trade

ZERO = Decimal("0")
NEUTRAL_RATIO = Decimal("0.5")


class TradeType(str, Enum):
    """Classification tag for a single trade"""
    BUY = "buy"
    SELL = "sell"
    BLOCK = "block"


@dataclass(frozen=True)
class TradeClassification:
    """Trade classification; side is always the aggressor side, also for blocks"""
    trade_type: TradeType
    side: Side

    @property
    def is_block(self) -> bool:
        return self.trade_type is TradeType.BLOCK


@dataclass(frozen=True)
class TradePressure:
    """Buy and sell volume over a batch of trades"""
    buy_volume: Decimal
    sell_volume: Decimal
    net_volume: Decimal


def classify_trade(trade: Trade, block_threshold: Decimal) -> TradeClassification:
    """
    Classify a single trade

    Args:
        trade: Trade to classify
        block_threshold: Minimum quantity for a block trade

    Returns:
        BLOCK when quantity >= block_threshold, otherwise BUY or SELL by side
    """
    if trade.quantity >= block_threshold:
        return TradeClassification(trade_type=TradeType.BLOCK, side=trade.side)
    if trade.side is Side.BUY:
        return TradeClassification(trade_type=TradeType.BUY, side=Side.BUY)
    return TradeClassification(trade_type=TradeType.SELL, side=Side.SELL)


def calculate_trade_pressure(trades: Sequence[Trade]) -> TradePressure:
    """
    Calculate buying vs selling pressure over a batch

    Args:
        trades: Trades in any order

    Returns:
        TradePressure(buy_volume, sell_volume, net_volume); all zero on empty input
    """
    buy_volume = sum((t.quantity for t in trades if t.side is Side.BUY), ZERO)
    sell_volume = sum((t.quantity for t in trades if t.side is Side.SELL), ZERO)

    return TradePressure(
        buy_volume=buy_volume,
        sell_volume=sell_volume,
        net_volume=buy_volume - sell_volume,
    )


def identify_block_trades(trades: Sequence[Trade], threshold: Decimal) -> list[Trade]:
    """Trades with quantity >= threshold, in input order"""
    return [t for t in trades if t.quantity >= threshold]


def calculate_aggression_ratio(trades: Sequence[Trade]) -> Decimal:
    """
    Calculate the share of volume traded by aggressive buyers

    A ratio above 0.6 usually reads as strong buying aggression.

    Args:
        trades: Trades in any order

    Returns:
        buy_volume / (buy_volume + sell_volume) in [0, 1]; 0.5 (neutral)
        when the total volume is zero, including empty input
    """
    pressure = calculate_trade_pressure(trades)
    total = pressure.buy_volume + pressure.sell_volume
    if total == ZERO:
        return NEUTRAL_RATIO
    return pressure.buy_volume / total


def detect_trade_clusters(trades: Sequence[Trade], time_window: int,
                          min_cluster_size: int) -> list[int]:
    """
    Detect bursts of trades arriving in rapid succession

    Trades are stable-sorted by timestamp first. A cluster collects consecutive
    trades whose timestamp is within time_window of the cluster's first trade;
    the first trade outside the window closes the cluster and starts the next.

    Args:
        trades: Trades in any order
        time_window: Maximum distance from the cluster's first timestamp
        min_cluster_size: Minimum member count for a cluster to be reported

    Returns:
        Start indices of qualifying clusters, as positions in timestamp order
    """
    if not trades:
        return []

    ordered = sorted(trades, key=lambda t: t.timestamp)
    clusters: list[int] = []
    cluster_start = 0
    cluster_count = 1

    for i in range(1, len(ordered)):
        if ordered[i].timestamp - ordered[cluster_start].timestamp <= time_window:
            cluster_count += 1
            continue

        if cluster_count >= min_cluster_size:
            clusters.append(cluster_start)
        cluster_start = i
        cluster_count = 1

    # Trailing cluster
    if cluster_count >= min_cluster_size:
        clusters.append(cluster_start)

    return clusters


def calculate_vwap(trades: Sequence[Trade]) -> Optional[Decimal]:
    """
    Calculate Volume-Weighted Average Price (VWAP)

    Returns:
        sum(price * quantity) / sum(quantity), or None for empty input or
        zero total quantity
    """
    if not trades:
        return None

    total_volume = sum((t.quantity for t in trades), ZERO)
    if total_volume == ZERO:
        return None

    total_value = sum((t.price * t.quantity for t in trades), ZERO)
    return total_value / total_volume
