"""Order book, tape and volume metrics"""

from .calculator import MetricsCalculator
from .orderbook import (
    analyze_orderbook,
    best_ask,
    best_bid,
    calculate_imbalance,
    calculate_notional_value,
    calculate_spread,
    mid_price,
    total_volume,
)
from .tape import (
    calculate_aggression_ratio,
    calculate_trade_pressure,
    calculate_vwap,
    classify_trade,
    detect_trade_clusters,
    identify_block_trades,
)
from .volume import (
    calculate_cvd,
    calculate_delta,
    calculate_volume_profile,
    weighted_mid_price,
)

__all__ = [
    "MetricsCalculator",
    "analyze_orderbook",
    "best_bid",
    "best_ask",
    "mid_price",
    "total_volume",
    "calculate_spread",
    "calculate_imbalance",
    "calculate_notional_value",
    "classify_trade",
    "calculate_trade_pressure",
    "identify_block_trades",
    "calculate_aggression_ratio",
    "detect_trade_clusters",
    "calculate_vwap",
    "calculate_volume_profile",
    "calculate_delta",
    "calculate_cvd",
    "weighted_mid_price",
]
