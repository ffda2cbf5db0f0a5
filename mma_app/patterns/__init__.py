"""Heuristic pattern detection over order book snapshots and trade batches"""

from .detector import (
    detect_absorption,
    detect_all_patterns,
    detect_iceberg_orders,
    detect_spoofing,
    detect_support_resistance,
)
from .models import (
    Absorption,
    AnyPattern,
    IcebergOrder,
    Pattern,
    PatternType,
    Resistance,
    Spoofing,
    Support,
)

__all__ = [
    "Pattern",
    "PatternType",
    "AnyPattern",
    "IcebergOrder",
    "Spoofing",
    "Support",
    "Resistance",
    "Absorption",
    "detect_iceberg_orders",
    "detect_spoofing",
    "detect_support_resistance",
    "detect_absorption",
    "detect_all_patterns",
]
