#!/usr/bin/env python3
"""
Pattern Detection Example - Market Microstructure Analytics

This script builds a book and a trade batch containing an iceberg, a large
resting order and an absorption window, then runs every detector through
both detect_all_patterns and the MetricsCalculator with per-instrument
configuration.

Run: python examples/pattern_detection.py
"""

from mma_app.config.loader import ConfigLoader
from mma_app.data import parse_order_book, parse_trades
from mma_app.logging import configure_logging
from mma_app.metrics import MetricsCalculator
from mma_app.patterns import detect_all_patterns
from mma_app.visualization import format_patterns


def create_book_payload() -> dict:
    return {
        "bids": [["50000.0", "1.0"], ["49990.0", "120.0"], ["49980.0", "12.0"]],
        "asks": [["50010.0", "0.8"], ["50020.0", "9.5"], ["50030.0", "3.0"]],
        "ts": 1005,
    }


def create_trades_payload() -> list[list]:
    # Repeated small fills at one price, then heavy two-sided volume in a tight range
    return [
        ["50005.0", "0.2", "buy", 1000],
        ["50005.0", "0.2", "buy", 1001],
        ["50005.0", "0.2", "buy", 1002],
        ["50005.0", "0.2", "buy", 1003],
        ["50006.0", "6.0", "sell", 1004],
        ["50007.0", "7.0", "buy", 1005],
        ["50006.5", "8.0", "sell", 1006],
    ]


def main():
    """Run the pattern detection example."""
    configure_logging(level="INFO")

    print("🔎 Pattern Detection")
    print("=" * 50)

    book = parse_order_book(create_book_payload())
    trades = parse_trades(create_trades_payload())

    print("Default thresholds:")
    print(format_patterns(detect_all_patterns(book, trades)))

    config = ConfigLoader.create().build_config("BTC-USD")
    snapshot = MetricsCalculator(config).calculate_metrics(book, trades, instrument_id="BTC-USD")

    print("\nBTC-USD thresholds:")
    print(format_patterns(snapshot.patterns))
    print(f"\nMarket bias: {snapshot.get_bias()}")


if __name__ == "__main__":
    main()
