#!/usr/bin/env python3
"""
Tape Reading Example - Market Microstructure Analytics

This script parses a batch of trades and shows:
- Trade classification and block trades
- Buy/sell pressure, aggression ratio and VWAP
- Trade clusters
- Delta, cumulative volume delta and the volume profile

Run: python examples/tape_reading.py
"""

from decimal import Decimal

from mma_app.data import parse_trades
from mma_app.metrics import (
    calculate_aggression_ratio,
    calculate_cvd,
    calculate_delta,
    calculate_trade_pressure,
    calculate_volume_profile,
    calculate_vwap,
    classify_trade,
    detect_trade_clusters,
    identify_block_trades,
)
from mma_app.visualization import format_trades, format_volume_profile

BLOCK_THRESHOLD = Decimal("5")


def create_trades_payload() -> list[dict]:
    """Create a batch of trades in exchange format."""
    raw = [
        ("50000.0", "1.0", "buy", 1000),
        ("50001.0", "0.5", "sell", 1001),
        ("50002.0", "6.0", "buy", 1002),
        ("50003.0", "0.3", "sell", 1003),
        ("50001.5", "2.2", "buy", 1010),
        ("50000.5", "7.5", "sell", 1011),
        ("50001.0", "1.1", "buy", 1012),
        ("50004.0", "0.8", "buy", 1030),
    ]
    return [{"px": px, "sz": sz, "side": side, "ts": ts} for px, sz, side, ts in raw]


def main():
    """Run the tape reading example."""
    print("📈 Tape Reading")
    print("=" * 50)

    trades = parse_trades({"data": create_trades_payload()})
    print(format_trades(trades))
    print()

    for trade in trades:
        classification = classify_trade(trade, BLOCK_THRESHOLD)
        print(f"  {trade.timestamp}: {classification.trade_type.value:<5} {trade.quantity}")

    pressure = calculate_trade_pressure(trades)
    print(f"\nBuy volume:   {pressure.buy_volume}")
    print(f"Sell volume:  {pressure.sell_volume}")
    print(f"Net volume:   {pressure.net_volume}")
    print(f"Aggression:   {calculate_aggression_ratio(trades):.4f}")
    print(f"VWAP:         {calculate_vwap(trades):.2f}")
    print(f"Block trades: {len(identify_block_trades(trades, BLOCK_THRESHOLD))}")
    print(f"Clusters start at trade index: {detect_trade_clusters(trades, 5, 3)}")

    print(f"\nDelta: {calculate_delta(trades)}")
    for timestamp, cvd in calculate_cvd(trades):
        print(f"  CVD @ {timestamp}: {cvd}")

    print()
    print(format_volume_profile(calculate_volume_profile(trades, Decimal("1"))))


if __name__ == "__main__":
    main()
