#!/usr/bin/env python3
"""
Order Book Analysis Example - Market Microstructure Analytics

This script parses an exchange-style order book payload and shows:
- Best bid/ask, mid price and spread
- Bid/ask imbalance and notional value per side
- Volume-weighted mid price
- The text ladder and the ASCII depth chart

Run: python examples/orderbook_analysis.py
"""

from mma_app.data import parse_order_book
from mma_app.metrics import analyze_orderbook, weighted_mid_price
from mma_app.visualization import ascii_depth_chart, format_order_book


def create_orderbook_payload() -> dict:
    """Create an OKX-style order book message."""
    return {
        "arg": {"channel": "books", "instId": "BTC-USD"},
        "data": [{
            "bids": [
                ["50000.00", "1.5", "0", "3"],
                ["49999.50", "2.3", "0", "5"],
                ["49999.00", "0.8", "0", "2"],
                ["49998.50", "4.1", "0", "7"],
            ],
            "asks": [
                ["50001.00", "1.2", "0", "2"],
                ["50001.50", "1.8", "0", "4"],
                ["50002.00", "2.5", "0", "6"],
                ["50002.50", "0.6", "0", "1"],
            ],
            "ts": "1696435200000",
        }],
    }


def main():
    """Run the order book analysis example."""
    print("📖 Order Book Analysis")
    print("=" * 50)

    book = parse_order_book(create_orderbook_payload())
    metrics = analyze_orderbook(book)

    print(f"Best bid:      {metrics.best_bid}")
    print(f"Best ask:      {metrics.best_ask}")
    print(f"Mid price:     {metrics.mid_price}")
    if metrics.spread is not None:
        print(f"Spread:        {metrics.spread.absolute} ({metrics.spread.percentage:.4f}%)")
    print(f"Weighted mid:  {weighted_mid_price(book)}")
    print(f"Imbalance:     {metrics.imbalance:.4f}")
    print(f"Bid volume:    {metrics.bid_volume}  notional {metrics.notional_bids}")
    print(f"Ask volume:    {metrics.ask_volume}  notional {metrics.notional_asks}")

    top_two = analyze_orderbook(book, depth=2)
    print(f"Imbalance (top 2 levels): {top_two.imbalance:.4f}")

    print()
    print(format_order_book(book))
    print()
    print(ascii_depth_chart(book))


if __name__ == "__main__":
    main()
