"""
Plain-text rendering of order books, trade tapes, volume profiles and patterns.

Every function returns a string and never prints; callers decide where the
text goes. Bar lengths are scaled against the largest quantity shown.
"""

from decimal import Decimal
from typing import Sequence

from ..data.models import OrderBook, Side, Trade
from ..metrics.volume import VolumeProfile
from ..patterns.models import (
    Absorption,
    AnyPattern,
    IcebergOrder,
    Resistance,
    Spoofing,
    Support,
)

SEPARATOR_WIDTH = 50


def _bar(quantity: Decimal, max_quantity: Decimal, width: int, char: str) -> str:
    """Bar proportional to quantity; at least one char for any non-zero quantity."""
    if max_quantity <= 0 or quantity <= 0:
        return ""
    length = int(quantity / max_quantity * width)
    return char * max(length, 1)


def format_order_book(book: OrderBook, levels: int = 10, width: int = 20) -> str:
    """
    Render an order book ladder, asks on top (highest first) and bids below.

    Args:
        book: Order book snapshot
        levels: Levels per side to show
        width: Width of the longest quantity bar
    """
    asks = book.asks[:levels]
    bids = book.bids[:levels]
    max_qty = max((level.quantity for level in (*asks, *bids)), default=Decimal("0"))

    lines = ["=== Order Book ===", f"Timestamp: {book.timestamp}", "", "Asks (Sell Orders):"]
    for level in reversed(asks):
        lines.append(f"  {str(level.price):<12} | {_bar(level.quantity, max_qty, width, '#')} {level.quantity}")

    lines.append("-" * SEPARATOR_WIDTH)

    for level in bids:
        lines.append(f"  {str(level.price):<12} | {_bar(level.quantity, max_qty, width, '#')} {level.quantity}")
    lines.append("Bids (Buy Orders):")

    return "\n".join(lines)


def format_trades(trades: Sequence[Trade], limit: int = 20) -> str:
    """Render a time & sales table of the first ``limit`` trades in input order."""
    lines = [
        "=== Trade Tape ===",
        f"{'Time':<12} {'Price':<12} {'Quantity':<12} {'Side':<6}",
        "-" * SEPARATOR_WIDTH,
    ]
    for trade in trades[:limit]:
        side = "BUY" if trade.side is Side.BUY else "SELL"
        lines.append(f"{trade.timestamp:<12} {str(trade.price):<12} {str(trade.quantity):<12} {side:<6}")
    return "\n".join(lines)


def ascii_depth_chart(book: OrderBook, levels: int = 5, width: int = 20) -> str:
    """
    Render a compact depth chart of the top levels.

    Returns:
        Chart text, or "No data" when both sides are empty
    """
    if book.is_empty:
        return "No data"

    asks = book.asks[:levels]
    bids = book.bids[:levels]
    max_qty = max((level.quantity for level in (*book.bids, *book.asks)), default=Decimal("0"))

    lines = ["Order Book Depth:", f"Max Volume: {max_qty}", ""]
    for level in reversed(asks):
        bar = _bar(level.quantity, max_qty, width, "=") or "="
        lines.append(f"{str(level.price):<10} ASK |{bar}")

    lines.append("-" * 40)

    for level in bids:
        bar = _bar(level.quantity, max_qty, width, "=") or "="
        lines.append(f"{str(level.price):<10} BID |{bar}")

    return "\n".join(lines)


def format_volume_profile(profile: VolumeProfile, width: int = 30) -> str:
    """Render a volume profile, highest price first, marking POC and value area."""
    if not profile.levels:
        return "No data"

    max_volume = max(profile.levels.values())
    lines = ["=== Volume Profile ==="]
    for price in sorted(profile.levels, reverse=True):
        volume = profile.levels[price]
        marker = ""
        if price == profile.poc:
            marker = " <- POC"
        elif price == profile.vah:
            marker = " <- VAH"
        elif price == profile.val:
            marker = " <- VAL"
        lines.append(f"{str(price):<12} | {_bar(volume, max_volume, width, '#')} {volume}{marker}")

    lines.append(f"POC: {profile.poc}  VAH: {profile.vah}  VAL: {profile.val}")
    return "\n".join(lines)


def describe_pattern(pattern: AnyPattern) -> str:
    """One-line description of a single pattern."""
    if isinstance(pattern, IcebergOrder):
        return f"Iceberg order at {pattern.price}, estimated size {pattern.estimated_size}"
    if isinstance(pattern, Spoofing):
        return f"Potential spoofing at {pattern.price} on the {pattern.side.value} side"
    if isinstance(pattern, Support):
        return f"Support at {pattern.price}, strength {pattern.strength}"
    if isinstance(pattern, Resistance):
        return f"Resistance at {pattern.price}, strength {pattern.strength}"
    if isinstance(pattern, Absorption):
        return f"Absorption at {pattern.price}, volume {pattern.volume}"
    raise TypeError(f"Unknown pattern variant: {type(pattern).__name__}")


def format_patterns(patterns: Sequence[AnyPattern]) -> str:
    """Render detected patterns one per line, or a placeholder when none."""
    if not patterns:
        return "No patterns detected"
    return "\n".join(f"- {describe_pattern(p)}" for p in patterns)
