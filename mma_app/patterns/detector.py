"""
Heuristic market microstructure pattern detection.

Every detector is a pure function that returns its patterns ordered by
ascending price. Python's sort is stable, so patterns at the same price keep
the order in which they were found (bids before asks for book detectors).
Empty input always yields an empty list.
"""

from decimal import Decimal
from typing import Optional, Sequence

from ..config.defaults import PatternParams
from ..data.models import BookSide, OrderBook, Trade
from ..logging import get_logger
from .models import Absorption, IcebergOrder, Pattern, Resistance, Spoofing, Support

logger = get_logger(__name__)

ZERO = Decimal("0")


def _by_price(patterns: list[Pattern]) -> list[Pattern]:
    return sorted(patterns, key=lambda p: p.price)


def detect_iceberg_orders(trades: Sequence[Trade], min_fills: int,
                          price_tolerance: Decimal) -> list[IcebergOrder]:
    """
    Detect potential iceberg orders

    Trades are sorted by price and swept into contiguous groups: a trade joins
    the current group while its price is within price_tolerance of the group's
    first trade's price, otherwise it starts a new group. The tolerance is
    measured from the group's anchor, not from every member.

    Args:
        trades: Trades in any order
        min_fills: Minimum number of fills for a group to qualify
        price_tolerance: Maximum distance from the group's first price

    Returns:
        IcebergOrder(price=group's first price, estimated_size=group quantity)
        for each qualifying group
    """
    if not trades:
        return []

    ordered = sorted(trades, key=lambda t: t.price)
    patterns: list[IcebergOrder] = []

    group_price = ordered[0].price
    group_size = ZERO
    group_fills = 0

    for trade in ordered:
        if trade.price - group_price > price_tolerance:
            if group_fills >= min_fills:
                patterns.append(IcebergOrder(price=group_price, estimated_size=group_size))
            group_price = trade.price
            group_size = ZERO
            group_fills = 0

        group_size += trade.quantity
        group_fills += 1

    if group_fills >= min_fills:
        patterns.append(IcebergOrder(price=group_price, estimated_size=group_size))

    return patterns


def detect_spoofing(book: OrderBook, threshold: Decimal) -> list[Spoofing]:
    """
    Flag unusually large resting levels as potential spoofing

    Every level on either side with quantity >= threshold is reported. A
    single snapshot cannot confirm that the order is later withdrawn, so this
    is a size heuristic only.

    Args:
        book: Order book snapshot
        threshold: Minimum level quantity to flag

    Returns:
        Spoofing(price, side) per flagged level
    """
    patterns = [
        Spoofing(price=level.price, side=BookSide.BID)
        for level in book.bids if level.quantity >= threshold
    ]
    patterns.extend(
        Spoofing(price=level.price, side=BookSide.ASK)
        for level in book.asks if level.quantity >= threshold
    )
    return _by_price(patterns)


def detect_support_resistance(book: OrderBook, threshold: Decimal) -> list[Pattern]:
    """
    Detect support and resistance levels from resting size

    Args:
        book: Order book snapshot
        threshold: Minimum level quantity to consider significant

    Returns:
        Support(price, strength) for large bids and Resistance(price, strength)
        for large asks, strength being the level quantity
    """
    patterns: list[Pattern] = [
        Support(price=level.price, strength=level.quantity)
        for level in book.bids if level.quantity >= threshold
    ]
    patterns.extend(
        Resistance(price=level.price, strength=level.quantity)
        for level in book.asks if level.quantity >= threshold
    )
    return _by_price(patterns)


def detect_absorption(trades: Sequence[Trade], volume_threshold: Decimal,
                      price_range: Decimal) -> list[Absorption]:
    """
    Detect absorption (large volume traded without price movement)

    Trades are stable-sorted by timestamp and partitioned into contiguous
    windows; a window holds trades whose price stays within price_range of the
    window's first price. The first trade outside the range closes the window
    and opens the next one.

    Args:
        trades: Trades in any order
        volume_threshold: Minimum cumulative quantity for a window to qualify
        price_range: Maximum distance from the window's first price

    Returns:
        Absorption(price=window's first price, volume=window quantity) per
        qualifying window
    """
    if not trades:
        return []

    ordered = sorted(trades, key=lambda t: t.timestamp)
    patterns: list[Absorption] = []

    window_price = ordered[0].price
    window_volume = ZERO

    for trade in ordered:
        if abs(trade.price - window_price) > price_range:
            if window_volume >= volume_threshold:
                patterns.append(Absorption(price=window_price, volume=window_volume))
            window_price = trade.price
            window_volume = ZERO

        window_volume += trade.quantity

    if window_volume >= volume_threshold:
        patterns.append(Absorption(price=window_price, volume=window_volume))

    return _by_price(patterns)


def detect_all_patterns(book: Optional[OrderBook] = None,
                        trades: Optional[Sequence[Trade]] = None,
                        params: Optional[PatternParams] = None) -> list[Pattern]:
    """
    Run every detector that has input and merge the results

    Args:
        book: Order book snapshot for spoofing and support/resistance
        trades: Trade batch for iceberg and absorption detection
        params: Detector thresholds (defaults when omitted)

    Returns:
        All patterns ordered by ascending price; detectors run in the order
        iceberg, spoofing, support/resistance, absorption, which also orders
        patterns sharing a price
    """
    params = params or PatternParams()
    patterns: list[Pattern] = []

    if trades:
        patterns.extend(detect_iceberg_orders(
            trades, params.iceberg_min_fills, params.iceberg_price_tolerance
        ))
    if book is not None:
        patterns.extend(detect_spoofing(book, params.spoofing_threshold))
        patterns.extend(detect_support_resistance(book, params.support_resistance_threshold))
    if trades:
        patterns.extend(detect_absorption(
            trades, params.absorption_volume_threshold, params.absorption_price_range
        ))

    logger.debug(
        "Pattern detection complete",
        pattern_count=len(patterns),
        trade_count=len(trades) if trades else 0,
        book_timestamp=book.timestamp if book is not None else None,
    )
    return _by_price(patterns)
