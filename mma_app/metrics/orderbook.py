"""Order book analysis: spread, imbalance, top-of-book prices and depth volume"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Sequence

from ..data.models import Level, OrderBook

ZERO = Decimal("0")
TWO = Decimal("2")
HUNDRED = Decimal("100")


@dataclass(frozen=True)
class SpreadMetrics:
    """Bid-ask spread in price units and as a percentage of mid"""
    absolute: Decimal
    percentage: Decimal


@dataclass(frozen=True)
class OrderBookMetrics:
    """Order book analysis results for a single snapshot"""
    timestamp: int
    best_bid: Optional[Decimal]
    best_ask: Optional[Decimal]
    mid_price: Optional[Decimal]
    spread: Optional[SpreadMetrics]
    imbalance: Decimal
    bid_volume: Decimal
    ask_volume: Decimal
    notional_bids: Decimal
    notional_asks: Decimal


def best_bid(book: OrderBook) -> Optional[Decimal]:
    """Best (highest) bid price, None if the bid side is empty"""
    return book.bids[0].price if book.bids else None


def best_ask(book: OrderBook) -> Optional[Decimal]:
    """Best (lowest) ask price, None if the ask side is empty"""
    return book.asks[0].price if book.asks else None


def mid_price(book: OrderBook) -> Optional[Decimal]:
    """
    Mid price between best bid and best ask

    Returns:
        (best_bid + best_ask) / 2, or None unless both sides are non-empty
    """
    bid = best_bid(book)
    ask = best_ask(book)
    if bid is None or ask is None:
        return None
    return (bid + ask) / TWO


def total_volume(levels: Sequence[Level], depth: Optional[int] = None) -> Decimal:
    """
    Sum quantity over the first levels of a book side

    Args:
        levels: One side of the book, best level first
        depth: Number of levels to include (None for all). Depth beyond the
            side length is clamped; depth 0 yields 0.

    Returns:
        Total quantity
    """
    if depth is not None:
        levels = levels[:max(depth, 0)]
    return sum((level.quantity for level in levels), ZERO)


def calculate_notional_value(levels: Sequence[Level], depth: Optional[int] = None) -> Decimal:
    """
    Calculate notional value (price * quantity) for the first levels of a side

    Args:
        levels: One side of the book, best level first
        depth: Number of levels to include (None for all)

    Returns:
        Total notional value
    """
    if depth is not None:
        levels = levels[:max(depth, 0)]
    return sum((level.price * level.quantity for level in levels), ZERO)


def calculate_spread(book: OrderBook) -> Optional[SpreadMetrics]:
    """
    Calculate the bid-ask spread

    Args:
        book: Order book snapshot

    Returns:
        SpreadMetrics(absolute, percentage) where percentage is relative to
        the mid price, or None if either side is empty
    """
    bid = best_bid(book)
    ask = best_ask(book)
    if bid is None or ask is None:
        return None

    absolute = ask - bid
    mid = (bid + ask) / TWO
    # mid is positive for validated books; guard keeps a zero-priced feed from raising
    percentage = absolute / mid * HUNDRED if mid != ZERO else ZERO

    return SpreadMetrics(absolute=absolute, percentage=percentage)


def calculate_imbalance(book: OrderBook, depth: Optional[int] = None) -> Decimal:
    """
    Calculate order book volume imbalance

    Imbalance = (bid_volume - ask_volume) / (bid_volume + ask_volume)
    - Positive values indicate more resting buy interest
    - Negative values indicate more resting sell interest

    Args:
        book: Order book snapshot
        depth: Number of levels per side to consider (None for all levels)

    Returns:
        Imbalance in [-1, 1]; 0 when both sides hold no volume
    """
    bid_volume = total_volume(book.bids, depth)
    ask_volume = total_volume(book.asks, depth)

    total = bid_volume + ask_volume
    if total == ZERO:
        return ZERO

    return (bid_volume - ask_volume) / total


def analyze_orderbook(book: OrderBook, depth: Optional[int] = None) -> OrderBookMetrics:
    """
    Run every book metric over a snapshot

    Args:
        book: Order book snapshot
        depth: Number of levels per side for volume, notional and imbalance

    Returns:
        OrderBookMetrics for the snapshot
    """
    return OrderBookMetrics(
        timestamp=book.timestamp,
        best_bid=best_bid(book),
        best_ask=best_ask(book),
        mid_price=mid_price(book),
        spread=calculate_spread(book),
        imbalance=calculate_imbalance(book, depth),
        bid_volume=total_volume(book.bids, depth),
        ask_volume=total_volume(book.asks, depth),
        notional_bids=calculate_notional_value(book.bids, depth),
        notional_asks=calculate_notional_value(book.asks, depth),
    )
