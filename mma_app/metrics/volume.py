"""Volume profile, delta volume, cumulative volume delta and weighted mid price"""

from dataclasses import dataclass, field
from decimal import ROUND_FLOOR, Decimal
from types import MappingProxyType
from typing import Mapping, Optional, Sequence

from ..data.models import OrderBook, Trade

ZERO = Decimal("0")
DEFAULT_VALUE_AREA_PCT = Decimal("0.70")


@dataclass(frozen=True)
class VolumeProfile:
    """
    Traded volume per price bucket

    levels maps bucket price to accumulated volume and iterates in ascending
    price order. poc is the highest-volume bucket; vah/val bound the value
    area. All three are None for an empty profile. levels is stored as a
    read-only mapping and is left out of the hash.
    """
    levels: Mapping[Decimal, Decimal] = field(default_factory=dict, hash=False)
    poc: Optional[Decimal] = None
    vah: Optional[Decimal] = None
    val: Optional[Decimal] = None

    def __post_init__(self):
        object.__setattr__(self, "levels", MappingProxyType(dict(self.levels)))

    @property
    def total_volume(self) -> Decimal:
        return sum(self.levels.values(), ZERO)


def price_bucket(price: Decimal, tick_size: Decimal) -> Decimal:
    """Floor a price to its tick bucket: floor(price / tick_size) * tick_size"""
    return (price / tick_size).to_integral_value(rounding=ROUND_FLOOR) * tick_size


def calculate_volume_profile(trades: Sequence[Trade], tick_size: Decimal,
                             value_area_pct: Decimal = DEFAULT_VALUE_AREA_PCT) -> VolumeProfile:
    """
    Calculate the volume profile of a trade batch

    Value area construction starts at the POC and repeatedly claims the
    adjacent populated bucket (just above the current high or just below the
    current low) with the larger volume, preferring the upper one on a tie,
    until claimed volume reaches value_area_pct of the total or every bucket
    is claimed.

    Args:
        trades: Trades in any order
        tick_size: Bucket width, must be positive
        value_area_pct: Share of total volume the value area must hold

    Returns:
        VolumeProfile with POC (ties go to the lowest price), VAH and VAL

    Raises:
        ValueError: If tick_size is not positive
    """
    if tick_size <= ZERO:
        raise ValueError(f"tick_size must be positive, got {tick_size}")

    buckets: dict[Decimal, Decimal] = {}
    for trade in trades:
        bucket = price_bucket(trade.price, tick_size)
        buckets[bucket] = buckets.get(bucket, ZERO) + trade.quantity

    if not buckets:
        return VolumeProfile()

    prices = sorted(buckets)
    volumes = [buckets[p] for p in prices]
    levels = dict(zip(prices, volumes))

    # Strict comparison over ascending prices keeps the lowest bucket on ties
    poc_index = 0
    for i, volume in enumerate(volumes):
        if volume > volumes[poc_index]:
            poc_index = i

    low, high = _expand_value_area(volumes, poc_index, value_area_pct)

    return VolumeProfile(
        levels=levels,
        poc=prices[poc_index],
        vah=prices[high],
        val=prices[low],
    )


def _expand_value_area(volumes: list[Decimal], poc_index: int,
                       value_area_pct: Decimal) -> tuple[int, int]:
    """Grow the value area from the POC; returns (low, high) bucket indices"""
    target = sum(volumes, ZERO) * value_area_pct
    low = high = poc_index
    claimed = volumes[poc_index]
    last = len(volumes) - 1

    while claimed < target and (low > 0 or high < last):
        above = volumes[high + 1] if high < last else None
        below = volumes[low - 1] if low > 0 else None

        if below is None or (above is not None and above >= below):
            high += 1
            claimed += above
        else:
            low -= 1
            claimed += below

    return low, high


def calculate_delta(trades: Sequence[Trade]) -> Decimal:
    """
    Calculate delta volume

    Returns:
        Buy quantity minus sell quantity (positive = buying pressure)
    """
    return sum((t.signed_quantity for t in trades), ZERO)


def calculate_cvd(trades: Sequence[Trade]) -> list[tuple[int, Decimal]]:
    """
    Calculate cumulative volume delta over time

    Trades are stable-sorted by timestamp before accumulating, so the last
    entry always equals calculate_delta(trades).

    Returns:
        One (timestamp, cumulative_delta) pair per trade
    """
    cvd = ZERO
    result = []

    for trade in sorted(trades, key=lambda t: t.timestamp):
        cvd += trade.signed_quantity
        result.append((trade.timestamp, cvd))

    return result


def weighted_mid_price(book: OrderBook) -> Optional[Decimal]:
    """
    Calculate the top-of-book quantity weighted mid price

    (best_bid * ask_qty + best_ask * bid_qty) / (bid_qty + ask_qty), which
    leans toward the side with less resting quantity.

    Returns:
        Weighted mid; None if either side is empty; Decimal 0 if both top
        levels have zero quantity
    """
    if not book.bids or not book.asks:
        return None

    top_bid = book.bids[0]
    top_ask = book.asks[0]

    total_qty = top_bid.quantity + top_ask.quantity
    if total_qty == ZERO:
        return ZERO

    return (top_bid.price * top_ask.quantity + top_ask.price * top_bid.quantity) / total_qty
