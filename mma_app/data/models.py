"""
Canonical data models for order book snapshots and executed trades.

This module defines immutable data structures that represent validated
market data. Prices and quantities are always Decimal; binary floats are
never used for monetary values.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Optional


class Side(str, Enum):
    """Aggressor side of an executed trade."""
    BUY = "buy"
    SELL = "sell"


class BookSide(str, Enum):
    """Side of the order book a level rests on."""
    BID = "bid"
    ASK = "ask"


@dataclass(frozen=True)
class Level:
    """Single order book level with price and quantity."""
    price: Decimal
    quantity: Decimal


@dataclass(frozen=True)
class OrderBook:
    """Order book snapshot with sorted levels."""
    bids: tuple[Level, ...] = field(default_factory=tuple)   # Sorted by price descending
    asks: tuple[Level, ...] = field(default_factory=tuple)   # Sorted by price ascending
    timestamp: int = 0                                        # Epoch timestamp

    def __post_init__(self):
        # Store sides as tuples so a snapshot cannot be mutated through a shared list
        object.__setattr__(self, "bids", tuple(self.bids))
        object.__setattr__(self, "asks", tuple(self.asks))

    @property
    def best_bid(self) -> Optional[Decimal]:
        """Best bid price, None if no bids."""
        return self.bids[0].price if self.bids else None

    @property
    def best_ask(self) -> Optional[Decimal]:
        """Best ask price, None if no asks."""
        return self.asks[0].price if self.asks else None

    @property
    def is_empty(self) -> bool:
        return not self.bids and not self.asks


@dataclass(frozen=True)
class Trade:
    """Executed trade from the tape."""
    price: Decimal
    quantity: Decimal
    side: Side
    timestamp: int

    @property
    def is_buy(self) -> bool:
        return self.side is Side.BUY

    @property
    def signed_quantity(self) -> Decimal:
        """Quantity signed by aggressor side (+buy, -sell)."""
        return self.quantity if self.is_buy else -self.quantity
