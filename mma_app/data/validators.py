"""
Data validation for order book snapshots and trades.

Validation happens once, where data enters the package. Analytic functions
assume their inputs already passed these checks and never re-validate.
"""

from decimal import Decimal
from typing import Any, Iterable, Optional

from ..errors import DataQualityError
from ..logging import get_logger
from .models import BookSide, Level, OrderBook, Side, Trade

logger = get_logger(__name__)


class ValidationError(DataQualityError):
    """Raised when data validation fails."""
    pass


class DataValidator:
    """Validates order book snapshots and trades against the data model."""

    def __init__(self, config: Optional[dict[str, Any]] = None):
        """
        Initialize validator with configuration.

        Args:
            config: Validation configuration dict
        """
        self.config = config or {}

        # A crossed book (best bid >= best ask) is legal data but usually a feed glitch
        self.reject_crossed_book = self.config.get("reject_crossed_book", False)
        self.allow_zero_quantity_levels = self.config.get("allow_zero_quantity_levels", True)

    def validate_order_book(self, book: OrderBook) -> None:
        """
        Validate an order book snapshot.

        Args:
            book: Order book snapshot to validate

        Raises:
            ValidationError: If validation fails
        """
        if not isinstance(book.timestamp, int) or isinstance(book.timestamp, bool):
            raise ValidationError(f"Book timestamp must be an integer epoch, got {book.timestamp!r}")

        self._validate_side(book.bids, BookSide.BID)
        self._validate_side(book.asks, BookSide.ASK)

        if self.reject_crossed_book and book.bids and book.asks:
            if book.best_bid >= book.best_ask:
                raise ValidationError(
                    f"Crossed book: best bid {book.best_bid} >= best ask {book.best_ask}",
                    context={"timestamp": book.timestamp},
                )

    def validate_trade(self, trade: Trade) -> None:
        """
        Validate a single trade.

        Raises:
            ValidationError: If validation fails
        """
        if not isinstance(trade.side, Side):
            raise ValidationError(f"Trade side must be a Side, got {trade.side!r}")
        if not isinstance(trade.price, Decimal) or not trade.price.is_finite() or trade.price <= 0:
            raise ValidationError(f"Trade price must be a positive Decimal, got {trade.price!r}")
        if not isinstance(trade.quantity, Decimal) or not trade.quantity.is_finite() or trade.quantity <= 0:
            raise ValidationError(f"Trade quantity must be a positive Decimal, got {trade.quantity!r}")
        if not isinstance(trade.timestamp, int) or isinstance(trade.timestamp, bool):
            raise ValidationError(f"Trade timestamp must be an integer epoch, got {trade.timestamp!r}")

    def validate_trades(self, trades: Iterable[Trade]) -> None:
        """Validate every trade in a batch, reporting the failing index."""
        for index, trade in enumerate(trades):
            try:
                self.validate_trade(trade)
            except ValidationError as e:
                logger.warning("Trade rejected", index=index, error=str(e))
                raise ValidationError(f"Trade {index}: {e}", context={"index": index}) from e

    def _validate_side(self, levels: tuple[Level, ...], side: BookSide) -> None:
        """Validate price/quantity bounds and strict ordering on one book side."""
        previous: Optional[Decimal] = None
        for index, level in enumerate(levels):
            if not isinstance(level.price, Decimal) or not level.price.is_finite() or level.price <= 0:
                raise ValidationError(
                    f"{side.value} level {index}: price must be a positive Decimal, got {level.price!r}"
                )
            if not isinstance(level.quantity, Decimal) or not level.quantity.is_finite() or level.quantity < 0:
                raise ValidationError(
                    f"{side.value} level {index}: quantity must be a non-negative Decimal, got {level.quantity!r}"
                )
            if level.quantity == 0 and not self.allow_zero_quantity_levels:
                raise ValidationError(f"{side.value} level {index}: zero quantity level not allowed")

            if previous is not None:
                if level.price == previous:
                    raise ValidationError(f"{side.value} level {index}: duplicate price {level.price}")
                # Bids descend, asks ascend
                out_of_order = level.price > previous if side is BookSide.BID else level.price < previous
                if out_of_order:
                    order = "descending" if side is BookSide.BID else "ascending"
                    raise ValidationError(
                        f"{side.value} levels must be strictly {order}: {previous} then {level.price}"
                    )
            previous = level.price

