"""
Market data models, parsing and validation.

Order book snapshots and trade batches enter the package here; everything
downstream assumes validated, Decimal-valued inputs.
"""

from .models import BookSide, Level, OrderBook, Side, Trade
from .parsers import ParseError, parse_order_book, parse_trades
from .validators import DataValidator, ValidationError

__all__ = [
    "BookSide",
    "Level",
    "OrderBook",
    "Side",
    "Trade",
    "DataValidator",
    "ValidationError",
    "ParseError",
    "parse_order_book",
    "parse_trades",
]
