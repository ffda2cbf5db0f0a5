"""Text rendering of books, tapes, profiles and patterns."""

from .text import (
    ascii_depth_chart,
    describe_pattern,
    format_order_book,
    format_patterns,
    format_trades,
    format_volume_profile,
)

__all__ = [
    "ascii_depth_chart",
    "describe_pattern",
    "format_order_book",
    "format_patterns",
    "format_trades",
    "format_volume_profile",
]
