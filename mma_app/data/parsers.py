"""
Parsers for converting raw exchange-style payloads into validated models.

Order books arrive either as dicts of ``{"bids": [...], "asks": [...], "ts": ...}``
or as raw JSON; levels may be ``[price, size, ...]`` arrays or dicts. Trades
arrive as dicts with ``price``, ``size``/``quantity``, ``side`` and ``ts``.
Numbers are converted to Decimal through their string form so a float
payload never leaks binary rounding into prices.

A trade's ``side`` is the aggressor side and must read buy/sell (or b/s).
Book-side tags such as "bid"/"ask" are rejected because feeds disagree on
whether they name the maker or the taker.
"""

from decimal import Decimal, InvalidOperation
from typing import Any, Optional, Union

import orjson

from ..errors import MalformedDataError, TemporalDataError
from ..logging import get_logger
from .models import Level, OrderBook, Side, Trade
from .validators import DataValidator, ValidationError

logger = get_logger(__name__)

RawPayload = Union[bytes, bytearray, str, dict[str, Any], list[Any]]

_QUANTITY_KEYS = ("quantity", "qty", "size", "amount")
_TIMESTAMP_KEYS = ("timestamp", "ts", "time")
_SIDE_ALIASES = {
    "buy": Side.BUY,
    "b": Side.BUY,
    "sell": Side.SELL,
    "s": Side.SELL,
}


class ParseError(MalformedDataError):
    """Raised when parsing fails due to invalid data format."""
    pass


class InvalidPriceError(ParseError):
    """Raised when price data is invalid."""
    pass


class InvalidQuantityError(ParseError):
    """Raised when quantity data is invalid."""
    pass


class InvalidTimestampError(ParseError, TemporalDataError):
    """Raised when timestamp data is invalid."""
    pass


class InvalidSideError(ParseError):
    """Raised when a trade side is not buy or sell."""
    pass


def to_decimal(value: Any) -> Decimal:
    """
    Convert a raw numeric value to a finite Decimal.

    Floats are converted through ``str`` so ``0.1`` becomes ``Decimal("0.1")``
    rather than its binary expansion.

    Raises:
        ValueError: If the value is not a finite number
    """
    if isinstance(value, bool):
        raise ValueError(f"Boolean is not a number: {value!r}")
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value).strip())
        except (InvalidOperation, TypeError) as e:
            raise ValueError(f"Not a number: {value!r}") from e
    if not result.is_finite():
        raise ValueError(f"Number must be finite: {value!r}")
    return result


def parse_side(value: Any) -> Side:
    """Parse a trade side tag such as "buy", "SELL" or "b"."""
    if isinstance(value, Side):
        return value
    side = _SIDE_ALIASES.get(str(value).strip().lower())
    if side is None:
        raise InvalidSideError(f"Unknown trade side: {value!r}")
    return side


def parse_timestamp(value: Any) -> int:
    """Parse an integer epoch timestamp (int or numeric string)."""
    if isinstance(value, bool):
        raise InvalidTimestampError(f"Invalid timestamp: {value!r}", timestamp=value)
    if isinstance(value, int):
        return value
    try:
        ts = to_decimal(value)
    except ValueError as e:
        raise InvalidTimestampError(f"Invalid timestamp: {value!r}", timestamp=value) from e
    if ts != ts.to_integral_value():
        raise InvalidTimestampError(f"Timestamp must be an integer epoch: {value!r}", timestamp=value)
    return int(ts)


def parse_level(raw: Any) -> Level:
    """
    Parse a single order book level.

    Args:
        raw: ``[price, size, ...]`` array or ``{"price": ..., "quantity": ...}`` dict

    Returns:
        Level with Decimal price and quantity
    """
    if isinstance(raw, dict):
        price_raw = raw.get("price")
        qty_raw = _first_present(raw, _QUANTITY_KEYS)
    elif isinstance(raw, (list, tuple)) and len(raw) >= 2:
        price_raw, qty_raw = raw[0], raw[1]
    else:
        raise ParseError(f"Invalid level format: {raw!r}")

    try:
        price = to_decimal(price_raw)
    except ValueError as e:
        raise InvalidPriceError(f"Invalid level price: {price_raw!r}") from e
    if price <= 0:
        raise InvalidPriceError(f"Level price must be positive: {price}")

    try:
        quantity = to_decimal(qty_raw)
    except ValueError as e:
        raise InvalidQuantityError(f"Invalid level quantity: {qty_raw!r}") from e
    if quantity < 0:
        raise InvalidQuantityError(f"Level quantity must be non-negative: {quantity}")

    return Level(price=price, quantity=quantity)


def parse_order_book(payload: RawPayload, *, validator: Optional[DataValidator] = None,
                     sort_levels: bool = False) -> OrderBook:
    """
    Parse and validate an order book snapshot.

    Args:
        payload: JSON bytes/str or an already decoded dict
        validator: Validator to apply (default rules when omitted)
        sort_levels: Sort bids descending and asks ascending before validation
            instead of rejecting unsorted input

    Returns:
        Validated OrderBook

    Raises:
        ParseError: If the payload cannot be parsed
        ValidationError: If the parsed book violates the data model
    """
    data = _decode(payload)
    if isinstance(data, dict) and "data" in data and "bids" not in data:
        data = data["data"]
        if isinstance(data, list):
            if not data:
                raise ParseError("Order book payload has empty data array")
            data = data[0]
    if not isinstance(data, dict):
        raise ParseError(f"Order book payload must be an object, got {type(data).__name__}")

    bids = [parse_level(level) for level in data.get("bids") or []]
    asks = [parse_level(level) for level in data.get("asks") or []]
    ts_raw = _first_present(data, _TIMESTAMP_KEYS)
    timestamp = parse_timestamp(ts_raw) if ts_raw is not None else 0

    if sort_levels:
        bids.sort(key=lambda level: level.price, reverse=True)
        asks.sort(key=lambda level: level.price)

    book = OrderBook(bids=tuple(bids), asks=tuple(asks), timestamp=timestamp)
    (validator or DataValidator()).validate_order_book(book)

    logger.debug("Order book parsed", timestamp=timestamp, bid_levels=len(bids), ask_levels=len(asks))
    return book


def parse_trade(raw: Any) -> Trade:
    """
    Parse a single trade record.

    Args:
        raw: ``{"price": ..., "size": ..., "side": "buy", "ts": ...}`` dict or
            ``[price, quantity, side, timestamp]`` array

    Returns:
        Trade with Decimal price/quantity and a Side tag
    """
    if isinstance(raw, dict):
        price_raw = raw.get("price", raw.get("px"))
        qty_raw = _first_present(raw, _QUANTITY_KEYS + ("sz",))
        side_raw = raw.get("side")
        ts_raw = _first_present(raw, _TIMESTAMP_KEYS)
    elif isinstance(raw, (list, tuple)) and len(raw) >= 4:
        price_raw, qty_raw, side_raw, ts_raw = raw[:4]
    else:
        raise ParseError(f"Invalid trade format: {raw!r}")

    try:
        price = to_decimal(price_raw)
    except ValueError as e:
        raise InvalidPriceError(f"Invalid trade price: {price_raw!r}") from e
    if price <= 0:
        raise InvalidPriceError(f"Trade price must be positive: {price}")

    try:
        quantity = to_decimal(qty_raw)
    except ValueError as e:
        raise InvalidQuantityError(f"Invalid trade quantity: {qty_raw!r}") from e
    if quantity <= 0:
        raise InvalidQuantityError(f"Trade quantity must be positive: {quantity}")

    if ts_raw is None:
        raise InvalidTimestampError("Trade is missing a timestamp")

    return Trade(
        price=price,
        quantity=quantity,
        side=parse_side(side_raw),
        timestamp=parse_timestamp(ts_raw),
    )


def parse_trades(payload: RawPayload, *, validator: Optional[DataValidator] = None) -> list[Trade]:
    """
    Parse and validate a batch of trades, preserving input order.

    Args:
        payload: JSON bytes/str, a list of trade records, or ``{"data": [...]}``

    Returns:
        List of validated trades

    Raises:
        ParseError: If any record cannot be parsed
        ValidationError: If any parsed trade violates the data model
    """
    data = _decode(payload)
    if isinstance(data, dict):
        data = data.get("data", data.get("trades"))
    if not isinstance(data, list):
        raise ParseError("Trade payload must be a list of trade records")

    trades = []
    for index, raw in enumerate(data):
        try:
            trades.append(parse_trade(raw))
        except ParseError as e:
            logger.warning("Trade parse failed", index=index, error=str(e))
            raise

    (validator or DataValidator()).validate_trades(trades)
    logger.debug("Trades parsed", count=len(trades))
    return trades


def _decode(payload: RawPayload) -> Any:
    """Decode JSON bytes/str with orjson; pass decoded structures through."""
    if isinstance(payload, (bytes, bytearray, str)):
        try:
            return orjson.loads(payload)
        except orjson.JSONDecodeError as e:
            raise ParseError(f"Invalid JSON payload: {e}", expected_format="json") from e
    return payload


def _first_present(data: dict[str, Any], keys: tuple[str, ...]) -> Any:
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return None


__all__ = [
    "ParseError",
    "InvalidPriceError",
    "InvalidQuantityError",
    "InvalidTimestampError",
    "InvalidSideError",
    "ValidationError",
    "to_decimal",
    "parse_side",
    "parse_timestamp",
    "parse_level",
    "parse_order_book",
    "parse_trade",
    "parse_trades",
]
