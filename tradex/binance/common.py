"""Conversions and request signing shared by the Binance clients."""

from __future__ import annotations

import time
from enum import Enum
from typing import Any

from tradex import logger
from tradex.model import KlinePeriod, OrderSide, OrderStatus, OrderType
from tradex.signing import hmac_sha256_sign
from tradex.util import Values

_KLINE_SYMBOLS = {
    KlinePeriod.MIN1: "1m",
    KlinePeriod.MIN5: "5m",
    KlinePeriod.MIN15: "15m",
    KlinePeriod.MIN30: "30m",
    KlinePeriod.HOUR1: "1h",
    KlinePeriod.MIN60: "1h",
    KlinePeriod.DAY1: "1d",
    KlinePeriod.WEEK1: "1w",
}

_ORDER_TYPES = {OrderType.LIMIT: "LIMIT", OrderType.MARKET: "MARKET"}

_BUY_SIDES = {OrderSide.BUY, OrderSide.FUTURES_OPEN_BUY, OrderSide.FUTURES_CLOSE_SELL}
_SELL_SIDES = {OrderSide.SELL, OrderSide.FUTURES_OPEN_SELL, OrderSide.FUTURES_CLOSE_BUY}

_STATUSES = {
    "NEW": OrderStatus.PENDING,
    "FILLED": OrderStatus.FINISHED,
    "CANCELED": OrderStatus.CANCELED,
    "PARTIALLY_FILLED": OrderStatus.PART_FINISHED,
}

_FUTURES_SIDES = {
    ("BUY", "LONG"): OrderSide.FUTURES_OPEN_BUY,
    ("BUY", "SHORT"): OrderSide.FUTURES_CLOSE_SELL,
    ("SELL", "LONG"): OrderSide.FUTURES_CLOSE_BUY,
    ("SELL", "SHORT"): OrderSide.FUTURES_OPEN_SELL,
}

_TYPES_FROM_TEXT = {"LIMIT": OrderType.LIMIT, "MARKET": OrderType.MARKET}


def _raw(value: Any) -> str:
    return str(value.value) if isinstance(value, Enum) else str(value)


def _as_enum(enum_cls: type[Enum], value: Any) -> Any:
    try:
        return enum_cls(_raw(value))
    except ValueError:
        return None


def adapt_kline_period_to_symbol(period: KlinePeriod | str) -> str:
    """Binance interval symbol of a kline period; unknown ones pass through."""
    member = _as_enum(KlinePeriod, period)
    return _KLINE_SYMBOLS.get(member, _raw(period))


def adapt_order_type_to_string(order_type: OrderType | str) -> str:
    """Binance order type name."""
    member = _as_enum(OrderType, order_type)
    if member in _ORDER_TYPES:
        return _ORDER_TYPES[member]
    logger.warn("[adapt order type] order typ unknown")
    return _raw(order_type)


def adapt_order_side_to_string(side: OrderSide | str) -> str:
    """Binance BUY/SELL for a spot or futures side."""
    member = _as_enum(OrderSide, side)
    if member in _BUY_SIDES:
        return "BUY"
    if member in _SELL_SIDES:
        return "SELL"
    logger.warn("[adapt side] order side:%s error", _raw(side))
    return _raw(side)


def adapt_string_to_order_status(status: str) -> OrderStatus:
    """Order status from a Binance status name."""
    return _STATUSES.get(status, OrderStatus.UNKNOWN)


def adapt_string_to_futures_order_side(side: str, position_side: str) -> OrderSide | str:
    """Futures side from Binance side and position side."""
    member = _FUTURES_SIDES.get((side, position_side))
    if member is not None:
        return member
    if side not in ("BUY", "SELL"):
        logger.warn("[adaptOrderOrigSide] unknown order origin side: %s", side)
    return side


def adapt_string_to_order_type(order_type: str) -> OrderType | str:
    """Order type from a Binance type name; unknown ones pass through."""
    return _TYPES_FROM_TEXT.get(order_type, order_type)


def sign_params(params: Values, secret: str) -> None:
    """Add timestamp, recvWindow and an HMAC-SHA256 signature to params."""
    params.set("timestamp", str(int(time.time() * 1000)))
    params.set("recvWindow", "6000")
    params.set("signature", hmac_sha256_sign(secret, params.encode()))