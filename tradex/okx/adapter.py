"""Conversions between model values and OKX v5 API symbols."""

from __future__ import annotations

from enum import Enum
from typing import Any

from tradex.model import KlinePeriod, OrderSide, OrderStatus, OrderType

_KLINE_SYMBOLS = {
    KlinePeriod.MIN1: "1m",
    KlinePeriod.MIN5: "5m",
    KlinePeriod.MIN15: "15m",
    KlinePeriod.MIN30: "30m",
    KlinePeriod.MIN60: "1H",
    KlinePeriod.HOUR1: "1H",
    KlinePeriod.HOUR4: "4H",
    KlinePeriod.HOUR6: "6H",
    KlinePeriod.DAY1: "1D",
    KlinePeriod.WEEK1: "1W",
}

_SIDE_SYMBOLS = {
    OrderSide.BUY: ("buy", ""),
    OrderSide.SELL: ("sell", ""),
    OrderSide.FUTURES_OPEN_BUY: ("buy", "long"),
    OrderSide.FUTURES_OPEN_SELL: ("sell", "short"),
    OrderSide.FUTURES_CLOSE_BUY: ("sell", "long"),
    OrderSide.FUTURES_CLOSE_SELL: ("buy", "short"),
}

_SIDES_FROM_SYMBOLS = {
    "buy": {"long": OrderSide.FUTURES_OPEN_BUY, "short": OrderSide.FUTURES_CLOSE_SELL},
    "sell": {"long": OrderSide.FUTURES_CLOSE_BUY, "short": OrderSide.FUTURES_OPEN_SELL},
}
_SPOT_SIDES = {"buy": OrderSide.BUY, "sell": OrderSide.SELL}

_TYPE_SYMBOLS = {OrderType.LIMIT: "limit", OrderType.MARKET: "market"}
_TYPES_FROM_SYMBOLS = {"limit": OrderType.LIMIT, "market": OrderType.MARKET}

_STATUSES = {
    "live": OrderStatus.PENDING,
    "filled": OrderStatus.FINISHED,
    "canceled": OrderStatus.CANCELED,
    "partially_filled": OrderStatus.PART_FINISHED,
}


def _raw(value: Any) -> str:
    return str(value.value) if isinstance(value, Enum) else str(value)


def _as_enum(enum_cls: type[Enum], value: Any) -> Any:
    try:
        return enum_cls(_raw(value))
    except ValueError:
        return None


def adapt_kline_period_to_symbol(period: KlinePeriod | str) -> str:
    """OKX bar symbol of a kline period; unknown ones pass through."""
    return _KLINE_SYMBOLS.get(_as_enum(KlinePeriod, period), _raw(period))


def adapt_order_side_to_sym(side: OrderSide | str) -> tuple[str, str]:
    """OKX side and position side of an order side; both empty if unknown."""
    return _SIDE_SYMBOLS.get(_as_enum(OrderSide, side), ("", ""))


def adapt_order_type_to_sym(order_type: OrderType | str) -> str:
    """OKX order type name; unknown ones pass through."""
    return _TYPE_SYMBOLS.get(_as_enum(OrderType, order_type), _raw(order_type))


def adapt_sym_to_order_side(side: str, pos_side: str) -> OrderSide | str:
    """Order side from OKX side and position side; "unknown" if side is neither buy nor sell."""
    if side not in _SPOT_SIDES:
        return "unknown"
    return _SIDES_FROM_SYMBOLS[side].get(pos_side, _SPOT_SIDES[side])


def adapt_sym_to_order_type(order_type: str) -> OrderType | str:
    """Order type from an OKX type name; unknown ones pass through."""
    return _TYPES_FROM_SYMBOLS.get(order_type, order_type)


def adapt_sym_to_order_status(status: str) -> OrderStatus:
    """Order status from an OKX state name."""
    return _STATUSES.get(status, OrderStatus.UNKNOWN)


def adapt_qty_or_price_precision(size: str) -> int:
    """Decimal places of a lot or tick size written as "1" or "0.0..1"."""
    if size == "1":
        return 0
    return len(size) - 2