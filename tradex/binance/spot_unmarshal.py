"""Decoding of Binance spot responses and spot-specific conversions."""

from __future__ import annotations

import json
from typing import Any

from tradex import logger
from tradex.binance.common import (
    adapt_kline_period_to_symbol,
    adapt_order_type_to_string,
    adapt_string_to_order_status,
    adapt_string_to_order_type,
)
from tradex.model import (
    DepthItem,
    Depth,
    Kline,
    KlinePeriod,
    Order,
    OrderSide,
    OrderStatus,
    OrderType,
    Ticker,
)
from tradex.util import _cast_float, _cast_int, _cast_str, _iter_list


def adapt_kline_period(period: KlinePeriod | str) -> str:
    """Binance interval symbol of a kline period."""
    return adapt_kline_period_to_symbol(period)


def adapt_order_side(side: OrderSide | str) -> str:
    """Binance BUY/SELL for a spot side; other sides pass through."""
    if side == OrderSide.BUY:
        return "BUY"
    if side == OrderSide.SELL:
        return "SELL"
    text = side.value if isinstance(side, OrderSide) else str(side)
    logger.warn("[adapt side] order side:%s error", text)
    return text


def adapt_order_type(order_type: OrderType | str) -> str:
    """Binance order type name."""
    return adapt_order_type_to_string(order_type)


def adapt_order_status(status: str) -> OrderStatus:
    """Order status from a Binance status name."""
    return adapt_string_to_order_status(status)


def adapt_order_orig_side(side: str) -> OrderSide | str:
    """Spot side from a Binance side name; unknown ones pass through."""
    if side == "BUY":
        return OrderSide.BUY
    if side == "SELL":
        return OrderSide.SELL
    logger.warn("[adaptOrderOrigSide] unknown order origin side: %s", side)
    return side


def adapt_order_orig_type(order_type: str) -> OrderType | str:
    """Order type from a Binance type name."""
    return adapt_string_to_order_type(order_type)


def _decode(data: bytes) -> Any:
    return json.loads(data)


def _depth_items(levels: Any) -> list[DepthItem]:
    items = []
    for level in _iter_list(levels):
        if not isinstance(level, list) or len(level) < 2:
            logger.error("[UnmarshalGetDepthResponse] err=bad level %r", level)
            continue
        items.append(DepthItem(price=_cast_float(level[0]), amount=_cast_float(level[1])))
    return items


def unmarshal_depth(data: bytes) -> Depth:
    """Decode an order book; raise ValueError if a side is missing."""
    obj = _decode(data)
    if not isinstance(obj, dict) or "bids" not in obj or "asks" not in obj:
        raise ValueError("depth response has no bids or asks")
    return Depth(bids=_depth_items(obj["bids"]), asks=_depth_items(obj["asks"]))


_TICKER_FLOATS = {
    "lastPrice": "last",
    "askPrice": "sell",
    "bidPrice": "buy",
    "volume": "vol",
    "highPrice": "high",
    "lowPrice": "low",
    "priceChangePercent": "percent",
}


def unmarshal_ticker(data: bytes) -> Ticker:
    """Decode a 24h ticker; a body that is not an object gives an empty ticker."""
    ticker = Ticker()
    if not (data[:1] == b"{" and data[-1:] == b"}"):
        logger.warn("[UnmarshalTicker] response data not json object ???")
        return ticker
    obj = _decode(data)
    for key, value in obj.items():
        if key in _TICKER_FLOATS:
            setattr(ticker, _TICKER_FLOATS[key], _cast_float(value))
        elif key == "closeTime":
            ticker.timestamp = _cast_int(value)
    return ticker


def unmarshal_klines(data: bytes) -> list[Kline]:
    """Decode a list of candlesticks."""
    klines = []
    for row in _iter_list(_decode(data)):
        kline = Kline()
        fields = row if isinstance(row, list) else []
        for index, value in enumerate(fields):
            if index == 0:
                kline.timestamp = _cast_int(value)
            elif index == 1:
                kline.open = _cast_float(value)
            elif index == 2:
                kline.high = _cast_float(value)
            elif index == 3:
                kline.low = _cast_float(value)
            elif index == 4:
                kline.close = _cast_float(value)
            elif index == 6:
                kline.vol = _cast_float(value)
        klines.append(kline)
    return klines


def unmarshal_create_order(data: bytes) -> Order:
    """Decode the acknowledgement of a new order."""
    obj = _decode(data)
    if not isinstance(obj, dict):
        raise ValueError("create order response is not an object")
    order = Order()
    for key, value in obj.items():
        if key == "orderId":
            order.id = _cast_str(value)
        elif key == "clientOrderId":
            order.cid = _cast_str(value)
        elif key == "transactTime":
            order.created_at = _cast_int(value)
        elif key == "executedQty":
            order.executed_qty = _cast_float(value)
        elif key == "status":
            order.status = adapt_order_status(_cast_str(value))
    return order


def _unmarshal_order(obj: Any) -> Order:
    if not isinstance(obj, dict):
        raise ValueError(f"order is not an object: {obj!r}")
    order = Order()
    for key, value in obj.items():
        text = _cast_str(value)
        if key == "orderId":
            order.id = text
        elif key == "clientOrderId":
            order.cid = text
        elif key == "price":
            order.price = _cast_float(value)
        elif key == "origQty":
            order.qty = _cast_float(value)
        elif key == "executeQty":
            order.executed_qty = _cast_float(value)
        elif key == "time":
            order.canceled_at = _cast_int(value)
        elif key == "status":
            order.status = adapt_order_status(text)
        elif key == "side":
            order.side = adapt_order_orig_side(text)
        elif key == "type":
            order.order_type = adapt_order_orig_type(text)
    return order


def unmarshal_pending_orders(data: bytes) -> list[Order]:
    """Decode open orders; entries that are not objects are skipped."""
    orders = []
    for entry in _iter_list(_decode(data)):
        try:
            orders.append(_unmarshal_order(entry))
        except ValueError as exc:
            logger.warn("[UnmarshalGetPendingOrdersResponse] err=%s", exc)
    return orders


def unmarshal_cancel_order(data: bytes) -> Any:
    """Accept any cancel response; return its decoded JSON, or None if it is not JSON."""
    try:
        return _decode(data)
    except ValueError:
        return None


def unmarshal_response(data: bytes) -> Any:
    """Decode a JSON response body."""
    return _decode(data)