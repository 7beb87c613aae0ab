"""Decoding of Binance USDT-margined futures responses."""

from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone
from typing import Any

from tradex.binance.common import (
    adapt_string_to_futures_order_side,
    adapt_string_to_order_status,
    adapt_string_to_order_type,
)
from tradex.model import (
    USDT,
    Account,
    CurrencyPair,
    Depth,
    DepthItem,
    FuturesPosition,
    Kline,
    Order,
    OrderSide,
    OrderStatus,
)
from tradex.util import _cast_float, _cast_int, _cast_str, _iter_list

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _decode_list(data: bytes) -> list[Any]:
    obj = json.loads(data)
    if not isinstance(obj, list):
        raise ValueError("response is not a JSON array")
    return obj


def _decode_object(data: bytes) -> dict[str, Any]:
    obj = json.loads(data)
    if not isinstance(obj, dict):
        raise ValueError("response is not a JSON object")
    return obj


def _apply_lot_size(pair: CurrencyPair, filters: Any) -> None:
    for item in _iter_list(filters):
        if isinstance(item, dict) and item.get("filterType") == "LOT_SIZE":
            pair.min_qty = _cast_float(item.get("minQty"))
            pair.max_qty = _cast_float(item.get("maxQty"))


def unmarshal_exchange_info(data: bytes) -> dict[str, CurrencyPair]:
    """Decode instruments keyed by base + quote + contract type."""
    obj = json.loads(data)
    symbols = obj.get("symbols") if isinstance(obj, dict) else None
    if not isinstance(symbols, list):
        raise ValueError("exchange info has no symbols list")
    pairs: dict[str, CurrencyPair] = {}
    for entry in symbols:
        pair = CurrencyPair(contract_val=1.0, contract_val_currency=USDT)
        for key, value in (entry.items() if isinstance(entry, dict) else ()):
            if key == "symbol":
                pair.symbol = _cast_str(value)
            elif key == "baseAsset":
                pair.base_symbol = _cast_str(value)
            elif key == "quoteAsset":
                pair.quote_symbol = _cast_str(value)
            elif key == "contractType":
                pair.contract_alias = _cast_str(value)
            elif key == "pricePrecision":
                pair.price_precision = _cast_int(value)
            elif key == "quantityPrecision":
                pair.qty_precision = _cast_int(value)
            elif key == "deliveryDate":
                pair.contract_delivery_date = _cast_int(value)
            elif key == "filters":
                _apply_lot_size(pair, value)
        pairs[f"{pair.base_symbol}{pair.quote_symbol}{pair.contract_alias}"] = pair
    return pairs


def _depth_items(levels: Any) -> list[DepthItem]:
    items = []
    for level in _iter_list(levels):
        item = DepthItem()
        fields = level if isinstance(level, list) else []
        if len(fields) > 0:
            item.price = _cast_float(fields[0])
        if len(fields) > 1:
            item.amount = _cast_float(fields[1])
        items.append(item)
    return items


def unmarshal_depth(data: bytes) -> Depth:
    """Decode an order book with its event time."""
    depth = Depth()
    for key, value in _decode_object(data).items():
        if key == "E":
            depth.utime = _EPOCH + timedelta(milliseconds=_cast_int(value))
        elif key == "asks":
            depth.asks = _depth_items(value)
        elif key == "bids":
            depth.bids = _depth_items(value)
    return depth


def unmarshal_klines(data: bytes) -> list[Kline]:
    """Decode candlesticks; the sixth field is the volume."""
    klines = []
    for row in _decode_list(data):
        kline = Kline()
        fields = row if isinstance(row, list) else []
        for index, value in enumerate(fields[:6]):
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
            else:
                kline.vol = _cast_float(value)
        klines.append(kline)
    return klines


def unmarshal_account(data: bytes) -> dict[str, Account]:
    """Decode balances keyed by asset."""
    accounts: dict[str, Account] = {}
    for entry in _decode_list(data):
        account = Account()
        for key, value in (entry.items() if isinstance(entry, dict) else ()):
            if key == "asset":
                account.coin = _cast_str(value)
            elif key == "balance":
                account.balance = _cast_float(value)
            elif key == "availableBalance":
                account.available_balance = _cast_float(value)
        accounts[account.coin] = account
    return accounts


def unmarshal_create_order(data: bytes) -> Order:
    """Decode the acknowledgement of a new order; it is pending."""
    order = Order(status=OrderStatus.PENDING)
    for key, value in _decode_object(data).items():
        if key == "clientOrderId":
            order.cid = _cast_str(value)
        elif key == "orderId":
            order.id = _cast_str(value)
        elif key == "executedQty":
            order.executed_qty = _cast_float(value)
        elif key == "avgPrice":
            order.price_avg = _cast_float(value)
    return order


def _order_from(obj: dict[str, Any]) -> Order:
    order = Order()
    side = ""
    position_side = ""
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
            order.created_at = _cast_int(value)
        elif key == "updateTime":
            order.finished_at = _cast_int(value)
        elif key == "status":
            order.status = adapt_string_to_order_status(text)
        elif key == "side":
            side = text
        elif key == "positionSide":
            position_side = text
        elif key == "type":
            order.order_type = adapt_string_to_order_type(text)
    if order.status == OrderStatus.CANCELED:
        order.canceled_at = order.finished_at
    order.side = adapt_string_to_futures_order_side(side, position_side)
    return order


def unmarshal_order(data: bytes) -> Order:
    """Decode one order object."""
    return _order_from(_decode_object(data))


def unmarshal_order_info(data: bytes) -> Order:
    """Decode the answer to an order query."""
    return unmarshal_order(data)


def unmarshal_pending_orders(data: bytes) -> list[Order]:
    """Decode open orders; entries that are not objects become empty orders."""
    return [_order_from(entry if isinstance(entry, dict) else {}) for entry in _decode_list(data)]


def unmarshal_history_orders(data: bytes) -> list[Order]:
    """Decode past orders; entries that are not objects are skipped."""
    return [_order_from(entry) for entry in _decode_list(data) if isinstance(entry, dict)]


def unmarshal_cancel_order(data: bytes) -> None:
    """Raise ValueError when the response carries a textual error code."""
    try:
        obj = json.loads(data)
    except ValueError:
        return None
    if isinstance(obj, dict) and isinstance(obj.get("code"), str):
        raise ValueError(data.decode(errors="replace"))
    return None


def unmarshal_positions(data: bytes) -> list[FuturesPosition]:
    """Decode positions; one-way positions take their side from the sign of the amount."""
    positions = []
    for entry in _decode_list(data):
        position = FuturesPosition()
        pos_side = ""
        for key, value in (entry.items() if isinstance(entry, dict) else ()):
            if key == "leverage":
                position.lever = _cast_float(value)
            elif key == "positionAmt":
                position.qty = _cast_float(value)
                position.avail_qty = position.qty
            elif key == "entryPrice":
                position.avg_px = _cast_float(value)
            elif key == "liquidationPrice":
                position.liq_px = _cast_float(value)
            elif key == "unRealizedProfit":
                position.upl = _cast_float(value)
            elif key == "positionSide":
                pos_side = _cast_str(value)
        if pos_side == "LONG":
            position.pos_side = OrderSide.FUTURES_OPEN_BUY
        elif pos_side == "SHORT":
            position.pos_side = OrderSide.FUTURES_OPEN_SELL
        elif pos_side == "BOTH":
            position.pos_side = (
                OrderSide.FUTURES_OPEN_SELL if position.qty < 0 else OrderSide.FUTURES_OPEN_BUY
            )
        positions.append(position)
    return positions