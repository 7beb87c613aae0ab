"""Decoding of the data part of OKX v5 responses."""

from __future__ import annotations

import json
import math
from datetime import datetime, timedelta, timezone
from typing import Any

from tradex import logger
from tradex.model import (
    Account,
    CurrencyPair,
    Depth,
    DepthItem,
    FuturesAccount,
    FuturesPosition,
    Kline,
    Order,
    OrderSide,
    OrderStatus,
    Ticker,
)
from tradex.okx.adapter import (
    adapt_qty_or_price_precision,
    adapt_sym_to_order_side,
    adapt_sym_to_order_status,
    adapt_sym_to_order_type,
)
from tradex.util import _cast_float, _cast_int, _cast_str, _iter_list

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _decode_list(data: bytes) -> list[Any]:
    obj = json.loads(data)
    if not isinstance(obj, list):
        raise ValueError("response data is not a JSON array")
    return obj


def _first_object(data: bytes) -> dict[str, Any]:
    """The object that a one-element data array wraps, or the object itself."""
    obj = json.loads(data)
    if isinstance(obj, list):
        obj = obj[0] if obj else None
    if not isinstance(obj, dict):
        raise ValueError("response data holds no JSON object")
    return obj


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
    """Decode an order book snapshot with its update time."""
    depth = Depth()
    for key, value in _first_object(data).items():
        if key == "ts":
            depth.utime = _EPOCH + timedelta(milliseconds=_cast_int(value))
        elif key == "asks":
            depth.asks = _depth_items(value)
        elif key == "bids":
            depth.bids = _depth_items(value)
    return depth


def _percent_change(last: float, open_price: float) -> float:
    if open_price:
        return (last - open_price) / open_price * 100
    if last == 0 or math.isnan(last):
        return math.nan
    return math.copysign(math.inf, last)


_TICKER_FLOATS = {
    "last": "last",
    "askPx": "sell",
    "bidPx": "buy",
    "vol24h": "vol",
    "high24h": "high",
    "low24h": "low",
}


def unmarshal_ticker(data: bytes) -> Ticker:
    """Decode a ticker; the percent change is measured from the 24h open."""
    try:
        rows = _decode_list(data)
    except ValueError as exc:
        logger.error("[UnmarshalTicker] %s", exc)
        raise
    ticker = Ticker()
    open_price = 0.0
    for row in rows:
        if not isinstance(row, dict):
            continue
        for key, value in row.items():
            if key in _TICKER_FLOATS:
                setattr(ticker, _TICKER_FLOATS[key], _cast_float(value))
            elif key == "ts":
                ticker.timestamp = _cast_int(value)
            elif key == "open24h":
                open_price = _cast_float(value)
    ticker.percent = _percent_change(ticker.last, open_price)
    return ticker


def unmarshal_klines(data: bytes) -> list[Kline]:
    """Decode candlesticks: ts, open, high, low, close, volume."""
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


def unmarshal_create_order(data: bytes) -> Order:
    """Decode the ids of a newly placed order."""
    order = Order()
    for key, value in _first_object(data).items():
        if key == "ordId":
            order.id = _cast_str(value)
        elif key == "clOrdId":
            order.cid = _cast_str(value)
    return order


def _order_from(obj: dict[str, Any]) -> Order:
    order = Order()
    side = ""
    pos_side = ""
    utime = 0
    for key, value in obj.items():
        text = _cast_str(value)
        if key == "ordId":
            order.id = text
        elif key == "px":
            order.price = _cast_float(value)
        elif key == "sz":
            order.qty = _cast_float(value)
        elif key == "cTime":
            order.created_at = _cast_int(value)
        elif key == "avgPx":
            order.price_avg = _cast_float(value)
        elif key == "accFillSz":
            order.executed_qty = _cast_float(value)
        elif key == "fee":
            order.fee = _cast_float(value)
        elif key == "feeCcy":
            order.fee_ccy = text
        elif key == "clOrdId":
            order.cid = text
        elif key == "side":
            side = text
        elif key == "posSide":
            pos_side = text
        elif key == "ordType":
            order.order_type = adapt_sym_to_order_type(text)
        elif key == "state":
            order.status = adapt_sym_to_order_status(text)
        elif key == "uTime":
            utime = _cast_int(value)

    order.side = adapt_sym_to_order_side(side, pos_side)
    if order.status == OrderStatus.CANCELED:
        order.canceled_at = utime
        if order.executed_qty > 0:
            order.finished_at = utime
    if order.status == OrderStatus.FINISHED:
        order.finished_at = utime
    return order


def unmarshal_order_info(data: bytes) -> Order:
    """Decode one order."""
    return _order_from(_first_object(data))


def unmarshal_pending_orders(data: bytes) -> list[Order]:
    """Decode a list of orders; entries that are not objects are skipped."""
    return [_order_from(entry) for entry in _decode_list(data) if isinstance(entry, dict)]


def unmarshal_history_orders(data: bytes) -> list[Order]:
    """Decode a list of past orders."""
    return unmarshal_pending_orders(data)


def _details(data: bytes) -> list[dict[str, Any]]:
    details = _first_object(data).get("details")
    if not isinstance(details, list):
        raise ValueError("account data has no details list")
    return [entry for entry in details if isinstance(entry, dict)]


def unmarshal_account(data: bytes) -> dict[str, Account]:
    """Decode balances keyed by coin."""
    accounts: dict[str, Account] = {}
    for entry in _details(data):
        account = Account()
        for key, value in entry.items():
            if key == "ccy":
                account.coin = _cast_str(value)
            elif key == "availEq":
                account.available_balance = _cast_float(value)
            elif key == "eq":
                account.balance = _cast_float(value)
            elif key == "frozenBal":
                account.frozen_balance = _cast_float(value)
        accounts[account.coin] = account
    return accounts


def unmarshal_futures_account(data: bytes) -> dict[str, FuturesAccount]:
    """Decode futures equity keyed by coin."""
    accounts: dict[str, FuturesAccount] = {}
    for entry in _details(data):
        account = FuturesAccount()
        for key, value in entry.items():
            if key == "ccy":
                account.coin = _cast_str(value)
            elif key == "availEq":
                account.avail_eq = _cast_float(value)
            elif key == "eq":
                account.eq = _cast_float(value)
            elif key == "frozenBal":
                account.frozen_bal = _cast_float(value)
            elif key == "upl":
                account.upl = _cast_float(value)
            elif key == "mgnRatio":
                account.mgn_ratio = _cast_float(value)
        accounts[account.coin] = account
    return accounts


def unmarshal_cancel_order(data: bytes) -> None:
    """Raise ValueError unless the cancel result carries a zero sCode."""
    obj = _first_object(data)
    if "sCode" not in obj:
        raise ValueError("cancel order response has no sCode")
    if _cast_int(obj["sCode"]) == 0:
        return None
    raise ValueError(data.decode(errors="replace"))


def unmarshal_positions(data: bytes) -> list[FuturesPosition]:
    """Decode open positions."""
    positions = []
    for entry in _decode_list(data):
        position = FuturesPosition()
        for key, value in (entry.items() if isinstance(entry, dict) else ()):
            text = _cast_str(value)
            if key == "availPos":
                position.avail_qty = _cast_float(value)
            elif key == "avgPx":
                position.avg_px = _cast_float(value)
            elif key == "pos":
                position.qty = _cast_float(value)
            elif key == "posSide":
                if text == "long":
                    position.pos_side = OrderSide.FUTURES_OPEN_BUY
                elif text == "short":
                    position.pos_side = OrderSide.FUTURES_OPEN_SELL
            elif key == "upl":
                position.upl = _cast_float(value)
            elif key == "uplRatio":
                position.upl_ratio = _cast_float(value)
            elif key == "lever":
                position.lever = _cast_float(value)
        positions.append(position)
    return positions


def unmarshal_exchange_info(data: bytes) -> dict[str, CurrencyPair]:
    """Decode instruments keyed by base + quote + contract alias."""
    pairs: dict[str, CurrencyPair] = {}
    for entry in _decode_list(data):
        pair = CurrencyPair()
        inst_type = ""
        ct_val_ccy = ""
        settle_ccy = ""
        for key, value in (entry.items() if isinstance(entry, dict) else ()):
            text = _cast_str(value)
            if key == "instType":
                inst_type = text
            elif key == "instId":
                pair.symbol = text
            elif key == "minSz":
                pair.min_qty = _cast_float(value)
            elif key == "tickSz":
                pair.price_precision = adapt_qty_or_price_precision(text)
            elif key == "lotSz":
                pair.qty_precision = adapt_qty_or_price_precision(text)
            elif key == "baseCcy":
                pair.base_symbol = text
            elif key == "quoteCcy":
                pair.quote_symbol = text
            elif key == "ctValCcy":
                ct_val_ccy = text
                pair.contract_val_currency = text
            elif key == "ctVal":
                pair.contract_val = _cast_float(value)
            elif key == "settleCcy":
                settle_ccy = text
                pair.settlement_currency = text
            elif key == "alias":
                pair.contract_alias = text
            elif key == "expTime":
                pair.contract_delivery_date = _cast_int(value)

        if inst_type == "SWAP":
            pair.base_symbol = ct_val_ccy
            pair.quote_symbol = settle_ccy
        elif inst_type == "FUTURES":
            pair.base_symbol = settle_ccy
            pair.quote_symbol = ct_val_ccy

        pairs[f"{pair.base_symbol}{pair.quote_symbol}{pair.contract_alias}"] = pair
    return pairs


def unmarshal_response(data: bytes) -> Any:
    """Decode a JSON response body."""
    return json.loads(data)