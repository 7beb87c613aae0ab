from unittest import mock

import pytest

from tradex.binance.common import (
    adapt_kline_period_to_symbol,
    adapt_order_side_to_string,
    adapt_order_type_to_string,
    adapt_string_to_futures_order_side,
    adapt_string_to_order_status,
    adapt_string_to_order_type,
    sign_params,
)
from tradex.model import KlinePeriod, OrderSide, OrderStatus, OrderType
from tradex.signing import hmac_sha256_sign
from tradex.util import Values


@pytest.mark.parametrize(
    "period,expected",
    [
        (KlinePeriod.MIN1, "1m"),
        (KlinePeriod.MIN15, "15m"),
        (KlinePeriod.HOUR1, "1h"),
        (KlinePeriod.MIN60, "1h"),
        (KlinePeriod.DAY1, "1d"),
        (KlinePeriod.WEEK1, "1w"),
        (KlinePeriod.HOUR4, "4h"),
        ("3d", "3d"),
    ],
)
def test_kline_period(period, expected):
    assert adapt_kline_period_to_symbol(period) == expected


def test_kline_period_plain_string():
    assert adapt_kline_period_to_symbol("5min") == "5m"


def test_order_type():
    assert adapt_order_type_to_string(OrderType.LIMIT) == "LIMIT"
    assert adapt_order_type_to_string(OrderType.MARKET) == "MARKET"
    assert adapt_order_type_to_string(OrderType.OPPONENT) == "opponent"


@pytest.mark.parametrize(
    "side,expected",
    [
        (OrderSide.BUY, "BUY"),
        (OrderSide.FUTURES_OPEN_BUY, "BUY"),
        (OrderSide.FUTURES_CLOSE_SELL, "BUY"),
        (OrderSide.SELL, "SELL"),
        (OrderSide.FUTURES_OPEN_SELL, "SELL"),
        (OrderSide.FUTURES_CLOSE_BUY, "SELL"),
        ("hold", "hold"),
    ],
)
def test_order_side(side, expected):
    assert adapt_order_side_to_string(side) == expected


@pytest.mark.parametrize(
    "text,expected",
    [
        ("NEW", OrderStatus.PENDING),
        ("FILLED", OrderStatus.FINISHED),
        ("CANCELED", OrderStatus.CANCELED),
        ("PARTIALLY_FILLED", OrderStatus.PART_FINISHED),
        ("EXPIRED", OrderStatus.UNKNOWN),
    ],
)
def test_order_status(text, expected):
    assert adapt_string_to_order_status(text) is expected


@pytest.mark.parametrize(
    "side,position,expected",
    [
        ("BUY", "LONG", OrderSide.FUTURES_OPEN_BUY),
        ("BUY", "SHORT", OrderSide.FUTURES_CLOSE_SELL),
        ("SELL", "LONG", OrderSide.FUTURES_CLOSE_BUY),
        ("SELL", "SHORT", OrderSide.FUTURES_OPEN_SELL),
        ("BUY", "BOTH", "BUY"),
        ("HOLD", "LONG", "HOLD"),
    ],
)
def test_futures_order_side(side, position, expected):
    assert adapt_string_to_futures_order_side(side, position) == expected


def test_order_type_from_string():
    assert adapt_string_to_order_type("LIMIT") is OrderType.LIMIT
    assert adapt_string_to_order_type("MARKET") is OrderType.MARKET
    assert adapt_string_to_order_type("STOP") == "STOP"


def test_sign_params_adds_fields():
    secret = "secret"
    params = Values({"symbol": "BTCUSDT"})
    with mock.patch("time.time", return_value=1700000000.0):
        sign_params(params, secret)
    assert params.get("timestamp") == "1700000000000"
    assert params.get("recvWindow") == "6000"
    unsigned = Values()
    for key in params:
        if key != "signature":
            unsigned.set(key, params.get(key))
    assert params.get("signature") == hmac_sha256_sign(secret, unsigned.encode())


def test_sign_params_depends_on_secret():
    first = Values({"symbol": "BTCUSDT"})
    second = Values({"symbol": "BTCUSDT"})
    with mock.patch("time.time", return_value=1700000000.0):
        sign_params(first, "secret")
        sign_params(second, "placeholder")
    assert first.get("timestamp") == second.get("timestamp")
    assert first.get("signature") != second.get("signature")