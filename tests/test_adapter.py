import pytest

from tradex.model import KlinePeriod, OrderSide, OrderStatus, OrderType
from tradex.okx.adapter import (
    adapt_kline_period_to_symbol,
    adapt_order_side_to_sym,
    adapt_order_type_to_sym,
    adapt_qty_or_price_precision,
    adapt_sym_to_order_side,
    adapt_sym_to_order_status,
    adapt_sym_to_order_type,
)


@pytest.mark.parametrize(
    "period, symbol",
    [
        (KlinePeriod.MIN1, "1m"),
        (KlinePeriod.MIN15, "15m"),
        (KlinePeriod.MIN60, "1H"),
        (KlinePeriod.HOUR1, "1H"),
        (KlinePeriod.HOUR4, "4H"),
        (KlinePeriod.HOUR6, "6H"),
        (KlinePeriod.DAY1, "1D"),
        (KlinePeriod.WEEK1, "1W"),
        ("1h", "1H"),
    ],
)
def test_kline_period_symbols(period, symbol):
    assert adapt_kline_period_to_symbol(period) == symbol


def test_unknown_kline_period_passes_through():
    assert adapt_kline_period_to_symbol("3min") == "3min"


@pytest.mark.parametrize(
    "side, expected",
    [
        (OrderSide.BUY, ("buy", "")),
        (OrderSide.SELL, ("sell", "")),
        (OrderSide.FUTURES_OPEN_BUY, ("buy", "long")),
        (OrderSide.FUTURES_OPEN_SELL, ("sell", "short")),
        (OrderSide.FUTURES_CLOSE_BUY, ("sell", "long")),
        (OrderSide.FUTURES_CLOSE_SELL, ("buy", "short")),
    ],
)
def test_order_side_to_sym(side, expected):
    assert adapt_order_side_to_sym(side) == expected


def test_unknown_order_side_to_sym():
    assert adapt_order_side_to_sym("sideways") == ("", "")


@pytest.mark.parametrize("side", list(OrderSide))
def test_order_side_round_trip(side):
    assert adapt_sym_to_order_side(*adapt_order_side_to_sym(side)) == side


def test_sym_to_order_side_unknown():
    assert adapt_sym_to_order_side("hold", "long") == "unknown"


def test_sym_to_order_side_unrecognised_pos_side_is_spot():
    assert adapt_sym_to_order_side("sell", "net") == OrderSide.SELL


@pytest.mark.parametrize("order_type", [OrderType.LIMIT, OrderType.MARKET])
def test_order_type_round_trip(order_type):
    assert adapt_sym_to_order_type(adapt_order_type_to_sym(order_type)) == order_type


def test_order_type_passthrough():
    assert adapt_order_type_to_sym(OrderType.OPPONENT) == "opponent"
    assert adapt_sym_to_order_type("post_only") == "post_only"


@pytest.mark.parametrize(
    "state, status",
    [
        ("live", OrderStatus.PENDING),
        ("filled", OrderStatus.FINISHED),
        ("canceled", OrderStatus.CANCELED),
        ("partially_filled", OrderStatus.PART_FINISHED),
        ("mmp_canceled", OrderStatus.UNKNOWN),
    ],
)
def test_sym_to_order_status(state, status):
    assert adapt_sym_to_order_status(state) == status


def test_precision_of_one_is_zero():
    assert adapt_qty_or_price_precision("1") == 0


def test_precision_counts_decimals():
    assert adapt_qty_or_price_precision("0.001") == 3
    assert adapt_qty_or_price_precision("0.1") < adapt_qty_or_price_precision("0.00001")