from datetime import datetime, timezone
from urllib.parse import parse_qs, urlsplit

import pytest
import responses

from tradex.binance.fapi import FApi
from tradex.httpcli import HttpError
from tradex.model import (
    CurrencyPair,
    DepthItem,
    KlinePeriod,
    OptionParameter,
    OrderSide,
    OrderStatus,
    OrderType,
)

ENDPOINT = "https://fapi.binance.com"
PAIR = CurrencyPair(symbol="BTCUSDT", base_symbol="BTC", quote_symbol="USDT")

EXCHANGE_INFO = {
    "symbols": [
        {
            "symbol": "BTCUSDT",
            "baseAsset": "BTC",
            "quoteAsset": "USDT",
            "contractType": "PERPETUAL",
            "pricePrecision": 2,
            "quantityPrecision": 3,
            "filters": [{"filterType": "LOT_SIZE", "minQty": "0.001", "maxQty": "1000"}],
        },
        {
            "symbol": "BTCUSDT_240329",
            "baseAsset": "BTC",
            "quoteAsset": "USDT",
            "contractType": "CURRENT_QUARTER",
            "pricePrecision": 1,
            "quantityPrecision": 3,
            "filters": [],
        },
    ]
}


@pytest.fixture
def mocked():
    with responses.RequestsMock() as rsps:
        yield rsps


def _query(call):
    return parse_qs(urlsplit(call.request.url).query)


def test_get_name():
    assert FApi().get_name() == "binance.com"


def test_exchange_info_and_new_currency_pair(mocked):
    mocked.add(responses.GET, ENDPOINT + "/fapi/v1/exchangeInfo", json=EXCHANGE_INFO)
    api = FApi()
    pairs, body = api.get_exchange_info()
    assert set(pairs) == {"BTCUSDTPERPETUAL", "BTCUSDTCURRENT_QUARTER"}
    assert b"BTCUSDT_240329" in body
    assert api.new_currency_pair("BTC", "USDT").symbol == "BTCUSDT"
    quarter = api.new_currency_pair(
        "BTC", "USDT", OptionParameter("contractAlias", "CURRENT_QUARTER")
    )
    assert quarter.symbol == "BTCUSDT_240329"
    assert quarter.min_qty == 0.0
    assert pairs["BTCUSDTPERPETUAL"].max_qty == 1000.0


def test_new_currency_pair_missing_raises():
    with pytest.raises(LookupError):
        FApi().new_currency_pair("BTC", "USDT")


def test_new_currency_pair_other_option_does_not_match(mocked):
    mocked.add(responses.GET, ENDPOINT + "/fapi/v1/exchangeInfo", json=EXCHANGE_INFO)
    api = FApi()
    api.get_exchange_info()
    with pytest.raises(LookupError):
        api.new_currency_pair("BTC", "USDT", OptionParameter("other", "PERPETUAL"))


def test_get_depth(mocked):
    mocked.add(
        responses.GET,
        ENDPOINT + "/fapi/v1/depth",
        json={"E": 1700000000000, "bids": [["100.5", "2"]], "asks": [["101", "3"]]},
    )
    depth, _ = FApi().get_depth(PAIR, 5)
    assert depth.pair == PAIR
    assert depth.bids == [DepthItem(price=100.5, amount=2.0)]
    assert depth.asks == [DepthItem(price=101.0, amount=3.0)]
    assert depth.utime == datetime.fromtimestamp(1700000000, tz=timezone.utc)
    assert _query(mocked.calls[0]) == {"symbol": ["BTCUSDT"], "limit": ["5"]}


def test_get_depth_http_error(mocked):
    mocked.add(responses.GET, ENDPOINT + "/fapi/v1/depth", status=400, body=b"bad")
    with pytest.raises(HttpError) as info:
        FApi().get_depth(PAIR, 5)
    assert info.value.body == b"bad"


def test_get_kline(mocked):
    mocked.add(
        responses.GET,
        ENDPOINT + "/fapi/v1/klines",
        json=[[1700000000000, "1", "2", "0.5", "1.5", "10", 1700000059999]],
    )
    klines, _ = FApi().get_kline(PAIR, KlinePeriod.HOUR1)
    assert len(klines) == 1
    assert klines[0].pair == PAIR
    assert klines[0].timestamp == 1700000000000
    assert klines[0].vol == 10.0
    query = _query(mocked.calls[0])
    assert query["interval"] == ["1h"]
    assert query["limit"] == ["100"]


def test_with_uri_options_changes_endpoint(mocked):
    mocked.add(
        responses.GET, "https://futures.example.com/fapi/v1/depth", json={"bids": [], "asks": []}
    )
    api = FApi().with_uri_options(endpoint="https://futures.example.com")
    depth, _ = api.get_depth(PAIR, 5)
    assert depth.bids == []
    assert mocked.calls[0].request.url.startswith("https://futures.example.com/")


def test_with_unmarshaler_options_replaces_decoder(mocked):
    mocked.add(responses.GET, ENDPOINT + "/fapi/v1/klines", json=[])
    api = FApi().with_unmarshaler_options(kline=lambda data: [])
    klines, body = api.get_kline(PAIR, KlinePeriod.MIN1)
    assert klines == []
    assert body == b"[]"


def test_auth_request_signs_and_sets_key(mocked):
    mocked.add(
        responses.GET,
        ENDPOINT + "/fapi/v2/balance",
        json=[{"asset": "USDT", "balance": "10", "availableBalance": "8"}],
    )
    prv = FApi().new_prv_api(key="placeholder", secret="secret")
    accounts, _ = prv.get_account("USDT")
    assert accounts["USDT"].balance == 10.0
    assert accounts["USDT"].available_balance == 8.0
    request = mocked.calls[0].request
    assert request.headers["X-MBX-APIKEY"] == "placeholder"
    query = _query(mocked.calls[0])
    assert query["recvWindow"] == ["6000"]
    assert "timestamp" in query
    assert len(query["signature"][0]) == 64


def test_create_order(mocked):
    mocked.add(
        responses.POST,
        ENDPOINT + "/fapi/v1/order",
        json={"orderId": 123, "clientOrderId": "abc", "executedQty": "0", "avgPrice": "0.00"},
    )
    prv = FApi().new_prv_api(key="placeholder", secret="secret")
    order, _ = prv.create_order(PAIR, 1, 100, OrderSide.FUTURES_OPEN_SELL, OrderType.LIMIT)
    assert order.id == "123"
    assert order.cid == "abc"
    assert order.status == OrderStatus.PENDING
    assert order.pair == PAIR
    assert order.side == OrderSide.FUTURES_OPEN_SELL
    assert order.order_type == OrderType.LIMIT
    query = _query(mocked.calls[0])
    assert query["side"] == ["SELL"]
    assert query["positionSide"] == ["SHORT"]
    assert query["type"] == ["LIMIT"]
    assert query["timeInForce"] == ["GTC"]
    assert query["newOrderRespType"] == ["ACK"]


def test_create_order_close_buy_is_long(mocked):
    mocked.add(responses.POST, ENDPOINT + "/fapi/v1/order", json={"orderId": 5})
    prv = FApi().new_prv_api()
    order, _ = prv.create_order(PAIR, 1, 100, OrderSide.FUTURES_CLOSE_BUY, OrderType.LIMIT)
    assert order.id == "5"
    assert order.side == OrderSide.FUTURES_CLOSE_BUY
    assert order.qty == 1
    assert order.price == 100
    query = _query(mocked.calls[0])
    assert query["positionSide"] == ["LONG"]
    assert query["side"] == ["SELL"]


def test_create_order_below_min_notional(mocked):
    prv = FApi().new_prv_api()
    with pytest.raises(ValueError, match="MIN NOTIONAL"):
        prv.create_order(PAIR, 0.01, 100, OrderSide.FUTURES_OPEN_BUY, OrderType.LIMIT)
    assert len(mocked.calls) == 0


def test_get_order_info(mocked):
    mocked.add(
        responses.GET,
        ENDPOINT + "/fapi/v1/order",
        json={"orderId": 7, "status": "FILLED", "side": "SELL", "positionSide": "SHORT"},
    )
    order, _ = FApi().new_prv_api().get_order_info(PAIR, "7")
    assert order.id == "7"
    assert order.pair == PAIR
    assert order.status == OrderStatus.FINISHED
    assert order.side == OrderSide.FUTURES_OPEN_SELL
    assert _query(mocked.calls[0])["orderId"] == ["7"]


def test_get_pending_orders(mocked):
    mocked.add(
        responses.GET,
        ENDPOINT + "/fapi/v1/openOrders",
        json=[
            {
                "orderId": 1,
                "side": "BUY",
                "positionSide": "LONG",
                "status": "NEW",
                "type": "LIMIT",
                "price": "10",
                "origQty": "2",
            }
        ],
    )
    orders, _ = FApi().new_prv_api().get_pending_orders(PAIR)
    assert len(orders) == 1
    assert orders[0].pair == PAIR
    assert orders[0].side == OrderSide.FUTURES_OPEN_BUY
    assert orders[0].status == OrderStatus.PENDING
    assert orders[0].qty == 2.0


def test_get_history_orders_default_limit(mocked):
    mocked.add(
        responses.GET,
        ENDPOINT + "/fapi/v1/allOrders",
        json=[{"orderId": 2, "status": "CANCELED", "updateTime": 1700000000000}],
    )
    orders, _ = FApi().new_prv_api().get_history_orders(PAIR)
    assert orders[0].canceled_at == 1700000000000
    assert orders[0].pair == PAIR
    assert _query(mocked.calls[0])["limit"] == ["500"]


def test_cancel_order_ok(mocked):
    mocked.add(
        responses.DELETE, ENDPOINT + "/fapi/v1/order", json={"orderId": 1, "status": "CANCELED"}
    )
    body = FApi().new_prv_api().cancel_order(PAIR, "1")
    assert b"CANCELED" in body
    assert mocked.calls[0].request.method == "DELETE"


def test_cancel_order_error_code(mocked):
    mocked.add(
        responses.DELETE,
        ENDPOINT + "/fapi/v1/order",
        json={"code": "-2011", "msg": "Unknown order"},
    )
    with pytest.raises(ValueError, match="Unknown order"):
        FApi().new_prv_api().cancel_order(PAIR, "1")


def test_get_positions(mocked):
    mocked.add(
        responses.GET,
        ENDPOINT + "/fapi/v2/positionRisk",
        json=[{"positionSide": "BOTH", "positionAmt": "-2", "leverage": "10"}],
    )
    positions, _ = FApi().new_prv_api().get_positions(PAIR)
    assert positions[0].pair == PAIR
    assert positions[0].pos_side == OrderSide.FUTURES_OPEN_SELL
    assert positions[0].qty == -2.0
    assert positions[0].avail_qty == positions[0].qty