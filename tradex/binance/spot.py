"""Binance spot market client: public market data and private trading."""

from __future__ import annotations

from typing import Any, Mapping

from tradex import logger
from tradex.binance import spot_unmarshal as _unmarshal
from tradex.binance.common import sign_params
from tradex.binance.spot_unmarshal import adapt_kline_period, adapt_order_side, adapt_order_type
from tradex.httpcli import get_default_client
from tradex.model import (
    BINANCE,
    CurrencyPair,
    Depth,
    Kline,
    KlinePeriod,
    OptionParameter,
    Order,
    OrderSide,
    OrderStatus,
    OrderType,
    Ticker,
)
from tradex.options import ApiOptions, UnmarshalerOptions, UriOptions
from tradex.util import Values, float_to_string, merge_option_params


class Spot:
    """Public REST API of the Binance spot market."""

    def __init__(self) -> None:
        self.uri_opts = UriOptions(
            endpoint="https://api.binance.com",
            ticker_uri="/api/v3/ticker/24hr",
            depth_uri="/api/v3/depth",
            kline_uri="/api/v3/klines",
            new_order_uri="/api/v3/order",
            get_pending_orders_uri="/api/v3/openOrders",
            cancel_order_uri="/api/v3/order",
            get_order_uri="/api/v3/order",
            get_history_orders_uri="/api/v3/allOrders",
        )
        self.unmarshaler_opts = UnmarshalerOptions(
            response=_unmarshal.unmarshal_response,
            ticker=_unmarshal.unmarshal_ticker,
            depth=_unmarshal.unmarshal_depth,
            kline=_unmarshal.unmarshal_klines,
            create_order=_unmarshal.unmarshal_create_order,
            pending_orders=_unmarshal.unmarshal_pending_orders,
            cancel_order=_unmarshal.unmarshal_cancel_order,
        )

    def get_name(self) -> str:
        """Exchange domain name."""
        return BINANCE

    def with_uri_options(self, **kwargs: Any) -> Spot:
        """Replace endpoint or request paths."""
        self.uri_opts = self.uri_opts.updated(**kwargs)
        return self

    def with_unmarshaler_options(self, **kwargs: Any) -> Spot:
        """Replace response decoders."""
        self.unmarshaler_opts = self.unmarshaler_opts.updated(**kwargs)
        return self

    def new_prv_api(self, **kwargs: Any) -> PrvApi:
        """Private API sharing this client's settings; kwargs are ApiOptions fields."""
        return PrvApi(self, ApiOptions(**kwargs))

    def url(self, uri: str) -> str:
        """Full URL of a request path."""
        return f"{self.uri_opts.endpoint}{uri}"

    def get_depth(
        self, pair: CurrencyPair, size: int, *args: OptionParameter
    ) -> tuple[Depth, bytes]:
        """Order book of pair and the raw response body."""
        params = Values()
        params.set("symbol", pair.symbol)
        params.set("limit", str(size))
        merge_option_params(params, *args)
        data = self.do_no_auth_request("GET", self.url(self.uri_opts.depth_uri), params, None)
        logger.debug("[GetDepth] %s", data.decode(errors="replace"))
        return self.unmarshaler_opts.depth(data), data

    def get_ticker(self, pair: CurrencyPair, *args: OptionParameter) -> tuple[Ticker, bytes]:
        """24h ticker of pair and the raw response body."""
        params = Values()
        params.set("symbol", pair.symbol)
        for opt in args:
            if opt.key == "symbols":
                params.delete("symbol")  # only one of symbol or symbols
            params.add(opt.key, opt.value)
        data = self.do_no_auth_request("GET", self.url(self.uri_opts.ticker_uri), params, None)
        ticker = self.unmarshaler_opts.ticker(data)
        ticker.pair = pair
        return ticker, data

    def get_kline(
        self, pair: CurrencyPair, period: KlinePeriod | str, *args: OptionParameter
    ) -> tuple[list[Kline], bytes]:
        """Candlesticks of pair and the raw response body."""
        params = Values()
        params.set("limit", "1000")
        params.set("symbol", pair.symbol)
        params.set("interval", adapt_kline_period(period))
        merge_option_params(params, *args)
        data = self.do_no_auth_request("GET", self.url(self.uri_opts.kline_uri), params, None)
        return self.unmarshaler_opts.kline(data), data

    def do_no_auth_request(
        self,
        method: str,
        url: str,
        params: Values,
        headers: Mapping[str, str] | None,
    ) -> bytes:
        """Send an unsigned request; GET params go in the query, others in the body."""
        body = ""
        if method == "GET":
            url = f"{url}?{params.encode()}"
        else:
            body = params.encode()
        return get_default_client().do_request(method, url, body, headers)


class PrvApi:
    """Signed trading API of the Binance spot market."""

    def __init__(self, spot: Spot, api_opts: ApiOptions | None = None) -> None:
        self.spot = spot
        self.api_opts = api_opts or ApiOptions()

    def create_order(
        self,
        pair: CurrencyPair,
        qty: float,
        price: float,
        side: OrderSide | str,
        order_type: OrderType | str,
        *args: OptionParameter,
    ) -> tuple[Order, bytes]:
        """Place a GTC order; the returned order is marked pending."""
        params = Values()
        params.set("symbol", pair.symbol)
        params.set("side", adapt_order_side(side))
        params.set("type", adapt_order_type(order_type))
        params.set("timeInForce", "GTC")
        params.set("quantity", float_to_string(qty, pair.qty_precision))
        params.set("price", float_to_string(price, pair.price_precision))
        params.set("newOrderRespType", "ACK")
        merge_option_params(params, *args)
        data = self.do_auth_request(
            "POST", self.spot.url(self.spot.uri_opts.new_order_uri), params, None
        )
        order = self.spot.unmarshaler_opts.create_order(data)
        order.status = OrderStatus.PENDING
        return order, data

    def get_pending_orders(
        self, pair: CurrencyPair, *args: OptionParameter
    ) -> tuple[list[Order], bytes]:
        """Open orders of pair and the raw response body."""
        params = Values()
        params.set("symbol", pair.symbol)
        merge_option_params(params, *args)
        data = self.do_auth_request(
            "GET", self.spot.url(self.spot.uri_opts.get_pending_orders_uri), params, None
        )
        return self.spot.unmarshaler_opts.pending_orders(data), data

    def cancel_order(self, pair: CurrencyPair, order_id: str, *args: OptionParameter) -> bytes:
        """Cancel an order and return the raw response body."""
        params = Values()
        params.set("symbol", pair.symbol)
        if order_id:
            params.set("orderId", order_id)
        merge_option_params(params, *args)
        data = self.do_auth_request(
            "DELETE", self.spot.url(self.spot.uri_opts.cancel_order_uri), params, None
        )
        self.spot.unmarshaler_opts.cancel_order(data)
        return data

    def do_auth_request(
        self,
        method: str,
        url: str,
        params: Values,
        headers: Mapping[str, str] | None,
    ) -> bytes:
        """Sign params, send them in the query string with the API key header."""
        request_headers = dict(headers or {})
        request_headers["X-MBX-APIKEY"] = self.api_opts.key
        sign_params(params, self.api_opts.secret)
        body = get_default_client().do_request(
            method, f"{url}?{params.encode()}", "", request_headers
        )
        logger.debug("[DoAuthRequest] response body: %s", body.decode(errors="replace"))
        return body