"""Binance USDT-margined futures client: public market data and private trading."""

from __future__ import annotations

from typing import Any, Mapping

from tradex import logger
from tradex.binance import fapi_unmarshal as _unmarshal
from tradex.binance.common import (
    adapt_kline_period_to_symbol,
    adapt_order_side_to_string,
    adapt_order_type_to_string,
    sign_params,
)
from tradex.httpcli import HttpError, get_default_client
from tradex.model import (
    BINANCE,
    Account,
    CurrencyPair,
    Depth,
    FuturesPosition,
    Kline,
    KlinePeriod,
    OptionParameter,
    Order,
    OrderSide,
    OrderType,
)
from tradex.options import ApiOptions, UnmarshalerOptions, UriOptions
from tradex.util import Values, float_to_string, merge_option_params

_MIN_NOTIONAL = 5.0
_DEFAULT_CONTRACT_ALIAS = "PERPETUAL"

_SHORT_SIDES = (OrderSide.FUTURES_OPEN_SELL, OrderSide.FUTURES_CLOSE_SELL)
_LONG_SIDES = (OrderSide.FUTURES_OPEN_BUY, OrderSide.FUTURES_CLOSE_BUY)


class FApi:
    """Public REST API of the Binance USDT-margined futures market."""

    def __init__(self) -> None:
        self.currency_pair_m: dict[str, CurrencyPair] = {}
        self.uri_opts = UriOptions(
            endpoint="https://fapi.binance.com",
            kline_uri="/fapi/v1/klines",
            ticker_uri="/fapi/v1/ticker/24hr",
            depth_uri="/fapi/v1/depth",
            new_order_uri="/fapi/v1/order",
            get_order_uri="/fapi/v1/order",
            get_history_orders_uri="/fapi/v1/allOrders",
            get_pending_orders_uri="/fapi/v1/openOrders",
            cancel_order_uri="/fapi/v1/order",
            get_account_uri="/fapi/v2/balance",
            get_positions_uri="/fapi/v2/positionRisk",
            get_exchange_info_uri="/fapi/v1/exchangeInfo",
        )
        self.unmarshaler_opts = UnmarshalerOptions(
            exchange_info=_unmarshal.unmarshal_exchange_info,
            depth=_unmarshal.unmarshal_depth,
            kline=_unmarshal.unmarshal_klines,
            account=_unmarshal.unmarshal_account,
            create_order=_unmarshal.unmarshal_create_order,
            cancel_order=_unmarshal.unmarshal_cancel_order,
            order_info=_unmarshal.unmarshal_order_info,
            pending_orders=_unmarshal.unmarshal_pending_orders,
            history_orders=_unmarshal.unmarshal_history_orders,
            positions=_unmarshal.unmarshal_positions,
        )

    def get_name(self) -> str:
        """Exchange domain name."""
        return BINANCE

    def with_uri_options(self, **kwargs: Any) -> FApi:
        """Replace endpoint or request paths."""
        self.uri_opts = self.uri_opts.updated(**kwargs)
        return self

    def with_unmarshaler_options(self, **kwargs: Any) -> FApi:
        """Replace response decoders."""
        self.unmarshaler_opts = self.unmarshaler_opts.updated(**kwargs)
        return self

    def new_prv_api(self, **kwargs: Any) -> Prv:
        """Private API sharing this client's settings; kwargs are ApiOptions fields."""
        return Prv(self, ApiOptions(**kwargs))

    def url(self, uri: str) -> str:
        """Full URL of a request path."""
        return f"{self.uri_opts.endpoint}{uri}"

    def do_no_auth_request(self, method: str, url: str, params: Values) -> bytes:
        """Send an unsigned request; GET params go in the query string."""
        if method == "GET":
            url = f"{url}?{params.encode()}"
        return get_default_client().do_request(method, url, "", None)

    def get_exchange_info(self) -> tuple[dict[str, CurrencyPair], bytes]:
        """Load all instruments, cache them for new_currency_pair and return them."""
        try:
            body = self.do_no_auth_request(
                "GET", self.url(self.uri_opts.get_exchange_info_uri), Values()
            )
        except HttpError as exc:
            logger.error(
                "[GetExchangeInfo] http request error, body: %s",
                exc.body.decode(errors="replace"),
            )
            raise
        try:
            pairs = self.unmarshaler_opts.exchange_info(body)
        except ValueError as exc:
            logger.error("[GetExchangeInfo] unmarshaler data error, err: %s", exc)
            raise
        self.currency_pair_m = dict(pairs)
        return self.currency_pair_m, body

    def new_currency_pair(
        self, base_sym: str, quote_sym: str, *args: OptionParameter
    ) -> CurrencyPair:
        """Cached instrument of base and quote; contract alias defaults to perpetual."""
        contract_alias = ""
        if not args:
            contract_alias = _DEFAULT_CONTRACT_ALIAS
        elif args[0].key == "contractAlias":
            contract_alias = args[0].value
        pair = self.currency_pair_m.get(f"{base_sym}{quote_sym}{contract_alias}")
        if pair is None or not pair.symbol:
            raise LookupError("not found currency pair")
        return pair

    def get_depth(
        self, pair: CurrencyPair, limit: int, *args: OptionParameter
    ) -> tuple[Depth, bytes]:
        """Order book of pair and the raw response body."""
        params = Values()
        params.set("symbol", pair.symbol)
        params.set("limit", str(limit))
        merge_option_params(params, *args)
        body = self.do_no_auth_request("GET", self.url(self.uri_opts.depth_uri), params)
        depth = self.unmarshaler_opts.depth(body)
        depth.pair = pair
        return depth, body

    def get_kline(
        self, pair: CurrencyPair, period: KlinePeriod | str, *args: OptionParameter
    ) -> tuple[list[Kline], bytes]:
        """Candlesticks of pair and the raw response body."""
        params = Values()
        params.set("symbol", pair.symbol)
        params.set("interval", adapt_kline_period_to_symbol(period))
        params.set("limit", "100")
        merge_option_params(params, *args)
        body = self.do_no_auth_request("GET", self.url(self.uri_opts.kline_uri), params)
        klines = self.unmarshaler_opts.kline(body)
        for kline in klines:
            kline.pair = pair
        return klines, body


class Prv:
    """Signed trading API of the Binance USDT-margined futures market."""

    def __init__(self, fapi: FApi, api_opts: ApiOptions | None = None) -> None:
        self.fapi = fapi
        self.api_opts = api_opts or ApiOptions()

    def _url(self, uri: str) -> str:
        return self.fapi.url(uri)

    @property
    def _decoders(self) -> UnmarshalerOptions:
        return self.fapi.unmarshaler_opts

    def get_account(self, currency: str) -> tuple[dict[str, Account], bytes]:
        """Balances of every asset keyed by asset, and the raw response body."""
        body = self.do_auth_request(
            "GET", self._url(self.fapi.uri_opts.get_account_uri), Values(), None
        )
        return dict(self._decoders.account(body)), body

    def create_order(
        self,
        pair: CurrencyPair,
        qty: float,
        price: float,
        side: OrderSide | str,
        order_type: OrderType | str,
        *args: OptionParameter,
    ) -> tuple[Order, bytes]:
        """Place a GTC order in hedge mode; limit orders must be worth at least 5 USDT."""
        if order_type == OrderType.LIMIT and qty * price < _MIN_NOTIONAL:
            raise ValueError("MIN NOTIONAL must >= 5.0 USDT")

        params = Values()
        params.set("symbol", pair.symbol)
        params.set("price", float_to_string(price, pair.price_precision))
        params.set("quantity", float_to_string(qty, pair.qty_precision))
        params.set("type", adapt_order_type_to_string(order_type))
        params.set("side", adapt_order_side_to_string(side))
        params.set("timeInForce", "GTC")
        params.set("newOrderRespType", "ACK")
        if side in _SHORT_SIDES:
            params.set("positionSide", "SHORT")
        elif side in _LONG_SIDES:
            params.set("positionSide", "LONG")
        merge_option_params(params, *args)

        body = self.do_auth_request(
            "POST", self._url(self.fapi.uri_opts.new_order_uri), params, None
        )
        order = self._decoders.create_order(body)
        order.pair = pair
        order.price = price
        order.qty = qty
        order.side = side
        order.order_type = order_type
        return order, body

    def get_order_info(
        self, pair: CurrencyPair, order_id: str, *args: OptionParameter
    ) -> tuple[Order, bytes]:
        """One order of pair and the raw response body."""
        params = Values()
        params.set("symbol", pair.symbol)
        params.set("orderId", order_id)
        merge_option_params(params, *args)
        body = self.do_auth_request(
            "GET", self._url(self.fapi.uri_opts.get_order_uri), params, None
        )
        order = self._decoders.order_info(body)
        order.pair = pair
        return order, body

    def get_pending_orders(
        self, pair: CurrencyPair, *args: OptionParameter
    ) -> tuple[list[Order], bytes]:
        """Open orders of pair and the raw response body."""
        params = Values()
        params.set("symbol", pair.symbol)
        merge_option_params(params, *args)
        body = self.do_auth_request(
            "GET", self._url(self.fapi.uri_opts.get_pending_orders_uri), params, None
        )
        orders = self._decoders.pending_orders(body)
        for order in orders:
            order.pair = pair
        return orders, body

    def get_history_orders(
        self, pair: CurrencyPair, *args: OptionParameter
    ) -> tuple[list[Order], bytes]:
        """Up to 500 past orders of pair and the raw response body."""
        params = Values()
        params.set("symbol", pair.symbol)
        params.set("limit", "500")
        merge_option_params(params, *args)
        body = self.do_auth_request(
            "GET", self._url(self.fapi.uri_opts.get_history_orders_uri), params, None
        )
        orders = self._decoders.history_orders(body)
        for order in orders:
            order.pair = pair
        return orders, body

    def cancel_order(self, pair: CurrencyPair, order_id: str, *args: OptionParameter) -> bytes:
        """Cancel an order and return the raw response body."""
        params = Values()
        params.set("symbol", pair.symbol)
        params.set("orderId", order_id)
        merge_option_params(params, *args)
        body = self.do_auth_request(
            "DELETE", self._url(self.fapi.uri_opts.cancel_order_uri), params, None
        )
        self._decoders.cancel_order(body)
        return body

    def get_positions(
        self, pair: CurrencyPair, *args: OptionParameter
    ) -> tuple[list[FuturesPosition], bytes]:
        """Positions of pair and the raw response body."""
        params = Values()
        params.set("symbol", pair.symbol)
        merge_option_params(params, *args)
        body = self.do_auth_request(
            "GET", self._url(self.fapi.uri_opts.get_positions_uri), params, None
        )
        positions = self._decoders.positions(body)
        for position in positions:
            position.pair = pair
        return positions, body

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