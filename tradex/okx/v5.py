"""Public REST API of the OKX v5 interface, shared by spot, futures and swap."""

from __future__ import annotations

import json
from typing import Any

from tradex import logger
from tradex.httpcli import get_default_client
from tradex.model import (
    OKX,
    CurrencyPair,
    Depth,
    Kline,
    KlinePeriod,
    OptionParameter,
    Ticker,
)
from tradex.okx import unmarshal as _unmarshal
from tradex.okx.adapter import adapt_kline_period_to_symbol
from tradex.options import UnmarshalerOptions, UriOptions
from tradex.util import Values, _cast_str, merge_option_params


class OkxApiError(Exception):
    """An OKX response whose code is not zero."""

    def __init__(self, code: int, msg: str, body: bytes = b"") -> None:
        super().__init__(msg)
        self.code = code
        self.msg = msg
        self.body = body


def _split_response(decoded: Any) -> tuple[int, str, bytes]:
    """Code, message and raw data of a decoded response envelope."""
    if not isinstance(decoded, dict):
        raise ValueError("response is not a JSON object")
    code = 0
    if "code" in decoded:
        raw_code = decoded["code"]
        if not isinstance(raw_code, str):
            raise ValueError(f"response code is not a string: {raw_code!r}")
        try:
            code = int(raw_code)
        except ValueError as exc:
            raise ValueError(f"invalid response code: {raw_code!r}") from exc
    msg = _cast_str(decoded.get("msg"))
    data = json.dumps(decoded["data"]).encode() if "data" in decoded else b""
    return code, msg, data


class OKxV5:
    """Market data requests of the OKX v5 API."""

    def __init__(self) -> None:
        self.uri_opts = UriOptions(
            endpoint="https://www.okx.com",
            kline_uri="/api/v5/market/candles",
            ticker_uri="/api/v5/market/ticker",
            depth_uri="/api/v5/market/books",
            new_order_uri="/api/v5/trade/order",
            get_order_uri="/api/v5/trade/order",
            get_history_orders_uri="/api/v5/trade/orders-history",
            get_pending_orders_uri="/api/v5/trade/orders-pending",
            cancel_order_uri="/api/v5/trade/cancel-order",
            get_account_uri="/api/v5/account/balance",
            get_positions_uri="/api/v5/account/positions",
            get_exchange_info_uri="/api/v5/public/instruments",
        )
        self.unmarshaler_opts = UnmarshalerOptions(
            response=_unmarshal.unmarshal_response,
            kline=_unmarshal.unmarshal_klines,
            ticker=_unmarshal.unmarshal_ticker,
            depth=_unmarshal.unmarshal_depth,
            create_order=_unmarshal.unmarshal_create_order,
            pending_orders=_unmarshal.unmarshal_pending_orders,
            history_orders=_unmarshal.unmarshal_history_orders,
            cancel_order=_unmarshal.unmarshal_cancel_order,
            order_info=_unmarshal.unmarshal_order_info,
            account=_unmarshal.unmarshal_account,
            positions=_unmarshal.unmarshal_positions,
            futures_account=_unmarshal.unmarshal_futures_account,
            exchange_info=_unmarshal.unmarshal_exchange_info,
        )

    def get_name(self) -> str:
        """Exchange domain name."""
        return OKX

    def with_uri_options(self, **kwargs: Any) -> OKxV5:
        """Replace endpoint or request paths."""
        self.uri_opts = self.uri_opts.updated(**kwargs)
        return self

    def with_unmarshaler_options(self, **kwargs: Any) -> OKxV5:
        """Replace response decoders."""
        self.unmarshaler_opts = self.unmarshaler_opts.updated(**kwargs)
        return self

    def url(self, uri: str) -> str:
        """Full URL of a request path."""
        return f"{self.uri_opts.endpoint}{uri}"

    def get_depth(
        self, pair: CurrencyPair, size: int, *args: OptionParameter
    ) -> tuple[Depth, bytes]:
        """Order book of pair and the raw response body."""
        params = Values()
        params.set("instId", pair.symbol)
        params.set("sz", str(size))
        merge_option_params(params, *args)
        data, body = self.do_no_auth_request("GET", self.url(self.uri_opts.depth_uri), params)
        depth = self.unmarshaler_opts.depth(data)
        depth.pair = pair
        return depth, body

    def get_ticker(self, pair: CurrencyPair, *args: OptionParameter) -> tuple[Ticker, bytes]:
        """Ticker of pair and the raw response body; option parameters are not sent."""
        params = Values()
        params.set("instId", pair.symbol)
        data, body = self.do_no_auth_request("GET", self.url(self.uri_opts.ticker_uri), params)
        ticker = self.unmarshaler_opts.ticker(data)
        ticker.pair = pair
        return ticker, body

    def get_kline(
        self, pair: CurrencyPair, period: KlinePeriod | str, *args: OptionParameter
    ) -> tuple[list[Kline], bytes]:
        """Up to 100 candlesticks of pair by default, and the raw response body."""
        params = Values()
        params.set("instId", pair.symbol)
        params.set("bar", adapt_kline_period_to_symbol(period))
        params.set("limit", "100")
        merge_option_params(params, *args)
        data, body = self.do_no_auth_request("GET", self.url(self.uri_opts.kline_uri), params)
        return self.unmarshaler_opts.kline(data), body

    def get_exchange_info(
        self, inst_type: str, *args: OptionParameter
    ) -> tuple[dict[str, CurrencyPair], bytes]:
        """Instruments of a type (SPOT, SWAP, FUTURES ...) and the raw response body."""
        params = Values()
        params.set("instType", inst_type)
        merge_option_params(params, *args)
        data, body = self.do_no_auth_request(
            "GET", self.url(self.uri_opts.get_exchange_info_uri), params
        )
        return self.unmarshaler_opts.exchange_info(data), body

    def do_no_auth_request(self, method: str, url: str, params: Values) -> tuple[bytes, bytes]:
        """Send an unsigned request; return the data part and the whole body.

        Raises OkxApiError when the response code is not zero.
        """
        if method == "GET":
            url = f"{url}?{params.encode()}"
        body = get_default_client().do_request(method, url, "", None)
        code, msg, data = _split_response(self.unmarshaler_opts.response(body))
        if code == 0:
            logger.debug("[DoNoAuthRequest] response=%s", body.decode(errors="replace"))
            return data, body
        logger.debug("[DoNoAuthRequest] error=%s", msg)
        raise OkxApiError(code, msg, body)