"""Credential, endpoint and response-decoder settings for exchange clients."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any, Callable, Mapping

from tradex.model import (
    Account,
    CurrencyPair,
    Depth,
    FuturesAccount,
    FuturesPosition,
    Kline,
    Order,
    Ticker,
)

ResponseUnmarshaler = Callable[[bytes], Any]
TickerUnmarshaler = Callable[[bytes], Ticker]
DepthUnmarshaler = Callable[[bytes], Depth]
KlineUnmarshaler = Callable[[bytes], "list[Kline]"]
CreateOrderUnmarshaler = Callable[[bytes], Order]
OrderInfoUnmarshaler = Callable[[bytes], Order]
OrdersUnmarshaler = Callable[[bytes], "list[Order]"]
CancelOrderUnmarshaler = Callable[[bytes], None]
AccountUnmarshaler = Callable[[bytes], Mapping[str, Account]]
PositionsUnmarshaler = Callable[[bytes], "list[FuturesPosition]"]
FuturesAccountUnmarshaler = Callable[[bytes], Mapping[str, FuturesAccount]]
ExchangeInfoUnmarshaler = Callable[[bytes], Mapping[str, CurrencyPair]]


@dataclass(frozen=True)
class ApiOptions:
    """Credentials for private endpoints."""

    key: str = ""
    secret: str = ""
    passphrase: str = ""
    client_id: str = ""

    def updated(self, **kwargs: Any) -> ApiOptions:
        """Return a copy with the given fields replaced."""
        return dataclasses.replace(self, **kwargs)


@dataclass(frozen=True)
class UriOptions:
    """Endpoint and request paths of an exchange API."""

    endpoint: str = ""
    ticker_uri: str = ""
    depth_uri: str = ""
    kline_uri: str = ""
    get_order_uri: str = ""
    get_pending_orders_uri: str = ""
    get_history_orders_uri: str = ""
    cancel_order_uri: str = ""
    new_order_uri: str = ""
    get_account_uri: str = ""
    get_positions_uri: str = ""
    get_exchange_info_uri: str = ""

    def updated(self, **kwargs: Any) -> UriOptions:
        """Return a copy with the given fields replaced."""
        return dataclasses.replace(self, **kwargs)


@dataclass(frozen=True)
class UnmarshalerOptions:
    """Functions that decode raw response bodies into model objects."""

    response: ResponseUnmarshaler | None = None
    ticker: TickerUnmarshaler | None = None
    depth: DepthUnmarshaler | None = None
    kline: KlineUnmarshaler | None = None
    create_order: CreateOrderUnmarshaler | None = None
    order_info: OrderInfoUnmarshaler | None = None
    pending_orders: OrdersUnmarshaler | None = None
    history_orders: OrdersUnmarshaler | None = None
    cancel_order: CancelOrderUnmarshaler | None = None
    account: AccountUnmarshaler | None = None
    positions: PositionsUnmarshaler | None = None
    futures_account: FuturesAccountUnmarshaler | None = None
    exchange_info: ExchangeInfoUnmarshaler | None = None

    def updated(self, **kwargs: Any) -> UnmarshalerOptions:
        """Return a copy with the given decoders replaced."""
        return dataclasses.replace(self, **kwargs)