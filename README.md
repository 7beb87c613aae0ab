# tradex

`tradex` is a library of REST clients for cryptocurrency exchanges. Every
market-data and trading call returns model objects from `tradex.model`
(`Ticker`, `Depth`, `Kline`, `Order`, `Account`, `FuturesPosition`,
`CurrencyPair`) together with the raw response body. Failures are raised as
exceptions.

What is included:

* **Binance spot** (`tradex.binance.spot`): market data and order placing,
  listing and cancelling.
* **Binance USDⓈ-M futures** (`tradex.binance.fapi`): instrument list, market
  data, orders, balances and positions.
* **OKX v5** (`tradex.okx.v5`): public market data only.

## Installation

```
pip install tradex
```

To run the test suite:

```
pip install "tradex[test]"
pytest
```

## Binance spot

```python
from tradex.binance.spot import Spot
from tradex.model import CurrencyPair, KlinePeriod, OrderSide, OrderType

spot = Spot()
pair = CurrencyPair(symbol="BTCUSDT", price_precision=2, qty_precision=5)

ticker, raw = spot.get_ticker(pair)
depth, raw = spot.get_depth(pair, 20)
klines, raw = spot.get_kline(pair, KlinePeriod.HOUR1)   # up to 1000 candles

trader = spot.new_prv_api(key="placeholder", secret="secret")
order, raw = trader.create_order(pair, 0.001, 25000.0, OrderSide.BUY, OrderType.LIMIT)
pending, raw = trader.get_pending_orders(pair)
trader.cancel_order(pair, order.id)
```

Orders are sent good-till-cancelled; quantity and price are rounded to the
pair's `qty_precision` and `price_precision`. `new_prv_api` takes the fields
of `tradex.options.ApiOptions` (`key`, `secret`, `passphrase`, `client_id`).
Private requests are signed with HMAC-SHA256 and carry a timestamp and a
`recvWindow` of 6000 ms.

## Binance USDⓈ-M futures

```python
from tradex.binance.fapi import FApi
from tradex.model import OptionParameter, OrderSide, OrderType

fapi = FApi()
fapi.get_exchange_info()                       # caches instruments
pair = fapi.new_currency_pair("BTC", "USDT")   # contract type defaults to PERPETUAL
quarterly = fapi.new_currency_pair(
    "BTC", "USDT", OptionParameter("contractAlias", "CURRENT_QUARTER")
)

depth, raw = fapi.get_depth(pair, 50)
klines, raw = fapi.get_kline(pair, "1h")       # 100 candles by default

trader = fapi.new_prv_api(key="placeholder", secret="secret")
balances, raw = trader.get_account("USDT")
order, raw = trader.create_order(pair, 0.01, 30000.0, OrderSide.FUTURES_OPEN_BUY, OrderType.LIMIT)
info, raw = trader.get_order_info(pair, order.id)
history, raw = trader.get_history_orders(pair)  # up to 500 orders
positions, raw = trader.get_positions(pair)
trader.cancel_order(pair, order.id)
```

Orders are placed in hedge mode: open/close long sides send `positionSide=LONG`,
open/close short sides send `positionSide=SHORT`. A limit order worth less
than 5 USDT (`qty * price`) raises `ValueError` before anything is sent.
`new_currency_pair` raises `LookupError` when the instrument is not cached.

## OKX market data

```python
from tradex.okx.v5 import OKxV5, OkxApiError

okx = OKxV5()
pairs, raw = okx.get_exchange_info("SPOT")     # also "SWAP", "FUTURES"
pair = pairs["BTCUSDT"]                         # keyed base + quote + contract alias

ticker, raw = okx.get_ticker(pair)             # percent is the change from the 24h open
depth, raw = okx.get_depth(pair, 20)
klines, raw = okx.get_kline(pair, "4h")        # 100 candles by default
```

A response whose `code` is not zero raises `OkxApiError`, which keeps the
`code`, `msg` and raw `body`.

The decoders in `tradex.okx.unmarshal` also cover order, account, futures
account, position and cancel responses, and `tradex.okx.adapter` converts
sides, order types, states and kline periods to and from OKX symbols, for use
with requests you sign and send yourself.

## Extra parameters

Most calls accept trailing `OptionParameter(key, value)` arguments. They are
added to the request and override the defaults the library sets (for
example `OptionParameter("limit", "500")` on `get_kline`).

## Customising

* Endpoints and paths: `with_uri_options(endpoint="https://...")` on `Spot`,
  `FApi` or `OKxV5`; the keywords are the fields of `UriOptions`.
* Response parsing: `with_unmarshaler_options(ticker=my_decoder, ...)`
  replaces a decoder; the keywords are the fields of `UnmarshalerOptions`.
* HTTP transport: `tradex.httpcli.set_default_client(client)` replaces the
  shared client with any `HttpClient`. The default client times out after
  5 seconds and raises `HttpError` (with `status` and `body`) for any status
  other than 200:

```python
from tradex.httpcli import DefaultHttpClient, set_default_client

client = DefaultHttpClient()
client.set_timeout(10)
client.set_proxy("http://localhost:8080")
set_default_client(client)
```

* Logging: `tradex.logger.set_level(LogLevel.DEBUG)` shows requests and
  responses; `tradex.logger.set_out(stream)` redirects the output. The
  default level is `WARN`.

## Helpers

`tradex.signing` holds the HMAC and MD5 signing functions, and `tradex.util`
holds `Values` (a query-parameter multi-map encoded with sorted keys),
`float_to_string`, `values_to_json`, `gzip_uncompress`, `flate_uncompress`
and `generate_order_client_id`.

## What it does not do

* No trading on OKX: there is no client that places, queries or cancels OKX
  orders or reads OKX balances or positions, and no OKX object that caches
  instruments for lookup by base and quote symbol.
* Binance spot has no balance, single-order or order-history calls.
* Binance futures has no ticker call and no futures-account summary.
* No WebSocket streams and no command-line tool; it is a library only.