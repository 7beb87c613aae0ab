"""Market and trading data types shared by every exchange client."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, IntEnum


class KlinePeriod(str, Enum):
    """Candlestick interval."""

    MIN1 = "1min"
    MIN5 = "5min"
    MIN15 = "15min"
    MIN30 = "30min"
    MIN60 = "60min"
    HOUR1 = "1h"
    HOUR4 = "4h"
    HOUR6 = "6h"
    DAY1 = "1day"
    WEEK1 = "1week"


class OrderStatus(IntEnum):
    """Lifecycle state of an order."""

    UNKNOWN = -1
    PENDING = 1
    FINISHED = 2
    CANCELED = 3
    PART_FINISHED = 4
    CANCELING = 5

    def __str__(self) -> str:
        return _STATUS_NAMES.get(self, "unknown-status")


_STATUS_NAMES = {
    OrderStatus.PENDING: "pending",
    OrderStatus.FINISHED: "finished",
    OrderStatus.CANCELED: "canceled",
    OrderStatus.PART_FINISHED: "part-finished",
}


class OrderSide(str, Enum):
    """Direction of an order, for spot and futures markets."""

    BUY = "buy"
    SELL = "sell"
    FUTURES_OPEN_BUY = "futures_open_buy"
    FUTURES_OPEN_SELL = "futures_open_sell"
    FUTURES_CLOSE_BUY = "futures_close_buy"
    FUTURES_CLOSE_SELL = "futures_close_sell"


class OrderType(str, Enum):
    """How an order is priced."""

    LIMIT = "limit"
    MARKET = "market"
    OPPONENT = "opponent"


# Coin symbols, alphabetical.
ADA = "ADA"
ATOM = "ATOM"
AAVE = "AAVE"
ALGO = "ALGO"
AR = "AR"
BTC = "BTC"
BNB = "BNB"
BSV = "BSV"
BCH = "BCH"
BUSD = "BUSD"
CEL = "CEL"
CRV = "CRV"
DAI = "DAI"
DCR = "DCR"
DOT = "DOT"
DOGE = "DOGE"
DASH = "DASH"
DYDX = "DYDX"
ETH = "ETH"
ETHW = "ETHW"
ETC = "ETC"
EOS = "EOS"
ENJ = "ENJ"
ENS = "ENS"
FLOW = "FLOW"
FIL = "FIL"
FLM = "FLM"
GALA = "GALA"
GAS = "GAS"
HT = "HT"
IOTA = "IOTA"
KSM = "KSM"
LTC = "LTC"
LDO = "LDO"
MINA = "MINA"
NEO = "NEO"
NEAR = "NEAR"
OP = "OP"
OKB = "OKB"
OKT = "OKT"
PLG = "PLG"
PERP = "PERP"
QTUM = "QTUM"
RACA = "RACA"
RVN = "RVN"
STORJ = "STORJ"
SOL = "SOL"
SHIB = "SHIB"
SC = "SC"
SAND = "SAND"
SUSHI = "SUSHI"
SUI = "SUI"
TRX = "TRX"
TRADE = "TRADE"
USD = "USD"
USDT = "USDT"
USDC = "USDC"
UNI = "UNI"
VELO = "VELO"
WBTC = "WBTC"
WAVES = "WAVES"
XRP = "XRP"
XTZ = "XTZ"
YFI = "YFI"
YFII = "YFII"
ZEC = "ZEC"
ZYRO = "ZYRO"

# Exchange names.
OKX = "okx.com"
BINANCE = "binance.com"


@dataclass(frozen=True)
class OptionParameter:
    """An extra request parameter passed through to an exchange."""

    key: str
    value: str


@dataclass
class CurrencyPair:
    """A tradable instrument and its trading rules."""

    symbol: str = ""
    base_symbol: str = ""
    quote_symbol: str = ""
    price_precision: int = 0
    qty_precision: int = 0
    min_qty: float = 0.0
    max_qty: float = 0.0
    market_qty: float = 0.0
    contract_val: float = 0.0
    contract_val_currency: str = ""
    settlement_currency: str = ""
    contract_alias: str = ""
    contract_delivery_date: int = 0


@dataclass
class Ticker:
    """24-hour market summary."""

    pair: CurrencyPair = field(default_factory=CurrencyPair)
    last: float = 0.0
    buy: float = 0.0
    sell: float = 0.0
    high: float = 0.0
    low: float = 0.0
    vol: float = 0.0
    percent: float = 0.0
    timestamp: int = 0


@dataclass(order=True)
class DepthItem:
    """One price level of an order book; items order by price."""

    price: float = 0.0
    amount: float = 0.0


@dataclass
class Depth:
    """Order book snapshot: bids descending, asks ascending."""

    pair: CurrencyPair = field(default_factory=CurrencyPair)
    utime: datetime | None = None
    asks: list[DepthItem] = field(default_factory=list)
    bids: list[DepthItem] = field(default_factory=list)


@dataclass
class Kline:
    """One candlestick."""

    pair: CurrencyPair = field(default_factory=CurrencyPair)
    timestamp: int = 0
    open: float = 0.0
    close: float = 0.0
    high: float = 0.0
    low: float = 0.0
    vol: float = 0.0


@dataclass
class Order:
    """An order as reported by an exchange."""

    pair: CurrencyPair = field(default_factory=CurrencyPair)
    id: str = ""
    cid: str = ""
    side: OrderSide | str = ""
    order_type: OrderType | str = ""
    status: OrderStatus | None = None
    price: float = 0.0
    qty: float = 0.0
    executed_qty: float = 0.0
    price_avg: float = 0.0
    fee: float = 0.0
    fee_ccy: str = ""
    created_at: int = 0
    finished_at: int = 0
    canceled_at: int = 0


@dataclass
class Account:
    """Balance of one coin in a spot account."""

    coin: str = ""
    balance: float = 0.0
    available_balance: float = 0.0
    frozen_balance: float = 0.0


@dataclass
class FuturesPosition:
    """An open futures position."""

    pair: CurrencyPair = field(default_factory=CurrencyPair)
    pos_side: OrderSide | str = ""
    qty: float = 0.0
    avail_qty: float = 0.0
    avg_px: float = 0.0
    liq_px: float = 0.0
    upl: float = 0.0
    upl_ratio: float = 0.0
    lever: float = 0.0


@dataclass
class FuturesAccount:
    """Equity of one coin in a futures account."""

    coin: str = ""
    eq: float = 0.0
    avail_eq: float = 0.0
    frozen_bal: float = 0.0
    mgn_ratio: float = 0.0
    upl: float = 0.0
    risk_rate: float = 0.0