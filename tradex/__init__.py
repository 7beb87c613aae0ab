"""REST clients for cryptocurrency exchanges: Binance spot and futures, OKX market data."""

__version__ = "2.0.0"