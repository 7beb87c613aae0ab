"""Binance spot and USDⓈ-M futures REST clients."""