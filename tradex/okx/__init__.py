"""OKX v5 public market-data client, response decoders and symbol conversions."""