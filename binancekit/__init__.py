"""Client for the Binance spot REST API: configuration, signed requests, account and orders."""

__version__ = "0.1.0"