"""Chat API: DeFi chat assistant with live market data and news sentiment."""

__version__ = "0.1.0"
