"""TradeLight - a personal trading journal with local-first day logs."""

__version__ = "0.1.0"
