"""CLI commands for TradeLight.

This package provides the command-line interface for TradeLight,
including accounts, day logging, the dashboard views and settings.
"""

from tradelight.cli.main import cli, main

__all__ = ["cli", "main"]
