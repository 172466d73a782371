"""Settings commands for TradeLight CLI."""

import click
from rich.markup import escape
from rich.table import Table

from tradelight.cli.common import console, fail


@click.group()
def settings() -> None:
    """View and change preferences."""


@settings.command("show")
def show_settings() -> None:
    """Show current settings."""
    from tradelight.config import get_settings_manager

    manager = get_settings_manager()
    table = Table(title="Settings", caption=str(manager.path))
    table.add_column("Key", style="accent")
    table.add_column("Value")
    for key, value in manager.get().model_dump().items():
        table.add_row(key, str(value))
    console.print(table)


@settings.command("set")
@click.argument("key")
@click.argument("value")
def set_setting(key: str, value: str) -> None:
    """Change one setting, e.g. ``tradelight settings set theme theme-rose``."""
    from tradelight.config import get_settings_manager

    try:
        updated = get_settings_manager().update(**{key: value})
    except ValueError as e:
        fail("Invalid Setting", escape(str(e)))
    console.print(f"[green]✓[/green] {key} = {getattr(updated, key)}")
