"""Setup catalog commands for TradeLight CLI."""

from datetime import date, datetime
from typing import Optional

import click
from rich.markup import escape
from rich.table import Table

from tradelight.cli.common import (
    _current_user,
    _get_data_store,
    _get_day_log_store,
    _get_settings,
    console,
    fail,
)


def _get_catalog():
    from tradelight.journal.setups import SetupCatalog

    return SetupCatalog(_get_data_store())


@click.group()
def setup() -> None:
    """Manage your list of trade setups (models)."""


@setup.command("list")
@click.option("--filter", "query", default="", help="Only names containing this text.")
def list_setups(query: str) -> None:
    """List saved setups."""
    names = _get_catalog().filter_models(query)
    if not names:
        console.print("[dim]No models found.[/dim]")
        return

    table = Table(title="Setups")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Name", style="accent")
    for index, name in enumerate(names, start=1):
        table.add_row(str(index), name)
    console.print(table)


@setup.command("add")
@click.argument("name")
def add_setup(name: str) -> None:
    """Add a setup."""
    try:
        _get_catalog().add_model(name)
    except ValueError as e:
        fail("Invalid Setup", escape(str(e)))
    console.print(f"[green]✓[/green] Added [accent]{name.strip()}[/accent]")


@setup.command("remove")
@click.argument("name")
@click.option(
    "--date", "day",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Open day whose trade loses this setup (YYYY-MM-DD, default today).",
)
def remove_setup(name: str, day: Optional[datetime]) -> None:
    """Remove a setup.

    If you are signed in and the open day (today, or --date) is tagged with
    this setup, the tag is cleared from that day. Other days keep their label.
    """
    catalog = _get_catalog()
    if name not in catalog.list_models():
        fail("Unknown Setup", f"No setup named {name!r}")
    catalog.delete_model(name)
    console.print(f"[green]✓[/green] Removed [accent]{name}[/accent]")

    user = _current_user()
    if user is None:
        return

    from tradelight.journal.autosave import AutoSaver
    from tradelight.journal.editor import DayLogEditor

    store = _get_day_log_store()
    target = day.date() if day else date.today()
    autosaver = AutoSaver(store, user.uid, delay=_get_settings().autosave_delay)
    editor = DayLogEditor(store.load(user.uid, target), autosaver)
    editor.on_model_deleted(name)
    if autosaver.pending:
        if not editor.flush():
            raise SystemExit(1)
        console.print(f"[dim]Cleared from the log of {target.isoformat()}.[/dim]")
