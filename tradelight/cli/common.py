"""Shared helpers for TradeLight CLI commands."""

from typing import NoReturn

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.theme import Theme

# Terminal color standing in for each UI theme
THEME_ACCENTS = {
    "light": "blue",
    "theme-default": "cyan",
    "theme-zinc": "grey70",
    "theme-rose": "magenta",
    "theme-blue": "bright_blue",
}

console = Console(theme=Theme({"accent": THEME_ACCENTS["theme-default"]}))
_theme_pushed = False


def apply_theme(settings) -> None:
    """Restyle ``accent`` output for the selected theme.

    Registered as a settings listener so a change takes effect immediately.
    """
    global _theme_pushed
    if _theme_pushed:
        console.pop_theme()
    console.push_theme(Theme({"accent": THEME_ACCENTS[settings.theme]}))
    _theme_pushed = True


def _get_data_store():
    """Get the data store instance."""
    from tradelight.config import db_path
    from tradelight.db.store import DataStore

    return DataStore(db_path())


def _get_settings():
    """Get the current settings."""
    from tradelight.config import get_settings_manager

    return get_settings_manager().get()


def _get_remote(settings, data_store):
    """Get the document store selected in settings."""
    if settings.remote_backend == "firestore":
        from tradelight.remote.firestore import FirestoreDocumentStore

        return FirestoreDocumentStore(project_id=settings.firestore_project or None)

    from tradelight.remote.local import LocalDocumentStore

    return LocalDocumentStore(data_store)


def console_notifier(title: str, message: str) -> None:
    """Show a non-fatal failure to the user."""
    console.print(Panel(
        f"[red]✗[/red] {message}",
        title=f"[bold red]{title}[/bold red]",
        border_style="red",
    ))


def _get_day_log_store():
    """Build the day log store from settings."""
    from tradelight.journal.day_log_store import DayLogStore
    from tradelight.remote.base import RemoteStoreError

    data_store = _get_data_store()
    try:
        remote = _get_remote(_get_settings(), data_store)
    except RemoteStoreError as e:
        fail("Remote Store Error", escape(str(e)))
    return DayLogStore(remote, data_store, notifier=console_notifier)


def _current_user():
    """Get the signed-in user, or None."""
    from tradelight.auth.local import LocalIdentityProvider

    return LocalIdentityProvider(_get_data_store()).current_user


def _require_user():
    """Get the signed-in user or exit with a hint to log in."""
    user = _current_user()
    if user is None:
        fail(
            "Not Signed In",
            "Run [accent]tradelight login[/accent] or [accent]tradelight signup[/accent] first.",
        )
    return user


def fail(title: str, message: str) -> NoReturn:
    """Print an error panel and exit with status 1."""
    console.print(Panel(
        f"[red]{message}[/red]",
        title=f"[bold red]{title}[/bold red]",
        border_style="red",
    ))
    raise SystemExit(1)


def money(value: float, decimals: int = 0) -> str:
    """Format a dollar amount, e.g. ``-$1,250``."""
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.{decimals}f}"


def pnl_style(value: float) -> str:
    if value > 0:
        return "green"
    if value < 0:
        return "red"
    return "white"
