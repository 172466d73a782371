"""Account commands for TradeLight CLI.

Handles sign-up, login, logout and the current user.
"""

import click
from rich.markup import escape
from rich.panel import Panel

from tradelight.cli.common import _get_data_store, console, fail


def _get_identity_provider():
    """Get the identity provider."""
    from tradelight.auth.local import LocalIdentityProvider

    return LocalIdentityProvider(_get_data_store())


@click.command()
@click.option("--email", prompt=True, help="Account email.")
@click.option("--name", "display_name", prompt="Display name", default="", help="Name shown in the app.")
@click.password_option(help="Account password (min 6 characters).")
def signup(email: str, display_name: str, password: str) -> None:
    """Create a local account and sign in."""
    from tradelight.auth.base import AuthError

    try:
        user = _get_identity_provider().sign_up(email, password, display_name)
    except AuthError as e:
        fail("Sign Up Failed", escape(str(e)))

    console.print(Panel(
        f"[green]✓[/green] Account created for [accent]{user.email}[/accent]\n\n"
        "[dim]Use [accent]tradelight log[/accent] to record today's trading.[/dim]",
        title="[bold green]Welcome[/bold green]",
        border_style="green",
    ))


@click.command()
@click.option("--email", prompt=True, help="Account email.")
@click.option("--password", prompt=True, hide_input=True, help="Account password.")
def login(email: str, password: str) -> None:
    """Sign in to an existing account."""
    from tradelight.auth.base import AuthError

    try:
        user = _get_identity_provider().sign_in(email, password)
    except AuthError as e:
        fail("Login Failed", escape(str(e)))

    console.print(Panel(
        f"[green]✓[/green] Signed in as [accent]{user.label}[/accent]",
        title="[bold green]Login Successful[/bold green]",
        border_style="green",
    ))


@click.command()
def logout() -> None:
    """Sign out of the current account.

    Cached day logs stay on disk.
    """
    provider = _get_identity_provider()
    if provider.current_user is None:
        console.print("[yellow]Not signed in. Nothing to logout from.[/yellow]")
        return

    provider.sign_out()
    console.print(Panel(
        "[green]✓[/green] Signed out",
        title="[bold green]Logout Successful[/bold green]",
        border_style="green",
    ))


@click.command()
@click.option("--name", "display_name", default=None, help="Change the display name.")
def whoami(display_name: str) -> None:
    """Show the signed-in user (optionally renaming them)."""
    from tradelight.auth.base import AuthError

    provider = _get_identity_provider()
    user = provider.current_user
    if user is None:
        console.print("[dim]TradeLight - Logged Out[/dim]")
        return

    if display_name is not None:
        try:
            user = provider.update_display_name(display_name)
        except AuthError as e:
            fail("Update Failed", escape(str(e)))
        console.print("[green]✓[/green] Display name updated")

    console.print(f"TradeLight - [accent]{user.label}[/accent]")
    console.print(f"[dim]{user.email} ({user.uid})[/dim]")
