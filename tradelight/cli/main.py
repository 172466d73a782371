"""Main CLI entry point for TradeLight.

This module provides the main click group and lazy loading
for heavy imports to improve startup time.
"""

import logging

import click
from rich.logging import RichHandler

from tradelight.cli.common import apply_theme, console


class LazyGroup(click.Group):
    """A click Group that lazily loads commands.
    
    This improves CLI startup time by only importing
    command modules when they are actually invoked.
    """

    def __init__(self, *args, lazy_subcommands: dict[str, str] | None = None, **kwargs):
        """Initialize the lazy group.
        
        Args:
            lazy_subcommands: Mapping of command names to module paths.
        """
        super().__init__(*args, **kwargs)
        self._lazy_subcommands = lazy_subcommands or {}

    def list_commands(self, ctx: click.Context) -> list[str]:
        """List all available commands."""
        base = super().list_commands(ctx)
        lazy = list(self._lazy_subcommands.keys())
        return sorted(set(base + lazy))

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        """Get a command by name, lazily loading if needed."""
        # First check if it's already loaded
        if cmd_name in self.commands:
            return self.commands[cmd_name]
        
        # Check if it's a lazy command
        if cmd_name in self._lazy_subcommands:
            return self._lazy_load(cmd_name)
        
        return None

    def _lazy_load(self, cmd_name: str) -> click.Command:
        """Lazily load a command from its module path."""
        import importlib
        
        module_path = self._lazy_subcommands[cmd_name]
        module = importlib.import_module(module_path)
        
        # The command should be named the same as cmd_name or be the default
        if hasattr(module, cmd_name):
            attr = getattr(module, cmd_name)
            if isinstance(attr, click.Command):
                cmd = attr
            else:
                raise click.ClickException(f"'{cmd_name}' in {module_path} is not a click command")
        else:
            # Look for a command with the same name
            cmd = None
            for attr_name in dir(module):
                attr = getattr(module, attr_name)
                if isinstance(attr, click.Command) and attr.name == cmd_name:
                    cmd = attr
                    break
            
            if cmd is None:
                raise click.ClickException(f"Could not find command '{cmd_name}' in {module_path}")
        
        self.add_command(cmd)
        return cmd


# Define lazy subcommands mapping
LAZY_SUBCOMMANDS = {
    "signup": "tradelight.cli.auth",
    "login": "tradelight.cli.auth",
    "logout": "tradelight.cli.auth",
    "whoami": "tradelight.cli.auth",
    "log": "tradelight.cli.log",
    "show": "tradelight.cli.log",
    "dashboard": "tradelight.cli.dashboard",
    "calendar": "tradelight.cli.dashboard",
    "recent": "tradelight.cli.dashboard",
    "stats": "tradelight.cli.dashboard",
    "setup": "tradelight.cli.setups",
    "settings": "tradelight.cli.settings",
}


CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


@click.group(cls=LazyGroup, lazy_subcommands=LAZY_SUBCOMMANDS, context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="tradelight")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Show debug logging.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """TradeLight - a personal trading journal.
    
    Log each trading day (instrument, P&L, chart screenshot, session
    notes), then review it on a P&L calendar with recent trades,
    statistics and a logging streak goal.
    
    \b
    Quick Start:
      tradelight signup                       # Create a local account
      tradelight log --points 5 --contracts 2 # Log today
      tradelight dashboard                    # Calendar, trades and stats
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )

    from tradelight.config import get_settings_manager

    manager = get_settings_manager()
    apply_theme(manager.get())
    ctx.call_on_close(manager.subscribe(apply_theme))

    # Ensure context object exists for passing data between commands
    ctx.ensure_object(dict)


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
