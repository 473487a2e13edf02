"""Helpers shared by the command implementations."""

import typer
from rich.console import Console

from ticketapp.core.config import ConfigError
from ticketapp.core.context import AppContext


def load_context(console: Console) -> AppContext:
    """Build the runtime context, exiting with code 1 on bad configuration."""
    try:
        return AppContext(console=console)
    except ConfigError as e:
        console.print(f"[red]ERROR:[/red] {e}")
        raise typer.Exit(code=1) from e
