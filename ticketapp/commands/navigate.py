"""Open command: navigate to a path and render the resulting page."""

import typer
from rich.console import Console

from ticketapp.commands.common import load_context
from ticketapp.commands.render import render_page

console = Console()


def command(
    path: str = typer.Argument("/", help="Path to open, e.g. /dashboard or #/tickets"),
):
    """Open a page, redirecting to login when the page needs a session."""
    coordinator = load_context(console).coordinator()
    coordinator.navigate(path)
    render_page(console, coordinator.state)
