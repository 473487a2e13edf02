"""Signup, login, logout and whoami command implementations."""

import typer
from rich.console import Console

from ticketapp.commands.common import load_context
from ticketapp.commands.render import render_error

console = Console()


def signup_command(
    email: str = typer.Argument(..., help="Email for the new account"),
    password: str = typer.Option(
        ..., "--password", "-p", prompt=True, hide_input=True, help="Password (min 6 characters)"
    ),
):
    """Create an account and sign in."""
    coordinator = load_context(console).coordinator()
    result = coordinator.submit_signup(email, password)

    if not result.ok:
        render_error(console, result.error)
        raise typer.Exit(code=1)

    console.print(f"[green]✓[/green] Signed in as [bold]{result.value.email}[/bold]")


def login_command(
    email: str = typer.Argument(..., help="Account email"),
    password: str = typer.Option(
        ..., "--password", "-p", prompt=True, hide_input=True, help="Account password"
    ),
):
    """Sign in with an existing account."""
    coordinator = load_context(console).coordinator()
    result = coordinator.submit_login(email, password)

    if not result.ok:
        render_error(console, result.error)
        raise typer.Exit(code=1)

    console.print(f"[green]✓[/green] Signed in as [bold]{result.value.email}[/bold]")


def logout_command():
    """Sign out of the current session."""
    coordinator = load_context(console).coordinator()
    coordinator.logout()


def whoami_command():
    """Show the signed-in account."""
    session = load_context(console).auth.get_session()
    if session is None:
        console.print("[yellow]Not signed in[/yellow]")
        raise typer.Exit(code=1)
    console.print(session.email)
