"""Ticket command group implementation.

Every command first navigates to the tickets page, so the session guard
applies: when signed out, the guard redirects to login and the command
exits with code 1.
"""

from pathlib import Path
from typing import Optional

import typer
import yaml
from rich.console import Console

from ticketapp.commands.common import load_context
from ticketapp.commands.render import render_editor, render_error, ticket_table
from ticketapp.services.models import TicketStatus
from ticketapp.ui.coordinator import AppCoordinator
from ticketapp.ui.router import Page

console = Console()

app = typer.Typer(help="List, create, update and delete tickets", no_args_is_help=True)


def _enter_tickets_page() -> AppCoordinator:
    """Navigate to the tickets page, exiting when guarded or unavailable."""
    coordinator = load_context(console).coordinator()
    page = coordinator.navigate("/tickets")

    if page is not Page.TICKETS:
        console.print("[yellow]Hint:[/yellow] Run [bold]ticketapp login EMAIL[/bold] first")
        raise typer.Exit(code=1)

    if coordinator.state.load_error:
        console.print(f"[red]ERROR:[/red] {coordinator.state.load_error}")
        raise typer.Exit(code=1)

    return coordinator


def _status_values() -> str:
    return ", ".join(TicketStatus.values())


@app.command("list")
def list_command(
    status: Optional[str] = typer.Option(
        None, "--status", "-s", help=f"Only show tickets with this status ({_status_values()})"
    ),
):
    """List tickets, newest first."""
    coordinator = _enter_tickets_page()
    tickets = coordinator.state.tickets
    if status:
        tickets = [t for t in tickets if t.status.value == status]

    if not tickets:
        console.print("[dim]No tickets yet.[/dim]")
        return

    console.print(ticket_table(tickets))


@app.command("show")
def show_command(ticket_id: str = typer.Argument(..., help="Ticket ID")):
    """Show one ticket read-only."""
    coordinator = _enter_tickets_page()
    if not coordinator.open_view(ticket_id):
        console.print(f"[red]ERROR:[/red] Ticket not found: {ticket_id}")
        raise typer.Exit(code=1)

    render_editor(console, coordinator.state.editor)
    coordinator.cancel_editor()


@app.command("create")
def create_command(
    title: str = typer.Option(..., "--title", "-t", prompt=True, help="Ticket title"),
    description: str = typer.Option("", "--description", "-d", help="Details (max 500 chars)"),
    status: str = typer.Option(
        TicketStatus.OPEN.value, "--status", "-s", help=f"One of {_status_values()}"
    ),
):
    """Create a ticket."""
    coordinator = _enter_tickets_page()
    coordinator.open_create()
    coordinator.state.editor.set_fields(title=title, description=description, status=status)

    result = coordinator.submit_ticket()
    if not result.ok:
        render_error(console, result.error)
        raise typer.Exit(code=1)

    console.print(f"[green]✓[/green] Created ticket [bold]{result.value.id}[/bold]")


@app.command("update")
def update_command(
    ticket_id: str = typer.Argument(..., help="Ticket ID"),
    title: Optional[str] = typer.Option(None, "--title", "-t", help="New title"),
    description: Optional[str] = typer.Option(None, "--description", "-d", help="New description"),
    status: Optional[str] = typer.Option(None, "--status", "-s", help=f"One of {_status_values()}"),
):
    """Update a ticket's title, description or status."""
    coordinator = _enter_tickets_page()
    if not coordinator.open_edit(ticket_id):
        console.print(f"[red]ERROR:[/red] Ticket not found: {ticket_id}")
        raise typer.Exit(code=1)

    coordinator.state.editor.set_fields(title=title, description=description, status=status)

    result = coordinator.submit_ticket()
    if not result.ok:
        render_error(console, result.error)
        raise typer.Exit(code=1)

    console.print(f"[green]✓[/green] Updated ticket [bold]{ticket_id}[/bold]")


@app.command("delete")
def delete_command(
    ticket_id: str = typer.Argument(..., help="Ticket ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt"),
):
    """Delete a ticket after confirmation."""
    coordinator = _enter_tickets_page()
    if not coordinator.request_delete(ticket_id):
        console.print(f"[red]ERROR:[/red] Ticket not found: {ticket_id}")
        raise typer.Exit(code=1)

    dialog = coordinator.state.delete_dialog
    if not yes and not typer.confirm(f"{dialog.prompt} Delete?", default=False):
        coordinator.cancel_delete()
        console.print("[dim]Cancelled[/dim]")
        return

    result = coordinator.confirm_delete()
    if not result.ok:
        raise typer.Exit(code=1)


@app.command("import")
def import_command(
    ticket_file: Path = typer.Argument(..., help="YAML file with a top-level 'tickets' list"),
):
    """Create tickets in bulk from a YAML file."""
    if not ticket_file.is_file():
        console.print(f"[red]ERROR:[/red] File not found: {ticket_file}")
        raise typer.Exit(code=1)

    try:
        with open(ticket_file, "r") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        console.print(f"[red]ERROR:[/red] Invalid YAML: {e}")
        raise typer.Exit(code=1) from e

    entries = data.get("tickets") if isinstance(data, dict) else None
    if not isinstance(entries, list):
        console.print("[red]ERROR:[/red] Expected a top-level 'tickets' list")
        raise typer.Exit(code=1)

    coordinator = _enter_tickets_page()
    created = 0
    failed = 0

    for index, entry in enumerate(entries, start=1):
        entry = entry if isinstance(entry, dict) else {}
        coordinator.open_create()
        coordinator.state.editor.set_fields(
            title=str(entry.get("title") or ""),
            description=str(entry.get("description") or ""),
            status=str(entry.get("status") or TicketStatus.OPEN.value),
        )
        result = coordinator.submit_ticket()
        if result.ok:
            created += 1
        else:
            failed += 1
            console.print(f"[yellow]Entry {index}:[/yellow] {result.error.message}")
            coordinator.cancel_editor()

    console.print(f"\n  ✓ Created: [green]{created}[/green]")
    if failed:
        console.print(f"  ✗ Failed: [red]{failed}[/red]")
        raise typer.Exit(code=1)
