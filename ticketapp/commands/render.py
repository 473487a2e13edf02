"""Rich rendering of application state for the terminal."""

from datetime import datetime
from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ticketapp.services.models import ServiceError, Ticket, TicketStatus
from ticketapp.ui.forms import TicketEditor
from ticketapp.ui.router import Page
from ticketapp.ui.state import AppState

STATUS_STYLES = {
    TicketStatus.OPEN: "green",
    TicketStatus.IN_PROGRESS: "yellow",
    TicketStatus.CLOSED: "dim",
}


def format_date(timestamp: Optional[str]) -> str:
    """Format an ISO timestamp as e.g. 'Mar 4, 2025'."""
    if not timestamp:
        return "-"
    try:
        moment = datetime.fromisoformat(timestamp.replace("Z", "+00:00"))
    except ValueError:
        return "-"
    return f"{moment:%b} {moment.day}, {moment.year}"


def status_badge(status: TicketStatus) -> str:
    style = STATUS_STYLES.get(status, "white")
    return f"[{style}]{status.value}[/{style}]"


def render_error(console: Console, error: ServiceError) -> None:
    """Print a top-level error followed by any field messages."""
    console.print(f"[red]ERROR:[/red] {error.message}")
    for name, message in error.fields.items():
        console.print(f"  [yellow]{name}:[/yellow] {message}")


def ticket_table(tickets: list[Ticket]) -> Table:
    table = Table(show_header=True, header_style="bold")
    table.add_column("ID", style="dim", overflow="fold")
    table.add_column("Title", no_wrap=True)
    table.add_column("Status", no_wrap=True)
    table.add_column("Created")

    for ticket in tickets:
        table.add_row(
            ticket.id,
            ticket.title or "Untitled ticket",
            status_badge(ticket.status),
            format_date(ticket.created_at),
        )
    return table


def stats_table(state: AppState) -> Table:
    stats = state.stats()
    table = Table(show_header=True, header_style="bold")
    table.add_column("Open", justify="right")
    table.add_column("In Progress", justify="right")
    table.add_column("Closed", justify="right")
    table.add_column("Total", justify="right")
    table.add_row(
        str(stats.open), str(stats.in_progress), str(stats.closed), str(stats.total)
    )
    return table


def render_editor(console: Console, editor: TicketEditor) -> None:
    """Show the editor's current values in a panel."""
    body = (
        f"[dim]{editor.subheading}[/dim]\n\n"
        f"[bold]{editor.title}[/bold]\n"
        f"Status: {editor.status}\n\n"
        f"{editor.description or 'No description provided.'}"
    )
    console.print(Panel(body, title=editor.heading, subtitle=editor.ticket_id))


def render_page(console: Console, state: AppState) -> None:
    """Draw the page the coordinator resolved."""
    if state.current_user:
        console.print(f"[dim]Signed in as {state.current_user.email}[/dim]")

    if state.page is Page.DASHBOARD:
        console.print("\n[bold]Dashboard[/bold]")
        if state.load_error:
            console.print(f"[red]{state.load_error}[/red]")
        else:
            console.print(stats_table(state))
    elif state.page is Page.TICKETS:
        console.print("\n[bold]Tickets[/bold]")
        if state.load_error:
            console.print(f"[red]{state.load_error}[/red]")
            console.print("[yellow]Hint:[/yellow] Run the command again to retry")
        elif not state.tickets:
            console.print("[dim]No tickets yet.[/dim]")
        else:
            console.print(ticket_table(state.tickets))
    elif state.page is Page.LOGIN:
        console.print("\nRun [bold]ticketapp login EMAIL[/bold] to sign in.")
    elif state.page is Page.SIGNUP:
        console.print("\nRun [bold]ticketapp signup EMAIL[/bold] to create an account.")
    else:
        console.print("\n[bold]Ticketapp[/bold] - track and resolve support tickets.")
        if not state.current_user:
            console.print("Run [bold]ticketapp login EMAIL[/bold] or [bold]ticketapp signup EMAIL[/bold].")
