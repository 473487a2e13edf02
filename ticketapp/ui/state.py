"""Explicit application state owned by the coordinator."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ticketapp.services.models import Session, Ticket, TicketStatus
from ticketapp.ui.forms import DeleteDialog, TicketEditor
from ticketapp.ui.router import Page


@dataclass(frozen=True)
class DashboardStats:
    """Ticket counts shown on the dashboard."""

    open: int = 0
    in_progress: int = 0
    closed: int = 0

    @property
    def total(self) -> int:
        return self.open + self.in_progress + self.closed


@dataclass
class AppState:
    """Everything a rendering layer needs to draw the current screen.

    Attributes:
        current_user: Signed-in session, or None
        page: Page currently shown
        tickets: In-memory ticket cache for the active page
        load_error: Message shown when the ticket list could not be loaded
        editor: Ticket editor state machine
        delete_dialog: Delete confirmation state machine
    """

    current_user: Optional[Session] = None
    page: Page = Page.LANDING
    tickets: list[Ticket] = field(default_factory=list)
    load_error: Optional[str] = None
    editor: TicketEditor = field(default_factory=TicketEditor)
    delete_dialog: DeleteDialog = field(default_factory=DeleteDialog)

    def find_ticket(self, ticket_id: str) -> Optional[Ticket]:
        return next((t for t in self.tickets if t.id == ticket_id), None)

    def stats(self) -> DashboardStats:
        counts = {status: 0 for status in TicketStatus}
        for ticket in self.tickets:
            counts[ticket.status] += 1
        return DashboardStats(
            open=counts[TicketStatus.OPEN],
            in_progress=counts[TicketStatus.IN_PROGRESS],
            closed=counts[TicketStatus.CLOSED],
        )
