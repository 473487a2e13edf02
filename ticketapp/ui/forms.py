"""State machines for the ticket editor and the delete confirmation dialog.

Editor transitions::

    closed --open_for_create--> create
    closed --open_for_edit----> edit
    closed --open_for_view----> view (read-only)
    create/edit --submit ok--> closed
    create/edit --submit failed--> (unchanged, errors populated)
    any --cancel--> closed

Dialog transitions::

    closed --request(ticket)--> open(target)
    open --take_target / cancel / escape--> closed
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from ticketapp.services.models import Result, Ticket, TicketStatus
from ticketapp.services.tickets import TicketService

logger = logging.getLogger(__name__)


class InvalidTransitionError(Exception):
    """Raised when a state machine is driven through a disallowed transition."""


class EditorMode(str, Enum):
    """Ticket editor states."""

    CLOSED = "closed"
    CREATE = "create"
    EDIT = "edit"
    VIEW = "view"


_HEADINGS = {
    EditorMode.CREATE: ("New ticket", "Describe the issue so it can be resolved.", "Create ticket"),
    EditorMode.EDIT: ("Edit ticket", "Update the details and status.", "Save changes"),
    EditorMode.VIEW: ("View ticket", "Ticket details (read-only).", "Close"),
}


@dataclass
class TicketEditor:
    """Create/edit/view form for a single ticket."""

    mode: EditorMode = EditorMode.CLOSED
    ticket_id: Optional[str] = None
    title: str = ""
    description: str = ""
    status: str = TicketStatus.OPEN.value
    field_errors: dict[str, str] = field(default_factory=dict)
    top_error: Optional[str] = None

    @property
    def is_open(self) -> bool:
        return self.mode is not EditorMode.CLOSED

    @property
    def can_submit(self) -> bool:
        return self.mode in (EditorMode.CREATE, EditorMode.EDIT)

    @property
    def heading(self) -> str:
        return _HEADINGS[self.mode][0] if self.is_open else ""

    @property
    def subheading(self) -> str:
        return _HEADINGS[self.mode][1] if self.is_open else ""

    @property
    def submit_label(self) -> str:
        return _HEADINGS[self.mode][2] if self.is_open else ""

    def clear_errors(self) -> None:
        self.field_errors = {}
        self.top_error = None

    def open_for_create(self) -> None:
        self.clear_errors()
        self.mode = EditorMode.CREATE
        self.ticket_id = None
        self.title = ""
        self.description = ""
        self.status = TicketStatus.OPEN.value

    def open_for_edit(self, ticket: Ticket) -> None:
        self._populate(ticket, EditorMode.EDIT)

    def open_for_view(self, ticket: Ticket) -> None:
        self._populate(ticket, EditorMode.VIEW)

    def _populate(self, ticket: Ticket, mode: EditorMode) -> None:
        self.clear_errors()
        self.mode = mode
        self.ticket_id = ticket.id
        self.title = ticket.title or ""
        self.description = ticket.description or ""
        self.status = ticket.status.value

    def set_fields(
        self,
        title: Optional[str] = None,
        description: Optional[str] = None,
        status: Optional[str] = None,
    ) -> None:
        """Change form values; only allowed while the form is editable."""
        if not self.can_submit:
            raise InvalidTransitionError(f"Cannot edit fields in {self.mode.value} mode")
        if title is not None:
            self.title = title
        if description is not None:
            self.description = description
        if status is not None:
            self.status = status

    def submit(self, service: TicketService) -> Result:
        """Create or update the ticket from the current form values.

        On failure the form stays open with its error slots populated.

        Raises:
            InvalidTransitionError: If the form is closed or read-only
        """
        if not self.can_submit:
            raise InvalidTransitionError(f"Cannot submit from {self.mode.value} mode")

        self.clear_errors()
        if self.mode is EditorMode.CREATE:
            result = service.create(self.title, self.description, self.status)
        else:
            result = service.update(
                self.ticket_id, self.title, self.description, self.status
            )

        if not result.ok:
            self.top_error = result.error.message
            self.field_errors = dict(result.error.fields)
            logger.debug(f"Ticket form rejected: {result.error.message}")
            return result

        self.cancel()
        return result

    def cancel(self) -> None:
        self.mode = EditorMode.CLOSED
        self.ticket_id = None


@dataclass
class DeleteDialog:
    """Confirmation dialog guarding ticket deletion.

    While open, focus leaving the dialog is sent back to ``focus_target``.
    """

    target_id: Optional[str] = None
    target_title: Optional[str] = None

    focus_target = "confirm"
    controls = frozenset({"confirm", "cancel"})

    @property
    def is_open(self) -> bool:
        return self.target_id is not None

    @property
    def prompt(self) -> str:
        if not self.is_open:
            return ""
        return f'"{self.target_title}" will be permanently removed.'

    def request(self, ticket: Ticket) -> None:
        """Open the dialog for ticket.

        Raises:
            InvalidTransitionError: If another deletion is awaiting confirmation
        """
        if self.is_open:
            raise InvalidTransitionError(
                f"Delete already pending for ticket {self.target_id}"
            )
        self.target_id = ticket.id
        self.target_title = ticket.title

    def focus_for(self, element: str) -> str:
        """Where focus should land when it moves to element."""
        if self.is_open and element not in self.controls:
            return self.focus_target
        return element

    def take_target(self) -> Optional[str]:
        """Close the dialog and return the id it was confirming."""
        target = self.target_id
        self.cancel()
        return target

    def cancel(self) -> None:
        self.target_id = None
        self.target_title = None

    def escape(self) -> None:
        """Escape key while open closes without deleting."""
        if self.is_open:
            self.cancel()
