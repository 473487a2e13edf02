"""Application coordinator driving routing, forms and ticket mutations.

The coordinator owns the single ``AppState`` value. Rendering layers call its
entry points in response to user events and redraw from ``state`` whenever
the render hook fires. Every entry point runs to completion synchronously.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from ticketapp.core.notifications import Notifier
from ticketapp.services.auth import AuthService
from ticketapp.services.models import (
    MIN_PASSWORD_LENGTH,
    ErrorKind,
    Result,
    Ticket,
    User,
)
from ticketapp.services.tickets import MSG_DELETE_ERROR, MSG_LOAD_ERROR, TicketService
from ticketapp.ui.forms import EditorMode, InvalidTransitionError
from ticketapp.ui.optimistic import run_optimistic
from ticketapp.ui.router import Page, Router
from ticketapp.ui.state import AppState

logger = logging.getLogger(__name__)

RenderHook = Callable[[AppState], None]


class AppCoordinator:
    """Owns application state and wires services, router and state machines.

    Attributes:
        state: Current application state
        location: Last navigated location
    """

    def __init__(
        self,
        auth: AuthService,
        tickets: TicketService,
        notifier: Notifier,
        render: Optional[RenderHook] = None,
        router: Optional[Router] = None,
    ):
        self.auth = auth
        self.tickets = tickets
        self.notifier = notifier
        self.router = router or Router(notifier)
        self._render_hook = render
        self.state = AppState()
        self.location = "/"

    def render(self) -> None:
        if self._render_hook is not None:
            self._render_hook(self.state)

    # Navigation

    def start(self) -> Page:
        """Initial load: route the current location."""
        return self.navigate(self.location)

    def navigate(self, location: str) -> Page:
        """Handle a navigation event.

        Re-reads the session, closes any open form or dialog, resolves the page
        through the router's guards and loads tickets for ticket pages.

        Args:
            location: Navigable path such as "/tickets" or "#/dashboard"

        Returns:
            Page actually shown (after any guard redirect)
        """
        self.location = location
        self._sync_session()
        self.state.editor.cancel()
        self.state.delete_dialog.cancel()

        page = self.router.resolve(location, self.state.current_user)
        self.state.page = page
        logger.debug(f"Navigated to {page.value}")

        if page.loads_tickets:
            self._load_tickets()

        self.render()
        return page

    def _sync_session(self) -> None:
        self.state.current_user = self.auth.get_session()

    def _load_tickets(self) -> Result[list[Ticket]]:
        result = self.tickets.list()
        if result.ok:
            self.state.tickets = result.value
            self.state.load_error = None
            return result

        self.state.load_error = MSG_LOAD_ERROR
        if self.state.page is Page.DASHBOARD:
            self.notifier.assertive(MSG_LOAD_ERROR)
        else:
            self.state.tickets = []
        return result

    def retry_load(self) -> Result[list[Ticket]]:
        """Reload the ticket list for the current page."""
        result = self._load_tickets()
        self.render()
        return result

    # Authentication

    def submit_login(self, email: str, password: str) -> Result[User]:
        """Handle the login form; redirects to the dashboard on success."""
        email = (email or "").strip()
        if not email or not password:
            fields = {}
            if not email:
                fields["email"] = "Email is required."
            if not password:
                fields["password"] = "Password is required."
            return Result.failure(
                ErrorKind.VALIDATION_ERROR, "Email and password are required.", fields
            )

        result = self.auth.login(email, password)
        if result.ok:
            self.notifier.polite("Logged in successfully.")
            self.navigate("/dashboard")
        return result

    def submit_signup(self, email: str, password: str) -> Result[User]:
        """Handle the signup form; redirects to the dashboard on success."""
        email = (email or "").strip()
        fields = {}
        if not email:
            fields["email"] = "Email is required."
        elif "@" not in email:
            fields["email"] = "Enter a valid email."

        if not password:
            fields["password"] = "Password is required."
        elif len(password) < MIN_PASSWORD_LENGTH:
            fields["password"] = f"Minimum {MIN_PASSWORD_LENGTH} characters."

        if fields:
            return Result.failure(
                ErrorKind.VALIDATION_ERROR, "Please correct the highlighted fields.", fields
            )

        result = self.auth.signup(email, password)
        if result.ok:
            self.notifier.polite("Account created.")
            self.navigate("/dashboard")
        return result

    def logout(self) -> Page:
        self.auth.logout()
        self.state.current_user = None
        self.notifier.polite("Signed out.")
        return self.navigate("/")

    # Ticket editor

    def open_create(self) -> None:
        self.state.editor.open_for_create()
        self.render()

    def open_edit(self, ticket_id: str) -> bool:
        ticket = self.state.find_ticket(ticket_id)
        if ticket is None:
            return False
        self.state.editor.open_for_edit(ticket)
        self.render()
        return True

    def open_view(self, ticket_id: str) -> bool:
        ticket = self.state.find_ticket(ticket_id)
        if ticket is None:
            return False
        self.state.editor.open_for_view(ticket)
        self.render()
        return True

    def cancel_editor(self) -> None:
        self.state.editor.cancel()
        self.render()

    def submit_ticket(self) -> Result:
        """Submit the editor and refresh the ticket cache on success.

        Raises:
            InvalidTransitionError: If the editor is closed or read-only
        """
        editor = self.state.editor
        created = editor.mode is EditorMode.CREATE

        result = editor.submit(self.tickets)
        if not result.ok:
            self.render()
            return result

        self.notifier.polite("Ticket created." if created else "Ticket updated.")

        refreshed = self.tickets.list()
        if refreshed.ok:
            self.state.tickets = refreshed.value
        self.render()
        return result

    # Delete confirmation

    def request_delete(self, ticket_id: str) -> bool:
        """Open the delete dialog for a cached ticket.

        Raises:
            InvalidTransitionError: If a deletion is already awaiting confirmation
        """
        ticket = self.state.find_ticket(ticket_id)
        if ticket is None:
            return False
        self.state.delete_dialog.request(ticket)
        self.render()
        return True

    def cancel_delete(self) -> None:
        self.state.delete_dialog.cancel()
        self.render()

    def escape(self) -> None:
        """Escape key: closes the delete dialog when it is open."""
        if self.state.delete_dialog.is_open:
            self.state.delete_dialog.escape()
            self.render()

    def confirm_delete(self) -> Result[None]:
        """Delete the dialog's target optimistically.

        Raises:
            InvalidTransitionError: If the dialog is not open
        """
        dialog = self.state.delete_dialog
        if not dialog.is_open:
            raise InvalidTransitionError("No ticket is awaiting delete confirmation")

        target_id = dialog.target_id

        def apply() -> None:
            self.state.tickets = [t for t in self.state.tickets if t.id != target_id]
            dialog.take_target()

        def restore(previous: list[Ticket]) -> None:
            self.state.tickets = previous

        return run_optimistic(
            snapshot=lambda: list(self.state.tickets),
            apply=apply,
            commit=lambda: self.tickets.delete(target_id),
            restore=restore,
            render=self.render,
            notifier=self.notifier,
            success_message="Ticket deleted.",
            failure_message=MSG_DELETE_ERROR,
        )
