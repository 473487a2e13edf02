"""Hash-style router with a session guard.

The router maps a location such as ``#/tickets?x=1`` to one of a fixed set of
pages. Before a page is entered the ``SessionGuard`` checks it; protected
pages without a session are rewritten to the login page.

The guard follows the gate pattern: ``check()`` validates a transition and
returns a ``GuardResult`` without side effects. The router performs the side
effect (the assertive notification) after a failed check.

The guard runs on every navigation. Session state can change between
navigations, so results are never cached.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol

from ticketapp.core.notifications import Notifier
from ticketapp.services.models import Session

logger = logging.getLogger(__name__)

MSG_SESSION_EXPIRED = "Your session has expired. Please log in again."


class Page(str, Enum):
    """Pages the application can show."""

    LANDING = "landing"
    LOGIN = "login"
    SIGNUP = "signup"
    DASHBOARD = "dashboard"
    TICKETS = "tickets"

    @property
    def protected(self) -> bool:
        """Whether the page requires a session."""
        return self in (Page.DASHBOARD, Page.TICKETS)

    @property
    def loads_tickets(self) -> bool:
        """Whether entering the page triggers a ticket-list load."""
        return self in (Page.DASHBOARD, Page.TICKETS)

    @property
    def path(self) -> str:
        return "/" if self is Page.LANDING else f"/{self.value}"


def parse_route(location: Optional[str]) -> Page:
    """Resolve a location to a page.

    Accepts "#/tickets", "/tickets", "tickets" and ignores any query string.
    Empty or unknown paths map to the landing page.
    """
    path = (location or "").removeprefix("#").split("?")[0].removeprefix("/")
    if not path:
        return Page.LANDING
    try:
        return Page(path)
    except ValueError:
        return Page.LANDING


@dataclass(frozen=True)
class GuardResult:
    """Result of a guard check.

    Attributes:
        passed: True when the requested page may be shown
        page: Page to show (the redirect target when not passed)
        reason: Message explaining a redirect
    """

    passed: bool
    page: Page
    reason: Optional[str] = None


class RouteGuard(Protocol):
    """Interface for checks run before a page is entered."""

    def check(self, page: Page, session: Optional[Session]) -> GuardResult:
        ...


class SessionGuard:
    """Guard redirecting protected pages to login when signed out."""

    redirect_to = Page.LOGIN

    def check(self, page: Page, session: Optional[Session]) -> GuardResult:
        if page.protected and session is None:
            return GuardResult(
                passed=False, page=self.redirect_to, reason=MSG_SESSION_EXPIRED
            )
        return GuardResult(passed=True, page=page)


class Router:
    """Resolves navigation events to pages, running guards each time."""

    def __init__(self, notifier: Notifier, guards: Optional[list[RouteGuard]] = None):
        self.notifier = notifier
        self.guards: list[RouteGuard] = guards if guards is not None else [SessionGuard()]

    def resolve(self, location: Optional[str], session: Optional[Session]) -> Page:
        """Parse location and apply guards.

        Emits one assertive notification per redirect.

        Args:
            location: Navigable path (hash-style or plain)
            session: Current session, or None when signed out

        Returns:
            Page to show
        """
        page = parse_route(location)

        for guard in self.guards:
            result = guard.check(page, session)
            if not result.passed:
                logger.info(f"Redirecting {page.value} -> {result.page.value}")
                if result.reason:
                    self.notifier.assertive(result.reason)
                page = result.page

        return page
