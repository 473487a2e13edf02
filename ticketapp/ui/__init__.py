"""Framework-agnostic application layer: routing, forms and optimistic updates."""

from ticketapp.ui.coordinator import AppCoordinator
from ticketapp.ui.forms import DeleteDialog, EditorMode, InvalidTransitionError, TicketEditor
from ticketapp.ui.optimistic import run_optimistic
from ticketapp.ui.router import Page, Router, SessionGuard, parse_route
from ticketapp.ui.state import AppState, DashboardStats

__all__ = [
    "AppCoordinator",
    "AppState",
    "DashboardStats",
    "DeleteDialog",
    "EditorMode",
    "InvalidTransitionError",
    "Page",
    "Router",
    "SessionGuard",
    "TicketEditor",
    "parse_route",
    "run_optimistic",
]
