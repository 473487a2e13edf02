"""Auth and ticket services returning tagged results."""

from ticketapp.services.auth import AuthService
from ticketapp.services.failure import AlwaysFail, FailurePolicy, NeverFail, RandomFailure
from ticketapp.services.models import (
    ErrorKind,
    Result,
    ServiceError,
    Session,
    Ticket,
    TicketStatus,
    User,
)
from ticketapp.services.tickets import TicketService, validate_ticket_fields

__all__ = [
    "AlwaysFail",
    "AuthService",
    "ErrorKind",
    "FailurePolicy",
    "NeverFail",
    "RandomFailure",
    "Result",
    "ServiceError",
    "Session",
    "Ticket",
    "TicketService",
    "TicketStatus",
    "User",
    "validate_ticket_fields",
]
