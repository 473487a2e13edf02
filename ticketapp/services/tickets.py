"""Ticket CRUD over the key-value store.

The collection is stored newest-first as one document. ``list`` and
``delete`` consult a failure policy first to model a flaky backend;
``create`` and ``update`` only fail on invalid input.

Reads parse records into ``Ticket`` objects and skip malformed ones. Writes
work on the stored records as-is, so records this version cannot parse are
carried through untouched.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Callable, Optional

from ticketapp.core.store import KeyValueStore, StorageKeys
from ticketapp.services.failure import FailurePolicy, NeverFail
from ticketapp.services.models import (
    MAX_DESCRIPTION_LENGTH,
    ErrorKind,
    Result,
    Ticket,
    TicketStatus,
)

logger = logging.getLogger(__name__)

MSG_LOAD_ERROR = "Failed to load tickets. Please retry."
MSG_DELETE_ERROR = "Failed to delete ticket. Please retry."


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _timestamp(moment: datetime) -> str:
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _has_id(entry: object, ticket_id: str) -> bool:
    # Ids compare as strings, the same way Ticket.from_dict reads them
    return isinstance(entry, dict) and "id" in entry and str(entry["id"]) == ticket_id


def validate_ticket_fields(
    title: Optional[str], status: Optional[str], description: Optional[str]
) -> Result[None]:
    """Validate ticket input, reporting only the first violation.

    Checks run in order: title, status, description.

    Args:
        title: Ticket title, must contain non-whitespace characters
        status: One of open, in_progress, closed
        description: Optional text of at most 500 characters

    Returns:
        Success, or a VALIDATION_ERROR naming the offending field
    """
    if not title or not title.strip():
        return Result.failure(
            ErrorKind.VALIDATION_ERROR,
            "Title is required.",
            {"title": "Title is required."},
        )

    if status not in TicketStatus.values():
        return Result.failure(
            ErrorKind.VALIDATION_ERROR,
            "Status is invalid.",
            {"status": "Must be open, in_progress, or closed."},
        )

    if description and len(description) > MAX_DESCRIPTION_LENGTH:
        return Result.failure(
            ErrorKind.VALIDATION_ERROR,
            f"Description cannot exceed {MAX_DESCRIPTION_LENGTH} characters.",
            {"description": f"Too long (max {MAX_DESCRIPTION_LENGTH} chars)"},
        )

    return Result.success()


class TicketService:
    """List, create, update and delete tickets.

    Attributes:
        store: Key-value store holding the tickets document
        failure_policy: Decides when list/delete report a NETWORK_ERROR
    """

    def __init__(
        self,
        store: KeyValueStore,
        failure_policy: Optional[FailurePolicy] = None,
        clock: Callable[[], datetime] = _utc_now,
        id_factory: Callable[[], str] = lambda: str(uuid.uuid4()),
    ):
        self.store = store
        self.failure_policy = failure_policy or NeverFail()
        self.clock = clock
        self.id_factory = id_factory

    def _load_records(self) -> list:
        raw = self.store.read(StorageKeys.TICKETS, [])
        return raw if isinstance(raw, list) else []

    def _load(self) -> list[Ticket]:
        tickets = []
        for entry in self._load_records():
            ticket = Ticket.from_dict(entry)
            if ticket is None:
                logger.warning(f"Skipping malformed ticket record: {entry!r}")
                continue
            tickets.append(ticket)
        return tickets

    def list(self) -> Result[list[Ticket]]:
        """Return every stored ticket, newest first."""
        if self.failure_policy.should_fail("list"):
            logger.warning("Simulated network failure while listing tickets")
            return Result.failure(ErrorKind.NETWORK_ERROR, MSG_LOAD_ERROR)

        return Result.success(self._load())

    def get(self, ticket_id: str) -> Optional[Ticket]:
        """Look up one ticket by id, bypassing failure injection."""
        return next((t for t in self._load() if t.id == ticket_id), None)

    def create(
        self, title: str, description: Optional[str], status: str
    ) -> Result[Ticket]:
        """Validate and prepend a new ticket.

        Returns:
            Result carrying the stored Ticket, or a VALIDATION_ERROR
        """
        check = validate_ticket_fields(title, status, description)
        if not check.ok:
            return Result(ok=False, error=check.error)

        now = _timestamp(self.clock())
        ticket = Ticket(
            id=self.id_factory(),
            title=title.strip(),
            description=(description or "").strip(),
            status=TicketStatus(status),
            created_at=now,
            updated_at=now,
        )

        self.store.write(
            StorageKeys.TICKETS, [ticket.to_dict(), *self._load_records()]
        )
        logger.info(f"Created ticket {ticket.id}")
        return Result.success(ticket)

    def update(
        self,
        ticket_id: Optional[str],
        title: str,
        description: Optional[str],
        status: str,
    ) -> Result[None]:
        """Replace title, description and status of one ticket in place.

        Stored records other than the match are written back exactly as read,
        including ones ``list`` skips. An id that matches nothing changes
        nothing and still succeeds.
        """
        check = validate_ticket_fields(title, status, description)
        if not check.ok:
            return check

        if not ticket_id:
            return Result.failure(ErrorKind.VALIDATION_ERROR, "Missing ticket ID.")

        records = self._load_records()
        matched = [entry for entry in records if _has_id(entry, ticket_id)]
        if not matched:
            logger.debug(f"No ticket {ticket_id} to update")
            return Result.success()

        now = _timestamp(self.clock())
        for entry in matched:
            entry.update(
                title=title.strip(),
                description=(description or "").strip(),
                status=TicketStatus(status).value,
                updatedAt=now,
            )

        self.store.write(StorageKeys.TICKETS, records)
        logger.info(f"Updated ticket {ticket_id}")
        return Result.success()

    def delete(self, ticket_id: str) -> Result[None]:
        """Remove one ticket. Deleting an unknown id is a successful no-op."""
        if self.failure_policy.should_fail("delete"):
            logger.warning(f"Simulated network failure while deleting {ticket_id}")
            return Result.failure(ErrorKind.NETWORK_ERROR, MSG_DELETE_ERROR)

        records = self._load_records()
        kept = [entry for entry in records if not _has_id(entry, ticket_id)]
        if len(kept) == len(records):
            logger.debug(f"No ticket {ticket_id} to delete")
            return Result.success()

        self.store.write(StorageKeys.TICKETS, kept)
        logger.info(f"Deleted ticket {ticket_id}")
        return Result.success()
