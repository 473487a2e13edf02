"""Data models and result types shared by the auth and ticket services.

Every service call returns a ``Result``: either a success carrying a value,
or a failure carrying a ``ServiceError`` tagged with an ``ErrorKind``.
Callers branch on ``result.ok`` instead of catching exceptions.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, Optional, TypeVar

T = TypeVar("T")

MAX_DESCRIPTION_LENGTH = 500
MIN_PASSWORD_LENGTH = 6


class TicketStatus(str, Enum):
    """Ticket lifecycle states."""

    OPEN = "open"
    IN_PROGRESS = "in_progress"
    CLOSED = "closed"

    @classmethod
    def values(cls) -> list[str]:
        return [status.value for status in cls]


class ErrorKind(str, Enum):
    """Machine-readable failure categories."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    AUTH_ERROR = "AUTH_ERROR"
    NETWORK_ERROR = "NETWORK_ERROR"

    @property
    def transient(self) -> bool:
        """Whether retrying the same call unchanged may succeed."""
        return self is ErrorKind.NETWORK_ERROR


@dataclass(frozen=True)
class ServiceError:
    """Structured failure returned by a service call.

    Attributes:
        kind: Failure category
        message: Human-readable summary for a top-level error slot
        fields: Per-field messages keyed by form field name
    """

    kind: ErrorKind
    message: str
    fields: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class Result(Generic[T]):
    """Tagged outcome of a service operation."""

    ok: bool
    value: Optional[T] = None
    error: Optional[ServiceError] = None

    @classmethod
    def success(cls, value: Optional[T] = None) -> Result[T]:
        return cls(ok=True, value=value)

    @classmethod
    def failure(
        cls,
        kind: ErrorKind,
        message: str,
        fields: Optional[dict[str, str]] = None,
    ) -> Result[T]:
        return cls(ok=False, error=ServiceError(kind, message, dict(fields or {})))


@dataclass(frozen=True)
class User:
    """Registered account. The email is the case-insensitive unique key."""

    email: str
    password: str

    def matches_email(self, email: str) -> bool:
        return self.email.lower() == email.lower()

    def to_dict(self) -> dict[str, str]:
        return {"email": self.email, "password": self.password}

    @classmethod
    def from_dict(cls, data: Any) -> Optional[User]:
        if not isinstance(data, dict):
            return None
        email = data.get("email")
        password = data.get("password")
        if not isinstance(email, str) or not isinstance(password, str):
            return None
        return cls(email=email, password=password)


@dataclass(frozen=True)
class Session:
    """Proof that a user is signed in."""

    email: str

    def to_dict(self) -> dict[str, str]:
        return {"email": self.email}

    @classmethod
    def from_dict(cls, data: Any) -> Optional[Session]:
        if not isinstance(data, dict):
            return None
        email = data.get("email")
        if not isinstance(email, str) or not email:
            return None
        return cls(email=email)


@dataclass
class Ticket:
    """Support ticket.

    ``id`` and ``created_at`` are assigned once at creation. Timestamps are
    ISO-8601 strings in UTC.
    """

    id: str
    title: str
    description: str
    status: TicketStatus
    created_at: str
    updated_at: str

    def to_dict(self) -> dict[str, str]:
        """Serialize using the persisted (camelCase) field names."""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "status": self.status.value,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: Any) -> Optional[Ticket]:
        """Deserialize a stored record, or None when the record is malformed."""
        if not isinstance(data, dict):
            return None
        try:
            return cls(
                id=str(data["id"]),
                title=str(data["title"]),
                description=str(data.get("description") or ""),
                status=TicketStatus(data["status"]),
                created_at=str(data["createdAt"]),
                updated_at=str(data.get("updatedAt") or data["createdAt"]),
            )
        except (KeyError, ValueError):
            return None
