"""Account and session management on top of the key-value store.

Every signup and login first guarantees the seed account exists, so a fresh
environment is always usable. Credentials are stored as given; there is no
hashing.
"""

from __future__ import annotations

import logging
from typing import Optional

from ticketapp.core.store import KeyValueStore, StorageKeys
from ticketapp.services.models import (
    MIN_PASSWORD_LENGTH,
    ErrorKind,
    Result,
    Session,
    User,
)

logger = logging.getLogger(__name__)

SEED_EMAIL = "test@ticketapp.test"
SEED_PASSWORD = "password123"


def _required_failure(email: str, password: str) -> Result[User]:
    fields = {}
    if not email:
        fields["email"] = "Required"
    if not password:
        fields["password"] = "Required"
    return Result.failure(
        ErrorKind.VALIDATION_ERROR, "Email and password are required.", fields
    )


class AuthService:
    """Signup, login, logout and session lookup.

    Attributes:
        store: Key-value store holding the users and session documents
        seed_user: Account guaranteed to exist after the first auth call
    """

    def __init__(
        self,
        store: KeyValueStore,
        seed_email: str = SEED_EMAIL,
        seed_password: str = SEED_PASSWORD,
    ):
        self.store = store
        self.seed_user = User(email=seed_email, password=seed_password)

    def _load_records(self) -> list:
        raw = self.store.read(StorageKeys.USERS, [])
        return raw if isinstance(raw, list) else []

    def _load_users(self) -> list[User]:
        users = [User.from_dict(entry) for entry in self._load_records()]
        return [user for user in users if user is not None]

    def _append_user(self, user: User) -> None:
        self.store.write(StorageKeys.USERS, [*self._load_records(), user.to_dict()])

    def ensure_seed_account(self) -> None:
        """Append the seed account unless an identical one already exists."""
        users = self._load_users()
        exists = any(
            user.matches_email(self.seed_user.email)
            and user.password == self.seed_user.password
            for user in users
        )
        if not exists:
            self._append_user(self.seed_user)
            logger.debug(f"Seeded account {self.seed_user.email}")

    def signup(self, email: str, password: str) -> Result[User]:
        """Register a new account and sign it in.

        Args:
            email: Account email (unique, case-insensitive)
            password: Password of at least six characters

        Returns:
            Result carrying the new User, or a VALIDATION_ERROR
        """
        self.ensure_seed_account()

        if not email or not password:
            return _required_failure(email, password)

        if len(password) < MIN_PASSWORD_LENGTH:
            return Result.failure(
                ErrorKind.VALIDATION_ERROR,
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters.",
                {"password": "Too short"},
            )

        users = self._load_users()
        if any(user.matches_email(email) for user in users):
            return Result.failure(
                ErrorKind.VALIDATION_ERROR,
                "That email is already registered.",
                {"email": "Already in use"},
            )

        user = User(email=email, password=password)
        self._append_user(user)
        self._start_session(user)

        logger.info(f"Registered account {email}")
        return Result.success(user)

    def login(self, email: str, password: str) -> Result[User]:
        """Sign in with an existing account.

        A mismatch never reveals whether the email is registered: both fields
        are flagged with the same message.

        Returns:
            Result carrying the stored User, or a VALIDATION_ERROR/AUTH_ERROR
        """
        self.ensure_seed_account()

        if not email or not password:
            return _required_failure(email, password)

        found = next(
            (
                user
                for user in self._load_users()
                if user.matches_email(email) and user.password == password
            ),
            None,
        )
        if found is None:
            logger.warning(f"Failed login attempt for {email}")
            return Result.failure(
                ErrorKind.AUTH_ERROR,
                "Invalid email or password.",
                {"email": "Invalid credentials", "password": "Invalid credentials"},
            )

        self._start_session(found)
        logger.info(f"Logged in as {found.email}")
        return Result.success(found)

    def logout(self) -> None:
        """Clear the session unconditionally."""
        self.store.remove(StorageKeys.SESSION)
        logger.info("Logged out")

    def get_session(self) -> Optional[Session]:
        """Return the stored session, or None if absent or malformed."""
        return Session.from_dict(self.store.read(StorageKeys.SESSION, None))

    def _start_session(self, user: User) -> None:
        self.store.write(StorageKeys.SESSION, Session(email=user.email).to_dict())
