"""Unit tests for AuthService."""

import pytest

from ticketapp.core.store import MemoryStore, StorageKeys
from ticketapp.services.auth import SEED_EMAIL, SEED_PASSWORD, AuthService
from ticketapp.services.models import ErrorKind, Session, User


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def auth(store):
    return AuthService(store)


def stored_emails(store):
    return [u["email"] for u in store.read(StorageKeys.USERS, [])]


class TestEnsureSeedAccount:
    """Test seed account bootstrap."""

    def test_seeds_fresh_environment(self, auth, store):
        """Should add the seed account to an empty user list."""
        auth.ensure_seed_account()
        assert store.read(StorageKeys.USERS) == [
            {"email": SEED_EMAIL, "password": SEED_PASSWORD}
        ]

    def test_is_idempotent(self, auth, store):
        """Should not duplicate the seed account."""
        auth.ensure_seed_account()
        auth.ensure_seed_account()
        assert stored_emails(store) == [SEED_EMAIL]

    def test_case_insensitive_email_match(self, store):
        """An upper-cased seed email with the right password counts as present."""
        store.write(
            StorageKeys.USERS, [{"email": SEED_EMAIL.upper(), "password": SEED_PASSWORD}]
        )
        AuthService(store).ensure_seed_account()
        assert stored_emails(store) == [SEED_EMAIL.upper()]

    def test_wrong_password_does_not_count(self, store):
        """Seed email with a different password still gets the seed appended."""
        store.write(StorageKeys.USERS, [{"email": SEED_EMAIL, "password": "changed"}])
        AuthService(store).ensure_seed_account()
        assert stored_emails(store) == [SEED_EMAIL, SEED_EMAIL]

    def test_custom_seed_account(self, store):
        AuthService(store, "qa@example.test", "qa-pass").ensure_seed_account()
        assert stored_emails(store) == ["qa@example.test"]

    def test_non_list_users_document_is_replaced(self, store):
        store.write(StorageKeys.USERS, {"not": "a list"})
        AuthService(store).ensure_seed_account()
        assert stored_emails(store) == [SEED_EMAIL]


class TestSignup:
    """Test AuthService.signup."""

    def test_success_creates_user_and_session(self, auth, store):
        result = auth.signup("new@example.test", "secret1")

        assert result.ok
        assert result.value == User("new@example.test", "secret1")
        assert stored_emails(store) == [SEED_EMAIL, "new@example.test"]
        assert auth.get_session() == Session("new@example.test")

    @pytest.mark.parametrize(
        "email,password,fields",
        [
            ("", "secret1", {"email": "Required"}),
            ("a@b.test", "", {"password": "Required"}),
            ("", "", {"email": "Required", "password": "Required"}),
        ],
    )
    def test_required_fields(self, auth, email, password, fields):
        result = auth.signup(email, password)

        assert not result.ok
        assert result.error.kind is ErrorKind.VALIDATION_ERROR
        assert result.error.message == "Email and password are required."
        assert result.error.fields == fields

    def test_short_password(self, auth):
        result = auth.signup("a@b.test", "12345")

        assert result.error.kind is ErrorKind.VALIDATION_ERROR
        assert result.error.fields == {"password": "Too short"}

    def test_six_character_password_accepted(self, auth):
        assert auth.signup("a@b.test", "123456").ok

    def test_duplicate_email_any_case(self, auth, store):
        """Should reject an email already registered in another case."""
        auth.signup("dup@example.test", "secret1")
        auth.logout()

        result = auth.signup("DUP@Example.TEST", "secret2")

        assert result.error.kind is ErrorKind.VALIDATION_ERROR
        assert result.error.fields == {"email": "Already in use"}
        assert stored_emails(store).count("dup@example.test") == 1
        assert len(stored_emails(store)) == 2
        assert auth.get_session() is None

    def test_seed_email_is_taken(self, auth):
        result = auth.signup(SEED_EMAIL, "another1")
        assert result.error.fields == {"email": "Already in use"}

    def test_failed_signup_does_not_create_session(self, auth, store):
        auth.signup("a@b.test", "123")
        assert StorageKeys.SESSION not in store


class TestLogin:
    """Test AuthService.login."""

    def test_seed_login_in_fresh_environment(self, auth):
        """The seed account works without prior state."""
        result = auth.login("test@ticketapp.test", "password123")

        assert result.ok
        assert auth.get_session() == Session("test@ticketapp.test")

    def test_email_is_case_insensitive(self, auth):
        """Should match any case and store the registered email in the session."""
        auth.signup("Mixed@Example.test", "secret1")
        auth.logout()

        result = auth.login("mixed@example.TEST", "secret1")

        assert result.ok
        assert result.value.email == "Mixed@Example.test"
        assert auth.get_session() == Session("Mixed@Example.test")

    @pytest.mark.parametrize(
        "email,password",
        [
            ("nobody@example.test", "password123"),
            ("test@ticketapp.test", "wrong-password"),
            ("test@ticketapp.test", "PASSWORD123"),
        ],
    )
    def test_bad_credentials_do_not_disclose_which_field(self, auth, store, email, password):
        """Unknown email and wrong password fail identically."""
        result = auth.login(email, password)

        assert not result.ok
        assert result.error.kind is ErrorKind.AUTH_ERROR
        assert result.error.message == "Invalid email or password."
        assert result.error.fields == {
            "email": "Invalid credentials",
            "password": "Invalid credentials",
        }
        assert StorageKeys.SESSION not in store

    def test_required_fields(self, auth):
        result = auth.login("", "")

        assert result.error.kind is ErrorKind.VALIDATION_ERROR
        assert result.error.fields == {"email": "Required", "password": "Required"}

    def test_login_seeds_before_checking(self, auth, store):
        auth.login("", "")
        assert stored_emails(store) == [SEED_EMAIL]


class TestSession:
    """Test logout and get_session."""

    def test_logout_clears_session(self, auth):
        auth.login(SEED_EMAIL, SEED_PASSWORD)
        auth.logout()
        assert auth.get_session() is None

    def test_logout_without_session(self, auth):
        auth.logout()
        assert auth.get_session() is None

    def test_invalid_session_shape(self, auth, store):
        store.write(StorageKeys.SESSION, {"user": "someone"})
        assert auth.get_session() is None

    def test_malformed_session_document(self, auth, store):
        store.write_raw(StorageKeys.SESSION, "{broken")
        assert auth.get_session() is None


class TestForeignUserRecords:
    """Test that account writes keep stored user records as they are."""

    def test_signup_preserves_unrecognized_records(self, auth, store):
        legacy = [
            {"email": "old@example.test"},
            {"email": "x@example.test", "password": "pw1234", "role": "admin"},
        ]
        store.write(StorageKeys.USERS, legacy)

        assert auth.signup("new@example.test", "secret1").ok

        raw = store.read(StorageKeys.USERS)
        assert raw[:2] == legacy
        assert [u["email"] for u in raw[2:]] == [SEED_EMAIL, "new@example.test"]
