"""Durable key-value storage for JSON-serializable documents.

Each key holds one whole document (the session, the user list or the ticket
list). There are no partial-record updates and no transactions across keys:
callers read a collection, modify it and write the whole thing back.

``read`` never raises. A missing key or malformed content yields the
caller-supplied fallback.
"""

from __future__ import annotations

import json
import logging
import tempfile
from pathlib import Path
from typing import Any, Optional, Protocol

logger = logging.getLogger(__name__)


class StorageKeys:
    """Names of the persisted documents."""

    SESSION = "ticketapp_session"
    USERS = "ticketapp_users"
    TICKETS = "ticketapp_tickets"


class KeyValueStore(Protocol):
    """Interface shared by every store implementation."""

    def read(self, key: str, fallback: Any = None) -> Any:
        ...

    def write(self, key: str, value: Any) -> None:
        ...

    def remove(self, key: str) -> None:
        ...


class JsonFileStore:
    """Store that keeps one ``<key>.json`` file per key in a state directory.

    Writes are atomic via temp file + rename, so a crash never leaves a
    half-written document behind.
    """

    def __init__(self, state_dir: Path):
        self.state_dir = Path(state_dir)

    def _path_for(self, key: str) -> Path:
        return self.state_dir / f"{key}.json"

    def read(self, key: str, fallback: Any = None) -> Any:
        """Read a document, returning fallback when missing or unreadable.

        Args:
            key: Document key
            fallback: Value returned when the key is absent or malformed

        Returns:
            Deserialized document or fallback
        """
        path = self._path_for(key)
        try:
            raw = path.read_text()
        except FileNotFoundError:
            return fallback
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Could not read {path}: {e}")
            return fallback

        if not raw:
            return fallback

        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning(f"Ignoring malformed document {key}: {e}")
            return fallback

    def write(self, key: str, value: Any) -> None:
        """Serialize value and replace whatever was stored under key."""
        self.state_dir.mkdir(parents=True, exist_ok=True)
        path = self._path_for(key)

        with tempfile.NamedTemporaryFile(
            mode="w",
            dir=self.state_dir,
            delete=False,
            suffix=".json.tmp",
        ) as f:
            temp_path = Path(f.name)
            try:
                json.dump(value, f, indent=2)
            except Exception:
                f.close()
                temp_path.unlink(missing_ok=True)
                raise

        # Rename to final location (atomic on POSIX)
        temp_path.replace(path)

        logger.debug(f"Wrote {key} to {path}")

    def remove(self, key: str) -> None:
        """Delete the document for key; no-op when absent."""
        self._path_for(key).unlink(missing_ok=True)


class MemoryStore:
    """In-process store holding serialized JSON text.

    Values are stored as text so that callers get fresh copies on every read,
    exactly as they would from the file store.
    """

    def __init__(self, initial: Optional[dict[str, Any]] = None):
        self._data: dict[str, str] = {}
        for key, value in (initial or {}).items():
            self.write(key, value)

    def read(self, key: str, fallback: Any = None) -> Any:
        raw = self._data.get(key)
        if not raw:
            return fallback
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning(f"Ignoring malformed document {key}: {e}")
            return fallback

    def write(self, key: str, value: Any) -> None:
        self._data[key] = json.dumps(value)

    def write_raw(self, key: str, raw: str) -> None:
        """Store raw text under key, bypassing serialization."""
        self._data[key] = raw

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def __contains__(self, key: str) -> bool:
        return key in self._data
