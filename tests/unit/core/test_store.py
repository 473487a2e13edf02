"""Unit tests for the key-value stores."""

import json

import pytest

from ticketapp.core.store import JsonFileStore, MemoryStore, StorageKeys


@pytest.fixture
def file_store(tmp_path):
    """File store rooted in a state directory that does not exist yet."""
    return JsonFileStore(tmp_path / "state")


class TestJsonFileStore:
    """Test JsonFileStore read/write/remove contract."""

    def test_read_missing_key_returns_fallback(self, file_store):
        """Should return the fallback when nothing was written."""
        assert file_store.read(StorageKeys.TICKETS, []) == []
        assert file_store.read(StorageKeys.SESSION) is None

    def test_write_creates_state_dir_and_file(self, file_store):
        """Should create the state directory on first write."""
        file_store.write(StorageKeys.SESSION, {"email": "a@b.test"})

        path = file_store.state_dir / "ticketapp_session.json"
        assert path.exists()
        assert json.loads(path.read_text()) == {"email": "a@b.test"}

    def test_write_replaces_prior_value(self, file_store):
        """Should replace, not merge, the stored document."""
        file_store.write("key", {"a": 1, "b": 2})
        file_store.write("key", {"c": 3})

        assert file_store.read("key") == {"c": 3}

    def test_write_leaves_no_temp_files(self, file_store):
        """Should rename the temp file into place."""
        file_store.write("key", [1, 2, 3])

        leftovers = list(file_store.state_dir.glob("*.tmp"))
        assert leftovers == []

    def test_malformed_content_returns_fallback(self, file_store):
        """Should swallow JSON errors and return the fallback."""
        file_store.state_dir.mkdir(parents=True)
        (file_store.state_dir / "ticketapp_users.json").write_text("{not json")

        assert file_store.read(StorageKeys.USERS, []) == []

    def test_undecodable_bytes_return_fallback(self, file_store):
        """Should treat content that is not UTF-8 as malformed."""
        file_store.state_dir.mkdir(parents=True)
        (file_store.state_dir / "ticketapp_session.json").write_bytes(
            b'{"email": "\xff\xfe"}'
        )

        assert file_store.read(StorageKeys.SESSION, None) is None

    def test_failed_write_removes_temp_file(self, file_store):
        """Should clean up and keep the prior document when serialization fails."""
        file_store.write("key", {"a": 1})

        with pytest.raises(TypeError):
            file_store.write("key", {"a": object()})

        assert list(file_store.state_dir.glob("*.tmp")) == []
        assert file_store.read("key") == {"a": 1}

    def test_empty_file_returns_fallback(self, file_store):
        """Should treat an empty document as missing."""
        file_store.state_dir.mkdir(parents=True)
        (file_store.state_dir / "key.json").write_text("")

        assert file_store.read("key", "fallback") == "fallback"

    def test_remove_deletes_key(self, file_store):
        """Should delete the stored document."""
        file_store.write("key", "value")
        file_store.remove("key")

        assert file_store.read("key") is None

    def test_remove_missing_key_is_noop(self, file_store):
        """Should not raise when removing an absent key."""
        file_store.remove("never-written")


class TestMemoryStore:
    """Test MemoryStore read/write/remove contract."""

    def test_initial_values(self):
        """Should serialize initial values."""
        store = MemoryStore({"key": [1, 2]})
        assert store.read("key") == [1, 2]

    def test_reads_return_copies(self):
        """Mutating a read value should not change stored state."""
        store = MemoryStore()
        store.write("key", [{"id": "1"}])

        value = store.read("key")
        value.append({"id": "2"})

        assert store.read("key") == [{"id": "1"}]

    def test_malformed_raw_returns_fallback(self):
        """Should return the fallback for unparseable text."""
        store = MemoryStore()
        store.write_raw("key", "[oops")

        assert store.read("key", []) == []

    def test_remove(self):
        """Should drop the key and tolerate repeats."""
        store = MemoryStore({"key": 1})
        store.remove("key")
        store.remove("key")

        assert "key" not in store
        assert store.read("key", 0) == 0
