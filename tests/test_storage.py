"""Tests for session storage implementations."""

from uuid import uuid4

import pytest

from splitledger.models.expense import ExpenseSession
from splitledger.services.storage import (
    CorruptDataError,
    InMemorySessionStorage,
    JsonFileSessionStorage,
    NotFoundError,
    StorageError,
)


@pytest.fixture(params=["memory", "json"])
def storage(request, tmp_path):
    """Run the shared contract tests against both implementations."""
    if request.param == "memory":
        return InMemorySessionStorage()
    return JsonFileSessionStorage(tmp_path / "sessions.json")


class TestStorageContract:
    """Behaviour every SessionStorageInterface must have."""

    def test_add_inserts_newest_first(self, storage):
        """Test that new sessions go to the front."""
        first = ExpenseSession(title="first")
        second = ExpenseSession(title="second")
        storage.add_session(first)
        storage.add_session(second)
        assert [s.title for s in storage.list_sessions()] == ["second", "first"]

    def test_update_replaces_by_id(self, storage, make_item, alex):
        """Test that update swaps the stored snapshot."""
        session = ExpenseSession(title="Trip", participants=(alex,))
        storage.add_session(session)
        updated = session.with_item(make_item("5.00", alex, [alex]))

        storage.update_session(updated)

        assert storage.get_session(session.id) == updated

    def test_update_unknown_raises(self, storage):
        """Test that updating a session that was never saved fails."""
        with pytest.raises(NotFoundError):
            storage.update_session(ExpenseSession(title="ghost"))

    def test_delete(self, storage):
        """Test deleting by ID."""
        session = ExpenseSession(title="Trip")
        storage.add_session(session)
        assert storage.delete_session(session.id) is True
        assert storage.delete_session(session.id) is False
        assert storage.list_sessions() == []

    def test_get_missing_returns_none(self, storage):
        """Test lookup of an unknown ID."""
        assert storage.get_session(uuid4()) is None

    def test_clear_all(self, storage):
        """Test removing everything."""
        storage.add_session(ExpenseSession(title="a"))
        storage.add_session(ExpenseSession(title="b"))
        storage.clear_all()
        assert storage.list_sessions() == []

    def test_list_returns_a_copy(self, storage):
        """Test that callers cannot mutate the stored list."""
        storage.add_session(ExpenseSession(title="a"))
        storage.list_sessions().clear()
        assert len(storage.list_sessions()) == 1


class TestJsonFileStorage:
    """Behaviour specific to the JSON file implementation."""

    def test_sessions_survive_reload(self, tmp_path, make_item, people):
        """Test that a new instance reads what the old one wrote."""
        path = tmp_path / "sessions.json"
        alex = people[0]
        session = ExpenseSession(
            title="Arcade",
            participants=people,
            items=(make_item("10.00", alex, people),),
        )
        JsonFileSessionStorage(path).add_session(session)

        reloaded = JsonFileSessionStorage(path).list_sessions()

        assert reloaded == [session]

    def test_missing_file_is_empty(self, tmp_path):
        """Test that no file means no sessions."""
        assert JsonFileSessionStorage(tmp_path / "nope.json").list_sessions() == []

    def test_blank_file_is_empty(self, tmp_path):
        """Test that an empty document means no sessions."""
        path = tmp_path / "sessions.json"
        path.write_text("  \n", encoding="utf-8")
        assert JsonFileSessionStorage(path).list_sessions() == []

    def test_corrupt_file_is_reported(self, tmp_path):
        """Test that unreadable data raises instead of being wiped."""
        path = tmp_path / "sessions.json"
        path.write_text("{broken", encoding="utf-8")

        with pytest.raises(CorruptDataError):
            JsonFileSessionStorage(path).list_sessions()
        assert path.read_text(encoding="utf-8") == "{broken"

    def test_transient_write_error_is_retried(self, tmp_path, monkeypatch):
        """Test that one failed write is retried and succeeds."""
        storage = JsonFileSessionStorage(tmp_path / "sessions.json", write_attempts=3)
        real_write = storage._write_file
        calls = []

        def flaky_write(text):
            calls.append(text)
            if len(calls) == 1:
                raise OSError("disk busy")
            real_write(text)

        monkeypatch.setattr(storage, "_write_file", flaky_write)
        storage.add_session(ExpenseSession(title="Retry"))

        assert len(calls) == 2
        assert JsonFileSessionStorage(storage.path).list_sessions()[0].title == "Retry"

    def test_persistent_write_error_raises_storage_error(self, tmp_path, monkeypatch):
        """Test that exhausting the attempts surfaces a StorageError."""
        storage = JsonFileSessionStorage(tmp_path / "sessions.json", write_attempts=2)
        calls = []

        def broken_write(text):
            calls.append(text)
            raise OSError("read-only file system")

        monkeypatch.setattr(storage, "_write_file", broken_write)

        with pytest.raises(StorageError):
            storage.add_session(ExpenseSession(title="Nope"))
        assert len(calls) == 2

    def test_failed_writes_leave_sessions_unchanged(self, tmp_path, monkeypatch):
        """Test that nothing is reported as stored unless it reached the file."""
        storage = JsonFileSessionStorage(tmp_path / "sessions.json", write_attempts=1)
        kept = ExpenseSession(title="Kept")
        storage.add_session(kept)

        def broken_write(text):
            raise OSError("read-only file system")

        monkeypatch.setattr(storage, "_write_file", broken_write)

        with pytest.raises(StorageError):
            storage.add_session(ExpenseSession(title="Lost"))
        with pytest.raises(StorageError):
            storage.update_session(kept.model_copy(update={"title": "Renamed"}))
        with pytest.raises(StorageError):
            storage.delete_session(kept.id)
        with pytest.raises(StorageError):
            storage.clear_all()

        assert storage.list_sessions() == [kept]
        assert storage.get_session(kept.id).title == "Kept"

    def test_non_utf8_file_is_corrupt(self, tmp_path):
        """Test that undecodable bytes are reported as corrupt data."""
        path = tmp_path / "sessions.json"
        path.write_bytes(b"\xff\xfe[not utf8")

        with pytest.raises(CorruptDataError):
            JsonFileSessionStorage(path).list_sessions()

    def test_unreadable_path_raises_storage_error(self, tmp_path):
        """Test that OS read errors surface as StorageError."""
        path = tmp_path / "sessions.json"
        path.mkdir()

        with pytest.raises(StorageError):
            JsonFileSessionStorage(path).list_sessions()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
