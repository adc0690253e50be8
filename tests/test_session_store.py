"""
Unit tests for InMemorySessionStore.
"""

from liora.services.session_store import InMemorySessionStore
import sys
from pathlib import Path
from datetime import datetime, timedelta

# Ensure project root is on path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


class TestInMemorySessionStore:
    """Tests for session storage, expiry and eviction."""

    def setup_method(self):
        """Set up a fresh store for each test."""
        self.store = InMemorySessionStore(ttl_minutes=60, max_entries=3)

    def test_set_and_get(self):
        """Test storing and reading back a value."""
        self.store.set("session-1", {"answer": 42})

        assert self.store.get("session-1") == {"answer": 42}
        assert "session-1" in self.store
        assert len(self.store) == 1

    def test_get_unknown_returns_none(self):
        """Test unknown keys are not created on read."""
        assert self.store.get("missing") is None
        assert len(self.store) == 0

    def test_set_overwrites_existing(self):
        """Test setting an existing key replaces its value in place."""
        self.store.set("session-1", "first")
        created = self.store._entries["session-1"].created_at

        self.store.set("session-1", "second")

        assert self.store.get("session-1") == "second"
        assert self.store._entries["session-1"].created_at == created
        assert len(self.store) == 1

    def test_expired_entry_is_invisible(self):
        """Test an entry past its TTL is dropped on read."""
        self.store.set("old", "value")
        self.store._entries["old"].updated_at = datetime.utcnow() - timedelta(hours=2)

        assert self.store.get("old") is None
        assert "old" not in self.store._entries

    def test_cleanup_removes_expired_on_set(self):
        """Test expired entries are swept when anything is written."""
        self.store.set("old", "value")
        self.store._entries["old"].updated_at = datetime.utcnow() - timedelta(hours=2)

        self.store.set("new", "value")

        assert self.store.keys() == ["new"]

    def test_evicts_least_recently_updated(self):
        """Test the store never grows past max_entries."""
        for i in range(4):
            self.store.set(f"session-{i}", i)
            self.store._entries[f"session-{i}"].updated_at = (
                datetime.utcnow() - timedelta(minutes=10 - i))

        self.store.set("session-4", 4)

        assert len(self.store) == 3
        assert "session-0" not in self.store._entries
        assert "session-1" not in self.store._entries
        assert self.store.get("session-4") == 4

    def test_delete(self):
        """Test deleting reports whether anything was removed."""
        self.store.set("session-1", "value")

        assert self.store.delete("session-1") is True
        assert self.store.delete("session-1") is False

    def test_clear(self):
        """Test clearing empties the store."""
        self.store.set("a", 1)
        self.store.set("b", 2)

        self.store.clear()

        assert len(self.store) == 0
