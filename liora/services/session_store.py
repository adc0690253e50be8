"""
In-memory session store for interview sessions.
Entries expire after a period of inactivity and the oldest are dropped
once the store grows past its limit.
"""

from typing import Any, Dict, Optional
from datetime import datetime, timedelta
from dataclasses import dataclass, field
import logging

logger = logging.getLogger(__name__)


@dataclass
class SessionEntry:
    """A stored value plus its bookkeeping timestamps."""

    value: Any
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)


class InMemorySessionStore:
    """
    SessionStore backed by a dict.

    Expired entries are invisible to `get` and removed on every `set`.
    """

    def __init__(self, ttl_minutes: int = 120, max_entries: int = 500):
        self._entries: Dict[str, SessionEntry] = {}
        self._ttl = timedelta(minutes=ttl_minutes)
        self._max_entries = max_entries

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None

    def _is_expired(self, entry: SessionEntry, now: datetime) -> bool:
        return entry.updated_at < now - self._ttl

    def get(self, key: str) -> Optional[Any]:
        entry = self._entries.get(key)
        if entry is None:
            return None

        if self._is_expired(entry, datetime.utcnow()):
            del self._entries[key]
            logger.debug(f"Session expired: {key}")
            return None
        return entry.value

    def set(self, key: str, value: Any) -> None:
        existing = self._entries.get(key)
        if existing:
            existing.value = value
            existing.updated_at = datetime.utcnow()
        else:
            self._entries[key] = SessionEntry(value=value)
        self._cleanup()

    def delete(self, key: str) -> bool:
        return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        self._entries.clear()

    def keys(self):
        return list(self._entries.keys())

    def _cleanup(self) -> None:
        """Drop expired entries, then the least recently updated ones."""
        now = datetime.utcnow()
        expired = [k for k, e in self._entries.items()
                   if self._is_expired(e, now)]
        for key in expired:
            del self._entries[key]
            logger.debug(f"Cleaned up expired session: {key}")

        if len(self._entries) > self._max_entries:
            oldest = sorted(self._entries.items(),
                            key=lambda item: item[1].updated_at)
            to_remove = len(self._entries) - self._max_entries
            for key, _ in oldest[:to_remove]:
                del self._entries[key]
                logger.debug(f"Evicted session: {key}")
