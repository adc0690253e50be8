"""
Local persisted state.

Stores keep their state in memory and write an allow-listed subset of it
to a named JSON blob after every change. On startup they hydrate from
that blob and report `has_hydrated`.
"""

from typing import Any, Dict, Optional, Tuple
from datetime import datetime
from enum import Enum
from pathlib import Path
import json
import logging

from pydantic import BaseModel

logger = logging.getLogger(__name__)


class LocalStateStorage:
    """JSON-file backed StateStorage, one file per store key."""

    def __init__(self, base_path: str):
        self._base_path = Path(base_path)
        self._base_path.mkdir(parents=True, exist_ok=True)

    @property
    def base_path(self) -> Path:
        return self._base_path

    def _file(self, name: str) -> Path:
        return self._base_path / f"{name}.json"

    def read(self, name: str) -> Optional[Dict[str, Any]]:
        """Load a blob, or None if it is missing or unreadable."""
        file_path = self._file(name)
        if not file_path.exists():
            return None

        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Failed to load state '{name}': {e}")
            return None

        if not isinstance(data, dict):
            logger.warning(f"Ignoring malformed state '{name}'")
            return None
        return data

    def write(self, name: str, data: Dict[str, Any]) -> None:
        try:
            with open(self._file(name), 'w', encoding='utf-8') as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
        except OSError as e:
            logger.error(f"Failed to save state '{name}': {e}")

    def remove(self, name: str) -> None:
        file_path = self._file(name)
        if file_path.exists():
            file_path.unlink()


def to_jsonable(value: Any) -> Any:
    """Convert models, enums and datetimes into plain JSON values."""
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, dict):
        return {k: to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]
    return value


class PersistedStore:
    """
    Base class for stores persisted through a StateStorage.

    Subclasses set `storage_key` and `persisted_fields` (the allow-list)
    and implement `_apply` to load a partial state dict.
    """

    storage_key: str = ""
    persisted_fields: Tuple[str, ...] = ()

    def __init__(self, storage):
        self._storage = storage
        self._has_hydrated = False

    @property
    def has_hydrated(self) -> bool:
        return self._has_hydrated

    def partialize(self) -> Dict[str, Any]:
        """The allow-listed slice of state that gets written."""
        return {
            name: to_jsonable(getattr(self, name))
            for name in self.persisted_fields
        }

    def persist(self) -> None:
        self._storage.write(self.storage_key, self.partialize())

    def hydrate(self) -> None:
        """Load persisted state. Unknown keys in the blob are ignored."""
        data = self._storage.read(self.storage_key)
        if data:
            allowed = {k: v for k, v in data.items()
                       if k in self.persisted_fields}
            try:
                self._apply(allowed)
            except (ValueError, TypeError) as e:
                logger.warning(
                    f"Discarding invalid state for {self.storage_key}: {e}")
        self._has_hydrated = True
        logger.debug(f"Hydrated {self.storage_key}")

    def _apply(self, data: Dict[str, Any]) -> None:
        raise NotImplementedError
