"""
Key/value storage for the clinic's persisted state.

The stores write whole JSON documents under a handful of named keys
(``patients``, ``incidents``, ``users``, ``currentUser:<session>``). Any
``Storage`` subclass can back them.
"""

from abc import ABC, abstractmethod

from core.database import get_db_context
from models.storage_entry import StorageEntry


PATIENTS_KEY = "patients"
INCIDENTS_KEY = "incidents"
USERS_KEY = "users"
CURRENT_USER_KEY = "currentUser"


def session_key(session_id: str | None = None) -> str:
    """Storage key of the logged-in identity for one browser session."""
    return f"{CURRENT_USER_KEY}:{session_id}" if session_id else CURRENT_USER_KEY


class Storage(ABC):
    @abstractmethod
    def get_item(self, key: str) -> str | None:
        raise NotImplementedError

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def remove_item(self, key: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def keys(self) -> list[str]:
        raise NotImplementedError


class MemoryStorage(Storage):
    """Dict-backed storage. Nothing survives the process."""

    def __init__(self, initial: dict | None = None):
        self._items = dict(initial or {})

    def get_item(self, key):
        return self._items.get(key)

    def set_item(self, key, value):
        self._items[key] = value

    def remove_item(self, key):
        self._items.pop(key, None)

    def keys(self):
        return list(self._items)


class SqlStorage(Storage):
    """Storage backed by the ``storage_entries`` table.

    Each call opens a short-lived session and commits immediately, so every
    write is durable when it returns. There is no locking: two sessions
    writing the same key means the last writer wins.
    """

    def __init__(self, session_factory=None):
        self.session_factory = session_factory

    def get_item(self, key):
        with get_db_context(self.session_factory) as db:
            entry = db.get(StorageEntry, key)
            return entry.value if entry else None

    def set_item(self, key, value):
        with get_db_context(self.session_factory) as db:
            entry = db.get(StorageEntry, key)
            if entry is None:
                entry = StorageEntry(key=key, value=value)
                db.add(entry)
            else:
                entry.value = value
            db.commit()

    def remove_item(self, key):
        with get_db_context(self.session_factory) as db:
            entry = db.get(StorageEntry, key)
            if not entry:
                return
            db.delete(entry)
            db.commit()

    def keys(self):
        with get_db_context(self.session_factory) as db:
            return [row.key for row in db.query(StorageEntry).order_by(StorageEntry.key).all()]
