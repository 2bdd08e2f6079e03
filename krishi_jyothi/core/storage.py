# krishi_jyothi/core/storage.py
"""
Key-value storage used by the session and cart managers.

The managers only see the small `KeyValueStore` port (get/set/remove by
string key, JSON string values, plus `locked(key)` for read-modify-write).
One store instance is one browser session's "local storage":

  - DatabaseKeyValueStore: rows in `storage_entries` for a scope.
  - InMemoryKeyValueStore: plain dict, used by tests.

Several requests can carry the same session token at once, so a caller
that reads a value, changes it and writes it back must hold
`locked(key)` for the whole sequence.
"""
import threading
import zlib
from contextlib import AbstractContextManager, contextmanager
from typing import Iterator, Protocol

from sqlmodel import Session

from krishi_jyothi.repositories.storage_repo import StorageRepository

# Striped so the lock table stays bounded however many scopes exist
_LOCK_STRIPES = 64
_scope_locks = [threading.RLock() for _ in range(_LOCK_STRIPES)]


def _scope_lock(scope: str, key: str) -> threading.RLock:
    return _scope_locks[zlib.crc32(f"{scope}\x00{key}".encode()) % _LOCK_STRIPES]


class KeyValueStore(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...

    def locked(self, key: str) -> AbstractContextManager[None]: ...


class InMemoryKeyValueStore:
    def __init__(self, initial: dict[str, str] | None = None):
        self.data: dict[str, str] = dict(initial or {})
        self._lock = threading.RLock()

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value

    def remove(self, key: str) -> None:
        self.data.pop(key, None)

    def locked(self, key: str) -> AbstractContextManager[None]:
        return self._lock


class DatabaseKeyValueStore:
    """
    Key-value store for one session scope, persisted via SQLModel.

    Args:
        session: open DB session (request-scoped).
        scope: session token subject.
    """

    def __init__(
        self,
        session: Session,
        scope: str,
        repo: StorageRepository | None = None,
    ):
        self.session = session
        self.scope = scope
        self.repo = repo or StorageRepository()

    def get(self, key: str) -> str | None:
        entry = self.repo.get(self.session, self.scope, key)
        return entry.value if entry else None

    def set(self, key: str, value: str) -> None:
        self.repo.upsert(self.session, self.scope, key, value)

    def remove(self, key: str) -> None:
        self.repo.delete(self.session, self.scope, key)

    @contextmanager
    def locked(self, key: str) -> Iterator[None]:
        """
        Serialize read-modify-write on (scope, key).

        The thread lock covers requests in this process; the row lock
        (SELECT ... FOR UPDATE, where the database supports it) covers
        other workers until the write commits.
        """
        with _scope_lock(self.scope, key):
            self.repo.get(self.session, self.scope, key, for_update=True)
            yield
