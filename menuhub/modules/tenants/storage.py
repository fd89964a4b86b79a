"""
Key/value storage scopes for restaurant sessions.

Two scopes exist: durable (a JSON file that survives restarts) and ephemeral
(process memory, gone when the process exits). Both also implement the
get_item/set_item/remove_item trio that the Supabase auth client calls to
persist its tokens, so one scope object backs both the credential record and
the tenant handle's auth session.
"""

import json
import logging
import threading
from pathlib import Path
from typing import Dict, Optional

from msal_extensions import CrossPlatLock, FilePersistence
from msal_extensions.persistence import PersistenceNotFound

logger = logging.getLogger(__name__)


class SessionStorage:
    """Base scope. Subclasses implement get/set/remove."""

    scope: str = "base"

    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set(self, key: str, value: str) -> None:
        raise NotImplementedError

    def remove(self, key: str) -> None:
        raise NotImplementedError

    # Supabase auth token storage interface
    def get_item(self, key: str) -> Optional[str]:
        return self.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.set(key, value)

    def remove_item(self, key: str) -> None:
        self.remove(key)


class MemoryStorage(SessionStorage):
    """Ephemeral scope: cleared when the process ends."""

    scope = "ephemeral"

    def __init__(self):
        self._lock = threading.Lock()
        self._items: Dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._items.get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._items[key] = value

    def remove(self, key: str) -> None:
        with self._lock:
            self._items.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._items.clear()


_path_locks: Dict[str, threading.Lock] = {}
_path_locks_guard = threading.Lock()


def _thread_lock_for(path: Path) -> threading.Lock:
    with _path_locks_guard:
        return _path_locks.setdefault(str(path.resolve()), threading.Lock())


class FileStorage(SessionStorage):
    """Durable scope backed by a single JSON object on disk.

    Every read-modify-write holds a `CrossPlatLock` on `<path>.lockfile`, so
    several worker processes sharing one path see each other's writes. Threads
    of one process queue on a per-path lock first. An unreadable or corrupted
    file is treated as empty; the next write replaces it.
    """

    scope = "durable"

    def __init__(self, path):
        self.path = Path(path).expanduser()
        self.lock_path = f"{self.path}.lockfile"
        self._thread_lock = _thread_lock_for(self.path)
        self._persistence = None

    def _file(self) -> FilePersistence:
        if self._persistence is None:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self._persistence = FilePersistence(str(self.path))
        return self._persistence

    def _locked(self):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        return CrossPlatLock(self.lock_path)

    def _load(self) -> Dict[str, str]:
        try:
            raw = self._file().load()
        except PersistenceNotFound:
            return {}
        try:
            data = json.loads(raw) if raw else {}
        except ValueError as e:
            logger.warning(f"Ignoring unreadable session file {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring session file {self.path}: top-level value is not an object")
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _save(self, items: Dict[str, str]) -> None:
        self._file().save(json.dumps(items))

    def get(self, key: str) -> Optional[str]:
        if not self.path.exists():
            return None
        with self._thread_lock, self._locked():
            return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        with self._thread_lock, self._locked():
            items = self._load()
            items[key] = value
            self._save(items)

    def remove(self, key: str) -> None:
        if not self.path.exists():
            return
        with self._thread_lock, self._locked():
            items = self._load()
            if key not in items:
                return
            del items[key]
            self._save(items)


class ClientTokenStorage(SessionStorage):
    """Token storage handed to the cached tenant client.

    Reads always pass through. Writes are dropped once `is_current()` turns
    False, so a retired client (logout, restaurant switch, a timed-out session
    check still running in a worker thread) cannot write tokens back.
    """

    def __init__(self, target: SessionStorage, is_current):
        self.target = target
        self.is_current = is_current

    @property
    def scope(self) -> str:
        return self.target.scope

    def get(self, key: str) -> Optional[str]:
        return self.target.get(key)

    def set(self, key: str, value: str) -> None:
        if not self.is_current():
            logger.debug(f"Dropped token write for retired client ({key})")
            return
        self.target.set(key, value)

    def remove(self, key: str) -> None:
        if not self.is_current():
            logger.debug(f"Dropped token removal for retired client ({key})")
            return
        self.target.remove(key)
