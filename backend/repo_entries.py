"""
Repository: storage for pain entries.

This file contains only storage code. `EntryStore` is the capability the
service depends on (get/set/delete/list keyed by entry id), so another
backing can be swapped in without touching validation logic. Keep
business rules out of this module.

Important notes:
- `MemoryEntryStore` is the only implementation. It lives for the
  process lifetime; nothing is written to disk.
- Request handlers run on several threads at once. Reads share a
  `ReadWriteLock`; `set` and `delete` hold it exclusively.
- Entries are copied on the way in and on the way out, so callers can
  never mutate what the store holds.
"""

import threading
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Dict, Iterator, List, Optional, Tuple

from models import PainEntry


class EntryStore(ABC):
    """Storage capability used by `PainService`.

    Implementations must be safe to call from many threads and must
    never raise for a missing key.
    """

    @abstractmethod
    def get(self, entry_id: str) -> Tuple[Optional[PainEntry], bool]:
        """Return `(entry, True)` if present, else `(None, False)`."""

    @abstractmethod
    def set(self, entry_id: str, entry: PainEntry) -> None:
        """Insert or overwrite the entry at `entry_id`."""

    @abstractmethod
    def delete(self, entry_id: str) -> None:
        """Remove `entry_id` if present."""

    @abstractmethod
    def list(self) -> List[PainEntry]:
        """Return a snapshot of every entry, in no particular order."""


class ReadWriteLock:
    """Many readers or one writer.

    Waiting writers block new readers, so a steady stream of `get` calls
    cannot starve a `set`.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    def acquire_read(self) -> None:
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1

    def release_read(self) -> None:
        with self._cond:
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self) -> None:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True

    def release_write(self) -> None:
        with self._cond:
            self._writer = False
            self._cond.notify_all()

    @contextmanager
    def read(self) -> Iterator[None]:
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write(self) -> Iterator[None]:
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()


class MemoryEntryStore(EntryStore):
    """Dict-backed store guarded by a `ReadWriteLock`.

    Example usage:
        store = MemoryEntryStore()
        store.set(entry.id, entry)
        found, ok = store.get(entry.id)
    """

    def __init__(self) -> None:
        self._entries: Dict[str, PainEntry] = {}
        self._lock = ReadWriteLock()

    def get(self, entry_id: str) -> Tuple[Optional[PainEntry], bool]:
        with self._lock.read():
            entry = self._entries.get(entry_id)
        if entry is None:
            return None, False
        return entry.model_copy(), True

    def set(self, entry_id: str, entry: PainEntry) -> None:
        stored = entry.model_copy()
        with self._lock.write():
            self._entries[entry_id] = stored

    def delete(self, entry_id: str) -> None:
        with self._lock.write():
            self._entries.pop(entry_id, None)

    def list(self) -> List[PainEntry]:
        with self._lock.read():
            snapshot = list(self._entries.values())
        return [e.model_copy() for e in snapshot]

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._entries)
