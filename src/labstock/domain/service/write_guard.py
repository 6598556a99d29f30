"""Process-wide critical sections for read-modify-write cycles.

The JSON store has no isolation between callers: two approvals that read
the same stock level can each write back their own decrement and one of
them is lost.  Every mutating use case therefore runs inside
``guard.hold(key)``.  Locks are re-entrant, so a handler holding
``"requests"`` may call into the ledger, which holds ``"item:<id>"``.

Lock order is always ``requests`` before ``item:<id>``.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager

REQUESTS_KEY = "requests"


def item_key(item_id: str) -> str:
    return f"item:{item_id}"


class WriteGuard:

    def __init__(self) -> None:
        self._registry_lock = threading.Lock()
        self._locks: dict[str, threading.RLock] = {}

    @contextmanager
    def hold(self, key: str) -> Iterator[None]:
        lock = self._lock_for(key)
        with lock:
            yield

    def _lock_for(self, key: str) -> threading.RLock:
        with self._registry_lock:
            lock = self._locks.get(key)
            if lock is None:
                lock = threading.RLock()
                self._locks[key] = lock
            return lock


_shared_guard = WriteGuard()


def shared_guard() -> WriteGuard:
    """The guard shared by every handler in this process."""
    return _shared_guard
