"""Per-owner mutual exclusion for account read-modify-write sequences."""

import threading
from contextlib import contextmanager
from typing import Iterator


class OwnerLockRegistry:
    """
    Hands out one re-entrant lock per owner id.

    Holding an owner's lock across "read current accounts" and "commit batch"
    keeps concurrent mutations for that owner from interleaving. Locks are
    process-local and kept for the life of the registry.
    """

    def __init__(self) -> None:
        self._locks: dict[str, threading.RLock] = {}
        self._guard = threading.Lock()

    def lock_for(self, owner_id: str) -> threading.RLock:
        """Return the lock for ``owner_id``, creating it on first use."""
        with self._guard:
            lock = self._locks.get(owner_id)
            if lock is None:
                lock = threading.RLock()
                self._locks[owner_id] = lock
            return lock

    @contextmanager
    def hold(self, owner_id: str) -> Iterator[None]:
        """Hold the owner's lock for the duration of the block."""
        lock = self.lock_for(owner_id)
        with lock:
            yield


# Process-wide registry shared by every repository instance
_owner_locks = OwnerLockRegistry()


def get_owner_locks() -> OwnerLockRegistry:
    """Return the process-wide lock registry."""
    return _owner_locks
