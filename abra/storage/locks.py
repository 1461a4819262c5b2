"""
Per-key write locks.

Every mutation is a read-modify-write of a whole document, so writers of the
same key are serialised inside the process. Separate processes can still
overwrite each other; there is no revision check against the store.
"""

from threading import Lock, RLock

_locks: dict[str, RLock] = {}
_locks_guard = Lock()


def key_lock(key: str) -> RLock:
    with _locks_guard:
        lock = _locks.get(key)
        if lock is None:
            lock = _locks[key] = RLock()
        return lock
