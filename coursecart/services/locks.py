# coursecart/services/locks.py
import threading
import weakref
from contextlib import contextmanager
from typing import Iterator

_registry_lock = threading.Lock()
# a lock lives only while some thread holds or waits on it
_locks: "weakref.WeakValueDictionary[str, threading.RLock]" = weakref.WeakValueDictionary()


def _lock_for(session_id: str) -> threading.RLock:
    with _registry_lock:
        lock = _locks.get(session_id)
        if lock is None:
            lock = threading.RLock()
            _locks[session_id] = lock
        return lock


@contextmanager
def session_lock(session_id: str) -> Iterator[None]:
    """One writer per session; other sessions are never blocked."""
    lock = _lock_for(session_id)
    with lock:
        yield
