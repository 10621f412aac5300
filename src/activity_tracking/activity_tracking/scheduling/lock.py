"""Serialize writes per resource and date.

Two requests booking the same resource on the same day both read the same
existing activities; without a lock each may move into the same free slot and
the last write wins. The service holds this lock around read, adjust and save.

The lock lives in process memory. Several worker processes sharing one database
are not covered by it.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from datetime import date
from typing import Hashable, Iterator

from ..core.constants import DEFAULT_LOCK_TIMEOUT_SECONDS
from ..core.exceptions import ResourceLockedError


class ResourceDateLock:
    def __init__(self, *, timeout: float = DEFAULT_LOCK_TIMEOUT_SECONDS):
        self._timeout = float(timeout)
        self._guard = threading.Lock()
        self._locks: dict[Hashable, threading.Lock] = {}
        self._holders: dict[Hashable, int] = {}

    def _lock_for(self, key: Hashable) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = self._locks[key] = threading.Lock()
            self._holders[key] = self._holders.get(key, 0) + 1
            return lock

    def _forget(self, key: Hashable) -> None:
        with self._guard:
            remaining = self._holders.get(key, 1) - 1
            if remaining <= 0:
                self._holders.pop(key, None)
                self._locks.pop(key, None)
            else:
                self._holders[key] = remaining

    @contextmanager
    def hold(self, resource_id: int, work_date: date) -> Iterator[None]:
        key = (int(resource_id), work_date)
        lock = self._lock_for(key)
        try:
            if not lock.acquire(timeout=self._timeout):
                raise ResourceLockedError("El recurso está siendo modificado, inténtelo de nuevo")
            try:
                yield
            finally:
                lock.release()
        finally:
            self._forget(key)

    def is_locked(self, resource_id: int, work_date: date) -> bool:
        with self._guard:
            lock = self._locks.get((int(resource_id), work_date))
        return lock is not None and lock.locked()
