from __future__ import annotations

import threading
from datetime import date

import pytest

from src.activity_tracking.activity_tracking.core.exceptions import ResourceLockedError
from src.activity_tracking.activity_tracking.scheduling.lock import ResourceDateLock

D = date(2026, 3, 2)


def test_hold_marks_key_as_locked_and_releases():
    locks = ResourceDateLock(timeout=0.1)
    with locks.hold(1, D):
        assert locks.is_locked(1, D)
        assert not locks.is_locked(2, D)
    assert not locks.is_locked(1, D)


def test_second_writer_times_out():
    locks = ResourceDateLock(timeout=0.05)
    entered = threading.Event()
    release = threading.Event()

    def writer():
        with locks.hold(1, D):
            entered.set()
            release.wait(2)

    t = threading.Thread(target=writer)
    t.start()
    try:
        assert entered.wait(2)
        with pytest.raises(ResourceLockedError):
            with locks.hold(1, D):
                pass
        # Other dates of the same resource are independent.
        with locks.hold(1, date(2026, 3, 3)):
            pass
    finally:
        release.set()
        t.join()

    with locks.hold(1, D):
        pass


def test_lock_released_when_body_raises():
    locks = ResourceDateLock(timeout=0.05)
    with pytest.raises(RuntimeError):
        with locks.hold(1, D):
            raise RuntimeError("boom")
    assert not locks.is_locked(1, D)
