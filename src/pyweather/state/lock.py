"""Shared/exclusive lock for the weather store."""

from __future__ import annotations

import contextlib
import threading
from collections.abc import Iterator


class ReadWriteLock:
    """Reader/writer lock built on a single condition variable.

    Any number of readers may hold the lock together; a writer holds it
    alone.  A waiting writer blocks new readers, so a steady stream of
    reads cannot starve it.  Critical sections must not await, which keeps
    the lock safe to use from coroutines on the event loop thread as well
    as from worker threads.
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
            if self._readers <= 0:
                raise RuntimeError("release_read() called without a matching acquire_read()")
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self) -> None:
        with self._cond:
            self._writers_waiting += 1
            acquired = False
            try:
                while self._writer or self._readers:
                    self._cond.wait()
                acquired = True
            finally:
                self._writers_waiting -= 1
                if not acquired:
                    # Readers parked behind this writer must re-check.
                    self._cond.notify_all()
            self._writer = True

    def release_write(self) -> None:
        with self._cond:
            if not self._writer:
                raise RuntimeError("release_write() called without a matching acquire_write()")
            self._writer = False
            self._cond.notify_all()

    @contextlib.contextmanager
    def read_locked(self) -> Iterator[None]:
        """Hold the lock in shared mode for the ``with`` block."""
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextlib.contextmanager
    def write_locked(self) -> Iterator[None]:
        """Hold the lock in exclusive mode for the ``with`` block."""
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()
