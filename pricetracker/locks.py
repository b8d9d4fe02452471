#!/usr/bin/env python3
"""
Reader/writer lock for the Price Tracker store.

Any number of threads may hold the lock in shared (read) mode at once;
a thread holding it in exclusive (write) mode excludes everyone else.
Waiting readers and writers are not prioritized: whichever thread the
condition variable wakes first gets to proceed.
"""
import threading
from contextlib import contextmanager
from typing import Iterator


class ReadWriteLock:
    """A read-write lock that allows multiple readers or a single writer."""

    __slots__ = ("_cond", "_readers", "_writer")

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False

    def acquire_read(self) -> None:
        """Block until no writer holds the lock, then register as a reader."""
        with self._cond:
            while self._writer:
                self._cond.wait()
            self._readers += 1

    def release_read(self) -> None:
        """
        Drop a shared hold.

        Raises:
            RuntimeError: If no reader holds the lock
        """
        with self._cond:
            if self._readers <= 0:
                raise RuntimeError("release_read without acquire_read")
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self) -> None:
        """Block until neither a writer nor any reader holds the lock."""
        with self._cond:
            while self._writer or self._readers > 0:
                self._cond.wait()
            self._writer = True

    def release_write(self) -> None:
        """
        Drop the exclusive hold.

        Raises:
            RuntimeError: If no writer holds the lock
        """
        with self._cond:
            if not self._writer:
                raise RuntimeError("release_write without acquire_write")
            self._writer = False
            self._cond.notify_all()

    @contextmanager
    def read_locked(self) -> Iterator[None]:
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write_locked(self) -> Iterator[None]:
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()

    @property
    def readers(self) -> int:
        """Number of threads currently holding the lock in shared mode."""
        with self._cond:
            return self._readers

    @property
    def write_held(self) -> bool:
        """Whether a writer currently holds the lock."""
        with self._cond:
            return self._writer
