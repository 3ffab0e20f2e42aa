"""Readers-writer lock guarding a Locale's domain registry.

Lookups (get, get_plural, ...) take the shared side; registry mutations
(add_domain, set_default_domain_name) take the exclusive side.

Properties:
- Any number of concurrent readers, or exactly one writer
- Writer preference: new readers queue behind a waiting writer
- Reentrant reads: a thread already reading may read again
- Optional timeout for either side (raises TimeoutError)

Prohibited transitions raise RuntimeError instead of deadlocking: upgrading a
read lock to a write lock, taking a read lock while writing, and re-entering
the write lock.

Python 3.13+.
"""

from __future__ import annotations

import threading
import time
from contextlib import contextmanager
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Generator

__all__ = ["RWLock"]


class RWLock:
    """Readers-writer lock with writer preference.

    Example:
        >>> lock = RWLock()
        >>> with lock.read():
        ...     pass
        >>> with lock.write(timeout=1.0):
        ...     pass
    """

    __slots__ = (
        "_active_readers",
        "_active_writer",
        "_condition",
        "_reader_threads",
        "_waiting_writers",
    )

    def __init__(self) -> None:
        self._condition = threading.Condition(threading.Lock())
        self._active_readers: int = 0
        self._active_writer: int | None = None
        self._waiting_writers: int = 0
        # thread id -> read depth
        self._reader_threads: dict[int, int] = {}

    @contextmanager
    def read(self, timeout: float | None = None) -> Generator[None]:
        """Hold the shared lock for the body of the ``with`` block.

        Args:
            timeout: Seconds to wait; None waits indefinitely, 0.0 does not wait.

        Raises:
            RuntimeError: If the calling thread holds the write lock.
            TimeoutError: If the lock was not acquired in time.
            ValueError: If timeout is negative.
        """
        self._acquire_read(timeout)
        try:
            yield
        finally:
            self._release_read()

    @contextmanager
    def write(self, timeout: float | None = None) -> Generator[None]:
        """Hold the exclusive lock for the body of the ``with`` block.

        Args:
            timeout: Seconds to wait; None waits indefinitely, 0.0 does not wait.

        Raises:
            RuntimeError: If the calling thread already holds either side.
            TimeoutError: If the lock was not acquired in time.
            ValueError: If timeout is negative.
        """
        self._acquire_write(timeout)
        try:
            yield
        finally:
            self._release_write()

    @staticmethod
    def _deadline(timeout: float | None) -> float | None:
        if timeout is None:
            return None
        if timeout < 0:
            msg = f"Timeout must be non-negative, got {timeout}"
            raise ValueError(msg)
        return time.monotonic() + timeout

    def _wait(self, deadline: float | None, side: str) -> None:
        """Block on the condition once; caller holds the condition lock."""
        if deadline is None:
            self._condition.wait()
            return
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            msg = f"Timed out waiting for {side} lock"
            raise TimeoutError(msg)
        self._condition.wait(timeout=remaining)

    def _acquire_read(self, timeout: float | None = None) -> None:
        deadline = self._deadline(timeout)
        me = threading.get_ident()

        with self._condition:
            if me in self._reader_threads:
                self._reader_threads[me] += 1
                return

            if self._active_writer == me:
                msg = (
                    "Cannot acquire read lock while holding write lock. "
                    "Release the write lock before reading."
                )
                raise RuntimeError(msg)

            while self._active_writer is not None or self._waiting_writers > 0:
                self._wait(deadline, "read")

            self._active_readers += 1
            self._reader_threads[me] = 1

    def _release_read(self) -> None:
        me = threading.get_ident()

        with self._condition:
            if me not in self._reader_threads:
                msg = "Thread does not hold read lock"
                raise RuntimeError(msg)

            self._reader_threads[me] -= 1
            if self._reader_threads[me] == 0:
                del self._reader_threads[me]
                self._active_readers -= 1
                if self._active_readers == 0:
                    self._condition.notify_all()

    def _acquire_write(self, timeout: float | None = None) -> None:
        deadline = self._deadline(timeout)
        me = threading.get_ident()

        with self._condition:
            if me in self._reader_threads:
                msg = (
                    "Cannot upgrade read lock to write lock. "
                    "Release read lock before acquiring write lock."
                )
                raise RuntimeError(msg)

            if self._active_writer == me:
                msg = "Cannot acquire write lock: already holding write lock."
                raise RuntimeError(msg)

            self._waiting_writers += 1
            try:
                while self._active_readers > 0 or self._active_writer is not None:
                    self._wait(deadline, "write")
                self._active_writer = me
            finally:
                # Readers spin on _waiting_writers; wake them whether we got
                # the lock or timed out.
                self._waiting_writers -= 1
                self._condition.notify_all()

    def _release_write(self) -> None:
        me = threading.get_ident()

        with self._condition:
            if self._active_writer != me:
                msg = "Thread does not hold write lock"
                raise RuntimeError(msg)
            self._active_writer = None
            self._condition.notify_all()

    @property
    def reader_count(self) -> int:
        """Number of distinct threads currently holding the read lock."""
        with self._condition:
            return self._active_readers

    @property
    def writer_active(self) -> bool:
        """True while some thread holds the write lock."""
        with self._condition:
            return self._active_writer is not None

    @property
    def writers_waiting(self) -> int:
        """Number of threads blocked waiting for the write lock."""
        with self._condition:
            return self._waiting_writers
