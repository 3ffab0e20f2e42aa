"""Tests for the RWLock readers-writer lock.

Tests verify:
- Multiple concurrent readers
- Exclusive writer access
- Writer preference (prevents starvation)
- Reentrant read locks
- Read-to-write upgrade, write reentry, and write-to-read rejection
- Timeouts on both sides
- Error handling and release on exception
- Introspection properties
"""

from __future__ import annotations

import threading
import time
from concurrent.futures import ThreadPoolExecutor

import pytest

from localecatalog.runtime.rwlock import RWLock


class TestRWLockBasics:
    """Test basic RWLock functionality."""

    def test_single_reader(self) -> None:
        lock = RWLock()
        with lock.read():
            assert lock.reader_count == 1
        assert lock.reader_count == 0

    def test_single_writer(self) -> None:
        lock = RWLock()
        with lock.write():
            assert lock.writer_active
        assert not lock.writer_active

    def test_multiple_reads_concurrent(self) -> None:
        """Readers overlap: all five are inside the lock at once."""
        lock = RWLock()
        barrier = threading.Barrier(5, timeout=2.0)

        def reader() -> None:
            with lock.read():
                barrier.wait()

        threads = [threading.Thread(target=reader) for _ in range(5)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert not barrier.broken

    def test_write_blocks_readers(self) -> None:
        lock = RWLock()
        writer_active = threading.Event()
        order: list[str] = []

        def writer() -> None:
            with lock.write():
                writer_active.set()
                time.sleep(0.05)
                order.append("writer")

        def reader() -> None:
            writer_active.wait()
            with lock.read():
                order.append("reader")

        threads = [threading.Thread(target=writer), threading.Thread(target=reader)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert order == ["writer", "reader"]

    def test_read_blocks_writers(self) -> None:
        lock = RWLock()
        reader_active = threading.Event()
        order: list[str] = []

        def reader() -> None:
            with lock.read():
                reader_active.set()
                time.sleep(0.05)
                order.append("reader")

        def writer() -> None:
            reader_active.wait()
            with lock.write():
                order.append("writer")

        threads = [threading.Thread(target=reader), threading.Thread(target=writer)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert order == ["reader", "writer"]


class TestRWLockReentrancy:
    """Test reentrant reads and prohibited transitions."""

    def test_same_thread_multiple_read_locks(self) -> None:
        lock = RWLock()
        with lock.read(), lock.read(), lock.read():
            assert lock.reader_count == 1
        assert lock.reader_count == 0

    def test_reentrant_read_while_writer_waits(self) -> None:
        """A thread already reading re-enters even with a writer queued."""
        lock = RWLock()
        writer_started = threading.Event()

        def writer() -> None:
            writer_started.set()
            with lock.write():
                pass

        with lock.read():
            thread = threading.Thread(target=writer)
            thread.start()
            writer_started.wait()
            time.sleep(0.02)
            with lock.read(timeout=0.5):
                pass
        thread.join()

    def test_read_to_write_upgrade_rejected(self) -> None:
        lock = RWLock()
        with lock.read(), pytest.raises(
            RuntimeError, match="Cannot upgrade read lock to write lock"
        ):
            with lock.write():
                pass

    def test_write_to_write_reentry_rejected(self) -> None:
        lock = RWLock()
        with lock.write(), pytest.raises(
            RuntimeError, match="Cannot acquire write lock: already holding write lock"
        ):
            with lock.write():
                pass

    def test_write_to_read_downgrade_rejected(self) -> None:
        lock = RWLock()
        with lock.write(), pytest.raises(
            RuntimeError, match="Cannot acquire read lock while holding write lock"
        ):
            with lock.read():
                pass


class TestRWLockWriterPreference:
    """Test writer preference to prevent starvation."""

    def test_waiting_writer_blocks_new_readers(self) -> None:
        lock = RWLock()
        reader1_holding = threading.Event()
        reader1_release = threading.Event()
        order: list[str] = []

        def reader1() -> None:
            with lock.read():
                reader1_holding.set()
                reader1_release.wait()

        def writer() -> None:
            with lock.write():
                order.append("writer")

        def reader2() -> None:
            with lock.read():
                order.append("reader2")

        r1 = threading.Thread(target=reader1)
        r1.start()
        reader1_holding.wait()

        w = threading.Thread(target=writer)
        w.start()
        while lock.writers_waiting == 0:
            time.sleep(0.001)

        r2 = threading.Thread(target=reader2)
        r2.start()
        time.sleep(0.02)
        assert order == []

        reader1_release.set()
        for thread in (r1, w, r2):
            thread.join()

        assert order == ["writer", "reader2"]


class TestRWLockTimeouts:
    """Test timeout handling on both sides."""

    def test_read_times_out_under_writer(self) -> None:
        lock = RWLock()
        holding = threading.Event()
        release = threading.Event()

        def writer() -> None:
            with lock.write():
                holding.set()
                release.wait()

        thread = threading.Thread(target=writer)
        thread.start()
        holding.wait()
        try:
            with pytest.raises(TimeoutError, match="read lock"), lock.read(timeout=0.02):
                pass
        finally:
            release.set()
            thread.join()

    def test_write_times_out_under_reader(self) -> None:
        lock = RWLock()
        holding = threading.Event()
        release = threading.Event()

        def reader() -> None:
            with lock.read():
                holding.set()
                release.wait()

        thread = threading.Thread(target=reader)
        thread.start()
        holding.wait()
        try:
            with pytest.raises(TimeoutError, match="write lock"), lock.write(timeout=0.02):
                pass
            # A timed-out writer must not keep blocking readers.
            assert lock.writers_waiting == 0
            with lock.read(timeout=0.5):
                pass
        finally:
            release.set()
            thread.join()

    def test_zero_timeout_uncontended(self) -> None:
        lock = RWLock()
        with lock.write(timeout=0.0):
            pass
        with lock.read(timeout=0.0):
            pass

    def test_negative_timeout_rejected(self) -> None:
        lock = RWLock()
        with pytest.raises(ValueError, match="non-negative"), lock.read(timeout=-1.0):
            pass


class TestRWLockConcurrency:
    """Test high-concurrency scenarios."""

    def test_read_write_interleaving(self) -> None:
        """Writers never observe a partially updated shared list."""
        lock = RWLock()
        data: list[int] = [0, 0]
        torn: list[tuple[int, int]] = []

        def writer(value: int) -> None:
            for _ in range(50):
                with lock.write():
                    data[0] = value
                    data[1] = value

        def reader() -> None:
            for _ in range(200):
                with lock.read():
                    if data[0] != data[1]:
                        torn.append((data[0], data[1]))

        with ThreadPoolExecutor(max_workers=8) as executor:
            futures = [executor.submit(writer, i) for i in range(1, 4)]
            futures += [executor.submit(reader) for _ in range(5)]
            for future in futures:
                future.result()

        assert torn == []


class TestRWLockErrors:
    """Test error handling."""

    def test_release_read_without_acquire_raises(self) -> None:
        lock = RWLock()
        with pytest.raises(RuntimeError, match="does not hold read lock"):
            lock._release_read()

    def test_release_write_without_acquire_raises(self) -> None:
        lock = RWLock()
        with pytest.raises(RuntimeError, match="does not hold write lock"):
            lock._release_write()

    def test_release_write_from_different_thread_raises(self) -> None:
        lock = RWLock()
        thread = threading.Thread(target=lock._acquire_write)
        thread.start()
        thread.join()

        with pytest.raises(RuntimeError, match="does not hold write lock"):
            lock._release_write()

    def test_read_context_releases_on_exception(self) -> None:
        lock = RWLock()
        with pytest.raises(ValueError, match="boom"), lock.read():
            raise ValueError("boom")
        assert lock.reader_count == 0
        with lock.write(timeout=0.0):
            pass

    def test_write_context_releases_on_exception(self) -> None:
        lock = RWLock()
        with pytest.raises(ValueError, match="boom"), lock.write():
            raise ValueError("boom")
        assert not lock.writer_active
