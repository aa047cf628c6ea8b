"""
Concurrency tests for the store's reader/writer locking.
"""

import threading
import time
from concurrent.futures import ThreadPoolExecutor

import pytest

from csvstore.engine.rwlock import ReadWriteLock


class TestReadWriteLock:
    """Tests for ReadWriteLock."""

    def test_readers_share(self):
        """Test two readers can hold the lock together."""
        lock = ReadWriteLock()
        both_in = threading.Barrier(2, timeout=5)
        passed: list[bool] = []

        def reader() -> None:
            with lock.read_locked():
                both_in.wait()
                passed.append(True)

        threads = [threading.Thread(target=reader) for _ in range(2)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=5)
        assert passed == [True, True]
        assert lock.readers == 0

    def test_writer_excludes_readers(self):
        """Test a reader waits until the writer releases."""
        lock = ReadWriteLock()
        events: list[str] = []

        lock.acquire_write()

        def reader() -> None:
            with lock.read_locked():
                events.append("read")

        t = threading.Thread(target=reader)
        t.start()
        time.sleep(0.05)
        events.append("write-done")
        lock.release_write()
        t.join(timeout=5)

        assert events == ["write-done", "read"]

    def test_waiting_writer_blocks_new_readers(self):
        """Test a queued writer goes before readers that arrive after it."""
        lock = ReadWriteLock()
        events: list[str] = []

        lock.acquire_read()

        def writer() -> None:
            with lock.write_locked():
                events.append("write")

        def late_reader() -> None:
            with lock.read_locked():
                events.append("read")

        w = threading.Thread(target=writer)
        w.start()
        time.sleep(0.05)
        r = threading.Thread(target=late_reader)
        r.start()
        time.sleep(0.05)
        lock.release_read()
        w.join(timeout=5)
        r.join(timeout=5)

        assert events == ["write", "read"]

    def test_abandoned_writer_releases_queued_readers(self):
        """Test readers queued behind a writer proceed if its wait is interrupted."""
        lock = ReadWriteLock()
        events: list[str] = []
        interrupt = threading.Event()
        real_wait = lock._cond.wait

        class Interrupted(Exception):
            pass

        def writer() -> None:
            try:
                lock.acquire_write()
            except Interrupted:
                events.append("writer-gave-up")

        def reader() -> None:
            with lock.read_locked():
                events.append("read")

        w = threading.Thread(target=writer)

        def wait(timeout=None):
            result = real_wait(timeout)
            if threading.current_thread() is w and interrupt.is_set():
                raise Interrupted()
            return result

        lock._cond.wait = wait
        lock.acquire_read()

        w.start()
        time.sleep(0.05)
        r = threading.Thread(target=reader)
        r.start()
        time.sleep(0.05)

        interrupt.set()
        with lock._cond:
            lock._cond.notify_all()
        w.join(timeout=5)
        r.join(timeout=5)

        assert not r.is_alive()
        assert sorted(events) == ["read", "writer-gave-up"]
        lock.release_read()
        assert lock.readers == 0

    def test_release_without_hold(self):
        lock = ReadWriteLock()
        with pytest.raises(RuntimeError):
            lock.release_write()
        with pytest.raises(RuntimeError):
            lock.release_read()


class TestStoreConcurrency:
    """Concurrent access through TableStore."""

    def test_no_lost_inserts(self, store):
        """Test concurrent writers across tables lose no rows."""
        store.create_table("t1", ["writer", "seq"])
        store.create_table("t2", ["writer", "seq"])

        def writer(writer_id: int) -> None:
            table = "t1" if writer_id % 2 else "t2"
            for i in range(50):
                store.insert(table, {"writer": str(writer_id), "seq": str(i)})

        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(writer, range(8)))

        assert store.query("t1").count == 200
        assert store.query("t2").count == 200

    def test_no_lost_updates(self, store):
        """Test read-modify-write updates do not overwrite each other."""
        store.create_table("counters", ["name", "owner"])
        for i in range(20):
            store.insert("counters", {"name": f"c{i}", "owner": ""})

        def claim(i: int) -> int:
            return store.update("counters", {"owner": f"w{i}"}, [("name", "=", f"c{i}")]).count

        with ThreadPoolExecutor(max_workers=10) as pool:
            counts = list(pool.map(claim, range(20)))

        assert counts == [1] * 20
        owners = {r["name"]: r["owner"] for r in store.query("counters")}
        assert owners == {f"c{i}": f"w{i}" for i in range(20)}

    def test_readers_never_see_torn_table(self, store):
        """Test queries during rewrites always see a whole table."""
        store.create_table("items", ["id", "payload"])
        for i in range(100):
            store.insert("items", {"id": str(i), "payload": "x" * 50})

        stop = threading.Event()
        errors: list[Exception] = []
        counts: set[int] = set()

        def reader() -> None:
            while not stop.is_set():
                try:
                    counts.add(store.query("items").count)
                except Exception as e:
                    errors.append(e)

        def writer() -> None:
            for i in range(20):
                store.update("items", {"payload": f"v{i}" * 20})
                store.delete("items", [("id", "=", str(i))])

        readers = [threading.Thread(target=reader) for _ in range(4)]
        for t in readers:
            t.start()
        writer()
        stop.set()
        for t in readers:
            t.join(timeout=5)

        assert errors == []
        assert counts <= set(range(80, 101))
        assert store.query("items").count == 80
