"""Tests for the in-memory record store and its counters."""
import threading

import pytest

from mindtrack.shared.database import InMemoryRecordStore, StoreError


@pytest.fixture
def store():
    return InMemoryRecordStore()


class TestGetPutExists:

    def test_missing_key_returns_none(self, store):
        assert store.get("t", 1) is None
        assert store.exists("t", 1) is False

    def test_put_then_get(self, store):
        store.put("t", ("a", 1), "record")
        assert store.get("t", ("a", 1)) == "record"
        assert store.exists("t", ("a", 1)) is True

    def test_tables_are_separate(self, store):
        store.put("t1", 1, "x")
        assert store.get("t2", 1) is None

    def test_put_overwrites(self, store):
        store.put("t", 1, "old")
        store.put("t", 1, "new")
        assert store.get("t", 1) == "new"
        assert store.exists("t", 1) is True


class TestCounters:

    def test_counter_starts_at_zero(self, store):
        assert store.counter("anything") == 0

    def test_insert_allocates_contiguous_ids(self, store):
        ids = [store.insert_with_next_id("f", "t", lambda i: (i, f"r{i}")) for _ in range(3)]
        assert ids == [0, 1, 2]
        assert store.counter("f") == 3
        assert store.get("t", 2) == "r2"

    def test_families_are_independent(self, store):
        store.insert_with_next_id("a", "ta", lambda i: (i, i))
        store.insert_with_next_id("a", "ta", lambda i: (i, i))
        assert store.insert_with_next_id("b", "tb", lambda i: (i, i)) == 0
        assert store.counter("a") == 2
        assert store.counter("b") == 1

    def test_failed_build_does_not_advance_counter(self, store):
        def build(_):
            raise ValueError("build failed")

        with pytest.raises(ValueError):
            store.insert_with_next_id("f", "t", build)
        assert store.counter("f") == 0
        assert store.exists("t", 0) is False

    def test_duplicate_key_rejected(self, store):
        store.put("t", "fixed", "existing")
        with pytest.raises(StoreError):
            store.insert_with_next_id("f", "t", lambda i: ("fixed", "new"))
        assert store.counter("f") == 0
        assert store.get("t", "fixed") == "existing"

    def test_concurrent_inserts_get_unique_ids(self, store):
        ids = []
        lock = threading.Lock()

        def worker():
            for _ in range(50):
                new_id = store.insert_with_next_id("f", "t", lambda i: (i, i))
                with lock:
                    ids.append(new_id)

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert sorted(ids) == list(range(200))
        assert store.counter("f") == 200


class TestTransaction:

    def test_store_calls_nest_inside_scope(self, store):
        with store.transaction():
            store.put("t", 1, "a")
            store.insert_with_next_id("f", "t", lambda i: (i + 10, "b"))
            assert store.get("t", 1) == "a"
        assert store.get("t", 10) == "b"

    def test_other_threads_wait_for_scope(self, store):
        writer_started = threading.Event()

        def writer():
            writer_started.set()
            store.put("t", "key", "from-writer")

        with store.transaction():
            store.put("t", "key", "from-scope")
            thread = threading.Thread(target=writer)
            thread.start()
            writer_started.wait(timeout=1)
            thread.join(timeout=0.2)
            assert thread.is_alive()
            assert store.get("t", "key") == "from-scope"

        thread.join(timeout=1)
        assert not thread.is_alive()
        assert store.get("t", "key") == "from-writer"

    def test_read_modify_write_keeps_every_update(self, store):
        store.put("t", "total", 0)

        def worker():
            for _ in range(200):
                with store.transaction():
                    store.put("t", "total", store.get("t", "total") + 1)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert store.get("t", "total") == 1600

    def test_scope_released_on_error(self, store):
        with pytest.raises(ValueError):
            with store.transaction():
                raise ValueError("operation failed")

        done = threading.Event()
        thread = threading.Thread(target=lambda: (store.put("t", 1, "x"), done.set()))
        thread.start()
        thread.join(timeout=1)
        assert done.is_set()
