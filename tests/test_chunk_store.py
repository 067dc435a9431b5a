"""Tests for the reference-counted chunk store."""

import logging
import threading

import pytest

from chunkstore.chunk_store import ChunkStore, PutOutcome, RefCount, StoreStats
from chunkstore.content_addresser import PolynomialAddresser, Sha256Addresser
from chunkstore.exceptions import (
    CapacityExceededError,
    ChunkNotFoundError,
    HashCollisionError,
    InvalidConfigurationError,
    RefCountUnderflowError,
)

addresser = Sha256Addresser()


def keyed(data: bytes):
    return addresser.key(data), data


class TestRefCount:
    def test_increment_and_decrement(self):
        refs = RefCount(1)

        assert refs.increment() == 2
        assert refs.decrement() == 1
        assert int(refs) == 1

    def test_decrement_at_zero_fails_fast(self):
        refs = RefCount()

        with pytest.raises(RefCountUnderflowError):
            refs.decrement()
        assert refs.value == 0

    def test_negative_start_rejected(self):
        with pytest.raises(RefCountUnderflowError):
            RefCount(-1)


class TestPutGetRelease:
    def test_first_put_inserts(self, store):
        key, data = keyed(b"chunk")

        assert store.put(key, data) is PutOutcome.INSERTED
        assert store.refcount(key) == 1
        assert store.get(key) == data

    def test_second_put_deduplicates(self, store):
        key, data = keyed(b"chunk")
        store.put(key, data)

        assert store.put(key, data) is PutOutcome.DEDUPLICATED
        assert store.refcount(key) == 2
        assert len(store) == 1

    def test_get_does_not_change_refcount(self, store):
        key, data = keyed(b"chunk")
        store.put(key, data)
        store.get(key)

        assert store.refcount(key) == 1

    def test_get_absent_key_raises_not_found(self, store):
        key, _ = keyed(b"never stored")

        with pytest.raises(ChunkNotFoundError) as exc_info:
            store.get(key)
        assert exc_info.value.key == key

    @pytest.mark.parametrize("operation", ["get", "release"])
    def test_absent_key_logged_as_warning(self, store, caplog, monkeypatch, operation):
        monkeypatch.setattr(logging.getLogger("chunkstore"), "propagate", True)
        key, _ = keyed(b"never stored")

        with caplog.at_level(logging.WARNING, logger="chunkstore.chunk_store"):
            with pytest.raises(ChunkNotFoundError):
                getattr(store, operation)(key)

        assert [r.levelno for r in caplog.records] == [logging.WARNING]
        assert key.short() in caplog.records[0].getMessage()

    def test_release_decrements_then_purges(self, store):
        key, data = keyed(b"chunk")
        store.put(key, data)
        store.put(key, data)

        assert store.release(key) == 1
        assert key in store
        assert store.release(key) == 0
        assert key not in store
        assert store.refcount(key) == 0

    def test_release_absent_key_raises_and_changes_nothing(self, store):
        key, data = keyed(b"chunk")
        other, _ = keyed(b"other")
        store.put(key, data)

        with pytest.raises(ChunkNotFoundError):
            store.release(other)
        assert store.refcount(key) == 1

    def test_over_release_never_goes_negative(self, store):
        key, data = keyed(b"chunk")
        store.put(key, data)
        store.release(key)

        with pytest.raises(ChunkNotFoundError):
            store.release(key)
        assert store.refcount(key) == 0
        assert store.stats().total_reference_count == 0

    def test_purged_key_can_be_stored_again(self, store):
        key, data = keyed(b"chunk")
        store.put(key, data)
        store.release(key)

        assert store.put(key, data) is PutOutcome.INSERTED

    def test_keys_lists_present_records(self, store):
        a, data_a = keyed(b"a")
        b, data_b = keyed(b"b")
        store.put(a, data_a)
        store.put(b, data_b)

        assert sorted(store.keys()) == sorted([a, b])


class TestReleaseMany:
    def test_releases_once_per_occurrence(self, store):
        key, data = keyed(b"chunk")
        for _ in range(3):
            store.put(key, data)

        purged = store.release_many([key, key])

        assert purged == 0
        assert store.refcount(key) == 1

    def test_counts_purged_chunks(self, store):
        a, data_a = keyed(b"a")
        b, data_b = keyed(b"b")
        store.put(a, data_a)
        store.put(b, data_b)
        store.put(b, data_b)

        assert store.release_many([a, b]) == 1
        assert a not in store
        assert store.refcount(b) == 1

    def test_absent_key_releases_nothing(self, store):
        a, data_a = keyed(b"a")
        missing, _ = keyed(b"missing")
        store.put(a, data_a)

        with pytest.raises(ChunkNotFoundError):
            store.release_many([a, missing])
        assert store.refcount(a) == 1

    def test_over_release_releases_nothing(self, store):
        a, data_a = keyed(b"a")
        store.put(a, data_a)

        with pytest.raises(ChunkNotFoundError):
            store.release_many([a, a])
        assert store.refcount(a) == 1

    def test_empty_release_is_noop(self, store):
        assert store.release_many([]) == 0


class TestStats:
    def test_empty_store(self, store):
        stats = store.stats()

        assert stats == StoreStats(0, 0, 0, 0)
        assert stats.saved_bytes == 0
        assert stats.dedup_efficiency == 0.0

    def test_logical_vs_unique_bytes(self, store):
        a, data_a = keyed(b"a" * 10)
        b, data_b = keyed(b"b" * 4)
        store.put(a, data_a)
        store.put(a, data_a)
        store.put(a, data_a)
        store.put(b, data_b)

        stats = store.stats()

        assert stats.unique_chunk_count == 2
        assert stats.total_reference_count == 4
        assert stats.bytes_stored_unique == 14
        assert stats.bytes_stored_logical == 34
        assert stats.saved_bytes == 20
        assert stats.dedup_efficiency == pytest.approx(0.5)

    def test_unique_bytes_shrink_on_purge(self, store):
        a, data_a = keyed(b"a" * 10)
        store.put(a, data_a)
        store.release(a)

        assert store.stats().bytes_stored_unique == 0


class TestCollisions:
    def test_unverified_store_trusts_key_equality(self):
        store = ChunkStore()
        poly = PolynomialAddresser()
        first, second = b"\x01\x1f", b"\x02\x00"

        store.put(poly.key(first), first)
        outcome = store.put(poly.key(second), second)

        assert outcome is PutOutcome.DEDUPLICATED
        assert store.get(poly.key(second)) == first

    def test_verifying_store_rejects_collision(self):
        store = ChunkStore(verify_on_dedup=True)
        poly = PolynomialAddresser()
        first, second = b"\x01\x1f", b"\x02\x00"
        store.put(poly.key(first), first)

        with pytest.raises(HashCollisionError):
            store.put(poly.key(second), second)
        assert store.refcount(poly.key(first)) == 1

    def test_verifying_store_accepts_identical_bytes(self):
        store = ChunkStore(verify_on_dedup=True)
        key, data = keyed(b"same")
        store.put(key, data)

        assert store.put(key, bytes(data)) is PutOutcome.DEDUPLICATED


class TestCapacity:
    def test_insert_beyond_capacity_rejected(self):
        store = ChunkStore(capacity_bytes=10)
        a, data_a = keyed(b"a" * 8)
        b, data_b = keyed(b"b" * 8)
        store.put(a, data_a)

        with pytest.raises(CapacityExceededError):
            store.put(b, data_b)
        assert b not in store

    def test_dedup_hit_does_not_consume_capacity(self):
        store = ChunkStore(capacity_bytes=8)
        a, data_a = keyed(b"a" * 8)
        store.put(a, data_a)

        assert store.put(a, data_a) is PutOutcome.DEDUPLICATED

    def test_purge_frees_capacity(self):
        store = ChunkStore(capacity_bytes=8)
        a, data_a = keyed(b"a" * 8)
        b, data_b = keyed(b"b" * 8)
        store.put(a, data_a)
        store.release(a)

        assert store.put(b, data_b) is PutOutcome.INSERTED

    def test_negative_capacity_rejected(self):
        with pytest.raises(InvalidConfigurationError):
            ChunkStore(capacity_bytes=-1)


class TestConcurrency:
    def test_concurrent_puts_on_same_key_are_all_counted(self, store):
        key, data = keyed(b"shared")
        threads = [
            threading.Thread(target=lambda: [store.put(key, data) for _ in range(200)])
            for _ in range(8)
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert store.refcount(key) == 1600

    def test_concurrent_put_and_release_keep_count_balanced(self, store):
        key, data = keyed(b"shared")
        store.put(key, data)

        def churn():
            for _ in range(300):
                store.put(key, data)
                store.release(key)

        threads = [threading.Thread(target=churn) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert store.refcount(key) == 1
        assert store.get(key) == data
