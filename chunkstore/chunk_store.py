"""Reference-counted, deduplicating in-memory chunk store."""

import threading
from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional

from chunkstore.content_addresser import ContentKey
from chunkstore.exceptions import (
    CapacityExceededError,
    ChunkNotFoundError,
    HashCollisionError,
    InvalidConfigurationError,
    RefCountUnderflowError,
)
from common.logging_config import get_logger

logger = get_logger(__name__)


class PutOutcome(str, Enum):
    INSERTED = "inserted"
    DEDUPLICATED = "deduplicated"


class RefCount:
    """
    Checked reference counter that never goes below zero.
    """

    __slots__ = ("_value",)

    def __init__(self, value: int = 0):
        if value < 0:
            raise RefCountUnderflowError(f"Reference count cannot start at {value}")
        self._value = value

    @property
    def value(self) -> int:
        return self._value

    def increment(self) -> int:
        self._value += 1
        return self._value

    def decrement(self) -> int:
        """
        Decrement the count.

        Returns:
            Remaining count

        Raises:
            RefCountUnderflowError: If the count is already zero
        """
        if self._value == 0:
            raise RefCountUnderflowError("Reference count is already zero")
        self._value -= 1
        return self._value

    def __int__(self) -> int:
        return self._value

    def __repr__(self) -> str:
        return f"RefCount({self._value})"


@dataclass
class ChunkRecord:
    """
    Stored payload plus the number of manifest entries referencing it.
    """
    payload: bytes
    refs: RefCount

    @property
    def size(self) -> int:
        return len(self.payload)


@dataclass(frozen=True)
class StoreStats:
    """
    Point-in-time dedup statistics of a store.
    """
    unique_chunk_count: int
    total_reference_count: int
    bytes_stored_unique: int
    bytes_stored_logical: int

    @property
    def saved_bytes(self) -> int:
        return self.bytes_stored_logical - self.bytes_stored_unique

    @property
    def dedup_efficiency(self) -> float:
        """Fraction of references served by an already-stored chunk (0.0 when empty)."""
        if self.total_reference_count == 0:
            return 0.0
        return 1.0 - self.unique_chunk_count / self.total_reference_count


class ChunkStore:
    """
    Maps content keys to chunk payloads and reference counts.

    A key is present if and only if its reference count is above zero: the
    record is purged in the same critical section as the decrement that
    reaches zero. Every public operation holds one store-wide lock, so
    concurrent puts and releases on the same key are all observed.
    """

    def __init__(self, capacity_bytes: Optional[int] = None, verify_on_dedup: bool = False):
        """
        Initialize an empty store.

        Args:
            capacity_bytes: Maximum unique bytes held, or None for unlimited
            verify_on_dedup: Compare bytes on every key hit and reject collisions
        """
        if capacity_bytes is not None and capacity_bytes < 0:
            raise InvalidConfigurationError(f"Store capacity cannot be negative, got {capacity_bytes}")

        self.capacity_bytes = capacity_bytes
        self.verify_on_dedup = verify_on_dedup
        self._records: Dict[ContentKey, ChunkRecord] = {}
        self._bytes_unique = 0
        self._lock = threading.RLock()

    def put(self, key: ContentKey, data: bytes) -> PutOutcome:
        """
        Store a chunk or add a reference to an identical stored chunk.

        Args:
            key: Content key of data
            data: Chunk bytes

        Returns:
            PutOutcome.INSERTED for a new key, PutOutcome.DEDUPLICATED otherwise

        Raises:
            HashCollisionError: If verify_on_dedup is set and the stored bytes differ
            CapacityExceededError: If inserting would exceed capacity_bytes
        """
        with self._lock:
            record = self._records.get(key)
            if record is not None:
                if self.verify_on_dedup and record.payload != data:
                    logger.error(f"Content key collision detected [key={key.short()}]")
                    raise HashCollisionError(key)
                count = record.refs.increment()
                logger.debug(f"Duplicate chunk found [key={key.short()}, refs={count}]")
                return PutOutcome.DEDUPLICATED

            size = len(data)
            if self.capacity_bytes is not None and self._bytes_unique + size > self.capacity_bytes:
                raise CapacityExceededError(
                    f"Storing {size} bytes would exceed store capacity "
                    f"({self._bytes_unique}/{self.capacity_bytes} bytes used)"
                )

            self._records[key] = ChunkRecord(payload=bytes(data), refs=RefCount(1))
            self._bytes_unique += size
            logger.debug(f"Stored new chunk [key={key.short()}, size={size}]")
            return PutOutcome.INSERTED

    def get(self, key: ContentKey) -> bytes:
        """
        Return the payload stored under key.

        Raises:
            ChunkNotFoundError: If key is not in the store
        """
        with self._lock:
            record = self._records.get(key)
            if record is None:
                logger.warning(f"Lookup of absent chunk [key={key.short()}]")
                raise ChunkNotFoundError(key)
            return record.payload

    def release(self, key: ContentKey) -> int:
        """
        Drop one reference to key, purging the chunk when none remain.

        Args:
            key: Content key to release

        Returns:
            Remaining reference count (0 means the chunk was purged)

        Raises:
            ChunkNotFoundError: If key is not in the store
        """
        with self._lock:
            record = self._records.get(key)
            if record is None:
                logger.warning(f"Release of absent chunk [key={key.short()}]")
                raise ChunkNotFoundError(key)
            return self._release_record(key, record)

    def release_many(self, keys: Iterable[ContentKey]) -> int:
        """
        Release one reference per occurrence of each key, all or nothing.

        Every key must be present with at least as many references as it
        occurs in keys; otherwise nothing is released.

        Args:
            keys: Keys to release; repeats release repeatedly

        Returns:
            Number of chunks purged

        Raises:
            ChunkNotFoundError: If a key is absent or over-released
        """
        wanted = Counter(keys)
        with self._lock:
            for key, occurrences in wanted.items():
                record = self._records.get(key)
                if record is None:
                    logger.warning(f"Release of absent chunk [key={key.short()}]")
                    raise ChunkNotFoundError(key)
                if record.refs.value < occurrences:
                    logger.warning(
                        f"Over-release of chunk [key={key.short()}, "
                        f"refs={record.refs.value}, requested={occurrences}]"
                    )
                    raise ChunkNotFoundError(
                        key,
                        f"Chunk {key} has {record.refs.value} reference(s), cannot release {occurrences}",
                    )

            purged = 0
            for key, occurrences in wanted.items():
                record = self._records[key]
                for _ in range(occurrences):
                    if self._release_record(key, record) == 0:
                        purged += 1
            return purged

    def _release_record(self, key: ContentKey, record: ChunkRecord) -> int:
        remaining = record.refs.decrement()
        if remaining == 0:
            del self._records[key]
            self._bytes_unique -= record.size
            logger.debug(f"Purged chunk [key={key.short()}, size={record.size}]")
        return remaining

    def refcount(self, key: ContentKey) -> int:
        """Current reference count of key (0 when absent)."""
        with self._lock:
            record = self._records.get(key)
            return record.refs.value if record is not None else 0

    def contains(self, key: ContentKey) -> bool:
        with self._lock:
            return key in self._records

    def keys(self) -> List[ContentKey]:
        with self._lock:
            return list(self._records)

    def stats(self) -> StoreStats:
        """
        Compute dedup statistics.

        Returns:
            StoreStats where bytes_stored_logical counts each payload once per
            reference and bytes_stored_unique counts it once
        """
        with self._lock:
            total_refs = 0
            logical = 0
            for record in self._records.values():
                refs = record.refs.value
                total_refs += refs
                logical += record.size * refs
            return StoreStats(
                unique_chunk_count=len(self._records),
                total_reference_count=total_refs,
                bytes_stored_unique=self._bytes_unique,
                bytes_stored_logical=logical,
            )

    def __contains__(self, key: object) -> bool:
        return self.contains(key)

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)
