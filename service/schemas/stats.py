"""Pydantic schemas for storage and deduplication reporting."""

from pydantic import BaseModel

from chunkstore.chunk_store import StoreStats


class DedupStatsResponse(BaseModel):
    """Response model for store-wide deduplication statistics."""
    unique_chunks: int
    total_references: int
    bytes_stored_unique: int
    bytes_stored_logical: int
    saved_bytes: int
    efficiency_percent: float

    @classmethod
    def from_stats(cls, stats: StoreStats) -> "DedupStatsResponse":
        return cls(
            unique_chunks=stats.unique_chunk_count,
            total_references=stats.total_reference_count,
            bytes_stored_unique=stats.bytes_stored_unique,
            bytes_stored_logical=stats.bytes_stored_logical,
            saved_bytes=stats.saved_bytes,
            efficiency_percent=stats.dedup_efficiency * 100.0,
        )


class StorageInfoResponse(BaseModel):
    """Response model for one account's quota usage."""
    username: str
    storage_used: int
    storage_limit: int
    available: int
    usage_percent: float
