"""Exception classes for the chunk store core."""

from typing import Optional


class ChunkStoreError(Exception):
    """
    Base exception class for all chunk store errors.
    """
    pass


class InvalidConfigurationError(ChunkStoreError):
    """
    Raised when the core is configured with an unusable value
    (chunk size below 1, unknown addressing strategy, negative capacity).
    """
    pass


class ChunkNotFoundError(ChunkStoreError):
    """
    Raised on lookup or release of a content key that is not in the store.
    """

    def __init__(self, key, message: Optional[str] = None):
        self.key = key
        super().__init__(message or f"Chunk not found: {key}")


class ReconstructionFailedError(ChunkStoreError):
    """
    Raised when a manifest references a chunk that is missing from the store
    or whose stored length disagrees with the manifest.
    """

    def __init__(self, key, reason: str = "chunk missing from store"):
        self.key = key
        self.reason = reason
        super().__init__(f"Reconstruction failed at chunk {key}: {reason}")


class CapacityExceededError(ChunkStoreError):
    """
    Raised when inserting a new chunk would exceed the store's byte capacity.
    """
    pass


class RefCountUnderflowError(ChunkStoreError):
    """
    Raised when a reference count would be decremented below zero.
    """
    pass


class HashCollisionError(ChunkStoreError):
    """
    Raised by a verifying store when a put reuses an existing key for
    different bytes.
    """

    def __init__(self, key):
        self.key = key
        super().__init__(f"Content key {key} already stores different bytes")


class UploadCancelledError(ChunkStoreError):
    """
    Raised when an upload is abandoned before all of its chunks were stored.
    """
    pass
