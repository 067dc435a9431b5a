"""Turns byte payloads into manifests and manifests back into bytes."""

import threading
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from chunkstore.chunk_store import ChunkStore, PutOutcome, StoreStats
from chunkstore.chunker import iter_segments, validate_chunk_size
from chunkstore.content_addresser import ContentAddresser, ContentKey, Sha256Addresser
from chunkstore.exceptions import (
    ChunkNotFoundError,
    ReconstructionFailedError,
    UploadCancelledError,
)
from common.constants import DEFAULT_CHUNK_SIZE_BYTES
from common.logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ChunkRef:
    """
    One manifest entry: position in the file, content key and length.
    """
    index: int
    key: ContentKey
    size: int


@dataclass(frozen=True)
class Manifest:
    """
    Ordered chunk references that reconstruct one file.

    Keys may repeat within a manifest and across manifests; each entry holds
    its own reference in the store.
    """
    chunks: Tuple[ChunkRef, ...] = ()

    @property
    def keys(self) -> Tuple[ContentKey, ...]:
        return tuple(ref.key for ref in self.chunks)

    @property
    def size(self) -> int:
        return sum(ref.size for ref in self.chunks)

    @property
    def chunk_count(self) -> int:
        return len(self.chunks)

    def __iter__(self) -> Iterator[ChunkRef]:
        return iter(self.chunks)

    def __len__(self) -> int:
        return len(self.chunks)


@dataclass(frozen=True)
class UploadResult:
    """
    Manifest of an upload plus the store outcome of each of its chunks.
    """
    manifest: Manifest
    outcomes: Tuple[PutOutcome, ...]

    @property
    def inserted_count(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome is PutOutcome.INSERTED)

    @property
    def deduplicated_count(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome is PutOutcome.DEDUPLICATED)


class FileAssembler:
    """
    Upload, download and delete files as manifests over a shared ChunkStore.
    """

    def __init__(
        self,
        store: ChunkStore,
        addresser: Optional[ContentAddresser] = None,
        chunk_size: int = DEFAULT_CHUNK_SIZE_BYTES,
    ):
        self.store = store
        self.addresser = addresser or Sha256Addresser()
        self.chunk_size = validate_chunk_size(chunk_size)

    def upload(
        self,
        data: bytes,
        chunk_size: Optional[int] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> UploadResult:
        """
        Split data, store every chunk and return its manifest.

        Either every chunk is stored and referenced by the returned manifest,
        or every put already issued is released before the error propagates.

        Args:
            data: File contents
            chunk_size: Override of the assembler's chunk size
            cancel_event: Set by another thread to abandon the upload

        Returns:
            UploadResult with the manifest and per-chunk outcomes

        Raises:
            InvalidConfigurationError: If chunk_size < 1
            UploadCancelledError: If cancel_event was set before completion
            CapacityExceededError, HashCollisionError: Propagated from the store
        """
        size = self.chunk_size if chunk_size is None else validate_chunk_size(chunk_size)

        refs: List[ChunkRef] = []
        outcomes: List[PutOutcome] = []
        try:
            for segment in iter_segments(data, size):
                if cancel_event is not None and cancel_event.is_set():
                    raise UploadCancelledError(
                        f"Upload cancelled after {len(refs)} chunk(s)"
                    )
                key = self.addresser.key(segment.data)
                outcomes.append(self.store.put(key, segment.data))
                refs.append(ChunkRef(index=segment.index, key=key, size=segment.size))
        except BaseException as e:
            if refs:
                logger.error(f"Upload aborted, rolling back {len(refs)} chunk reference(s): {e}")
                self.store.release_many(ref.key for ref in refs)
            raise

        result = UploadResult(manifest=Manifest(tuple(refs)), outcomes=tuple(outcomes))
        logger.info(
            f"Uploaded {len(data)} bytes as {len(refs)} chunk(s) "
            f"[new={result.inserted_count}, deduplicated={result.deduplicated_count}]"
        )
        return result

    def download(self, manifest: Manifest) -> bytes:
        """
        Reassemble the bytes described by manifest.

        Raises:
            ReconstructionFailedError: If any referenced chunk is missing or
                has a different length than recorded; no partial bytes are returned
        """
        parts = []
        for ref in manifest:
            try:
                payload = self.store.get(ref.key)
            except ChunkNotFoundError as e:
                logger.error(f"Reconstruction failed [index={ref.index}, key={ref.key.short()}]")
                raise ReconstructionFailedError(ref.key) from e
            if len(payload) != ref.size:
                logger.error(
                    f"Reconstruction failed, size mismatch "
                    f"[index={ref.index}, expected={ref.size}, actual={len(payload)}]"
                )
                raise ReconstructionFailedError(
                    ref.key, f"stored {len(payload)} bytes, manifest expects {ref.size}"
                )
            parts.append(payload)
        return b"".join(parts)

    def delete(self, manifest: Manifest) -> int:
        """
        Release one reference per manifest entry.

        Args:
            manifest: Manifest previously returned by upload()

        Returns:
            Number of chunks purged from the store

        Raises:
            ChunkNotFoundError: If the manifest references more than the store
                holds; nothing is released in that case
        """
        purged = self.store.release_many(manifest.keys)
        logger.info(f"Released {len(manifest)} chunk reference(s) [purged={purged}]")
        return purged

    def stats(self) -> StoreStats:
        return self.store.stats()
