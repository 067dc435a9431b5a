"""Chunk store core: chunking, content addressing, refcounted storage, reassembly."""

from chunkstore.chunk_store import ChunkStore, PutOutcome, RefCount, StoreStats
from chunkstore.chunker import Segment, split
from chunkstore.content_addresser import ContentAddresser, ContentKey, get_addresser
from chunkstore.file_assembler import ChunkRef, FileAssembler, Manifest, UploadResult

__all__ = [
    "ChunkRef",
    "ChunkStore",
    "ContentAddresser",
    "ContentKey",
    "FileAssembler",
    "Manifest",
    "PutOutcome",
    "RefCount",
    "Segment",
    "StoreStats",
    "UploadResult",
    "get_addresser",
    "split",
]
