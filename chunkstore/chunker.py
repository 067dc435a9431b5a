"""Fixed-size splitting of a byte sequence into ordered segments."""

from dataclasses import dataclass
from typing import Iterator, List

from chunkstore.exceptions import InvalidConfigurationError


@dataclass(frozen=True)
class Segment:
    """
    One fixed-size (except possibly last) slice of a file.
    """
    index: int
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)


def validate_chunk_size(chunk_size: int) -> int:
    """
    Check that a chunk size is usable.

    Args:
        chunk_size: Requested chunk size in bytes

    Returns:
        The chunk size unchanged

    Raises:
        InvalidConfigurationError: If chunk_size is not an integer >= 1
    """
    if isinstance(chunk_size, bool) or not isinstance(chunk_size, int) or chunk_size < 1:
        raise InvalidConfigurationError(f"Chunk size must be an integer >= 1, got {chunk_size!r}")
    return chunk_size


def iter_segments(data: bytes, chunk_size: int) -> Iterator[Segment]:
    """
    Lazily yield consecutive segments of data.

    Every segment holds exactly chunk_size bytes except the last, which holds
    the remainder. No empty segment is ever produced, so empty input yields
    nothing and an exact multiple of chunk_size has no short tail.

    Args:
        data: Bytes to split
        chunk_size: Segment size in bytes (>= 1)

    Yields:
        Segment objects with indexes ascending from 0

    Raises:
        InvalidConfigurationError: If chunk_size < 1
    """
    validate_chunk_size(chunk_size)
    view = memoryview(data)
    for index, offset in enumerate(range(0, len(view), chunk_size)):
        yield Segment(index=index, data=bytes(view[offset:offset + chunk_size]))


def split(data: bytes, chunk_size: int) -> List[Segment]:
    """
    Split data into an ordered list of segments.

    Args:
        data: Bytes to split
        chunk_size: Segment size in bytes (>= 1)

    Returns:
        List of Segment objects in file order
    """
    return list(iter_segments(data, chunk_size))


def segment_count(length: int, chunk_size: int) -> int:
    """Number of segments split() produces for a payload of the given length."""
    validate_chunk_size(chunk_size)
    return -(-length // chunk_size)
