"""
Content addressing strategies: map chunk bytes to a fixed-width ContentKey.

Every strategy is a pure function of the bytes. The chunk store trusts key
equality as content equality, so dedup correctness inherits the collision
resistance of whichever strategy is configured. PolynomialAddresser is narrow
and non-cryptographic: with it, dedup is only correct while no two distinct
chunks collide, which is easy to violate on purpose.
"""

import hashlib
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, List, Type

from chunkstore.exceptions import InvalidConfigurationError
from common.constants import (
    DEFAULT_ADDRESSER,
    KEY_DISPLAY_LENGTH,
    POLYNOMIAL_HASH_BASE,
    POLYNOMIAL_HASH_MODULUS,
)


@dataclass(frozen=True, order=True)
class ContentKey:
    """
    Storage address of a chunk, derived solely from its bytes.
    """
    algorithm: str
    digest: str

    def __str__(self) -> str:
        return f"{self.algorithm}:{self.digest}"

    def short(self, length: int = KEY_DISPLAY_LENGTH) -> str:
        """Abbreviated form for log lines and listings."""
        return f"{self.algorithm}:{self.digest[:length]}"

    @classmethod
    def parse(cls, text: str) -> "ContentKey":
        """
        Parse the 'algorithm:digest' form produced by str().

        Raises:
            ValueError: If text is not in 'algorithm:digest' form
        """
        algorithm, sep, digest = text.partition(":")
        if not sep or not algorithm or not digest:
            raise ValueError(f"Malformed content key: {text!r}")
        return cls(algorithm=algorithm, digest=digest)


class ContentAddresser(ABC):
    """Strategy interface for deriving content keys."""

    name: str = ""

    @property
    @abstractmethod
    def digest_size(self) -> int:
        """Width of the key space in bytes."""

    @abstractmethod
    def digest(self, data: bytes) -> str:
        """Return the textual digest of data."""

    def key(self, data: bytes) -> ContentKey:
        """
        Derive the content key for a chunk.

        Args:
            data: Chunk bytes

        Returns:
            ContentKey tagged with this strategy's name
        """
        return ContentKey(algorithm=self.name, digest=self.digest(data))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(digest_size={self.digest_size})"


class Sha256Addresser(ContentAddresser):
    name = "sha256"

    @property
    def digest_size(self) -> int:
        return hashlib.sha256().digest_size

    def digest(self, data: bytes) -> str:
        return hashlib.sha256(data).hexdigest()


class Blake2bAddresser(ContentAddresser):
    name = "blake2b"

    def __init__(self, digest_size: int = 32):
        if not 1 <= digest_size <= 64:
            raise InvalidConfigurationError(f"blake2b digest size must be 1..64, got {digest_size}")
        self._digest_size = digest_size

    @property
    def digest_size(self) -> int:
        return self._digest_size

    def digest(self, data: bytes) -> str:
        return hashlib.blake2b(data, digest_size=self._digest_size).hexdigest()


class PolynomialAddresser(ContentAddresser):
    """
    Polynomial rolling hash h = (h * 31 + byte) mod 1_000_000_007.

    Roughly 30 bits of key space and trivially invertible: b"\\x01\\x1f" and
    b"\\x02\\x00" share a key. Only suitable for small demos and for
    exercising collision handling.
    """

    name = "polynomial"

    def __init__(self, base: int = POLYNOMIAL_HASH_BASE, modulus: int = POLYNOMIAL_HASH_MODULUS):
        self.base = base
        self.modulus = modulus

    @property
    def digest_size(self) -> int:
        return (self.modulus.bit_length() + 7) // 8

    def digest(self, data: bytes) -> str:
        value = 0
        for byte in data:
            value = (value * self.base + byte) % self.modulus
        return str(value)


_ADDRESSERS: Dict[str, Type[ContentAddresser]] = {
    Sha256Addresser.name: Sha256Addresser,
    Blake2bAddresser.name: Blake2bAddresser,
    PolynomialAddresser.name: PolynomialAddresser,
}


def available_addressers() -> List[str]:
    """Names accepted by get_addresser()."""
    return sorted(_ADDRESSERS)


def get_addresser(name: str = DEFAULT_ADDRESSER) -> ContentAddresser:
    """
    Build an addressing strategy by name.

    Args:
        name: One of available_addressers()

    Returns:
        New ContentAddresser instance

    Raises:
        InvalidConfigurationError: If the name is unknown
    """
    try:
        addresser_cls = _ADDRESSERS[name.lower()]
    except KeyError:
        raise InvalidConfigurationError(
            f"Unknown content addresser '{name}'. Available: {', '.join(available_addressers())}"
        ) from None
    return addresser_cls()
