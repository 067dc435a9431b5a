"""Configuration settings for the storage service."""

import os
from dataclasses import dataclass, replace
from typing import Optional

from common.constants import (
    DEFAULT_ADDRESSER,
    DEFAULT_BCRYPT_ROUNDS,
    DEFAULT_CHUNK_SIZE_BYTES,
    DEFAULT_STORAGE_LIMIT_BYTES,
)


def _env_bool(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_optional_int(name: str) -> Optional[int]:
    value = os.environ.get(name, "").strip()
    return int(value) if value else None


CHUNK_SIZE = int(os.environ.get("DEDUP_CHUNK_SIZE", str(DEFAULT_CHUNK_SIZE_BYTES)))

ADDRESSER = os.environ.get("DEDUP_ADDRESSER", DEFAULT_ADDRESSER)

STORAGE_LIMIT = int(os.environ.get("DEDUP_STORAGE_LIMIT", str(DEFAULT_STORAGE_LIMIT_BYTES)))

VERIFY_ON_DEDUP = _env_bool("DEDUP_VERIFY_ON_DEDUP", False)

STORE_CAPACITY = _env_optional_int("DEDUP_STORE_CAPACITY")

BCRYPT_ROUNDS = int(os.environ.get("DEDUP_BCRYPT_ROUNDS", str(DEFAULT_BCRYPT_ROUNDS)))


@dataclass(frozen=True)
class Settings:
    """
    Values needed to wire a store, an assembler and the services around them.
    """
    chunk_size: int = DEFAULT_CHUNK_SIZE_BYTES
    addresser: str = DEFAULT_ADDRESSER
    storage_limit: int = DEFAULT_STORAGE_LIMIT_BYTES
    verify_on_dedup: bool = False
    store_capacity: Optional[int] = None
    bcrypt_rounds: int = DEFAULT_BCRYPT_ROUNDS

    @classmethod
    def from_env(cls) -> "Settings":
        """Settings from the DEDUP_* environment variables read at import time."""
        return cls(
            chunk_size=CHUNK_SIZE,
            addresser=ADDRESSER,
            storage_limit=STORAGE_LIMIT,
            verify_on_dedup=VERIFY_ON_DEDUP,
            store_capacity=STORE_CAPACITY,
            bcrypt_rounds=BCRYPT_ROUNDS,
        )

    def with_overrides(self, **overrides) -> "Settings":
        """Copy with the given non-None fields replaced."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})
