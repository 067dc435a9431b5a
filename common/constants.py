"""Project-wide constants (chunking, addressing and account defaults)."""

DEFAULT_CHUNK_SIZE_BYTES: int = 50

DEFAULT_ADDRESSER: str = "sha256"

DEFAULT_STORAGE_LIMIT_BYTES: int = 1_000_000  # 1 MB per account

DEFAULT_BCRYPT_ROUNDS: int = 12

POLYNOMIAL_HASH_BASE: int = 31
POLYNOMIAL_HASH_MODULUS: int = 1_000_000_007

SESSION_TOKEN_PREFIX: str = "dc_"

KEY_DISPLAY_LENGTH: int = 12
