"""Password hashing and session token helpers."""

import uuid

import bcrypt

from common.constants import DEFAULT_BCRYPT_ROUNDS, SESSION_TOKEN_PREFIX


def hash_password(password: str, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> str:
    """
    Hash a password using bcrypt.

    Args:
        password: Plain text password to hash
        rounds: bcrypt cost factor

    Returns:
        Bcrypt hash of the password
    """
    password_bytes = password.encode('utf-8')
    salt = bcrypt.gensalt(rounds=rounds)
    hashed = bcrypt.hashpw(password_bytes, salt)
    return hashed.decode('utf-8')


def verify_password(password: str, password_hash: str) -> bool:
    """
    Verify a password against a bcrypt hash.

    Args:
        password: Plain text password to verify
        password_hash: Bcrypt hash to verify against

    Returns:
        True if password matches hash, False otherwise
    """
    password_bytes = password.encode('utf-8')
    hash_bytes = password_hash.encode('utf-8')
    return bcrypt.checkpw(password_bytes, hash_bytes)


def generate_session_token() -> str:
    """
    Generate a new session token with the configured prefix.

    Returns:
        Token string in format: {prefix}{uuid4}
    """
    return f"{SESSION_TOKEN_PREFIX}{uuid.uuid4()}"


def generate_uuid() -> str:
    return str(uuid.uuid4())
