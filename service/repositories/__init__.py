"""Repository layer for in-memory account, session and file data."""

from service.repositories.user_repository import UserRepository
from service.repositories.file_repository import FileRepository
from service.repositories.session_repository import SessionRepository

__all__ = [
    "UserRepository",
    "FileRepository",
    "SessionRepository",
]
