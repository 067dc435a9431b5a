"""User repository: in-memory account records and quota counters."""

import threading
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Optional

from common.logging_config import get_logger
from service.exceptions import UserAlreadyExistsError

logger = get_logger(__name__)


@dataclass
class User:
    user_id: str
    username: str
    password_hash: str
    storage_limit: int
    created_at: datetime
    storage_used: int = 0


class UserRepository:
    def __init__(self):
        self._users: Dict[str, User] = {}
        self._by_username: Dict[str, str] = {}
        self._lock = threading.RLock()

    def create_user(
        self,
        user_id: str,
        username: str,
        password_hash: str,
        storage_limit: int,
        created_at: datetime,
    ) -> User:
        logger.debug(f"Creating user: {username} [user_id={user_id}]")
        with self._lock:
            if username in self._by_username:
                raise UserAlreadyExistsError(f"Username '{username}' already exists")
            user = User(
                user_id=user_id,
                username=username,
                password_hash=password_hash,
                storage_limit=storage_limit,
                created_at=created_at,
            )
            self._users[user_id] = user
            self._by_username[username] = user_id
            return user

    def get_by_username(self, username: str) -> Optional[User]:
        with self._lock:
            user_id = self._by_username.get(username)
            return self._users.get(user_id) if user_id is not None else None

    def get_by_user_id(self, user_id: str) -> Optional[User]:
        with self._lock:
            return self._users.get(user_id)

    def adjust_storage_used(self, user_id: str, delta: int) -> int:
        """
        Add delta (may be negative) to the user's storage counter, clamped at zero.

        Returns:
            New storage_used value

        Raises:
            KeyError: If the user does not exist
        """
        with self._lock:
            user = self._users[user_id]
            user.storage_used = max(0, user.storage_used + delta)
            return user.storage_used

    def reserve_storage(self, user_id: str, size: int) -> bool:
        """
        Atomically add size to storage_used if it stays within the limit.

        Returns:
            True if reserved, False if the limit would be exceeded
        """
        with self._lock:
            user = self._users[user_id]
            if user.storage_used + size > user.storage_limit:
                return False
            user.storage_used += size
            return True

    def count(self) -> int:
        with self._lock:
            return len(self._users)
