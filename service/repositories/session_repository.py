"""Session repository: live session tokens mapped to user ids."""

import threading
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Optional

from common.logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class Session:
    token: str
    user_id: str
    username: str
    created_at: datetime


class SessionRepository:
    def __init__(self):
        self._sessions: Dict[str, Session] = {}
        self._lock = threading.Lock()

    def create_session(self, session: Session) -> Session:
        with self._lock:
            self._sessions[session.token] = session
        return session

    def get_by_token(self, token: str) -> Optional[Session]:
        with self._lock:
            return self._sessions.get(token)

    def delete_session(self, token: str) -> bool:
        with self._lock:
            return self._sessions.pop(token, None) is not None
