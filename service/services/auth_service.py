"""Authentication service: registration, login and session resolution."""

from datetime import datetime, timezone

from common.constants import DEFAULT_BCRYPT_ROUNDS, DEFAULT_STORAGE_LIMIT_BYTES
from common.logging_config import get_logger
from service.auth import generate_session_token, generate_uuid, hash_password, verify_password
from service.exceptions import InvalidCredentialsError, InvalidSessionError, UserAlreadyExistsError
from service.repositories.session_repository import Session, SessionRepository
from service.repositories.user_repository import UserRepository
from service.schemas.auth import LoginResponse, RegisterResponse

logger = get_logger(__name__)


class AuthService:
    def __init__(
        self,
        user_repo: UserRepository,
        session_repo: SessionRepository,
        storage_limit: int = DEFAULT_STORAGE_LIMIT_BYTES,
        bcrypt_rounds: int = DEFAULT_BCRYPT_ROUNDS,
    ):
        self.user_repo = user_repo
        self.session_repo = session_repo
        self.storage_limit = storage_limit
        self.bcrypt_rounds = bcrypt_rounds

    def register_user(self, username: str, password: str) -> RegisterResponse:
        logger.info(f"Attempting to register user: {username}")
        if not username or not username.strip():
            raise InvalidCredentialsError("Username cannot be empty")
        if not password:
            raise InvalidCredentialsError("Password cannot be empty")

        if self.user_repo.get_by_username(username) is not None:
            logger.warning(f"Registration failed: username '{username}' already exists")
            raise UserAlreadyExistsError(f"Username '{username}' already exists")

        user = self.user_repo.create_user(
            user_id=generate_uuid(),
            username=username,
            password_hash=hash_password(password, rounds=self.bcrypt_rounds),
            storage_limit=self.storage_limit,
            created_at=datetime.now(timezone.utc),
        )
        logger.info(f"Successfully registered user: {username} [user_id={user.user_id}]")
        return RegisterResponse(user_id=user.user_id, username=user.username)

    def login_user(self, username: str, password: str) -> LoginResponse:
        logger.info(f"Login attempt for user: {username}")
        user = self.user_repo.get_by_username(username)
        if user is None:
            logger.warning(f"Login failed: username '{username}' not found")
            raise InvalidCredentialsError("Invalid username or password")

        if not verify_password(password, user.password_hash):
            logger.warning(f"Login failed: invalid password for username '{username}'")
            raise InvalidCredentialsError("Invalid username or password")

        session = self.session_repo.create_session(
            Session(
                token=generate_session_token(),
                user_id=user.user_id,
                username=user.username,
                created_at=datetime.now(timezone.utc),
            )
        )
        logger.info(f"Successfully logged in user: {username} [user_id={user.user_id}]")
        return LoginResponse(token=session.token, user_id=user.user_id, username=user.username)

    def logout(self, token: str) -> bool:
        removed = self.session_repo.delete_session(token)
        if removed:
            logger.info("Session closed")
        return removed

    def resolve_session(self, token: str) -> Session:
        """
        Look up the live session for a token.

        Raises:
            InvalidSessionError: If the token is unknown or logged out
        """
        session = self.session_repo.get_by_token(token) if token else None
        if session is None:
            logger.warning("Session validation failed: invalid token")
            raise InvalidSessionError("Please login first")
        return session
