"""Per-account storage accounting: bytes used against bytes allowed."""

from common.logging_config import get_logger
from service.exceptions import InvalidSessionError, QuotaExceededError
from service.repositories.user_repository import UserRepository
from service.schemas.stats import StorageInfoResponse

logger = get_logger(__name__)


class AccountingService:
    """
    Tracks logical bytes per account. Usage is charged at the full file size
    regardless of how much of the file deduplicated against stored chunks.
    """

    def __init__(self, user_repo: UserRepository):
        self.user_repo = user_repo

    def has_space_for(self, user_id: str, size: int) -> bool:
        user = self.user_repo.get_by_user_id(user_id)
        if user is None:
            return False
        return user.storage_used + size <= user.storage_limit

    def _require_user(self, user_id: str) -> None:
        if self.user_repo.get_by_user_id(user_id) is None:
            logger.warning(f"Unknown account [user_id={user_id}]")
            raise InvalidSessionError(f"Unknown account: {user_id}")

    def charge(self, user_id: str, size: int) -> None:
        """
        Reserve size bytes for the user.

        Raises:
            InvalidSessionError: If the account does not exist
            QuotaExceededError: If the reservation would exceed the limit
        """
        self._require_user(user_id)
        if not self.user_repo.reserve_storage(user_id, size):
            logger.warning(f"Quota exceeded [user_id={user_id}, requested={size}]")
            raise QuotaExceededError("Not enough storage space")
        logger.debug(f"Charged {size} bytes [user_id={user_id}]")

    def credit(self, user_id: str, size: int) -> None:
        self._require_user(user_id)
        self.user_repo.adjust_storage_used(user_id, -size)
        logger.debug(f"Credited {size} bytes [user_id={user_id}]")

    def storage_info(self, user_id: str) -> StorageInfoResponse:
        user = self.user_repo.get_by_user_id(user_id)
        if user is None:
            raise InvalidSessionError(f"Unknown account: {user_id}")
        usage = user.storage_used * 100.0 / user.storage_limit if user.storage_limit else 0.0
        return StorageInfoResponse(
            username=user.username,
            storage_used=user.storage_used,
            storage_limit=user.storage_limit,
            available=max(0, user.storage_limit - user.storage_used),
            usage_percent=usage,
        )
