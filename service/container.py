"""Wires one shared chunk store into the account and file services."""

from dataclasses import dataclass
from typing import Optional

from chunkstore.chunk_store import ChunkStore
from chunkstore.content_addresser import get_addresser
from chunkstore.file_assembler import FileAssembler
from common.logging_config import get_logger
from service.config import Settings
from service.repositories import FileRepository, SessionRepository, UserRepository
from service.services import AccountingService, AuthService, FileService

logger = get_logger(__name__)


@dataclass
class Services:
    """
    Handles to every service sharing one store. Passed explicitly to callers.
    """
    store: ChunkStore
    assembler: FileAssembler
    auth: AuthService
    accounting: AccountingService
    files: FileService


def build_services(settings: Optional[Settings] = None) -> Services:
    """
    Build a store, an assembler and the services around them.

    Args:
        settings: Settings to use (defaults to Settings.from_env())

    Returns:
        Services container

    Raises:
        InvalidConfigurationError: If the chunk size, addresser or capacity is invalid
    """
    if settings is None:
        settings = Settings.from_env()

    store = ChunkStore(
        capacity_bytes=settings.store_capacity,
        verify_on_dedup=settings.verify_on_dedup,
    )
    assembler = FileAssembler(
        store,
        addresser=get_addresser(settings.addresser),
        chunk_size=settings.chunk_size,
    )

    user_repo = UserRepository()
    accounting = AccountingService(user_repo)
    services = Services(
        store=store,
        assembler=assembler,
        auth=AuthService(
            user_repo,
            SessionRepository(),
            storage_limit=settings.storage_limit,
            bcrypt_rounds=settings.bcrypt_rounds,
        ),
        accounting=accounting,
        files=FileService(assembler, FileRepository(), accounting),
    )
    logger.info(
        f"Services initialized [chunk_size={settings.chunk_size}, addresser={settings.addresser}, "
        f"verify_on_dedup={settings.verify_on_dedup}, capacity={settings.store_capacity}]"
    )
    return services
