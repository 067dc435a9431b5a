"""File service: per-owner named files on top of the deduplicating core."""

import threading
from datetime import datetime, timezone
from typing import Optional

from chunkstore.file_assembler import FileAssembler
from common.logging_config import get_logger
from service.auth import generate_uuid
from service.exceptions import DuplicateFileNameError, StoredFileNotFoundError
from service.repositories.file_repository import FileRecord, FileRepository
from service.schemas.files import (
    DeleteFileResponse,
    FileMetadataResponse,
    ListFilesResponse,
    UploadFileResponse,
)
from service.schemas.stats import DedupStatsResponse
from service.services.accounting_service import AccountingService

logger = get_logger(__name__)


class FileService:
    def __init__(
        self,
        assembler: FileAssembler,
        file_repo: FileRepository,
        accounting: AccountingService,
    ):
        self.assembler = assembler
        self.file_repo = file_repo
        self.accounting = accounting

    def upload_file(
        self,
        owner_id: str,
        file_name: str,
        data: bytes,
        cancel_event: Optional[threading.Event] = None,
    ) -> UploadFileResponse:
        """
        Store data as a new file of owner_id.

        Quota is reserved and the name checked before any chunk is stored. If
        chunking or registration fails, stored chunks are released and the
        reservation is returned.

        Raises:
            QuotaExceededError: If the file does not fit the owner's limit
            DuplicateFileNameError: If the owner already has file_name
            ChunkStoreError: Propagated from the core
        """
        size = len(data)
        logger.info(f"Uploading file '{file_name}' [owner_id={owner_id}, size={size}]")

        self.accounting.charge(owner_id, size)
        try:
            if self.file_repo.find_by_owner_and_name(owner_id, file_name) is not None:
                logger.warning(f"Upload rejected: '{file_name}' already exists [owner_id={owner_id}]")
                raise DuplicateFileNameError(f"File '{file_name}' already exists")

            result = self.assembler.upload(data, cancel_event=cancel_event)
        except BaseException:
            self.accounting.credit(owner_id, size)
            raise

        record = FileRecord(
            file_id=generate_uuid(),
            owner_id=owner_id,
            name=file_name,
            size=size,
            manifest=result.manifest,
            created_at=datetime.now(timezone.utc),
        )
        try:
            self.file_repo.create_file(record)
        except BaseException:
            logger.error(f"Registration of '{file_name}' failed, releasing its chunks")
            self.assembler.delete(result.manifest)
            self.accounting.credit(owner_id, size)
            raise

        logger.info(
            f"File '{file_name}' uploaded successfully [file_id={record.file_id}, "
            f"chunks={result.manifest.chunk_count}]"
        )
        return UploadFileResponse(
            file_id=record.file_id,
            name=file_name,
            size=size,
            chunk_count=result.manifest.chunk_count,
            new_chunks=result.inserted_count,
            deduplicated_chunks=result.deduplicated_count,
        )

    def download_file(self, owner_id: str, file_name: str) -> bytes:
        """
        Reconstruct a file of owner_id.

        Raises:
            StoredFileNotFoundError: If the owner has no such file
            ReconstructionFailedError: If the store lost one of its chunks
        """
        record = self._get_record(owner_id, file_name)
        data = self.assembler.download(record.manifest)
        logger.info(f"File '{file_name}' downloaded [file_id={record.file_id}, size={len(data)}]")
        return data

    def delete_file(self, owner_id: str, file_name: str) -> DeleteFileResponse:
        """
        Remove a file and release its chunk references.

        The catalog entry is hidden first so concurrent deletes of the same
        file release its manifest once; its name stays reserved meanwhile. If
        the release fails the entry reappears in its original position and the
        error propagates.

        Raises:
            StoredFileNotFoundError: If the owner has no such file
            ChunkNotFoundError: If the store holds fewer references than the manifest
        """
        record = self.file_repo.begin_delete(owner_id, file_name)
        if record is None:
            logger.warning(f"File not found: '{file_name}' [owner_id={owner_id}]")
            raise StoredFileNotFoundError(f"File '{file_name}' not found")
        try:
            purged = self.assembler.delete(record.manifest)
        except BaseException:
            logger.error(f"Delete of '{file_name}' failed, keeping catalog entry [file_id={record.file_id}]")
            self.file_repo.cancel_delete(owner_id, file_name)
            raise
        self.file_repo.finish_delete(owner_id, file_name)
        self.accounting.credit(owner_id, record.size)
        logger.info(f"File '{file_name}' deleted [file_id={record.file_id}, purged_chunks={purged}]")
        return DeleteFileResponse(
            file_id=record.file_id,
            name=record.name,
            size=record.size,
            released_chunks=record.manifest.chunk_count,
            purged_chunks=purged,
        )

    def list_files(self, owner_id: str) -> ListFilesResponse:
        return ListFilesResponse(
            files=[
                FileMetadataResponse(
                    file_id=record.file_id,
                    name=record.name,
                    size=record.size,
                    chunk_count=record.manifest.chunk_count,
                    owner_id=record.owner_id,
                    created_at=record.created_at.isoformat(),
                )
                for record in self.file_repo.list_by_owner(owner_id)
            ]
        )

    def dedup_stats(self) -> DedupStatsResponse:
        return DedupStatsResponse.from_stats(self.assembler.stats())

    def _get_record(self, owner_id: str, file_name: str) -> FileRecord:
        record = self.file_repo.find_by_owner_and_name(owner_id, file_name)
        if record is None:
            logger.warning(f"File not found: '{file_name}' [owner_id={owner_id}]")
            raise StoredFileNotFoundError(f"File '{file_name}' not found")
        return record
