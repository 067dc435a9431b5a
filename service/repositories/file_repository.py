"""File repository: per-owner catalog of named manifests."""

import threading
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, List, Optional, Set, Tuple

from chunkstore.file_assembler import Manifest
from common.logging_config import get_logger
from service.exceptions import DuplicateFileNameError

logger = get_logger(__name__)


@dataclass(frozen=True)
class FileRecord:
    file_id: str
    owner_id: str
    name: str
    size: int
    manifest: Manifest
    created_at: datetime


class FileRepository:
    def __init__(self):
        self._files: Dict[Tuple[str, str], FileRecord] = {}
        self._deleting: Set[Tuple[str, str]] = set()
        self._lock = threading.RLock()

    def create_file(self, record: FileRecord) -> FileRecord:
        """
        Register a file under its owner and name.

        Raises:
            DuplicateFileNameError: If the owner already has a file with that name
        """
        with self._lock:
            slot = (record.owner_id, record.name)
            if slot in self._files:
                raise DuplicateFileNameError(f"File '{record.name}' already exists")
            self._files[slot] = record
        logger.debug(f"Registered file {record.name} [file_id={record.file_id}, owner_id={record.owner_id}]")
        return record

    def find_by_owner_and_name(self, owner_id: str, name: str) -> Optional[FileRecord]:
        with self._lock:
            slot = (owner_id, name)
            if slot in self._deleting:
                return None
            return self._files.get(slot)

    def list_by_owner(self, owner_id: str) -> List[FileRecord]:
        """Files of the owner in registration order."""
        with self._lock:
            return [
                record
                for slot, record in self._files.items()
                if slot[0] == owner_id and slot not in self._deleting
            ]

    def begin_delete(self, owner_id: str, name: str) -> Optional[FileRecord]:
        """
        Hide a file from lookups while its chunks are released.

        The entry keeps its name and its place in registration order until
        finish_delete() or cancel_delete(). A second begin_delete() of the same
        file returns None.

        Returns:
            The record being deleted, or None if it does not exist
        """
        with self._lock:
            slot = (owner_id, name)
            record = self._files.get(slot)
            if record is None or slot in self._deleting:
                return None
            self._deleting.add(slot)
            return record

    def finish_delete(self, owner_id: str, name: str) -> None:
        with self._lock:
            slot = (owner_id, name)
            self._deleting.discard(slot)
            record = self._files.pop(slot)
        logger.debug(f"Unregistered file {name} [file_id={record.file_id}, owner_id={owner_id}]")

    def cancel_delete(self, owner_id: str, name: str) -> None:
        """Make a file begun for deletion visible again, in its original position."""
        with self._lock:
            self._deleting.discard((owner_id, name))

    def count(self) -> int:
        with self._lock:
            return len(self._files) - len(self._deleting)
