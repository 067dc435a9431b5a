"""In-process client for the storage services, formatting results for the REPL."""

from pathlib import Path
from typing import Optional

from chunkstore.exceptions import ChunkStoreError
from common.logging_config import get_logger
from cli.constants import DEMO_CONTENT, DEMO_FILE_NAMES
from cli.utils import format_file_size, format_percent, render_table
from service.container import Services
from service.exceptions import InvalidSessionError, ServiceError
from service.repositories.session_repository import Session
from service.schemas.files import UploadFileResponse

logger = get_logger(__name__)


class StorageClient:
    """
    Holds the REPL's session token and calls the services with an explicit
    owner per operation. Every public method returns a printable message.
    """

    def __init__(self, services: Services):
        """
        Initialize storage client.

        Args:
            services: Services container sharing one chunk store
        """
        self.services = services
        self.token: Optional[str] = None
        self.username: Optional[str] = None

    def _require_session(self) -> Session:
        if self.token is None:
            raise InvalidSessionError("Please login first")
        return self.services.auth.resolve_session(self.token)

    def register(self, username: str, password: str) -> str:
        """
        Register a new user account.

        Args:
            username: Username for new account
            password: Password for new account

        Returns:
            Success or error message
        """
        try:
            result = self.services.auth.register_user(username, password)
            return f"Registration successful!\nUser ID: {result.user_id}"
        except ServiceError as e:
            return f"Registration failed: {e}"
        except Exception as e:
            logger.error(f"Unexpected error during registration: {e}", exc_info=True)
            return f"Unexpected error during registration: {e}"

    def login(self, username: str, password: str) -> str:
        try:
            result = self.services.auth.login_user(username, password)
        except ServiceError as e:
            return f"Login failed: {e}"
        except Exception as e:
            logger.error(f"Unexpected error during login: {e}", exc_info=True)
            return f"Unexpected error during login: {e}"

        if self.token is not None:
            self.services.auth.logout(self.token)
        self.token = result.token
        self.username = result.username
        return f"Login successful! Welcome {result.username}!"

    def logout(self) -> str:
        if self.token is None:
            return "Not logged in."
        self.services.auth.logout(self.token)
        username = self.username
        self.token = None
        self.username = None
        return f"User {username} logged out successfully!"

    def whoami(self) -> str:
        try:
            session = self._require_session()
        except ServiceError as e:
            return f"Error: {e}"
        return f"Logged in as {session.username} (ID: {session.user_id})"

    def upload(self, path: str, name: Optional[str] = None) -> str:
        """
        Upload a local file.

        Args:
            path: Local file path
            name: Stored file name (defaults to the file's base name)

        Returns:
            Success message with chunk and dedup counts, or error message
        """
        file_path = Path(path).expanduser()
        if not file_path.is_file():
            return f"Error: File not found: {path}"
        try:
            data = file_path.read_bytes()
        except OSError as e:
            return f"Error reading file: {e}"
        return self._store(name or file_path.name, data)

    def write(self, name: str, content: str) -> str:
        """Store inline text under name."""
        return self._store(name, content.encode('utf-8'))

    def _store(self, name: str, data: bytes) -> str:
        try:
            session = self._require_session()
            result = self.services.files.upload_file(session.user_id, name, data)
        except (ServiceError, ChunkStoreError) as e:
            return f"Error uploading {name}: {e}"
        except Exception as e:
            logger.error(f"Unexpected error uploading {name}: {e}", exc_info=True)
            return f"Unexpected error uploading {name}: {e}"
        return self._format_upload(result)

    @staticmethod
    def _format_upload(result: UploadFileResponse) -> str:
        return (
            f"File '{result.name}' uploaded successfully! (ID: {result.file_id[:8]}..., "
            f"Size: {format_file_size(result.size)})\n"
            f"Split into {result.chunk_count} chunk(s): {result.new_chunks} new, "
            f"{result.deduplicated_chunks} deduplicated."
        )

    def download(self, name: str, output_path: Optional[str] = None) -> str:
        """
        Download a file, writing it to output_path or returning its content.

        Args:
            name: Stored file name
            output_path: Local destination (file or existing directory)

        Returns:
            Success message or error message
        """
        try:
            session = self._require_session()
            data = self.services.files.download_file(session.user_id, name)
        except (ServiceError, ChunkStoreError) as e:
            return f"Error: {e}"
        except Exception as e:
            logger.error(f"Unexpected error downloading {name}: {e}", exc_info=True)
            return f"Unexpected error downloading file: {e}"

        if output_path is None:
            text = data.decode('utf-8', errors='replace')
            return (
                f"File '{name}' downloaded successfully!\n"
                f"File Content:\n{'-' * 40}\n{text}\n{'-' * 40}"
            )

        output_file = Path(output_path).expanduser()
        try:
            if output_file.is_dir():
                output_file = output_file / name
            output_file.parent.mkdir(parents=True, exist_ok=True)
            output_file.write_bytes(data)
        except OSError as e:
            return f"Error writing file: {e}"
        return f"Downloaded: {name} ({format_file_size(len(data))})\nSaved to: {output_file.absolute()}"

    def delete(self, name: str) -> str:
        try:
            session = self._require_session()
            result = self.services.files.delete_file(session.user_id, name)
        except (ServiceError, ChunkStoreError) as e:
            return f"Error: {e}"
        except Exception as e:
            logger.error(f"Unexpected error deleting {name}: {e}", exc_info=True)
            return f"Unexpected error deleting file: {e}"
        return (
            f"File '{result.name}' deleted successfully!\n"
            f"Released {result.released_chunks} chunk reference(s), purged {result.purged_chunks} chunk(s)."
        )

    def list_files(self) -> str:
        try:
            session = self._require_session()
            listing = self.services.files.list_files(session.user_id)
        except ServiceError as e:
            return f"Error: {e}"

        if not listing.files:
            return "No files found!"

        output = [f"Found {len(listing.files)} file(s):\n"]
        for position, file_meta in enumerate(listing.files, start=1):
            output.append(
                f"  {position}. {file_meta.name} (ID: {file_meta.file_id[:8]}...)\n"
                f"     Size: {format_file_size(file_meta.size)}\n"
                f"     Chunks: {file_meta.chunk_count}\n"
                f"     Uploaded: {file_meta.created_at}"
            )
        return '\n'.join(output)

    def file_names(self) -> list[str]:
        """Names of the logged in user's files (empty when logged out)."""
        if self.token is None:
            return []
        try:
            session = self._require_session()
        except ServiceError:
            return []
        return [f.name for f in self.services.files.list_files(session.user_id).files]

    def storage_info(self) -> str:
        try:
            session = self._require_session()
            info = self.services.accounting.storage_info(session.user_id)
        except ServiceError as e:
            return f"Error: {e}"
        return render_table("Storage Info", [
            ("User", info.username),
            ("Storage Used", f"{info.storage_used} bytes"),
            ("Storage Limit", f"{info.storage_limit} bytes"),
            ("Available", f"{info.available} bytes"),
            ("Usage", format_percent(info.usage_percent)),
        ])

    def dedup_stats(self) -> str:
        stats = self.services.files.dedup_stats()
        rows = [
            ("Total Chunks Referenced", str(stats.total_references)),
            ("Unique Chunks Stored", str(stats.unique_chunks)),
            ("Logical Bytes", str(stats.bytes_stored_logical)),
            ("Stored Bytes", str(stats.bytes_stored_unique)),
            ("Space Saved", f"{stats.saved_bytes} bytes"),
        ]
        if stats.total_references > 0:
            rows.append(("Deduplication Efficiency", format_percent(stats.efficiency_percent)))
        return render_table("Deduplication Statistics", rows)

    def demo(self) -> str:
        """Upload the same content under two names and report the dedup effect."""
        try:
            self._require_session()
        except ServiceError as e:
            return f"Error: {e}"

        output = [
            "This will upload the same file content twice to demonstrate deduplication.",
        ]
        for name in DEMO_FILE_NAMES:
            output.append(self.write(name, DEMO_CONTENT))
        output.append(self.dedup_stats())
        return '\n'.join(output)
