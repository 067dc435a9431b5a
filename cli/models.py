"""Command request data types for CLI."""

from dataclasses import dataclass
from typing import Literal


@dataclass(frozen=True)
class RegisterCommand:
    """Register a new user account."""

    username: str
    password: str
    command: Literal["register"] = "register"


@dataclass(frozen=True)
class LoginCommand:
    """Login with username and password."""

    username: str
    password: str
    command: Literal["login"] = "login"


@dataclass(frozen=True)
class LogoutCommand:
    """End the current session."""

    command: Literal["logout"] = "logout"


@dataclass(frozen=True)
class WhoamiCommand:
    """Show the logged in user."""

    command: Literal["whoami"] = "whoami"


@dataclass(frozen=True)
class UploadCommand:
    """Upload a local file, optionally under another name."""

    path: str
    name: str | None = None
    command: Literal["upload"] = "upload"


@dataclass(frozen=True)
class WriteCommand:
    """Store inline text as a file."""

    name: str
    content: str
    command: Literal["write"] = "write"


@dataclass(frozen=True)
class DownloadCommand:
    """Download file by name."""

    name: str
    output_path: str | None = None
    command: Literal["download"] = "download"


@dataclass(frozen=True)
class DeleteCommand:
    """Delete file by name."""

    name: str
    command: Literal["delete"] = "delete"


@dataclass(frozen=True)
class ListCommand:
    """List the user's files."""

    command: Literal["list"] = "list"


@dataclass(frozen=True)
class StorageCommand:
    """Show the user's storage usage."""

    command: Literal["storage"] = "storage"


@dataclass(frozen=True)
class StatsCommand:
    """Show deduplication statistics."""

    command: Literal["stats"] = "stats"


@dataclass(frozen=True)
class DemoCommand:
    """Upload the same content twice and report the dedup effect."""

    command: Literal["demo"] = "demo"


CommandRequest = (
    RegisterCommand
    | LoginCommand
    | LogoutCommand
    | WhoamiCommand
    | UploadCommand
    | WriteCommand
    | DownloadCommand
    | DeleteCommand
    | ListCommand
    | StorageCommand
    | StatsCommand
    | DemoCommand
)
