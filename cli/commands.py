"""Command handler functions for CLI operations."""

from pathlib import Path
from typing import Optional

from common.logging_config import get_logger
from cli.client import StorageClient
from cli.config import Config
from cli.models import (
    CommandRequest,
    DeleteCommand,
    DemoCommand,
    DownloadCommand,
    ListCommand,
    LoginCommand,
    LogoutCommand,
    RegisterCommand,
    StatsCommand,
    StorageCommand,
    UploadCommand,
    WhoamiCommand,
    WriteCommand,
)
from service.container import build_services

logger = get_logger(__name__)

DEFAULT_CONFIG_PATH = Path.home() / '.dedupcloud' / 'config.json'

_client: Optional[StorageClient] = None


def get_client() -> StorageClient:
    """
    Get or create the REPL's StorageClient instance.

    Returns:
        StorageClient instance
    """
    global _client
    if _client is None:
        logger.debug("Creating new StorageClient instance")
        config = Config(DEFAULT_CONFIG_PATH)
        _client = StorageClient(build_services(config.get_settings()))
    return _client


def set_client(client: Optional[StorageClient]) -> None:
    """Replace the REPL's StorageClient (None forces a rebuild on next use)."""
    global _client
    _client = client


def handle_register(cmd: RegisterCommand, client: Optional[StorageClient] = None) -> str:
    """
    Handle 'register' command.

    Args:
        cmd: RegisterCommand with username and password
        client: Optional StorageClient for dependency injection (testing)

    Returns:
        Success or error message
    """
    if client is None:
        client = get_client()
    return client.register(cmd.username, cmd.password)


def handle_login(cmd: LoginCommand, client: Optional[StorageClient] = None) -> str:
    if client is None:
        client = get_client()
    return client.login(cmd.username, cmd.password)


def handle_logout(cmd: LogoutCommand, client: Optional[StorageClient] = None) -> str:
    if client is None:
        client = get_client()
    return client.logout()


def handle_whoami(cmd: WhoamiCommand, client: Optional[StorageClient] = None) -> str:
    if client is None:
        client = get_client()
    return client.whoami()


def handle_upload(cmd: UploadCommand, client: Optional[StorageClient] = None) -> str:
    """
    Handle 'upload' command.

    Args:
        cmd: UploadCommand with local path and optional stored name
        client: Optional StorageClient for dependency injection (testing)

    Returns:
        Success or error message with chunk counts
    """
    logger.info(f"Executing upload command: path={cmd.path} name={cmd.name}")
    if client is None:
        client = get_client()
    result = client.upload(cmd.path, cmd.name)
    logger.debug("Upload command completed")
    return result


def handle_write(cmd: WriteCommand, client: Optional[StorageClient] = None) -> str:
    logger.info(f"Executing write command: name={cmd.name} length={len(cmd.content)}")
    if client is None:
        client = get_client()
    return client.write(cmd.name, cmd.content)


def handle_download(cmd: DownloadCommand, client: Optional[StorageClient] = None) -> str:
    """
    Handle 'download' command.

    Args:
        cmd: DownloadCommand with name and optional output_path
        client: Optional StorageClient for dependency injection (testing)

    Returns:
        File content, save location, or error message
    """
    logger.info(f"Executing download command: name={cmd.name} output_path={cmd.output_path}")
    if client is None:
        client = get_client()
    result = client.download(cmd.name, cmd.output_path)
    logger.debug("Download command completed")
    return result


def handle_delete(cmd: DeleteCommand, client: Optional[StorageClient] = None) -> str:
    if client is None:
        client = get_client()
    return client.delete(cmd.name)


def handle_list(cmd: ListCommand, client: Optional[StorageClient] = None) -> str:
    if client is None:
        client = get_client()
    return client.list_files()


def handle_storage(cmd: StorageCommand, client: Optional[StorageClient] = None) -> str:
    if client is None:
        client = get_client()
    return client.storage_info()


def handle_stats(cmd: StatsCommand, client: Optional[StorageClient] = None) -> str:
    if client is None:
        client = get_client()
    return client.dedup_stats()


def handle_demo(cmd: DemoCommand, client: Optional[StorageClient] = None) -> str:
    logger.info("Executing demo command")
    if client is None:
        client = get_client()
    return client.demo()


_HANDLERS = {
    RegisterCommand: handle_register,
    LoginCommand: handle_login,
    LogoutCommand: handle_logout,
    WhoamiCommand: handle_whoami,
    UploadCommand: handle_upload,
    WriteCommand: handle_write,
    DownloadCommand: handle_download,
    DeleteCommand: handle_delete,
    ListCommand: handle_list,
    StorageCommand: handle_storage,
    StatsCommand: handle_stats,
    DemoCommand: handle_demo,
}


def dispatch_command(cmd_obj: CommandRequest, client: Optional[StorageClient] = None) -> str:
    """Dispatch parsed command to appropriate handler."""
    handler = _HANDLERS.get(type(cmd_obj))
    if handler is None:
        return f"Unknown command type: {type(cmd_obj)}"
    return handler(cmd_obj, client=client)
