"""Command parser for CLI input."""

import shlex

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


class ParseError(Exception):
    """Raised when command parsing fails."""

    pass


_NO_ARG_COMMANDS = {
    "logout": LogoutCommand,
    "whoami": WhoamiCommand,
    "list": ListCommand,
    "storage": StorageCommand,
    "stats": StatsCommand,
    "demo": DemoCommand,
}


def parse_command(input_line: str) -> CommandRequest:
    """Parse user input into a CommandRequest object.

    Args:
        input_line: Raw user input from REPL

    Returns:
        CommandRequest object

    Raises:
        ParseError: If command syntax is invalid
    """
    if not input_line.strip():
        raise ParseError("Empty command")

    if input_line.split(None, 1)[0].lower() == "write":
        return _parse_write(input_line)

    try:
        tokens = shlex.split(input_line)
    except ValueError as e:
        raise ParseError(f"Invalid syntax: {e}")

    if not tokens:
        raise ParseError("Empty command")

    command_name = tokens[0].lower()
    args = tokens[1:]

    if command_name in _NO_ARG_COMMANDS:
        if args:
            raise ParseError(f"{command_name} takes no arguments")
        return _NO_ARG_COMMANDS[command_name]()
    elif command_name == "register":
        return _parse_register(args)
    elif command_name == "login":
        return _parse_login(args)
    elif command_name == "upload":
        return _parse_upload(args)
    elif command_name == "download":
        return _parse_download(args)
    elif command_name == "delete":
        return _parse_delete(args)
    else:
        raise ParseError(f"Unknown command: {command_name}")


def _parse_register(args: list[str]) -> RegisterCommand:
    """Parse 'register <username> <password>' command."""
    if len(args) != 2:
        raise ParseError("register requires exactly 2 arguments: <username> <password>")

    username, password = args
    return RegisterCommand(username=username, password=password)


def _parse_login(args: list[str]) -> LoginCommand:
    """Parse 'login <username> <password>' command."""
    if len(args) != 2:
        raise ParseError("login requires exactly 2 arguments: <username> <password>")

    username, password = args
    return LoginCommand(username=username, password=password)


def _parse_upload(args: list[str]) -> UploadCommand:
    """Parse 'upload <path> [name]' command."""
    if not 1 <= len(args) <= 2:
        raise ParseError("upload requires 1 or 2 arguments: <path> [name]")

    return UploadCommand(path=args[0], name=args[1] if len(args) > 1 else None)


def _parse_write(input_line: str) -> WriteCommand:
    """Parse 'write <name> <content...>' command.

    Only the name is shell-unquoted; content is the rest of the raw line,
    kept verbatim (inner spacing, quotes, apostrophes and trailing spaces).
    """
    parts = input_line.lstrip().split(None, 2)
    if len(parts) < 3:
        raise ParseError("write requires a file name and content: <name> <content...>")

    try:
        name_tokens = shlex.split(parts[1])
    except ValueError as e:
        raise ParseError(f"Invalid syntax: {e}")
    if len(name_tokens) != 1:
        raise ParseError("write requires a single file name: <name> <content...>")

    return WriteCommand(name=name_tokens[0], content=parts[2])


def _parse_download(args: list[str]) -> DownloadCommand:
    """Parse 'download <name> [output_path]' command."""
    if not 1 <= len(args) <= 2:
        raise ParseError("download requires 1 or 2 arguments: <name> [output_path]")

    return DownloadCommand(name=args[0], output_path=args[1] if len(args) > 1 else None)


def _parse_delete(args: list[str]) -> DeleteCommand:
    """Parse 'delete <name>' command."""
    if len(args) != 1:
        raise ParseError("delete requires exactly 1 argument: <name>")

    return DeleteCommand(name=args[0])
