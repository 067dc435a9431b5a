"""REPL with prompt_toolkit for user interaction."""

import os
import sys
from typing import Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.history import InMemoryHistory

from cli.client import StorageClient
from cli.commands import dispatch_command, get_client
from cli.completer import DedupCloudCompleter
from cli.constants import (
    HELP_TEXT,
    LOGO,
    PROMPT_TEXT,
    STYLE,
    WELCOME_HELP,
    WELCOME_TITLE,
)
from cli.parser import ParseError, parse_command


def clear_screen() -> None:
    """Clear the terminal screen (cross-platform)."""
    if sys.platform == "win32":
        os.system("cls")
    else:
        os.system("clear")


def show_welcome() -> None:
    print(LOGO)
    print(WELCOME_TITLE)
    print(WELCOME_HELP)


def _prompt_fragments(client: StorageClient) -> list[tuple[str, str]]:
    if client.username:
        return [("class:prompt", PROMPT_TEXT.replace(">", f"({client.username})>", 1))]
    return [("class:prompt", PROMPT_TEXT)]


def repl_loop(client: Optional[StorageClient] = None) -> None:
    """Start interactive REPL with prompt_toolkit."""
    if client is None:
        client = get_client()

    session: PromptSession = PromptSession(
        completer=DedupCloudCompleter(client.file_names),
        history=InMemoryHistory(),
        style=STYLE,
    )

    clear_screen()
    show_welcome()

    while True:
        try:
            user_input = session.prompt(_prompt_fragments(client))
            command = user_input.strip()

            if not command:
                continue

            if command == "exit":
                print("Thank you for using DedupCloud!")
                break

            if command == "help":
                print(HELP_TEXT)
                continue

            if command == "clear":
                clear_screen()
                show_welcome()
                continue

            cmd_obj = parse_command(user_input)
            print(dispatch_command(cmd_obj, client=client))

        except ParseError as e:
            print(f"Error: {e}")
        except KeyboardInterrupt:
            continue
        except EOFError:
            print("\nGoodbye!")
            break
