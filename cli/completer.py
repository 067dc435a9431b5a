"""Custom completer for DedupCloud CLI with path and stored-file completion."""

from pathlib import Path
from typing import Callable, Iterable

from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.document import Document

from cli.constants import COMMANDS, FILE_NAME_COMMANDS


class DedupCloudCompleter(Completer):
    """
    Custom completer that provides:
    - Command name completion for the first token
    - Local path completion for the 'upload' command's first argument
    - Stored file name completion for 'download' and 'delete'
    """

    def __init__(self, file_names: Callable[[], list[str]] = lambda: []):
        """
        Args:
            file_names: Returns the logged in user's stored file names
        """
        self.file_names = file_names

    def get_completions(
        self, document: Document, complete_event
    ) -> Iterable[Completion]:
        text = document.text_before_cursor
        tokens = text.split()

        is_typing_new_token = text.endswith(" ") or not tokens

        if not tokens or (len(tokens) == 1 and not is_typing_new_token):
            yield from self._complete_commands(tokens[0] if tokens else "")
            return

        command = tokens[0].lower()
        current_word = "" if is_typing_new_token else tokens[-1]
        arg_position = len(tokens) - (1 if is_typing_new_token else 2)

        if arg_position != 0:
            return

        if command == "upload":
            yield from self._complete_local_paths(current_word)
        elif command in FILE_NAME_COMMANDS:
            yield from self._complete_stored_names(current_word)

    def _complete_commands(self, partial: str) -> Iterable[Completion]:
        """Complete command names matching the partial input."""
        partial_lower = partial.lower()
        for cmd in COMMANDS:
            if cmd.startswith(partial_lower):
                yield Completion(cmd, start_position=-len(partial))

    def _complete_stored_names(self, partial: str) -> Iterable[Completion]:
        for name in sorted(self.file_names()):
            if name.startswith(partial):
                yield Completion(name, start_position=-len(partial))

    def _complete_local_paths(self, partial: str) -> Iterable[Completion]:
        """
        Complete paths relative to the working directory.

        Directories are offered with a trailing '/' so completion can continue
        into them.
        """
        if "/" in partial:
            directory_part, _, name_part = partial.rpartition("/")
            base = Path(directory_part or "/")
            prefix = f"{directory_part}/"
        else:
            base, name_part, prefix = Path.cwd(), partial, ""

        if not base.is_dir():
            return

        try:
            entries = sorted(base.iterdir())
        except OSError:
            return

        for item in entries:
            if not item.name.startswith(name_part):
                continue
            suffix = "/" if item.is_dir() else ""
            yield Completion(f"{prefix}{item.name}{suffix}", start_position=-len(partial))
