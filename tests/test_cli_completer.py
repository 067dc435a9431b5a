"""Tests for DedupCloudCompleter."""

import pytest

from prompt_toolkit.document import Document

from cli.completer import DedupCloudCompleter
from cli.constants import COMMANDS


@pytest.fixture
def completer():
    """Completer whose stored file names are fixed."""
    return DedupCloudCompleter(file_names=lambda: ["report.pdf", "notes.txt", "notes-old.txt"])


@pytest.fixture
def local_dir(tmp_path, monkeypatch):
    """
    Working directory with a few local files and one subdirectory.

    Returns:
        Path to the temporary working directory
    """
    (tmp_path / "document.txt").write_text("content")
    (tmp_path / "data.csv").write_text("content")
    sub = tmp_path / "docs"
    sub.mkdir()
    (sub / "deep.txt").write_text("content")
    monkeypatch.chdir(tmp_path)
    return tmp_path


def get_completions_list(completer, text):
    """Helper to get list of completion texts from completer."""
    doc = Document(text, len(text))
    return [c.text for c in completer.get_completions(doc, None)]


class TestCommandCompletion:
    """Tests for command name completion."""

    def test_empty_input_shows_all_commands(self, completer):
        assert get_completions_list(completer, "") == COMMANDS

    def test_partial_command_filters(self, completer):
        completions = get_completions_list(completer, "d")

        assert set(completions) == {"download", "delete", "demo"}

    def test_partial_command_is_case_insensitive(self, completer):
        assert get_completions_list(completer, "STA") == ["stats"]

    def test_no_match(self, completer):
        assert get_completions_list(completer, "xyz") == []


class TestStoredNameCompletion:
    """Tests for download/delete argument completion."""

    def test_download_lists_stored_names_sorted(self, completer):
        assert get_completions_list(completer, "download ") == ["notes-old.txt", "notes.txt", "report.pdf"]

    def test_delete_filters_by_prefix(self, completer):
        assert get_completions_list(completer, "delete notes") == ["notes-old.txt", "notes.txt"]

    def test_second_argument_not_completed(self, completer):
        assert get_completions_list(completer, "download notes.txt ") == []

    def test_logged_out_has_no_names(self):
        completer = DedupCloudCompleter()

        assert get_completions_list(completer, "delete ") == []


class TestUploadPathCompletion:
    """Tests for local path completion on upload."""

    def test_upload_lists_working_directory(self, completer, local_dir):
        assert get_completions_list(completer, "upload ") == ["data.csv", "docs/", "document.txt"]

    def test_upload_filters_by_prefix(self, completer, local_dir):
        assert get_completions_list(completer, "upload doc") == ["docs/", "document.txt"]

    def test_upload_descends_into_directory(self, completer, local_dir):
        assert get_completions_list(completer, "upload docs/") == ["docs/deep.txt"]

    def test_upload_missing_directory(self, completer, local_dir):
        assert get_completions_list(completer, "upload missing/") == []

    def test_other_commands_get_nothing(self, completer, local_dir):
        assert get_completions_list(completer, "write ") == []
