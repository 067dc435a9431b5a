"""Tests for CLI command parsing."""

import pytest

from cli.models import (
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
from cli.parser import ParseError, parse_command


def test_parse_register():
    assert parse_command("register alice secret") == RegisterCommand(username="alice", password="secret")


def test_parse_login_with_quoted_password():
    assert parse_command('login alice "two words"') == LoginCommand(username="alice", password="two words")


@pytest.mark.parametrize("line,expected", [
    ("logout", LogoutCommand()),
    ("whoami", WhoamiCommand()),
    ("list", ListCommand()),
    ("storage", StorageCommand()),
    ("stats", StatsCommand()),
    ("demo", DemoCommand()),
    ("  STATS  ", StatsCommand()),
])
def test_parse_no_argument_commands(line, expected):
    assert parse_command(line) == expected


def test_no_argument_command_rejects_arguments():
    with pytest.raises(ParseError, match="takes no arguments"):
        parse_command("list extra")


def test_parse_upload():
    assert parse_command("upload docs/report.pdf") == UploadCommand(path="docs/report.pdf")
    assert parse_command("upload docs/report.pdf r.pdf") == UploadCommand(path="docs/report.pdf", name="r.pdf")


def test_parse_write_keeps_repeated_spaces():
    assert parse_command("write notes.txt hello    world") == WriteCommand(
        name="notes.txt", content="hello    world"
    )


def test_parse_write_accepts_apostrophe():
    assert parse_command("write notes.txt It's a file") == WriteCommand(
        name="notes.txt", content="It's a file"
    )


def test_parse_write_keeps_quotes_and_backslashes():
    line = 'write notes.txt say "hi" to C:\\temp  '

    assert parse_command(line).content == 'say "hi" to C:\\temp  '


def test_parse_write_unquotes_name():
    assert parse_command('WRITE "notes.txt" x') == WriteCommand(name="notes.txt", content="x")


def test_parse_download():
    assert parse_command("download a.txt") == DownloadCommand(name="a.txt")
    assert parse_command("download a.txt out/a.txt") == DownloadCommand(name="a.txt", output_path="out/a.txt")


def test_parse_delete():
    assert parse_command("delete a.txt") == DeleteCommand(name="a.txt")


@pytest.mark.parametrize("line", [
    "",
    "   ",
    "register onlyuser",
    "login a b c",
    "upload",
    "upload a b c",
    "write name-only",
    "download",
    "delete",
    "delete a b",
    "frobnicate",
    'write "unterminated content',
    "write 'a b' content",
])
def test_invalid_input_raises_parse_error(line):
    with pytest.raises(ParseError):
        parse_command(line)
