"""Tests for command line joining and quote-aware tokenization."""

from __future__ import annotations

import pytest

from lsmcp.cmdline import base_command, join_command_line, parse_command_line


class TestParseCommandLine:

    @pytest.mark.parametrize(
        ("line", "expected"),
        [
            ('a "b c" d', ["a", "b c", "d"]),
            ("a 'b c' d", ["a", "b c", "d"]),
            ("""say "it's" fine""", ["say", "it's", "fine"]),
            ("  spaced   out  ", ["spaced", "out"]),
            ('""', []),
            ("", []),
            ('pre"quoted part"post', ["prequoted partpost"]),
            ('unterminated "rest of line', ["unterminated", "rest of line"]),
            ("tab\tseparated", ["tab", "separated"]),
        ],
    )
    def test_tokens(self, line: str, expected: list[str]) -> None:
        assert parse_command_line(line) == expected

    def test_quoted_application_path(self) -> None:
        line = '"/Applications/Claude.app/Contents/MacOS/Claude" --type=renderer'
        assert parse_command_line(line)[0] == "/Applications/Claude.app/Contents/MacOS/Claude"


class TestBaseCommand:

    @pytest.mark.parametrize(
        ("token", "expected"),
        [
            ("/opt/homebrew/bin/uv", "uv"),
            ("uv", "uv"),
            ("C:\\Program Files\\nodejs\\node.exe", "node"),
            ("python3.EXE", "python3"),
            ("./relative/script", "script"),
        ],
    )
    def test_base(self, token: str, expected: str) -> None:
        assert base_command(token) == expected


class TestJoinCommandLine:

    @pytest.mark.parametrize(
        "argv",
        [
            ["node", "/srv/index.js"],
            ["/Applications/Claude Desktop.app/Contents/MacOS/Claude", "--flag"],
            ["say", "it's", 'a "quoted" word'],
            ["C:\\Program Files\\nodejs\\node.exe", "C:\\srv\\index.js"],
        ],
    )
    def test_tokenizes_back_to_argv(self, argv: list[str]) -> None:
        assert parse_command_line(join_command_line(argv)) == argv

    def test_plain_arguments_unquoted(self) -> None:
        assert join_command_line(["uvx", "mcp-server-fetch"]) == "uvx mcp-server-fetch"
