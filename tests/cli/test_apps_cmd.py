"""Tests for the ``lsmcp apps`` command."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from lsmcp.cli import output
from lsmcp.cli.main import cli


@pytest.fixture(autouse=True)
def wide_console(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(output.console, "width", 200)


class TestAppsCommand:

    def test_macos_alias(self) -> None:
        result = CliRunner().invoke(cli, ["apps", "--os", "macos"])
        assert result.exit_code == 0, result.output
        assert "Supported Applications (darwin)" in result.output
        assert "Claude Desktop" in result.output
        assert "Library/Application Support/Claude" in result.output

    def test_windows_paths(self) -> None:
        result = CliRunner().invoke(cli, ["apps", "--os", "WINDOWS"])
        assert result.exit_code == 0
        assert "${APPDATA}" in result.output

    def test_scopes_listed(self) -> None:
        result = CliRunner().invoke(cli, ["apps", "--os", "linux"])
        assert "global" in result.output
        assert "local" in result.output
        assert "Gemini CLI" in result.output

    def test_default_is_current_os(self) -> None:
        result = CliRunner().invoke(cli, ["apps"])
        assert result.exit_code == 0
        assert "Supported Applications (" in result.output

    def test_unknown_os_is_usage_error(self) -> None:
        result = CliRunner().invoke(cli, ["apps", "--os", "plan9"])
        assert result.exit_code == 2
