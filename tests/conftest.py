"""Shared fixtures for lsmcp tests."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from lsmcp.cmdline import parse_command_line
from lsmcp.process.models import ProcessEntry, ProcessSnapshot


def make_entry(pid: int, parent_pid: int, command_line: str) -> ProcessEntry:
    """Build a ProcessEntry from a hand-written command line."""
    return ProcessEntry(
        pid=pid,
        parent_pid=parent_pid,
        command_line=command_line,
        command_tokens=tuple(parse_command_line(command_line)),
    )


def make_snapshot(*rows: tuple[int, int, str]) -> ProcessSnapshot:
    """Build a snapshot from ``(pid, parent_pid, command_line)`` rows."""
    return ProcessSnapshot(entries=[make_entry(*row) for row in rows])


@pytest.fixture
def snapshot_of() -> Callable[..., ProcessSnapshot]:
    """Factory building a ProcessSnapshot from ``(pid, ppid, command)`` rows."""
    return make_snapshot


@pytest.fixture
def write_config(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing a config file under ``tmp_path``.

    Dicts are serialized as JSON; strings are written verbatim.
    """

    def _write(relative: str, content: dict[str, Any] | str) -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        text = content if isinstance(content, str) else json.dumps(content, indent=2)
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def sample_config() -> dict[str, Any]:
    """A Claude Desktop style config with local and remote servers."""
    return {
        "mcpServers": {
            "filesystem": {
                "command": "npx",
                "args": ["-y", "@modelcontextprotocol/server-filesystem", "/tmp"],
            },
            "github": {
                "command": "npx",
                "args": ["-y", "@modelcontextprotocol/server-github@2025.4.8"],
                "env": {"GITHUB_PERSONAL_ACCESS_TOKEN": "ghp_abcdef123456"},
            },
            "remote": {
                "type": "sse",
                "url": "https://mcp.example.com/sse",
                "headers": {"Authorization": "Bearer secret-value"},
            },
        }
    }
