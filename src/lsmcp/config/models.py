"""Data models for parsed MCP configuration files.

``ServerRecord`` is the normalized form of one server entry, independent of
which vendor schema declared it. ``ConfigData`` is what the parser returns
for a whole file.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class TransportKind(str, Enum):
    """Communication channel an MCP server uses."""

    STDIO = "stdio"
    SSE = "sse"
    HTTP = "http"


# Type tokens accepted verbatim from a config entry's ``type`` field.
RECOGNIZED_TYPES: frozenset[str] = frozenset({"stdio", "sse", "http", "streamable-http"})


@dataclass(frozen=True)
class ServerRecord:
    """One MCP server declaration, normalized.

    Attributes:
        name: The key the server was declared under.
        command: Launch command, or ``""`` for remote servers.
        args: Launch arguments. ``None`` when the entry had no list-shaped
            ``args``.
        url: Endpoint for remote (sse/http) servers.
        type: One of ``RECOGNIZED_TYPES`` (explicit or inferred), or None.
        env: Environment map, only when the entry had an object ``env``.
        headers: HTTP headers, only when the entry had an object ``headers``.
    """

    name: str
    command: str = ""
    args: tuple[str, ...] | None = None
    url: str | None = None
    type: str | None = None
    env: dict[str, str] | None = None
    headers: dict[str, str] | None = None

    @property
    def transport(self) -> TransportKind | None:
        """Normalized transport, or None when the record cannot be analyzed."""
        if self.type == "streamable-http":
            return TransportKind.HTTP
        if self.type in ("stdio", "sse", "http"):
            return TransportKind(self.type)
        if self.url:
            return TransportKind.HTTP
        if self.command:
            return TransportKind.STDIO
        return None

    @property
    def arg_list(self) -> list[str]:
        """Arguments as a list, empty when none were declared."""
        return list(self.args) if self.args else []


@dataclass(frozen=True)
class ConfigData:
    """Result of parsing one configuration file.

    Attributes:
        raw: The decoded document, or None when the text did not parse.
        valid: True if strict or comment-tolerant parsing succeeded.
        servers: Server name to normalized record. Empty for invalid files
            and for files with no recognized schema key.
    """

    raw: Any
    valid: bool
    servers: dict[str, ServerRecord] = field(default_factory=dict)
