"""Parser for MCP server configuration files.

Every MCP client stores its server map under its own key:

- ``servers`` -- VS Code workspace ``mcp.json``.
- ``mcp.servers`` -- VS Code user ``settings.json``.
- ``mcpServers`` -- Claude Desktop, Claude Code, Cursor, Cline, Gemini CLI.
- ``context_servers`` -- Zed ``settings.json``.

.. code-block:: json

    {
      "mcpServers": {
        "filesystem": {
          "command": "npx",
          "args": ["-y", "@modelcontextprotocol/server-filesystem", "/tmp"],
          "env": { "NODE_ENV": "production" }
        }
      }
    }

The first key present wins; a file is not expected to mix schemas. Several
of these files are JSONC (comments, trailing commas), so a strict parse is
followed by a comment-tolerant one before the file is declared invalid.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from lsmcp.config.jsonc import loads_jsonc
from lsmcp.config.models import RECOGNIZED_TYPES, ConfigData, ServerRecord
from lsmcp.exceptions import ConfigReadError

logger = logging.getLogger(__name__)

# Schema keys in priority order. Dotted entries are nested lookups.
SUPPORTED_CONFIG_KEYS: tuple[str, ...] = (
    "servers",
    "mcp.servers",
    "mcpServers",
    "context_servers",
)


def _lookup(data: dict[str, Any], dotted_key: str) -> Any:
    """Resolve a dotted key (``mcp.servers``) against nested dicts."""
    current: Any = data
    for part in dotted_key.split("."):
        if not isinstance(current, dict):
            return None
        current = current.get(part)
    return current


def infer_transport_type(config: dict[str, Any]) -> str | None:
    """Infer the transport of an entry that has no recognized ``type``.

    Rules, first hit wins:
        1. A string ``url`` means ``http``.
        2. ``stdio``, ``http`` or ``sse`` appearing anywhere in the joined
           arguments, checked in that order.
        3. A string ``command`` defaults to ``stdio``.
    """
    url = config.get("url")
    if isinstance(url, str) and url:
        return "http"

    args = config.get("args")
    if isinstance(args, list):
        joined = " ".join(str(a) for a in args).lower()
        for token in ("stdio", "http", "sse"):
            if token in joined:
                return token

    command = config.get("command")
    if isinstance(command, str) and command:
        return "stdio"
    return None


def normalize_server(name: str, config: dict[str, Any]) -> ServerRecord:
    """Build a ``ServerRecord`` from one raw server entry."""
    command = config.get("command")
    args = config.get("args")
    env = config.get("env")
    headers = config.get("headers")
    url = config.get("url")
    declared_type = config.get("type")

    return ServerRecord(
        name=name,
        command=command if isinstance(command, str) else "",
        args=tuple(str(a) for a in args) if isinstance(args, list) else None,
        url=url if isinstance(url, str) else None,
        type=(
            declared_type
            if isinstance(declared_type, str) and declared_type in RECOGNIZED_TYPES
            else infer_transport_type(config)
        ),
        env={str(k): str(v) for k, v in env.items()} if isinstance(env, dict) else None,
        headers=(
            {str(k): str(v) for k, v in headers.items()} if isinstance(headers, dict) else None
        ),
    )


def validate_server_config(record: ServerRecord | None) -> bool:
    """Return True if the record has a non-empty name and command.

    Extraction is lenient; callers that need launchable servers opt in to
    this check.
    """
    if not isinstance(record, ServerRecord):
        return False
    return bool(record.name) and bool(record.command)


class ConfigParser:
    """Parses MCP configuration text into normalized server records.

    The parser holds no state between calls; ``parse`` on the same text
    always returns an equal ``ConfigData``.

    Usage::

        parser = ConfigParser()
        data = parser.parse_file(Path("~/.cursor/mcp.json").expanduser())
        for name, record in data.servers.items():
            print(name, record.transport)
    """

    def parse(self, text: str) -> ConfigData:
        """Parse configuration text.

        Args:
            text: Raw file contents.

        Returns:
            ``ConfigData`` with ``valid=False`` and no servers when neither
            strict nor comment-tolerant parsing yields an object or array.
        """
        data = self._decode(text)
        if data is None:
            return ConfigData(raw=None, valid=False, servers={})
        return ConfigData(raw=data, valid=True, servers=self.extract_servers(data))

    def parse_file(self, path: Path | str) -> ConfigData:
        """Read and parse a configuration file.

        Raises:
            ConfigReadError: If the file cannot be read.
        """
        return self.parse(self.read_text(path))

    def read_text(self, path: Path | str) -> str:
        """Read a file as UTF-8 text.

        Raises:
            ConfigReadError: If the path is missing, not a file, not
                readable, or not valid UTF-8.
        """
        try:
            return Path(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ConfigReadError(path, exc.__class__.__name__) from exc

    def is_valid_syntax(self, path: Path | str) -> bool:
        """Return True if the file exists and parses; never raises."""
        try:
            return self.parse_file(path).valid
        except ConfigReadError:
            return False

    def count_servers(self, path: Path | str) -> int:
        """Count servers declared in a file; 0 if unreadable or invalid."""
        try:
            return len(self.parse_file(path).servers)
        except ConfigReadError:
            return 0

    def extract_servers(self, data: Any) -> dict[str, ServerRecord]:
        """Extract the normalized server map from decoded data.

        Args:
            data: Decoded JSON document.

        Returns:
            Map of server name to record from the first recognized key.
            Empty when no key is present (unrecognized schema).
        """
        if not isinstance(data, dict):
            return {}

        for key in SUPPORTED_CONFIG_KEYS:
            servers = _lookup(data, key)
            if isinstance(servers, dict):
                return self._normalize_servers(servers)
        return {}

    def _normalize_servers(self, servers: dict[str, Any]) -> dict[str, ServerRecord]:
        normalized: dict[str, ServerRecord] = {}
        for name, config in servers.items():
            if isinstance(config, dict):
                normalized[str(name)] = normalize_server(str(name), config)
        return normalized

    def _decode(self, text: str) -> Any:
        """Strict JSON first, then JSONC. Returns None if both fail."""
        try:
            data = json.loads(text)
            if isinstance(data, (dict, list)):
                return data
        except (json.JSONDecodeError, RecursionError):
            pass

        try:
            data = loads_jsonc(text)
        except (json.JSONDecodeError, RecursionError):
            logger.debug("Content is neither JSON nor JSONC")
            return None
        if isinstance(data, (dict, list)):
            return data
        return None
