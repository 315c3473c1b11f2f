"""Discovery of MCP configuration files across AI applications.

Provides the per-OS registry of where AI assistants and editors (Claude
Desktop, Cursor, VS Code, Zed, ...) keep their MCP server declarations,
and the service that finds, parses and enriches them.

Public API::

    from lsmcp.discovery import ConfigService

    service = ConfigService()
    for group in service.file_groups().values():
        print(f"{group.friendly_name}: {group.servers_count} servers")
"""

from __future__ import annotations

from lsmcp.discovery.app_registry import APP_PROFILES, AppProfile, AppRegistry
from lsmcp.discovery.bubble import find_in_parent_directories
from lsmcp.discovery.models import (
    AppGroup,
    ConfigFileEntry,
    ConfigPath,
    ConfigScope,
    ScanSummary,
    ServerInfo,
    ServerStatus,
)
from lsmcp.discovery.service import ConfigService

__all__ = [
    "APP_PROFILES",
    "AppGroup",
    "AppProfile",
    "AppRegistry",
    "ConfigFileEntry",
    "ConfigPath",
    "ConfigScope",
    "ConfigService",
    "ScanSummary",
    "ServerInfo",
    "ServerStatus",
    "find_in_parent_directories",
]
