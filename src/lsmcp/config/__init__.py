"""MCP configuration parsing.

Public API::

    from lsmcp.config import ConfigParser, ServerRecord

    data = ConfigParser().parse(text)
    if data.valid:
        for record in data.servers.values():
            print(record.name, record.transport)
"""

from __future__ import annotations

from lsmcp.config.models import ConfigData, ServerRecord, TransportKind
from lsmcp.config.parser import (
    SUPPORTED_CONFIG_KEYS,
    ConfigParser,
    validate_server_config,
)

__all__ = [
    "ConfigData",
    "ConfigParser",
    "SUPPORTED_CONFIG_KEYS",
    "ServerRecord",
    "TransportKind",
    "validate_server_config",
]
