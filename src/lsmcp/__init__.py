"""lsmcp: Discover MCP server configurations and report their runtime state."""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"
