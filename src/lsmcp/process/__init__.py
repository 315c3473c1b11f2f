"""Correlation of configured MCP servers with running processes.

Submodules
----------
- ``models``: Data types (ProcessEntry, ProcessSnapshot, MatchResult).
- ``snapshot``: OS process table capture.
- ``strategies``: Per-launch-idiom matching.
- ``vendors``: Parent process attribution rules.
- ``engine``: The ProcessCorrelationEngine class.
"""

from __future__ import annotations

from lsmcp.cmdline import base_command, parse_command_line
from lsmcp.process.engine import ProcessCorrelationEngine
from lsmcp.process.models import MatchResult, MatchStatus, ProcessEntry, ProcessSnapshot
from lsmcp.process.snapshot import DEFAULT_TIMEOUT, take_snapshot
from lsmcp.process.strategies import (
    InterpreterStrategy,
    MatchStrategy,
    NpxRunnerStrategy,
    PositionalStrategy,
    UvxRunnerStrategy,
    select_strategy,
)
from lsmcp.process.vendors import DEFAULT_VENDOR_RULES, VendorRule, estimate_vendor

__all__ = [
    "DEFAULT_TIMEOUT",
    "DEFAULT_VENDOR_RULES",
    "InterpreterStrategy",
    "MatchResult",
    "MatchStatus",
    "MatchStrategy",
    "NpxRunnerStrategy",
    "PositionalStrategy",
    "ProcessCorrelationEngine",
    "ProcessEntry",
    "ProcessSnapshot",
    "UvxRunnerStrategy",
    "VendorRule",
    "base_command",
    "estimate_vendor",
    "parse_command_line",
    "select_strategy",
    "take_snapshot",
]
