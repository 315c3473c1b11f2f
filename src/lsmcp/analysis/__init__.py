"""Credential and version analysis of MCP server declarations.

Both analyzers are orthogonal: each takes parts of a ``ServerRecord`` and
returns a result object, never raising on odd input.

Public API::

    from lsmcp.analysis import CredentialAnalyzer, VersionAnalyzer

    creds = CredentialAnalyzer().analyze_server(env=record.env, args=record.args)
    version = VersionAnalyzer().analyze_server_version(record.command, record.args)
"""

from __future__ import annotations

from lsmcp.analysis.credentials import CredentialAnalyzer, mask_value
from lsmcp.analysis.models import (
    CredentialAnalysisResult,
    CredentialFinding,
    CredentialSource,
    PackageVersionInfo,
    RiskLevel,
)
from lsmcp.analysis.patterns import DEFAULT_CREDENTIAL_PATTERNS, CredentialPatterns
from lsmcp.analysis.versions import (
    DEFAULT_OPTION_VALUE_FLAGS,
    VersionAnalyzer,
    parse_package_spec,
)

__all__ = [
    "CredentialAnalysisResult",
    "CredentialAnalyzer",
    "CredentialFinding",
    "CredentialPatterns",
    "CredentialSource",
    "DEFAULT_CREDENTIAL_PATTERNS",
    "DEFAULT_OPTION_VALUE_FLAGS",
    "PackageVersionInfo",
    "RiskLevel",
    "VersionAnalyzer",
    "mask_value",
    "parse_package_spec",
]
