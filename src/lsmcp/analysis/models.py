"""Data models for the analyzers: RiskLevel, CredentialFinding, results.

These are intentionally decoupled from the analyzers so that the discovery
service and CLI formatters can import them without pulling in the pattern
catalogs.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


# ---------------------------------------------------------------------------
# Risk levels
# ---------------------------------------------------------------------------


class RiskLevel(str, Enum):
    """Credential exposure risk. ``NONE`` only applies to whole results."""

    NONE = "none"
    LOW = "low"
    HIGH = "high"

    @property
    def rank(self) -> int:
        return _RISK_RANK[self]


_RISK_RANK: dict[RiskLevel, int] = {
    RiskLevel.NONE: 0,
    RiskLevel.LOW: 1,
    RiskLevel.HIGH: 2,
}


class CredentialSource(str, Enum):
    """Where in a server declaration a credential was found."""

    ENV = "env"
    ARGS = "args"
    HEADERS = "headers"


# ---------------------------------------------------------------------------
# Credential findings
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CredentialFinding:
    """A single credential-bearing value.

    Attributes:
        name: Variable name, header name, or flag token (``--api-key``).
        masked_value: Display form of the value; the raw value is never kept.
        risk_level: ``LOW`` or ``HIGH``.
        source: Which part of the declaration held the value.
    """

    name: str
    masked_value: str
    risk_level: RiskLevel
    source: CredentialSource


@dataclass(frozen=True)
class CredentialAnalysisResult:
    """All credential findings for one server (or one part of it)."""

    findings: tuple[CredentialFinding, ...] = field(default_factory=tuple)

    @property
    def has_credentials(self) -> bool:
        return len(self.findings) > 0

    @property
    def overall_risk_level(self) -> RiskLevel:
        """Highest risk among the findings, ``NONE`` when there are none."""
        if not self.findings:
            return RiskLevel.NONE
        return max((f.risk_level for f in self.findings), key=lambda r: r.rank)

    @classmethod
    def merge(cls, *results: CredentialAnalysisResult) -> CredentialAnalysisResult:
        """Combine results, keeping finding order."""
        findings: list[CredentialFinding] = []
        for result in results:
            findings.extend(result.findings)
        return cls(findings=tuple(findings))


# ---------------------------------------------------------------------------
# Package versions
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PackageVersionInfo:
    """Version pinning of the package a server launches.

    ``is_pinned`` and ``is_latest`` are always complements.
    """

    package_name: str
    version: str | None
    is_pinned: bool

    @property
    def is_latest(self) -> bool:
        return not self.is_pinned
