"""Credential detection for MCP server declarations.

Servers receive secrets through three channels, each analyzed separately
and then merged:

- **env** -- ``{"GITHUB_TOKEN": "ghp_..."}``; the key is the name.
- **args** -- ``["--api-key", "sk-..."]``; a credential flag followed by
  its value.
- **headers** -- ``{"Authorization": "Bearer ..."}`` on remote servers.

Values are masked before they leave the analyzer. Placeholder values such
as ``${input:github_token}`` are skipped because the secret lives in the
client's secret store, not in the file.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from lsmcp.analysis.models import (
    CredentialAnalysisResult,
    CredentialFinding,
    CredentialSource,
    RiskLevel,
)
from lsmcp.analysis.patterns import DEFAULT_CREDENTIAL_PATTERNS, CredentialPatterns

# Longest run of asterisks a masked value shows.
MAX_MASK_LENGTH = 8


def mask_value(value: str) -> str:
    """Mask a secret for display, keeping only its first and last character.

    Values of two characters or fewer are returned as is. Longer values
    show at most ``MAX_MASK_LENGTH`` asterisks, whatever their length.
    """
    if len(value) <= 2:
        return value
    hidden = min(len(value) - 2, MAX_MASK_LENGTH)
    return f"{value[0]}{'*' * hidden}{value[-1]}"


class CredentialAnalyzer:
    """Flags credential-bearing names in env, args, and headers.

    The analyzer is stateless apart from its pattern set -- each call is
    independent.

    Usage::

        analyzer = CredentialAnalyzer()
        result = analyzer.analyze_server(env=record.env, args=record.args)
        if result.has_credentials:
            print(result.overall_risk_level.value)
    """

    def __init__(self, patterns: CredentialPatterns = DEFAULT_CREDENTIAL_PATTERNS) -> None:
        self.patterns = patterns

    def is_potential_credential(self, name: str) -> bool:
        """Check if a name matches a broad or low-risk pattern."""
        return self._matches_broad(name) or any(
            pat.search(name) for pat in self.patterns.low_risk
        )

    def is_variable_substitution(self, value: str) -> bool:
        """Check if a value is a single ``${...}`` placeholder."""
        return bool(self.patterns.substitution.match(value))

    def assess_risk(self, name: str) -> RiskLevel:
        """``HIGH`` for secret-bearing names, ``LOW`` for identifiers."""
        return RiskLevel.HIGH if self._matches_broad(name) else RiskLevel.LOW

    # -- Entry points --

    def analyze_env(self, env: Mapping[str, str] | None) -> CredentialAnalysisResult:
        """Analyze an environment map."""
        return self._analyze_mapping(env, CredentialSource.ENV)

    def analyze_headers(self, headers: Mapping[str, str] | None) -> CredentialAnalysisResult:
        """Analyze an HTTP header map."""
        return self._analyze_mapping(headers, CredentialSource.HEADERS)

    def analyze_args(self, args: Sequence[str] | None) -> CredentialAnalysisResult:
        """Analyze a launch argument list.

        A finding needs a credential flag and a following token that is not
        itself a flag. A trailing flag with no value yields nothing.
        """
        if not args:
            return CredentialAnalysisResult()

        prefix = self.patterns.flag_prefix
        findings: list[CredentialFinding] = []
        for flag, value in zip(args, args[1:]):
            if not flag.startswith(prefix) or value.startswith(prefix):
                continue
            if not self.is_potential_credential(flag):
                continue
            findings.append(self._finding(flag, value, CredentialSource.ARGS))
        return CredentialAnalysisResult(findings=tuple(findings))

    def analyze_server(
        self,
        env: Mapping[str, str] | None = None,
        args: Sequence[str] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> CredentialAnalysisResult:
        """Analyze all three channels and merge the findings."""
        return CredentialAnalysisResult.merge(
            self.analyze_env(env),
            self.analyze_args(list(args) if args else None),
            self.analyze_headers(headers),
        )

    # -- Helpers --

    def _matches_broad(self, name: str) -> bool:
        return any(pat.search(name) for pat in self.patterns.broad)

    def _analyze_mapping(
        self,
        values: Mapping[str, str] | None,
        source: CredentialSource,
    ) -> CredentialAnalysisResult:
        if not values:
            return CredentialAnalysisResult()

        findings: list[CredentialFinding] = []
        for name, value in values.items():
            value = str(value)
            if self.is_variable_substitution(value):
                continue
            if self.is_potential_credential(name):
                findings.append(self._finding(name, value, source))
        return CredentialAnalysisResult(findings=tuple(findings))

    def _finding(self, name: str, value: str, source: CredentialSource) -> CredentialFinding:
        return CredentialFinding(
            name=name,
            masked_value=mask_value(value),
            risk_level=self.assess_risk(name),
            source=source,
        )
