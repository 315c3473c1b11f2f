"""Data models for the discovery module.

Contains the candidate path type used by ``AppRegistry`` and the result
types produced by ``ConfigService``: enriched server records, per-file
entries, per-application groups and the aggregate scan summary.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path

from lsmcp.analysis.models import CredentialAnalysisResult, PackageVersionInfo
from lsmcp.config.models import ServerRecord, TransportKind
from lsmcp.process.models import MatchResult, MatchStatus


class ConfigScope(str, Enum):
    """Where a config file lives.

    ``LOCAL`` paths are relative to the project directory; ``GLOBAL`` paths
    are per-user.
    """

    LOCAL = "local"
    GLOBAL = "global"


@dataclass(frozen=True)
class ConfigPath:
    """A candidate config file location for one application.

    Attributes:
        file_path: Path template. May start with ``~`` or reference
            ``${APPDATA}`` / ``${LOCALAPPDATA}``; local paths are relative.
        scope: ``local`` or ``global``.
    """

    file_path: str
    scope: ConfigScope


class ServerStatus(str, Enum):
    """Displayed run state of a server."""

    RUNNING = "running"
    STOPPED = "stopped"
    UNKNOWN = "unknown"

    @classmethod
    def from_match(cls, status: MatchStatus) -> ServerStatus:
        if status is MatchStatus.MATCHED:
            return cls.RUNNING
        if status is MatchStatus.PROBE_FAILED:
            return cls.UNKNOWN
        return cls.STOPPED


@dataclass(frozen=True)
class ServerInfo:
    """A server record enriched with analysis and run state.

    Attributes:
        record: The normalized declaration.
        transport: Derived transport, or None when it cannot be analyzed.
        source: URL hostname for remote servers, else the launch command.
        credentials: Credential findings across env, args and headers.
        version_info: Package pinning, or None for unsupported launchers.
        status: Run state; ``unknown`` until correlation has run.
        match: Correlation result, once available.
    """

    record: ServerRecord
    transport: TransportKind | None
    source: str
    credentials: CredentialAnalysisResult
    version_info: PackageVersionInfo | None = None
    status: ServerStatus = ServerStatus.UNKNOWN
    match: MatchResult | None = None

    @property
    def name(self) -> str:
        return self.record.name

    def with_match(self, result: MatchResult) -> ServerInfo:
        """Return a copy carrying ``result`` and the status it implies."""
        return replace(self, match=result, status=ServerStatus.from_match(result.status))


@dataclass
class ConfigFileEntry:
    """One config file found on disk.

    Attributes:
        file_path: Absolute path to the file.
        scope: Scope of the registry entry that produced this file.
        parsable: True when the file decodes to a JSON object or array.
        servers: Enriched servers declared in the file.
    """

    file_path: Path
    scope: ConfigScope
    parsable: bool
    servers: list[ServerInfo] = field(default_factory=list)


@dataclass
class AppGroup:
    """All config files found for one application."""

    name: str
    friendly_name: str
    files: list[ConfigFileEntry] = field(default_factory=list)

    @property
    def servers_count(self) -> int:
        return sum(len(entry.servers) for entry in self.files)

    def iter_servers(self):
        for entry in self.files:
            yield from entry.servers


@dataclass(frozen=True)
class ScanSummary:
    """Aggregate statistics across every group of a scan.

    Attributes:
        total_servers: Servers declared across all files.
        running_servers: Servers matched to a live process.
        high_risk_credentials: Servers whose overall credential risk is high.
        implicit_latest_versions: Servers whose package is not pinned.
        transport_breakdown: Server count per transport (``stdio``,
            ``sse``, ``http``).
    """

    total_servers: int = 0
    running_servers: int = 0
    high_risk_credentials: int = 0
    implicit_latest_versions: int = 0
    transport_breakdown: dict[str, int] = field(
        default_factory=lambda: {kind.value: 0 for kind in TransportKind}
    )
