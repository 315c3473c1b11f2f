"""Discovery of MCP config files and enrichment of the servers they declare.

The ``ConfigService`` is the orchestrator between the path registry, the
parser, the analyzers and the process correlation engine. It:

1. Resolves every candidate path for the current OS (expanding ``~`` and
   environment variables, bubbling local paths up to the project root).
2. Reads and parses each existing file once per application group.
3. Enriches every declared server with transport, source, credential
   findings and version pinning.
4. Optionally applies run state from one process snapshot.

Public API::

    from lsmcp.discovery import ConfigService
    from lsmcp.process import ProcessCorrelationEngine

    service = ConfigService(enable_bubbling=True)
    groups = service.file_groups()
    service.apply_process_status(groups, ProcessCorrelationEngine())
    summary = service.summarize(groups)
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Mapping
from pathlib import Path

from lsmcp.analysis.credentials import CredentialAnalyzer
from lsmcp.analysis.models import RiskLevel
from lsmcp.analysis.versions import VersionAnalyzer
from lsmcp.config.models import ServerRecord
from lsmcp.config.parser import ConfigParser
from lsmcp.discovery.app_registry import AppRegistry, current_os, expand_path_template
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
from lsmcp.exceptions import ConfigReadError
from lsmcp.process.engine import ProcessCorrelationEngine
from lsmcp.process.models import MatchResult
from lsmcp.urls import extract_hostname

logger = logging.getLogger(__name__)

CUSTOM_GROUP = "custom"
CUSTOM_GROUP_FRIENDLY_NAME = "Custom Files"


def _absolute(path: Path) -> Path:
    return Path(os.path.normpath(path.absolute()))


class ConfigService:
    """Builds application groups of config files with enriched servers.

    Args:
        registry: Path registry. A fresh ``AppRegistry`` by default.
        parser: Config parser.
        credential_analyzer: Analyzer for env, args and headers.
        version_analyzer: Analyzer for package pinning.
        os_name: Registry OS to scan. Defaults to the running OS.
        enable_bubbling: Look for missing local files in parent directories.
        cwd: Project directory for local paths. Defaults to ``Path.cwd()``.
        env: Variables for ``${VAR}`` expansion. Defaults to ``os.environ``.
        home: Home directory for ``~`` and as the bubbling boundary.
    """

    def __init__(
        self,
        registry: AppRegistry | None = None,
        parser: ConfigParser | None = None,
        credential_analyzer: CredentialAnalyzer | None = None,
        version_analyzer: VersionAnalyzer | None = None,
        os_name: str | None = None,
        enable_bubbling: bool = False,
        cwd: Path | None = None,
        env: Mapping[str, str] | None = None,
        home: Path | None = None,
    ) -> None:
        self.registry = registry or AppRegistry()
        self.parser = parser or ConfigParser()
        self.credential_analyzer = credential_analyzer or CredentialAnalyzer()
        self.version_analyzer = version_analyzer or VersionAnalyzer()
        self.os_name = os_name or current_os()
        self.enable_bubbling = enable_bubbling
        self.cwd = cwd
        self.env = env
        self.home = home

    # -- Enrichment --

    def enrich_server(self, record: ServerRecord) -> ServerInfo:
        """Annotate a record with transport, source, credentials and version."""
        source = extract_hostname(record.url) if record.url else record.command
        return ServerInfo(
            record=record,
            transport=record.transport,
            source=source,
            credentials=self.credential_analyzer.analyze_server(
                env=record.env,
                args=record.args,
                headers=record.headers,
            ),
            version_info=self.version_analyzer.analyze_server_version(
                record.command,
                record.args,
            ),
        )

    def enrich_servers(self, servers: Mapping[str, ServerRecord]) -> list[ServerInfo]:
        return [self.enrich_server(record) for record in servers.values()]

    # -- Discovery --

    def file_groups(self) -> dict[str, AppGroup]:
        """Discover config files for every application on the current OS.

        Files that do not exist or cannot be read are left out. A path is
        processed at most once per group, after normalization to an
        absolute path.

        Returns:
            Groups keyed by application name, in registry order. Groups
            with no files found are included with an empty file list.
        """
        groups: dict[str, AppGroup] = {}
        for app_name, paths in self.registry.paths_for_os(self.os_name).items():
            group = AppGroup(name=app_name, friendly_name=self.registry.friendly_name(app_name))
            seen: set[Path] = set()

            for config_path in paths:
                resolved = self.resolve_path(config_path)
                if resolved is None or resolved in seen:
                    continue
                seen.add(resolved)

                entry = self._load_entry(resolved, config_path.scope)
                if entry is not None:
                    group.files.append(entry)

            groups[app_name] = group
        return groups

    def resolve_path(self, config_path: ConfigPath) -> Path | None:
        """Absolute location of a candidate path, or None if unexpandable.

        Local paths are taken relative to the project directory; with
        bubbling enabled a missing local file is searched for in parent
        directories.
        """
        expanded = expand_path_template(config_path.file_path, env=self.env, home=self.home)
        if expanded is None:
            logger.debug("Skipping %s: environment variable not set", config_path.file_path)
            return None

        cwd = self.cwd or Path.cwd()
        if expanded.is_absolute():
            return _absolute(expanded)

        candidate = _absolute(cwd / expanded)
        if config_path.scope is ConfigScope.LOCAL and self.enable_bubbling:
            if not candidate.exists():
                bubbled = find_in_parent_directories(expanded, cwd, home=self.home)
                if bubbled is not None:
                    return _absolute(bubbled)
        return candidate

    def parse_custom_files(self, paths: Iterable[str | Path]) -> dict[str, AppGroup]:
        """Parse user-supplied files into a single ``custom`` group.

        Each path is processed once, compared after normalization. Files
        that cannot be read are kept as unparsable entries so the user sees
        that they were attempted.
        """
        group = AppGroup(name=CUSTOM_GROUP, friendly_name=CUSTOM_GROUP_FRIENDLY_NAME)
        cwd = self.cwd or Path.cwd()
        seen: set[Path] = set()

        for raw_path in paths:
            expanded = expand_path_template(str(raw_path), env=self.env, home=self.home)
            path = Path(str(raw_path)) if expanded is None else expanded
            absolute = _absolute(path if path.is_absolute() else cwd / path)
            if absolute in seen:
                logger.debug("Skipping repeated custom file %s", absolute)
                continue
            seen.add(absolute)

            entry = self._load_entry(absolute, ConfigScope.LOCAL)
            if entry is None:
                entry = ConfigFileEntry(file_path=absolute, scope=ConfigScope.LOCAL, parsable=False)
            group.files.append(entry)

        return {CUSTOM_GROUP: group}

    def servers_for_app(self, app_name: str) -> list[ServerInfo]:
        """All enriched servers declared for one application.

        Raises:
            UnknownAppError: If the application is not registered.
        """
        servers: list[ServerInfo] = []
        for config_path in self.registry.paths_for_app(self.os_name, app_name):
            resolved = self.resolve_path(config_path)
            if resolved is None:
                continue
            entry = self._load_entry(resolved, config_path.scope)
            if entry is not None:
                servers.extend(entry.servers)
        return servers

    def validate_config_file(self, path: str | Path) -> bool:
        """Return True if the file exists and is syntactically valid."""
        return self.parser.is_valid_syntax(path)

    # -- Run state and statistics --

    def apply_process_status(
        self,
        groups: Mapping[str, AppGroup],
        engine: ProcessCorrelationEngine,
    ) -> Mapping[str, AppGroup]:
        """Set run state on every server from a single process snapshot.

        Servers are replaced in their file entries by copies carrying the
        correlation result. When the process table cannot be read every
        server becomes ``unknown``.
        """
        snapshot = engine.take_snapshot()
        for group in groups.values():
            for entry in group.files:
                entry.servers = [
                    server.with_match(
                        engine.is_running(server.record, snapshot)
                        if snapshot is not None
                        else MatchResult.probe_failed()
                    )
                    for server in entry.servers
                ]
        return groups

    def summarize(self, groups: Mapping[str, AppGroup]) -> ScanSummary:
        """Aggregate statistics over every server in ``groups``."""
        total = running = high_risk = implicit_latest = 0
        breakdown = ScanSummary().transport_breakdown

        for group in groups.values():
            for server in group.iter_servers():
                total += 1
                if server.status is ServerStatus.RUNNING:
                    running += 1
                if server.credentials.overall_risk_level is RiskLevel.HIGH:
                    high_risk += 1
                if server.version_info is not None and server.version_info.is_latest:
                    implicit_latest += 1
                if server.transport is not None:
                    breakdown[server.transport.value] += 1

        return ScanSummary(
            total_servers=total,
            running_servers=running,
            high_risk_credentials=high_risk,
            implicit_latest_versions=implicit_latest,
            transport_breakdown=breakdown,
        )

    # -- Helpers --

    def _load_entry(self, path: Path, scope: ConfigScope) -> ConfigFileEntry | None:
        try:
            if not path.is_file():
                logger.debug("Skipping %s: not a file", path)
                return None
            data = self.parser.parse_file(path)
        except (OSError, ConfigReadError) as exc:
            logger.debug("Skipping %s: %s", path, exc)
            return None

        if not data.valid:
            logger.warning("Config file is not valid JSON: %s", path)
            return ConfigFileEntry(file_path=path, scope=scope, parsable=False)
        return ConfigFileEntry(
            file_path=path,
            scope=scope,
            parsable=True,
            servers=self.enrich_servers(data.servers),
        )
