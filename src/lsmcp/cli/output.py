"""Rich output formatting helpers for the lsmcp CLI.

Provides the terminal rendering of discovered config files, their servers
and the scan summary, plus the JSON serialization used by ``--json``.

Status Mapping:
    running = green dot, stopped = dim circle, unknown = yellow question mark
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from lsmcp.analysis.models import RiskLevel
from lsmcp.config.models import TransportKind
from lsmcp.discovery.app_registry import AppRegistry
from lsmcp.discovery.models import AppGroup, ConfigFileEntry, ScanSummary, ServerInfo, ServerStatus

_STATUS_MARKERS: dict[ServerStatus, tuple[str, str]] = {
    ServerStatus.RUNNING: ("●", "bold green"),
    ServerStatus.STOPPED: ("○", "dim"),
    ServerStatus.UNKNOWN: ("?", "yellow"),
}

_TRANSPORT_STYLES: dict[TransportKind, str] = {
    TransportKind.STDIO: "cyan",
    TransportKind.SSE: "magenta",
    TransportKind.HTTP: "blue",
}

_RISK_STYLES: dict[RiskLevel, str] = {
    RiskLevel.HIGH: "bold red",
    RiskLevel.LOW: "yellow",
    RiskLevel.NONE: "dim",
}

BAR_WIDTH = 20

console = Console()


# ---------------------------------------------------------------------------
# Cell renderers
# ---------------------------------------------------------------------------


def format_path(path: Path | str, home: Path | None = None) -> str:
    """Abbreviate the home directory prefix of ``path`` to ``~``."""
    text = str(path)
    home_text = str(home if home is not None else Path.home())
    if home_text and (text == home_text or text.startswith(home_text.rstrip("/\\") + os.sep)):
        return "~" + text[len(home_text):]
    return text


def status_cell(status: ServerStatus) -> Text:
    marker, style = _STATUS_MARKERS[status]
    return Text(marker, style=style)


def transport_cell(transport: TransportKind | None) -> Text:
    if transport is None:
        return Text("-", style="dim")
    return Text(transport.value.upper(), style=_TRANSPORT_STYLES[transport])


def version_cell(server: ServerInfo) -> Text:
    """Pinned version, ``latest`` in red when unpinned, ``-`` when unknown."""
    info = server.version_info
    if info is None:
        return Text("-", style="dim")
    if info.is_pinned:
        return Text(info.version or "", style="green")
    return Text("latest", style="red")


def credentials_cell(server: ServerInfo) -> Text:
    result = server.credentials
    if not result.has_credentials:
        return Text("-", style="dim")
    level = result.overall_risk_level
    count = len(result.findings)
    return Text(f"⚠ {level.value.upper()} ({count})", style=_RISK_STYLES[level])


def launched_by_cell(server: ServerInfo) -> Text:
    match = server.match
    if match is None or not match.estimated_product:
        return Text("-", style="dim")
    return Text(match.estimated_product)


def progress_bar(count: int, total: int, width: int = BAR_WIDTH) -> tuple[int, int]:
    """Filled and empty cell counts for a ``count`` out of ``total`` bar.

    An empty total renders as a fully empty bar.
    """
    if total <= 0:
        return 0, width
    filled = round(min(count / total, 1.0) * width)
    return filled, width - filled


def _bar(count: int, total: int, style: str) -> Text:
    filled, empty = progress_bar(count, total)
    return Text.assemble(("█" * filled, f"bold {style}"), ("░" * empty, style))


# ---------------------------------------------------------------------------
# Sections
# ---------------------------------------------------------------------------


def print_file_header(index: int, group: AppGroup, entry: ConfigFileEntry) -> None:
    """Print the provider, file, scope and parsable state of one file."""
    grid = Table.grid(padding=(0, 2))
    grid.add_column(style="bold")
    grid.add_column()
    grid.add_row("PROVIDER", Text(group.friendly_name))
    grid.add_row("FILE", Text(format_path(entry.file_path)))
    grid.add_row("TYPE", entry.scope.value.upper())
    grid.add_row(
        "PARSABLE",
        Text("VALID", style="green") if entry.parsable else Text("INVALID", style="red"),
    )
    console.print(Panel(grid, title=Text(f"[{index}]"), title_align="left", expand=False))


def print_server_table(servers: list[ServerInfo]) -> None:
    """Print one row per server of a config file."""
    if not servers:
        console.print("[dim]  No MCP servers declared.[/dim]")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("Status", justify="center")
    table.add_column("Name", style="bold")
    table.add_column("Transport", justify="center")
    table.add_column("Source")
    table.add_column("Version")
    table.add_column("Credentials")
    table.add_column("Launched By")

    for server in servers:
        table.add_row(
            status_cell(server.status),
            Text(server.name),
            transport_cell(server.transport),
            Text(server.source or "-"),
            version_cell(server),
            credentials_cell(server),
            launched_by_cell(server),
        )
    console.print(table)


def print_groups(groups: Iterable[AppGroup]) -> int:
    """Print every file of every group.

    Returns:
        Number of files printed.
    """
    index = 0
    for group in groups:
        for entry in group.files:
            index += 1
            console.print()
            print_file_header(index, group, entry)
            print_server_table(entry.servers)
    return index


def print_summary(summary: ScanSummary) -> None:
    """Print running, credential, version and transport statistics."""
    total = summary.total_servers
    breakdown = summary.transport_breakdown

    grid = Table.grid(padding=(0, 2))
    grid.add_column(style="bold")
    grid.add_column()
    grid.add_column()
    grid.add_row(
        "SERVERS",
        _bar(summary.running_servers, total, "green"),
        f"{summary.running_servers} / {total} Running",
    )
    grid.add_row(
        "SECURITY",
        _bar(summary.high_risk_credentials, total, "red"),
        f"{summary.high_risk_credentials} / {total} High Risk Credentials",
    )
    grid.add_row(
        "VERSION",
        _bar(summary.implicit_latest_versions, total, "red"),
        f"{summary.implicit_latest_versions} / {total} Implicit Latest",
    )
    grid.add_row(
        "TRANSPORT",
        f"stdio: {breakdown.get('stdio', 0)} | SSE: {breakdown.get('sse', 0)}"
        f" | HTTP: {breakdown.get('http', 0)}",
        "",
    )
    console.print()
    console.print(Panel(grid, title="SUMMARY", title_align="left", expand=False))


def print_apps(registry: AppRegistry, os_name: str) -> None:
    """Print supported applications and their candidate config paths."""
    table = Table(title=f"Supported Applications ({os_name})", show_header=True, header_style="bold")
    table.add_column("App", style="bold")
    table.add_column("Name")
    table.add_column("Scope", justify="center")
    table.add_column("Path", style="dim")

    for app_name, paths in registry.paths_for_os(os_name).items():
        for position, config_path in enumerate(paths):
            table.add_row(
                app_name if position == 0 else "",
                registry.friendly_name(app_name) if position == 0 else "",
                config_path.scope.value,
                config_path.file_path,
            )
    console.print(table)


# ---------------------------------------------------------------------------
# JSON
# ---------------------------------------------------------------------------


def server_to_dict(server: ServerInfo) -> dict[str, Any]:
    """JSON-serializable view of a server. Credential values are masked."""
    record = server.record
    version = server.version_info
    match = server.match
    return {
        "name": record.name,
        "command": record.command,
        "args": record.arg_list,
        "url": record.url,
        "type": record.type,
        "transport": server.transport.value if server.transport else None,
        "source": server.source,
        "status": server.status.value,
        "version": None if version is None else {
            "package_name": version.package_name,
            "version": version.version,
            "is_pinned": version.is_pinned,
            "is_latest": version.is_latest,
        },
        "credentials": {
            "has_credentials": server.credentials.has_credentials,
            "risk_level": server.credentials.overall_risk_level.value,
            "findings": [
                {
                    "name": f.name,
                    "value": f.masked_value,
                    "risk_level": f.risk_level.value,
                    "source": f.source.value,
                }
                for f in server.credentials.findings
            ],
        },
        "process": None if match is None else {
            "status": match.status.value,
            "pid": match.pid,
            "parent_pid": match.parent_pid,
            "vendor": match.estimated_vendor,
            "product": match.estimated_product,
        },
    }


def summary_to_dict(summary: ScanSummary) -> dict[str, Any]:
    return {
        "total_servers": summary.total_servers,
        "running_servers": summary.running_servers,
        "high_risk_credentials": summary.high_risk_credentials,
        "implicit_latest_versions": summary.implicit_latest_versions,
        "transport_breakdown": dict(summary.transport_breakdown),
    }


def groups_to_json(groups: Mapping[str, AppGroup], summary: ScanSummary) -> dict[str, Any]:
    """Build the ``--json`` document for a scan.

    Args:
        groups: Groups to include, keyed by application name.
        summary: Statistics over the whole scan.

    Returns:
        Dictionary with ``groups`` and ``summary`` keys.
    """
    return {
        "groups": [
            {
                "name": group.name,
                "friendly_name": group.friendly_name,
                "servers_count": group.servers_count,
                "files": [
                    {
                        "file_path": str(entry.file_path),
                        "scope": entry.scope.value,
                        "parsable": entry.parsable,
                        "servers": [server_to_dict(s) for s in entry.servers],
                    }
                    for entry in group.files
                ],
            }
            for group in groups.values()
        ],
        "summary": summary_to_dict(summary),
    }
