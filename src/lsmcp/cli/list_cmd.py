"""``lsmcp list`` -- Discover MCP servers and report their state.

Without ``--files``, every known application's config locations for the
current OS are checked. With ``--files``, only the given files are read
and reported as a single "Custom Files" group.

Exit Codes:
    0 -- Always (informational command). Unreadable files are reported,
    not fatal.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping

import click

from lsmcp.cli.logging_setup import setup_logging
from lsmcp.cli.output import console, groups_to_json, print_groups, print_summary
from lsmcp.discovery.models import AppGroup
from lsmcp.discovery.service import CUSTOM_GROUP, ConfigService
from lsmcp.process.engine import ProcessCorrelationEngine


def split_file_options(values: Iterable[str]) -> list[str]:
    """Flatten repeated and comma-separated ``--files`` values.

    >>> split_file_options(["a.json,b.json", " c.json "])
    ['a.json', 'b.json', 'c.json']
    """
    paths: list[str] = []
    for value in values:
        paths.extend(part.strip() for part in value.split(",") if part.strip())
    return paths


def visible_groups(groups: Mapping[str, AppGroup], show_all: bool) -> dict[str, AppGroup]:
    """Groups to render: those with servers, unless ``show_all``.

    The custom group is always shown so that files the user asked for are
    reported even when empty or unreadable.
    """
    return {
        name: group
        for name, group in groups.items()
        if show_all or name == CUSTOM_GROUP or group.servers_count > 0
    }


@click.command("list")
@click.option(
    "--files",
    "files",
    multiple=True,
    metavar="PATH",
    help="Config file(s) to read instead of discovery. Repeatable; commas separate paths.",
)
@click.option(
    "--all",
    "-a",
    "show_all",
    is_flag=True,
    default=False,
    help="Also show applications with no MCP servers.",
)
@click.option(
    "--json",
    "as_json",
    is_flag=True,
    default=False,
    help="Print results as JSON.",
)
@click.option(
    "--no-status",
    is_flag=True,
    default=False,
    help="Skip process correlation.",
)
@click.option(
    "--bubble/--no-bubble",
    default=True,
    show_default=True,
    help="Search parent directories for project-local config files.",
)
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    help="Log discovery and process probe details to stderr.",
)
def list_command(
    files: tuple[str, ...],
    show_all: bool,
    as_json: bool,
    no_status: bool,
    bubble: bool,
    debug: bool,
) -> None:
    """List MCP servers configured on this machine."""
    if debug:
        setup_logging(debug=True)

    service = ConfigService(enable_bubbling=bubble)
    custom_paths = split_file_options(files)
    groups = service.parse_custom_files(custom_paths) if custom_paths else service.file_groups()

    if not no_status:
        service.apply_process_status(groups, ProcessCorrelationEngine())

    summary = service.summarize(groups)
    shown = visible_groups(groups, show_all)

    if as_json:
        click.echo(json.dumps(groups_to_json(shown, summary), indent=2))
        return

    printed = print_groups(shown.values())
    if printed == 0:
        console.print("[dim]No MCP configuration files found.[/dim]")
        return
    print_summary(summary)
