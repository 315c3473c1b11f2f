"""``lsmcp apps`` -- List supported applications and their config paths.

Exit Codes:
    0 -- Table printed.
    2 -- Unknown operating system name.
"""

from __future__ import annotations

import click

from lsmcp.cli.output import print_apps
from lsmcp.discovery.app_registry import AppRegistry, current_os, normalize_os
from lsmcp.exceptions import UnsupportedPlatformError

_OS_CHOICES = ("win32", "windows", "darwin", "macos", "linux")


@click.command("apps")
@click.option(
    "--os",
    "os_name",
    type=click.Choice(_OS_CHOICES, case_sensitive=False),
    default=None,
    help="Operating system to list paths for. Defaults to the current one.",
)
def apps_command(os_name: str | None) -> None:
    """Show where each supported application keeps MCP configuration."""
    registry = AppRegistry()
    try:
        key = normalize_os(os_name) if os_name else current_os()
    except UnsupportedPlatformError as exc:
        raise click.UsageError(str(exc)) from exc
    print_apps(registry, key)
