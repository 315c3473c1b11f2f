"""lsmcp CLI -- List MCP servers configured across AI applications.

Entry point for the ``lsmcp`` command-line tool. Registers all
subcommands under a single Click group.

Commands:
    list -- Discover config files, analyze servers, show run state.
    apps -- Show supported applications and their config paths.

Usage::

    lsmcp                                 # Same as ``lsmcp list``
    lsmcp list --all                      # Include apps with no servers
    lsmcp list --files ./mcp.json,~/.cursor/mcp.json
    lsmcp list --json --no-status
    lsmcp apps --os macos
"""

from __future__ import annotations

import click

from lsmcp import __version__
from lsmcp.cli.apps_cmd import apps_command
from lsmcp.cli.list_cmd import list_command


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="lsmcp")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """lsmcp: List MCP servers configured on this machine.

    Finds MCP server declarations in the config files of AI assistants and
    editors, flags embedded credentials and unpinned packages, and shows
    which servers are running and which application launched them.
    """
    if ctx.invoked_subcommand is None:
        ctx.invoke(list_command)


# Register all subcommands
cli.add_command(list_command)
cli.add_command(apps_command)
