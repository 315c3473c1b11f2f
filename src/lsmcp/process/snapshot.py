"""Process table capture.

One pass over ``psutil.process_iter`` per correlation run. Each process
keeps its argument vector as ``command_tokens`` and a shell-quoted
``command_line`` built from it, so tokenizing the line gives the vector
back even when arguments contain spaces.

Processes that exit during the walk or whose command line cannot be read
are skipped. Failing to walk the table at all raises ``ProcessProbeError``.

Public API::

    from lsmcp.process.snapshot import take_snapshot

    snapshot = take_snapshot(timeout=5.0)
    for entry in snapshot:
        print(entry.pid, entry.command_tokens[:1])
"""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence

import psutil

from lsmcp.cmdline import join_command_line
from lsmcp.exceptions import ProcessProbeError
from lsmcp.process.models import ProcessEntry, ProcessSnapshot

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 5.0

_ATTRS = ["pid", "ppid", "cmdline"]


def entry_from_argv(
    pid: int, parent_pid: int | None, argv: Sequence[str] | None
) -> ProcessEntry | None:
    """Build an entry from a process argument vector.

    Kernel threads and zombies report no arguments and give ``None``.
    """
    tokens = tuple(arg for arg in (argv or ()) if arg)
    if not tokens:
        return None
    return ProcessEntry(
        pid=pid,
        parent_pid=parent_pid or 0,
        command_line=join_command_line(tokens),
        command_tokens=tokens,
    )


def take_snapshot(timeout: float = DEFAULT_TIMEOUT) -> ProcessSnapshot:
    """Capture the current process table.

    Args:
        timeout: Seconds allowed for walking the whole table.

    Returns:
        A ``ProcessSnapshot`` of every readable process with a command line.

    Raises:
        ProcessProbeError: The table could not be listed or the walk ran
            past ``timeout``.
    """
    deadline = time.monotonic() + timeout
    entries: list[ProcessEntry] = []
    skipped = 0

    try:
        for proc in psutil.process_iter(_ATTRS):
            if time.monotonic() > deadline:
                raise ProcessProbeError(f"Listing processes took longer than {timeout:g}s")
            try:
                info = proc.info
                entry = entry_from_argv(info["pid"], info.get("ppid"), info.get("cmdline"))
            except (psutil.NoSuchProcess, psutil.AccessDenied, psutil.ZombieProcess):
                skipped += 1
                continue
            if entry is not None:
                entries.append(entry)
    except (psutil.Error, OSError) as exc:
        raise ProcessProbeError(f"Cannot list processes: {exc}") from exc

    logger.debug("Captured %d processes (%d unreadable)", len(entries), skipped)
    return ProcessSnapshot(entries=entries)
