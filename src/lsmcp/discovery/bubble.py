"""Project-local config lookup in parent directories.

Editors resolve ``.vscode/mcp.json`` or ``.mcp.json`` against the project
root, which is often an ancestor of the directory the CLI runs from. The
search walks upward and stops at the home directory or filesystem root.
"""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

MAX_ITERATIONS = 100


def find_in_parent_directories(
    relative: str | Path,
    start: str | Path,
    home: str | Path | None = None,
) -> Path | None:
    """Find ``relative`` in ``start`` or its nearest ancestor.

    Args:
        relative: Path to look for, relative to each directory
            (e.g. ``.vscode/mcp.json``).
        start: Directory to begin in.
        home: Directory at which the walk stops. Defaults to the user's
            home directory.

    Returns:
        Absolute path of the first match, or None. Never raises.
    """
    try:
        current = Path(start).resolve()
        stop = Path(home).resolve() if home is not None else Path.home().resolve()
    except (OSError, RuntimeError) as exc:
        logger.debug("Cannot resolve bubbling start %s: %s", start, exc)
        return None

    for _ in range(MAX_ITERATIONS):
        candidate = current / relative
        try:
            if candidate.exists():
                return candidate
        except OSError as exc:
            logger.debug("Cannot access %s: %s", candidate, exc)

        if current == stop:
            return None
        parent = current.parent
        if parent == current:
            return None
        current = parent
    return None
