"""Logging configuration for the CLI.

Library modules only create loggers; handlers are installed here when the
user asks for ``--debug``.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(debug: bool = False) -> None:
    """Route ``lsmcp`` log records to stderr through rich."""
    level = logging.DEBUG if debug else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )
