"""Command line helpers shared by version analysis and process matching.

A process is recorded with one flat command line built by
``join_command_line``. Splitting it back with ``str.split`` would break
quoted paths such as ``"/Applications/Claude.app/..."``, and ``shlex``
rejects the unbalanced quotes some hand-written command lines carry, so
``parse_command_line`` is a small state machine instead.
"""

from __future__ import annotations

import shlex
from collections.abc import Sequence

_QUOTES = ("'", '"')


def join_command_line(argv: Sequence[str]) -> str:
    """Render an argument vector as one shell-quoted command line.

    >>> join_command_line(["node", "/srv/my server/index.js"])
    "node '/srv/my server/index.js'"
    """
    return shlex.join(argv)


def parse_command_line(command_line: str) -> list[str]:
    """Split a command line into tokens.

    A single or double quote opens a region closed by the same character;
    whitespace inside it does not split. Quote characters are dropped.
    An unterminated quote runs to the end of the line. Empty tokens are
    discarded.

    >>> parse_command_line('a "b c" d')
    ['a', 'b c', 'd']
    """
    tokens: list[str] = []
    current: list[str] = []
    quote_char = ""

    for char in command_line:
        if quote_char:
            if char == quote_char:
                quote_char = ""
            else:
                current.append(char)
        elif char in _QUOTES:
            quote_char = char
        elif char.isspace():
            if current:
                tokens.append("".join(current))
                current = []
        else:
            current.append(char)

    if current:
        tokens.append("".join(current))
    return tokens


def base_command(token: str) -> str:
    """Final path segment of an executable token, without ``.exe``.

    ``/opt/homebrew/bin/uv`` gives ``uv``; ``C:\\Program Files\\nodejs\\node.exe``
    gives ``node``.
    """
    name = token.replace("\\", "/").rstrip("/").rsplit("/", 1)[-1]
    if name.lower().endswith(".exe"):
        name = name[:-4]
    return name
