"""Comment-tolerant JSON (JSONC) support.

Editors such as VS Code and Zed allow ``//`` and ``/* */`` comments and
trailing commas in their settings files. ``loads_jsonc`` removes those
outside string literals and hands the rest to ``json.loads``.
"""

from __future__ import annotations

import json
from typing import Any


def strip_jsonc_comments(text: str) -> str:
    """Strip // and /* */ comments from JSONC using a state machine.

    Tracks whether we are inside a JSON string so that ``//`` in values
    (URLs, for instance) survives.
    """
    result: list[str] = []
    i = 0
    length = len(text)
    in_string = False
    escape = False

    while i < length:
        ch = text[i]

        if in_string:
            result.append(ch)
            if escape:
                escape = False
            elif ch == "\\":
                escape = True
            elif ch == '"':
                in_string = False
            i += 1
            continue

        if ch == '"':
            in_string = True
            result.append(ch)
            i += 1
            continue

        if ch == "/" and i + 1 < length and text[i + 1] == "/":
            i += 2
            while i < length and text[i] != "\n":
                i += 1
            continue

        if ch == "/" and i + 1 < length and text[i + 1] == "*":
            i += 2
            while i + 1 < length and not (text[i] == "*" and text[i + 1] == "/"):
                i += 1
            i += 2
            continue

        result.append(ch)
        i += 1

    return "".join(result)


def strip_trailing_commas(text: str) -> str:
    """Drop commas that directly precede a closing ``}`` or ``]``."""
    result: list[str] = []
    pending_comma: int | None = None
    in_string = False
    escape = False

    for ch in text:
        if in_string:
            result.append(ch)
            if escape:
                escape = False
            elif ch == "\\":
                escape = True
            elif ch == '"':
                in_string = False
            continue

        if ch == '"':
            in_string = True
            pending_comma = None
        elif ch == ",":
            pending_comma = len(result)
        elif ch in "}]":
            if pending_comma is not None:
                del result[pending_comma]
            pending_comma = None
        elif not ch.isspace():
            pending_comma = None
        result.append(ch)

    return "".join(result)


def loads_jsonc(text: str) -> Any:
    """Decode JSONC text.

    Raises:
        json.JSONDecodeError: If the text is not valid even after comments
            and trailing commas are removed.
    """
    return json.loads(strip_trailing_commas(strip_jsonc_comments(text)))
