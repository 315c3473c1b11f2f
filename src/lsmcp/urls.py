"""URL helpers."""

from __future__ import annotations

from urllib.parse import urlsplit


def extract_hostname(url: str) -> str:
    """Return the hostname of ``url``.

    A URL without a scheme is read as ``http://``. When no hostname can be
    parsed the original string is returned unchanged.

    >>> extract_hostname("https://api.example.com:8443/mcp")
    'api.example.com'
    >>> extract_hostname("localhost:3000/sse")
    'localhost'
    """
    candidate = url if "://" in url else f"http://{url}"
    try:
        hostname = urlsplit(candidate).hostname
    except ValueError:
        return url
    return hostname or url
