"""Tests for URL hostname extraction."""

from __future__ import annotations

import pytest

from lsmcp.urls import extract_hostname


class TestExtractHostname:

    @pytest.mark.parametrize(
        ("url", "expected"),
        [
            ("https://mcp.example.com/sse", "mcp.example.com"),
            ("http://localhost:3000/mcp", "localhost"),
            ("https://user:pw@api.example.com:8443/x", "api.example.com"),
            ("mcp.example.com/sse", "mcp.example.com"),
            ("HTTPS://API.Example.COM", "api.example.com"),
        ],
    )
    def test_hostnames(self, url: str, expected: str) -> None:
        assert extract_hostname(url) == expected

    def test_unparsable_returned_unchanged(self) -> None:
        assert extract_hostname("http://[::1") == "http://[::1"

    def test_empty(self) -> None:
        assert extract_hostname("") == ""
