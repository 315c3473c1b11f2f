"""Tests for parent directory config lookup."""

from __future__ import annotations

from pathlib import Path

from lsmcp.discovery.bubble import find_in_parent_directories


class TestFindInParentDirectories:

    def test_found_in_start_directory(self, tmp_path: Path) -> None:
        (tmp_path / ".mcp.json").write_text("{}")
        assert find_in_parent_directories(".mcp.json", tmp_path, home=tmp_path) == (
            tmp_path.resolve() / ".mcp.json"
        )

    def test_found_in_ancestor(self, tmp_path: Path) -> None:
        project = tmp_path / "home" / "project"
        nested = project / "src" / "pkg"
        nested.mkdir(parents=True)
        config = project / ".vscode" / "mcp.json"
        config.parent.mkdir()
        config.write_text("{}")

        found = find_in_parent_directories(".vscode/mcp.json", nested, home=tmp_path / "home")
        assert found == config.resolve()

    def test_nearest_ancestor_wins(self, tmp_path: Path) -> None:
        outer = tmp_path / "a"
        inner = outer / "b"
        start = inner / "c"
        start.mkdir(parents=True)
        (outer / ".mcp.json").write_text("{}")
        (inner / ".mcp.json").write_text("{}")
        assert find_in_parent_directories(".mcp.json", start, home=tmp_path) == (
            inner.resolve() / ".mcp.json"
        )

    def test_stops_at_home(self, tmp_path: Path) -> None:
        home = tmp_path / "home"
        start = home / "project"
        start.mkdir(parents=True)
        (tmp_path / ".mcp.json").write_text("{}")
        assert find_in_parent_directories(".mcp.json", start, home=home) is None

    def test_home_itself_is_checked(self, tmp_path: Path) -> None:
        home = tmp_path / "home"
        start = home / "project"
        start.mkdir(parents=True)
        (home / ".mcp.json").write_text("{}")
        assert find_in_parent_directories(".mcp.json", start, home=home) == (
            home.resolve() / ".mcp.json"
        )

    def test_not_found_outside_home(self, tmp_path: Path) -> None:
        start = tmp_path / "elsewhere"
        start.mkdir()
        result = find_in_parent_directories(
            "definitely-not-present-7f3a/mcp.json", start, home=tmp_path / "unrelated-home"
        )
        assert result is None

    def test_missing_start_never_raises(self, tmp_path: Path) -> None:
        assert (
            find_in_parent_directories(".mcp.json", tmp_path / "missing", home=tmp_path) is None
        )
