"""Tests for the application path registry.

Validates the static table of known applications: OS coverage, scope
markers, alias handling, custom registration, and path template expansion.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from lsmcp.discovery.app_registry import (
    APP_PROFILES,
    SUPPORTED_OPERATING_SYSTEMS,
    AppRegistry,
    expand_path_template,
    normalize_os,
)
from lsmcp.discovery.models import ConfigPath, ConfigScope
from lsmcp.exceptions import RegistryError, UnknownAppError, UnsupportedPlatformError

EXPECTED_APPS = {
    "claude",
    "claude_code",
    "cursor",
    "vscode",
    "cline",
    "windsurf",
    "roo",
    "intellij-github-copilot",
    "junie",
    "zed",
    "gemini",
}


@pytest.fixture
def registry() -> AppRegistry:
    return AppRegistry()


# ---------------------------------------------------------------------------
# Registry completeness
# ---------------------------------------------------------------------------


class TestRegistryCompleteness:

    def test_profile_names_unique(self) -> None:
        names = [p.name for p in APP_PROFILES]
        assert len(names) == len(set(names))

    @pytest.mark.parametrize("os_name", SUPPORTED_OPERATING_SYSTEMS)
    def test_every_app_on_every_os(self, registry: AppRegistry, os_name: str) -> None:
        assert set(registry.supported_apps(os_name)) == EXPECTED_APPS

    @pytest.mark.parametrize("os_name", SUPPORTED_OPERATING_SYSTEMS)
    def test_every_app_has_paths(self, registry: AppRegistry, os_name: str) -> None:
        for app, paths in registry.paths_for_os(os_name).items():
            assert paths, f"{app} has no paths on {os_name}"

    def test_local_paths_are_relative(self, registry: AppRegistry) -> None:
        for os_name in SUPPORTED_OPERATING_SYSTEMS:
            for paths in registry.paths_for_os(os_name).values():
                for config_path in paths:
                    if config_path.scope is ConfigScope.LOCAL:
                        assert not config_path.file_path.startswith(("~", "$", "/"))

    def test_windows_uses_appdata(self, registry: AppRegistry) -> None:
        (claude,) = registry.paths_for_app("win32", "claude")
        assert claude.file_path.startswith("${APPDATA}")

    def test_macos_uses_application_support(self, registry: AppRegistry) -> None:
        (claude,) = registry.paths_for_app("darwin", "claude")
        assert "Library/Application Support" in claude.file_path

    def test_supported_operating_systems(self, registry: AppRegistry) -> None:
        assert registry.supported_operating_systems() == ["win32", "darwin", "linux"]


# ---------------------------------------------------------------------------
# Lookups
# ---------------------------------------------------------------------------


class TestLookups:

    @pytest.mark.parametrize(
        ("alias", "expected"),
        [("windows", "win32"), ("macos", "darwin"), ("Linux", "linux"), ("win32", "win32")],
    )
    def test_os_aliases(self, alias: str, expected: str) -> None:
        assert normalize_os(alias) == expected

    def test_unknown_os_raises(self, registry: AppRegistry) -> None:
        with pytest.raises(UnsupportedPlatformError, match="freebsd"):
            registry.paths_for_os("freebsd")

    def test_unknown_app_raises(self, registry: AppRegistry) -> None:
        with pytest.raises(UnknownAppError):
            registry.paths_for_app("linux", "notepad")

    def test_errors_share_base(self) -> None:
        assert issubclass(UnknownAppError, RegistryError)
        assert issubclass(UnsupportedPlatformError, RegistryError)

    def test_friendly_names(self, registry: AppRegistry) -> None:
        assert registry.friendly_name("claude") == "Claude Desktop"
        assert registry.friendly_name("junie") == "IntelliJ Junie"
        assert registry.friendly_name("unlisted") == "unlisted"

    def test_returned_lists_are_copies(self, registry: AppRegistry) -> None:
        registry.paths_for_app("linux", "cursor").clear()
        assert registry.paths_for_app("linux", "cursor")


class TestCustomApps:

    def test_register_adds_app(self, registry: AppRegistry) -> None:
        registry.register_custom_app(
            "linux",
            "acme",
            [ConfigPath("~/.acme/mcp.json", ConfigScope.GLOBAL)],
            friendly_name="Acme IDE",
        )
        assert "acme" in registry.supported_apps("linux")
        assert "acme" not in registry.supported_apps("darwin")
        assert registry.friendly_name("acme") == "Acme IDE"

    def test_register_replaces_builtin(self, registry: AppRegistry) -> None:
        replacement = [ConfigPath(".cursor/other.json", ConfigScope.LOCAL)]
        registry.register_custom_app("macos", "cursor", replacement)
        assert registry.paths_for_app("darwin", "cursor") == replacement

    def test_register_unknown_os(self, registry: AppRegistry) -> None:
        with pytest.raises(UnsupportedPlatformError):
            registry.register_custom_app("beos", "x", [])


# ---------------------------------------------------------------------------
# Template expansion
# ---------------------------------------------------------------------------


class TestExpandPathTemplate:

    def test_home(self, tmp_path: Path) -> None:
        assert expand_path_template("~/.cursor/mcp.json", env={}, home=tmp_path) == (
            tmp_path / ".cursor/mcp.json"
        )

    def test_env_variable(self, tmp_path: Path) -> None:
        env = {"APPDATA": str(tmp_path / "Roaming")}
        result = expand_path_template("${APPDATA}/Claude/claude_desktop_config.json", env=env)
        assert result == tmp_path / "Roaming" / "Claude" / "claude_desktop_config.json"

    def test_unset_variable_gives_none(self) -> None:
        assert expand_path_template("${LOCALAPPDATA}/zed/settings.json", env={}) is None

    def test_relative_path_untouched(self) -> None:
        assert expand_path_template(".vscode/mcp.json", env={}) == Path(".vscode/mcp.json")
