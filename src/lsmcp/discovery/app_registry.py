"""Static registry of AI applications and their MCP config locations.

Each ``AppProfile`` lists, per operating system, the files an application
reads MCP server declarations from. Paths are templates:

- ``~`` is the user's home directory.
- ``${APPDATA}`` / ``${LOCALAPPDATA}`` are the Windows roaming and local
  application data directories.
- A path without either is ``local`` and resolved against the project
  directory.

Platform Notes:
    macOS stores editor settings under ``~/Library/Application Support/``.
    Linux uses ``~/.config/``. Windows uses ``%APPDATA%``, except for a few
    tools that write to ``%LOCALAPPDATA%`` or a dot-directory in the home.
"""

from __future__ import annotations

import os
import platform
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path

from lsmcp.discovery.models import ConfigPath, ConfigScope
from lsmcp.exceptions import UnknownAppError, UnsupportedPlatformError

SUPPORTED_OPERATING_SYSTEMS: tuple[str, ...] = ("win32", "darwin", "linux")

_OS_ALIASES: dict[str, str] = {
    "win32": "win32",
    "windows": "win32",
    "darwin": "darwin",
    "macos": "darwin",
    "linux": "linux",
}

_ENV_VAR = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)\}")


def _g(path: str) -> ConfigPath:
    return ConfigPath(path, ConfigScope.GLOBAL)


def _l(path: str) -> ConfigPath:
    return ConfigPath(path, ConfigScope.LOCAL)


@dataclass(frozen=True)
class AppProfile:
    """Where one application keeps its MCP configuration on each OS.

    Attributes:
        name: Machine identifier (e.g., "vscode").
        friendly_name: Human-readable display name (e.g., "VS Code").
        darwin: Candidate paths on macOS.
        linux: Candidate paths on Linux.
        win32: Candidate paths on Windows.
    """

    name: str
    friendly_name: str
    darwin: tuple[ConfigPath, ...] = field(default_factory=tuple)
    linux: tuple[ConfigPath, ...] = field(default_factory=tuple)
    win32: tuple[ConfigPath, ...] = field(default_factory=tuple)

    def paths_for(self, os_name: str) -> tuple[ConfigPath, ...]:
        return getattr(self, os_name)


def _build_profiles() -> list[AppProfile]:
    """Build the ordered list of known application profiles."""
    mac_support = "~/Library/Application Support"
    cline_settings = "globalStorage/saoudrizwan.claude-dev/settings/cline_mcp_settings.json"
    roo_settings = "globalStorage/rooveterinaryinc.roo-cline/settings/cline_mcp_settings.json"

    return [
        # -- Desktop assistants --
        AppProfile(
            name="claude",
            friendly_name="Claude Desktop",
            darwin=(_g(f"{mac_support}/Claude/claude_desktop_config.json"),),
            linux=(_g("~/.config/Claude/claude_desktop_config.json"),),
            win32=(_g("${APPDATA}/Claude/claude_desktop_config.json"),),
        ),
        AppProfile(
            name="claude_code",
            friendly_name="Claude Code",
            darwin=(_l(".mcp.json"),),
            linux=(_l(".mcp.json"),),
            win32=(_l(".mcp.json"),),
        ),
        # -- Editors --
        AppProfile(
            name="cursor",
            friendly_name="Cursor",
            darwin=(_g("~/.cursor/mcp.json"), _l(".cursor/mcp.json")),
            linux=(_g("~/.cursor/mcp.json"), _l(".cursor/mcp.json")),
            win32=(_g("~/.cursor/mcp.json"), _l(".cursor/mcp.json")),
        ),
        AppProfile(
            name="vscode",
            friendly_name="VS Code",
            darwin=(
                _l(".vscode/mcp.json"),
                _g(f"{mac_support}/Code/User/settings.json"),
                _g(f"{mac_support}/Code/User/mcp.json"),
                _g(f"{mac_support}/Code - Insiders/User/settings.json"),
                _g(f"{mac_support}/Code - Insiders/User/mcp.json"),
            ),
            linux=(
                _l(".vscode/mcp.json"),
                _g("~/.config/Code/User/settings.json"),
                _g("~/.config/Code - Insiders/User/settings.json"),
                _g("~/.config/Code/User/mcp.json"),
                _g("~/.config/Code - Insiders/User/mcp.json"),
                _g("~/.mcp.json"),
            ),
            win32=(
                _l(".vscode/mcp.json"),
                _g("${APPDATA}/Code/User/settings.json"),
                _g("${APPDATA}/Code - Insiders/User/settings.json"),
                _g("${APPDATA}/Code/User/mcp.json"),
                _g("${APPDATA}/Code - Insiders/User/mcp.json"),
            ),
        ),
        AppProfile(
            name="cline",
            friendly_name="Cline",
            darwin=(
                _g(f"{mac_support}/Code/User/{cline_settings}"),
                _g(f"{mac_support}/Code - Insiders/User/{cline_settings}"),
            ),
            linux=(
                _g(f"~/.config/Code/User/{cline_settings}"),
                _g(f"~/.config/Code - Insiders/User/{cline_settings}"),
            ),
            win32=(
                _g(f"${{APPDATA}}/Code/User/{cline_settings}"),
                _g(f"${{APPDATA}}/Code - Insiders/User/{cline_settings}"),
            ),
        ),
        AppProfile(
            name="windsurf",
            friendly_name="Windsurf",
            darwin=(_l(".codeium/windsurf/mcp_config.json"),),
            linux=(_l(".codeium/windsurf/mcp_config.json"),),
            win32=(_l(".codeium/windsurf/mcp_config.json"),),
        ),
        AppProfile(
            name="roo",
            friendly_name="Roo",
            darwin=(
                _g(f"{mac_support}/Code/User/{roo_settings}"),
                _g(f"{mac_support}/Code - Insiders/User/{roo_settings}"),
            ),
            linux=(
                _g(f"~/.config/Code/User/{roo_settings}"),
                _g(f"~/.config/Code - Insiders/User/{roo_settings}"),
            ),
            win32=(
                _g(f"${{APPDATA}}/Code/User/{roo_settings}"),
                _g(f"${{APPDATA}}/Code - Insiders/User/{roo_settings}"),
            ),
        ),
        # -- JetBrains --
        AppProfile(
            name="intellij-github-copilot",
            friendly_name="IntelliJ GitHub Copilot",
            darwin=(_g("~/.config/github-copilot/intellij/mcp.json"),),
            linux=(_g("~/.config/github-copilot/intellij/mcp.json"),),
            win32=(_g("${LOCALAPPDATA}/github-copilot/intellij/mcp.json"),),
        ),
        AppProfile(
            name="junie",
            friendly_name="IntelliJ Junie",
            darwin=(_g("~/.junie/mcp/mcp.json"), _l(".junie/mcp/mcp.json")),
            linux=(_g("~/.junie/mcp.json"), _l(".junie/mcp/mcp.json")),
            win32=(_g("~/.junie/mcp/mcp.json"),),
        ),
        # -- Others --
        AppProfile(
            name="zed",
            friendly_name="Zed",
            darwin=(_g("~/.config/zed/settings.json"), _l(".zed/settings.json")),
            linux=(_g("~/.config/zed/settings.json"), _l(".zed/settings.json")),
            win32=(_g("${LOCALAPPDATA}/zed/settings.json"), _l(".zed/settings.json")),
        ),
        AppProfile(
            name="gemini",
            friendly_name="Gemini CLI",
            darwin=(_g("~/.gemini/settings.json"), _l(".gemini/settings.json")),
            linux=(_g("~/.gemini/settings.json"), _l(".gemini/settings.json")),
            win32=(_g("~/.gemini/settings.json"), _l(".gemini/settings.json")),
        ),
    ]


APP_PROFILES: tuple[AppProfile, ...] = tuple(_build_profiles())


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def normalize_os(os_name: str) -> str:
    """Map an OS name or alias to ``win32``, ``darwin`` or ``linux``.

    Raises:
        UnsupportedPlatformError: If the name is not recognized.
    """
    key = os_name.strip().lower()
    if key not in _OS_ALIASES:
        raise UnsupportedPlatformError(f"Unsupported operating system: {os_name}")
    return _OS_ALIASES[key]


def current_os() -> str:
    """Registry OS identifier for the running interpreter."""
    system = platform.system().lower()
    if system == "darwin":
        return "darwin"
    return "win32" if system == "windows" else "linux"


def expand_path_template(
    template: str,
    env: Mapping[str, str] | None = None,
    home: Path | None = None,
) -> Path | None:
    """Expand ``~`` and ``${VAR}`` in a path template.

    Args:
        template: Path template from an ``AppProfile``.
        env: Variables to substitute. Defaults to ``os.environ``.
        home: Home directory. Defaults to ``Path.home()``.

    Returns:
        The expanded path, or None when a referenced variable is unset.
    """
    env = os.environ if env is None else env
    missing = False

    def _sub(match: re.Match[str]) -> str:
        nonlocal missing
        value = env.get(match.group(1))
        if not value:
            missing = True
            return ""
        return value

    expanded = _ENV_VAR.sub(_sub, template)
    if missing:
        return None
    if expanded == "~" or expanded.startswith(("~/", "~\\")):
        base = home if home is not None else Path.home()
        return base / expanded[2:] if len(expanded) > 1 else base
    return Path(expanded)


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


class AppRegistry:
    """Lookup of candidate config paths per OS and application.

    Custom applications registered at runtime are returned after the
    built-in ones and replace a built-in application of the same name.

    Args:
        profiles: Built-in profiles. Defaults to ``APP_PROFILES``.
    """

    def __init__(self, profiles: Iterable[AppProfile] = APP_PROFILES) -> None:
        self._profiles: dict[str, AppProfile] = {p.name: p for p in profiles}
        self._custom: dict[str, dict[str, tuple[ConfigPath, ...]]] = {}
        self._custom_names: dict[str, str] = {}

    def supported_operating_systems(self) -> list[str]:
        return list(SUPPORTED_OPERATING_SYSTEMS)

    def paths_for_os(self, os_name: str) -> dict[str, list[ConfigPath]]:
        """All applications and their candidate paths on ``os_name``.

        Raises:
            UnsupportedPlatformError: If ``os_name`` is not recognized.
        """
        key = normalize_os(os_name)
        paths = {name: list(p.paths_for(key)) for name, p in self._profiles.items()}
        for name, custom_paths in self._custom.get(key, {}).items():
            paths[name] = list(custom_paths)
        return paths

    def paths_for_app(self, os_name: str, app_name: str) -> list[ConfigPath]:
        """Candidate paths for one application.

        Raises:
            UnsupportedPlatformError: If ``os_name`` is not recognized.
            UnknownAppError: If the application has no entry for that OS.
        """
        paths = self.paths_for_os(os_name)
        if app_name not in paths:
            raise UnknownAppError(f"App '{app_name}' not found for OS '{os_name}'")
        return paths[app_name]

    def supported_apps(self, os_name: str) -> list[str]:
        return list(self.paths_for_os(os_name))

    def friendly_name(self, app_name: str) -> str:
        """Display name of an application, or ``app_name`` if unknown."""
        if app_name in self._custom_names:
            return self._custom_names[app_name]
        profile = self._profiles.get(app_name)
        return profile.friendly_name if profile else app_name

    def register_custom_app(
        self,
        os_name: str,
        app_name: str,
        paths: Iterable[ConfigPath],
        friendly_name: str | None = None,
    ) -> None:
        """Add or replace an application's paths for one OS."""
        key = normalize_os(os_name)
        self._custom.setdefault(key, {})[app_name] = tuple(paths)
        if friendly_name:
            self._custom_names[app_name] = friendly_name
