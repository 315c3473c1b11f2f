"""Package version pinning for package-runner launch commands.

Three runner idioms are understood:

- ``npx [-y|--yes] <spec> ...`` -- the npm package runner.
- ``uvx <spec> ...`` -- the uv tool runner; the spec is always first.
- ``uv [...] run <spec> ...`` -- uv project runner.

A spec such as ``@scope/name@1.2.3`` is pinned; ``name``, ``name@latest``
and ``@scope/name`` resolve to whatever is newest at launch time, which is
a supply chain exposure the CLI surfaces to the user.
"""

from __future__ import annotations

from collections.abc import Sequence

from lsmcp.analysis.models import PackageVersionInfo
from lsmcp.cmdline import base_command

# npx options whose next argument is their value, not the package spec.
DEFAULT_OPTION_VALUE_FLAGS: tuple[str, ...] = ("--registry", "-r", "--package", "-p")

_NPX_CONFIRM_FLAGS: tuple[str, ...] = ("-y", "--yes")


def parse_package_spec(spec: str) -> tuple[str, str | None]:
    """Split a package spec into name and optional version.

    The split happens at the last ``@`` that is not the leading scope
    marker, so ``@scope/name`` carries no version while
    ``@scope/name@2.0.0`` does.

    Returns:
        ``(name, version)``; version is None when absent.
    """
    if not spec:
        return "", None
    at_index = spec.rfind("@")
    if at_index <= 0:
        return spec, None
    return spec[:at_index], spec[at_index + 1:] or None


def is_pinned_version(version: str | None) -> bool:
    """Any non-empty version other than ``latest`` is pinned."""
    return bool(version) and version != "latest"


class VersionAnalyzer:
    """Determines whether a server's package is version-pinned.

    Args:
        option_value_flags: npx options that consume the following
            argument. Defaults to ``DEFAULT_OPTION_VALUE_FLAGS``.
    """

    def __init__(self, option_value_flags: Sequence[str] = DEFAULT_OPTION_VALUE_FLAGS) -> None:
        self.option_value_flags = tuple(option_value_flags)

    def analyze_server_version(
        self,
        command: str,
        args: Sequence[str] | None,
    ) -> PackageVersionInfo | None:
        """Analyze a launch command.

        Returns:
            ``PackageVersionInfo``, or None for unsupported commands and
            when no package spec can be identified.
        """
        spec = self.extract_package_spec(command, args)
        if spec is None:
            return None
        name, version = parse_package_spec(spec)
        return PackageVersionInfo(
            package_name=name,
            version=version,
            is_pinned=is_pinned_version(version),
        )

    def extract_package_spec(self, command: str, args: Sequence[str] | None) -> str | None:
        """Route to the idiom-specific extractor for ``command``.

        The launcher is recognized by its base name, so
        ``/usr/local/bin/npx`` and ``npx.exe`` route like ``npx``.
        """
        if not args:
            return None
        args = list(args)
        launcher = base_command(command)
        if launcher == "npx":
            return self.extract_npx_spec(args)
        if launcher == "uvx":
            return self.extract_uvx_spec(args)
        if launcher == "uv":
            return self.extract_uv_spec(args)
        return None

    def extract_npx_spec(self, args: list[str]) -> str | None:
        """Spec after ``-y``/``--yes``, else the first positional argument."""
        for flag in _NPX_CONFIRM_FLAGS:
            if flag in args:
                index = args.index(flag)
                if index + 1 < len(args):
                    return args[index + 1]

        for index, arg in enumerate(args):
            if arg.startswith("-"):
                continue
            if index > 0 and args[index - 1] in self.option_value_flags:
                continue
            return arg
        return None

    def extract_uvx_spec(self, args: list[str]) -> str | None:
        """The first argument, even when it looks like an option."""
        return args[0] if args else None

    def extract_uv_spec(self, args: list[str]) -> str | None:
        """The argument following the first ``run`` token."""
        if "run" not in args:
            return None
        index = args.index("run")
        if index + 1 >= len(args):
            return None
        return args[index + 1]
