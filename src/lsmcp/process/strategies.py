"""Matching strategies between a configured server and a live process.

Every strategy implements the ``MatchStrategy`` abstract base class. One
strategy is chosen per server record by ``select_strategy()`` and then
tried against every process in a snapshot:

- ``UvxRunnerStrategy`` -- ``uvx`` launches show up as a ``uv`` process.
- ``NpxRunnerStrategy`` -- ``npx`` launches show up as ``npm exec``,
  ``npx`` or a ``node`` process running the installed package.
- ``InterpreterStrategy`` -- ``python3 server.py`` may run as
  ``python3.11 server.py``; both sides only need the same interpreter
  family.
- ``PositionalStrategy`` -- everything else: same executable name and the
  configured arguments at the same offsets.

A record with no command gets no strategy and is never matched.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from collections.abc import Sequence

from lsmcp.analysis.versions import VersionAnalyzer, parse_package_spec
from lsmcp.cmdline import base_command
from lsmcp.process.models import ProcessEntry

# ---------------------------------------------------------------------------
# Interpreter families
# ---------------------------------------------------------------------------

_PYTHON_FAMILY = re.compile(r"^python(\d+(\.\d+)*)?w?$", re.IGNORECASE)
_NODE_FAMILY: frozenset[str] = frozenset({"node", "nodejs"})

_NPX_PROCESS_BASES: frozenset[str] = frozenset({"npm", "npx", "node"})


def interpreter_family(name: str) -> str | None:
    """Family name (``python`` or ``node``) for an executable, if any."""
    if _PYTHON_FAMILY.match(name):
        return "python"
    if name.lower() in _NODE_FAMILY:
        return "node"
    return None


def positional_args_match(configured: Sequence[str], process_args: Sequence[str]) -> bool:
    """Each configured argument equals or is contained in the process
    argument at the same offset.

    A process with fewer arguments than configured never matches. Extra
    trailing process arguments are allowed.
    """
    if len(process_args) < len(configured):
        return False
    return all(
        expected == actual or expected in actual
        for expected, actual in zip(configured, process_args)
    )


def _any_token_contains(tokens: Sequence[str], needle: str) -> bool:
    return any(token == needle or needle in token for token in tokens)


# ---------------------------------------------------------------------------
# Strategy interface
# ---------------------------------------------------------------------------


class MatchStrategy(ABC):
    """Decides whether a process is an instance of one configured server.

    Args:
        command: Configured launch command.
        args: Configured launch arguments.
    """

    def __init__(self, command: str, args: Sequence[str] | None = None) -> None:
        self.command = command
        self.args: tuple[str, ...] = tuple(args or ())

    @abstractmethod
    def matches(self, entry: ProcessEntry) -> bool:
        """Return True if ``entry`` runs the configured server."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(command={self.command!r}, args={list(self.args)!r})"


class UvxRunnerStrategy(MatchStrategy):
    """``uvx`` servers running as a ``uv`` process."""

    def identifying_name(self) -> str | None:
        """Name expected somewhere on the ``uv`` process command line.

        The value after ``--from`` wins, then a sole argument, then the
        last argument when the first is an option, then the first argument.
        """
        args = self.args
        if not args:
            return None
        for index, arg in enumerate(args[:-1]):
            if arg == "--from":
                return args[index + 1]
        if len(args) == 1:
            return args[0]
        if args[0].startswith("-"):
            return args[-1]
        return args[0]

    def matches(self, entry: ProcessEntry) -> bool:
        tokens = entry.command_tokens
        if not tokens or base_command(tokens[0]) != "uv":
            return False
        name = self.identifying_name()
        if not name:
            return False
        return _any_token_contains(tokens, name)


class NpxRunnerStrategy(MatchStrategy):
    """``npx`` servers running under npm, npx or node."""

    def __init__(
        self,
        command: str,
        args: Sequence[str] | None = None,
        version_analyzer: VersionAnalyzer | None = None,
    ) -> None:
        super().__init__(command, args)
        self.version_analyzer = version_analyzer or VersionAnalyzer()

    def identifying_names(self) -> tuple[str, ...]:
        """The package spec, plus its bare name when it carries a version.

        An installed package runs from a path containing its name but not
        its version, so both forms are accepted.
        """
        spec = self.version_analyzer.extract_npx_spec(list(self.args))
        if not spec:
            return ()
        name, version = parse_package_spec(spec)
        if version and name:
            return (spec, name)
        return (spec,)

    def matches(self, entry: ProcessEntry) -> bool:
        tokens = entry.command_tokens
        if not tokens or base_command(tokens[0]).lower() not in _NPX_PROCESS_BASES:
            return False
        process_args = tokens[1:]
        return any(
            _any_token_contains(process_args, name) for name in self.identifying_names()
        )


class InterpreterStrategy(MatchStrategy):
    """Script servers run by an interpreter of the same family."""

    def matches(self, entry: ProcessEntry) -> bool:
        tokens = entry.command_tokens
        if not tokens:
            return False
        family = interpreter_family(base_command(self.command))
        if family is None or interpreter_family(base_command(tokens[0])) != family:
            return False
        return positional_args_match(self.args, tokens[1:])


class PositionalStrategy(MatchStrategy):
    """Same executable name and arguments in the same positions."""

    def matches(self, entry: ProcessEntry) -> bool:
        tokens = entry.command_tokens
        if not tokens or base_command(tokens[0]) != base_command(self.command):
            return False
        return positional_args_match(self.args, tokens[1:])


# ---------------------------------------------------------------------------
# Selection
# ---------------------------------------------------------------------------


def select_strategy(command: str, args: Sequence[str] | None = None) -> MatchStrategy | None:
    """Pick the strategy for a configured launch command.

    Returns:
        A strategy instance, or None when there is no command to match.
    """
    if not command or not command.strip():
        return None
    base = base_command(command.strip())
    if base == "uvx":
        return UvxRunnerStrategy(command, args)
    if base == "npx":
        return NpxRunnerStrategy(command, args)
    if interpreter_family(base) is not None:
        return InterpreterStrategy(command, args)
    return PositionalStrategy(command, args)
