"""Data models for process correlation.

A ``ProcessSnapshot`` is valid only for the correlation pass it was taken
for; nothing here is persisted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


@dataclass(frozen=True)
class ProcessEntry:
    """One live OS process.

    Attributes:
        pid: Process id.
        parent_pid: Parent process id.
        command_line: Shell-quoted command line built from the arguments.
        command_tokens: Argument vector; tokenizing ``command_line`` gives it back.
    """

    pid: int
    parent_pid: int
    command_line: str
    command_tokens: tuple[str, ...] = field(default_factory=tuple)


@dataclass
class ProcessSnapshot:
    """Point-in-time capture of the process table."""

    entries: list[ProcessEntry] = field(default_factory=list)

    def __post_init__(self) -> None:
        self._by_pid: dict[int, ProcessEntry] = {e.pid: e for e in self.entries}

    def __iter__(self):
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def get(self, pid: int) -> ProcessEntry | None:
        return self._by_pid.get(pid)

    def parent_of(self, entry: ProcessEntry) -> ProcessEntry | None:
        """Return the parent entry, if it is part of the same snapshot."""
        if entry.parent_pid == entry.pid:
            return None
        return self._by_pid.get(entry.parent_pid)


class MatchStatus(str, Enum):
    """Outcome of correlating one server with one snapshot."""

    MATCHED = "matched"
    NOT_MATCHED = "not_matched"
    PROBE_FAILED = "probe_failed"


@dataclass(frozen=True)
class MatchResult:
    """Terminal output of correlation for one server record.

    ``PROBE_FAILED`` means the process table could not be read, which is
    distinct from a confirmed ``NOT_MATCHED``.
    """

    status: MatchStatus
    pid: int | None = None
    parent_pid: int | None = None
    parent_command_line: str | None = None
    estimated_vendor: str | None = None
    estimated_product: str | None = None

    @property
    def matched(self) -> bool:
        return self.status is MatchStatus.MATCHED

    @classmethod
    def not_matched(cls) -> MatchResult:
        return cls(status=MatchStatus.NOT_MATCHED)

    @classmethod
    def probe_failed(cls) -> MatchResult:
        return cls(status=MatchStatus.PROBE_FAILED)
