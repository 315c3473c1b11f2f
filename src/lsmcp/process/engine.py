"""Correlation of configured MCP servers with live processes.

The engine never starts, stops or owns a process. It reads one snapshot
of the process table per pass and answers, for each server record,
whether some process looks like it and which client launched it.

Public API::

    from lsmcp.process import ProcessCorrelationEngine

    engine = ProcessCorrelationEngine()
    results = engine.correlate(config.servers.values())
    for name, result in results.items():
        print(name, result.status.value, result.estimated_product)
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence

from lsmcp.config.models import ServerRecord
from lsmcp.exceptions import ProcessProbeError
from lsmcp.process.models import MatchResult, MatchStatus, ProcessSnapshot
from lsmcp.process.snapshot import DEFAULT_TIMEOUT, take_snapshot
from lsmcp.process.strategies import MatchStrategy, select_strategy
from lsmcp.process.vendors import DEFAULT_VENDOR_RULES, VendorRule, estimate_vendor

logger = logging.getLogger(__name__)

SnapshotProvider = Callable[[float], ProcessSnapshot]


class ProcessCorrelationEngine:
    """Match server records against a process snapshot.

    Args:
        snapshot_provider: Callable taking a timeout and returning a
            ``ProcessSnapshot``. Defaults to ``take_snapshot``.
        vendor_rules: Ordered rules for parent attribution.
        timeout: Seconds allowed for one process table query.
    """

    def __init__(
        self,
        snapshot_provider: SnapshotProvider = take_snapshot,
        vendor_rules: Sequence[VendorRule] = DEFAULT_VENDOR_RULES,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self.snapshot_provider = snapshot_provider
        self.vendor_rules = tuple(vendor_rules)
        self.timeout = timeout

    def take_snapshot(self) -> ProcessSnapshot | None:
        """Capture the process table, or None when the probe fails."""
        try:
            return self.snapshot_provider(self.timeout)
        except ProcessProbeError as exc:
            logger.debug("Process probe failed: %s", exc)
            return None

    def is_running(
        self,
        record: ServerRecord,
        snapshot: ProcessSnapshot | None = None,
    ) -> MatchResult:
        """Correlate a single record.

        Args:
            record: The server to look for.
            snapshot: Snapshot to search. A fresh one is taken when omitted.

        Returns:
            ``MATCHED`` with process details, ``NOT_MATCHED``, or
            ``PROBE_FAILED`` when no snapshot could be taken.
        """
        if snapshot is None:
            snapshot = self.take_snapshot()
            if snapshot is None:
                return MatchResult.probe_failed()
        strategy = select_strategy(record.command, record.args)
        return self._match(strategy, snapshot)

    def correlate(self, records: Iterable[ServerRecord]) -> dict[str, MatchResult]:
        """Correlate many records against one shared snapshot.

        Returns:
            Results keyed by server name. When the probe fails every record
            is ``PROBE_FAILED``.
        """
        records = list(records)
        if not records:
            return {}
        snapshot = self.take_snapshot()
        if snapshot is None:
            return {record.name: MatchResult.probe_failed() for record in records}
        return {record.name: self.is_running(record, snapshot) for record in records}

    # -- Helpers --

    def _match(self, strategy: MatchStrategy | None, snapshot: ProcessSnapshot) -> MatchResult:
        if strategy is None:
            return MatchResult.not_matched()

        for entry in snapshot:
            if not strategy.matches(entry):
                continue
            parent = snapshot.parent_of(entry)
            parent_command_line = parent.command_line if parent else None
            rule = estimate_vendor(parent_command_line, self.vendor_rules)
            return MatchResult(
                status=MatchStatus.MATCHED,
                pid=entry.pid,
                parent_pid=entry.parent_pid,
                parent_command_line=parent_command_line,
                estimated_vendor=rule.vendor if rule else None,
                estimated_product=rule.product if rule else None,
            )
        return MatchResult.not_matched()
