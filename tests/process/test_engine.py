"""Tests for ProcessCorrelationEngine with injected snapshots.

No test depends on live processes: every snapshot comes from the
``snapshot_of`` fixture through ``snapshot_provider``.
"""

from __future__ import annotations

import pytest

from lsmcp.config.models import ServerRecord
from lsmcp.exceptions import ProcessProbeError
from lsmcp.process import (
    MatchResult,
    MatchStatus,
    ProcessCorrelationEngine,
    ProcessSnapshot,
    VendorRule,
)

CLAUDE_DESKTOP = "/Applications/Claude.app/Contents/MacOS/Claude"


@pytest.fixture
def desktop_snapshot(snapshot_of) -> ProcessSnapshot:
    return snapshot_of(
        (1, 0, "/sbin/launchd"),
        (500, 1, CLAUDE_DESKTOP),
        (600, 500, "/opt/homebrew/bin/uv tool uvx mcp-server-fetch"),
        (700, 500, "npm exec @modelcontextprotocol/server-filesystem /tmp"),
        (800, 1, "/usr/bin/python3.12 /srv/weather.py --units metric"),
    )


def _engine_for(snapshot: ProcessSnapshot, **kwargs) -> ProcessCorrelationEngine:
    calls: list[float] = []

    def provider(timeout: float) -> ProcessSnapshot:
        calls.append(timeout)
        return snapshot

    engine = ProcessCorrelationEngine(snapshot_provider=provider, **kwargs)
    engine.calls = calls  # type: ignore[attr-defined]
    return engine


class TestIsRunning:

    def test_matched_with_parent_attribution(self, desktop_snapshot: ProcessSnapshot) -> None:
        engine = _engine_for(desktop_snapshot)
        record = ServerRecord(name="fetch", command="uvx", args=("mcp-server-fetch",))
        result = engine.is_running(record)
        assert result.status is MatchStatus.MATCHED
        assert result.matched
        assert result.pid == 600
        assert result.parent_pid == 500
        assert result.parent_command_line == CLAUDE_DESKTOP
        assert result.estimated_vendor == "Anthropic"
        assert result.estimated_product == "Claude Desktop"

    def test_matched_without_known_parent(self, desktop_snapshot: ProcessSnapshot) -> None:
        engine = _engine_for(desktop_snapshot)
        record = ServerRecord(name="weather", command="python3", args=("weather.py",))
        result = engine.is_running(record)
        assert result.matched
        assert result.pid == 800
        assert result.parent_command_line == "/sbin/launchd"
        assert result.estimated_vendor is None
        assert result.estimated_product is None

    def test_parent_outside_snapshot(self, snapshot_of) -> None:
        engine = _engine_for(snapshot_of((42, 41, "docker run -i mcp/github")))
        record = ServerRecord(name="gh", command="docker", args=("run", "-i", "mcp/github"))
        result = engine.is_running(record)
        assert result.matched
        assert result.parent_command_line is None
        assert result.estimated_product is None

    def test_not_matched(self, desktop_snapshot: ProcessSnapshot) -> None:
        engine = _engine_for(desktop_snapshot)
        record = ServerRecord(name="time", command="uvx", args=("mcp-server-time",))
        assert engine.is_running(record) == MatchResult.not_matched()

    def test_record_without_command_is_not_matched(
        self, desktop_snapshot: ProcessSnapshot
    ) -> None:
        engine = _engine_for(desktop_snapshot)
        record = ServerRecord(name="remote", url="https://mcp.example.com/sse", type="sse")
        assert engine.is_running(record).status is MatchStatus.NOT_MATCHED

    def test_first_matching_process_wins(self, snapshot_of) -> None:
        engine = _engine_for(
            snapshot_of(
                (10, 1, "node /srv/server.js"),
                (11, 1, "node /srv/server.js"),
            )
        )
        record = ServerRecord(name="s", command="node", args=("server.js",))
        assert engine.is_running(record).pid == 10

    def test_explicit_snapshot_skips_provider(self, desktop_snapshot: ProcessSnapshot) -> None:
        engine = _engine_for(ProcessSnapshot())
        record = ServerRecord(name="fetch", command="uvx", args=("mcp-server-fetch",))
        assert engine.is_running(record, desktop_snapshot).matched
        assert engine.calls == []  # type: ignore[attr-defined]

    def test_custom_vendor_rules(self, desktop_snapshot: ProcessSnapshot) -> None:
        engine = _engine_for(
            desktop_snapshot,
            vendor_rules=(VendorRule("MacOS/Claude", "Acme", "Acme Desktop"),),
        )
        record = ServerRecord(name="fetch", command="uvx", args=("mcp-server-fetch",))
        result = engine.is_running(record)
        assert result.estimated_vendor == "Acme"
        assert result.estimated_product == "Acme Desktop"


class TestProbeFailure:

    @staticmethod
    def _failing(timeout: float) -> ProcessSnapshot:
        raise ProcessProbeError("process table unavailable")

    def test_is_running_reports_probe_failed(self) -> None:
        engine = ProcessCorrelationEngine(snapshot_provider=self._failing)
        result = engine.is_running(ServerRecord(name="a", command="node"))
        assert result.status is MatchStatus.PROBE_FAILED
        assert not result.matched

    def test_correlate_marks_every_record(self) -> None:
        engine = ProcessCorrelationEngine(snapshot_provider=self._failing)
        records = [ServerRecord(name="a", command="node"), ServerRecord(name="b", command="uvx")]
        results = engine.correlate(records)
        assert {r.status for r in results.values()} == {MatchStatus.PROBE_FAILED}
        assert set(results) == {"a", "b"}

    def test_take_snapshot_returns_none(self) -> None:
        assert ProcessCorrelationEngine(snapshot_provider=self._failing).take_snapshot() is None


class TestCorrelate:

    def test_one_snapshot_per_pass(self, desktop_snapshot: ProcessSnapshot) -> None:
        engine = _engine_for(desktop_snapshot, timeout=2.5)
        records = [
            ServerRecord(name="fetch", command="uvx", args=("mcp-server-fetch",)),
            ServerRecord(
                name="fs",
                command="npx",
                args=("-y", "@modelcontextprotocol/server-filesystem", "/tmp"),
            ),
            ServerRecord(name="time", command="uvx", args=("mcp-server-time",)),
        ]
        results = engine.correlate(records)
        assert engine.calls == [2.5]  # type: ignore[attr-defined]
        assert results["fetch"].matched
        assert results["fs"].matched
        assert results["fs"].pid == 700
        assert results["time"].status is MatchStatus.NOT_MATCHED

    def test_no_caching_between_passes(self, desktop_snapshot: ProcessSnapshot) -> None:
        engine = _engine_for(desktop_snapshot)
        record = ServerRecord(name="fetch", command="uvx", args=("mcp-server-fetch",))
        engine.correlate([record])
        engine.correlate([record])
        assert len(engine.calls) == 2  # type: ignore[attr-defined]

    def test_empty_input_takes_no_snapshot(self, desktop_snapshot: ProcessSnapshot) -> None:
        engine = _engine_for(desktop_snapshot)
        assert engine.correlate([]) == {}
        assert engine.calls == []  # type: ignore[attr-defined]
