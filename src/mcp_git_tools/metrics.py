import asyncio
import time
from collections import defaultdict
from typing import Any, Dict, Optional


def _empty_metrics() -> Dict[str, Any]:
    # Durations are running totals; get_metrics derives the averages
    return {
        "tool_calls": 0,
        "calls_by_tool": defaultdict(int),
        "failures_by_tool": defaultdict(int),
        "errors": defaultdict(int),
        "timed_calls": 0,
        "duration_total_ms": 0.0,
        "timed_calls_by_tool": defaultdict(int),
        "duration_total_by_tool_ms": defaultdict(float),
        "startup_time": time.time(),
    }


class MetricsCollector:
    """
    Global metrics collector for MCP Git Tools.
    Aggregates per-tool call counts, failures and durations.
    The lock only guards the collector's own counters.
    """

    def __init__(self):
        self._lock = asyncio.Lock()
        self._metrics = _empty_metrics()

    async def record_tool_call(
        self, tool: str, success: bool, duration_ms: Optional[float] = None
    ):
        async with self._lock:
            self._metrics["tool_calls"] += 1
            self._metrics["calls_by_tool"][tool] += 1
            if not success:
                self._metrics["failures_by_tool"][tool] += 1
            if duration_ms is not None:
                self._metrics["timed_calls"] += 1
                self._metrics["duration_total_ms"] += duration_ms
                self._metrics["timed_calls_by_tool"][tool] += 1
                self._metrics["duration_total_by_tool_ms"][tool] += duration_ms

    async def record_error(self, error_type: str):
        async with self._lock:
            self._metrics["errors"][error_type] += 1

    async def get_metrics(self) -> Dict[str, Any]:
        async with self._lock:
            timed_calls = self._metrics["timed_calls"]
            timed_by_tool = self._metrics["timed_calls_by_tool"]
            return {
                "tool_calls": self._metrics["tool_calls"],
                "calls_by_tool": dict(self._metrics["calls_by_tool"]),
                "failures_by_tool": dict(self._metrics["failures_by_tool"]),
                "errors": dict(self._metrics["errors"]),
                "avg_call_duration_ms": (
                    self._metrics["duration_total_ms"] / timed_calls if timed_calls else 0
                ),
                "avg_duration_by_tool_ms": {
                    tool: total / timed_by_tool[tool]
                    for tool, total in self._metrics["duration_total_by_tool_ms"].items()
                },
                "uptime_sec": time.time() - self._metrics["startup_time"],
            }

    async def reset(self):
        async with self._lock:
            self._metrics = _empty_metrics()


# Singleton instance for global use
global_metrics_collector = MetricsCollector()
