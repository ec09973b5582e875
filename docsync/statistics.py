"""Logic for collecting per-framework synchronization statistics."""

from __future__ import annotations

import json
import threading
import time
from enum import Enum
from pathlib import Path
from typing import Any

SCHEMA_VERSION = 1


class StatItem(str, Enum):
    """What a counter counts."""

    TYPES = "types"
    MEMBERS = "members"
    NAMESPACES = "namespaces"


class StatMetric(str, Enum):
    """How a counter changed."""

    ADDED = "added"
    REMOVED = "removed"
    TOTAL = "total"


class StatisticsCollector:
    """Thread-safe counters keyed by (framework, item, metric).

    Parallel workers may either share one collector or fill their own and
    ``merge`` them afterwards.
    """

    def __init__(self) -> None:
        """Start with every counter at zero."""
        self._counts: dict[tuple[str, StatItem, StatMetric], int] = {}
        self._lock = threading.Lock()
        self.start_time = time.time()

    def add_metric(self, framework: str, item: StatItem, metric: StatMetric, value: int = 1) -> None:
        """Increase one counter by ``value``."""
        if not value:
            return
        key = (framework, item, metric)
        with self._lock:
            self._counts[key] = self._counts.get(key, 0) + value

    def get(self, framework: str, item: StatItem, metric: StatMetric) -> int:
        """Current value of one counter."""
        with self._lock:
            return self._counts.get((framework, item, metric), 0)

    def merge(self, other: StatisticsCollector) -> None:
        """Add every counter of ``other`` into this collector."""
        with other._lock:
            snapshot = dict(other._counts)
        for (framework, item, metric), value in snapshot.items():
            self.add_metric(framework, item, metric, value)

    def to_report(self) -> dict[str, dict[str, dict[str, int]]]:
        """Nested ``framework -> item -> metric -> count`` mapping."""
        with self._lock:
            counts = dict(self._counts)
        report: dict[str, dict[str, dict[str, int]]] = {}
        # frameworks keep first-recorded order
        for (framework, item, metric), value in counts.items():
            report.setdefault(framework, {}).setdefault(item.value, {})[metric.value] = value
        return {
            framework: {item: dict(sorted(metrics.items())) for item, metrics in sorted(items.items())}
            for framework, items in report.items()
        }

    def write_report(self, path: str | Path, config_hash: str) -> None:
        """Write the statistics report to a JSON file."""
        stats = self.to_report()
        report: dict[str, Any] = {
            "meta": {
                "timestamp": time.time(),
                "duration": time.time() - self.start_time,
                "config_hash": config_hash,
                "schema_version": SCHEMA_VERSION,
                "frameworks": list(stats),
            },
            "stats": stats,
        }
        Path(path).write_text(json.dumps(report, indent=2), encoding="utf-8")
