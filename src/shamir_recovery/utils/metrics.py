"""In-memory counters and timers for reconstruction instrumentation."""

from __future__ import annotations

import time
from collections import defaultdict
from dataclasses import dataclass
from typing import DefaultDict, List, Tuple


Labels = Tuple[Tuple[str, str], ...]


@dataclass(frozen=True)
class MetricPoint:
    value: float
    labels: Labels


class InMemoryMetrics:
    """Keeps every counter increment and timing sample, keyed by metric name."""

    def __init__(self) -> None:
        self.counters: DefaultDict[str, List[MetricPoint]] = defaultdict(list)
        self.timers: DefaultDict[str, List[MetricPoint]] = defaultdict(list)

    def emit_counter(self, name: str, value: float = 1.0, **labels: str) -> None:
        self.counters[name].append(MetricPoint(value, tuple(sorted(labels.items()))))

    def emit_timer(self, name: str, seconds: float, **labels: str) -> None:
        self.timers[name].append(MetricPoint(seconds, tuple(sorted(labels.items()))))

    def total(self, name: str, **labels: str) -> float:
        """Sum a counter, optionally restricted to samples carrying ``labels``."""
        wanted = set(labels.items())
        return sum(p.value for p in self.counters.get(name, ()) if wanted <= set(p.labels))


class Timer:
    """Records the wall time of a ``with`` block as one timer sample."""

    def __init__(self, sink: InMemoryMetrics, name: str, **labels: str) -> None:
        self.sink = sink
        self.name = name
        self.labels = labels
        self.started = 0.0

    def __enter__(self) -> "Timer":
        self.started = time.monotonic()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # noqa: ANN001
        self.sink.emit_timer(self.name, time.monotonic() - self.started, **self.labels)
