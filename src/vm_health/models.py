"""Value types passed between sampler, evaluator and reporter."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

THRESHOLD = 60.0


class Overall(str, Enum):
    HEALTHY = "HEALTHY"
    NOT_HEALTHY = "NOT HEALTHY"


@dataclass(frozen=True)
class MetricSample:
    """One snapshot of host utilization, each value in [0.0, 100.0]."""

    cpu_percent: float
    memory_percent: float
    disk_percent: float


@dataclass(frozen=True)
class HealthVerdict:
    """Verdict plus the per-metric flags it was derived from."""

    overall: Overall
    cpu_bad: bool = False
    mem_bad: bool = False
    disk_bad: bool = False

    @property
    def is_healthy(self) -> bool:
        return self.overall is Overall.HEALTHY

    def bad_metrics(self) -> list[str]:
        """Names of the metrics over threshold, in report order."""
        flags = (("cpu", self.cpu_bad), ("memory", self.mem_bad), ("disk", self.disk_bad))
        return [name for name, bad in flags if bad]


# ── Raw counters ─────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class CpuTimes:
    """Aggregate cumulative CPU time; idle includes iowait."""

    total: float
    idle: float


@dataclass(frozen=True)
class MemoryCounters:
    """Virtual memory accounting in bytes. available is None when not reported."""

    total: int
    available: int | None
    free: int = 0
    buffers: int = 0
    cached: int = 0
