"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Callable
from unittest.mock import patch

import pytest

from vm_health.errors import MeasurementUnavailable
from vm_health.models import CpuTimes, MemoryCounters


class FakeSource:
    """In-memory counter source with the same interface as PsutilSource."""

    def __init__(
        self,
        cpu_reads: list[CpuTimes],
        memory: MemoryCounters,
        disk: object = 30,
    ) -> None:
        self._cpu_reads = list(cpu_reads)
        self._memory = memory
        self._disk = disk
        self.disk_paths: list[str] = []

    def cpu_times(self) -> CpuTimes:
        return self._cpu_reads.pop(0)

    def memory(self) -> MemoryCounters:
        return self._memory

    def disk_percent(self, path: str = "/") -> object:
        self.disk_paths.append(path)
        if isinstance(self._disk, Exception):
            raise self._disk
        return self._disk


@pytest.fixture
def no_sleep():
    """Patch the CPU window sleep so tests never block."""
    with patch("vm_health.sampler.time.sleep") as mock_sleep:
        yield mock_sleep


@pytest.fixture
def make_source() -> Callable[..., FakeSource]:
    """Build a FakeSource whose counters yield the given percentages."""

    def _make(cpu: float = 10.0, mem: float = 20.0, disk: object = 30, total_mem: int = 1000) -> FakeSource:
        busy_ticks = int(round(cpu * 10))
        cpu_reads = [
            CpuTimes(total=5000.0, idle=4000.0),
            CpuTimes(total=6000.0, idle=4000.0 + (1000 - busy_ticks)),
        ]
        available = total_mem - int(round(total_mem * mem / 100))
        return FakeSource(cpu_reads, MemoryCounters(total=total_mem, available=available), disk)

    return _make


@pytest.fixture
def failing_disk_source(make_source) -> FakeSource:
    return make_source(disk=MeasurementUnavailable("Unable to determine disk usage for /"))


@pytest.fixture(autouse=True)
def plain_terminal(monkeypatch):
    """Keep rich from forcing ANSI styling onto captured output."""
    for var in ("FORCE_COLOR", "TTY_COMPATIBLE", "TTY_INTERACTIVE"):
        monkeypatch.delenv(var, raising=False)
