"""Metric sampler — reads OS counters and derives utilization percentages.

CPU usage is a two-point measurement: the aggregate time counters are read,
the process sleeps for a fixed window, and the counters are read again. Busy
time is whatever was not spent idle or waiting on I/O during the window.

Memory and disk are single reads and run on worker threads while the CPU
window elapses. Any failure is raised as MeasurementUnavailable; nothing is
retried.
"""

from __future__ import annotations

import logging
import math
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Any

import psutil

from .errors import MeasurementUnavailable
from .models import CpuTimes, MemoryCounters, MetricSample

logger = logging.getLogger(__name__)

CPU_INTERVAL = 1.0  # seconds between the two CPU counter reads
ROOT_PATH = "/"


# ── Counter source ───────────────────────────────────────────────────────────


class PsutilSource:
    """Counter source backed by psutil.

    Any object with the same three methods can be passed to collect_sample()
    in its place.
    """

    def cpu_times(self) -> CpuTimes:
        try:
            times = psutil.cpu_times()
        except (psutil.Error, OSError) as e:
            raise MeasurementUnavailable(f"Unable to read CPU counters: {e}") from e

        # Every bucket counts towards total, guest time included
        total = float(sum(times))
        idle = times.idle + getattr(times, "iowait", 0.0)
        return CpuTimes(total=total, idle=idle)

    def memory(self) -> MemoryCounters:
        try:
            vm = psutil.virtual_memory()
        except (psutil.Error, OSError) as e:
            raise MeasurementUnavailable("Unable to determine total memory.") from e

        return MemoryCounters(
            total=int(vm.total),
            available=getattr(vm, "available", None),
            free=getattr(vm, "free", 0),
            buffers=getattr(vm, "buffers", 0),
            cached=getattr(vm, "cached", 0),
        )

    def disk_percent(self, path: str = ROOT_PATH) -> float:
        try:
            return psutil.disk_usage(path).percent
        except (psutil.Error, OSError) as e:
            raise MeasurementUnavailable(f"Unable to determine disk usage for {path}") from e


# ── Derivations ──────────────────────────────────────────────────────────────


def cpu_percent_between(before: CpuTimes, after: CpuTimes) -> float:
    """Busy percentage over the window between two counter reads."""
    total_delta = after.total - before.total
    idle_delta = after.idle - before.idle

    if total_delta <= 0:
        # Counter anomaly: report idle rather than divide by a non-positive delta
        logger.debug("CPU total delta %.2f <= 0, reporting 0.0", total_delta)
        return 0.0

    busy = (total_delta - idle_delta) / total_delta * 100
    return round(min(max(busy, 0.0), 100.0), 1)


def sample_cpu_percent(source: Any, interval: float = CPU_INTERVAL) -> float:
    """Read CPU counters twice, `interval` seconds apart (blocking)."""
    before = source.cpu_times()
    time.sleep(interval)
    after = source.cpu_times()

    pct = cpu_percent_between(before, after)
    logger.debug(
        "CPU: total_delta=%.2f idle_delta=%.2f -> %.1f%%",
        after.total - before.total, after.idle - before.idle, pct,
    )
    return pct


def memory_percent(counters: MemoryCounters) -> float:
    """Used memory as a percentage of total.

    A missing or zero `available` falls back to free + buffers + cached.
    """
    if counters.total is None or counters.total <= 0:
        raise MeasurementUnavailable("Unable to determine total memory.")

    available = counters.available
    if not available:
        available = counters.free + counters.buffers + counters.cached
        logger.debug("Memory: no available figure, using free+buffers+cached=%d", available)

    used = counters.total - available
    pct = round(min(max(used / counters.total * 100, 0.0), 100.0), 1)
    logger.debug("Memory: total=%d available=%d -> %.1f%%", counters.total, available, pct)
    return pct


def normalize_percent(raw: Any, path: str = ROOT_PATH) -> float:
    """Normalize a usage figure such as 23, "23" or "23%" to one decimal."""
    text = "" if raw is None else str(raw).strip().rstrip("%").strip()
    try:
        value = float(text)
    except ValueError:
        raise MeasurementUnavailable(f"Unable to determine disk usage for {path}") from None

    if not math.isfinite(value) or not 0.0 <= value <= 100.0:
        raise MeasurementUnavailable(f"Unable to determine disk usage for {path}")
    return round(value, 1)


# ── Sampling ─────────────────────────────────────────────────────────────────


def collect_sample(
    source: Any = None,
    interval: float = CPU_INTERVAL,
    disk_path: str = ROOT_PATH,
) -> MetricSample:
    """Take one MetricSample. Blocks for roughly `interval` seconds."""
    source = source or PsutilSource()

    with ThreadPoolExecutor(max_workers=2, thread_name_prefix="vm-health") as executor:
        memory_future = executor.submit(lambda: memory_percent(source.memory()))
        disk_future = executor.submit(
            lambda: normalize_percent(source.disk_percent(disk_path), disk_path)
        )
        cpu = sample_cpu_percent(source, interval)
        memory = memory_future.result()
        disk = disk_future.result()

    sample = MetricSample(cpu_percent=cpu, memory_percent=memory, disk_percent=disk)
    logger.debug("Sample: %s", sample)
    return sample
