"""Health evaluator — threshold comparison, no history or smoothing."""

from __future__ import annotations

from .models import THRESHOLD, HealthVerdict, MetricSample, Overall


def evaluate(sample: MetricSample, threshold: float = THRESHOLD) -> HealthVerdict:
    """Flag every metric strictly above `threshold`; any flag means NOT_HEALTHY."""
    cpu_bad = sample.cpu_percent > threshold
    mem_bad = sample.memory_percent > threshold
    disk_bad = sample.disk_percent > threshold

    overall = Overall.NOT_HEALTHY if (cpu_bad or mem_bad or disk_bad) else Overall.HEALTHY
    return HealthVerdict(overall=overall, cpu_bad=cpu_bad, mem_bad=mem_bad, disk_bad=disk_bad)
