"""Reporter — renders the verdict and maps it to a process exit code."""

from __future__ import annotations

from rich.console import Console

from .models import THRESHOLD, HealthVerdict, MetricSample, Overall

EXIT_HEALTHY = 0
EXIT_NOT_HEALTHY = 1
EXIT_ERROR = 2

_VERDICT_STYLE = {
    Overall.HEALTHY: "bold green",
    Overall.NOT_HEALTHY: "bold red",
}


def make_console(stderr: bool = False) -> Console:
    """Plain-text console: no markup, highlighting or wrapping."""
    return Console(stderr=stderr, markup=False, highlight=False, emoji=False, soft_wrap=True)


def format_percent(value: float) -> str:
    return f"{float(value):.1f}"


def render_report(
    sample: MetricSample,
    verdict: HealthVerdict,
    threshold: float = THRESHOLD,
    explain: bool = False,
) -> list[str]:
    """Build the report as plain text lines (no trailing newlines)."""
    lines = [f"Overall VM health: {verdict.overall.value}"]
    if not explain:
        return lines

    t = format_percent(threshold)
    lines += [
        "",
        f"Metric details (threshold = {t}%):",
        f"  CPU usage:    {format_percent(sample.cpu_percent):>5}%",
        f"  Memory usage: {format_percent(sample.memory_percent):>5}%",
        f"  Disk usage:   {format_percent(sample.disk_percent):>5}%",
        "",
    ]

    if verdict.is_healthy:
        lines.append("All metrics are within the healthy threshold.")
        return lines

    lines.append("Reason(s):")
    reasons = (
        (verdict.cpu_bad, "CPU usage", sample.cpu_percent),
        (verdict.mem_bad, "Memory usage", sample.memory_percent),
        (verdict.disk_bad, "Disk usage", sample.disk_percent),
    )
    for bad, label, value in reasons:
        if bad:
            lines.append(f"  - {label} ({format_percent(value)}%) exceeds {t}%")
    return lines


def print_report(
    sample: MetricSample,
    verdict: HealthVerdict,
    threshold: float = THRESHOLD,
    explain: bool = False,
    console: Console | None = None,
) -> None:
    """Write the report to stdout; only the verdict line is styled."""
    console = console or make_console()
    lines = render_report(sample, verdict, threshold, explain)
    console.print(lines[0], style=_VERDICT_STYLE[verdict.overall])
    for line in lines[1:]:
        console.print(line)


def exit_code(verdict: HealthVerdict) -> int:
    return EXIT_HEALTHY if verdict.is_healthy else EXIT_NOT_HEALTHY
