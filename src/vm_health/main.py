"""Entry point for the VM health probe — `vm-health` console script.

Exit codes: 0 healthy, 1 not healthy, 2 usage error or measurement failure.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Any

from .config import settings
from .errors import MeasurementUnavailable, UsageError
from .evaluator import evaluate
from .models import THRESHOLD
from .reporter import EXIT_ERROR, exit_code, make_console, print_report
from .sampler import collect_sample

logger = logging.getLogger(__name__)

PROG = "vm-health"

USAGE = f"""Usage: {PROG} [--explain]

  --explain    Print each metric and which metric(s) (if any) caused NOT HEALTHY."""


class _ArgumentParser(argparse.ArgumentParser):
    """argparse that raises UsageError instead of exiting."""

    def error(self, message: str) -> None:  # type: ignore[override]
        raise UsageError(message)


def parse_args(argv: list[str]) -> argparse.Namespace:
    """Accept nothing or a single --explain; anything else is a UsageError."""
    if len(argv) > 1:
        raise UsageError(f"expected at most one argument, got {len(argv)}")

    parser = _ArgumentParser(prog=PROG, add_help=False, allow_abbrev=False)
    parser.add_argument("--explain", action="store_true")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None, source: Any = None) -> int:
    """Run one probe and return the process exit code."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.WARNING),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        stream=sys.stderr,
    )
    stderr = make_console(stderr=True)

    try:
        args = parse_args(sys.argv[1:] if argv is None else argv)
    except UsageError as e:
        logger.debug("Usage error: %s", e)
        stderr.print(USAGE)
        return EXIT_ERROR

    try:
        sample = collect_sample(source)
    except MeasurementUnavailable as e:
        logger.debug("Measurement failed", exc_info=True)
        stderr.print(f"Error: {e}")
        return EXIT_ERROR

    verdict = evaluate(sample, THRESHOLD)
    logger.info("Verdict %s (bad: %s)", verdict.overall.value, verdict.bad_metrics() or "none")

    print_report(sample, verdict, THRESHOLD, explain=args.explain)
    return exit_code(verdict)


if __name__ == "__main__":
    sys.exit(main())
