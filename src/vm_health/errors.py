"""Error taxonomy — every error is terminal for the invocation (exit 2)."""

from __future__ import annotations


class VMHealthError(Exception):
    """Base class for vm-health failures."""


class UsageError(VMHealthError):
    """Raised on malformed or excess command-line arguments."""


class MeasurementUnavailable(VMHealthError):
    """Raised when a metric cannot be determined from the OS counters."""
