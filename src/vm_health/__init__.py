"""VM health probe — CPU, memory and disk usage against a fixed threshold."""

from .errors import MeasurementUnavailable, UsageError, VMHealthError
from .evaluator import evaluate
from .models import THRESHOLD, HealthVerdict, MetricSample, Overall
from .sampler import PsutilSource, collect_sample
