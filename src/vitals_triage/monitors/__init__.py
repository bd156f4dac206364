"""Monitoring sub-package — severity classification and alert aggregation."""

from vitals_triage.monitors.aggregator import (
    AlertAggregator,
    aggregate,
    count_by_severity,
    sort_by_severity,
)
from vitals_triage.monitors.classifier import (
    StatusClassifier,
    classify,
    classify_detailed,
    is_abnormal,
)

__all__ = [
    "AlertAggregator",
    "StatusClassifier",
    "aggregate",
    "classify",
    "classify_detailed",
    "count_by_severity",
    "is_abnormal",
    "sort_by_severity",
]
