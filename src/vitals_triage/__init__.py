"""Classify physiological readings against clinical reference ranges."""

from vitals_triage.errors import InvalidValueError, RegistryIntegrityError, VitalsTriageError
from vitals_triage.models import (
    AggregationReport,
    Alert,
    Classification,
    MetricKind,
    Range,
    RangePair,
    Reading,
    RejectedReading,
    Severity,
)
from vitals_triage.monitors import (
    AlertAggregator,
    StatusClassifier,
    aggregate,
    classify,
    classify_detailed,
    count_by_severity,
    is_abnormal,
    sort_by_severity,
)
from vitals_triage.ranges import RangeRegistry, default_registry, get_registry, load_registry

__all__ = [
    "AggregationReport",
    "Alert",
    "AlertAggregator",
    "Classification",
    "InvalidValueError",
    "MetricKind",
    "Range",
    "RangePair",
    "RangeRegistry",
    "Reading",
    "RegistryIntegrityError",
    "RejectedReading",
    "Severity",
    "StatusClassifier",
    "VitalsTriageError",
    "aggregate",
    "classify",
    "classify_detailed",
    "count_by_severity",
    "default_registry",
    "get_registry",
    "is_abnormal",
    "load_registry",
    "sort_by_severity",
]
