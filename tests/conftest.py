"""Shared pytest fixtures."""

from __future__ import annotations

import pytest
from structlog.testing import capture_logs

from vitals_triage.models import MetricKind, Range, RangePair, Reading
from vitals_triage.monitors.aggregator import AlertAggregator
from vitals_triage.monitors.classifier import StatusClassifier
from vitals_triage.ranges.registry import RangeRegistry, default_registry


@pytest.fixture(autouse=True)
def captured_logs():
    """Route structlog events into a list instead of stdout."""
    with capture_logs() as logs:
        yield logs


@pytest.fixture
def registry() -> RangeRegistry:
    return default_registry()


@pytest.fixture
def classifier(registry: RangeRegistry) -> StatusClassifier:
    return StatusClassifier(registry)


@pytest.fixture
def aggregator(classifier: StatusClassifier) -> AlertAggregator:
    return AlertAggregator(classifier)


@pytest.fixture
def hr_only_registry() -> RangeRegistry:
    return RangeRegistry({
        MetricKind.HEART_RATE: RangePair(
            normal=Range(min=60, max=100),
            critical=Range(min=40, max=150),
            unit="bpm",
        ),
    })


@pytest.fixture
def normal_hr_reading() -> Reading:
    return Reading(metric_kind=MetricKind.HEART_RATE, value=75.0, subject_id="P001", unit="bpm")


@pytest.fixture
def critical_hr_reading() -> Reading:
    return Reading(metric_kind=MetricKind.HEART_RATE, value=35.0, subject_id="P001", unit="bpm")


@pytest.fixture
def abnormal_hr_reading() -> Reading:
    return Reading(metric_kind=MetricKind.HEART_RATE, value=110.0, subject_id="P001", unit="bpm")
