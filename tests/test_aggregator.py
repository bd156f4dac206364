"""Tests for alert aggregation."""

import math

import pytest
from pydantic import ValidationError

from vitals_triage.models import Alert, MetricKind, Range, Reading, Severity
from vitals_triage.monitors.aggregator import aggregate, count_by_severity, sort_by_severity


def _reading(kind, value, **kwargs) -> Reading:
    return Reading(metric_kind=kind, value=value, **kwargs)


class TestAlertAggregator:
    def test_empty_batch(self, aggregator):
        assert aggregator.aggregate([]) == []

    def test_heart_rate_scenario(
        self, aggregator, normal_hr_reading, critical_hr_reading, abnormal_hr_reading,
    ):
        alerts = aggregator.aggregate([normal_hr_reading, critical_hr_reading, abnormal_hr_reading])
        assert [(a.value, a.severity) for a in alerts] == [
            (35.0, Severity.CRITICAL),
            (110.0, Severity.ABNORMAL),
        ]
        assert alerts[0].violated_range == Range(min=40, max=150)
        assert alerts[1].violated_range == Range(min=60, max=100)
        assert alerts[0].reading is critical_hr_reading

    def test_order_preserved_not_sorted(self, aggregator):
        readings = [
            _reading("BMI", 27),  # abnormal
            _reading("BMI", 40),  # critical
            _reading("HEART_RATE", 105),  # abnormal
        ]
        alerts = aggregator.aggregate(readings)
        assert [a.reading for a in alerts] == readings
        assert [a.severity for a in alerts] == [Severity.ABNORMAL, Severity.CRITICAL, Severity.ABNORMAL]

    def test_no_deduplication(self, aggregator, abnormal_hr_reading):
        twin = _reading(MetricKind.HEART_RATE, 110.0)
        alerts = aggregator.aggregate([abnormal_hr_reading, twin])
        assert len(alerts) == 2
        assert alerts[0].reading is abnormal_hr_reading
        assert alerts[1].reading is twin

    def test_output_is_subsequence_of_input(self, aggregator):
        readings = [_reading("TEMPERATURE", t) for t in (36.5, 34.0, 37.5, 36.8, 40.0)]
        alerts = aggregator.aggregate(readings)
        assert len(alerts) <= len(readings)
        positions = [readings.index(a.reading) for a in alerts]
        assert positions == sorted(positions) == [1, 2, 4]

    def test_accepts_generators(self, aggregator):
        alerts = aggregator.aggregate(_reading("HEART_RATE", v) for v in (50, 70, 160))
        assert [a.value for a in alerts] == [50, 160]

    def test_unknown_kinds_produce_no_alerts(self, aggregator):
        report = aggregator.aggregate_report([_reading("VO2_MAX", 1), _reading("HEART_RATE", 30)])
        assert [a.value for a in report.alerts] == [30]
        assert [r.metric_kind for r in report.unrecognized] == ["VO2_MAX"]

    def test_unknown_kinds_warned(self, aggregator, captured_logs):
        aggregator.aggregate([_reading("VO2_MAX", 1), _reading("STEPS", 2)])
        warnings = [e for e in captured_logs if e["event"] == "aggregator.unrecognized_kinds"]
        assert warnings[0]["kinds"] == ["STEPS", "VO2_MAX"]
        assert warnings[0]["log_level"] == "warning"


class TestInvalidReadings:
    def test_invalid_reading_does_not_abort_batch(self, aggregator):
        readings = [
            _reading("HEART_RATE", 35),
            _reading("HEART_RATE", math.nan),
            _reading("HEART_RATE", 110),
        ]
        report = aggregator.aggregate_report(readings)
        assert [a.value for a in report.alerts] == [35, 110]
        assert len(report.rejected) == 1
        assert report.rejected[0].index == 1
        assert "non-finite" in report.rejected[0].reason

    def test_rejection_logged(self, aggregator, captured_logs):
        aggregator.aggregate([_reading("SPO2", math.inf, subject_id="P007")])
        rejected = [e for e in captured_logs if e["event"] == "aggregator.reading_rejected"]
        assert len(rejected) == 1
        assert rejected[0]["subject"] == "P007"
        assert rejected[0]["log_level"] == "warning"

    def test_has_critical(self, aggregator):
        assert aggregator.aggregate_report([_reading("HEART_RATE", 200)]).has_critical
        assert not aggregator.aggregate_report([_reading("HEART_RATE", 110)]).has_critical


class TestHelpers:
    def test_sort_by_severity_is_stable(self, aggregator):
        readings = [
            _reading("HEART_RATE", 110),
            _reading("HEART_RATE", 30),
            _reading("BMI", 26),
            _reading("BMI", 50),
        ]
        alerts = aggregator.aggregate(readings)
        ordered = sort_by_severity(alerts)
        assert [a.value for a in ordered] == [30, 50, 110, 26]
        assert [a.value for a in alerts] == [110, 30, 26, 50]

    def test_count_by_severity(self, aggregator):
        alerts = aggregator.aggregate([_reading("HEART_RATE", v) for v in (30, 110, 120, 75)])
        assert count_by_severity(alerts) == {Severity.CRITICAL: 1, Severity.ABNORMAL: 2}
        assert count_by_severity([]) == {Severity.CRITICAL: 0, Severity.ABNORMAL: 0}

    def test_module_level_aggregate_with_registry(self, hr_only_registry):
        alerts = aggregate([_reading("HEART_RATE", 35), _reading("BMI", 50)], registry=hr_only_registry)
        assert [a.metric_kind for a in alerts] == [MetricKind.HEART_RATE]


class TestModels:
    def test_reading_coerces_known_kind(self):
        assert _reading("HEART_RATE", 70).metric_kind is MetricKind.HEART_RATE

    def test_reading_keeps_unknown_kind(self):
        reading = _reading("STEPS", 5000)
        assert reading.metric_kind == "STEPS"
        assert not isinstance(reading.metric_kind, MetricKind)

    def test_reading_is_frozen(self, normal_hr_reading):
        with pytest.raises(ValidationError):
            normal_hr_reading.value = 1.0

    def test_alert_rejects_normal_severity(self, normal_hr_reading):
        with pytest.raises(ValidationError):
            Alert(
                reading=normal_hr_reading,
                severity=Severity.NORMAL,
                violated_range=Range(min=60, max=100),
            )
