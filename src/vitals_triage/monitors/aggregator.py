"""Alert aggregator — turns a batch of readings into the alerts that need attention."""

from __future__ import annotations

from typing import Iterable

import structlog

from vitals_triage.errors import InvalidValueError
from vitals_triage.models import (
    AggregationReport,
    Alert,
    Reading,
    RejectedReading,
    Severity,
    kind_name,
)
from vitals_triage.monitors.classifier import StatusClassifier
from vitals_triage.ranges.registry import RangeRegistry

logger = structlog.get_logger(__name__)


class AlertAggregator:
    """Classify readings one by one and keep the non-``NORMAL`` ones.

    Output preserves input order and is never deduplicated: two identical
    readings yield two alerts.  A reading that cannot be classified is
    reported and skipped; it never aborts the rest of the batch.
    """

    def __init__(self, classifier: StatusClassifier | None = None) -> None:
        self._classifier = classifier if classifier is not None else StatusClassifier()

    # ── Aggregation ───────────────────────────────────────────

    def aggregate(self, readings: Iterable[Reading]) -> list[Alert]:
        """Return the alerts for *readings*, in input order."""
        return self.aggregate_report(readings).alerts

    def aggregate_report(self, readings: Iterable[Reading]) -> AggregationReport:
        """Single pass over *readings* collecting alerts, rejects and unknown kinds."""
        alerts: list[Alert] = []
        rejected: list[RejectedReading] = []
        unrecognized: list[Reading] = []
        total = 0

        for index, reading in enumerate(readings):
            total += 1
            try:
                result = self._classifier.classify_detailed(reading.metric_kind, reading.value)
            except InvalidValueError as exc:
                logger.warning(
                    "aggregator.reading_rejected",
                    index=index,
                    kind=kind_name(reading.metric_kind),
                    subject=reading.subject_id,
                    error=str(exc),
                )
                rejected.append(RejectedReading(reading=reading, index=index, reason=str(exc)))
                continue

            if not result.recognized:
                unrecognized.append(reading)
                continue
            if result.severity is Severity.NORMAL or result.violated_range is None:
                continue

            alerts.append(
                Alert(reading=reading, severity=result.severity, violated_range=result.violated_range),
            )
            logger.info(
                "aggregator.alert_raised",
                kind=kind_name(reading.metric_kind),
                subject=reading.subject_id,
                value=reading.value,
                severity=result.severity.value,
            )

        if unrecognized:
            logger.warning(
                "aggregator.unrecognized_kinds",
                kinds=sorted({kind_name(r.metric_kind) for r in unrecognized}),
                count=len(unrecognized),
            )
        logger.debug(
            "aggregator.completed",
            readings=total,
            alerts=len(alerts),
            rejected=len(rejected),
        )
        return AggregationReport(alerts=alerts, rejected=rejected, unrecognized=unrecognized)


def aggregate(readings: Iterable[Reading], registry: RangeRegistry | None = None) -> list[Alert]:
    """Convenience wrapper: aggregate against *registry* or the configured one."""
    return AlertAggregator(StatusClassifier(registry)).aggregate(readings)


# ── Post-processing helpers ───────────────────────────────────


def sort_by_severity(alerts: Iterable[Alert]) -> list[Alert]:
    """Return a new list, most severe first; ties keep their input order."""
    return sorted(alerts, key=lambda a: a.severity.rank, reverse=True)


def count_by_severity(alerts: Iterable[Alert]) -> dict[Severity, int]:
    counts = {Severity.CRITICAL: 0, Severity.ABNORMAL: 0}
    for alert in alerts:
        counts[alert.severity] += 1
    return counts
