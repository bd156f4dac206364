"""Status classifier — maps a ``(metric kind, value)`` pair to a severity tier."""

from __future__ import annotations

import math
from functools import lru_cache

import structlog

from vitals_triage.errors import InvalidValueError
from vitals_triage.models import Classification, MetricKind, Severity, kind_name
from vitals_triage.ranges.registry import RangeRegistry, get_registry

logger = structlog.get_logger(__name__)

_UNRECOGNIZED = Classification(severity=Severity.NORMAL, recognized=False)
_NORMAL = Classification(severity=Severity.NORMAL)


class StatusClassifier:
    """Classify values against a :class:`RangeRegistry`.

    The critical band is checked before the normal band, so a value outside
    both is reported once, as ``CRITICAL``.  Band bounds are inclusive.
    Kinds missing from the registry fail open: ``NORMAL`` with
    ``recognized=False``.
    """

    def __init__(self, registry: RangeRegistry | None = None) -> None:
        self._registry = registry if registry is not None else get_registry()

    @property
    def registry(self) -> RangeRegistry:
        return self._registry

    def classify_detailed(self, kind: MetricKind | str, value: float) -> Classification:
        """Return severity, whether *kind* was recognised, and the violated band.

        Raises :class:`InvalidValueError` for ``NaN`` or infinite *value*.
        """
        if not math.isfinite(value):
            raise InvalidValueError(kind, value)

        pair = self._registry.lookup(kind)
        if pair is None:
            logger.debug("classifier.unrecognized_kind", kind=kind_name(kind))
            return _UNRECOGNIZED

        if pair.critical is not None and not pair.critical.contains(value):
            return Classification(severity=Severity.CRITICAL, violated_range=pair.critical)
        if not pair.normal.contains(value):
            return Classification(severity=Severity.ABNORMAL, violated_range=pair.normal)
        return _NORMAL

    def classify(self, kind: MetricKind | str, value: float) -> Severity:
        return self.classify_detailed(kind, value).severity

    def is_abnormal(self, kind: MetricKind | str, value: float) -> bool:
        """True when the value classifies as ``ABNORMAL`` or ``CRITICAL``."""
        return self.classify(kind, value) is not Severity.NORMAL


# ── Module-level convenience ──────────────────────────────────


@lru_cache
def default_classifier() -> StatusClassifier:
    """Classifier bound to the configured registry, built once."""
    return StatusClassifier()


def classify(kind: MetricKind | str, value: float) -> Severity:
    return default_classifier().classify(kind, value)


def classify_detailed(kind: MetricKind | str, value: float) -> Classification:
    return default_classifier().classify_detailed(kind, value)


def is_abnormal(kind: MetricKind | str, value: float) -> bool:
    return default_classifier().is_abnormal(kind, value)
