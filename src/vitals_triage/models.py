"""Shared Pydantic models used across the engine."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

# ── Enums ─────────────────────────────────────────────────────

class MetricKind(str, Enum):
    """Closed catalog of physiological measurements the engine knows about.

    Values match the spelling used by the clinical-metrics store.
    """

    WEIGHT = "WEIGHT"
    HEIGHT = "HEIGHT"
    BMI = "BMI"
    BLOOD_PRESSURE_SYSTOLIC = "BLOOD_PRESSURE_SYSTOLIC"
    BLOOD_PRESSURE_DIASTOLIC = "BLOOD_PRESSURE_DIASTOLIC"
    BLOOD_GLUCOSE_FASTING = "BLOOD_GLUCOSE_FASTING"
    BLOOD_GLUCOSE_RANDOM = "BLOOD_GLUCOSE_RANDOM"
    BLOOD_GLUCOSE_POST_MEAL = "BLOOD_GLUCOSE_POST_MEAL"
    TEMPERATURE = "TEMPERATURE"
    OXYGEN_SATURATION = "OXYGEN_SATURATION"
    HEART_RATE = "HEART_RATE"
    RESPIRATORY_RATE = "RESPIRATORY_RATE"
    CHOLESTEROL_TOTAL = "CHOLESTEROL_TOTAL"
    CHOLESTEROL_LDL = "CHOLESTEROL_LDL"
    CHOLESTEROL_HDL = "CHOLESTEROL_HDL"
    TRIGLYCERIDES = "TRIGLYCERIDES"
    HBA1C = "HBA1C"


class Severity(str, Enum):
    """Three-tier classification outcome, ordered ``NORMAL < ABNORMAL < CRITICAL``."""

    NORMAL = "NORMAL"
    ABNORMAL = "ABNORMAL"
    CRITICAL = "CRITICAL"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self]

    # str comparisons would order alphabetically, so compare by rank.
    # Plain strings are coerced; a string that names no tier cannot be ordered.
    @staticmethod
    def _rank_of(other: object) -> int | None:
        if isinstance(other, Severity):
            return other.rank
        if isinstance(other, str):
            try:
                return Severity(other).rank
            except ValueError:
                raise TypeError(f"cannot order Severity against {other!r}") from None
        return None

    def __lt__(self, other: object) -> bool:
        rank = self._rank_of(other)
        return NotImplemented if rank is None else self.rank < rank

    def __le__(self, other: object) -> bool:
        rank = self._rank_of(other)
        return NotImplemented if rank is None else self.rank <= rank

    def __gt__(self, other: object) -> bool:
        rank = self._rank_of(other)
        return NotImplemented if rank is None else self.rank > rank

    def __ge__(self, other: object) -> bool:
        rank = self._rank_of(other)
        return NotImplemented if rank is None else self.rank >= rank


_SEVERITY_RANK = {Severity.NORMAL: 0, Severity.ABNORMAL: 1, Severity.CRITICAL: 2}


def kind_name(kind: MetricKind | str) -> str:
    """Return the plain string spelling of a known or unknown metric kind."""
    return kind.value if isinstance(kind, MetricKind) else str(kind)


# ── Reference ranges ──────────────────────────────────────────

class Range(BaseModel):
    """An inclusive ``[min, max]`` band."""

    model_config = ConfigDict(frozen=True)

    min: float
    max: float

    def contains(self, value: float) -> bool:
        return self.min <= value <= self.max

    def encloses(self, other: Range) -> bool:
        """True when *other* lies entirely inside this band."""
        return self.min <= other.min and other.max <= self.max


class RangePair(BaseModel):
    """Normal band, optional critical band and display unit for one metric kind."""

    model_config = ConfigDict(frozen=True)

    normal: Range
    critical: Range | None = None
    unit: str = ""


# ── Data transfer objects ─────────────────────────────────────

class Reading(BaseModel):
    """A single measurement submitted for classification.

    ``metric_kind`` keeps unknown spellings as plain strings so they can
    flow through the fail-open path instead of failing validation.
    """

    model_config = ConfigDict(frozen=True)

    metric_kind: MetricKind | str = Field(union_mode="left_to_right")
    value: float
    taken_at: datetime | None = None
    subject_id: str | None = None
    unit: str = ""


class Classification(BaseModel):
    """Detailed classifier output."""

    model_config = ConfigDict(frozen=True)

    severity: Severity
    recognized: bool = True
    violated_range: Range | None = None

    @property
    def is_abnormal(self) -> bool:
        return self.severity is not Severity.NORMAL


class Alert(BaseModel):
    """An abnormal or critical reading paired with the band it violated."""

    model_config = ConfigDict(frozen=True)

    reading: Reading
    severity: Severity
    violated_range: Range

    @field_validator("severity")
    @classmethod
    def _not_normal(cls, v: Severity) -> Severity:
        if v is Severity.NORMAL:
            raise ValueError("an alert cannot carry NORMAL severity")
        return v

    @property
    def metric_kind(self) -> MetricKind | str:
        return self.reading.metric_kind

    @property
    def value(self) -> float:
        return self.reading.value


class RejectedReading(BaseModel):
    """A reading skipped during aggregation because it could not be classified."""

    model_config = ConfigDict(frozen=True)

    reading: Reading
    index: int
    reason: str


class AggregationReport(BaseModel):
    """Everything one aggregation pass produced, in input order."""

    model_config = ConfigDict(frozen=True)

    alerts: list[Alert] = Field(default_factory=list)
    rejected: list[RejectedReading] = Field(default_factory=list)
    unrecognized: list[Reading] = Field(default_factory=list)

    @property
    def has_critical(self) -> bool:
        return any(a.severity is Severity.CRITICAL for a in self.alerts)
