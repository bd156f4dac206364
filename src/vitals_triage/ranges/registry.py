"""Range registry — read-only catalog of reference bands keyed by metric kind."""

from __future__ import annotations

import json
import math
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Iterable, Iterator, Mapping

import structlog
from pydantic import BaseModel, ConfigDict, ValidationError, model_validator

from vitals_triage.config import Settings, get_settings
from vitals_triage.errors import RegistryIntegrityError
from vitals_triage.models import MetricKind, Range, RangePair, kind_name
from vitals_triage.ranges.catalog import DEFAULT_RANGE_RECORDS

logger = structlog.get_logger(__name__)


class RangeRecord(BaseModel):
    """One row of a declarative reference-range table."""

    model_config = ConfigDict(extra="forbid")

    kind: MetricKind
    normal_min: float
    normal_max: float
    critical_min: float | None = None
    critical_max: float | None = None
    unit: str = ""

    @model_validator(mode="after")
    def _critical_fully_specified(self) -> RangeRecord:
        if (self.critical_min is None) != (self.critical_max is None):
            raise ValueError("critical_min and critical_max must be given together")
        return self

    def to_pair(self) -> RangePair:
        critical = None
        if self.critical_min is not None and self.critical_max is not None:
            critical = Range(min=self.critical_min, max=self.critical_max)
        return RangePair(
            normal=Range(min=self.normal_min, max=self.normal_max),
            critical=critical,
            unit=self.unit,
        )


def _parse_kind(kind: MetricKind | str) -> MetricKind | None:
    if isinstance(kind, MetricKind):
        return kind
    try:
        return MetricKind(kind)
    except ValueError:
        return None


def _check_band(kind: MetricKind, label: str, band: Range) -> None:
    if not (math.isfinite(band.min) and math.isfinite(band.max)):
        raise RegistryIntegrityError(f"{label} band has a non-finite bound", kind=kind.value)
    if band.min > band.max:
        raise RegistryIntegrityError(
            f"{label} band is inverted ({band.min} > {band.max})", kind=kind.value,
        )


def _check_pair(kind: MetricKind, pair: RangePair) -> None:
    _check_band(kind, "normal", pair.normal)
    if pair.critical is None:
        return
    _check_band(kind, "critical", pair.critical)
    if not pair.critical.encloses(pair.normal):
        raise RegistryIntegrityError(
            f"critical band [{pair.critical.min}, {pair.critical.max}] does not contain "
            f"normal band [{pair.normal.min}, {pair.normal.max}]",
            kind=kind.value,
        )


class RangeRegistry:
    """Immutable mapping from :class:`MetricKind` to its :class:`RangePair`.

    Every entry is validated on construction; a malformed catalog raises
    :class:`RegistryIntegrityError` and never reaches the classifier.
    Lookups of kinds outside the catalog return ``None``.
    """

    def __init__(self, entries: Mapping[MetricKind | str, RangePair]) -> None:
        checked: dict[MetricKind, RangePair] = {}
        for raw_kind, pair in entries.items():
            kind = _parse_kind(raw_kind)
            if kind is None:
                raise RegistryIntegrityError("unknown metric kind", kind=str(raw_kind))
            _check_pair(kind, pair)
            checked[kind] = pair
        self._entries: Mapping[MetricKind, RangePair] = MappingProxyType(checked)

    # ── Construction ──────────────────────────────────────────

    @classmethod
    def from_records(cls, records: Iterable[RangeRecord | Mapping[str, Any]]) -> RangeRegistry:
        """Build a registry from declarative ``{kind, normal_min, ...}`` rows."""
        entries: dict[MetricKind, RangePair] = {}
        for position, raw in enumerate(records):
            try:
                record = raw if isinstance(raw, RangeRecord) else RangeRecord.model_validate(raw)
            except ValidationError as exc:
                kind = raw.get("kind") if isinstance(raw, Mapping) else None
                raise RegistryIntegrityError(
                    f"invalid range record at position {position}: {exc}",
                    kind=None if kind is None else str(kind),
                ) from exc
            if record.kind in entries:
                raise RegistryIntegrityError("duplicate range record", kind=record.kind.value)
            entries[record.kind] = record.to_pair()
        return cls(entries)

    # ── Lookup ────────────────────────────────────────────────

    def lookup(self, kind: MetricKind | str) -> RangePair | None:
        """Return the bands for *kind*, or ``None`` if the kind is not catalogued."""
        parsed = _parse_kind(kind)
        if parsed is None:
            return None
        return self._entries.get(parsed)

    def get_normal_range(self, kind: MetricKind | str) -> Range | None:
        pair = self.lookup(kind)
        return None if pair is None else pair.normal

    def get_critical_range(self, kind: MetricKind | str) -> Range | None:
        pair = self.lookup(kind)
        return None if pair is None else pair.critical

    def kinds(self) -> list[MetricKind]:
        return list(self._entries)

    def as_records(self) -> list[dict[str, Any]]:
        """Dump the catalog back into the declarative record shape."""
        rows: list[dict[str, Any]] = []
        for kind, pair in self._entries.items():
            row: dict[str, Any] = {
                "kind": kind.value,
                "normal_min": pair.normal.min,
                "normal_max": pair.normal.max,
            }
            if pair.critical is not None:
                row["critical_min"] = pair.critical.min
                row["critical_max"] = pair.critical.max
            row["unit"] = pair.unit
            rows.append(row)
        return rows

    def __contains__(self, kind: object) -> bool:
        if not isinstance(kind, str):
            return False
        return self.lookup(kind) is not None

    def __iter__(self) -> Iterator[MetricKind]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"RangeRegistry(kinds={[kind_name(k) for k in self._entries]})"


# ── Loading ───────────────────────────────────────────────────


def load_registry(path: str | Path) -> RangeRegistry:
    """Load a registry from a JSON catalog file.

    The file holds either a list of range records or an object with a
    ``"ranges"`` list.  Malformed content raises :class:`RegistryIntegrityError`;
    a missing file propagates the underlying :class:`OSError`.
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except UnicodeDecodeError as exc:
        raise RegistryIntegrityError(f"{path} is not valid UTF-8: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise RegistryIntegrityError(f"{path} is not valid JSON: {exc}") from exc

    if isinstance(data, dict):
        data = data.get("ranges")
    if not isinstance(data, list):
        raise RegistryIntegrityError(f"{path} must contain a list of range records")

    registry = RangeRegistry.from_records(data)
    logger.info("registry.loaded", path=str(path), kinds=len(registry))
    return registry


@lru_cache
def default_registry() -> RangeRegistry:
    """Return the built-in catalog, constructed once per process."""
    return RangeRegistry.from_records(DEFAULT_RANGE_RECORDS)


@lru_cache
def _registry_from_file(path: Path) -> RangeRegistry:
    return load_registry(path)


def get_registry(settings: Settings | None = None) -> RangeRegistry:
    """Return the registry selected by configuration.

    Uses ``settings.reference_ranges_path`` when set, otherwise the built-in
    catalog.  Either way the result is cached for the process lifetime.
    """
    if settings is None:
        settings = get_settings()
    if settings.reference_ranges_path is not None:
        return _registry_from_file(settings.reference_ranges_path.resolve())
    return default_registry()
