"""Reference-range sub-package — the read-only catalog the classifier consults."""

from vitals_triage.ranges.registry import (
    RangeRecord,
    RangeRegistry,
    default_registry,
    get_registry,
    load_registry,
)

__all__ = ["RangeRecord", "RangeRegistry", "default_registry", "get_registry", "load_registry"]
