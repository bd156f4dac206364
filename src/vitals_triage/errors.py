"""Exception hierarchy for the triage engine.

Unknown metric kinds are deliberately absent: they classify as ``NORMAL``
with ``recognized=False`` instead of raising.
"""

from __future__ import annotations

from typing import Any


class VitalsTriageError(Exception):
    """Base class for every error raised by :mod:`vitals_triage`."""


class RegistryIntegrityError(VitalsTriageError, ValueError):
    """The reference-range catalog is malformed and must not be used."""

    def __init__(self, message: str, *, kind: str | None = None) -> None:
        self.kind = kind
        if kind is not None:
            message = f"{kind}: {message}"
        super().__init__(message)


class InvalidValueError(VitalsTriageError, ValueError):
    """A reading value cannot be classified (``NaN`` or infinite)."""

    def __init__(self, kind: Any, value: float) -> None:
        self.kind = kind
        self.value = value
        name = getattr(kind, "value", kind)
        super().__init__(f"cannot classify non-finite value {value!r} for {name}")
