"""Domain – Severity enumeration.

One name↔ordinal table shared by the typed store (string level column) and
the legacy store (integer level column).
"""
from __future__ import annotations

from enum import IntEnum


class Severity(IntEnum):
    VERBOSE = 0
    DEBUG = 1
    INFORMATION = 2
    WARNING = 3
    ERROR = 4
    FATAL = 5

    @property
    def label(self) -> str:
        """Display name as written by the producers (``"Information"``)."""
        return _LABELS[self]

    @classmethod
    def from_name(cls, name: str | None) -> Severity | None:
        """Case-insensitive lookup by display name; ``None`` when unknown."""
        if not name:
            return None
        return _BY_NAME.get(name.strip().lower())

    @classmethod
    def from_ordinal(cls, ordinal: int | None) -> Severity | None:
        if ordinal is None:
            return None
        try:
            return cls(ordinal)
        except ValueError:
            return None

    @classmethod
    def name_table(cls) -> dict[str, Severity]:
        """Lower-cased display names and aliases mapped to their severity."""
        return dict(_BY_NAME)

    @classmethod
    def coerce(cls, value: Severity | int | str | None) -> Severity | None:
        """Accept a member, an ordinal or a display name."""
        if value is None:
            return None
        if isinstance(value, cls):
            return value
        if isinstance(value, int):
            return cls.from_ordinal(value)
        return cls.from_name(value)


_LABELS: dict[Severity, str] = {
    Severity.VERBOSE: "Verbose",
    Severity.DEBUG: "Debug",
    Severity.INFORMATION: "Information",
    Severity.WARNING: "Warning",
    Severity.ERROR: "Error",
    Severity.FATAL: "Fatal",
}

_BY_NAME: dict[str, Severity] = {label.lower(): sev for sev, label in _LABELS.items()}
# short aliases seen in producer configuration
_BY_NAME.update({"info": Severity.INFORMATION, "warn": Severity.WARNING, "trace": Severity.VERBOSE})

__all__ = ["Severity"]
