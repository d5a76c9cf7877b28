"""Config settings – Settings base class."""
from __future__ import annotations

import dataclasses


@dataclasses.dataclass
class Settings:
    """Dataclass base for environment-driven settings.

    Subclasses set ``_prefix`` (``LOGSCOPE`` for the analytics services) and
    override :meth:`_validate`; validation runs on every construction, so a
    settings object that exists is a valid one.
    """

    _prefix: dataclasses.ClassVar[str] = ""

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        """Raise :class:`InvalidSettingValueError` on inconsistent fields."""


__all__ = ["Settings"]
