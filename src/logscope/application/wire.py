"""Application – lenient coercion of wire payloads.

Request DTOs accept both snake_case and the camelCase names used by the
HTTP layer, and treat unparsable values as absent instead of failing.
"""
from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping

from logscope.kernel.time import to_naive


def pick(data: Mapping[str, Any], snake: str, camel: str, default: Any = None) -> Any:
    if snake in data:
        return data[snake]
    return data.get(camel, default)


def parse_datetime(value: Any) -> datetime | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return to_naive(value)
    if isinstance(value, str):
        try:
            return to_naive(datetime.fromisoformat(value.replace("Z", "+00:00")))
        except ValueError:
            return None
    return None


def parse_int(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def parse_bool(value: Any) -> bool | None:
    if value is None:
        return None
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("1", "true", "yes", "on"):
            return True
        if lowered in ("0", "false", "no", "off"):
            return False
        return None
    if isinstance(value, int):
        return bool(value)
    return None


def iso(value: datetime | None) -> str | None:
    """ISO-8601 rendering of a naive timestamp (no zone suffix)."""
    return to_naive(value).isoformat() if value is not None else None


__all__ = ["iso", "parse_bool", "parse_datetime", "parse_int", "pick"]
