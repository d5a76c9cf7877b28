"""Domain – schema-validated parse of semi-structured log payloads.

The legacy sink stores the whole event as JSON (``log_event``) and keeps
request metadata under ``Properties``.  :class:`LogEventPayload` is the
only place that JSON is inspected; everything downstream reads typed
optional fields.
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping

from logscope.observability.logging import get_logger

_log = get_logger(__name__)

_EMPTY: Mapping[str, Any] = MappingProxyType({})


def parse_json_object(raw: str | None) -> dict[str, Any]:
    """Decode *raw* as a JSON object; anything else yields ``{}``."""
    if raw is None or not raw.strip():
        return {}
    try:
        decoded = json.loads(raw)
    except (TypeError, ValueError, RecursionError) as exc:
        _log.debug("log_payload.malformed", error=str(exc), length=len(raw))
        return {}
    if not isinstance(decoded, dict):
        _log.debug("log_payload.not_an_object", kind=type(decoded).__name__)
        return {}
    return decoded


def _string_field(properties: Mapping[str, Any], key: str) -> str | None:
    value = properties.get(key)
    return value if isinstance(value, str) else None


@dataclass(frozen=True)
class LogEventPayload:
    """Typed view over ``log_event.Properties``."""

    application: str | None = None
    request_path: str | None = None
    http_method: str | None = None
    user_id: str | None = None
    properties: Mapping[str, Any] = field(default_factory=lambda: _EMPTY, compare=False)

    @classmethod
    def parse(cls, raw: str | None) -> LogEventPayload:
        """Parse a ``log_event`` document; never raises."""
        root = parse_json_object(raw)
        properties = root.get("Properties")
        if not isinstance(properties, dict):
            return cls()
        return cls(
            application=_string_field(properties, "Application"),
            request_path=_string_field(properties, "RequestPath"),
            http_method=_string_field(properties, "HttpMethod"),
            user_id=_string_field(properties, "UserId"),
            properties=MappingProxyType(properties),
        )


__all__ = ["LogEventPayload", "parse_json_object"]
