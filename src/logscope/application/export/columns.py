"""Application export – ColumnDef and the log export layout."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from logscope.application.search.result import LogRecordView
from logscope.kernel.time import format_timestamp_precise

__all__ = ["LOG_COLUMNS", "ColumnDef", "flatten_text"]


def flatten_text(value: str | None) -> str:
    """Collapse line breaks and tabs so a value stays on one CSV line."""
    if not value:
        return ""
    return value.replace("\r\n", " ").replace("\n", " ").replace("\r", " ").replace("\t", " ")


def _optional(value: Any) -> str:
    return "" if value is None else str(value)


@dataclass(frozen=True)
class ColumnDef:
    """One export column: header text plus how to read it from a view."""

    header: str
    read: Callable[[LogRecordView], str]


LOG_COLUMNS: tuple[ColumnDef, ...] = (
    ColumnDef("TimeStamp", lambda v: format_timestamp_precise(v.timestamp)),
    ColumnDef("Level", lambda v: v.level),
    ColumnDef("Message", lambda v: flatten_text(v.message)),
    ColumnDef("RequestPath", lambda v: _optional(v.request_path)),
    ColumnDef("HttpMethod", lambda v: _optional(v.http_method)),
    ColumnDef("Duration", lambda v: _optional(v.duration)),
    ColumnDef("ResponseStatusCode", lambda v: _optional(v.response_status_code)),
    ColumnDef("UserId", lambda v: _optional(v.user_id)),
    ColumnDef("HasException", lambda v: "true" if v.has_exception else "false"),
)
