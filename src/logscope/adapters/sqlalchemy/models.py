"""SQLAlchemy mappings for the two log tables.

``ApplicationLogs`` is the typed table written by the structured logging
sink; ``seriloglogs`` is the legacy sink table, which has no primary key
and is therefore mapped as a Core :class:`~sqlalchemy.Table`.

Timestamps are ``timestamp without time zone`` (naive server-local).
"""
from __future__ import annotations

import datetime

from sqlalchemy import BigInteger, Column, DateTime, Integer, String, Table, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class LogBase(DeclarativeBase):
    pass


class ApplicationLogModel(LogBase):
    """Row of the typed ``ApplicationLogs`` table."""

    __tablename__ = "ApplicationLogs"

    id: Mapped[int] = mapped_column("Id", Integer, primary_key=True, autoincrement=True)
    message: Mapped[str] = mapped_column("Message", Text, default="")
    level: Mapped[str] = mapped_column("Level", String(32), index=True)
    timestamp: Mapped[datetime.datetime] = mapped_column("TimeStamp", DateTime(timezone=False), index=True)
    exception: Mapped[str | None] = mapped_column("Exception", Text, nullable=True)
    properties: Mapped[str] = mapped_column("Properties", Text, default="{}")
    log_event: Mapped[str | None] = mapped_column("LogEvent", Text, nullable=True)
    user_id: Mapped[str | None] = mapped_column("UserId", String(256), nullable=True)
    request_id: Mapped[str | None] = mapped_column("RequestId", String(256), nullable=True)
    correlation_id: Mapped[str | None] = mapped_column("CorrelationId", String(256), nullable=True)
    http_method: Mapped[str | None] = mapped_column("HttpMethod", String(16), nullable=True)
    request_path: Mapped[str | None] = mapped_column("RequestPath", String(2048), nullable=True)
    response_status_code: Mapped[int | None] = mapped_column("ResponseStatusCode", Integer, nullable=True)
    duration: Mapped[int | None] = mapped_column("Duration", BigInteger, nullable=True)


serilog_logs = Table(
    "seriloglogs",
    LogBase.metadata,
    Column("message", Text, nullable=True),
    Column("message_template", Text, nullable=True),
    Column("level", Integer, nullable=True),
    Column("timestamp", DateTime(timezone=False), nullable=True),
    Column("exception", Text, nullable=True),
    Column("log_event", Text, nullable=True),
)


__all__ = ["ApplicationLogModel", "LogBase", "serilog_logs"]
