"""Observability – structlog processors and get_logger helper."""
from __future__ import annotations

import contextvars
from typing import Any

import structlog

_query_id: contextvars.ContextVar[str | None] = contextvars.ContextVar("logscope_query_id", default=None)


class QueryContextProcessor:
    """structlog processor that tags events with the active query id.

    Services bind a query id per search / dashboard build with
    :meth:`bind`, so every line logged while answering one request can be
    correlated::

        token = QueryContextProcessor.bind("dash-42")
        try:
            ...
        finally:
            QueryContextProcessor.reset(token)
    """

    def __call__(
        self,
        logger: Any,           # noqa: ARG002
        method_name: str,      # noqa: ARG002
        event_dict: dict[str, Any],
    ) -> dict[str, Any]:
        query_id = _query_id.get()
        if query_id is not None:
            event_dict.setdefault("query_id", query_id)
        return event_dict

    @staticmethod
    def bind(query_id: str) -> contextvars.Token[str | None]:
        return _query_id.set(query_id)

    @staticmethod
    def reset(token: contextvars.Token[str | None]) -> None:
        _query_id.reset(token)

    @staticmethod
    def current() -> str | None:
        return _query_id.get()


def get_logger(name: str | None = None, **initial_values: Any) -> Any:
    """Return a bound structlog logger.

    Parameters
    ----------
    name:
        Logger name (typically ``__name__`` of the calling module).
    **initial_values:
        Key-value pairs to bind on the returned logger.
    """
    logger = structlog.get_logger(name)
    if initial_values:
        logger = logger.bind(**initial_values)
    return logger


__all__ = ["QueryContextProcessor", "get_logger"]
