"""Infrastructure errors – record store and I/O failures."""

from __future__ import annotations

from typing import Any

from logscope.kernel.errors.base import BaseError


class InfrastructureError(BaseError):
    """Infrastructure / I/O failure that is not a business rule violation."""

    default_code = "infrastructure_error"


class StoreUnavailableError(InfrastructureError):
    """The record store could not be reached or rejected the query."""

    default_code = "store_unavailable"

    def __init__(
        self,
        store: str,
        message: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message or f"Record store '{store}' is unavailable", **kwargs)
        self.store = store


class QueryTimeoutError(InfrastructureError):
    """A record store query exceeded its deadline."""

    default_code = "query_timeout"


__all__ = [
    "InfrastructureError",
    "QueryTimeoutError",
    "StoreUnavailableError",
]
