"""Kernel error hierarchy – public re-export surface.

Hierarchy::

    BaseError
    ├── ApplicationError     (application.py)
    └── InfrastructureError  (infrastructure.py)
        ├── StoreUnavailableError
        └── QueryTimeoutError
"""

from logscope.kernel.errors.application import ApplicationError
from logscope.kernel.errors.base import BaseError
from logscope.kernel.errors.infrastructure import (
    InfrastructureError,
    QueryTimeoutError,
    StoreUnavailableError,
)

__all__ = [
    "ApplicationError",
    "BaseError",
    "InfrastructureError",
    "QueryTimeoutError",
    "StoreUnavailableError",
]
