"""Observability – structured logging for the analytics services."""
from logscope.observability.logging import configure_logging, get_logger

__all__ = ["configure_logging", "get_logger"]
