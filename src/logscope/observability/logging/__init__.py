"""Observability – structlog configuration and logger helper."""
from logscope.observability.logging.factory import JsonLoggerFactory, configure_logging
from logscope.observability.logging.processors import QueryContextProcessor, get_logger

__all__ = ["JsonLoggerFactory", "QueryContextProcessor", "configure_logging", "get_logger"]
