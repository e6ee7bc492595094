"""Public logging API for faultline.

This package wraps Python's ``logging`` module with defaults for stdout
emission, structured context propagation and error observation.
"""

from .config import (
    ContextFilter,
    JsonFormatter,
    PlainFormatter,
    configure_logging,
    configure_logging_from_settings,
    get_logger,
)
from .context import bind_context, clear_context, get_context, log_context
from .observers import RESPONSE_STATUS_STATE, ErrorObserver, error_logger

__all__ = [
    "ContextFilter",
    "ErrorObserver",
    "JsonFormatter",
    "PlainFormatter",
    "RESPONSE_STATUS_STATE",
    "bind_context",
    "clear_context",
    "configure_logging",
    "configure_logging_from_settings",
    "error_logger",
    "get_context",
    "get_logger",
    "log_context",
]
