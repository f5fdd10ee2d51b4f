"""Observability helpers for Folio."""

from folio.observability.logging import (
    ConsoleFormatter,
    JsonFormatter,
    LogContext,
    configure_logging,
    request_id_var,
)

__all__ = [
    "configure_logging",
    "JsonFormatter",
    "ConsoleFormatter",
    "LogContext",
    "request_id_var",
]
