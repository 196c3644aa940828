"""LoggerProtocol definition for structured logging.

Implementations MUST emit structured logs (message plus key-value context)
and MUST NOT receive secrets: raw tokens and passwords are never passed as
context. Tokens are truncated to their first 8 characters when logged.

Usage:
    from src.core.container import get_logger

    logger = get_logger()
    logger.info("Verification token issued", identifier=identifier)

    request_logger = logger.bind(trace_id=trace_id)
    request_logger.warning("Email delivery failed", to=email)
"""

from __future__ import annotations

from typing import Any, Protocol


class LoggerProtocol(Protocol):
    """Protocol for structured logging adapters.

    Five levels (DEBUG, INFO, WARNING, ERROR, CRITICAL) plus context binding
    for request-scoped or job-scoped loggers.
    """

    def debug(self, message: str, /, **context: Any) -> None:
        """Log a debug-level message."""
        ...

    def info(self, message: str, /, **context: Any) -> None:
        """Log an info-level message."""
        ...

    def warning(self, message: str, /, **context: Any) -> None:
        """Log a warning-level message (degraded, fail-open paths)."""
        ...

    def error(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log an error-level message.

        Args:
            message: Human-readable message (avoid f-strings; use context).
            error: Optional exception; adapters add error_type and
                error_message fields.
            **context: Structured key-value context fields.
        """
        ...

    def critical(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log a critical-level message for failures affecting every request."""
        ...

    def bind(self, **context: Any) -> LoggerProtocol:
        """Return a new logger with permanently bound context.

        The original logger is left unchanged.
        """
        ...

    def with_context(self, **context: Any) -> LoggerProtocol:
        """Alias for bind()."""
        ...
