"""LoggerProtocol definition for structured logging.

Backend-agnostic structured logging port. Implementations MUST emit
structured (message + key-value) records and MUST NOT receive secret values:
callers log keys, item ids, schemes and exit codes only.

Usage:
    from secretspec.core.container import get_logger

    logger: LoggerProtocol = get_logger()
    provider_logger = logger.bind(provider="bitwarden", service="bws")
    provider_logger.info("secret_stored", key="DATABASE_URL")
"""

from __future__ import annotations

from typing import Any, Protocol


class LoggerProtocol(Protocol):
    """Protocol for structured logging adapters."""

    def debug(self, message: str, /, **context: Any) -> None:
        """Log a debug-level event."""
        ...

    def info(self, message: str, /, **context: Any) -> None:
        """Log an info-level event."""
        ...

    def warning(self, message: str, /, **context: Any) -> None:
        """Log a warning-level event."""
        ...

    def error(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log an error-level event.

        Args:
            message: Event name (avoid f-strings; use context).
            error: Optional exception; adapters add error_type and
                error_message fields.
            **context: Structured key-value context fields.
        """
        ...

    def critical(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log a critical-level event (same arguments as ``error``)."""
        ...

    def bind(self, **context: Any) -> LoggerProtocol:
        """Return a new logger with permanently bound context.

        The original logger is unchanged.
        """
        ...
