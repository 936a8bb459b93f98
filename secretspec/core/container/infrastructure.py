"""Infrastructure dependency factories.

Application-scoped singletons for cross-cutting services:
- Logging (console, human-readable or JSON)
"""

from functools import lru_cache
from typing import TYPE_CHECKING

from secretspec.core.config import get_settings

if TYPE_CHECKING:
    from secretspec.domain.protocols import LoggerProtocol


@lru_cache()
def get_logger() -> "LoggerProtocol":
    """Return the application-scoped logger singleton.

    Adapter selection is centralized here:
    - development/production: ConsoleAdapter (human-readable)
    - testing/ci: ConsoleAdapter (JSON)

    Returns:
        LoggerProtocol: Logger instance implementing the protocol.
    """
    from secretspec.infrastructure.logging import ConsoleAdapter

    settings = get_settings()
    use_json = settings.wants_json_logs
    return ConsoleAdapter(use_json=use_json, level=settings.log_level)
