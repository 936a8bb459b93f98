"""Container module - composition root.

Re-exports the factory functions so callers import from one place:

    from secretspec.core.container import get_logger, get_provider

The container is organized into modules by concern:
- infrastructure: logging
- providers: provider factory and provider lookup
"""

from secretspec.core.container.infrastructure import get_logger
from secretspec.core.container.providers import get_provider, get_provider_factory

__all__ = ["get_logger", "get_provider", "get_provider_factory"]
