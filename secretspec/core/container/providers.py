"""Provider dependency factories (registry-driven).

Usage:
    from secretspec.core.container import get_provider

    match get_provider("bitwarden://my-collection"):
        case Success(value=provider):
            provider.get("myapp", "DATABASE_URL", "default")
        case Failure(error=error):
            ...
"""

from functools import lru_cache
from typing import TYPE_CHECKING

from secretspec.core.config import get_settings
from secretspec.core.result import Result

if TYPE_CHECKING:
    from secretspec.domain.errors import ProviderError
    from secretspec.domain.protocols import (
        ProviderFactoryProtocol,
        SecretProviderProtocol,
    )


@lru_cache()
def get_provider_factory() -> "ProviderFactoryProtocol":
    """Return the application-scoped provider factory.

    Returns:
        ProviderFactoryProtocol: ProviderFactory configured from settings.
    """
    from secretspec.infrastructure.providers.provider_factory import ProviderFactory

    return ProviderFactory(settings=get_settings())


def get_provider(uri: str) -> Result["SecretProviderProtocol", "ProviderError"]:
    """Create the provider addressed by ``uri``.

    Args:
        uri: Provider string (``env``, ``dotenv:.env``, ``bws://project-id``).

    Returns:
        Success(SecretProviderProtocol) or Failure(ProviderError).
    """
    return get_provider_factory().create(uri)
