"""Provider factory protocol.

Resolves a provider string to a live provider instance at runtime.

Usage:
    factory: ProviderFactoryProtocol = get_provider_factory()
    match factory.create("bitwarden://myorg@engineering"):
        case Success(value=provider):
            ...
"""

from typing import Protocol

from secretspec.core.result import Result
from secretspec.domain.errors import ProviderError
from secretspec.domain.protocols.secret_provider_protocol import (
    SecretProviderProtocol,
)


class ProviderFactoryProtocol(Protocol):
    """Factory for secret provider instances."""

    def create(self, uri: str) -> Result[SecretProviderProtocol, ProviderError]:
        """Create the provider addressed by ``uri``.

        Args:
            uri: Provider URI or bare provider name.

        Returns:
            Success(SecretProviderProtocol): Configured provider.
            Failure(ProviderNotFoundError): Unknown scheme.
            Failure(ProviderConfigurationError): Malformed URI.
        """
        ...

    def supports(self, uri: str) -> bool:
        """Whether ``uri`` names a registered scheme."""
        ...

    def list_supported(self) -> list[str]:
        """All registered schemes."""
        ...
