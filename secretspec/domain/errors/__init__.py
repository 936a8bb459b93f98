"""Domain errors package.

Usage:
    from secretspec.domain.errors import ProviderError, ProviderAuthenticationError
"""

from secretspec.domain.errors.provider_error import (
    ProviderAccessDeniedError,
    ProviderAuthenticationError,
    ProviderCommandError,
    ProviderConfigurationError,
    ProviderError,
    ProviderInvalidResponseError,
    ProviderNotFoundError,
    ProviderRateLimitError,
    ProviderReadOnlyError,
    ProviderToolNotFoundError,
)

__all__ = [
    "ProviderError",
    "ProviderNotFoundError",
    "ProviderConfigurationError",
    "ProviderToolNotFoundError",
    "ProviderAuthenticationError",
    "ProviderRateLimitError",
    "ProviderAccessDeniedError",
    "ProviderCommandError",
    "ProviderInvalidResponseError",
    "ProviderReadOnlyError",
]
