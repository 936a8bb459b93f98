"""Domain value objects.

Usage:
    from secretspec.domain.value_objects import ProviderUri, SecretValue
"""

from secretspec.domain.value_objects.provider_uri import ProviderUri
from secretspec.domain.value_objects.secret_value import SecretValue

__all__ = ["ProviderUri", "SecretValue"]
