"""Bitwarden provider (Password Manager and Secrets Manager).

Usage:
    from secretspec.infrastructure.providers.bitwarden import BitwardenProvider

    result = BitwardenProvider.from_uri("bitwarden://myorg@collection-id")
"""

from secretspec.infrastructure.providers.bitwarden.bitwarden_provider import (
    BitwardenProvider,
)
from secretspec.infrastructure.providers.bitwarden.config import (
    BitwardenConfig,
    BitwardenOverrides,
)

__all__ = ["BitwardenProvider", "BitwardenConfig", "BitwardenOverrides"]
