"""Bitwarden JSON mappers."""

from secretspec.infrastructure.providers.bitwarden.mappers.item_mapper import (
    BitwardenItemMapper,
    UnknownItemTypeError,
)
from secretspec.infrastructure.providers.bitwarden.mappers.secret_mapper import (
    BitwardenSecretMapper,
)

__all__ = ["BitwardenItemMapper", "BitwardenSecretMapper", "UnknownItemTypeError"]
