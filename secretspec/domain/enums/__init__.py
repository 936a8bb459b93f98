"""Domain enums package.

Usage:
    from secretspec.domain.enums import VaultItemType, VaultService
"""

from secretspec.domain.enums.custom_field_kind import CustomFieldKind
from secretspec.domain.enums.vault_item_type import VaultItemType
from secretspec.domain.enums.vault_service import VaultService

__all__ = ["CustomFieldKind", "VaultItemType", "VaultService"]
