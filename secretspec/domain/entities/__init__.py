"""Domain entities.

Usage:
    from secretspec.domain.entities import VaultItem, KvSecret
"""

from secretspec.domain.entities.kv_secret import KvSecret
from secretspec.domain.entities.vault_item import (
    PAYLOAD_TYPES,
    CardPayload,
    CustomField,
    IdentityPayload,
    LoginPayload,
    LoginUri,
    SecureNotePayload,
    SshKeyPayload,
    VaultItem,
    VaultItemPayload,
)

__all__ = [
    "PAYLOAD_TYPES",
    "CardPayload",
    "CustomField",
    "IdentityPayload",
    "KvSecret",
    "LoginPayload",
    "LoginUri",
    "SecureNotePayload",
    "SshKeyPayload",
    "VaultItem",
    "VaultItemPayload",
]
