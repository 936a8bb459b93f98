"""Password Manager item documents for ``bw create item`` / ``bw edit item``.

Builds the minimal typed JSON document for a new item and applies a value to
an existing item document. Both paths use one write rule:

    - a well-known field of the item type (see ``OVERRIDE_ALIASES``) writes
      the typed sub-field, e.g. ``card.code`` for ``cvv``
    - ``notes`` on a SecureNote writes the top-level notes
    - any other name upserts a custom field; a new field is hidden when its
      name looks sensitive (``CustomFieldKind.for_field_name``)

Wire format (Bitwarden CLI JSON):
    {
        "type": 1,
        "name": "DATABASE_URL",
        "notes": "...",
        "login": {"username": null, "password": "...", "totp": null, "uris": []},
        "fields": [{"name": "...", "value": "...", "type": 1}],
        "organizationId": null,
        "collectionIds": []
    }
"""

import copy
from typing import Any

from secretspec.core.constants import MANAGED_NOTE_PREFIX
from secretspec.domain.enums import CustomFieldKind, VaultItemType
from secretspec.infrastructure.providers.bitwarden.field_resolver import (
    NOTES_FIELD,
    canonical_field,
)

# Item type -> (payload section key, canonical field -> wire field).
PAYLOAD_WIRE_FIELDS: dict[VaultItemType, tuple[str, dict[str, str]]] = {
    VaultItemType.LOGIN: (
        "login",
        {"username": "username", "password": "password", "totp": "totp"},
    ),
    VaultItemType.SECURE_NOTE: ("secureNote", {}),
    VaultItemType.CARD: (
        "card",
        {
            "cardholder": "cardholderName",
            "brand": "brand",
            "number": "number",
            "exp_month": "expMonth",
            "exp_year": "expYear",
            "code": "code",
        },
    ),
    VaultItemType.IDENTITY: (
        "identity",
        {
            "title": "title",
            "first_name": "firstName",
            "middle_name": "middleName",
            "last_name": "lastName",
            "username": "username",
            "company": "company",
            "email": "email",
            "phone": "phone",
        },
    ),
    VaultItemType.SSH_KEY: (
        "sshKey",
        {
            "private_key": "privateKey",
            "public_key": "publicKey",
            "fingerprint": "keyFingerprint",
        },
    ),
}


def managed_note(key: str) -> str:
    """Note attached to items created for ``key``."""
    return f"{MANAGED_NOTE_PREFIX}{key}"


def build_item_document(
    *,
    item_type: VaultItemType,
    name: str,
    value: str,
    target_field: str,
    organization_id: str | None = None,
    collection_id: str | None = None,
) -> dict[str, Any]:
    """Build the document for a new item holding one value.

    Args:
        item_type: Type of item to create.
        name: Item name (the secret key).
        value: Value to store.
        target_field: Field that receives the value.
        organization_id: Owning organization, if any.
        collection_id: Collection to file the item under, if any.

    Returns:
        dict: JSON document with only the target field populated.
    """
    section, wire_fields = PAYLOAD_WIRE_FIELDS[item_type]
    payload: dict[str, Any]
    if item_type is VaultItemType.SECURE_NOTE:
        payload = {"type": 0}
    else:
        payload = {wire: None for wire in wire_fields.values()}
    if item_type is VaultItemType.LOGIN:
        payload["uris"] = []

    document: dict[str, Any] = {
        "type": int(item_type),
        "name": name,
        "notes": managed_note(name),
        section: payload,
        "fields": [],
        "organizationId": organization_id,
        "collectionIds": [collection_id] if collection_id else [],
    }
    _write_field(document, item_type, target_field, value)
    return document


def apply_update(
    document: dict[str, Any],
    *,
    item_type: VaultItemType,
    target_field: str,
    value: str,
) -> dict[str, Any]:
    """Return a copy of an existing item document with ``target_field`` set.

    Every other property of the document is preserved.

    Args:
        document: Item JSON as returned by ``bw get item``.
        item_type: The item's declared type.
        target_field: Field that receives the value.
        value: Value to store.

    Returns:
        dict: Updated document ready for ``bw edit item``.
    """
    updated = copy.deepcopy(document)
    _write_field(updated, item_type, target_field, value)
    return updated


def upsert_custom_field(document: dict[str, Any], name: str, value: str) -> None:
    """Set custom field ``name`` in place, creating it if absent.

    Existing fields are matched by whole name, ignoring case, the same way
    ``VaultItem.find_custom_field`` matches on read. A match keeps its
    stored name and kind.

    Args:
        document: Item document (mutated).
        name: Custom field name.
        value: Value to store.
    """
    fields = document.get("fields")
    if not isinstance(fields, list):
        fields = []
        document["fields"] = fields

    wanted = name.lower()
    for entry in fields:
        if isinstance(entry, dict) and str(entry.get("name") or "").lower() == wanted:
            entry["value"] = value
            return

    fields.append(
        {
            "name": name,
            "value": value,
            "type": int(CustomFieldKind.for_field_name(name)),
        }
    )


def _write_field(
    document: dict[str, Any],
    item_type: VaultItemType,
    target_field: str,
    value: str,
) -> None:
    canonical = canonical_field(item_type, target_field)
    if canonical == NOTES_FIELD:
        document["notes"] = value
        return
    if canonical is None:
        upsert_custom_field(document, target_field, value)
        return

    section, wire_fields = PAYLOAD_WIRE_FIELDS[item_type]
    payload = document.get(section)
    if not isinstance(payload, dict):
        payload = {}
        document[section] = payload
    payload[wire_fields[canonical]] = value
