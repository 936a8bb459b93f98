"""Bitwarden Password Manager item mapper.

Converts ``bw list items`` / ``bw get item`` JSON into VaultItem entities.
Contains the knowledge of Bitwarden's item JSON structure.

Bitwarden Item Structure:
    {
        "id": "0c5e3f7a-...",
        "organizationId": null,
        "folderId": null,
        "type": 3,
        "name": "STRIPE_CARD",
        "notes": "...",
        "fields": [{"name": "pin", "value": "1234", "type": 1}],
        "card": {"cardholderName": "...", "number": "...", "code": "..."},
        "collectionIds": []
    }
"""

from typing import Any

import structlog

from secretspec.domain.entities import (
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
from secretspec.domain.enums import CustomFieldKind, VaultItemType
from secretspec.infrastructure.providers.bitwarden.item_templates import (
    PAYLOAD_WIRE_FIELDS,
)

logger = structlog.get_logger(__name__)


class UnknownItemTypeError(ValueError):
    """Item JSON carries a type tag outside the known item types."""


class BitwardenItemMapper:
    """Mapper for converting Bitwarden item JSON to VaultItem.

    Stateless; safe to share.

    Example:
        >>> mapper = BitwardenItemMapper()
        >>> item = mapper.map_item({"id": "1", "name": "API", "type": 2})
        >>> item.item_type
        <VaultItemType.SECURE_NOTE: 2>
    """

    def map_item(self, data: dict[str, Any]) -> VaultItem | None:
        """Map a single item JSON object.

        Args:
            data: Item object from the Bitwarden CLI.

        Returns:
            VaultItem, or None if the data is invalid or of an unknown type.
        """
        try:
            return self.map_item_strict(data)
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(
                "bitwarden_item_mapping_failed",
                item_id=data.get("id") if isinstance(data, dict) else None,
                error=str(e),
                error_type=type(e).__name__,
            )
            return None

    def map_items(self, data_list: list[Any]) -> list[VaultItem]:
        """Map a list of item JSON objects.

        Skips invalid items and logs warnings. Never raises.

        Args:
            data_list: Item objects from ``bw list items``.

        Returns:
            Successfully mapped items in listing order.
        """
        items: list[VaultItem] = []
        for data in data_list:
            if not isinstance(data, dict):
                logger.warning(
                    "bitwarden_item_mapping_failed",
                    error="item is not an object",
                    error_type="TypeError",
                )
                continue
            item = self.map_item(data)
            if item is not None:
                items.append(item)
        return items

    def map_item_strict(self, data: dict[str, Any]) -> VaultItem:
        """Map a single item JSON object, raising on invalid data.

        Args:
            data: Item object from the Bitwarden CLI.

        Returns:
            VaultItem.

        Raises:
            UnknownItemTypeError: If the type tag is not a known item type.
            KeyError: If ``id`` or ``name`` is missing.
            TypeError: If a section has the wrong JSON type.
        """
        item_type = VaultItemType.from_tag(data.get("type"))
        if item_type is None:
            raise UnknownItemTypeError(f"Unknown item type: {data.get('type')!r}")

        return VaultItem(
            id=_require_str(data, "id"),
            name=_require_str(data, "name"),
            item_type=item_type,
            payload=self._map_payload(item_type, data),
            fields=self._map_fields(data.get("fields")),
            notes=_optional_str(data.get("notes")),
            organization_id=_optional_str(data.get("organizationId")),
            collection_ids=tuple(
                str(cid) for cid in (data.get("collectionIds") or ()) if cid
            ),
            folder_id=_optional_str(data.get("folderId")),
        )

    def _map_payload(
        self, item_type: VaultItemType, data: dict[str, Any]
    ) -> VaultItemPayload:
        section, wire_fields = PAYLOAD_WIRE_FIELDS[item_type]
        raw = data.get(section) or {}
        if not isinstance(raw, dict):
            raise TypeError(f"'{section}' must be an object")

        values = {
            canonical: _optional_str(raw.get(wire))
            for canonical, wire in wire_fields.items()
        }

        match item_type:
            case VaultItemType.LOGIN:
                return LoginPayload(
                    **values,
                    uris=tuple(
                        LoginUri(
                            uri=_optional_str(entry.get("uri")),
                            match=entry.get("match"),
                        )
                        for entry in (raw.get("uris") or ())
                        if isinstance(entry, dict)
                    ),
                )
            case VaultItemType.SECURE_NOTE:
                note_type = raw.get("type")
                return SecureNotePayload(
                    note_type=note_type if isinstance(note_type, int) else 0
                )
            case VaultItemType.CARD:
                return CardPayload(**values)
            case VaultItemType.IDENTITY:
                return IdentityPayload(**values)
            case VaultItemType.SSH_KEY:
                return SshKeyPayload(**values)

    def _map_fields(self, raw: Any) -> tuple[CustomField, ...]:
        if not raw:
            return ()
        if not isinstance(raw, list):
            raise TypeError("'fields' must be an array")

        fields: list[CustomField] = []
        for entry in raw:
            if not isinstance(entry, dict) or not entry.get("name"):
                continue
            try:
                kind = CustomFieldKind(entry.get("type") or 0)
            except ValueError:
                # linked fields have no value of their own
                continue
            fields.append(
                CustomField(
                    name=str(entry["name"]),
                    value=_optional_str(entry.get("value")),
                    kind=kind,
                )
            )
        return tuple(fields)


def _require_str(data: dict[str, Any], key: str) -> str:
    value = data[key]
    if not isinstance(value, str):
        raise TypeError(f"'{key}' must be a string")
    return value


def _optional_str(value: Any) -> str | None:
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)
