"""Field resolution for Password Manager items.

Maps a requested secret key (the "hint") onto one scalar inside a typed
vault item. Priority order, first hit wins:

    1. Override   explicit field name from configuration or environment.
                  Authoritative: a miss is "not found", never a fallback.
    2. Hint       ordered (substring, field) table for the item type.
    3. Default    fixed per-type default fields.
    4. Custom     custom field matching the hint (exact, then substring).

The same hint tables choose the target field on ``set`` so a value written
under a key is read back under that key.

All tables are plain data; functions here are pure and never fail.
"""

from dataclasses import dataclass
from enum import Enum

from secretspec.domain.entities import VaultItem
from secretspec.domain.enums import VaultItemType

NOTES_FIELD = "notes"
"""Pseudo-field addressing the item's top-level notes text."""

SECURE_NOTE_VALUE_FIELD = "value"
"""Custom field that holds a SecureNote's value."""

SSH_PASSPHRASE_FIELD = "passphrase"
"""Custom field that holds an SSH key passphrase."""


# Override name (lower-case) -> canonical field, per item type.
OVERRIDE_ALIASES: dict[VaultItemType, dict[str, str]] = {
    VaultItemType.LOGIN: {
        "password": "password",
        "username": "username",
        "totp": "totp",
    },
    VaultItemType.SECURE_NOTE: {
        "notes": NOTES_FIELD,
    },
    VaultItemType.CARD: {
        "number": "number",
        "code": "code",
        "cvv": "code",
        "cvc": "code",
        "cardholder": "cardholder",
        "name": "cardholder",
        "brand": "brand",
        "expmonth": "exp_month",
        "exp_month": "exp_month",
        "expyear": "exp_year",
        "exp_year": "exp_year",
    },
    VaultItemType.IDENTITY: {
        "email": "email",
        "username": "username",
        "phone": "phone",
        "firstname": "first_name",
        "first_name": "first_name",
        "lastname": "last_name",
        "last_name": "last_name",
        "company": "company",
    },
    VaultItemType.SSH_KEY: {
        "private_key": "private_key",
        "privatekey": "private_key",
        "private": "private_key",
        "public_key": "public_key",
        "publickey": "public_key",
        "public": "public_key",
        "fingerprint": "fingerprint",
        "key_fingerprint": "fingerprint",
    },
}

# Ordered (substring of lower-cased hint, field) pairs, per item type.
HINT_KEYWORDS: dict[VaultItemType, tuple[tuple[str, str], ...]] = {
    VaultItemType.LOGIN: (
        ("pass", "password"),
        ("secret", "password"),
        ("token", "password"),
        ("user", "username"),
        ("login", "username"),
        ("totp", "totp"),
        ("2fa", "totp"),
        ("mfa", "totp"),
    ),
    VaultItemType.SECURE_NOTE: (),
    VaultItemType.CARD: (
        ("code", "code"),
        ("cvv", "code"),
        ("cvc", "code"),
        ("cardholder", "cardholder"),
        ("name", "cardholder"),
        ("number", "number"),
        ("card", "number"),
    ),
    VaultItemType.IDENTITY: (
        ("phone", "phone"),
        ("tel", "phone"),
        ("user", "username"),
        ("login", "username"),
        ("email", "email"),
        ("mail", "email"),
    ),
    VaultItemType.SSH_KEY: (
        ("public", "public_key"),
        ("pub", "public_key"),
        ("fingerprint", "fingerprint"),
        ("finger", "fingerprint"),
        ("passphrase", SSH_PASSPHRASE_FIELD),
        ("password", SSH_PASSPHRASE_FIELD),
        ("private", "private_key"),
        ("key", "private_key"),
    ),
}

# Fields tried in order when no hint matched.
DEFAULT_FIELDS: dict[VaultItemType, tuple[str, ...]] = {
    VaultItemType.LOGIN: ("password", "username"),
    VaultItemType.SECURE_NOTE: (),
    VaultItemType.CARD: ("number",),
    VaultItemType.IDENTITY: ("email", "username"),
    VaultItemType.SSH_KEY: ("private_key",),
}


class ResolutionSource(str, Enum):
    """Which resolution step produced a value."""

    OVERRIDE = "override"
    HINT = "hint"
    DEFAULT = "default"
    CUSTOM_FIELD = "custom_field"


@dataclass(frozen=True, slots=True, kw_only=True)
class ResolvedField:
    """A resolved scalar and where it came from.

    Attributes:
        field: Canonical field or custom field name that held the value.
        value: Plaintext value.
        source: Resolution step that produced it.
    """

    field: str
    value: str
    source: ResolutionSource

    def __repr__(self) -> str:
        return f"ResolvedField(field={self.field!r}, source={self.source.value})"


def canonical_field(item_type: VaultItemType, name: str) -> str | None:
    """Map an override or target name to a well-known field of ``item_type``.

    Args:
        item_type: Item type whose alias table applies.
        name: Field name (case-insensitive).

    Returns:
        Canonical field name, or None if ``name`` is a custom field.
    """
    return OVERRIDE_ALIASES[item_type].get(name.lower())


def resolve_field(
    item: VaultItem,
    hint: str,
    requested_field: str | None = None,
) -> ResolvedField | None:
    """Resolve which value of ``item`` answers a request for ``hint``.

    Args:
        item: Matched vault item.
        hint: Requested secret key.
        requested_field: Explicit field override, if configured.

    Returns:
        ResolvedField, or None when the item holds no matching value.
    """
    if requested_field:
        return _resolve_override(item, requested_field)

    if item.item_type is VaultItemType.SECURE_NOTE:
        return _resolve_secure_note(item, hint)

    hint_lower = hint.lower()
    for keyword, field_name in HINT_KEYWORDS[item.item_type]:
        if keyword in hint_lower:
            value = _field_value(item, field_name)
            if value is not None:
                return ResolvedField(
                    field=field_name, value=value, source=ResolutionSource.HINT
                )

    for field_name in DEFAULT_FIELDS[item.item_type]:
        value = item.payload.value_of(field_name)
        if value is not None:
            return ResolvedField(
                field=field_name, value=value, source=ResolutionSource.DEFAULT
            )

    return _resolve_custom(item, hint)


def target_field_for_hint(item_type: VaultItemType, hint: str) -> str:
    """Choose the field a ``set`` writes for ``hint`` when no override is set.

    Args:
        item_type: Type of the item being created or updated.
        hint: Secret key being written.

    Returns:
        Canonical field name, or a custom field name.
    """
    if item_type is VaultItemType.SECURE_NOTE:
        return SECURE_NOTE_VALUE_FIELD

    hint_lower = hint.lower()
    for keyword, field_name in HINT_KEYWORDS[item_type]:
        if keyword in hint_lower:
            return field_name

    match item_type:
        case VaultItemType.LOGIN:
            return "password"
        case VaultItemType.SSH_KEY:
            return "private_key"
        case _:
            return hint


def _resolve_override(item: VaultItem, requested_field: str) -> ResolvedField | None:
    canonical = canonical_field(item.item_type, requested_field)
    if canonical is not None:
        value = _field_value(item, canonical)
        if value is None:
            return None
        return ResolvedField(
            field=canonical, value=value, source=ResolutionSource.OVERRIDE
        )

    custom = item.find_custom_field(requested_field)
    if custom is None or custom.value is None:
        return None
    return ResolvedField(
        field=custom.name, value=custom.value, source=ResolutionSource.OVERRIDE
    )


def _resolve_secure_note(item: VaultItem, hint: str) -> ResolvedField | None:
    value = item.custom_value(SECURE_NOTE_VALUE_FIELD)
    if value is not None:
        return ResolvedField(
            field=SECURE_NOTE_VALUE_FIELD,
            value=value,
            source=ResolutionSource.DEFAULT,
        )

    resolved = _resolve_custom(item, hint)
    if resolved is not None:
        return resolved

    if item.notes is not None:
        return ResolvedField(
            field=NOTES_FIELD, value=item.notes, source=ResolutionSource.DEFAULT
        )
    return None


def _resolve_custom(item: VaultItem, hint: str) -> ResolvedField | None:
    custom = item.find_custom_field(hint)
    if custom is None or custom.value is None:
        return None
    return ResolvedField(
        field=custom.name, value=custom.value, source=ResolutionSource.CUSTOM_FIELD
    )


def _field_value(item: VaultItem, field_name: str) -> str | None:
    if field_name == NOTES_FIELD:
        return item.notes
    if field_name in item.payload.FIELDS:
        return item.payload.value_of(field_name)
    return item.custom_value(field_name)
