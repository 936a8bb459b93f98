"""Password Manager vault item entity.

A vault item is a tagged union: the ``item_type`` tag selects exactly one
typed payload (Login, SecureNote, Card, Identity, SshKey). Every item also
carries an ordered list of free-form custom fields.

Architecture:
    - Pure domain entity (no infrastructure dependencies)
    - Immutable snapshot of backend state, fetched fresh on every call
    - Updates are applied to the backend document, not to this entity

Usage:
    item = VaultItem(
        id="a1b2",
        name="DATABASE_URL",
        item_type=VaultItemType.LOGIN,
        payload=LoginPayload(password="s3cret"),
    )
    item.payload.value_of("password")  # "s3cret"
"""

from dataclasses import dataclass, field
from typing import ClassVar

from secretspec.domain.enums import CustomFieldKind, VaultItemType


@dataclass(frozen=True, slots=True, kw_only=True)
class LoginUri:
    """URI attached to a login item."""

    uri: str | None = None
    match: int | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class LoginPayload:
    """Login credentials."""

    ITEM_TYPE: ClassVar[VaultItemType] = VaultItemType.LOGIN
    FIELDS: ClassVar[tuple[str, ...]] = ("password", "username", "totp")

    username: str | None = None
    password: str | None = field(default=None, repr=False)
    totp: str | None = field(default=None, repr=False)
    uris: tuple[LoginUri, ...] = ()

    def value_of(self, name: str) -> str | None:
        """Return a well-known field value by canonical name."""
        return getattr(self, name) if name in self.FIELDS else None


@dataclass(frozen=True, slots=True, kw_only=True)
class SecureNotePayload:
    """Secure note marker. The note text lives in ``VaultItem.notes``."""

    ITEM_TYPE: ClassVar[VaultItemType] = VaultItemType.SECURE_NOTE
    FIELDS: ClassVar[tuple[str, ...]] = ()

    note_type: int = 0

    def value_of(self, name: str) -> str | None:
        return None


@dataclass(frozen=True, slots=True, kw_only=True)
class CardPayload:
    """Payment card details."""

    ITEM_TYPE: ClassVar[VaultItemType] = VaultItemType.CARD
    FIELDS: ClassVar[tuple[str, ...]] = (
        "number",
        "code",
        "cardholder",
        "brand",
        "exp_month",
        "exp_year",
    )

    cardholder: str | None = None
    number: str | None = field(default=None, repr=False)
    brand: str | None = None
    exp_month: str | None = None
    exp_year: str | None = None
    code: str | None = field(default=None, repr=False)

    def value_of(self, name: str) -> str | None:
        """Return a well-known field value by canonical name."""
        return getattr(self, name) if name in self.FIELDS else None


@dataclass(frozen=True, slots=True, kw_only=True)
class IdentityPayload:
    """Identity details."""

    ITEM_TYPE: ClassVar[VaultItemType] = VaultItemType.IDENTITY
    FIELDS: ClassVar[tuple[str, ...]] = (
        "email",
        "username",
        "phone",
        "first_name",
        "last_name",
        "company",
        "title",
        "middle_name",
    )

    title: str | None = None
    first_name: str | None = None
    middle_name: str | None = None
    last_name: str | None = None
    username: str | None = None
    company: str | None = None
    email: str | None = None
    phone: str | None = None

    def value_of(self, name: str) -> str | None:
        """Return a well-known field value by canonical name."""
        return getattr(self, name) if name in self.FIELDS else None


@dataclass(frozen=True, slots=True, kw_only=True)
class SshKeyPayload:
    """SSH key pair."""

    ITEM_TYPE: ClassVar[VaultItemType] = VaultItemType.SSH_KEY
    FIELDS: ClassVar[tuple[str, ...]] = ("private_key", "public_key", "fingerprint")

    private_key: str | None = field(default=None, repr=False)
    public_key: str | None = None
    fingerprint: str | None = None

    def value_of(self, name: str) -> str | None:
        """Return a well-known field value by canonical name."""
        return getattr(self, name) if name in self.FIELDS else None


type VaultItemPayload = (
    LoginPayload | SecureNotePayload | CardPayload | IdentityPayload | SshKeyPayload
)

PAYLOAD_TYPES: dict[VaultItemType, type] = {
    VaultItemType.LOGIN: LoginPayload,
    VaultItemType.SECURE_NOTE: SecureNotePayload,
    VaultItemType.CARD: CardPayload,
    VaultItemType.IDENTITY: IdentityPayload,
    VaultItemType.SSH_KEY: SshKeyPayload,
}


@dataclass(frozen=True, slots=True, kw_only=True)
class CustomField:
    """Free-form (name, value, kind) triple attached to an item."""

    name: str
    value: str | None = field(default=None, repr=False)
    kind: CustomFieldKind = CustomFieldKind.TEXT


@dataclass(frozen=True, slots=True, kw_only=True)
class VaultItem:
    """Typed Password Manager item.

    Attributes:
        id: Backend item identifier.
        name: Display name (the addressable secret key).
        item_type: Type tag; always agrees with ``payload``.
        payload: The single typed payload for ``item_type``.
        fields: Custom fields in declaration order.
        notes: Free-form notes text.
        organization_id: Owning organization, if shared.
        collection_ids: Collections the item belongs to.
        folder_id: Personal folder, if any.

    Raises:
        ValueError: If the payload does not match the type tag.
    """

    id: str
    name: str
    item_type: VaultItemType
    payload: VaultItemPayload
    fields: tuple[CustomField, ...] = ()
    notes: str | None = field(default=None, repr=False)
    organization_id: str | None = None
    collection_ids: tuple[str, ...] = ()
    folder_id: str | None = None

    def __post_init__(self) -> None:
        """Enforce the tag/payload invariant.

        Raises:
            ValueError: If ``payload`` is not the payload class of ``item_type``.
        """
        expected = PAYLOAD_TYPES.get(self.item_type)
        if expected is None or type(self.payload) is not expected:
            raise ValueError(
                f"Item type {self.item_type!r} does not match payload "
                f"{type(self.payload).__name__}"
            )

    def find_custom_field(self, name: str) -> CustomField | None:
        """Find a custom field by name.

        Exact case-insensitive match first, then case-insensitive substring
        match. Declaration order breaks ties.

        Args:
            name: Field name to look up.

        Returns:
            The first matching custom field, or None.
        """
        wanted = name.lower()
        exact = next((f for f in self.fields if f.name.lower() == wanted), None)
        if exact is not None:
            return exact
        return next((f for f in self.fields if wanted in f.name.lower()), None)

    def custom_value(self, name: str) -> str | None:
        """Value of the custom field matching ``name``, if it has one."""
        match = self.find_custom_field(name)
        return match.value if match is not None else None
