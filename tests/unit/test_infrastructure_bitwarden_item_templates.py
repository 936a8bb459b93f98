"""Unit tests for Password Manager item documents.

Tests cover:
- New item documents per item type
- Target field routing (typed sub-field, notes, custom field)
- Organization and collection attachment
- In-place updates that preserve other properties
- Custom field upsert and kind inference

Architecture:
- Pure dict transformations, no process is spawned
"""

import pytest

from secretspec.domain.enums import CustomFieldKind, VaultItemType
from secretspec.infrastructure.providers.bitwarden.item_templates import (
    apply_update,
    build_item_document,
    managed_note,
    upsert_custom_field,
)


def build(item_type, target_field, value="v", **kwargs):
    return build_item_document(
        item_type=item_type,
        name="API_KEY",
        value=value,
        target_field=target_field,
        **kwargs,
    )


@pytest.mark.unit
class TestBuildItemDocument:
    """Test build_item_document()."""

    def test_login_password(self):
        """Test a Login document with only the password populated."""
        document = build(VaultItemType.LOGIN, "password", "s3cret")

        assert document["type"] == 1
        assert document["name"] == "API_KEY"
        assert document["notes"] == managed_note("API_KEY")
        assert document["login"] == {
            "username": None,
            "password": "s3cret",
            "totp": None,
            "uris": [],
        }
        assert document["fields"] == []
        assert document["organizationId"] is None
        assert document["collectionIds"] == []

    def test_managed_note(self):
        """Test the managed note text."""
        assert managed_note("API_KEY") == "SecretSpec managed secret: API_KEY"

    def test_secure_note_value_field(self):
        """Test a SecureNote stores the value in a hidden 'value' field."""
        document = build(VaultItemType.SECURE_NOTE, "value", "line1\nline2")

        assert document["type"] == 2
        assert document["secureNote"] == {"type": 0}
        assert document["fields"] == [
            {"name": "value", "value": "line1\nline2", "type": int(CustomFieldKind.HIDDEN)}
        ]

    def test_secure_note_notes_target(self):
        """Test target 'notes' writes the notes text."""
        document = build(VaultItemType.SECURE_NOTE, "notes", "body")

        assert document["notes"] == "body"
        assert document["fields"] == []

    def test_card_alias_target(self):
        """Test 'cvv' writes card.code and leaves the rest null."""
        document = build(VaultItemType.CARD, "cvv", "123")

        assert document["type"] == 3
        assert document["card"]["code"] == "123"
        assert document["card"]["number"] is None
        assert set(document["card"]) == {
            "cardholderName",
            "brand",
            "number",
            "expMonth",
            "expYear",
            "code",
        }

    def test_card_custom_target(self):
        """Test a non-alias target on a Card becomes a custom field."""
        document = build(VaultItemType.CARD, "STRIPE_REGION", "eu")

        assert all(value is None for value in document["card"].values())
        assert document["fields"] == [
            {"name": "STRIPE_REGION", "value": "eu", "type": int(CustomFieldKind.TEXT)}
        ]

    def test_identity_snake_case_alias(self):
        """Test 'first_name' writes identity.firstName."""
        document = build(VaultItemType.IDENTITY, "first_name", "Ada")

        assert document["identity"]["firstName"] == "Ada"

    def test_ssh_key_fields(self):
        """Test SSH targets use the wire names."""
        document = build(VaultItemType.SSH_KEY, "fingerprint", "SHA256:abc")

        assert document["sshKey"] == {
            "privateKey": None,
            "publicKey": None,
            "keyFingerprint": "SHA256:abc",
        }

    def test_ssh_passphrase_is_custom_field(self):
        """Test the SSH passphrase is stored as a custom field."""
        document = build(VaultItemType.SSH_KEY, "passphrase", "pp")

        assert document["fields"][0]["name"] == "passphrase"
        assert document["fields"][0]["value"] == "pp"
        assert document["sshKey"]["privateKey"] is None

    def test_organization_and_collection(self):
        """Test organization and collection ids are attached."""
        document = build(
            VaultItemType.LOGIN, "password", organization_id="org-1", collection_id="col-1"
        )

        assert document["organizationId"] == "org-1"
        assert document["collectionIds"] == ["col-1"]


@pytest.mark.unit
class TestApplyUpdate:
    """Test apply_update()."""

    def _existing(self):
        return {
            "id": "item-1",
            "type": 1,
            "name": "API_KEY",
            "notes": "keep me",
            "login": {
                "username": "alice",
                "password": "old",
                "totp": None,
                "uris": [{"uri": "https://x", "match": None}],
            },
            "fields": [{"name": "region", "value": "us", "type": 0}],
            "folderId": "folder-1",
            "revisionDate": "2024-05-01T00:00:00Z",
        }

    def test_updates_typed_field_and_preserves_rest(self):
        """Test only the target changes."""
        existing = self._existing()

        updated = apply_update(
            existing, item_type=VaultItemType.LOGIN, target_field="password", value="new"
        )

        assert updated["login"]["password"] == "new"
        assert updated["login"]["username"] == "alice"
        assert updated["login"]["uris"] == [{"uri": "https://x", "match": None}]
        assert updated["notes"] == "keep me"
        assert updated["folderId"] == "folder-1"
        assert updated["revisionDate"] == "2024-05-01T00:00:00Z"

    def test_input_not_mutated(self):
        """Test the original document is left untouched."""
        existing = self._existing()

        apply_update(
            existing, item_type=VaultItemType.LOGIN, target_field="password", value="new"
        )

        assert existing["login"]["password"] == "old"

    def test_existing_custom_field_overwritten(self):
        """Test an existing custom field keeps its kind and position."""
        updated = apply_update(
            self._existing(),
            item_type=VaultItemType.LOGIN,
            target_field="region",
            value="eu",
        )

        assert updated["fields"] == [{"name": "region", "value": "eu", "type": 0}]

    def test_missing_section_created(self):
        """Test a document without its payload section still updates."""
        updated = apply_update(
            {"id": "1", "type": 3, "name": "C"},
            item_type=VaultItemType.CARD,
            target_field="number",
            value="4111",
        )

        assert updated["card"] == {"number": "4111"}


@pytest.mark.unit
class TestUpsertCustomField:
    """Test upsert_custom_field()."""

    def test_appends_with_inferred_kind(self):
        """Test new fields get a kind inferred from the name."""
        document = {"fields": []}

        upsert_custom_field(document, "api_token", "t")
        upsert_custom_field(document, "region", "us")

        assert document["fields"] == [
            {"name": "api_token", "value": "t", "type": int(CustomFieldKind.HIDDEN)},
            {"name": "region", "value": "us", "type": int(CustomFieldKind.TEXT)},
        ]

    def test_name_match_ignores_case(self):
        """Test a differently-cased name overwrites the existing field."""
        document = {"fields": [{"name": "API_KEY", "value": "old", "type": 1}]}

        upsert_custom_field(document, "api_key", "new")

        assert document["fields"] == [{"name": "API_KEY", "value": "new", "type": 1}]

    def test_substring_is_not_a_match(self):
        """Test a field merely containing the name is left alone."""
        document = {"fields": [{"name": "region_backup", "value": "us", "type": 0}]}

        upsert_custom_field(document, "REGION", "eu")

        assert [f["name"] for f in document["fields"]] == ["region_backup", "REGION"]
        assert document["fields"][0]["value"] == "us"

    def test_missing_fields_list(self):
        """Test a document without 'fields' gets one."""
        document = {"fields": None}

        upsert_custom_field(document, "value", "v")

        assert document["fields"] == [
            {"name": "value", "value": "v", "type": int(CustomFieldKind.HIDDEN)}
        ]
