"""Unit tests for BitwardenConfig URI parsing and BitwardenOverrides.

Tests cover:
- Scheme to service mapping and unsupported schemes
- Password Manager host/userinfo/query handling
- Secrets Manager host/query handling
- Lenient handling of unknown query keys and item types
- Legacy compound item names
- Environment overrides read at call time

Architecture:
- Pure parsing tests, no process is spawned
"""

import os
from unittest.mock import patch

import pytest

from secretspec.core.enums import ErrorCode
from secretspec.core.result import Failure, Success
from secretspec.domain.enums import VaultItemType, VaultService
from secretspec.domain.errors import ProviderConfigurationError
from secretspec.domain.value_objects import ProviderUri
from secretspec.infrastructure.providers.bitwarden import (
    BitwardenConfig,
    BitwardenOverrides,
)


def config_for(raw: str) -> BitwardenConfig:
    result = BitwardenConfig.from_uri(ProviderUri.parse(raw).value)
    assert isinstance(result, Success), result
    return result.value


@pytest.mark.unit
class TestBitwardenConfigScheme:
    """Test scheme selection."""

    def test_bitwarden_scheme_selects_password_manager(self):
        """Test 'bitwarden://' selects the Password Manager."""
        assert config_for("bitwarden://").service is VaultService.PASSWORD_MANAGER

    def test_bws_scheme_selects_secrets_manager(self):
        """Test 'bws://' selects Secrets Manager."""
        assert config_for("bws://").service is VaultService.SECRETS_MANAGER

    def test_unsupported_scheme(self):
        """Test other schemes fail naming both valid schemes."""
        result = BitwardenConfig.from_uri(ProviderUri.parse("vault://x").value)

        assert isinstance(result, Failure)
        assert isinstance(result.error, ProviderConfigurationError)
        assert result.error.code == ErrorCode.PROVIDER_SCHEME_UNSUPPORTED
        assert "'bitwarden://'" in result.error.message
        assert "'bws://'" in result.error.message


@pytest.mark.unit
class TestPasswordManagerConfig:
    """Test bitwarden:// parsing."""

    def test_empty_authority(self):
        """Test 'bitwarden://' leaves organization and collection unset."""
        config = config_for("bitwarden://")

        assert config.organization_id is None
        assert config.collection_id is None
        assert config.default_item_type is VaultItemType.LOGIN
        assert config.default_field is None

    def test_host_is_collection(self):
        """Test the host becomes the collection id."""
        config = config_for("bitwarden://collection-id")

        assert config.collection_id == "collection-id"
        assert config.organization_id is None

    def test_userinfo_is_organization(self):
        """Test 'org@collection' splits into organization and collection."""
        config = config_for("bitwarden://org@collection")

        assert config.organization_id == "org"
        assert config.collection_id == "collection"

    def test_localhost_is_not_a_collection(self):
        """Test 'localhost' carries no collection id."""
        assert config_for("bitwarden://localhost").collection_id is None

    def test_query_parameters(self):
        """Test every recognized query key."""
        config = config_for(
            "bitwarden://?org=o1&collection=c1&server=https://vault.example.com"
            "&folder=Team/{project}&type=card&field=code"
        )

        assert config.organization_id == "o1"
        assert config.collection_id == "c1"
        assert config.server == "https://vault.example.com"
        assert config.folder_template == "Team/{project}"
        assert config.default_item_type is VaultItemType.CARD
        assert config.default_field == "code"

    def test_organization_alias(self):
        """Test 'organization=' is accepted like 'org='."""
        assert config_for("bitwarden://?organization=o2").organization_id == "o2"

    def test_query_overrides_authority(self):
        """Test query values override host-derived values."""
        config = config_for("bitwarden://org@coll?collection=other")

        assert config.collection_id == "other"
        assert config.organization_id == "org"

    def test_unknown_query_keys_ignored(self):
        """Test unrecognized keys do not fail parsing."""
        config = config_for("bitwarden://coll?colour=blue&future=1")

        assert config.collection_id == "coll"

    def test_invalid_type_keeps_default(self):
        """Test an unsupported type value leaves the default type."""
        assert config_for("bitwarden://?type=bogus").default_item_type is VaultItemType.LOGIN

    def test_type_is_case_insensitive(self):
        """Test type names parse regardless of case."""
        assert config_for("bitwarden://?type=SSH").default_item_type is VaultItemType.SSH_KEY

    def test_secrets_manager_keys_not_populated(self):
        """Test project/token query keys are ignored for the Password Manager."""
        config = config_for("bitwarden://?project=p&token=t")

        assert config.project_id is None
        assert config.access_token is None


@pytest.mark.unit
class TestSecretsManagerConfig:
    """Test bws:// parsing."""

    def test_host_is_project(self):
        """Test the host becomes the project id."""
        config = config_for("bws://e325ea69-aaaa")

        assert config.project_id == "e325ea69-aaaa"

    def test_empty_authority(self):
        """Test 'bws://' leaves the project unset."""
        assert config_for("bws://").project_id is None

    def test_query_parameters(self):
        """Test project, token, type and field keys."""
        config = config_for("bws://?project=p1&token=t1&type=note&field=value")

        assert config.project_id == "p1"
        assert config.access_token == "t1"
        assert config.default_item_type is VaultItemType.SECURE_NOTE
        assert config.default_field == "value"

    def test_password_manager_keys_not_populated(self):
        """Test org/collection keys are ignored for Secrets Manager."""
        config = config_for("bws://proj?org=o&collection=c&server=s")

        assert config.organization_id is None
        assert config.collection_id is None
        assert config.server is None

    def test_token_not_in_repr(self):
        """Test the access token is never rendered."""
        assert "t0ken" not in repr(config_for("bws://?token=t0ken"))


@pytest.mark.unit
class TestLegacyItemName:
    """Test BitwardenConfig.item_name()."""

    def test_default_template(self):
        """Test the default folder template."""
        config = config_for("bitwarden://")

        assert config.item_name("myapp", "API_KEY", "dev") == "secretspec/myapp/dev/API_KEY"

    def test_custom_template(self):
        """Test a folder template from the URI."""
        config = config_for("bitwarden://?folder=Apps/{project}-{profile}")

        assert config.item_name("myapp", "API_KEY", "prod") == "Apps/myapp-prod/API_KEY"


@pytest.mark.unit
class TestBitwardenOverrides:
    """Test BitwardenOverrides environment loading."""

    def test_reads_environment(self):
        """Test override variables are read without a prefix."""
        env = {
            "BITWARDEN_DEFAULT_TYPE": "card",
            "BITWARDEN_DEFAULT_FIELD": "api_key",
            "BITWARDEN_ORGANIZATION": "test-org",
            "BITWARDEN_COLLECTION": "test-collection",
            "BWS_ACCESS_TOKEN": "tok",
        }
        with patch.dict(os.environ, env, clear=True):
            overrides = BitwardenOverrides()

        assert overrides.default_type is VaultItemType.CARD
        assert overrides.bitwarden_default_field == "api_key"
        assert overrides.bitwarden_organization == "test-org"
        assert overrides.bitwarden_collection == "test-collection"
        assert overrides.bws_access_token == "tok"
        assert "tok" not in repr(overrides)

    def test_defaults(self):
        """Test nothing is overridden by default."""
        with patch.dict(os.environ, {}, clear=True):
            overrides = BitwardenOverrides()

        assert overrides.default_type is None
        assert overrides.bitwarden_default_field is None

    def test_invalid_type_ignored(self):
        """Test an unparseable default type is ignored."""
        with patch.dict(os.environ, {"BITWARDEN_DEFAULT_TYPE": "bogus"}, clear=True):
            assert BitwardenOverrides().default_type is None

    def test_read_at_instantiation(self):
        """Test each instance sees the current environment."""
        with patch.dict(os.environ, {"BITWARDEN_DEFAULT_FIELD": "a"}, clear=True):
            first = BitwardenOverrides()
        with patch.dict(os.environ, {"BITWARDEN_DEFAULT_FIELD": "b"}, clear=True):
            second = BitwardenOverrides()

        assert first.bitwarden_default_field == "a"
        assert second.bitwarden_default_field == "b"
