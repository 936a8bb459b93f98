"""Bitwarden secret provider.

One provider, two backends selected by URI scheme:

    bitwarden://   Password Manager (``bw``): typed vault items, one value
                   per item resolved by field resolution.
    bws://         Secrets Manager (``bws``): flat key-value secrets named
                   ``{project}_{key}``.

Every call is self-contained: environment overrides are re-read, the CLI is
spawned, and nothing is cached between calls. Profile only influences the
legacy compound item name searched by Password Manager ``set``.

Reference:
    https://bitwarden.com/help/cli/
    https://bitwarden.com/help/secrets-manager-cli/
"""

from typing import assert_never

import structlog

from secretspec.core.constants import MANAGED_NOTE_PREFIX
from secretspec.core.enums import ErrorCode
from secretspec.core.result import Failure, Result, Success
from secretspec.domain.entities import VaultItem
from secretspec.domain.enums import VaultItemType, VaultService
from secretspec.domain.errors import (
    ProviderCommandError,
    ProviderConfigurationError,
    ProviderError,
    ProviderInvalidResponseError,
)
from secretspec.domain.value_objects import ProviderUri, SecretValue
from secretspec.infrastructure.providers.bitwarden.api.bw_client import BwClient
from secretspec.infrastructure.providers.bitwarden.api.bws_client import BwsClient
from secretspec.infrastructure.providers.bitwarden.config import (
    PROVIDER_NAME,
    BitwardenConfig,
    BitwardenOverrides,
)
from secretspec.infrastructure.providers.bitwarden.field_resolver import (
    resolve_field,
    target_field_for_hint,
)
from secretspec.infrastructure.providers.bitwarden.item_templates import (
    apply_update,
    build_item_document,
)
from secretspec.infrastructure.providers.bitwarden.mappers import (
    BitwardenItemMapper,
    BitwardenSecretMapper,
)

logger = structlog.get_logger(__name__)

PROJECT_ID_REQUIRED_MESSAGE = (
    "Project ID is required for Bitwarden Secrets Manager. "
    "Use bws://project-id or bws://?project=project-id"
)


class BitwardenProvider:
    """Bitwarden provider implementing SecretProviderProtocol.

    Attributes:
        _config: Immutable configuration parsed from the URI.
        _bw_executable: ``bw`` executable name or path.
        _bws_executable: ``bws`` executable name or path.

    Example:
        >>> result = BitwardenProvider.from_uri("bws://e325ea69-...")
        >>> provider = result.value
        >>> provider.get("myapp", "DATABASE_URL", "default")
    """

    def __init__(
        self,
        config: BitwardenConfig,
        *,
        bw_executable: str = "bw",
        bws_executable: str = "bws",
    ) -> None:
        """Initialize provider.

        Args:
            config: Parsed Bitwarden configuration.
            bw_executable: ``bw`` executable name or path.
            bws_executable: ``bws`` executable name or path.
        """
        self._config = config
        self._bw_executable = bw_executable
        self._bws_executable = bws_executable
        self._item_mapper = BitwardenItemMapper()
        self._secret_mapper = BitwardenSecretMapper()

    @classmethod
    def from_uri(
        cls,
        uri: str | ProviderUri,
        *,
        bw_executable: str = "bw",
        bws_executable: str = "bws",
    ) -> Result["BitwardenProvider", ProviderConfigurationError]:
        """Build a provider from a ``bitwarden://`` or ``bws://`` URI.

        Parsing is pure: no process is spawned.
        """
        if isinstance(uri, str):
            parse_result = ProviderUri.parse(uri)
            if isinstance(parse_result, Failure):
                return parse_result
            uri = parse_result.value

        config_result = BitwardenConfig.from_uri(uri)
        if isinstance(config_result, Failure):
            return config_result

        return Success(
            value=cls(
                config_result.value,
                bw_executable=bw_executable,
                bws_executable=bws_executable,
            )
        )

    @property
    def config(self) -> BitwardenConfig:
        return self._config

    def name(self) -> str:
        return PROVIDER_NAME

    def allows_set(self) -> bool:
        return True

    def get(
        self, project: str, key: str, profile: str
    ) -> Result[SecretValue | None, ProviderError]:
        """Fetch ``key`` from the configured Bitwarden service."""
        service = self._config.service
        logger.debug("bitwarden_secret_get", key=key, service=service.value)

        overrides = BitwardenOverrides()
        match service:
            case VaultService.PASSWORD_MANAGER:
                return self._get_item_value(key, overrides)
            case VaultService.SECRETS_MANAGER:
                return self._get_kv_value(project, key, overrides)
            case _:
                assert_never(service)

    def set(
        self, project: str, key: str, value: SecretValue, profile: str
    ) -> Result[None, ProviderError]:
        """Create or update ``key`` in the configured Bitwarden service."""
        service = self._config.service
        logger.debug("bitwarden_secret_set", key=key, service=service.value)

        overrides = BitwardenOverrides()
        match service:
            case VaultService.PASSWORD_MANAGER:
                return self._set_item_value(project, key, value, profile, overrides)
            case VaultService.SECRETS_MANAGER:
                return self._set_kv_value(project, key, value, overrides)
            case _:
                assert_never(service)

    # =========================================================================
    # Password Manager
    # =========================================================================

    def _bw(self) -> BwClient:
        return BwClient(executable=self._bw_executable, server=self._config.server)

    def _organization_id(self, overrides: BitwardenOverrides) -> str | None:
        return overrides.bitwarden_organization or self._config.organization_id

    def _requested_field(self, overrides: BitwardenOverrides) -> str | None:
        return overrides.bitwarden_default_field or self._config.default_field

    def _get_item_value(
        self, key: str, overrides: BitwardenOverrides
    ) -> Result[SecretValue | None, ProviderError]:
        client = self._bw()
        auth_result = client.ensure_unlocked()
        if isinstance(auth_result, Failure):
            return auth_result

        list_result = client.list_items(
            search=key, organization_id=self._organization_id(overrides)
        )
        if isinstance(list_result, Failure):
            return list_result

        items = self._item_mapper.map_items(list_result.value)
        if not items:
            logger.debug("bitwarden_item_not_found", key=key)
            return Success(value=None)

        item = items[0]
        resolved = resolve_field(item, key, self._requested_field(overrides))
        if resolved is None:
            logger.debug("bitwarden_field_not_found", key=key, item_id=item.id)
            return Success(value=None)

        logger.debug(
            "bitwarden_field_resolved",
            key=key,
            item_id=item.id,
            field=resolved.field,
            source=resolved.source.value,
        )
        return Success(value=SecretValue(resolved.value))

    def _set_item_value(
        self,
        project: str,
        key: str,
        value: SecretValue,
        profile: str,
        overrides: BitwardenOverrides,
    ) -> Result[None, ProviderError]:
        client = self._bw()
        auth_result = client.ensure_unlocked()
        if isinstance(auth_result, Failure):
            return auth_result

        organization_id = self._organization_id(overrides)
        list_result = client.list_items(organization_id=organization_id)
        if isinstance(list_result, Failure):
            return list_result

        items = self._item_mapper.map_items(list_result.value)
        legacy_name = self._config.item_name(project, key, profile)
        existing = find_existing_item(items, legacy_name, key)

        if existing is not None:
            return self._update_item(client, existing, key, value, overrides)
        return self._create_item(client, key, value, overrides)

    def _update_item(
        self,
        client: BwClient,
        existing: VaultItem,
        key: str,
        value: SecretValue,
        overrides: BitwardenOverrides,
    ) -> Result[None, ProviderError]:
        organization_id = self._organization_id(overrides)
        get_result = client.get_item(existing.id, organization_id=organization_id)
        if isinstance(get_result, Failure):
            return get_result
        document = get_result.value

        item_type = VaultItemType.from_tag(document.get("type"))
        if item_type is None:
            return Failure(
                error=ProviderInvalidResponseError(
                    code=ErrorCode.PROVIDER_RESPONSE_INVALID,
                    message=f"Unknown Bitwarden item type: {document.get('type')!r}",
                    provider_name=PROVIDER_NAME,
                    details={"item_id": existing.id},
                )
            )

        target_field = self._requested_field(overrides) or target_field_for_hint(
            item_type, key
        )
        updated = apply_update(
            document,
            item_type=item_type,
            target_field=target_field,
            value=value.expose_secret(),
        )

        edit_result = client.edit_item(
            existing.id, updated, organization_id=organization_id
        )
        if isinstance(edit_result, Failure):
            return edit_result

        logger.info(
            "bitwarden_item_updated",
            key=key,
            item_id=existing.id,
            item_type=item_type.slug,
            field=target_field,
        )
        return Success(value=None)

    def _create_item(
        self,
        client: BwClient,
        key: str,
        value: SecretValue,
        overrides: BitwardenOverrides,
    ) -> Result[None, ProviderError]:
        organization_id = self._organization_id(overrides)
        item_type = overrides.default_type or self._config.default_item_type
        target_field = self._requested_field(overrides) or target_field_for_hint(
            item_type, key
        )
        document = build_item_document(
            item_type=item_type,
            name=key,
            value=value.expose_secret(),
            target_field=target_field,
            organization_id=organization_id,
            collection_id=overrides.bitwarden_collection or self._config.collection_id,
        )

        create_result = client.create_item(document, organization_id=organization_id)
        if isinstance(create_result, Failure):
            return create_result

        logger.info(
            "bitwarden_item_created",
            key=key,
            item_id=create_result.value.get("id"),
            item_type=item_type.slug,
            field=target_field,
        )
        return Success(value=None)

    # =========================================================================
    # Secrets Manager
    # =========================================================================

    def _bws(self, overrides: BitwardenOverrides) -> BwsClient:
        return BwsClient(
            executable=self._bws_executable,
            access_token=self._config.access_token or overrides.bws_access_token,
        )

    def _get_kv_value(
        self, project: str, key: str, overrides: BitwardenOverrides
    ) -> Result[SecretValue | None, ProviderError]:
        client = self._bws(overrides)
        list_result = client.list_secrets(self._config.project_id)
        if isinstance(list_result, Failure):
            return list_result

        compound_key = f"{project}_{key}"
        for secret in self._secret_mapper.map_secrets(list_result.value):
            if secret.matches(compound_key, key):
                logger.debug("bws_secret_found", key=key, secret_id=secret.id)
                return Success(value=SecretValue(secret.value))

        logger.debug("bws_secret_not_found", key=key)
        return Success(value=None)

    def _set_kv_value(
        self,
        project: str,
        key: str,
        value: SecretValue,
        overrides: BitwardenOverrides,
    ) -> Result[None, ProviderError]:
        project_id = self._config.project_id
        if not project_id:
            return Failure(
                error=ProviderConfigurationError(
                    code=ErrorCode.PROVIDER_CONFIGURATION_INVALID,
                    message=PROJECT_ID_REQUIRED_MESSAGE,
                    provider_name=PROVIDER_NAME,
                )
            )

        client = self._bws(overrides)
        compound_key = f"{project}_{key}"
        create_result = client.create_secret(
            key=compound_key,
            value=value.expose_secret(),
            project_id=project_id,
            note=f"{MANAGED_NOTE_PREFIX}{project}/{key}",
        )
        if isinstance(create_result, Success):
            logger.info("bws_secret_created", key=key, project_id=project_id)
            return Success(value=None)
        if not client.is_already_exists(create_result.error):
            return create_result

        list_result = client.list_secrets(project_id)
        if isinstance(list_result, Failure):
            return list_result

        for secret in self._secret_mapper.map_secrets(list_result.value):
            if secret.matches(compound_key, key):
                edit_result = client.edit_secret(
                    secret.id, key=compound_key, value=value.expose_secret()
                )
                if isinstance(edit_result, Failure):
                    return edit_result
                logger.info("bws_secret_updated", key=key, secret_id=secret.id)
                return Success(value=None)

        return Failure(
            error=ProviderCommandError(
                code=ErrorCode.PROVIDER_COMMAND_FAILED,
                message=(
                    "Secret creation failed with 'already exists' "
                    "but could not find it in the list"
                ),
                provider_name=PROVIDER_NAME,
                details={"key": compound_key, "project_id": project_id},
            )
        )


def find_existing_item(
    items: list[VaultItem], legacy_name: str, key: str
) -> VaultItem | None:
    """Locate the item ``set`` should update.

    Strategies in order, first hit wins; ties go to listing order:
        1. name equals the legacy compound name
        2. name equals ``key``
        3. name contains ``key`` (case-insensitive)

    Args:
        items: Items in listing order.
        legacy_name: ``{folder}/{key}`` compound name.
        key: Secret key.

    Returns:
        The matching item, or None.
    """
    for item in items:
        if item.name == legacy_name:
            return item
    for item in items:
        if item.name == key:
            return item
    key_lower = key.lower()
    for item in items:
        if key_lower in item.name.lower():
            return item
    return None
