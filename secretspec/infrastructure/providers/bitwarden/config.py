"""Bitwarden provider configuration.

``BitwardenConfig`` is parsed once from the provider URI and never changes.
``BitwardenOverrides`` is read from the environment on every call and takes
precedence over the URI.

URI grammar:
    bitwarden://[org@]collection[?org=&collection=&server=&folder=&type=&field=]
    bws://[project][?project=&token=&type=&field=]

Fields of one service are never populated when the other is selected.
Unknown query keys are ignored, as are ``type`` values that do not name an
item type.
"""

from dataclasses import dataclass, field

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from secretspec.core.constants import DEFAULT_FOLDER_TEMPLATE, LOCAL_HOSTS
from secretspec.core.enums import ErrorCode
from secretspec.core.result import Failure, Result, Success
from secretspec.domain.enums import VaultItemType, VaultService
from secretspec.domain.errors import ProviderConfigurationError
from secretspec.domain.value_objects import ProviderUri

PROVIDER_NAME = "bitwarden"

_SCHEME_SERVICES: dict[str, VaultService] = {
    "bitwarden": VaultService.PASSWORD_MANAGER,
    "bws": VaultService.SECRETS_MANAGER,
}


@dataclass(frozen=True, slots=True, kw_only=True)
class BitwardenConfig:
    """Immutable Bitwarden configuration.

    Attributes:
        service: Which Bitwarden backend to use.
        organization_id: Organization vault (Password Manager only).
        collection_id: Collection for new items (Password Manager only).
        server: Self-hosted server URL (Password Manager only).
        folder_template: Legacy compound-name prefix with ``{project}`` and
            ``{profile}`` placeholders (Password Manager only).
        project_id: Project scope (Secrets Manager only).
        access_token: Machine account token (Secrets Manager only).
        default_item_type: Item type for new items.
        default_field: Field override for reads and writes.
    """

    service: VaultService = VaultService.PASSWORD_MANAGER
    organization_id: str | None = None
    collection_id: str | None = None
    server: str | None = None
    folder_template: str | None = None
    project_id: str | None = None
    access_token: str | None = field(default=None, repr=False)
    default_item_type: VaultItemType = VaultItemType.LOGIN
    default_field: str | None = None

    @classmethod
    def from_uri(
        cls, uri: ProviderUri
    ) -> Result["BitwardenConfig", ProviderConfigurationError]:
        """Build a configuration from a parsed provider URI.

        Args:
            uri: Parsed ``bitwarden://`` or ``bws://`` URI.

        Returns:
            Success(BitwardenConfig): Parsed configuration.
            Failure(ProviderConfigurationError): Scheme is neither
                ``bitwarden`` nor ``bws``.
        """
        service = _SCHEME_SERVICES.get(uri.scheme)
        if service is None:
            return Failure(
                error=ProviderConfigurationError(
                    code=ErrorCode.PROVIDER_SCHEME_UNSUPPORTED,
                    message=(
                        f"Unsupported scheme '{uri.scheme}' for Bitwarden provider. "
                        "Use 'bitwarden://' for Password Manager or 'bws://' "
                        "for Secrets Manager."
                    ),
                    provider_name=PROVIDER_NAME,
                    details={"scheme": uri.scheme},
                )
            )

        host = uri.host if uri.host and uri.host not in LOCAL_HOSTS else None

        match service:
            case VaultService.PASSWORD_MANAGER:
                return Success(value=cls._password_manager(uri, host))
            case VaultService.SECRETS_MANAGER:
                return Success(value=cls._secrets_manager(uri, host))

    @classmethod
    def _password_manager(cls, uri: ProviderUri, host: str | None) -> "BitwardenConfig":
        organization_id = uri.username if host is not None else None
        collection_id = host
        server: str | None = None
        folder_template: str | None = None
        item_type = VaultItemType.LOGIN
        default_field: str | None = None

        for key, value in uri.query:
            match key:
                case "org" | "organization":
                    organization_id = value
                case "collection":
                    collection_id = value
                case "server":
                    server = value
                case "folder":
                    folder_template = value
                case "type":
                    item_type = VaultItemType.from_name(value) or item_type
                case "field":
                    default_field = value

        return cls(
            service=VaultService.PASSWORD_MANAGER,
            organization_id=organization_id,
            collection_id=collection_id,
            server=server,
            folder_template=folder_template,
            default_item_type=item_type,
            default_field=default_field,
        )

    @classmethod
    def _secrets_manager(cls, uri: ProviderUri, host: str | None) -> "BitwardenConfig":
        project_id = host
        access_token: str | None = None
        item_type = VaultItemType.LOGIN
        default_field: str | None = None

        for key, value in uri.query:
            match key:
                case "project":
                    project_id = value
                case "token":
                    access_token = value
                case "type":
                    item_type = VaultItemType.from_name(value) or item_type
                case "field":
                    default_field = value

        return cls(
            service=VaultService.SECRETS_MANAGER,
            project_id=project_id,
            access_token=access_token,
            default_item_type=item_type,
            default_field=default_field,
        )

    def item_name(self, project: str, key: str, profile: str) -> str:
        """Legacy compound item name ``{folder}/{key}``.

        Args:
            project: Project name substituted for ``{project}``.
            key: Secret key.
            profile: Profile name substituted for ``{profile}``.

        Returns:
            str: e.g. ``secretspec/myapp/production/DATABASE_URL``.
        """
        template = self.folder_template or DEFAULT_FOLDER_TEMPLATE
        folder = template.replace("{project}", project).replace("{profile}", profile)
        return f"{folder}/{key}"


class BitwardenOverrides(BaseSettings):
    """Call-time overrides read from the environment.

    Instantiate on every call so changes to the environment take effect
    without rebuilding the provider.
    """

    bitwarden_default_type: str | None = Field(
        default=None,
        description="Item type for new items (login, securenote, card, identity, sshkey)",
    )
    bitwarden_default_field: str | None = Field(
        default=None,
        description="Field to read and write instead of hint-based resolution",
    )
    bitwarden_organization: str | None = Field(
        default=None,
        description="Organization id, overrides the URI",
    )
    bitwarden_collection: str | None = Field(
        default=None,
        description="Collection id for new items, overrides the URI",
    )
    bws_access_token: str | None = Field(
        default=None,
        repr=False,
        description="Secrets Manager machine account access token",
    )

    model_config = SettingsConfigDict(
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def default_type(self) -> VaultItemType | None:
        """Parsed default item type; unparseable values are ignored."""
        if not self.bitwarden_default_type:
            return None
        return VaultItemType.from_name(self.bitwarden_default_type)
