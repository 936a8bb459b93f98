"""Provider factory (registry-driven).

Turns a provider string into a live SecretProviderProtocol instance:

    1. Parse the string into a ProviderUri (bare names become scheme-only).
    2. Look up the scheme in PROVIDER_REGISTRY.
    3. Lazily import the adapter and let it parse its own configuration.

The registry is static: adding a backend means adding a ProviderMetadata
entry and a ``case`` below. Tests fail if the two drift apart.

Usage:
    factory = ProviderFactory()
    match factory.create("bws://e325ea69-..."):
        case Success(value=provider):
            provider.get("myapp", "API_KEY", "default")
        case Failure(error=error):
            print(error.message)
"""

import structlog

from secretspec.core.config import Settings
from secretspec.core.enums import ErrorCode
from secretspec.core.result import Failure, Result, Success
from secretspec.domain.errors import ProviderError, ProviderNotFoundError
from secretspec.domain.protocols import SecretProviderProtocol
from secretspec.domain.providers.registry import (
    get_all_schemes,
    get_provider_for_scheme,
    suggest_scheme,
)
from secretspec.domain.value_objects import ProviderUri

logger = structlog.get_logger(__name__)


class ProviderFactory:
    """Create secret providers from URIs.

    Attributes:
        _settings: Application settings (CLI executable names).
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or Settings()

    def create(self, uri: str) -> Result[SecretProviderProtocol, ProviderError]:
        """Create the provider addressed by ``uri``.

        Args:
            uri: Provider string (``env``, ``dotenv:.env``, ``bws://id``).

        Returns:
            Success(SecretProviderProtocol): Configured provider.
            Failure(ProviderNotFoundError): Unknown scheme, with a
                suggestion for common misspellings.
            Failure(ProviderConfigurationError): Malformed URI or
                provider-specific configuration error.
        """
        parse_result = ProviderUri.parse(uri)
        if isinstance(parse_result, Failure):
            return parse_result
        parsed = parse_result.value

        metadata = get_provider_for_scheme(parsed.scheme)
        if metadata is None:
            return Failure(error=self._not_found(parsed.written_scheme))

        logger.debug("provider_creating", provider=metadata.slug, scheme=parsed.scheme)

        match metadata.slug:
            case "env":
                from secretspec.infrastructure.providers.env import EnvProvider

                return Success(value=EnvProvider())

            case "dotenv":
                from secretspec.infrastructure.providers.dotenv_file import (
                    DotenvProvider,
                )

                return Success(value=DotenvProvider.from_uri(parsed))

            case "bitwarden":
                from secretspec.infrastructure.providers.bitwarden import (
                    BitwardenProvider,
                )

                return BitwardenProvider.from_uri(
                    parsed,
                    bw_executable=self._settings.bw_executable,
                    bws_executable=self._settings.bws_executable,
                )

            case _:
                raise ValueError(
                    f"Provider '{metadata.slug}' in registry but no factory defined."
                )

    def supports(self, uri: str) -> bool:
        """Whether ``uri`` names a registered scheme."""
        parse_result = ProviderUri.parse(uri)
        if isinstance(parse_result, Failure):
            return False
        return get_provider_for_scheme(parse_result.value.scheme) is not None

    def list_supported(self) -> list[str]:
        """All registered schemes."""
        return get_all_schemes()

    def _not_found(self, scheme: str) -> ProviderNotFoundError:
        suggestion = suggest_scheme(scheme)
        message = f"Provider not found: '{scheme}'."
        if suggestion and get_provider_for_scheme(suggestion) is not None:
            message = f"{message} Use '{suggestion}' instead."
        elif suggestion:
            message = (
                f"{message} '{suggestion}' is the correct name, but that "
                "provider is not included in this build."
            )
        message = f"{message} Supported schemes: {', '.join(get_all_schemes())}."
        logger.warning("provider_not_found", scheme=scheme, suggestion=suggestion)
        return ProviderNotFoundError(
            code=ErrorCode.PROVIDER_NOT_FOUND,
            message=message,
            provider_name="registry",
            scheme=scheme,
            suggestion=suggestion,
        )
