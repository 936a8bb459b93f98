"""Provider Registry - single source of truth for provider metadata.

Registry Structure:
    - ProviderMetadata: Dataclass describing one provider family
    - PROVIDER_REGISTRY: List of all provider metadata entries
    - SCHEME_SUGGESTIONS: Known misspellings and the scheme they meant
    - Helper Functions: Lookup by slug or scheme, statistics

The scheme index is built lazily on first lookup and is read-only
afterwards. Providers cannot be registered at runtime.

Usage:
    from secretspec.domain.providers.registry import get_provider_for_scheme

    metadata = get_provider_for_scheme("bws")
    metadata.slug  # "bitwarden"

Adding a provider:
    1. Add a ProviderMetadata entry here
    2. Implement the provider under secretspec/infrastructure/providers/{slug}/
    3. Add a factory case in secretspec/infrastructure/providers/provider_factory.py
    4. tests/unit/test_provider_registry_compliance.py enforces the rest
"""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from types import MappingProxyType


class ProviderStorage(str, Enum):
    """Where a provider keeps its secrets."""

    ENVIRONMENT = "environment"
    """Process environment variables (read-only)."""

    FILE = "file"
    """A local plain-text file."""

    VAULT = "vault"
    """A remote vault reached through a command-line tool."""


@dataclass(frozen=True, kw_only=True)
class ProviderMetadata:
    """Metadata for a single provider family.

    Attributes:
        slug: Unique provider identifier, also the factory dispatch key.
        display_name: User-facing provider name.
        description: One-line summary for help output.
        storage: Where secrets live.
        schemes: URI schemes routed to this provider. The first is canonical.
        examples: Example provider strings for documentation and tests.
        allows_set: Whether the provider supports writes.
        required_tools: External executables the provider spawns.
        documentation_url: Upstream documentation.
    """

    slug: str
    display_name: str
    description: str
    storage: ProviderStorage
    schemes: tuple[str, ...]
    examples: tuple[str, ...] = ()
    allows_set: bool = True
    required_tools: tuple[str, ...] = ()
    documentation_url: str | None = None


# =============================================================================
# Provider Registry (Single Source of Truth)
# =============================================================================

PROVIDER_REGISTRY: list[ProviderMetadata] = [
    ProviderMetadata(
        slug="env",
        display_name="Environment Variables",
        description="Read secrets from process environment variables",
        storage=ProviderStorage.ENVIRONMENT,
        schemes=("env",),
        examples=("env", "env:", "env://"),
        allows_set=False,
    ),
    ProviderMetadata(
        slug="dotenv",
        display_name="Dotenv File",
        description="Read and write secrets in a .env file",
        storage=ProviderStorage.FILE,
        schemes=("dotenv",),
        examples=("dotenv", "dotenv:.env.production", "dotenv:/etc/app/.env"),
        allows_set=True,
    ),
    ProviderMetadata(
        slug="bitwarden",
        display_name="Bitwarden",
        description="Bitwarden Password Manager (bw) and Secrets Manager (bws)",
        storage=ProviderStorage.VAULT,
        schemes=("bitwarden", "bws"),
        examples=(
            "bitwarden://",
            "bitwarden://collection-id",
            "bitwarden://org@collection?type=card&field=code",
            "bws://project-id",
        ),
        allows_set=True,
        required_tools=("bw", "bws"),
        documentation_url="https://bitwarden.com/help/cli/",
    ),
]
"""Provider registry containing all provider metadata."""


SCHEME_SUGGESTIONS: dict[str, str] = {
    "1password": "onepassword",
    "bw": "bitwarden",
}
"""Common misspelled schemes and the scheme the user most likely meant."""


# =============================================================================
# Helper Functions
# =============================================================================


@lru_cache(maxsize=1)
def _scheme_index() -> Mapping[str, ProviderMetadata]:
    index: dict[str, ProviderMetadata] = {}
    for metadata in PROVIDER_REGISTRY:
        for scheme in metadata.schemes:
            if scheme in index:
                raise ValueError(
                    f"Scheme '{scheme}' registered by both "
                    f"'{index[scheme].slug}' and '{metadata.slug}'"
                )
            index[scheme] = metadata
    return MappingProxyType(index)


def get_provider_metadata(slug: str) -> ProviderMetadata | None:
    """Get provider metadata by slug.

    Args:
        slug: Provider identifier (e.g., "bitwarden", "env").

    Returns:
        ProviderMetadata if found, None otherwise.
    """
    return next((p for p in PROVIDER_REGISTRY if p.slug == slug), None)


def get_provider_for_scheme(scheme: str) -> ProviderMetadata | None:
    """Get the provider that handles a URI scheme.

    Args:
        scheme: URI scheme or bare provider name (case-insensitive).

    Returns:
        ProviderMetadata if the scheme is registered, None otherwise.

    Example:
        >>> get_provider_for_scheme("bws").slug
        'bitwarden'
    """
    return _scheme_index().get(scheme.lower())


def get_all_provider_slugs() -> list[str]:
    """Get all registered provider slugs in registry order."""
    return [p.slug for p in PROVIDER_REGISTRY]


def get_all_schemes() -> list[str]:
    """Get every registered scheme in registry order."""
    return list(_scheme_index())


def get_providers_by_storage(storage: ProviderStorage) -> list[ProviderMetadata]:
    """Get all providers that keep secrets in ``storage``."""
    return [p for p in PROVIDER_REGISTRY if p.storage == storage]


def suggest_scheme(scheme: str) -> str | None:
    """Suggest the intended scheme for a known misspelling.

    Args:
        scheme: Unrecognized scheme.

    Returns:
        Correct scheme name, or None when no suggestion is known.

    Example:
        >>> suggest_scheme("1password")
        'onepassword'
    """
    return SCHEME_SUGGESTIONS.get(scheme.lower())


def get_statistics() -> dict[str, int]:
    """Get provider registry statistics.

    Returns:
        Dictionary with counts:
            - total_providers: Registered provider families
            - total_schemes: Registered schemes
            - writable_providers: Providers that allow set
            - vault_providers: Providers backed by a remote vault
    """
    return {
        "total_providers": len(PROVIDER_REGISTRY),
        "total_schemes": len(get_all_schemes()),
        "writable_providers": len([p for p in PROVIDER_REGISTRY if p.allows_set]),
        "vault_providers": len(get_providers_by_storage(ProviderStorage.VAULT)),
    }
