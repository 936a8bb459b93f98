"""Secret provider protocol (port).

Every backend implements this contract: fetch or upsert one secret under a
logical (project, key, profile) address.

Implementations are NOT required to inherit (PEP 544 structural typing).

Result semantics:
    - ``get`` returns Success(None) when the secret does not exist. Absence
      is not an error.
    - Backend, tool and configuration problems are Failure(ProviderError).

Usage:
    provider: SecretProviderProtocol = BitwardenProvider(config)

    match provider.get("myapp", "DATABASE_URL", "production"):
        case Success(value=None):
            ...  # not found
        case Success(value=secret):
            use(secret.expose_secret())
        case Failure(error=error):
            ...
"""

from typing import Protocol

from secretspec.core.result import Result
from secretspec.domain.errors import ProviderError
from secretspec.domain.value_objects import SecretValue


class SecretProviderProtocol(Protocol):
    """Capability contract for secret backends."""

    def name(self) -> str:
        """Provider slug used in messages and logs (``bitwarden``, ``env``)."""
        ...

    def allows_set(self) -> bool:
        """Whether ``set`` can write to this backend."""
        ...

    def get(
        self, project: str, key: str, profile: str
    ) -> Result[SecretValue | None, ProviderError]:
        """Fetch a secret.

        Args:
            project: Project name.
            key: Secret name.
            profile: Profile name (``default``, ``production``, ...).

        Returns:
            Success(SecretValue): The secret.
            Success(None): No such secret.
            Failure(ProviderError): Backend failure.
        """
        ...

    def set(
        self, project: str, key: str, value: SecretValue, profile: str
    ) -> Result[None, ProviderError]:
        """Create or update a secret.

        Args:
            project: Project name.
            key: Secret name.
            value: Secret to store.
            profile: Profile name.

        Returns:
            Success(None): Stored.
            Failure(ProviderError): Backend failure or read-only provider.
        """
        ...
