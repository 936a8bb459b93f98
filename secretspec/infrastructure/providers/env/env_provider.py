"""Environment variable provider.

Implements SecretProviderProtocol over the process environment. Read-only:
the environment of the calling process is not a place to persist secrets.

File: env_provider.py → class EnvProvider (PEP 8 naming)
"""

import os

from secretspec.core.enums import ErrorCode
from secretspec.core.result import Failure, Result, Success
from secretspec.domain.errors import ProviderError, ProviderReadOnlyError
from secretspec.domain.value_objects import SecretValue

PROVIDER_NAME = "env"


class EnvProvider:
    """Secrets from environment variables.

    The key is the variable name as-is; project and profile are ignored.

    Example:
        >>> provider = EnvProvider()
        >>> provider.get("myapp", "DATABASE_URL", "default")
        Success(value=SecretValue(**********))
    """

    def name(self) -> str:
        return PROVIDER_NAME

    def allows_set(self) -> bool:
        return False

    def get(
        self, project: str, key: str, profile: str
    ) -> Result[SecretValue | None, ProviderError]:
        """Read variable ``key``; unset variables are Success(None)."""
        value = os.environ.get(key)
        if value is None:
            return Success(value=None)
        return Success(value=SecretValue(value))

    def set(
        self, project: str, key: str, value: SecretValue, profile: str
    ) -> Result[None, ProviderError]:
        """Always fails with ProviderReadOnlyError."""
        return Failure(
            error=ProviderReadOnlyError(
                code=ErrorCode.PROVIDER_READ_ONLY,
                message=(
                    "Environment variable provider is read-only. "
                    f"Set {key} in your shell or use a writable provider."
                ),
                provider_name=PROVIDER_NAME,
                details={"key": key},
            )
        )
