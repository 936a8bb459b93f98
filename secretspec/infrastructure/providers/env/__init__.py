"""Environment variable provider."""

from secretspec.infrastructure.providers.env.env_provider import EnvProvider

__all__ = ["EnvProvider"]
