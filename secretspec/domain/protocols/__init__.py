"""Domain protocols (ports).

Usage:
    from secretspec.domain.protocols import SecretProviderProtocol
"""

from secretspec.domain.protocols.logger_protocol import LoggerProtocol
from secretspec.domain.protocols.provider_factory_protocol import (
    ProviderFactoryProtocol,
)
from secretspec.domain.protocols.secret_provider_protocol import (
    SecretProviderProtocol,
)

__all__ = ["LoggerProtocol", "ProviderFactoryProtocol", "SecretProviderProtocol"]
