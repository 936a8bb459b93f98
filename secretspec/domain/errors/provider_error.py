"""Provider error types for the secret provider contract.

These errors define the failure cases that provider implementations return
from ``get``/``set`` and from URI parsing.

Architecture:
- Inherit from DomainError (core layer)
- Used in Result types (railway-oriented programming)
- Infrastructure providers classify CLI failures into these types

Usage:
    from secretspec.domain.errors import ProviderError, ProviderAuthenticationError

    def get(...) -> Result[SecretValue | None, ProviderError]:
        if not unlocked:
            return Failure(error=ProviderAuthenticationError(...))
"""

from dataclasses import dataclass
from typing import Any

from secretspec.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class ProviderError(DomainError):
    """Base secret provider error.

    Attributes:
        code: Domain ErrorCode.
        message: Human-readable message.
        provider_name: Name of the provider (bitwarden, env, dotenv).
        details: Additional context (operation, exit code).
    """

    provider_name: str
    details: dict[str, Any] | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class ProviderNotFoundError(ProviderError):
    """No provider is registered for the requested scheme.

    Attributes:
        scheme: The exact unrecognized scheme string.
        suggestion: Correct scheme for a known misspelling, if any.
    """

    scheme: str
    suggestion: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class ProviderConfigurationError(ProviderError):
    """Provider URI or configuration is unusable.

    Raised when:
    - The URI string is empty or malformed
    - The scheme does not belong to the parsing provider
    - A mandatory field (Secrets Manager project id) is missing

    Never spawns a process.
    """


@dataclass(frozen=True, slots=True, kw_only=True)
class ProviderToolNotFoundError(ProviderError):
    """The backend's command-line tool is not installed.

    Attributes:
        executable: Executable that could not be spawned.
    """

    executable: str


@dataclass(frozen=True, slots=True, kw_only=True)
class ProviderAuthenticationError(ProviderError):
    """Backend requires authentication.

    Raised when:
    - The Password Manager CLI is not logged in or the vault is locked
    - The Secrets Manager access token is missing or rejected

    Recovery: follow the remediation in ``message``.
    """


@dataclass(frozen=True, slots=True, kw_only=True)
class ProviderRateLimitError(ProviderError):
    """Backend rate limit exceeded.

    Attributes:
        retry_after: Seconds to wait before retrying.
    """

    retry_after: int | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class ProviderAccessDeniedError(ProviderError):
    """Backend reported "not found" for a resource the caller addressed.

    Usually a permission problem (wrong project, token without access) rather
    than a missing resource. The message enumerates likely causes.
    """


@dataclass(frozen=True, slots=True, kw_only=True)
class ProviderCommandError(ProviderError):
    """Generic backend failure.

    Attributes:
        exit_code: Process exit status, if a process ran.
        stderr: Raw stderr text.
    """

    exit_code: int | None = None
    stderr: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class ProviderInvalidResponseError(ProviderError):
    """Backend returned output that could not be decoded.

    Raised when:
    - Output is not valid UTF-8
    - Output is not valid JSON or not the expected shape
    - An item carries an unknown type tag

    Attributes:
        response_body: Truncated raw output for debugging.
    """

    response_body: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class ProviderReadOnlyError(ProviderError):
    """``set`` was called on a provider that does not allow writes."""
