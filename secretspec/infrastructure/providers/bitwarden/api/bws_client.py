"""Bitwarden Secrets Manager CLI client.

Thin wrapper over the ``bws`` executable. Authentication is a machine
account access token exported to the child as ``BWS_ACCESS_TOKEN``.
"""

from collections.abc import Mapping
from typing import Any

from secretspec.core.constants import BWS_RATE_LIMIT_RETRY_AFTER
from secretspec.core.enums import ErrorCode
from secretspec.core.result import Result
from secretspec.domain.errors import (
    ProviderAccessDeniedError,
    ProviderAuthenticationError,
    ProviderError,
    ProviderRateLimitError,
)
from secretspec.infrastructure.providers.base_cli_client import BaseCLIClient

AUTH_MARKERS = ("Access token is required", "Unauthorized")
RATE_LIMIT_MARKER = "Internal error: Failed to parse IdentityTokenResponse"
NOT_FOUND_MARKERS = ("Resource not found", "Not found")
ALREADY_EXISTS_MARKER = "already exists"

AUTH_MESSAGE = (
    "Bitwarden Secrets Manager authentication required. Please set the "
    "BWS_ACCESS_TOKEN environment variable with your machine account access token."
)
RATE_LIMIT_MESSAGE = (
    "Bitwarden Secrets Manager rate limit exceeded. Please wait ~20 seconds "
    "and try again. Consider using state files to reduce API calls."
)
ACCESS_DENIED_MESSAGE = (
    "Bitwarden Secrets Manager access denied. Please verify:\n"
    "1. Machine account has read/write access to the specified project\n"
    "2. Project ID is correct\n"
    "3. Organization permissions are properly configured\n"
    "\n"
    "Resource not found errors often indicate permission issues rather than "
    "missing resources."
)


class BwsClient(BaseCLIClient):
    """Client for the Bitwarden Secrets Manager CLI (``bws``)."""

    display_name = "Bitwarden Secrets Manager CLI (bws)"
    install_guidance = (
        "To install it:\n"
        "  - Cargo: cargo install bws\n"
        "  - Script: curl -sSL https://bitwarden.com/secrets/install | sh\n"
        "  - Download: https://github.com/bitwarden/sdk-sm/releases\n"
        "\n"
        "After installation, set BWS_ACCESS_TOKEN environment variable with "
        "your access token."
    )

    def __init__(
        self,
        *,
        executable: str = "bws",
        access_token: str | None = None,
        provider_name: str = "bitwarden",
    ) -> None:
        """Initialize bws client.

        Args:
            executable: ``bws`` executable name or path.
            access_token: Token exported as ``BWS_ACCESS_TOKEN``; when None
                the child inherits the parent's environment.
            provider_name: Provider identifier for errors.
        """
        super().__init__(
            executable=executable,
            tool_name="bws",
            provider_name=provider_name,
        )
        self._access_token = access_token

    def _child_env(self) -> Mapping[str, str]:
        if self._access_token:
            return {"BWS_ACCESS_TOKEN": self._access_token}
        return {}

    def _classify_failure(
        self,
        *,
        stderr: str,
        exit_code: int,
        operation: str,
    ) -> ProviderError:
        details = {"operation": operation}
        if any(marker in stderr for marker in AUTH_MARKERS):
            return ProviderAuthenticationError(
                code=ErrorCode.PROVIDER_AUTHENTICATION_FAILED,
                message=AUTH_MESSAGE,
                provider_name=self._provider_name,
                details=details,
            )
        if RATE_LIMIT_MARKER in stderr:
            return ProviderRateLimitError(
                code=ErrorCode.PROVIDER_RATE_LIMITED,
                message=RATE_LIMIT_MESSAGE,
                provider_name=self._provider_name,
                retry_after=BWS_RATE_LIMIT_RETRY_AFTER,
                details=details,
            )
        if any(marker in stderr for marker in NOT_FOUND_MARKERS):
            return ProviderAccessDeniedError(
                code=ErrorCode.PROVIDER_ACCESS_DENIED,
                message=ACCESS_DENIED_MESSAGE,
                provider_name=self._provider_name,
                details=details,
            )
        return self._command_error(
            message=f"Bitwarden Secrets Manager CLI error: {stderr.strip()}",
            stderr=stderr,
            exit_code=exit_code,
            operation=operation,
        )

    def list_secrets(
        self, project_id: str | None = None
    ) -> Result[list[Any], ProviderError]:
        """List secrets visible to the token, optionally within one project."""
        args = ["secret", "list"]
        if project_id:
            args.append(project_id)
        return self._run_json_list(args, operation="list_secrets")

    def create_secret(
        self,
        *,
        key: str,
        value: str,
        project_id: str,
        note: str,
    ) -> Result[dict[str, Any], ProviderError]:
        """Create a secret in ``project_id``.

        Positionals follow ``--`` and the note uses ``--note=`` so values
        starting with ``-`` are not parsed as flags.

        Returns:
            Success(dict): The created secret.
            Failure(ProviderCommandError): Includes the "already exists"
                case; check ``is_already_exists``.
        """
        return self._run_json_object(
            ["secret", "create", f"--note={note}", "--", key, value, project_id],
            operation="create_secret",
        )

    def edit_secret(
        self,
        secret_id: str,
        *,
        key: str,
        value: str,
    ) -> Result[dict[str, Any], ProviderError]:
        """Overwrite the key and value of secret ``secret_id``."""
        return self._run_json_object(
            ["secret", "edit", f"--key={key}", f"--value={value}", "--", secret_id],
            operation="edit_secret",
        )

    @staticmethod
    def is_already_exists(error: ProviderError) -> bool:
        """Whether a create failure means the key is already taken."""
        return ALREADY_EXISTS_MARKER in error.message
