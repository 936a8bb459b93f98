"""Bitwarden Password Manager CLI client.

Thin wrapper over the ``bw`` executable. Each method runs exactly one
subcommand and returns parsed JSON. Item documents for ``create``/``edit``
travel base64-encoded on stdin.

Session handling is left to ``bw`` itself: callers export ``BW_SESSION``
after ``bw unlock``.
"""

from collections.abc import Mapping
from typing import Any

from secretspec.core.enums import ErrorCode
from secretspec.core.result import Failure, Result, Success
from secretspec.domain.errors import ProviderAuthenticationError, ProviderError
from secretspec.infrastructure.providers.base_cli_client import BaseCLIClient

NOT_LOGGED_IN_MARKER = "You are not logged in"
VAULT_LOCKED_MARKER = "Vault is locked"

NOT_LOGGED_IN_MESSAGE = (
    "Bitwarden authentication required. Please run 'bw login' first."
)
VAULT_LOCKED_MESSAGE = (
    "Bitwarden vault is locked. Please run 'bw unlock' and set the "
    "BW_SESSION environment variable."
)
NOT_UNLOCKED_MESSAGE = (
    "Bitwarden authentication required. Please run 'bw login' and "
    "'bw unlock', then set the BW_SESSION environment variable."
)


class BwClient(BaseCLIClient):
    """Client for the Bitwarden Password Manager CLI (``bw``)."""

    display_name = "Bitwarden CLI (bw)"
    install_guidance = (
        "To install it:\n"
        "  - npm: npm install -g @bitwarden/cli\n"
        "  - Homebrew: brew install bitwarden-cli\n"
        "  - Chocolatey: choco install bitwarden-cli\n"
        "  - Download: https://bitwarden.com/help/cli/\n"
        "\n"
        "After installation, run 'bw login' and 'bw unlock' to authenticate."
    )

    def __init__(
        self,
        *,
        executable: str = "bw",
        server: str | None = None,
        provider_name: str = "bitwarden",
    ) -> None:
        """Initialize bw client.

        Args:
            executable: ``bw`` executable name or path.
            server: Self-hosted server URL exported as ``BW_SERVER``.
            provider_name: Provider identifier for errors.
        """
        super().__init__(
            executable=executable,
            tool_name="bw",
            provider_name=provider_name,
        )
        self._server = server

    def _child_env(self) -> Mapping[str, str]:
        if self._server:
            return {"BW_SERVER": self._server}
        return {}

    def _classify_failure(
        self,
        *,
        stderr: str,
        exit_code: int,
        operation: str,
    ) -> ProviderError:
        if NOT_LOGGED_IN_MARKER in stderr:
            return self._auth_error(NOT_LOGGED_IN_MESSAGE, operation)
        if VAULT_LOCKED_MARKER in stderr:
            return self._auth_error(VAULT_LOCKED_MESSAGE, operation)
        return super()._classify_failure(
            stderr=stderr, exit_code=exit_code, operation=operation
        )

    def _auth_error(self, message: str, operation: str) -> ProviderAuthenticationError:
        return ProviderAuthenticationError(
            code=ErrorCode.PROVIDER_AUTHENTICATION_FAILED,
            message=message,
            provider_name=self._provider_name,
            details={"operation": operation},
        )

    def ensure_unlocked(self) -> Result[None, ProviderError]:
        """Check that the vault is unlocked.

        Returns:
            Success(None): ``bw status`` reports ``unlocked``.
            Failure(ProviderAuthenticationError): Not logged in or locked.
            Failure(ProviderError): Any other transport failure.
        """
        status_result = self._run_json_object(["status"], operation="status")
        if isinstance(status_result, Failure):
            return status_result

        status = status_result.value.get("status")
        if status != "unlocked":
            self._logger.info("bw_vault_not_unlocked", status=status)
            return Failure(error=self._auth_error(NOT_UNLOCKED_MESSAGE, "status"))
        return Success(value=None)

    def list_items(
        self,
        *,
        search: str | None = None,
        organization_id: str | None = None,
    ) -> Result[list[Any], ProviderError]:
        """List vault items, optionally filtered by ``bw``'s own search.

        Args:
            search: Search term passed as ``--search``.
            organization_id: Restrict to one organization.

        Returns:
            Success(list): Raw item objects in listing order.
            Failure(ProviderError): Transport or decode failure.
        """
        args = ["list", "items"]
        if search is not None:
            args.extend(["--search", search])
        args.extend(_organization_args(organization_id))
        return self._run_json_list(args, operation="list_items")

    def get_item(
        self,
        item_id: str,
        *,
        organization_id: str | None = None,
    ) -> Result[dict[str, Any], ProviderError]:
        """Fetch one item as a full JSON document."""
        args = ["get", "item", item_id, *_organization_args(organization_id)]
        return self._run_json_object(args, operation="get_item")

    def create_item(
        self,
        document: Mapping[str, Any],
        *,
        organization_id: str | None = None,
    ) -> Result[dict[str, Any], ProviderError]:
        """Create an item from ``document``.

        Returns:
            Success(dict): The created item as echoed by ``bw``.
            Failure(ProviderError): Transport or decode failure.
        """
        args = ["create", "item", *_organization_args(organization_id)]
        return self._run_json_object(
            args, operation="create_item", stdin=self.encode_document(document)
        )

    def edit_item(
        self,
        item_id: str,
        document: Mapping[str, Any],
        *,
        organization_id: str | None = None,
    ) -> Result[dict[str, Any], ProviderError]:
        """Replace item ``item_id`` with ``document``."""
        args = ["edit", "item", item_id, *_organization_args(organization_id)]
        return self._run_json_object(
            args, operation="edit_item", stdin=self.encode_document(document)
        )


def _organization_args(organization_id: str | None) -> list[str]:
    if organization_id:
        return ["--organizationid", organization_id]
    return []
