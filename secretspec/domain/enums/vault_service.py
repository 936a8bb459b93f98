"""Bitwarden service variants reachable through one provider family."""

from enum import Enum


class VaultService(str, Enum):
    """Which Bitwarden backend a configuration talks to.

    The URI scheme selects the variant: ``bitwarden://`` routes to the
    Password Manager, ``bws://`` to Secrets Manager.
    """

    PASSWORD_MANAGER = "password_manager"
    """Typed-item vault driven by the ``bw`` CLI.

    Items are Login, SecureNote, Card, Identity or SshKey records with
    custom fields.
    """

    SECRETS_MANAGER = "secrets_manager"
    """Flat key-value vault driven by the ``bws`` CLI.

    Secrets are scoped to projects and addressed by key.
    """

    @property
    def scheme(self) -> str:
        """URI scheme that selects this variant."""
        if self is VaultService.PASSWORD_MANAGER:
            return "bitwarden"
        return "bws"

    @property
    def display_name(self) -> str:
        """Human-readable service name for messages."""
        if self is VaultService.PASSWORD_MANAGER:
            return "Bitwarden Password Manager"
        return "Bitwarden Secrets Manager"
