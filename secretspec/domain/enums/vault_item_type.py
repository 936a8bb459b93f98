"""Password Manager item types.

Integer values match the ``type`` tag of the Bitwarden item JSON.
"""

from enum import IntEnum

_NAME_ALIASES: dict[str, str] = {
    "login": "LOGIN",
    "securenote": "SECURE_NOTE",
    "secure_note": "SECURE_NOTE",
    "note": "SECURE_NOTE",
    "card": "CARD",
    "identity": "IDENTITY",
    "sshkey": "SSH_KEY",
    "ssh_key": "SSH_KEY",
    "ssh": "SSH_KEY",
}


class VaultItemType(IntEnum):
    """Password Manager item type tag."""

    LOGIN = 1
    SECURE_NOTE = 2
    CARD = 3
    IDENTITY = 4
    SSH_KEY = 5

    @classmethod
    def from_name(cls, name: str) -> "VaultItemType | None":
        """Parse a user-supplied type name (case-insensitive).

        Args:
            name: Type name from a URI query or environment override,
                e.g. ``"login"``, ``"Note"``, ``"ssh_key"``.

        Returns:
            Matching item type, or None when the name is not recognized.
        """
        member = _NAME_ALIASES.get(name.strip().lower())
        return cls[member] if member else None

    @classmethod
    def from_tag(cls, tag: object) -> "VaultItemType | None":
        """Parse the numeric ``type`` tag of an item document."""
        if isinstance(tag, bool) or not isinstance(tag, int):
            return None
        try:
            return cls(tag)
        except ValueError:
            return None

    @property
    def slug(self) -> str:
        """Canonical lower-case name (``login``, ``securenote``, ...)."""
        return self.name.lower().replace("_", "")
