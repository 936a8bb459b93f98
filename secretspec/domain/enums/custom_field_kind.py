"""Custom field kinds.

Integer values match the ``type`` of entries in an item's ``fields`` list.
Linked fields (type 3) reference other item properties and carry no value
of their own, so they are not modeled.
"""

from enum import IntEnum

HIDDEN_FIELD_MARKERS: tuple[str, ...] = (
    "password",
    "secret",
    "token",
    "key",
    "value",
    "code",
    "cvv",
    "cvc",
)
"""Substrings that make a newly created custom field hidden."""


class CustomFieldKind(IntEnum):
    """Kind of a free-form custom field."""

    TEXT = 0
    HIDDEN = 1
    BOOLEAN = 2

    @classmethod
    def for_field_name(cls, name: str) -> "CustomFieldKind":
        """Infer the kind for a new custom field from its name.

        Args:
            name: Custom field name.

        Returns:
            HIDDEN if the name contains a sensitive marker, else TEXT.
        """
        lowered = name.lower()
        if any(marker in lowered for marker in HIDDEN_FIELD_MARKERS):
            return cls.HIDDEN
        return cls.TEXT
