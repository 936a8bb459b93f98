"""Opaque secret value.

Immutable wrapper that keeps plaintext out of logs, tracebacks and reprs.
Reading the plaintext requires an explicit ``expose_secret()`` call.

Python strings cannot be wiped from memory, so the wrapper guarantees
non-disclosure through string conversion only; it does not zero memory.
"""

import hmac
from dataclasses import dataclass, field

MASK = "**********"


@dataclass(frozen=True, slots=True, eq=False)
class SecretValue:
    """Opaque secret string.

    Attributes:
        _secret: The plaintext (never rendered by str/repr/format).

    Example:
        >>> value = SecretValue("hunter2")
        >>> str(value)
        '**********'
        >>> value.expose_secret()
        'hunter2'
    """

    _secret: str = field(repr=False)

    def __post_init__(self) -> None:
        """Validate the wrapped payload.

        Raises:
            ValueError: If the payload is not a string.
        """
        if not isinstance(self._secret, str):
            raise ValueError("SecretValue payload must be a string")

    def expose_secret(self) -> str:
        """Return the plaintext.

        Returns:
            str: The wrapped secret.
        """
        return self._secret

    def __str__(self) -> str:
        """Return masked value."""
        return MASK

    def __repr__(self) -> str:
        """Return masked representation."""
        return f"SecretValue({MASK})"

    def __format__(self, format_spec: str) -> str:
        """Format as the mask regardless of spec."""
        return format(MASK, format_spec)

    def __eq__(self, other: object) -> bool:
        """Compare two secrets in constant time."""
        if not isinstance(other, SecretValue):
            return NotImplemented
        return hmac.compare_digest(
            self._secret.encode("utf-8"), other._secret.encode("utf-8")
        )

    __hash__ = None  # type: ignore[assignment]
