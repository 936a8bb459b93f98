"""Base error type carried by Failure results.

Provider operations never raise for backend problems; they return
``Failure(error=...)`` holding a DomainError subclass. Callers branch on the
subclass or on ``code``.

Usage:
    @dataclass(frozen=True, slots=True, kw_only=True)
    class VaultSealedError(DomainError):
        vault_id: str
"""

from dataclasses import dataclass
from typing import Any

from secretspec.core.enums import ErrorCode


@dataclass(frozen=True, slots=True, kw_only=True)
class DomainError:
    """Error value (not an Exception).

    Attributes:
        code: Machine-readable ErrorCode.
        message: Text fit to show the person running the command.
        details: Extra context such as the failing operation.
    """

    code: ErrorCode
    message: str
    details: dict[str, Any] | None = None

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"
