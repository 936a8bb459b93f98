"""Result types for railway-oriented programming.

Provider operations return a Result instead of raising. Backend failures
(missing CLI, locked vault, malformed JSON) are values the caller matches on.

Usage:
    def lookup(key: str) -> Result[str, ProviderError]:
        if key not in store:
            return Failure(error=ProviderCommandError(...))
        return Success(value=store[key])

    match lookup("API_KEY"):
        case Success(value=value):
            ...
        case Failure(error=error):
            ...
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type


@dataclass(frozen=True, slots=True, kw_only=True)
class Success(Generic[T]):
    """Represents a successful operation result.

    Attributes:
        value: The successful result value.
    """

    value: T


@dataclass(frozen=True, slots=True, kw_only=True)
class Failure(Generic[E]):
    """Represents a failed operation result.

    Attributes:
        error: The error that occurred.
    """

    error: E


type Result[T, E] = Success[T] | Failure[E]
