"""Core errors package.

Usage:
    from secretspec.core.errors import DomainError
"""

from secretspec.core.errors.domain_error import DomainError

__all__ = ["DomainError"]
