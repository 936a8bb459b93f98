"""Core enums package.

Usage:
    from secretspec.core.enums import ErrorCode, Environment
"""

from secretspec.core.enums.environment import Environment
from secretspec.core.enums.error_code import ErrorCode

__all__ = ["ErrorCode", "Environment"]
