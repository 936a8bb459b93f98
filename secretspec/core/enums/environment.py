"""Runtime environment types.

Used by Settings to pick the log renderer.

Environments:
- DEVELOPMENT: local use, human-readable console logs
- TESTING: automated test execution, JSON logs
- CI: continuous integration, JSON logs
- PRODUCTION: deployed use
"""

from enum import Enum


class Environment(str, Enum):
    """Runtime environment types."""

    DEVELOPMENT = "development"
    TESTING = "testing"
    CI = "ci"
    PRODUCTION = "production"
