"""
Configuration management using Pydantic Settings.

Type-safe process configuration loaded from environment variables (prefix
``SECRETSPEC_``) or a local ``.env`` file.

Architecture:
- Flat Settings structure (no nesting)
- Type validation via Pydantic
- Cached per process via get_settings()

Call-time overrides for the Bitwarden adapter live next to that adapter
(``BitwardenOverrides``) because they must be re-read on every call.

Usage:
    from secretspec.core.config import get_settings

    settings = get_settings()
    if settings.is_testing:
        ...
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from secretspec.core.enums import Environment


class Settings(BaseSettings):
    """
    Process settings (flat structure).

    Configuration precedence:
        1. Environment variables (SECRETSPEC_*)
        2. .env file in the working directory
        3. Default values

    No subprocess timeout is configured: a spawned CLI runs to completion
    and cancellation is owned by whoever supervises the calling process.
    """

    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Runtime environment (development, testing, ci, production)",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    bw_executable: str = Field(
        default="bw",
        description="Bitwarden Password Manager CLI executable name or path",
    )
    bws_executable: str = Field(
        default="bws",
        description="Bitwarden Secrets Manager CLI executable name or path",
    )

    model_config = SettingsConfigDict(
        env_prefix="SECRETSPEC_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """
        Normalize and validate the log level name.

        Args:
            v: Log level name.

        Returns:
            str: Upper-cased log level name.

        Raises:
            ValueError: If the level is not a standard logging level.
        """
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unsupported log level: {v}")
        return level

    @property
    def is_testing(self) -> bool:
        return self.environment == Environment.TESTING

    @property
    def is_ci(self) -> bool:
        return self.environment == Environment.CI

    @property
    def wants_json_logs(self) -> bool:
        """Machine-readable logs under test runners and CI."""
        return self.is_testing or self.is_ci


@lru_cache
def get_settings() -> Settings:
    """Settings read once per process; ``cache_clear()`` re-reads them."""
    return Settings()
