"""Dotenv file provider."""

from secretspec.infrastructure.providers.dotenv_file.dotenv_provider import (
    DotenvProvider,
)

__all__ = ["DotenvProvider"]
