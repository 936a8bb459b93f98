"""Dotenv file provider.

Reads and writes a flat ``.env`` file with python-dotenv. Keys are stored
as-is; project and profile are ignored.

URI forms:
    dotenv                      ./.env
    dotenv:.env.production      relative path
    dotenv:/abs/path/.env       absolute path
    dotenv://dir/sub/.env       host becomes the first path segment
    dotenv:///abs/path/.env     absolute path with empty authority
"""

from pathlib import Path

import structlog
from dotenv import dotenv_values, set_key

from secretspec.core.constants import DEFAULT_DOTENV_PATH, LOCAL_HOSTS
from secretspec.core.enums import ErrorCode
from secretspec.core.result import Failure, Result, Success
from secretspec.domain.errors import ProviderCommandError, ProviderError
from secretspec.domain.value_objects import ProviderUri, SecretValue

logger = structlog.get_logger(__name__)

PROVIDER_NAME = "dotenv"


class DotenvProvider:
    """Secrets stored in a dotenv file.

    Attributes:
        path: File read and written by this provider.
    """

    def __init__(self, path: str | Path = DEFAULT_DOTENV_PATH) -> None:
        self.path = Path(path)

    @classmethod
    def from_uri(cls, uri: ProviderUri) -> "DotenvProvider":
        """Build a provider from a parsed ``dotenv`` URI."""
        path = uri.path
        if uri.has_authority and uri.host and uri.host not in LOCAL_HOSTS:
            path = f"{uri.host}{path}"
        return cls(path or DEFAULT_DOTENV_PATH)

    def name(self) -> str:
        return PROVIDER_NAME

    def allows_set(self) -> bool:
        return True

    def get(
        self, project: str, key: str, profile: str
    ) -> Result[SecretValue | None, ProviderError]:
        """Read ``key`` from the file. A missing file reads as empty."""
        if not self.path.is_file():
            return Success(value=None)

        try:
            values = dotenv_values(self.path)
        except (OSError, UnicodeDecodeError) as e:
            return Failure(error=self._io_error("read", e))

        value = values.get(key)
        if value is None:
            return Success(value=None)
        return Success(value=SecretValue(value))

    def set(
        self, project: str, key: str, value: SecretValue, profile: str
    ) -> Result[None, ProviderError]:
        """Write ``key``, creating the file and its directory if needed."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.touch(exist_ok=True)
            set_key(self.path, key, value.expose_secret(), quote_mode="always")
        except OSError as e:
            return Failure(error=self._io_error("write", e))

        logger.debug("dotenv_secret_set", key=key, path=str(self.path))
        return Success(value=None)

    def _io_error(self, operation: str, error: Exception) -> ProviderCommandError:
        logger.error(
            "dotenv_io_failed",
            operation=operation,
            path=str(self.path),
            error=str(error),
        )
        return ProviderCommandError(
            code=ErrorCode.PROVIDER_COMMAND_FAILED,
            message=f"Failed to {operation} {self.path}: {error}",
            provider_name=PROVIDER_NAME,
            details={"path": str(self.path)},
        )
