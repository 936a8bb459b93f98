"""Unit tests for container factory functions.

Tests cover:
- get_logger() adapter selection based on environment
- get_provider_factory() singleton behavior
- get_provider() delegation to the factory

Architecture:
- Unit tests with patched settings and adapters
- Tests the composition root
"""

from unittest.mock import MagicMock, patch

import pytest

from secretspec.core.config import Settings
from secretspec.core.container import get_logger, get_provider, get_provider_factory
from secretspec.core.enums import Environment
from secretspec.core.result import Failure, Success
from secretspec.domain.errors import ProviderNotFoundError
from secretspec.infrastructure.providers.env import EnvProvider
from secretspec.infrastructure.providers.provider_factory import ProviderFactory


def settings_for(environment: Environment, log_level: str = "INFO") -> Settings:
    return Settings(_env_file=None, environment=environment, log_level=log_level)


@pytest.mark.unit
class TestGetLoggerContainer:
    """Test get_logger() container function."""

    @pytest.mark.parametrize(
        "environment,use_json",
        [
            (Environment.DEVELOPMENT, False),
            (Environment.PRODUCTION, False),
            (Environment.TESTING, True),
            (Environment.CI, True),
        ],
    )
    def test_renderer_selected_by_environment(self, environment, use_json):
        """Test JSON output in testing/ci, console output elsewhere."""
        with patch(
            "secretspec.core.container.infrastructure.get_settings",
            return_value=settings_for(environment, "DEBUG"),
        ):
            with patch(
                "secretspec.infrastructure.logging.ConsoleAdapter"
            ) as mock_console:
                mock_console.return_value = MagicMock()

                logger = get_logger()

                mock_console.assert_called_once_with(use_json=use_json, level="DEBUG")
                assert logger is mock_console.return_value

    def test_get_logger_is_singleton(self):
        """Test get_logger() returns the same instance."""
        with patch(
            "secretspec.core.container.infrastructure.get_settings",
            return_value=settings_for(Environment.TESTING),
        ):
            assert get_logger() is get_logger()


@pytest.mark.unit
class TestGetProviderContainer:
    """Test provider factory functions."""

    def test_factory_is_singleton(self, tmp_path, monkeypatch):
        """Test get_provider_factory() returns the same ProviderFactory."""
        monkeypatch.chdir(tmp_path)
        factory = get_provider_factory()

        assert isinstance(factory, ProviderFactory)
        assert factory is get_provider_factory()

    def test_get_provider_success(self, tmp_path, monkeypatch):
        """Test get_provider() returns a configured provider."""
        monkeypatch.chdir(tmp_path)
        result = get_provider("env")

        assert isinstance(result, Success)
        assert isinstance(result.value, EnvProvider)

    def test_get_provider_unknown(self, tmp_path, monkeypatch):
        """Test get_provider() surfaces factory failures."""
        monkeypatch.chdir(tmp_path)
        result = get_provider("nope://x")

        assert isinstance(result, Failure)
        assert isinstance(result.error, ProviderNotFoundError)
