"""Pytest configuration.

This configuration ensures:
1. Bitwarden call-time overrides from the developer's shell never leak in
2. Cached settings, container singletons and structlog configuration
   are reset per test
3. Provider tests get an in-memory fake of the bw/bws executables
"""

from unittest.mock import patch

import pytest
import structlog

from secretspec.core.config import get_settings
from secretspec.core.container import get_logger, get_provider_factory
from tests.utils.fake_bitwarden_cli import SUBPROCESS_RUN, FakeBitwardenCli

OVERRIDE_VARIABLES = (
    "BITWARDEN_DEFAULT_TYPE",
    "BITWARDEN_DEFAULT_FIELD",
    "BITWARDEN_ORGANIZATION",
    "BITWARDEN_COLLECTION",
    "BWS_ACCESS_TOKEN",
)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Remove override variables and reset cached singletons."""
    for name in OVERRIDE_VARIABLES:
        monkeypatch.delenv(name, raising=False)

    get_settings.cache_clear()
    get_logger.cache_clear()
    get_provider_factory.cache_clear()
    yield
    structlog.reset_defaults()
    get_settings.cache_clear()
    get_logger.cache_clear()
    get_provider_factory.cache_clear()


@pytest.fixture
def fake_cli():
    """Fake bw/bws executables patched over subprocess.run."""
    cli = FakeBitwardenCli()
    with patch(SUBPROCESS_RUN, side_effect=cli.run):
        yield cli
