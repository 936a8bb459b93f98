"""Bitwarden CLI clients."""

from secretspec.infrastructure.providers.bitwarden.api.bw_client import BwClient
from secretspec.infrastructure.providers.bitwarden.api.bws_client import BwsClient

__all__ = ["BwClient", "BwsClient"]
