"""Bitwarden Secrets Manager secret mapper.

Converts ``bws secret list`` JSON into KvSecret entities.

Secrets Manager Secret Structure:
    {
        "id": "be8e0ad8-...",
        "organizationId": "10e8f6cd-...",
        "projectId": "e325ea69-...",
        "key": "myapp_DATABASE_URL",
        "value": "postgres://...",
        "note": "SecretSpec managed secret: myapp/DATABASE_URL",
        "creationDate": "2024-05-01T12:00:00.000Z",
        "revisionDate": "2024-05-02T08:30:00.000Z"
    }
"""

from datetime import datetime
from typing import Any

import structlog

from secretspec.domain.entities import KvSecret

logger = structlog.get_logger(__name__)


class BitwardenSecretMapper:
    """Mapper for converting Secrets Manager JSON to KvSecret."""

    def map_secret(self, data: dict[str, Any]) -> KvSecret | None:
        """Map a single secret JSON object.

        Args:
            data: Secret object from the Secrets Manager CLI.

        Returns:
            KvSecret, or None if required fields are missing.
        """
        try:
            return self._map_secret_internal(data)
        except (KeyError, TypeError) as e:
            logger.warning(
                "bws_secret_mapping_failed",
                secret_id=data.get("id"),
                error=str(e),
                error_type=type(e).__name__,
            )
            return None

    def map_secrets(self, data_list: list[Any]) -> list[KvSecret]:
        """Map a list of secret JSON objects, skipping invalid entries."""
        secrets: list[KvSecret] = []
        for data in data_list:
            if not isinstance(data, dict):
                logger.warning(
                    "bws_secret_mapping_failed",
                    error="secret is not an object",
                    error_type="TypeError",
                )
                continue
            secret = self.map_secret(data)
            if secret is not None:
                secrets.append(secret)
        return secrets

    def _map_secret_internal(self, data: dict[str, Any]) -> KvSecret:
        secret_id = data["id"]
        key = data["key"]
        value = data.get("value", "")
        if not isinstance(secret_id, str) or not isinstance(key, str):
            raise TypeError("'id' and 'key' must be strings")
        if not isinstance(value, str):
            raise TypeError("'value' must be a string")

        return KvSecret(
            id=secret_id,
            key=key,
            value=value,
            organization_id=data.get("organizationId"),
            project_id=data.get("projectId"),
            note=data.get("note"),
            creation_date=_parse_timestamp(data.get("creationDate")),
            revision_date=_parse_timestamp(data.get("revisionDate")),
        )


def _parse_timestamp(value: Any) -> datetime | None:
    """Parse an ISO-8601 timestamp; unparseable values become None."""
    if not isinstance(value, str) or not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
