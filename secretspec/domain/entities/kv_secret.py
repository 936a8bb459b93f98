"""Secrets Manager secret entity.

A flat key-value record scoped to an organization and optionally a project.
The key is the full addressable name; there is no sub-structure.
"""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True, slots=True, kw_only=True)
class KvSecret:
    """Secrets Manager secret.

    Attributes:
        id: Backend secret identifier.
        organization_id: Owning organization.
        project_id: Project the secret belongs to, if any.
        key: Addressable secret name.
        value: Plaintext value. Never rendered by repr.
        note: Free-form note.
        creation_date: When the secret was created.
        revision_date: When the secret last changed.
    """

    id: str
    key: str
    value: str = field(default="", repr=False)
    organization_id: str | None = None
    project_id: str | None = None
    note: str | None = None
    creation_date: datetime | None = None
    revision_date: datetime | None = None

    def matches(self, *keys: str) -> bool:
        """Return True if this secret's key equals any of ``keys``."""
        return self.key in keys
