"""Fixed internal values shared across providers.

These are not user-configurable. User-facing knobs live in
``secretspec.core.config`` or in the provider URI.
"""

DEFAULT_FOLDER_TEMPLATE = "secretspec/{project}/{profile}"
"""Folder-style prefix of legacy compound item names in the Password Manager.

``{project}`` and ``{profile}`` are substituted before use.
"""

MANAGED_NOTE_PREFIX = "SecretSpec managed secret: "
"""Prefix of the note attached to every item or secret created by this package."""

STDERR_MAX_LENGTH = 500
"""Maximum characters of CLI stderr/stdout kept in error details and logs."""

DEFAULT_DOTENV_PATH = ".env"
"""Dotenv file used when a ``dotenv:`` URI carries no path."""

BWS_RATE_LIMIT_RETRY_AFTER = 20
"""Suggested wait (seconds) after the Secrets Manager CLI hits its token rate limit."""

LOCAL_HOSTS = frozenset({"localhost"})
"""URI hosts that carry no collection or project identifier."""
