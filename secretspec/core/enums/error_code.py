"""Error codes (machine-readable).

Error codes follow ENTITY_ACTION_REASON naming convention.
Used with Result types for railway-oriented programming.

Categories:
- Configuration errors (PROVIDER_URI_*, PROVIDER_CONFIGURATION_*)
- Lookup errors (PROVIDER_NOT_FOUND)
- Tool errors (PROVIDER_TOOL_*)
- Backend errors (authentication, rate limit, access, command, response)
"""

from enum import Enum


class ErrorCode(Enum):
    """Error codes (machine-readable).

    Error codes follow ENTITY_ACTION_REASON naming convention.
    """

    # Configuration errors
    PROVIDER_URI_INVALID = "provider_uri_invalid"
    PROVIDER_SCHEME_UNSUPPORTED = "provider_scheme_unsupported"
    PROVIDER_CONFIGURATION_INVALID = "provider_configuration_invalid"

    # Lookup errors
    PROVIDER_NOT_FOUND = "provider_not_found"

    # Tool errors
    PROVIDER_TOOL_NOT_FOUND = "provider_tool_not_found"

    # Backend errors
    PROVIDER_AUTHENTICATION_FAILED = "provider_authentication_failed"
    PROVIDER_RATE_LIMITED = "provider_rate_limited"
    PROVIDER_ACCESS_DENIED = "provider_access_denied"
    PROVIDER_COMMAND_FAILED = "provider_command_failed"
    PROVIDER_RESPONSE_INVALID = "provider_response_invalid"

    # Capability errors
    PROVIDER_READ_ONLY = "provider_read_only"
