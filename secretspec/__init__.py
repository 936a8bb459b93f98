"""Secret provider abstraction and dispatch.

Resolves a provider URI (``bitwarden://org@collection``, ``bws://project``,
``dotenv:/path``, ``env``) to a backend implementing the secret provider
contract, and exposes get/set over a logical (project, key, profile) address.

Usage:
    from secretspec.core.container import get_provider
    from secretspec.core.result import Success

    match get_provider("bws://my-project"):
        case Success(value=provider):
            result = provider.get("myapp", "DATABASE_URL", "default")
"""

__version__ = "0.1.0"
