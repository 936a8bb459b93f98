"""Provider URI value object.

Splits a provider string into scheme, userinfo, host, path and query
without interpreting any of them. Backend-specific meaning is applied by
each provider's configuration parser.

Accepted shapes:
    env                         bare provider name
    env:                        bare name with trailing colon
    dotenv:/abs/path            path without authority
    dotenv:.env.production      relative path without authority
    bitwarden://                empty authority
    bitwarden://org@collection  userinfo and host
    bws://project?token=t       host and query

``urllib.parse.urlsplit`` is not used because it rejects schemes that start
with a digit (``1password``), which must parse so the registry can suggest
the correct name.
"""

from dataclasses import dataclass, field
from urllib.parse import parse_qsl, unquote

from secretspec.core.enums import ErrorCode
from secretspec.core.result import Failure, Result, Success
from secretspec.domain.errors import ProviderConfigurationError

_SCHEME_EXTRA_CHARS = frozenset("+-.")


@dataclass(frozen=True, slots=True, kw_only=True)
class ProviderUri:
    """Parsed provider string.

    Attributes:
        raw: Original input (stripped).
        scheme: Lower-cased scheme or bare provider name.
        username: Userinfo before ``:`` (percent-decoded), if any.
        password: Userinfo after ``:``, if any. Never rendered.
        host: Host with case preserved, None when empty.
        port: Numeric port, if present.
        path: Path component (may be empty).
        query: Ordered, percent-decoded query pairs.
        has_authority: True when the input used ``scheme://``.
    """

    raw: str = field(repr=False)
    scheme: str
    username: str | None = None
    password: str | None = field(default=None, repr=False)
    host: str | None = None
    port: int | None = None
    path: str = ""
    query: tuple[tuple[str, str], ...] = ()
    has_authority: bool = False

    @classmethod
    def parse(cls, raw: str) -> Result["ProviderUri", ProviderConfigurationError]:
        """Parse a provider string.

        Args:
            raw: Provider string such as ``"bitwarden://org@coll?type=card"``.

        Returns:
            Success(ProviderUri): Parsed components.
            Failure(ProviderConfigurationError): Empty input or invalid scheme.
        """
        text = raw.strip()
        if not text:
            return Failure(error=_invalid(raw, "Provider URI is empty"))

        scheme, sep, rest = text.partition(":")
        scheme = scheme.lower()
        if not _is_valid_scheme(scheme):
            return Failure(
                error=_invalid(raw, f"Invalid provider scheme in '{text}'")
            )
        if not sep:
            return Success(value=cls(raw=text, scheme=scheme))

        rest, _, _fragment = rest.partition("#")
        rest, _, query_string = rest.partition("?")
        query = tuple(parse_qsl(query_string, keep_blank_values=True))

        if not rest.startswith("//"):
            return Success(
                value=cls(raw=text, scheme=scheme, path=unquote(rest), query=query)
            )

        authority, slash, path = rest[2:].partition("/")
        userinfo, at, hostport = authority.rpartition("@")
        username: str | None = None
        password: str | None = None
        if at:
            user, colon, secret = userinfo.partition(":")
            username = unquote(user) or None
            password = unquote(secret) if colon else None

        split = _split_port(hostport)
        if split is None:
            return Failure(error=_invalid(raw, f"Invalid port in '{text}'"))
        host, port = split

        return Success(
            value=cls(
                raw=text,
                scheme=scheme,
                username=username,
                password=password,
                host=unquote(host) or None,
                port=port,
                path=unquote(slash + path),
                query=query,
                has_authority=True,
            )
        )

    @property
    def written_scheme(self) -> str:
        """Scheme exactly as typed, before case folding."""
        return self.raw.partition(":")[0]

    def __str__(self) -> str:
        """Render without the userinfo password."""
        if self.password is None:
            return self.raw
        return self.raw.replace(f":{self.password}@", ":****@", 1)


def _is_valid_scheme(scheme: str) -> bool:
    return bool(scheme) and all(
        ch.isascii() and (ch.isalnum() or ch in _SCHEME_EXTRA_CHARS) for ch in scheme
    )


def _split_port(hostport: str) -> tuple[str, int | None] | None:
    if hostport.startswith("["):
        # IPv6 literal
        end = hostport.find("]")
        if end == -1:
            return None
        host, tail = hostport[: end + 1], hostport[end + 1 :]
        if not tail:
            return host, None
        if not tail.startswith(":"):
            return None
        port_text = tail[1:]
    else:
        host, colon, port_text = hostport.partition(":")
        if not colon:
            return host, None
    if not port_text:
        return host, None
    if not port_text.isdigit():
        return None
    return host, int(port_text)


def _invalid(raw: str, message: str) -> ProviderConfigurationError:
    return ProviderConfigurationError(
        code=ErrorCode.PROVIDER_URI_INVALID,
        message=message,
        provider_name="registry",
        details={"uri": raw},
    )
