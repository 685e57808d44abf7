"""Rate limit bucket key derivation.

Maps the wire-level inputs of a request to the key an external rate limiting
store uses to count requests:

    rl:<category>:<identifier>

The identifier is resolved in strict order:
- Bearer token from the ``Authorization`` header (verbatim, not validated)
- Client network address
- The literal ``anonymous``

Only the raw header value and the client address are accepted as inputs, so
nothing populated later in the request pipeline (e.g. an identity attached by
the authentication layer) can influence the key.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

KEY_NAMESPACE = "rl"
BEARER_PREFIX = "Bearer "
ANONYMOUS_IDENTIFIER = "anonymous"


class KeySource(str, Enum):
    """Which resolution branch produced the identifier."""

    BEARER = "bearer"
    ADDRESS = "address"
    ANONYMOUS = "anonymous"


@dataclass(frozen=True)
class ResolvedIdentifier:
    """Caller identifier used as the last segment of a bucket key.

    Attributes:
        source: Branch of the resolution chain that matched.
        value: Identifier string. May be empty when the header is exactly
            ``"Bearer "``.
    """

    source: KeySource
    value: str


def resolve_identifier(
    authorization: str | None,
    network_address: str | None,
) -> ResolvedIdentifier:
    """Resolve the caller identifier from wire-level request inputs.

    The prefix match is case-sensitive and needs exactly ``"Bearer "``; the
    remainder is used as-is, including any surrounding whitespace.

    Args:
        authorization: Raw ``Authorization`` header value, if present.
        network_address: Client network address, if known.

    Returns:
        ResolvedIdentifier for the first branch that matches.

    Examples:
        >>> resolve_identifier("Bearer abc", "10.0.0.1").value
        'abc'
        >>> resolve_identifier("bearer abc", "10.0.0.1").value
        '10.0.0.1'
        >>> resolve_identifier(None, None).value
        'anonymous'
    """
    if authorization and authorization.startswith(BEARER_PREFIX):
        return ResolvedIdentifier(KeySource.BEARER, authorization[len(BEARER_PREFIX):])

    if network_address:
        return ResolvedIdentifier(KeySource.ADDRESS, network_address)

    return ResolvedIdentifier(KeySource.ANONYMOUS, ANONYMOUS_IDENTIFIER)


def format_bucket_key(category: str, identifier: str) -> str:
    """Join a category and identifier into a bucket key. Colons are not escaped."""
    return f"{KEY_NAMESPACE}:{category}:{identifier}"


def derive_bucket_key(
    authorization: str | None,
    network_address: str | None,
    category: str,
) -> str:
    """Derive the rate limit bucket key for a request.

    Args:
        authorization: Raw ``Authorization`` header value, if present.
        network_address: Client network address, if known.
        category: Rate limit pool label (e.g. ``"comments"``).

    Returns:
        str: ``rl:<category>:<identifier>``.

    Examples:
        >>> derive_bucket_key("Bearer tok_1", "127.0.0.1", "comments")
        'rl:comments:tok_1'
        >>> derive_bucket_key("Basic abc123", "10.0.0.1", "requests")
        'rl:requests:10.0.0.1'
    """
    identifier = resolve_identifier(authorization, network_address)
    return format_bucket_key(category, identifier.value)
