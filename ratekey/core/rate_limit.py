"""HTTP boundary for rate limit bucket keys.

This module connects FastAPI requests to ``ratekey.core.keys``.

Design goals:
- Wire-level only: the raw ``Authorization`` header and the client address
  are the only request fields read. ``request.state`` and anything the
  authentication layer attaches later are never consulted, so the key is the
  same whether this runs before or after authentication.
- No secrets in logs: keys are logged as a short hash.
- Counting, windowing and storage belong to the limiter consuming the key.
"""

from __future__ import annotations

import hashlib
import logging
from typing import Callable, NamedTuple

from fastapi import Request

from ratekey.core.config import parse_limit_categories, settings
from ratekey.core.errors import ValidationAppError
from ratekey.core.keys import KeySource, format_bucket_key, resolve_identifier

logger = logging.getLogger(__name__)


class KeyInputs(NamedTuple):
    """Wire-level request fields that feed key derivation."""

    authorization: str | None
    network_address: str | None


class RequestBucket(NamedTuple):
    """Bucket key for a request and the identifier source behind it."""

    key: str
    source: KeySource


def get_limit_categories() -> tuple[str, ...]:
    """Return the categories configured via APP_RATE_LIMIT_CATEGORIES."""
    return parse_limit_categories(settings.app.rate_limit_categories)


def ensure_known_category(category: str) -> str:
    """Validate that a category is configured.

    Args:
        category: Category label supplied by the client.

    Returns:
        str: The category, unchanged.

    Raises:
        ValidationAppError: If the category is not configured.
    """
    allowed = get_limit_categories()
    if category not in allowed:
        raise ValidationAppError(
            code="unknown_limit_category",
            message=f"Unknown rate limit category: {category!r}",
            details={"category": category, "allowed_categories": list(allowed)},
        )
    return category


def extract_key_inputs(request: Request) -> KeyInputs:
    """Read the wire-level key inputs from a request.

    Args:
        request: Incoming request.

    Returns:
        KeyInputs with the raw Authorization header and client host.
    """
    authorization = request.headers.get("Authorization")
    network_address = request.client.host if request.client else None
    return KeyInputs(authorization, network_address)


def hash_bucket_key(key: str) -> str:
    """Hash a bucket key for logging without exposing the bearer token."""
    return hashlib.sha256(key.encode()).hexdigest()[:16]


def resolve_request_bucket(request: Request, category: str) -> RequestBucket:
    """Derive the bucket key for a request in the given category.

    Args:
        request: Incoming request.
        category: Rate limit pool label.

    Returns:
        RequestBucket with the key and which identifier source produced it.
    """
    inputs = extract_key_inputs(request)
    identifier = resolve_identifier(inputs.authorization, inputs.network_address)
    key = format_bucket_key(category, identifier.value)

    logger.debug(
        "rate_limit.key_derived",
        extra={
            "category": category,
            "key_type": identifier.source.value,
            "key_hash": hash_bucket_key(key),
        },
    )
    return RequestBucket(key, identifier.source)


def bucket_key_for_request(request: Request, category: str) -> str:
    """Return only the bucket key for a request."""
    return resolve_request_bucket(request, category).key


def bucket_key_dependency(category: str) -> Callable[[Request], str]:
    """Build a FastAPI dependency that yields the bucket key for ``category``.

    Usage:
        comment_key = bucket_key_dependency("comments")

        @router.post("/posts/{post_id}/comments")
        async def add_comment(key: Annotated[str, Depends(comment_key)]):
            limiter.consume(key)

    Args:
        category: Rate limit pool label.

    Returns:
        Dependency callable taking the request and returning the key.

    Raises:
        ValidationAppError: If ``category`` is empty.
    """
    if not category:
        raise ValidationAppError(
            code="invalid_limit_category",
            message="Rate limit category must be a non-empty string",
        )

    def _dependency(request: Request) -> str:
        return bucket_key_for_request(request, category)

    _dependency.__name__ = f"bucket_key_{category}"
    return _dependency
