from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Query, Request

from ratekey.core.config import settings
from ratekey.core.rate_limit import (
    ensure_known_category,
    get_limit_categories,
    hash_bucket_key,
    resolve_request_bucket,
)
from ratekey.schemas.rate_limit import BucketKeyResponse, CategoriesResponse

router = APIRouter(tags=["Rate limit"])


@router.get("/rate-limit/categories", response_model=CategoriesResponse)
def list_categories() -> CategoriesResponse:
    """List the rate limit categories this service knows about."""
    return CategoriesResponse(categories=list(get_limit_categories()))


@router.get("/rate-limit/key", response_model=BucketKeyResponse)
def describe_bucket_key(
    request: Request,
    category: Annotated[str | None, Query(min_length=1)] = None,
) -> BucketKeyResponse:
    """Show which bucket the calling request falls into.

    The key is derived from the caller's own ``Authorization`` header and
    address. Only a hash of the key is returned unless APP_EXPOSE_RAW_KEYS
    is enabled, since bearer keys contain the token.

    Args:
        request: Incoming request.
        category: Rate limit category; defaults to APP_DEFAULT_CATEGORY.

    Returns:
        BucketKeyResponse describing the resolved bucket.

    Raises:
        ValidationAppError: If the category is not configured (HTTP 400).
    """
    category = ensure_known_category(category or settings.app.default_category)

    bucket = resolve_request_bucket(request, category)

    return BucketKeyResponse(
        category=category,
        key_type=bucket.source,
        key_hash=hash_bucket_key(bucket.key),
        key=bucket.key if settings.app.expose_raw_keys else None,
    )
