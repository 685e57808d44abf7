"""Pydantic schemas for rate limit key responses."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field

from ratekey.core.keys import KeySource


class CategoriesResponse(BaseModel):
    """Configured rate limit categories."""

    categories: List[str] = Field(
        default_factory=list,
        description="Category labels, in configuration order.",
    )


class BucketKeyResponse(BaseModel):
    """Description of the bucket a request was keyed into."""

    category: str = Field(..., description="Rate limit category the key belongs to.")
    key_type: KeySource = Field(
        ...,
        description="Identifier source: 'bearer', 'address' or 'anonymous'.",
    )
    key_hash: str = Field(
        ..., description="First 16 hex chars of sha256(key), safe to log and compare."
    )
    key: str | None = Field(
        default=None,
        description="Raw bucket key. Only populated when APP_EXPOSE_RAW_KEYS=true.",
    )
