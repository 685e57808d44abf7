"""Pytest configuration and fixtures shared across all test modules.

Environment defaults must be in place before ``ratekey.core.config`` is
imported, because settings are built at import time.
"""

import os

os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault("APP_RATE_LIMIT_CATEGORIES", "requests,posts,comments")
os.environ.setdefault("APP_DEFAULT_CATEGORY", "requests")
os.environ.setdefault("LOG_LEVEL", "DEBUG")

import pytest
from fastapi.testclient import TestClient


@pytest.fixture
def client() -> TestClient:
    """Test client for a freshly built application."""
    from ratekey.core.app_factory import create_app

    return TestClient(create_app())
