"""Pytest configuration for kvcache tests."""

import pytest


@pytest.fixture(autouse=True)
def reset_decorator_config():
    """Reset decorator configuration before each test."""
    import kvcache.decorators

    # Store original values
    original_cache = kvcache.decorators._cache
    original_prefix = kvcache.decorators._key_prefix

    yield

    # Restore original values after test
    kvcache.decorators._cache = original_cache
    kvcache.decorators._key_prefix = original_prefix
