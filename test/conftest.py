"""
Pytest configuration and fixtures for testing.
"""
import pytest

from tokensmith.config.jwt_config import JWTConfig, get_jwt_config
from tokensmith.security.token_operations import TokenOperations

# 2023-11-14T22:13:20Z
FIXED_NOW = 1_700_000_000


@pytest.fixture
def fixed_clock():
    """Clock frozen at FIXED_NOW."""
    return lambda: FIXED_NOW


@pytest.fixture
def secret_key():
    """Secret long enough to keep PyJWT from warning about key length."""
    return b"test-secret-key-with-at-least-64-bytes-for-hs512-interop-checks!!"


@pytest.fixture
def jwt_config(secret_key):
    """Create a test JWT configuration."""
    return JWTConfig(
        secret_key=secret_key.decode("utf-8"),
        expires_in=600,
    )


@pytest.fixture
def token_ops(jwt_config, fixed_clock):
    """Create token operations instance with a frozen clock."""
    return TokenOperations(config=jwt_config, clock=fixed_clock)


@pytest.fixture(autouse=True)
def clear_config_cache():
    """Reset the cached configuration around each test."""
    get_jwt_config.cache_clear()
    yield
    get_jwt_config.cache_clear()
