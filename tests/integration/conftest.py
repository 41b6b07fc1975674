"""Shared fixtures for integration tests.

These fixtures provide a stateful mock Redis that keeps what was written
for verification, while allowing real EODHD API calls to proceed.
"""

from typing import Any
from unittest.mock import AsyncMock

import pytest

from earnmove.config import Settings


@pytest.fixture
def mock_redis() -> Any:
    """Create mock Redis with stateful behavior for verification.

    Internal state attributes:
        _test_strings: Dict of string key -> value
        _test_ttls: Dict of string key -> expiry in seconds
    """
    redis = AsyncMock()

    _test_strings: dict[str, bytes] = {}
    _test_ttls: dict[str, int] = {}

    redis._test_strings = _test_strings
    redis._test_ttls = _test_ttls

    async def mock_set(key: str, value: bytes, ex: int | None = None) -> bool:
        _test_strings[key] = value
        if ex is not None:
            _test_ttls[key] = ex
        return True

    async def mock_get(key: str) -> bytes | None:
        return _test_strings.get(key)

    redis.set = mock_set
    redis.get = mock_get
    redis.ping = AsyncMock(return_value=True)
    redis.aclose = AsyncMock()

    return redis


@pytest.fixture
def test_settings() -> Settings:
    """Settings with the real EODHD key from the environment / .env file.

    Skips the test when EODHD_API_KEY is not set.
    """
    settings = Settings()
    if settings.eodhd_api_key is None or not settings.eodhd_api_key.get_secret_value():
        pytest.skip("EODHD_API_KEY not set")
    return settings
