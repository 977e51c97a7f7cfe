"""Shared pytest fixtures for hosted page tests."""

from __future__ import annotations

import os
import warnings
from typing import Iterator

import pytest

from hostedpage.application.hosted_page import HostedPageService
from hostedpage.application.token_issuer import TokenIssuer
from hostedpage.env import Settings
from hostedpage.infrastructure.database import DatabaseClient
from hostedpage.infrastructure.storage import InMemoryTokenStore, RedisTokenStore
from tests.fixtures import FakeClock

TEST_SECURITY_KEY = "secret"
TEST_TENANT_ID = "T1"


@pytest.fixture
def settings() -> Settings:
    return Settings(security_key=TEST_SECURITY_KEY, tenant_id=TEST_TENANT_ID)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def token_store() -> InMemoryTokenStore:
    return InMemoryTokenStore()


@pytest.fixture
def token_issuer(token_store: InMemoryTokenStore, clock: FakeClock) -> TokenIssuer:
    return TokenIssuer(token_store, clock=clock)


@pytest.fixture
def hosted_page_service(
    settings: Settings, token_issuer: TokenIssuer, clock: FakeClock
) -> HostedPageService:
    return HostedPageService(settings, token_issuer, clock=clock)


class TestDatabaseSettings:
    """Test settings for Redis connection."""

    def __init__(self, database_url: str) -> None:
        self.database_url = database_url


@pytest.fixture
def redis_db_client() -> Iterator[DatabaseClient]:
    """Create a Redis database client for testing.

    Uses TEST_REDIS_URL if set, falling back to localhost:6379/15.
    """
    test_redis_url = os.getenv("TEST_REDIS_URL", "redis://localhost:6379/15")
    client = DatabaseClient(TestDatabaseSettings(database_url=test_redis_url))
    client.initialize_database()

    try:
        with client.get_connection() as conn:
            conn.ping()
    except Exception as e:
        warnings.warn(
            f"Redis not available at {test_redis_url}: {e}. "
            "Tests requiring Redis will be skipped.",
            UserWarning,
        )
        pytest.skip(f"Redis not available: {e}")

    yield client

    try:
        with client.get_connection() as conn:
            conn.flushdb()
    except Exception:
        pass  # Ignore cleanup errors


@pytest.fixture
def redis_token_store(redis_db_client: DatabaseClient) -> RedisTokenStore:
    return RedisTokenStore(redis_db_client)
