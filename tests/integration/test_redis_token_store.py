"""Integration tests for the Redis-backed token store.

Skipped automatically when Redis is not reachable (see conftest).
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from hostedpage.application.token_issuer import TokenIssuer
from hostedpage.infrastructure.database import DatabaseClient
from hostedpage.infrastructure.storage import RedisTokenStore
from tests.fixtures import FakeClock


def test_get_missing_returns_none(redis_token_store: RedisTokenStore) -> None:
    assert redis_token_store.get("missing") is None


def test_set_then_get_round_trips_datetime(
    redis_token_store: RedisTokenStore,
) -> None:
    issued_at = datetime(2024, 1, 1, 12, 30, 15, 123456, tzinfo=timezone.utc)
    redis_token_store.set("tok", issued_at)
    assert redis_token_store.get("tok") == issued_at


def test_keys_are_prefixed(
    redis_token_store: RedisTokenStore, redis_db_client: DatabaseClient
) -> None:
    redis_token_store.set("tok", datetime.now(timezone.utc))
    with redis_db_client.get_connection() as conn:
        assert conn.exists("hosted_page_token:tok") == 1


def test_ttl_applied(redis_db_client: DatabaseClient) -> None:
    store = RedisTokenStore(redis_db_client, ttl=timedelta(hours=48))
    store.set("tok", datetime.now(timezone.utc))
    with redis_db_client.get_connection() as conn:
        assert 0 < conn.ttl("hosted_page_token:tok") <= 172800


def test_issuer_with_redis_store(redis_token_store: RedisTokenStore) -> None:
    clock = FakeClock()
    issuer = TokenIssuer(redis_token_store, clock=clock)
    token = issuer.generate_token()
    assert redis_token_store.get(token) == clock.now
    assert issuer.is_blocked(token) is True
