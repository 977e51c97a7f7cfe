"""Token replay store abstractions with in-memory and Redis implementations."""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from typing import Optional

from ..env import Settings
from .database import DatabaseClient, get_database_client

TOKEN_KEY_PREFIX = "hosted_page_token"


class TokenStore(ABC):
    """Maps issued tokens to the time they were issued.

    Only point reads and point writes are required. Nothing makes a ``get``
    followed by a ``set`` atomic, so two concurrent issuers may both accept
    the same token. Stores that need stronger guarantees should enforce
    uniqueness themselves.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[datetime]:
        pass

    @abstractmethod
    def set(self, key: str, value: datetime) -> None:
        pass


class InMemoryTokenStore(TokenStore):
    """Process-local dict store. Entries are never evicted."""

    def __init__(self) -> None:
        self._data: dict[str, datetime] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[datetime]:
        with self._lock:
            return self._data.get(key)

    def set(self, key: str, value: datetime) -> None:
        with self._lock:
            self._data[key] = value

    def __len__(self) -> int:
        return len(self._data)

    def clear(self) -> None:
        with self._lock:
            self._data.clear()


class RedisTokenStore(TokenStore):
    """Redis-backed implementation of TokenStore.

    Key layout:
      - hosted_page_token:{token} -> ISO-8601 issuance time

    Keys expire after the replay window, which only reclaims memory; the
    issuer still checks the stored age itself.
    """

    def __init__(self, db_client: DatabaseClient, ttl: Optional[timedelta] = None):
        self._db_client = db_client
        self._ttl = ttl

    @staticmethod
    def _key(token: str) -> str:
        return f"{TOKEN_KEY_PREFIX}:{token}"

    def get(self, key: str) -> Optional[datetime]:
        with self._db_client.get_connection() as conn:
            raw = conn.get(self._key(key))
        if raw is None:
            return None
        return datetime.fromisoformat(raw)

    def set(self, key: str, value: datetime) -> None:
        with self._db_client.get_connection() as conn:
            conn.set(self._key(key), value.isoformat(), ex=self._ttl)


def build_token_store(settings: Settings) -> TokenStore:
    """Redis store when a database URL is configured, in-memory otherwise."""
    if settings.database_url:
        return RedisTokenStore(
            get_database_client(settings),
            ttl=timedelta(seconds=settings.replay_window_seconds),
        )
    return InMemoryTokenStore()
