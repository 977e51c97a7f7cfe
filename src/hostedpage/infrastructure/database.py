"""Redis connection used by the token store."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Optional, Protocol, Union

import redis


class HasDatabaseSettings(Protocol):
    database_url: Optional[str]


class DatabaseClient:
    """Redis database client."""

    def __init__(self, settings: HasDatabaseSettings):
        self.settings = settings
        self._redis: Optional[redis.Redis] = None

    def initialize_database(self) -> None:
        """Initialize Redis connection instance. No schema to create."""
        if not self.settings.database_url:
            raise ValueError("database_url is not configured")
        # Expecting URL like: redis://host:port/0
        self._redis = redis.Redis.from_url(
            self.settings.database_url, decode_responses=True
        )

    @contextmanager
    def get_connection(self) -> Iterator[redis.Redis]:
        """Yield a Redis connection."""
        if self._redis is None:
            self.initialize_database()
        assert self._redis is not None
        try:
            yield self._redis
        finally:
            # Keep pooled connection alive; do not close here
            pass


# Global database client instance
_db_client: Union[DatabaseClient, None] = None


def get_database_client(settings: HasDatabaseSettings) -> DatabaseClient:
    """Get or create database client singleton."""
    global _db_client
    if _db_client is None:
        _db_client = DatabaseClient(settings)
    return _db_client
