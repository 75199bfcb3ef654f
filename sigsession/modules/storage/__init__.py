"""
Storage Module - Black Box Interface

Purpose: Own the process-wide Redis connection pool
Interface: connect(), disconnect(), ping()
Hidden: Redis URL construction, connection pooling, credentials

Opened once at startup and closed on shutdown; the client it returns is
injected into the modules that need it.
"""

import logging
from typing import Optional

import redis.asyncio as redis

from ..config import ConfigModule

logger = logging.getLogger(__name__)


class StorageModule:
    """Black box storage abstraction."""

    def __init__(self, connection_url: str, password: Optional[str] = None):
        """
        Initialize storage with connection URL.

        Args:
            connection_url: redis:// URL without credentials
            password: Optional Redis password
        """
        self.url = connection_url
        self._password = password
        self._client: Optional[redis.Redis] = None

    @classmethod
    def from_config(cls, config: ConfigModule) -> "StorageModule":
        """Build from the application configuration."""
        return cls(config.redis_url, password=config.get("redis_password"))

    @property
    def client(self) -> Optional[redis.Redis]:
        return self._client

    async def connect(self) -> redis.Redis:
        """Open the connection pool (idempotent) and return the client."""
        if not self._client:
            logger.info(f"Connecting to Redis at {self.url}")
            self._client = redis.from_url(
                self.url,
                password=self._password,
                encoding="utf-8",
                decode_responses=True,
            )
        return self._client

    async def disconnect(self) -> None:
        """Close the connection pool."""
        if self._client:
            await self._client.aclose()
            self._client = None
            logger.info("Redis connection closed")

    async def ping(self) -> bool:
        """Return True if Redis answers PING."""
        if not self._client:
            return False
        try:
            return bool(await self._client.ping())
        except redis.RedisError as e:
            logger.warning(f"Redis ping failed: {e}")
            return False


__all__ = ["StorageModule"]
