"""Redis-based shared cache tier.

Provides Redis caching with TTL support for translation manifests and
bundles. Integrates with translation_client.infrastructure.cache.keys for
key format (DRY). Calls are synchronous; the client never blocks a
request on an unavailable Redis: reads miss, writes are dropped.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from typing import Any

import redis

from translation_client.core.config import get_settings

logger = logging.getLogger(__name__)


class CacheService:
    """Redis cache service with TTL support.

    Uses translation_client.core.config for the connection URL. Call
    connect() at startup and disconnect() at shutdown.
    """

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        redis_url: str | None = None,
    ) -> None:
        """Initialize cache service.

        Args:
            redis_client: Optional Redis client for testing or DI.
            redis_url: Connection URL; defaults to settings.redis_url.
        """
        self.redis = redis_client
        self.redis_url = redis_url or get_settings().redis_url
        self._connected = redis_client is not None

    def connect(self) -> None:
        """Establish Redis connection. Call on startup."""
        if self.redis is None:
            try:
                self.redis = redis.Redis.from_url(
                    self.redis_url,
                    decode_responses=True,
                    socket_connect_timeout=5,
                    socket_keepalive=True,
                )
                self.redis.ping()
                self._connected = True
                logger.info("Redis cache connected: %s", self.redis_url)
            except (redis.ConnectionError, redis.TimeoutError) as e:
                logger.warning("Redis connection failed: %s. Cache disabled.", e)
                self._connected = False
                self.redis = None

    def disconnect(self) -> None:
        """Close Redis connection. Call on shutdown."""
        if self.redis:
            self.redis.close()
            self.redis = None
            self._connected = False
            logger.info("Redis cache disconnected")

    def _reconnect(self) -> bool:
        """Attempt to reconnect after disconnect. Returns True if reconnected."""
        if self.redis is None:
            return False
        try:
            self.redis.close()
        except redis.RedisError:
            pass
        self.redis = None
        self._connected = False
        self.connect()
        return self._connected

    def is_available(self) -> bool:
        """Return True if Redis is connected and usable."""
        return self._connected and self.redis is not None

    def get(self, key: str) -> Any | None:
        """Return cached value (JSON-deserialized) or None if missing/unavailable.

        Args:
            key: Cache key (use translation_client.infrastructure.cache.keys builders).

        Returns:
            Cached value or None.
        """
        if not self.is_available() or self.redis is None:
            return None
        try:
            value = self.redis.get(key)
            if value is not None:
                logger.debug("Cache HIT: %s", key)
                return json.loads(value)
            logger.debug("Cache MISS: %s", key)
            return None
        except (redis.ConnectionError, redis.TimeoutError):
            if self._reconnect():
                try:
                    value = self.redis.get(key)
                    return json.loads(value) if value is not None else None
                except redis.RedisError:
                    logger.exception("Cache get error for key %s after reconnect", key)
                    return None
            logger.warning("Cache get unavailable for key %s (Redis disconnected)", key)
            return None
        except redis.RedisError:
            logger.exception("Cache get error for key %s", key)
            return None

    def set(self, key: str, value: Any, ttl: int = 300) -> bool:
        """Store value with TTL. Returns True on success.

        Args:
            key: Cache key.
            value: Value to cache (JSON-serializable).
            ttl: Time-to-live in seconds (default 300).

        Returns:
            True if stored, False otherwise.
        """
        if not self.is_available() or self.redis is None:
            return False
        serialized = json.dumps(value, ensure_ascii=False)
        try:
            self.redis.setex(key, ttl, serialized)
            logger.debug("Cache SET: %s (TTL: %ss)", key, ttl)
            return True
        except (redis.ConnectionError, redis.TimeoutError):
            if self._reconnect():
                try:
                    self.redis.setex(key, ttl, serialized)
                    return True
                except redis.RedisError:
                    pass
            logger.warning("Cache set unavailable for key %s (Redis disconnected)", key)
            return False
        except redis.RedisError:
            logger.exception("Cache set error for key %s", key)
            return False

    def delete(self, key: str) -> bool:
        """Remove key from cache. Returns True if deleted."""
        if not self.is_available() or self.redis is None:
            return False
        try:
            return bool(self.redis.delete(key))
        except redis.RedisError:
            logger.exception("Cache delete error for key %s", key)
            return False

    def remember(self, key: str, ttl: int, factory: Callable[[], Any]) -> Any:
        """Return the cached value, or compute, store (if not None) and return it."""
        cached_value = self.get(key)
        if cached_value is not None:
            return cached_value
        value = factory()
        if value is not None:
            self.set(key, value, ttl=ttl)
        return value

    def delete_pattern(self, pattern: str) -> int:
        """Delete all keys matching pattern (SCAN + UNLINK in chunks).

        Args:
            pattern: Redis glob pattern (e.g. 'translation:bundle:t1:*').

        Returns:
            Number of keys deleted.
        """
        if not self.is_available() or self.redis is None:
            return 0
        chunk_size = 500
        deleted = 0
        try:
            chunk: list[str] = []
            for key in self.redis.scan_iter(match=pattern):
                chunk.append(key)
                if len(chunk) >= chunk_size:
                    deleted += int(self.redis.unlink(*chunk) or 0)
                    chunk = []
            if chunk:
                deleted += int(self.redis.unlink(*chunk) or 0)
            if deleted > 0:
                logger.info("Cache INVALIDATE: %s (%s keys)", pattern, deleted)
            return deleted
        except redis.RedisError:
            logger.exception("Cache delete_pattern error for %s", pattern)
            return 0

    def index_add(self, index_key: str, member: str, ttl: int) -> None:
        """Add member to a Redis set and refresh the set's TTL."""
        if not self.is_available() or self.redis is None:
            return
        try:
            with self.redis.pipeline(transaction=False) as pipe:
                pipe.sadd(index_key, member)
                pipe.expire(index_key, ttl)
                pipe.execute()
        except redis.RedisError:
            logger.exception("Cache index_add error for %s", index_key)

    def index_members(self, index_key: str) -> set[str]:
        """Return members of a Redis set (empty when unavailable)."""
        if not self.is_available() or self.redis is None:
            return set()
        try:
            return set(self.redis.smembers(index_key))
        except redis.RedisError:
            logger.exception("Cache index_members error for %s", index_key)
            return set()

    def clear_all(self) -> bool:
        """Clear entire cache database. Use with caution.

        Returns:
            True if cleared, False otherwise.
        """
        if not self.is_available() or self.redis is None:
            return False
        try:
            self.redis.flushdb()
            logger.warning("Cache CLEARED: all keys deleted")
            return True
        except (redis.ConnectionError, redis.TimeoutError):
            if self._reconnect():
                try:
                    self.redis.flushdb()
                    return True
                except redis.RedisError:
                    pass
            return False
        except redis.RedisError:
            logger.exception("Cache clear error")
            return False
