"""Shared cache store factory: pick Redis or in-memory from settings."""

from translation_client.core.config import Settings, get_settings
from translation_client.infrastructure.cache.cache_protocol import CacheProtocol
from translation_client.infrastructure.cache.memory_cache import MemoryCache
from translation_client.infrastructure.cache.redis_cache import CacheService
from translation_client.shared.enums import CacheStore


def get_cache_store(settings: Settings | None = None) -> CacheProtocol:
    """Return a connected cache store for settings.cache_store.

    A Redis store that cannot connect stays in place but reports
    unavailable; every read then misses and every write is dropped.
    """
    settings = settings or get_settings()
    if settings.cache_store == CacheStore.MEMORY.value:
        return MemoryCache()
    service = CacheService(redis_url=settings.redis_url)
    service.connect()
    return service
