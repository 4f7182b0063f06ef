"""Cache: shared-tier stores and cache key utilities.

CacheService (Redis) and MemoryCache implement CacheProtocol; key
format is in keys.py (DRY).
"""

from translation_client.infrastructure.cache.cache_protocol import CacheProtocol
from translation_client.infrastructure.cache.factory import get_cache_store
from translation_client.infrastructure.cache.keys import (
    api_group,
    bundle_key,
    loaded_key,
    locale_prefix,
    manifest_key,
    prefix_group,
    tenant_index_key,
)
from translation_client.infrastructure.cache.memory_cache import MemoryCache
from translation_client.infrastructure.cache.redis_cache import CacheService

__all__ = [
    "CacheProtocol",
    "CacheService",
    "MemoryCache",
    "api_group",
    "bundle_key",
    "get_cache_store",
    "loaded_key",
    "locale_prefix",
    "manifest_key",
    "prefix_group",
    "tenant_index_key",
]
