"""In-process shared cache tier with TTL.

Stand-in for Redis when cache_store is 'memory' (single process, tests).
Values are stored JSON-encoded so callers get the same copy semantics as
with Redis.
"""

from __future__ import annotations

import fnmatch
import json
import logging
import time
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)


class MemoryCache:
    """Dict-backed cache with per-key expiry.

    clock is injectable so tests can move time forward.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._values: dict[str, tuple[str, float]] = {}
        self._sets: dict[str, tuple[set[str], float]] = {}

    def is_available(self) -> bool:
        return True

    def _expired(self, expires_at: float) -> bool:
        return self._clock() >= expires_at

    def get(self, key: str) -> Any | None:
        entry = self._values.get(key)
        if entry is None:
            logger.debug("Cache MISS: %s", key)
            return None
        raw, expires_at = entry
        if self._expired(expires_at):
            del self._values[key]
            logger.debug("Cache EXPIRED: %s", key)
            return None
        logger.debug("Cache HIT: %s", key)
        return json.loads(raw)

    def set(self, key: str, value: Any, ttl: int = 300) -> bool:
        self._values[key] = (json.dumps(value, ensure_ascii=False), self._clock() + ttl)
        logger.debug("Cache SET: %s (TTL: %ss)", key, ttl)
        return True

    def delete(self, key: str) -> bool:
        removed = self._values.pop(key, None) is not None
        removed = self._sets.pop(key, None) is not None or removed
        return removed

    def remember(self, key: str, ttl: int, factory: Callable[[], Any]) -> Any:
        cached_value = self.get(key)
        if cached_value is not None:
            return cached_value
        value = factory()
        if value is not None:
            self.set(key, value, ttl=ttl)
        return value

    def delete_pattern(self, pattern: str) -> int:
        matches = [k for k in [*self._values, *self._sets] if fnmatch.fnmatchcase(k, pattern)]
        for key in matches:
            self.delete(key)
        if matches:
            logger.info("Cache INVALIDATE: %s (%s keys)", pattern, len(matches))
        return len(matches)

    def index_add(self, index_key: str, member: str, ttl: int) -> None:
        members, expires_at = self._sets.get(index_key, (set(), 0.0))
        if self._expired(expires_at):
            members = set()
        members.add(member)
        self._sets[index_key] = (members, self._clock() + ttl)

    def index_members(self, index_key: str) -> set[str]:
        entry = self._sets.get(index_key)
        if entry is None or self._expired(entry[1]):
            return set()
        return set(entry[0])

    def clear_all(self) -> bool:
        self._values.clear()
        self._sets.clear()
        logger.warning("Cache CLEARED: all keys deleted")
        return True
