"""Cache protocol for the shared (TTL) tier."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol


class CacheProtocol(Protocol):
    """Protocol for shared cache backends (Redis, in-memory).

    Values must be JSON-serializable. Implementations are atomic per key;
    there are no cross-key transactions.
    """

    def is_available(self) -> bool:
        """Return True if cache is connected and usable."""
        ...

    def get(self, key: str) -> Any:
        """Return cached value or None."""
        ...

    def set(self, key: str, value: Any, ttl: int = 300) -> bool:
        """Store value with TTL in seconds."""
        ...

    def delete(self, key: str) -> bool:
        """Remove key from cache."""
        ...

    def remember(self, key: str, ttl: int, factory: Callable[[], Any]) -> Any:
        """Return cached value, or compute it with factory and store it for ttl."""
        ...

    def delete_pattern(self, pattern: str) -> int:
        """Delete keys matching a glob pattern; return count deleted."""
        ...

    def index_add(self, index_key: str, member: str, ttl: int) -> None:
        """Add member to the set stored at index_key, refreshing its TTL."""
        ...

    def index_members(self, index_key: str) -> set[str]:
        """Return the members of the set stored at index_key."""
        ...

    def clear_all(self) -> bool:
        """Flush the entire store."""
        ...
