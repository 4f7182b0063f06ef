"""Shared enumerations for the translation client.

Cross-cutting enums used by configuration, the remote gateway and the
cache layer.
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class ClientType(_ValuesMixin, str, Enum):
    """Which kind of consumer a translation set is published for."""

    BACKEND = "backend"
    FRONTEND = "frontend"
    MOBILE = "mobile"


class BundleFormat(_ValuesMixin, str, Enum):
    """Shape of the bundle payload returned by the remote service."""

    FLAT = "flat"
    NESTED = "nested"


class CacheStore(_ValuesMixin, str, Enum):
    """Backend used for the shared (TTL) cache tier."""

    REDIS = "redis"
    MEMORY = "memory"
