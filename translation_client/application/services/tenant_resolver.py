"""Tenant resolution for translation lookups.

Priority:
1. The authenticated actor's tenant, if the actor implements TenantAwareActor.
2. The override from set_tenant().
3. The tenant set on the request context (X-Tenant-ID middleware).
4. The configured tenant.
5. The first tenant by creation order in the tenant registry, cached for
   an hour. An empty registry or a registry failure resolves to None
   (global translations), and that result is cached too.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol, runtime_checkable

from translation_client.core.constants import CACHE_KEY_FIRST_TENANT, FIRST_TENANT_TTL
from translation_client.core.tenant_context import TranslationContext, get_tenant_id
from translation_client.infrastructure.cache.cache_protocol import CacheProtocol
from translation_client.shared.context import get_current_actor
from translation_client.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


@runtime_checkable
class TenantAwareActor(Protocol):
    """Implemented by host user models that belong to a tenant."""

    tenant_id: str | None


class TenantRegistry(Protocol):
    """Source of the fallback tenant."""

    def first_tenant_id(self) -> str | None:
        """Return the identifier of the oldest tenant, or None."""
        ...


class TenantResolver:
    """Resolve the tenant an operation targets."""

    def __init__(
        self,
        configured_tenant: str | None = None,
        registry: TenantRegistry | None = None,
        cache: CacheProtocol | None = None,
        actor_provider: Callable[[], Any] = get_current_actor,
    ) -> None:
        self._configured = configured_tenant
        self._override: str | None = None
        self.registry = registry
        self.cache = cache
        self.actor_provider = actor_provider

    def set_tenant(self, tenant_id: str | None) -> None:
        """Override the request and configured tenant on this resolver (None clears it)."""
        self._override = tenant_id

    def resolve(self) -> str | None:
        actor = self.actor_provider()
        if isinstance(actor, TenantAwareActor) and actor.tenant_id:
            return actor.tenant_id
        if self._override:
            return self._override
        request_tenant = get_tenant_id()
        if request_tenant:
            return request_tenant
        if self._configured:
            return self._configured
        return self.first_tenant()

    def first_tenant(self) -> str | None:
        """Oldest tenant from the registry (cached for FIRST_TENANT_TTL)."""
        if self.registry is None:
            logger.debug("No tenant resolved; using global translations")
            return None
        if self.cache is None:
            return self.registry.first_tenant_id()
        # Wrapped so that "no tenant" is cached as well.
        cached = self.cache.remember(
            CACHE_KEY_FIRST_TENANT,
            FIRST_TENANT_TTL,
            lambda: {"tenant": self.registry.first_tenant_id()},
        )
        return cached.get("tenant") if isinstance(cached, dict) else None

    def context(self, client: str, app_prefix: str | None = None) -> TranslationContext:
        """Build a TranslationContext for the currently resolved tenant."""
        return TranslationContext(tenant=self.resolve(), client=client, app_prefix=app_prefix)
