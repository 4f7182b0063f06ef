"""Tenant context for translation lookups.

Middleware sets the current tenant_id in a context variable; the resolver
reads it and produces an explicit TranslationContext that is passed to the
gateway and key builder, so no call depends on mutable global config.
"""

from contextvars import ContextVar
from dataclasses import dataclass, replace

# Current tenant ID for the request (set by middleware, read by TenantResolver).
current_tenant_id: ContextVar[str | None] = ContextVar(
    "current_tenant_id", default=None
)


def set_tenant_id(tenant_id: str | None) -> None:
    """Set the current tenant ID for this context (e.g. request)."""
    current_tenant_id.set(tenant_id)


def get_tenant_id() -> str | None:
    """Return the current tenant ID if set."""
    return current_tenant_id.get()


@dataclass(frozen=True)
class TranslationContext:
    """Who a translation operation is for.

    Attributes:
        tenant: Tenant identifier, or None for global translations.
        client: Client type tag (backend, frontend, mobile).
        app_prefix: Application namespace prepended to every group.
    """

    tenant: str | None = None
    client: str = "backend"
    app_prefix: str | None = None

    def with_tenant(self, tenant: str | None) -> "TranslationContext":
        """Return a copy targeting another tenant."""
        return replace(self, tenant=tenant)
