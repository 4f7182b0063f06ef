"""Persistence: tenant registry lookup."""

from translation_client.infrastructure.persistence.tenant_registry import SqlTenantRegistry

__all__ = ["SqlTenantRegistry"]
