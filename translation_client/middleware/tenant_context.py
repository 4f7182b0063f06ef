"""Tenant context middleware.

Sets the current tenant ID from the configured header (X-Tenant-ID by
default) so TenantResolver targets the right tenant's translations.
"""

from __future__ import annotations

from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from translation_client.core.config import get_settings
from translation_client.core.tenant_context import set_tenant_id


def TenantContextMiddleware(app: Callable, header_name: str | None = None) -> Callable:
    """Set tenant context from the tenant header before the route runs."""
    header = header_name or get_settings().tenant_header_name

    class _Middleware(BaseHTTPMiddleware):
        async def dispatch(self, request: Request, call_next: Callable) -> Response:
            set_tenant_id(request.headers.get(header) or None)
            try:
                return await call_next(request)
            finally:
                set_tenant_id(None)

    return _Middleware(app)
