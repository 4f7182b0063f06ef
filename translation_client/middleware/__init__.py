"""HTTP middleware: tenant and locale context for translation lookups.

Add both to the host Starlette/FastAPI app; tenant first so the locale
middleware runs inside it.
"""

from translation_client.middleware.locale import LocaleMiddleware
from translation_client.middleware.tenant_context import TenantContextMiddleware

__all__ = ["LocaleMiddleware", "TenantContextMiddleware"]
