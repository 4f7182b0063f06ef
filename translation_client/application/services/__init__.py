"""Application services: bundle cache, loader, tenant resolution, import."""

from translation_client.application.services.bundle_cache import BundleCache
from translation_client.application.services.importer import (
    ImportReport,
    Importer,
    UnitResult,
    find_lang_directories,
    flatten,
    is_translatable_leaf,
    namespace_from_path,
)
from translation_client.application.services.loader import ApiTranslationLoader
from translation_client.application.services.tenant_resolver import (
    TenantAwareActor,
    TenantRegistry,
    TenantResolver,
)

__all__ = [
    "ApiTranslationLoader",
    "BundleCache",
    "ImportReport",
    "Importer",
    "TenantAwareActor",
    "TenantRegistry",
    "TenantResolver",
    "UnitResult",
    "find_lang_directories",
    "flatten",
    "is_translatable_leaf",
    "namespace_from_path",
]
