"""Wire the translation client from settings and warm it at startup.

build_services() assembles the shared cache store, gateway, bundle cache,
tenant resolver and loader. boot() then registers namespaces discovered in
the service's data and preloads the current locale, as configured. Both
boot steps only log on failure; translations then load on demand.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

import httpx

from translation_client.application.services.bundle_cache import BundleCache
from translation_client.application.services.importer import Importer
from translation_client.application.services.loader import ApiTranslationLoader
from translation_client.application.services.tenant_resolver import (
    TenantRegistry,
    TenantResolver,
)
from translation_client.core.config import Settings, get_settings
from translation_client.core.tenant_context import TranslationContext
from translation_client.infrastructure.cache.cache_protocol import CacheProtocol
from translation_client.infrastructure.cache.factory import get_cache_store
from translation_client.infrastructure.external.translation_api import TranslationGateway
from translation_client.infrastructure.persistence.tenant_registry import SqlTenantRegistry
from translation_client.shared.context import get_current_locale
from translation_client.shared.enums import BundleFormat
from translation_client.shared.telemetry.logging import get_channel_logger

# "Namespace::group.key" or "PREFIX:Namespace::group.key"
_NAMESPACE_RE = re.compile(r"^(?:[^:]+:)?([^:]+)::")


@dataclass
class TranslationServices:
    """The wired object graph for one process."""

    settings: Settings
    store: CacheProtocol
    gateway: TranslationGateway
    bundle_cache: BundleCache
    resolver: TenantResolver
    loader: ApiTranslationLoader

    def context(self) -> TranslationContext:
        """Context for the currently resolved tenant."""
        return self.resolver.context(self.settings.client, self.settings.app_name_prefix)

    def importer(self) -> Importer:
        return Importer(self.gateway, self.context(), log=self.gateway.log)

    def close(self) -> None:
        self.gateway.close()


def build_services(
    settings: Settings | None = None,
    *,
    store: CacheProtocol | None = None,
    http_client: httpx.Client | None = None,
    registry: TenantRegistry | None = None,
) -> TranslationServices:
    """Assemble services from settings; keyword args override collaborators (tests)."""
    settings = settings or get_settings()
    log = get_channel_logger(settings.logging_enabled, settings.logging_channel)
    store = store if store is not None else get_cache_store(settings)
    gateway = TranslationGateway(
        settings.service_url, settings.http_timeout, http_client=http_client, log=log
    )
    bundle_cache = BundleCache(
        gateway,
        store,
        manifest_ttl=settings.manifest_ttl,
        bundle_ttl=settings.bundle_ttl,
        fallback_on_error=settings.fallback_on_error,
        log=log,
    )
    if registry is None and settings.tenant_database_url:
        registry = SqlTenantRegistry.from_url(settings.tenant_database_url)
    resolver = TenantResolver(settings.tenant_uuid, registry=registry, cache=store)

    def context() -> TranslationContext:
        return resolver.context(settings.client, settings.app_name_prefix)

    return TranslationServices(
        settings=settings,
        store=store,
        gateway=gateway,
        bundle_cache=bundle_cache,
        resolver=resolver,
        loader=ApiTranslationLoader(bundle_cache, context, log=log),
    )


def discover_namespaces(keys: list[str]) -> list[str]:
    """Namespaces appearing in flat bundle keys, in first-seen order."""
    found: dict[str, None] = {}
    for key in keys:
        match = _NAMESPACE_RE.match(key)
        if match:
            found[match.group(1)] = None
    return list(found)


def register_namespaces(services: TranslationServices, locale: str) -> list[str]:
    """Register every namespace found in the locale's flat bundle on the loader."""
    outcome = services.bundle_cache.get_bundle(
        services.context(), locale, None, None, BundleFormat.FLAT.value
    )
    if outcome.degraded and not outcome.data:
        services.loader.log.warning(
            "Failed to auto-register namespaces: %s", outcome.reason.message
        )
        return []
    namespaces = discover_namespaces(list(outcome.data))
    for namespace in namespaces:
        services.loader.add_namespace(namespace, services.settings.lang_path)
    return namespaces


def boot(services: TranslationServices, locale: str | None = None) -> None:
    """Run the configured startup steps for locale (default: request or default locale)."""
    locale = locale or get_current_locale() or services.settings.default_locale
    if services.settings.auto_register_namespaces:
        register_namespaces(services, locale)
    if services.settings.preload:
        services.loader.preload_locale(locale)
