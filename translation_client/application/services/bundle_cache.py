"""Two-tier bundle cache with manifest-based staleness checks.

The shared tier (Redis or in-memory, TTL based) holds manifests and
bundles. A bundle is served from the shared tier only while its embedded
version equals the live manifest version for the same (tenant, locale,
client); otherwise it is refetched. When a refetch fails the stale entry
is served if fallback_on_error is on, else an empty mapping.

Per-key states: cold (no entry), fresh (entry, versions match), stale
(entry, versions differ), evicted (TTL expired, observed as cold).
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from translation_client.core.tenant_context import TranslationContext
from translation_client.domain.entities import Bundle, Manifest
from translation_client.domain.outcome import Degraded, FetchOutcome, Ok
from translation_client.infrastructure.cache.cache_protocol import CacheProtocol
from translation_client.infrastructure.cache.keys import (
    bundle_key,
    key_locale,
    manifest_key,
    prefix_group,
    tenant_index_key,
)
from translation_client.infrastructure.external.translation_api import TranslationGateway
from translation_client.shared.enums import BundleFormat
from translation_client.shared.telemetry.logging import get_channel_logger
from translation_client.shared.telemetry.tracing import add_span_event


class BundleCache:
    """Manifest-validated bundle cache over a shared TTL store."""

    def __init__(
        self,
        gateway: TranslationGateway,
        store: CacheProtocol,
        manifest_ttl: int = 300,
        bundle_ttl: int = 3600,
        fallback_on_error: bool = True,
        log: logging.LoggerAdapter | logging.Logger | None = None,
    ) -> None:
        self.gateway = gateway
        self.store = store
        self.manifest_ttl = manifest_ttl
        self.bundle_ttl = bundle_ttl
        self.fallback_on_error = fallback_on_error
        self.log = log or get_channel_logger()

    def _track(self, ctx: TranslationContext, key: str) -> None:
        """Record key in the tenant index so it can be evicted selectively."""
        self.store.index_add(
            tenant_index_key(ctx.tenant, ctx.app_prefix),
            key,
            ttl=max(self.manifest_ttl, self.bundle_ttl),
        )

    def check_version(
        self,
        ctx: TranslationContext,
        locale: str,
        client: str | None = None,
    ) -> Manifest:
        """Return the manifest, cached for manifest_ttl.

        The default manifest returned on remote failure is cached like any
        other, so an outage costs at most one manifest request per TTL.
        """
        client = client or ctx.client
        key = manifest_key(ctx.tenant, locale, client, ctx.app_prefix)
        data = self.store.remember(
            key,
            self.manifest_ttl,
            lambda: self.gateway.fetch_manifest(ctx, locale, client).to_cache(),
        )
        self._track(ctx, key)
        return Manifest.from_cache(data)

    def get_bundle(
        self,
        ctx: TranslationContext,
        locale: str,
        groups: Sequence[str] | None = None,
        client: str | None = None,
        fmt: str = BundleFormat.FLAT.value,
    ) -> FetchOutcome:
        """Return bundle data for groups (unprefixed names) or all groups.

        Returns:
            Ok when the data is fresh (cache hit with a matching version, or a
            successful refetch); Degraded with stale or empty data otherwise.
        """
        client = client or ctx.client
        prefixed = [prefix_group(g, ctx.app_prefix) for g in groups] if groups else None
        key = bundle_key(ctx.tenant, locale, prefixed, client, fmt, ctx.app_prefix)

        cached = Bundle.from_cache(self.store.get(key))
        manifest: Manifest | None = None
        if cached is not None:
            manifest = self.check_version(ctx, locale, client)
            if cached.is_current(manifest):
                self.log.debug("Using cached bundle for locale: %s", locale)
                return Ok(cached.data, cached.version)
            self.log.info(
                "Cached bundle stale for locale: %s (cached=%s, live=%s)",
                locale,
                cached.version,
                manifest.version,
            )

        outcome = self.gateway.fetch_bundle(ctx, locale, groups, client, fmt)
        if isinstance(outcome, Ok):
            if manifest is not None:
                version = manifest.version
            elif outcome.version is not None:
                version = outcome.version
            else:
                version = self.check_version(ctx, locale, client).version
            self.store.set(key, Bundle(version, outcome.data).to_cache(), ttl=self.bundle_ttl)
            self._track(ctx, key)
            return Ok(outcome.data, version)

        if self.fallback_on_error and cached is not None:
            self.log.warning("Using stale cache due to API failure: %s", outcome.reason.message)
            add_span_event(
                "translation.stale_fallback",
                {"locale": locale, "cached_version": cached.version},
            )
            return Degraded(cached.data, outcome.reason, stale=True)
        return Degraded({}, outcome.reason)

    def load_translations(self, ctx: TranslationContext, locale: str) -> FetchOutcome:
        """All groups of a locale in flat ('group.key' -> value) form."""
        return self.get_bundle(ctx, locale, None, ctx.client, BundleFormat.FLAT.value)

    def clear_all(self) -> bool:
        """Flush the entire shared tier (not only translation keys)."""
        self.log.info("Clearing all translation caches")
        return self.store.clear_all()

    def clear_tenant(self, ctx: TranslationContext, locale: str | None = None) -> int:
        """Evict the tenant's manifests and bundles, optionally for one locale.

        Returns:
            Number of keys deleted.
        """
        index_key = tenant_index_key(ctx.tenant, ctx.app_prefix)
        deleted = 0
        for key in self.store.index_members(index_key):
            if locale is None or key_locale(key, ctx.app_prefix) == locale:
                deleted += int(self.store.delete(key))
        if locale is None:
            self.store.delete(index_key)
        self.log.info(
            "Cleared %s cached translation keys (tenant=%s, locale=%s)",
            deleted,
            ctx.tenant,
            locale,
        )
        return deleted
