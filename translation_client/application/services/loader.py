"""Translation loader backed by the remote service.

Implements the host framework's loader contract (load, add_namespace,
add_json_path, namespaces) on top of BundleCache, with a process-local
tier in front of it. The process-local tier has no TTL; it is cleared
explicitly with clear_loaded(). Entries and preloaded flags are kept per
tenant, so one loader can serve requests for several tenants.

Once a locale has been preloaded, a key absent from the process-local tier
means "this group has no translations" and load() returns {} without a
network call.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from translation_client.application.services.bundle_cache import BundleCache
from translation_client.core.constants import CACHE_KEY_SEP, KEY_DELIMITER
from translation_client.core.tenant_context import TranslationContext
from translation_client.domain.outcome import Ok
from translation_client.infrastructure.cache.keys import (
    api_group,
    loaded_key,
    locale_prefix,
    namespaced_group,
)
from translation_client.shared.enums import BundleFormat
from translation_client.shared.telemetry.logging import get_channel_logger
from translation_client.shared.utils.nested import set_nested_value

ContextSource = TranslationContext | Callable[[], TranslationContext]


class ApiTranslationLoader:
    """Loader contract adapter: (locale, group, namespace) -> nested mapping.

    context is either a fixed TranslationContext or a callable returning
    the context for the current request (e.g. TenantResolver.context).
    """

    def __init__(
        self,
        bundle_cache: BundleCache,
        context: ContextSource,
        log: logging.LoggerAdapter | logging.Logger | None = None,
    ) -> None:
        self.bundle_cache = bundle_cache
        self._context = context
        # (tenant, loaded_key) -> nested group mapping
        self._loaded: dict[tuple[str | None, str], dict[str, Any]] = {}
        # (tenant, locale)
        self._preloaded: set[tuple[str | None, str]] = set()
        self._namespaces: dict[str, str] = {}
        self.log = log or get_channel_logger()

    def context(self) -> TranslationContext:
        if callable(self._context):
            return self._context()
        return self._context

    def load(self, locale: str, group: str, namespace: str | None = None) -> dict[str, Any]:
        """Return the translations of one group as a nested mapping.

        Args:
            locale: Locale code (e.g. 'ar').
            group: Group name (e.g. 'messages').
            namespace: Optional namespace; None, '' and '*' mean none.
        """
        ctx = self.context()
        key = (ctx.tenant, loaded_key(locale, group, namespace, ctx.app_prefix))
        if key in self._loaded:
            return self._loaded[key]
        if (ctx.tenant, locale) in self._preloaded:
            return {}

        group_name = namespaced_group(group, namespace)
        outcome = self.bundle_cache.get_bundle(
            ctx, locale, [group_name], None, BundleFormat.NESTED.value
        )
        result = outcome.data.get(api_group(group, namespace, ctx.app_prefix), {})
        if not isinstance(result, dict):
            result = {}
        # Degraded empty results are not memoized so the next call retries.
        if isinstance(outcome, Ok) or result:
            self._loaded[key] = result
        return result

    def preload_locale(self, locale: str) -> int:
        """Warm the process-local tier with every group of a locale.

        Flat keys ('group.a.b') are split on the first '.' and the rest is
        rebuilt into a tree. The locale is marked preloaded unless the
        fetch failed with nothing to fall back on.

        Returns:
            Number of flat translations merged.
        """
        ctx = self.context()
        outcome = self.bundle_cache.load_translations(ctx, locale)
        app_group_prefix = f"{ctx.app_prefix}{CACHE_KEY_SEP}" if ctx.app_prefix else ""

        count = 0
        for flat_key, value in outcome.data.items():
            group, sep, item = flat_key.partition(KEY_DELIMITER)
            if not sep or not item:
                continue
            if app_group_prefix and group.startswith(app_group_prefix):
                group = group[len(app_group_prefix):]
            key = (ctx.tenant, loaded_key(locale, group, None, ctx.app_prefix))
            set_nested_value(self._loaded.setdefault(key, {}), item, value)
            count += 1

        if isinstance(outcome, Ok) or outcome.data:
            self._preloaded.add((ctx.tenant, locale))
        else:
            self.log.warning("Preload for locale %s skipped: %s", locale, outcome.reason.message)
        self.log.info("Preloaded %s translations for locale: %s", count, locale)
        return count

    def is_preloaded(self, locale: str) -> bool:
        """True once the current tenant's locale has been preloaded."""
        return (self.context().tenant, locale) in self._preloaded

    def clear_loaded(self, locale: str | None = None) -> None:
        """Drop entries and preloaded flags of a locale (or all) for every tenant."""
        if locale is None:
            self._loaded.clear()
            self._preloaded.clear()
            return
        prefix = locale_prefix(locale, self.context().app_prefix)
        for key in [k for k in self._loaded if k[1].startswith(prefix)]:
            del self._loaded[key]
        self._preloaded = {p for p in self._preloaded if p[1] != locale}

    def get_loaded(self) -> dict[str, dict[str, Any]]:
        """Process-local entries of the current tenant, by loader key."""
        tenant = self.context().tenant
        return {key: value for (owner, key), value in self._loaded.items() if owner == tenant}

    def add_namespace(self, namespace: str, hint: str) -> None:
        self._namespaces[namespace] = hint

    def add_json_path(self, path: str) -> None:
        """Part of the loader contract; JSON files are not read by this loader."""

    def namespaces(self) -> dict[str, str]:
        return self._namespaces
