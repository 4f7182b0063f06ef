"""Tests for BundleCache manifest-based staleness and eviction."""

import logging

from translation_client.application.services.bundle_cache import BundleCache
from translation_client.domain.entities import Bundle
from translation_client.domain.outcome import Degraded, Ok
from translation_client.infrastructure.cache.keys import bundle_key, manifest_key


def _messages_key(locale: str = "en", fmt: str = "flat") -> str:
    return bundle_key("tenant-1", locale, ["messages"], "backend", fmt)


class TestCheckVersion:
    def test_manifest_cached_for_ttl(self, bundle_cache, service, ctx, clock) -> None:
        service.set_version("tenant-1", "en", "backend", 2)
        assert bundle_cache.check_version(ctx, "en").version == 2
        service.set_version("tenant-1", "en", "backend", 3)
        assert bundle_cache.check_version(ctx, "en").version == 2
        assert service.calls["manifest"] == 1

        clock.advance(301)
        assert bundle_cache.check_version(ctx, "en").version == 3
        assert service.calls["manifest"] == 2

    def test_default_manifest_cached_during_outage(self, bundle_cache, service, ctx) -> None:
        service.raise_on.add("manifest")
        first = bundle_cache.check_version(ctx, "en")
        second = bundle_cache.check_version(ctx, "en")
        assert first.is_default and second.is_default
        assert first.version == 1
        assert service.calls["manifest"] == 1

    def test_manifest_stored_under_tenant_key(self, bundle_cache, store, ctx) -> None:
        bundle_cache.check_version(ctx, "en")
        assert store.get(manifest_key("tenant-1", "en", "backend"))["version"] == 1


class TestGetBundle:
    def test_cold_fetch_stores_bundle_with_version(self, bundle_cache, service, store, ctx) -> None:
        service.add("en", "messages", "welcome", "Welcome", tenant="tenant-1")
        service.set_version("tenant-1", "en", "backend", 4)

        outcome = bundle_cache.get_bundle(ctx, "en", ["messages"])

        assert isinstance(outcome, Ok)
        assert outcome.data == {"messages.welcome": "Welcome"}
        assert store.get(_messages_key()) == {
            "version": 4,
            "data": {"messages.welcome": "Welcome"},
        }

    def test_fresh_hit_makes_no_bundle_request(self, bundle_cache, service, store, ctx) -> None:
        service.set_version("tenant-1", "en", "backend", 4)
        store.set(_messages_key(), Bundle(4, {"messages.welcome": "Cached"}).to_cache(), ttl=3600)

        outcome = bundle_cache.get_bundle(ctx, "en", ["messages"])

        assert outcome == Ok({"messages.welcome": "Cached"}, 4)
        assert service.calls["bundle"] == 0
        assert service.calls["manifest"] == 1

    def test_stale_entry_refetched_exactly_once(self, bundle_cache, service, store, ctx) -> None:
        service.add("en", "messages", "welcome", "Hi", tenant="tenant-1")
        service.set_version("tenant-1", "en", "backend", 4)
        store.set(_messages_key(), Bundle(3, {"messages.welcome": "Old"}).to_cache(), ttl=3600)

        outcome = bundle_cache.get_bundle(ctx, "en", ["messages"])

        assert outcome.data == {"messages.welcome": "Hi"}
        assert service.calls["bundle"] == 1
        assert store.get(_messages_key())["version"] == 4

        bundle_cache.get_bundle(ctx, "en", ["messages"])
        assert service.calls["bundle"] == 1

    def test_stale_served_on_failure_with_fallback(self, bundle_cache, service, store, ctx) -> None:
        service.set_version("tenant-1", "en", "backend", 4)
        service.bundle_status = 500
        store.set(_messages_key(), Bundle(3, {"messages.welcome": "Old"}).to_cache(), ttl=3600)

        outcome = bundle_cache.get_bundle(ctx, "en", ["messages"])

        assert isinstance(outcome, Degraded)
        assert outcome.stale is True
        assert outcome.data == {"messages.welcome": "Old"}
        assert outcome.reason.status_code == 500

    def test_empty_on_failure_without_fallback(self, gateway, store, service, ctx) -> None:
        cache = BundleCache(gateway, store, fallback_on_error=False, log=logging.getLogger("t"))
        service.set_version("tenant-1", "en", "backend", 4)
        service.bundle_status = 500
        store.set(_messages_key(), Bundle(3, {"messages.welcome": "Old"}).to_cache(), ttl=3600)

        outcome = cache.get_bundle(ctx, "en", ["messages"])

        assert isinstance(outcome, Degraded)
        assert outcome.data == {}
        assert outcome.stale is False

    def test_cold_failure_is_empty_degraded(self, bundle_cache, service, store, ctx) -> None:
        service.raise_on.add("bundle")
        outcome = bundle_cache.get_bundle(ctx, "en", ["messages"])
        assert outcome.degraded
        assert outcome.data == {}
        assert store.get(_messages_key()) is None

    def test_manifest_change_seen_only_after_manifest_ttl(
        self, bundle_cache, service, ctx, clock
    ) -> None:
        service.add("en", "messages", "welcome", "Hi", tenant="tenant-1")
        service.set_version("tenant-1", "en", "backend", 4)
        bundle_cache.get_bundle(ctx, "en", ["messages"])
        bundle_cache.get_bundle(ctx, "en", ["messages"])
        assert service.calls["bundle"] == 1

        service.add("en", "messages", "welcome", "Hello", tenant="tenant-1")
        service.set_version("tenant-1", "en", "backend", 5)
        assert bundle_cache.get_bundle(ctx, "en", ["messages"]).data == {
            "messages.welcome": "Hi"
        }
        assert service.calls["bundle"] == 1

        clock.advance(301)
        assert bundle_cache.get_bundle(ctx, "en", ["messages"]).data == {
            "messages.welcome": "Hello"
        }
        assert service.calls["bundle"] == 2

    def test_arabic_values_survive_nested_round_trip(self, bundle_cache, gateway, ctx) -> None:
        gateway.push_record(ctx, "ar", "messages", "welcome", "مرحبا")
        outcome = bundle_cache.get_bundle(ctx, "ar", ["messages"], fmt="nested")
        assert outcome.data == {"messages": {"welcome": "مرحبا"}}
        # Second read comes from the shared tier.
        assert bundle_cache.get_bundle(ctx, "ar", ["messages"], fmt="nested").data == {
            "messages": {"welcome": "مرحبا"}
        }

    def test_load_translations_is_all_groups_flat(self, bundle_cache, service, ctx) -> None:
        service.add("en", "messages", "welcome", "Hi", tenant="tenant-1")
        service.add("en", "auth", "failed", "Nope", tenant="tenant-1")
        outcome = bundle_cache.load_translations(ctx, "en")
        assert outcome.data == {"auth.failed": "Nope", "messages.welcome": "Hi"}
        assert "groups" not in service.requests[-1].url.params


class TestEviction:
    def test_clear_tenant_by_locale(self, bundle_cache, store, ctx) -> None:
        bundle_cache.get_bundle(ctx, "en", ["messages"])
        bundle_cache.get_bundle(ctx, "ar", ["messages"])

        deleted = bundle_cache.clear_tenant(ctx, "en")

        assert deleted == 1
        assert store.get(_messages_key("en")) is None
        assert store.get(_messages_key("ar")) is not None

    def test_clear_tenant_all_locales(self, bundle_cache, store, ctx) -> None:
        bundle_cache.get_bundle(ctx, "en", ["messages"])
        bundle_cache.check_version(ctx, "en")
        bundle_cache.get_bundle(ctx, "ar", ["messages"])

        assert bundle_cache.clear_tenant(ctx) == 3
        assert store.get(_messages_key("ar")) is None
        assert store.get(manifest_key("tenant-1", "en", "backend")) is None

    def test_clear_tenant_leaves_other_tenants(self, bundle_cache, store, ctx) -> None:
        other = ctx.with_tenant("tenant-2")
        bundle_cache.get_bundle(ctx, "en", ["messages"])
        bundle_cache.get_bundle(other, "en", ["messages"])

        bundle_cache.clear_tenant(ctx)

        assert store.get(bundle_key("tenant-2", "en", ["messages"], "backend", "flat"))

    def test_clear_all(self, bundle_cache, store, service, ctx) -> None:
        bundle_cache.get_bundle(ctx, "en", ["messages"])
        assert bundle_cache.clear_all() is True
        assert store.get(_messages_key()) is None
        bundle_cache.get_bundle(ctx, "en", ["messages"])
        assert service.calls["bundle"] == 2
