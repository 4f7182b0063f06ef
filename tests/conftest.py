"""Pytest configuration and fixtures for translation_client.

FakeTranslationService emulates the remote authority behind an
httpx.MockTransport so gateway, cache and loader tests run without a
network. MemoryCache stands in for Redis with a controllable clock.
"""

from __future__ import annotations

import json
import logging
from collections import Counter
from collections.abc import Iterator
from typing import Any

import httpx
import pytest

from translation_client.application.services.bundle_cache import BundleCache
from translation_client.core.config import get_settings
from translation_client.core.tenant_context import TranslationContext
from translation_client.infrastructure.cache.memory_cache import MemoryCache
from translation_client.infrastructure.external.translation_api import TranslationGateway
from translation_client.shared.utils.nested import set_nested_value

BASE_URL = "http://translations.test"


class FakeClock:
    """Monotonic clock tests can move forward."""

    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeTranslationService:
    """In-memory remote authority speaking the /api/v1/translation surface."""

    def __init__(self) -> None:
        # (tenant, locale, group, key, client) -> value
        self.records: dict[tuple[Any, ...], Any] = {}
        # (tenant, locale, client) -> version
        self.versions: dict[tuple[Any, ...], int] = {}
        self.calls: Counter[str] = Counter()
        self.requests: list[httpx.Request] = []
        self.manifest_status = 200
        self.bundle_status = 200
        self.push_status = 200
        self.raise_on: set[str] = set()

    def set_version(self, tenant: str | None, locale: str, client: str, version: int) -> None:
        self.versions[(tenant, locale, client)] = version

    def add(
        self,
        locale: str,
        group: str,
        key: str,
        value: Any,
        tenant: str | None = None,
        client: str = "backend",
    ) -> None:
        """Seed a record directly (no version bump)."""
        self.records[(tenant, locale, group, key, client)] = value
        self.versions.setdefault((tenant, locale, client), 1)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if path == "/api/v1/translation/manifest":
            return self._manifest(request)
        if path == "/api/v1/translation" and request.method == "GET":
            return self._bundle(request)
        if path == "/api/v1/translation" and request.method == "POST":
            return self._push(request)
        return httpx.Response(404, json={"message": "Not found"})

    def _maybe_fail(self, name: str, request: httpx.Request) -> None:
        if name in self.raise_on:
            raise httpx.ConnectError("connection refused", request=request)

    def _manifest(self, request: httpx.Request) -> httpx.Response:
        self.calls["manifest"] += 1
        self._maybe_fail("manifest", request)
        if self.manifest_status != 200:
            return httpx.Response(self.manifest_status, text="manifest unavailable")
        params = request.url.params
        tenant = params.get("tenant")
        locale = params["locale"]
        client = params["client"]
        version = self.versions.get((tenant, locale, client), 1)
        return httpx.Response(
            200,
            json={
                "tenant": tenant,
                "locale": locale,
                "client": client,
                "version": version,
                "etag": f'W/"v{version}"',
                "updated_at": "2026-10-01T12:00:00+00:00",
            },
        )

    def _bundle(self, request: httpx.Request) -> httpx.Response:
        self.calls["bundle"] += 1
        self._maybe_fail("bundle", request)
        if self.bundle_status != 200:
            return httpx.Response(self.bundle_status, text="bundle unavailable")
        params = request.url.params
        tenant = params.get("tenant")
        locale = params["locale"]
        client = params["client"]
        fmt = params.get("format", "flat")
        groups = params.get("groups")
        wanted = set(groups.split(",")) if groups else None

        data: dict[str, Any] = {}
        count = 0
        for (r_tenant, r_locale, group, key, r_client), value in sorted(
            self.records.items(), key=lambda item: item[0][2:4]
        ):
            if (r_tenant, r_locale, r_client) != (tenant, locale, client):
                continue
            if wanted is not None and group not in wanted:
                continue
            count += 1
            if fmt == "nested":
                set_nested_value(data.setdefault(group, {}), key, value)
            else:
                data[f"{group}.{key}"] = value
        version = self.versions.get((tenant, locale, client), 1)
        return httpx.Response(200, json={"data": data, "count": count, "version": version})

    def _push(self, request: httpx.Request) -> httpx.Response:
        self.calls["push"] += 1
        self._maybe_fail("push", request)
        if self.push_status != 200:
            return httpx.Response(self.push_status, json={"message": "Validation failed"})
        body = json.loads(request.content)
        created = updated = 0
        touched: set[tuple[Any, ...]] = set()
        for item in body["translations"]:
            ident = (
                item.get("tenant_uuid"),
                item["locale"],
                item["group"],
                item["key"],
                item["client"],
            )
            if ident in self.records:
                updated += 1
            else:
                created += 1
            self.records[ident] = item["value"]
            touched.add((ident[0], ident[1], ident[4]))
        for triple in touched:
            self.versions[triple] = self.versions.get(triple, 0) + 1
        return httpx.Response(
            200,
            json={
                "success": True,
                "created": created,
                "updated": updated,
                "total": created + updated,
            },
        )


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Each test starts from default settings with an in-memory store."""
    monkeypatch.setenv("TRANSLATION_SERVICE_URL", BASE_URL)
    monkeypatch.setenv("TRANSLATION_CACHE_STORE", "memory")
    monkeypatch.delenv("TRANSLATION_TENANT_UUID", raising=False)
    monkeypatch.delenv("TRANSLATION_APP_NAME_PREFIX", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def service() -> FakeTranslationService:
    return FakeTranslationService()


@pytest.fixture
def http_client(service: FakeTranslationService) -> Iterator[httpx.Client]:
    with httpx.Client(transport=httpx.MockTransport(service.handler)) as client:
        yield client


@pytest.fixture
def gateway(http_client: httpx.Client) -> TranslationGateway:
    return TranslationGateway(
        BASE_URL, timeout=5, http_client=http_client, log=logging.getLogger("tests")
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store(clock: FakeClock) -> MemoryCache:
    return MemoryCache(clock=clock)


@pytest.fixture
def ctx() -> TranslationContext:
    return TranslationContext(tenant="tenant-1", client="backend")


@pytest.fixture
def bundle_cache(gateway: TranslationGateway, store: MemoryCache) -> BundleCache:
    return BundleCache(
        gateway,
        store,
        manifest_ttl=300,
        bundle_ttl=3600,
        fallback_on_error=True,
        log=logging.getLogger("tests"),
    )
