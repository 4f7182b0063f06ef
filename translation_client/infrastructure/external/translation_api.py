"""HTTP gateway to the remote translation service.

Reads (manifest, bundle) degrade instead of raising: a failed manifest
read yields the default manifest and a failed bundle read yields a
Degraded outcome the cache layer can fall back from. Writes raise
RemoteWriteError, since a silently dropped import is worse than a loud one.
All calls are synchronous and bounded by the configured timeout; nothing
is retried.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

import httpx
from pydantic import ValidationError

from translation_client.core.constants import (
    API_PREFIX,
    GROUPS_QUERY_SEP,
    MANIFEST_PATH,
    TRANSLATION_PATH,
)
from translation_client.core.tenant_context import TranslationContext
from translation_client.domain.entities import (
    Manifest,
    PushResult,
    TranslationRecord,
    TranslationValue,
)
from translation_client.domain.exceptions import RemoteWriteError, TransientFetchError
from translation_client.domain.outcome import Degraded, FetchOutcome, Ok
from translation_client.infrastructure.cache.keys import prefix_group
from translation_client.schemas.translation import (
    BundleResponse,
    ManifestResponse,
    PushRequest,
    PushResponse,
)
from translation_client.shared.enums import BundleFormat
from translation_client.shared.telemetry.logging import get_channel_logger
from translation_client.shared.telemetry.tracing import add_span_attributes, traced


def _clean_params(params: dict[str, Any]) -> dict[str, Any]:
    """Drop None values so they are omitted from the query string."""
    return {k: v for k, v in params.items() if v is not None}


class TranslationGateway:
    """Synchronous client for the translation service's /api/v1 surface."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        http_client: httpx.Client | None = None,
        log: logging.LoggerAdapter | logging.Logger | None = None,
    ) -> None:
        """Initialize the gateway.

        Args:
            base_url: Service root (e.g. https://i18n.example.com); /api/v1 is appended.
            timeout: Per-request timeout in seconds.
            http_client: Optional preconfigured httpx.Client (tests pass a MockTransport).
            log: Logger; defaults to the configured translation channel.
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._owns_client = http_client is None
        self._http = http_client or httpx.Client(timeout=timeout)
        self.log = log or get_channel_logger()

    def _url(self, path: str) -> str:
        return f"{self.base_url}{API_PREFIX}{path}"

    def close(self) -> None:
        """Close the underlying HTTP client if this gateway created it."""
        if self._owns_client:
            self._http.close()

    def __enter__(self) -> TranslationGateway:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @traced("translation.fetch_manifest")
    def fetch_manifest(
        self,
        ctx: TranslationContext,
        locale: str,
        client: str | None = None,
    ) -> Manifest:
        """Fetch the current manifest; never raises on read failure.

        Returns:
            The service's manifest, or Manifest.default() (version 1) when the
            service is unreachable, answers non-2xx, or returns an invalid body.
        """
        client = client or ctx.client
        url = self._url(MANIFEST_PATH)
        self.log.info("Fetching manifest for locale: %s, client: %s", locale, client)
        try:
            response = self._http.get(
                url,
                params=_clean_params(
                    {"tenant": ctx.tenant, "locale": locale, "client": client}
                ),
                timeout=self.timeout,
            )
        except httpx.HTTPError as exc:
            self.log.error("Translation manifest error: %s", exc)
            return Manifest.default(ctx.tenant, locale, client)

        if not response.is_success:
            self.log.error(
                "Translation manifest fetch failed (status=%s, body=%s)",
                response.status_code,
                response.text,
            )
            return Manifest.default(ctx.tenant, locale, client)

        try:
            manifest = ManifestResponse.model_validate(response.json()).to_entity()
        except (ValueError, ValidationError) as exc:
            self.log.error("Translation manifest invalid: %s", exc)
            return Manifest.default(ctx.tenant, locale, client)

        self.log.info("Manifest fetched successfully (version=%s)", manifest.version)
        add_span_attributes(manifest_version=manifest.version)
        return manifest

    @traced("translation.fetch_bundle")
    def fetch_bundle(
        self,
        ctx: TranslationContext,
        locale: str,
        groups: Sequence[str] | None = None,
        client: str | None = None,
        fmt: str = BundleFormat.FLAT.value,
    ) -> FetchOutcome:
        """Fetch a bundle for the given (unprefixed) groups, or all groups.

        Returns:
            Ok(data, version) on success; Degraded({}, reason) on failure.
        """
        client = client or ctx.client
        prefixed = [prefix_group(g, ctx.app_prefix) for g in groups] if groups else None
        url = self._url(TRANSLATION_PATH)
        self.log.info("Fetching bundle for locale: %s, groups: %s", locale, prefixed)
        try:
            response = self._http.get(
                url,
                params=_clean_params(
                    {
                        "tenant": ctx.tenant,
                        "locale": locale,
                        "groups": GROUPS_QUERY_SEP.join(prefixed) if prefixed else None,
                        "client": client,
                        "format": fmt,
                    }
                ),
                timeout=self.timeout,
            )
        except httpx.HTTPError as exc:
            self.log.error("Translation bundle error: %s", exc)
            return Degraded({}, TransientFetchError(str(exc) or type(exc).__name__, url=url))

        if not response.is_success:
            self.log.error(
                "Translation bundle fetch failed (status=%s, locale=%s)",
                response.status_code,
                locale,
            )
            return Degraded(
                {},
                TransientFetchError(
                    f"Bundle fetch returned {response.status_code}",
                    status_code=response.status_code,
                    url=url,
                ),
            )

        try:
            bundle = BundleResponse.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            self.log.error("Translation bundle invalid: %s", exc)
            return Degraded({}, TransientFetchError(f"Invalid bundle body: {exc}", url=url))

        self.log.info(
            "Bundle fetched successfully (count=%s, version=%s)", bundle.count, bundle.version
        )
        add_span_attributes(bundle_count=bundle.count)
        return Ok(bundle.data, bundle.version)

    @traced("translation.push_records")
    def push_records(
        self, records: Sequence[TranslationRecord | dict[str, Any]]
    ) -> PushResult:
        """Upsert a batch of records in a single request.

        Raises:
            RemoteWriteError: On transport failure or non-2xx response.
        """
        payload = PushRequest(
            translations=[
                r.to_payload() if isinstance(r, TranslationRecord) else dict(r)
                for r in records
            ]
        )
        url = self._url(TRANSLATION_PATH)
        self.log.info("Pushing %s translations to service", len(payload.translations))
        try:
            response = self._http.post(url, json=payload.model_dump(), timeout=self.timeout)
        except httpx.HTTPError as exc:
            self.log.error("Translation push error: %s", exc)
            raise RemoteWriteError(None, str(exc) or type(exc).__name__) from exc

        if not response.is_success:
            self.log.error(
                "Failed to push translations (status=%s, body=%s)",
                response.status_code,
                response.text,
            )
            raise RemoteWriteError(response.status_code, response.text)

        try:
            result = PushResponse.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise RemoteWriteError(response.status_code, f"Invalid push response: {exc}") from exc

        total = result.total if result.total is not None else result.created + result.updated
        self.log.info(
            "Translations pushed successfully (created=%s, updated=%s)",
            result.created,
            result.updated,
        )
        return PushResult(created=result.created, updated=result.updated, total=total)

    def push_record(
        self,
        ctx: TranslationContext,
        locale: str,
        group: str,
        key: str,
        value: TranslationValue,
        client: str | None = None,
        is_active: bool = True,
    ) -> PushResult:
        """Upsert one record; the group gets the context's app prefix."""
        record = TranslationRecord(
            tenant=ctx.tenant,
            locale=locale,
            group=prefix_group(group, ctx.app_prefix),
            key=key,
            value=value,
            client=client or ctx.client,
            is_active=is_active,
        )
        return self.push_records([record])
