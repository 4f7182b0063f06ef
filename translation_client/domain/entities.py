"""Translation domain entities.

Represent the remote authority's concepts (records, manifests, bundles)
independent of the HTTP wire format.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any

from translation_client.core.constants import (
    DEFAULT_MANIFEST_ETAG,
    DEFAULT_MANIFEST_VERSION,
)
from translation_client.domain.exceptions import ValidationException
from translation_client.shared.utils.datetime import utc_now

TranslationValue = str | list[str] | dict[str, str]


@dataclass(frozen=True)
class TranslationRecord:
    """One creatable/updatable translation.

    The remote authority upserts on (tenant, locale, group, key, client).
    key may encode nesting with '.' (e.g. 'auth.failed').
    """

    locale: str
    group: str
    key: str
    value: TranslationValue
    client: str = "backend"
    tenant: str | None = None
    is_active: bool = True

    def __post_init__(self) -> None:
        if not self.locale:
            raise ValidationException("Translation locale is required", field="locale")
        if not self.group:
            raise ValidationException("Translation group is required", field="group")
        if not self.key:
            raise ValidationException("Translation key is required", field="key")

    def to_payload(self) -> dict[str, Any]:
        """Return the record as sent to POST /translation."""
        data = asdict(self)
        data["tenant_uuid"] = data.pop("tenant")
        return data


@dataclass(frozen=True)
class Manifest:
    """Current version descriptor for a (tenant, locale, client) triple.

    is_default marks a synthesized manifest returned when the remote
    service could not be reached.
    """

    tenant: str | None
    locale: str
    client: str
    version: int
    etag: str
    updated_at: datetime | str | None = None
    is_default: bool = False

    @classmethod
    def default(cls, tenant: str | None, locale: str, client: str) -> Manifest:
        """Synthesized manifest used when the service is unavailable."""
        return cls(
            tenant=tenant,
            locale=locale,
            client=client,
            version=DEFAULT_MANIFEST_VERSION,
            etag=DEFAULT_MANIFEST_ETAG,
            updated_at=utc_now(),
            is_default=True,
        )

    def to_cache(self) -> dict[str, Any]:
        """JSON-serializable form for the shared cache tier."""
        updated_at = self.updated_at
        if isinstance(updated_at, datetime):
            updated_at = updated_at.isoformat()
        return {
            "tenant": self.tenant,
            "locale": self.locale,
            "client": self.client,
            "version": self.version,
            "etag": self.etag,
            "updated_at": updated_at,
            "is_default": self.is_default,
        }

    @classmethod
    def from_cache(cls, data: dict[str, Any]) -> Manifest:
        return cls(
            tenant=data.get("tenant"),
            locale=data["locale"],
            client=data["client"],
            version=int(data["version"]),
            etag=data.get("etag", ""),
            updated_at=data.get("updated_at"),
            is_default=bool(data.get("is_default", False)),
        )


@dataclass
class Bundle:
    """One fetch result tagged with the manifest version it was fetched under."""

    version: int
    data: dict[str, Any] = field(default_factory=dict)

    def is_current(self, manifest: Manifest) -> bool:
        """True while the embedded version matches the live manifest."""
        return self.version == manifest.version

    def to_cache(self) -> dict[str, Any]:
        return {"version": self.version, "data": self.data}

    @classmethod
    def from_cache(cls, data: Any) -> Bundle | None:
        """Rebuild from a shared-tier value; None when the value is unusable."""
        if not isinstance(data, dict) or "version" not in data:
            return None
        try:
            version = int(data["version"])
        except (TypeError, ValueError):
            return None
        payload = data.get("data")
        return cls(version=version, data=payload if isinstance(payload, dict) else {})


@dataclass(frozen=True)
class PushResult:
    """Counts returned by a bulk upsert."""

    created: int = 0
    updated: int = 0
    total: int = 0

    def as_dict(self) -> dict[str, int]:
        return {"created": self.created, "updated": self.updated, "total": self.total}
