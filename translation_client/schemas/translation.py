"""Translation service API schemas.

Responses are parsed leniently (extra fields ignored) so additive changes
on the service side do not break the client.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from translation_client.domain.entities import Manifest


class ManifestResponse(BaseModel):
    """GET /translation/manifest response."""

    model_config = ConfigDict(extra="ignore")

    tenant: str | None = None
    locale: str
    client: str
    version: int
    etag: str = ""
    updated_at: datetime | str | None = None

    def to_entity(self) -> Manifest:
        return Manifest(
            tenant=self.tenant,
            locale=self.locale,
            client=self.client,
            version=self.version,
            etag=self.etag,
            updated_at=self.updated_at,
        )


class BundleResponse(BaseModel):
    """GET /translation response.

    data maps each (app-prefixed) group to its translations; in flat
    format the service returns 'group.key' -> value at the top level.
    """

    model_config = ConfigDict(extra="ignore")

    data: dict[str, Any] = Field(default_factory=dict)
    count: int = 0
    version: int | None = None


class PushRequest(BaseModel):
    """POST /translation body."""

    translations: list[dict[str, Any]]


class PushResponse(BaseModel):
    """POST /translation response."""

    model_config = ConfigDict(extra="ignore")

    success: bool = True
    created: int = 0
    updated: int = 0
    total: int | None = None
