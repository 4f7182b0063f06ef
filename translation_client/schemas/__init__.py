"""Wire schemas for the remote translation service (pydantic)."""

from translation_client.schemas.translation import (
    BundleResponse,
    ManifestResponse,
    PushRequest,
    PushResponse,
)

__all__ = ["BundleResponse", "ManifestResponse", "PushRequest", "PushResponse"]
