"""External services: the remote translation authority."""

from translation_client.infrastructure.external.translation_api import TranslationGateway

__all__ = ["TranslationGateway"]
