"""Core: config, constants, and request-scoped tenant context.

Single place for settings and shared constants.
"""

from translation_client.core.config import Settings, get_settings

__all__ = ["Settings", "get_settings"]
