"""Shared utilities: context, enums, telemetry, and cross-cutting helpers.

Used by domain, application, and infrastructure. No business logic.
"""

from translation_client.shared.context import (
    clear_current_actor,
    clear_current_locale,
    get_current_actor,
    get_current_locale,
    set_current_actor,
    set_current_locale,
)
from translation_client.shared.enums import BundleFormat, CacheStore, ClientType

__all__ = [
    "BundleFormat",
    "CacheStore",
    "ClientType",
    "clear_current_actor",
    "clear_current_locale",
    "get_current_actor",
    "get_current_locale",
    "set_current_actor",
    "set_current_locale",
]
