"""Request context management using contextvars.

Provides thread-safe, async-safe storage for request-scoped data: the
authenticated actor (used for tenant resolution) and the active locale
(set by the locale middleware, read by the loader bootstrap).

Usage:
    set_current_actor(user)
    set_current_locale("ar")
    locale = get_current_locale() or settings.default_locale
"""

from contextvars import ContextVar
from typing import Any

_current_actor: ContextVar[Any | None] = ContextVar("current_actor", default=None)
_current_locale: ContextVar[str | None] = ContextVar("current_locale", default=None)


def set_current_actor(actor: Any | None) -> None:
    """Set the authenticated actor for this request (or None when anonymous)."""
    _current_actor.set(actor)


def clear_current_actor() -> None:
    """Clear the current actor."""
    _current_actor.set(None)


def get_current_actor() -> Any | None:
    """Return the authenticated actor, or None if not authenticated."""
    return _current_actor.get()


def set_current_locale(locale: str | None) -> None:
    """Set the active locale for this request."""
    _current_locale.set(locale)


def clear_current_locale() -> None:
    """Clear the active locale."""
    _current_locale.set(None)


def get_current_locale() -> str | None:
    """Return the active locale if one was detected for this request."""
    return _current_locale.get()
