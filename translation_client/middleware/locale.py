"""Locale detection middleware.

Picks the request locale from, in order: the ?locale= query parameter,
the X-Locale header, the best Accept-Language match, and the
authenticated actor's preferred locale. Only configured locales are
accepted; otherwise the request keeps no explicit locale and callers
fall back to settings.default_locale.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Callable, Protocol, runtime_checkable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from translation_client.core.config import get_settings
from translation_client.shared.context import get_current_actor, set_current_locale


@runtime_checkable
class LocaleAwareActor(Protocol):
    """Implemented by host user models that store a preferred locale."""

    preferred_locale: str | None


def parse_accept_language(header: str | None) -> list[str]:
    """Return language tags from an Accept-Language header, best first."""
    if not header:
        return []
    weighted: list[tuple[float, int, str]] = []
    for index, part in enumerate(header.split(",")):
        tag, _, params = part.strip().partition(";")
        tag = tag.strip()
        if not tag or tag == "*":
            continue
        quality = 1.0
        for param in params.split(";"):
            name, _, value = param.strip().partition("=")
            if name == "q":
                try:
                    quality = float(value)
                except ValueError:
                    quality = 0.0
        if quality > 0:
            weighted.append((-quality, index, tag))
    return [tag for _, _, tag in sorted(weighted)]


def preferred_language(header: str | None, available: Sequence[str]) -> str | None:
    """Best available locale for an Accept-Language header ('en-US' matches 'en')."""
    lowered = {loc.lower().replace("_", "-"): loc for loc in available}
    for tag in parse_accept_language(header):
        tag = tag.lower().replace("_", "-")
        if tag in lowered:
            return lowered[tag]
        primary = tag.split("-")[0]
        if primary in lowered:
            return lowered[primary]
    return None


def detect_locale(request: Request, available: Sequence[str], header_name: str) -> str | None:
    """Return the first valid locale candidate for the request."""
    candidates = [
        request.query_params.get("locale"),
        request.headers.get(header_name),
        preferred_language(request.headers.get("accept-language"), available),
    ]
    actor = get_current_actor()
    if isinstance(actor, LocaleAwareActor):
        candidates.append(actor.preferred_locale)
    for candidate in candidates:
        if candidate and candidate in available:
            return candidate
    return None


def LocaleMiddleware(
    app: Callable,
    available_locales: Sequence[str] | None = None,
    header_name: str | None = None,
) -> Callable:
    """Set the request locale before the route runs."""
    settings = get_settings()
    available = list(available_locales or settings.locales)
    header = header_name or settings.locale_header_name

    class _Middleware(BaseHTTPMiddleware):
        async def dispatch(self, request: Request, call_next: Callable) -> Response:
            set_current_locale(detect_locale(request, available, header))
            try:
                return await call_next(request)
            finally:
                set_current_locale(None)

    return _Middleware(app)
