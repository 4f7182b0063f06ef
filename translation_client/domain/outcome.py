"""Outcome of a read against the remote authority.

Reads never raise on transient failure. They return Ok when the data is
fresh (from the service, or from a cache entry whose version still
matches the manifest) and Degraded when the data is a fallback: a stale
cache entry or an empty mapping.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from translation_client.domain.exceptions import TransientFetchError


@dataclass(frozen=True)
class Ok:
    """Fresh data."""

    data: dict[str, Any] = field(default_factory=dict)
    version: int | None = None

    @property
    def degraded(self) -> bool:
        return False


@dataclass(frozen=True)
class Degraded:
    """Fallback data served after a transient failure.

    Attributes:
        data: Stale cached data, or {} when there was nothing to fall back on.
        reason: The failure that forced the fallback.
        stale: True when data came from a stale cache entry.
    """

    data: dict[str, Any]
    reason: TransientFetchError
    stale: bool = False

    @property
    def degraded(self) -> bool:
        return True


FetchOutcome = Ok | Degraded
