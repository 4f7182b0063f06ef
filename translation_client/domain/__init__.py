"""Domain layer: entities, outcomes, and exceptions.

No dependencies on infrastructure. Used by application and
infrastructure layers.
"""

from translation_client.domain.entities import (
    Bundle,
    Manifest,
    PushResult,
    TranslationRecord,
)
from translation_client.domain.exceptions import (
    ConfigurationError,
    MalformedSourceFile,
    RemoteWriteError,
    TransientFetchError,
    TranslationClientException,
    ValidationException,
)
from translation_client.domain.outcome import Degraded, FetchOutcome, Ok

__all__ = [
    # Entities
    "Bundle",
    "Manifest",
    "PushResult",
    "TranslationRecord",
    # Outcomes
    "Degraded",
    "FetchOutcome",
    "Ok",
    # Exceptions
    "ConfigurationError",
    "MalformedSourceFile",
    "RemoteWriteError",
    "TransientFetchError",
    "TranslationClientException",
    "ValidationException",
]
