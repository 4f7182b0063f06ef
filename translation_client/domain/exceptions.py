"""Domain exceptions for the translation client.

Read-path failures (TransientFetchError) are recovered inside the gateway
and travel as the reason of a Degraded outcome. Write-path failures
(RemoteWriteError) propagate to the caller. The CLI maps the rest to
exit codes.
"""

from typing import Any


class TranslationClientException(Exception):
    """Base exception for all translation client errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. status, path).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)


class TransientFetchError(TranslationClientException):
    """A manifest or bundle read failed (network, timeout, or non-2xx)."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        url: str | None = None,
    ) -> None:
        """Initialize with message and optional HTTP status / URL.

        Args:
            message: Description of the failure.
            status_code: HTTP status when the service answered, else None.
            url: Requested URL.
        """
        details: dict[str, Any] = {}
        if status_code is not None:
            details["status_code"] = status_code
        if url:
            details["url"] = url
        super().__init__(message, "TRANSIENT_FETCH_ERROR", details)
        self.status_code = status_code


class RemoteWriteError(TranslationClientException):
    """Pushing translations failed; carries the response status and body."""

    def __init__(self, status_code: int | None, body: str) -> None:
        """Initialize with the service response.

        Args:
            status_code: HTTP status, or None when no response was received.
            body: Response body text (or the transport error message).
        """
        super().__init__(
            f"Failed to push translations: {body}",
            "REMOTE_WRITE_ERROR",
            {"status_code": status_code, "body": body},
        )
        self.status_code = status_code
        self.body = body


class ConfigurationError(TranslationClientException):
    """Raised when required configuration or CLI input is missing or invalid."""

    def __init__(self, message: str, option: str | None = None) -> None:
        """Initialize with message and the offending option name.

        Args:
            message: What is wrong and how to fix it.
            option: Optional setting or CLI option name.
        """
        details = {"option": option} if option else {}
        super().__init__(message, "CONFIGURATION_ERROR", details)


class MalformedSourceFile(TranslationClientException):
    """A legacy translation file did not decode to a mapping."""

    def __init__(self, path: str, reason: str = "not a mapping") -> None:
        """Initialize with the file path.

        Args:
            path: Path of the unreadable file.
            reason: Short reason (parse error text or 'not a mapping').
        """
        super().__init__(
            f"Malformed translation file {path}: {reason}",
            "MALFORMED_SOURCE_FILE",
            {"path": path},
        )
        self.path = path


class ValidationException(TranslationClientException):
    """Raised when a translation record or argument is invalid."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)
