"""
Domain specific exception hierarchy for the tweetbot package.

Every exception carries a ``kind`` from the closed :class:`ErrorKind`
enumeration, and upload failures also record the :class:`UploadPhase`
in which they happened.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from tweetbot.models import ApiError


class ErrorKind(str, Enum):
    CREDENTIAL_MISSING = "credential_missing"
    CLOCK_OR_RANDOM_FAILURE = "clock_or_random_failure"
    TRANSPORT_FAILURE = "transport_failure"
    MALFORMED_RESPONSE = "malformed_response"
    REMOTE_API_ERROR = "remote_api_error"
    PROCESSING_FAILED = "processing_failed"
    PROCESSING_TIMEOUT = "processing_timeout"
    CANCELLED = "cancelled"
    INVALID_MEDIA = "invalid_media"


class UploadPhase(str, Enum):
    INIT = "INIT"
    APPEND = "APPEND"
    FINALIZE = "FINALIZE"
    STATUS = "STATUS"


class TweetbotError(Exception):
    """Base exception for all library errors."""

    kind: ErrorKind

    def __init__(self, message: str, *, phase: UploadPhase | None = None) -> None:
        super().__init__(message)
        self.phase = phase


class ConfigurationError(TweetbotError):
    """Raised when required configuration or credentials are missing."""

    kind = ErrorKind.CREDENTIAL_MISSING


class SigningError(TweetbotError):
    """Raised when the clock, the random source or header assembly fails."""

    kind = ErrorKind.CLOCK_OR_RANDOM_FAILURE


class TransportError(TweetbotError):
    """Raised when the HTTP exchange itself fails (DNS, TLS, timeouts)."""

    kind = ErrorKind.TRANSPORT_FAILURE


class MalformedResponse(TweetbotError):
    """Raised when a response body matches none of the expected schemas."""

    kind = ErrorKind.MALFORMED_RESPONSE

    def __init__(
        self,
        message: str,
        *,
        phase: UploadPhase | None = None,
        body: str | None = None,
    ) -> None:
        super().__init__(message, phase=phase)
        self.body = body


class ApiResponseError(TweetbotError):
    """Raised when the Twitter API returns an error payload."""

    kind = ErrorKind.REMOTE_API_ERROR

    def __init__(
        self,
        message: str,
        *,
        code: int | None = None,
        phase: UploadPhase | None = None,
        status: int | None = None,
        errors: Sequence["ApiError"] = (),
    ) -> None:
        super().__init__(message, phase=phase)
        self.code = code
        self.status = status
        self.errors = list(errors)


class RateLimitExceeded(ApiResponseError):
    """Raised when the Twitter API enforces a rate limit."""

    def __init__(self, message: str, *, reset_at: int | None = None) -> None:
        super().__init__(message, code=88, status=429)
        self.reset_at = reset_at


class MediaValidationError(TweetbotError):
    """Raised when local media does not satisfy upload requirements."""

    kind = ErrorKind.INVALID_MEDIA


class MediaProcessingTimeout(TweetbotError):
    """Raised when media processing does not complete in the allocated time."""

    kind = ErrorKind.PROCESSING_TIMEOUT


class UploadCancelled(TweetbotError):
    """Raised when the caller cancels an upload while it awaits processing."""

    kind = ErrorKind.CANCELLED


class MediaProcessingFailed(TweetbotError):
    """Raised when the API reports failure for an uploaded media asset."""

    kind = ErrorKind.PROCESSING_FAILED

    def __init__(
        self,
        message: str,
        *,
        error: "ApiError | None" = None,
        phase: UploadPhase | None = None,
    ) -> None:
        super().__init__(message, phase=phase)
        self.error = error
        self.code = error.code if error is not None else None
