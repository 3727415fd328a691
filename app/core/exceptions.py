"""
Base exception classes for application-wide error handling.

This module provides a standardized exception hierarchy that enables:
- Consistent error reporting across the media pipeline
- Machine-readable error codes for callers
- Detailed error information for debugging

Exception Hierarchy:
    BaseApplicationError (base)
    ├── ValidationError - Input validation failures
    │   └── MediaCategoryMismatchError - Entry has the wrong MIME category
    ├── NotFoundError - Resource not found
    │   ├── MediaNotFoundError - Filename missing from the media registry
    │   └── VariantNotFoundError - No usable size variant or fallback path
    ├── LimitExceededError - Always-enforced safety cap or hosted limit hit
    └── ExternalServiceError - Adapter/third-party failures
        └── PublishNotAvailableError - Publishing disabled in self-hosted mode

Usage:
    from core.exceptions import LimitExceededError, MediaNotFoundError

    # Raise with message only
    raise MediaNotFoundError("photo.jpg")

    # Raise with additional details
    raise LimitExceededError(
        "Image dimensions exceed the allowed maximum",
        details={"width": 20000, "height": 300, "max_dimension": 10000},
    )

    # Convert to dict for an API response
    try:
        ...
    except BaseApplicationError as e:
        return JsonResponse(e.to_dict(), status=400)

Note:
    The render path recovers MediaNotFoundError, MediaCategoryMismatchError
    and VariantNotFoundError into inline diagnostics. LimitExceededError is
    never recovered that way and must reach the caller.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import Any


class BaseApplicationError(Exception):
    """
    Base exception for all application-specific errors.

    Attributes:
        message: Human-readable error description
        error_code: Machine-readable code for client-side handling
        details: Additional error context (field errors, metadata, etc.)

    Example:
        try:
            enforce_image_dimensions(width, height)
        except LimitExceededError as e:
            logger.warning(f"Upload refused: {e.error_code}")
            return JsonResponse(e.to_dict(), status=413)
    """

    default_error_code: str = "APPLICATION_ERROR"

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        """
        Initialize the exception.

        Args:
            message: Human-readable error description
            error_code: Machine-readable error code (defaults to class default)
            details: Additional error context
        """
        self.message = message
        self.error_code = error_code or self.default_error_code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert exception to dictionary for API response.

        Returns:
            Dict with error, error_code, and details keys

        Example:
            {
                "error": "Media file \"photo.jpg\" not found",
                "error_code": "MEDIA_NOT_FOUND",
                "details": {"filename": "photo.jpg"}
            }
        """
        result: dict[str, Any] = {
            "error": self.message,
            "error_code": self.error_code,
        }
        if self.details:
            result["details"] = self.details
        return result

    def __str__(self) -> str:
        """Return string representation with error code."""
        return f"[{self.error_code}] {self.message}"

    def __repr__(self) -> str:
        """Return detailed representation for debugging."""
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"error_code={self.error_code!r}, "
            f"details={self.details!r})"
        )


class ValidationError(BaseApplicationError):
    """
    Raised when input validation fails.

    Use for:
    - Invalid field formats
    - Business rule violations
    - Values of the wrong kind for the operation requested
    """

    default_error_code: str = "VALIDATION_ERROR"


class NotFoundError(BaseApplicationError):
    """
    Raised when a requested resource is not found.

    Use for:
    - Registry lookups that come back empty
    - Derived assets that do not exist
    """

    default_error_code: str = "NOT_FOUND"


class MediaNotFoundError(NotFoundError):
    """Raised when a filename is not present in the media registry."""

    default_error_code: str = "MEDIA_NOT_FOUND"

    def __init__(self, filename: str):
        self.filename = filename
        super().__init__(
            f'Media file "{filename}" not found',
            details={"filename": filename},
        )


class MediaCategoryMismatchError(ValidationError):
    """
    Raised when an entry exists but belongs to another media category.

    Example:
        An audio filter invoked on "photo.jpg" (image/jpeg).
    """

    default_error_code: str = "MEDIA_CATEGORY_MISMATCH"

    def __init__(self, filename: str, expected: str, mime_type: str | None):
        self.filename = filename
        self.expected = expected
        self.mime_type = mime_type
        super().__init__(
            f'"{filename}" is not an {expected} file'
            if expected[0] in "aeiou"
            else f'"{filename}" is not a {expected} file',
            details={
                "filename": filename,
                "expected": expected,
                "mime_type": mime_type,
            },
        )


class VariantNotFoundError(NotFoundError):
    """
    Raised when neither the requested size variant nor a fallback path exists.

    Carries the requested variant name and the filename so the render path
    can name both in its diagnostic.
    """

    default_error_code: str = "MEDIA_VARIANT_NOT_FOUND"

    def __init__(self, variant: str, filename: str):
        self.variant = variant
        self.filename = filename
        super().__init__(
            f'Size "{variant}" not found for "{filename}"',
            details={"variant": variant, "filename": filename},
        )


class LimitExceededError(BaseApplicationError):
    """
    Raised when an operation would exceed a platform limit.

    Use for:
    - Image decompression bombs (pixel count, single dimension)
    - ZIP bombs and unsafe archive paths
    - Oversized request bodies
    - Hosted-mode count and length limits

    Note:
        These guard resource exhaustion, not content correctness. They are
        never downgraded to a rendered diagnostic. HTTP 413 Payload Too
        Large or 422 are the appropriate statuses.
    """

    default_error_code: str = "LIMIT_EXCEEDED"


class ExternalServiceError(BaseApplicationError):
    """
    Raised when an adapter or external service call fails.

    Note:
        Log the original error for debugging but don't expose
        internal details to clients in production.
    """

    default_error_code: str = "EXTERNAL_SERVICE_ERROR"


class PublishNotAvailableError(ExternalServiceError):
    """Raised by the default publish adapter, which cannot deploy anything."""

    default_error_code: str = "PUBLISH_NOT_AVAILABLE"
