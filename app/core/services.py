"""
Base service layer patterns for business logic encapsulation.

This module provides foundational patterns for the service layer:
- ServiceResult: Standard result wrapper for consistent success/failure handling
- BaseService: Base class with common service utilities

Pattern Comparison:
    - ServiceResult: Use for expected failures (missing media, wrong category)
    - Exceptions: Use for hard failures (safety caps, misconfiguration)

Usage:
    from core.services import BaseService, ServiceResult

    class ImageRenderer(BaseService):
        @classmethod
        def render(cls, raw_input, args, context) -> ServiceResult[str]:
            entry = context.lookup(filename)
            if entry is None:
                return ServiceResult.failure(
                    '<!-- media file "x.jpg" not found -->',
                    error_code="MEDIA_NOT_FOUND",
                )
            cls.get_logger().debug("Rendering %s", filename)
            return ServiceResult.success(markup)

    result = ImageRenderer.render("x.jpg", [], context)
    output = result.data if result.success else result.error

Related:
    - core.exceptions: For unexpected/exceptional errors
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Generic, TypeVar

# Generic type for ServiceResult data
T = TypeVar("T")


@dataclass
class ServiceResult(Generic[T]):
    """
    Standard result wrapper for service operations.

    Provides consistent success/failure handling without exceptions.
    Use this for expected failures that the caller decides how to surface.

    Attributes:
        success: Whether the operation succeeded
        data: Result data if successful (None if failed)
        error: Error message if failed (None if successful)
        error_code: Machine-readable error code for client handling

    Usage:
        result = render_result("image", "a.jpg", [], context)
        if result.success:
            html = result.data
        else:
            logger.warning(f"Error: {result.error} ({result.error_code})")
    """

    success: bool
    data: T | None = None
    error: str | None = None
    error_code: str | None = None

    @classmethod
    def success(cls, data: T) -> ServiceResult[T]:
        """
        Create a successful result.

        Args:
            data: The result data

        Returns:
            ServiceResult with success=True and data set
        """
        return cls(success=True, data=data)

    @classmethod
    def failure(cls, error: str, error_code: str | None = None) -> ServiceResult[T]:
        """
        Create a failed result.

        Args:
            error: Human-readable error message
            error_code: Machine-readable error code for client handling

        Returns:
            ServiceResult with success=False and error details
        """
        return cls(success=False, error=error, error_code=error_code)

    def __bool__(self) -> bool:
        """
        Allow using result in boolean context.

        Example:
            result = render_result("audio", "clip.mp3", ["path"], context)
            if result:  # Same as: if result.success
                print(result.data)
        """
        return self.success


class BaseService:
    """
    Base class for service layer classes.

    Provides common utilities for services:
    - Logging setup per service

    Design Notes:
        - Use @staticmethod or @classmethod (no instance state)
        - Services should be stateless
        - Use ServiceResult for expected failures
        - Raise exceptions for unexpected failures
    """

    @classmethod
    def get_logger(cls) -> logging.Logger:
        """
        Get logger for this service.

        Returns a logger named after the service class for
        easy filtering in logs.

        Example:
            class AudioRenderer(BaseService):
                @classmethod
                def render(cls, raw_input, args, context):
                    cls.get_logger().debug(f"Rendering audio: {raw_input}")
        """
        return logging.getLogger(f"{cls.__module__}.{cls.__name__}")
