"""
Core Application - Infrastructure & Base Classes

This app contains infrastructure code shared by the domain apps:

Services (import from core.services):
    - BaseService: Base class for service layer
    - ServiceResult: Standard result wrapper for success/failure handling

Exceptions (import from core.exceptions):
    - BaseApplicationError: Base exception with error codes
    - ValidationError: Input validation failures
    - NotFoundError: Resource not found
    - MediaNotFoundError / VariantNotFoundError: Unresolved media references
    - MediaCategoryMismatchError: Media used with the wrong renderer
    - LimitExceededError: Safety caps and hosted limits
    - ExternalServiceError: Adapter failures
"""
