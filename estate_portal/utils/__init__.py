"""
Utility modules for the Estate Portal.
"""

from .exceptions import (
    APIException,
    ValidationError,
    FormValidationError,
    NotFoundError,
    BadRequestError,
    ConflictError,
    LimitExceededError,
    IndexOutOfRangeError,
    BackendError,
    BackendHTTPError,
    BackendUnavailableError
)

# Dependencies are imported directly where needed to avoid circular imports

__all__ = [
    "APIException",
    "ValidationError",
    "FormValidationError",
    "NotFoundError",
    "BadRequestError",
    "ConflictError",
    "LimitExceededError",
    "IndexOutOfRangeError",
    "BackendError",
    "BackendHTTPError",
    "BackendUnavailableError",
]
