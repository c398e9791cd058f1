"""
Custom exception classes for the Estate Portal.
Provides structured error handling with appropriate HTTP status codes.
"""

from typing import Any, Dict, Optional, List
from fastapi import HTTPException, status


class APIException(HTTPException):
    """Base API exception class."""

    def __init__(
        self,
        status_code: int,
        detail: str,
        error_code: Optional[str] = None,
        headers: Optional[Dict[str, Any]] = None
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.error_code = error_code


class ValidationError(APIException):
    """Validation error exception."""

    def __init__(
        self,
        detail: str,
        field_errors: Optional[List[Dict[str, str]]] = None
    ):
        super().__init__(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=detail,
            error_code="VALIDATION_ERROR"
        )
        self.field_errors = field_errors or []


class FormValidationError(ValidationError):
    """A draft failed local validation and was not submitted."""

    def __init__(self, errors: Dict[str, str], kinds: Optional[Dict[str, str]] = None):
        kinds = kinds or {}
        field_errors = [
            {"field": field, "message": message, "type": kinds.get(field, "value_error")}
            for field, message in errors.items()
        ]
        super().__init__(
            detail=f"Form has {len(errors)} invalid field(s)",
            field_errors=field_errors
        )
        self.errors = dict(errors)


class NotFoundError(APIException):
    """Resource not found exception."""

    def __init__(self, resource: str, resource_id: Optional[str] = None):
        detail = f"{resource} not found"
        if resource_id:
            detail += f" with ID: {resource_id}"

        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
            error_code="NOT_FOUND"
        )


class ConflictError(APIException):
    """The resource is in a state that does not allow the request."""

    def __init__(self, detail: str):
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail=detail,
            error_code="CONFLICT"
        )


class BadRequestError(APIException):
    """Bad request exception."""

    def __init__(self, detail: str):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            error_code="BAD_REQUEST"
        )


class LimitExceededError(APIException):
    """Image count cap exceeded; the whole batch was rejected."""

    def __init__(self, limit: int, requested: int):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"You can only upload up to {limit} images (requested total: {requested})",
            error_code="LIMIT_EXCEEDED"
        )
        self.limit = limit
        self.requested = requested


class IndexOutOfRangeError(APIException):
    """Preview index outside the current preview list."""

    def __init__(self, index: int, size: int):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Image index {index} is out of range (0..{size - 1})" if size else
                   f"Image index {index} is out of range (no images)",
            error_code="INDEX_OUT_OF_RANGE"
        )
        self.index = index
        self.size = size


# File upload exceptions
class UnsupportedFileTypeError(ValidationError):
    """Unsupported file type exception."""

    def __init__(self, file_type: str, supported_types: List[str]):
        supported = ", ".join(supported_types)
        super().__init__(f"Unsupported file type '{file_type}'. Supported types: {supported}")


class FileSizeExceededError(ValidationError):
    """File size exceeded exception."""

    def __init__(self, size: int, max_size: int):
        super().__init__(f"File size {size} bytes exceeds maximum allowed size {max_size} bytes")


# Backend collaborator exceptions
class BackendError(APIException):
    """Base class for failures talking to the REST backend."""


class BackendHTTPError(BackendError):
    """The backend answered with a non-2xx status."""

    def __init__(self, upstream_status: int, detail: str):
        super().__init__(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=detail,
            error_code="BACKEND_HTTP_ERROR"
        )
        self.upstream_status = upstream_status


class BackendUnavailableError(BackendError):
    """The backend could not be reached."""

    def __init__(self, detail: str = "Backend service unavailable"):
        super().__init__(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=detail,
            error_code="BACKEND_UNAVAILABLE"
        )
