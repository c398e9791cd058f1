"""
Error response schemas for API documentation and consistent error formatting.
"""

from pydantic import BaseModel, Field
from typing import List, Optional, Any, Dict


class ErrorDetail(BaseModel):
    """Schema for individual error detail."""

    field: Optional[str] = Field(
        None,
        description="Field name that caused the error",
        examples=["areaNepali"]
    )

    message: str = Field(
        ...,
        description="Human-readable error message",
        examples=["Invalid format (e.g., 0-0-0-0.0)"]
    )

    type: Optional[str] = Field(
        None,
        description="Error type identifier",
        examples=["invalid_format"]
    )

    input: Optional[Any] = Field(
        None,
        description="Input value that caused the error"
    )


class ErrorResponse(BaseModel):
    """Schema for standardized error responses."""

    code: str = Field(..., description="Error code identifier", examples=["VALIDATION_ERROR"])
    message: str = Field(..., description="Human-readable error message")
    timestamp: str = Field(..., description="Error timestamp in ISO format")
    request_id: Optional[str] = Field(None, description="Unique request identifier for tracking")
    details: Optional[List[ErrorDetail]] = Field(
        None,
        description="Detailed error information for validation errors"
    )


class APIErrorResponse(BaseModel):
    """Schema for API error response wrapper."""

    error: ErrorResponse = Field(..., description="Error information")


def _example(code: str, message: str) -> Dict[str, Any]:
    return {
        "error": {
            "code": code,
            "message": message,
            "timestamp": "2024-01-01T00:00:00Z",
            "request_id": "abc12345"
        }
    }


COMMON_ERROR_RESPONSES: Dict[int, Dict[str, Any]] = {
    400: {
        "description": "Bad Request - Invalid request or image limit exceeded",
        "model": APIErrorResponse,
        "content": {"application/json": {"example": _example(
            "LIMIT_EXCEEDED", "You can only upload up to 10 images (requested total: 11)")}}
    },
    404: {
        "description": "Not Found - Resource does not exist",
        "model": APIErrorResponse,
        "content": {"application/json": {"example": _example("NOT_FOUND", "Property not found with ID: 7")}}
    },
    409: {
        "description": "Conflict - The form is being submitted",
        "model": APIErrorResponse,
        "content": {"application/json": {"example": _example(
            "CONFLICT", "Form is already being submitted")}}
    },
    422: {
        "description": "Validation Error - Request data validation failed",
        "model": APIErrorResponse,
        "content": {"application/json": {"example": {
            "error": {
                "code": "VALIDATION_ERROR",
                "message": "Form has 1 invalid field(s)",
                "timestamp": "2024-01-01T00:00:00Z",
                "request_id": "abc12345",
                "details": [
                    {"field": "title", "message": "Title is required", "type": "required"}
                ]
            }
        }}}
    },
    500: {
        "description": "Internal Server Error - Unexpected server error",
        "model": APIErrorResponse,
        "content": {"application/json": {"example": _example(
            "INTERNAL_SERVER_ERROR", "An unexpected error occurred. Please try again later.")}}
    },
    502: {
        "description": "Bad Gateway - The property backend rejected the request",
        "model": APIErrorResponse,
        "content": {"application/json": {"example": _example(
            "BACKEND_HTTP_ERROR", "Failed to update property")}}
    },
    503: {
        "description": "Service Unavailable - The property backend is unreachable",
        "model": APIErrorResponse,
        "content": {"application/json": {"example": _example(
            "BACKEND_UNAVAILABLE", "Backend service unavailable")}}
    },
}


def get_error_responses(*status_codes: int) -> Dict[int, Dict[str, Any]]:
    """
    Get error response schemas for specific status codes.

    Args:
        status_codes: HTTP status codes to include

    Returns:
        Dictionary of error response schemas
    """
    return {
        code: COMMON_ERROR_RESPONSES[code]
        for code in status_codes
        if code in COMMON_ERROR_RESPONSES
    }


def get_backend_error_responses() -> Dict[int, Dict[str, Any]]:
    """Error responses for endpoints that proxy the property backend."""
    return get_error_responses(404, 500, 502, 503)


def get_form_error_responses() -> Dict[int, Dict[str, Any]]:
    """Error responses for form session endpoints."""
    return get_error_responses(400, 404, 409, 422, 500, 502, 503)
