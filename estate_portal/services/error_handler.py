"""
Error handling service for consistent error response formatting and logging.
Every failure reaches the user once, as a structured JSON error.
"""

from typing import Dict, Any, Optional, List
from datetime import datetime, timezone
from fastapi import Request, HTTPException
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError
from estate_portal.utils.exceptions import (
    APIException,
    BackendError,
    BackendHTTPError,
    ValidationError
)
import logging
import uuid

logger = logging.getLogger(__name__)


GENERIC_ERROR_MESSAGE = "An unexpected error occurred. Please try again later."


class ErrorHandlerService:
    """
    Turns exceptions into the portal's error envelope:
    ``{"error": {code, message, timestamp, request_id, details?}}``.

    Backend failures are logged at error level; problems with the caller's
    input are logged as warnings.
    """

    @staticmethod
    def format_error_response(
        error_code: str,
        message: str,
        details: Optional[List[Dict[str, Any]]] = None,
        request_id: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Build the error envelope.

        Args:
            error_code: Machine-readable code, e.g. ``LIMIT_EXCEEDED``
            message: Human-readable message
            details: Optional per-field or upstream details
            request_id: Optional request identifier for tracking

        Returns:
            Error envelope dictionary
        """
        error: Dict[str, Any] = {
            "code": error_code,
            "message": message,
            "timestamp": datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ"),
        }
        if details:
            error["details"] = details
        if request_id:
            error["request_id"] = request_id
        return {"error": error}

    @staticmethod
    def handle_api_exception(
        exception: APIException,
        request: Optional[Request] = None
    ) -> JSONResponse:
        """Respond to one of the portal's own exceptions."""
        request_id = ErrorHandlerService._get_request_id(request)
        code = exception.error_code or "API_ERROR"

        if isinstance(exception, BackendError):
            logger.error(f"Backend failure [{request_id}]: {code} - {exception.detail}",
                         extra=ErrorHandlerService._log_context(request, request_id, exception.status_code))
        else:
            logger.warning(f"Request rejected [{request_id}]: {code} - {exception.detail}",
                           extra=ErrorHandlerService._log_context(request, request_id, exception.status_code))

        details = None
        if isinstance(exception, ValidationError):
            details = exception.field_errors
        elif isinstance(exception, BackendHTTPError):
            details = [{"upstream_status": exception.upstream_status}]

        return JSONResponse(
            status_code=exception.status_code,
            content=ErrorHandlerService.format_error_response(code, exception.detail, details, request_id),
            headers=exception.headers
        )

    @staticmethod
    def handle_validation_error(
        exception: PydanticValidationError,
        request: Optional[Request] = None
    ) -> JSONResponse:
        """
        Respond to a request that failed schema validation.

        Each error location is flattened to ``"body -> propertyId"`` form.
        """
        request_id = ErrorHandlerService._get_request_id(request)

        details = [
            {
                "field": " -> ".join(str(loc) for loc in error["loc"]),
                "message": error["msg"],
                "type": error["type"],
                "input": ErrorHandlerService._safe_input(error.get("input"))
            }
            for error in exception.errors()
        ]

        logger.warning(f"Invalid request [{request_id}]: {len(details)} field error(s)",
                       extra=ErrorHandlerService._log_context(request, request_id, 422))

        return JSONResponse(
            status_code=422,
            content=ErrorHandlerService.format_error_response(
                "VALIDATION_ERROR", "Request validation failed", details, request_id
            )
        )

    @staticmethod
    def handle_http_exception(
        exception: HTTPException,
        request: Optional[Request] = None
    ) -> JSONResponse:
        """Respond to a plain HTTPException raised by FastAPI or Starlette."""
        request_id = ErrorHandlerService._get_request_id(request)

        logger.warning(f"HTTP {exception.status_code} [{request_id}]: {exception.detail}",
                       extra=ErrorHandlerService._log_context(request, request_id, exception.status_code))

        return JSONResponse(
            status_code=exception.status_code,
            content=ErrorHandlerService.format_error_response(
                f"HTTP_{exception.status_code}", str(exception.detail), request_id=request_id
            ),
            headers=exception.headers
        )

    @staticmethod
    def handle_unexpected_error(
        exception: Exception,
        request: Optional[Request] = None
    ) -> JSONResponse:
        """Respond to a bug. The exception text stays in the log only."""
        request_id = ErrorHandlerService._get_request_id(request)

        logger.error(
            f"Unhandled {type(exception).__name__} [{request_id}]: {exception}",
            extra=ErrorHandlerService._log_context(request, request_id, 500),
            exc_info=exception
        )

        return JSONResponse(
            status_code=500,
            content=ErrorHandlerService.format_error_response(
                "INTERNAL_SERVER_ERROR", GENERIC_ERROR_MESSAGE, request_id=request_id
            )
        )

    @staticmethod
    def _get_request_id(request: Optional[Request]) -> str:
        """Reuse the id assigned by the request middleware, or make a new one."""
        if request is not None:
            request_id = getattr(request.state, "request_id", None)
            if request_id:
                return request_id
        return str(uuid.uuid4())[:8]

    @staticmethod
    def _log_context(request: Optional[Request], request_id: str, status_code: int) -> Dict[str, Any]:
        return {
            "request_id": request_id,
            "status_code": status_code,
            "path": request.url.path if request else None
        }

    @staticmethod
    def _safe_input(value: Any) -> Any:
        """Inputs echoed back must be JSON serializable."""
        if value is None or isinstance(value, (str, int, float, bool)):
            return value
        return str(value)
