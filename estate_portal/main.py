"""
FastAPI application entry point.
Main application setup and configuration.
"""

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from contextlib import asynccontextmanager
from pydantic import ValidationError as PydanticValidationError
from typing import Optional
import logging

from estate_portal.config import Settings, get_settings
from estate_portal.middleware import RequestLoggingMiddleware
from estate_portal.routers import admin_router, forms_router, site_router
from estate_portal.services.backend import BackendClient
from estate_portal.services.error_handler import ErrorHandlerService
from estate_portal.services.property_form import FormSessionRegistry
from estate_portal.utils.exceptions import APIException

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    backend_client: Optional[BackendClient] = None
) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Settings to use; defaults to the environment settings
        backend_client: Client to use instead of one built from settings

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()
    logging.basicConfig(level=settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Application lifespan manager.
        Handles startup and shutdown events.
        """
        # Startup
        logger.info(f"Starting {settings.app_name} v{settings.app_version}")
        logger.info(f"Environment: {settings.environment}")
        logger.info(f"Backend: {settings.backend_base_url}")

        owns_client = app.state.backend_client is None
        if owns_client:
            app.state.backend_client = BackendClient.from_settings(settings)

        yield

        # Shutdown
        logger.info("Shutting down application")
        closed = app.state.form_registry.close_all()
        if closed:
            logger.info(f"Discarded {closed} open form(s)")
        if owns_client:
            await app.state.backend_client.aclose()
            app.state.backend_client = None

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="""
    Public site and admin back-office for a real-estate investment company.

    ## Features

    * **Listings**: Properties grouped by category with per-category counts
    * **Contact**: Validated investment inquiries forwarded to the backend
    * **Admin**: Dashboard stats, property and category tables, deletes
    * **Property Forms**: Create and edit properties with image previews
    """,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_tags=[
            {
                "name": "Site",
                "description": "Public site content, listings and contact form"
            },
            {
                "name": "Admin",
                "description": "Dashboard and property/category management"
            },
            {
                "name": "Property Forms",
                "description": "Create and edit property form sessions"
            },
            {
                "name": "Health",
                "description": "Service health endpoints"
            }
        ],
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.backend_client = backend_client
    app.state.form_registry = FormSessionRegistry(settings, preview_url_prefix="/admin/forms")

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "X-Processing-Time"],
    )

    app.add_middleware(
        RequestLoggingMiddleware,
        max_request_size=settings.max_request_size,
        enable_request_logging=settings.debug or not settings.is_testing
    )

    app.include_router(site_router)
    app.include_router(admin_router)
    app.include_router(forms_router)

    # Global exception handlers using ErrorHandlerService
    @app.exception_handler(APIException)
    async def api_exception_handler(request: Request, exc: APIException):
        """Handle custom API exceptions with structured error responses."""
        return ErrorHandlerService.handle_api_exception(exc, request)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Handle FastAPI request validation errors with detailed field information."""
        return ErrorHandlerService.handle_validation_error(exc, request)

    @app.exception_handler(PydanticValidationError)
    async def pydantic_validation_exception_handler(request: Request, exc: PydanticValidationError):
        """Handle Pydantic validation errors with detailed field information."""
        return ErrorHandlerService.handle_validation_error(exc, request)

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        """Handle FastAPI HTTP exceptions with structured error responses."""
        return ErrorHandlerService.handle_http_exception(exc, request)

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle unexpected exceptions with secure error responses."""
        return ErrorHandlerService.handle_unexpected_error(exc, request)

    @app.get("/", tags=["Health"])
    async def root():
        """
        Root endpoint providing basic service information.
        """
        return {
            "message": f"Welcome to {settings.app_name}",
            "version": settings.app_version,
            "environment": settings.environment,
            "status": "healthy",
            "documentation": {
                "swagger_ui": "/docs",
                "redoc": "/redoc",
                "openapi_json": "/openapi.json"
            }
        }

    @app.get("/health", tags=["Health"])
    async def health_check():
        """
        Health check endpoint.
        Used by container health checks and load balancers.
        """
        return {
            "status": "healthy",
            "service": settings.app_name,
            "version": settings.app_version,
            "environment": settings.environment,
            "backend": settings.backend_base_url,
            "open_forms": len(app.state.form_registry)
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    settings = get_settings()
    uvicorn.run(
        "estate_portal.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
