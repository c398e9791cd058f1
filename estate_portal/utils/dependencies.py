"""
FastAPI dependency injection utilities.
Provides the backend client, property catalog and form session registry to routes.
"""

from fastapi import Depends, Request

from estate_portal.config import Settings, get_settings
from estate_portal.services.backend import BackendClient
from estate_portal.services.catalog import PropertyCatalog
from estate_portal.services.property_form import FormSessionRegistry


def get_app_settings(request: Request) -> Settings:
    """Get the settings the application was created with."""
    return getattr(request.app.state, "settings", None) or get_settings()


def get_backend_client(request: Request) -> BackendClient:
    """
    Get the backend client created at application startup.

    Args:
        request: Current request

    Returns:
        Shared BackendClient instance
    """
    return request.app.state.backend_client


def get_form_registry(request: Request) -> FormSessionRegistry:
    """Get the registry that owns open property form sessions."""
    return request.app.state.form_registry


def get_property_catalog(client: BackendClient = Depends(get_backend_client)) -> PropertyCatalog:
    """
    Get a property catalog bound to the backend client.

    Args:
        client: Backend client

    Returns:
        PropertyCatalog instance
    """
    return PropertyCatalog(client)
