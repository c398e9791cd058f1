"""
API route handlers for the Estate Portal.
"""

from .site import router as site_router
from .admin import router as admin_router
from .forms import router as forms_router

__all__ = ["site_router", "admin_router", "forms_router"]
