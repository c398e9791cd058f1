"""
Service layer: backend access, catalog views, image sets, form sessions and error handling.
"""

from .backend import BackendClient
from .catalog import PropertyCatalog, aggregate_categories, filter_properties
from .image_set import ImageSetEditor, PreviewStore
from .property_form import PropertyFormSession, FormSessionRegistry
from .error_handler import ErrorHandlerService

__all__ = [
    "BackendClient",
    "PropertyCatalog",
    "aggregate_categories",
    "filter_properties",
    "ImageSetEditor",
    "PreviewStore",
    "PropertyFormSession",
    "FormSessionRegistry",
    "ErrorHandlerService"
]
