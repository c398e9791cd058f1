"""
Pydantic schemas for request/response validation.
"""

from .property import (
    UNKNOWN_CATEGORY,
    PropertyStatus,
    CategoryRef,
    Property,
    PropertyDraft,
    PropertyDraftUpdate,
    CategoryCount,
    PropertyListing,
    PropertyTableRow
)

from .category import (
    Category,
    CategoryDetail,
    CategoryPropertiesResponse
)

from .image import (
    ImageProvenance,
    ImagePreviewEntry,
    ImageSetResponse
)

from .site import (
    SiteContent,
    ContactSubmission,
    ContactAcknowledgement,
    DashboardStats,
    DashboardResponse
)

from .form import (
    FormMode,
    FormOpenRequest,
    FormSessionResponse,
    FormValidationResponse,
    FormSubmitResponse
)

__all__ = [
    # Property
    "UNKNOWN_CATEGORY",
    "PropertyStatus",
    "CategoryRef",
    "Property",
    "PropertyDraft",
    "PropertyDraftUpdate",
    "CategoryCount",
    "PropertyListing",
    "PropertyTableRow",

    # Category
    "Category",
    "CategoryDetail",
    "CategoryPropertiesResponse",

    # Image
    "ImageProvenance",
    "ImagePreviewEntry",
    "ImageSetResponse",

    # Site
    "SiteContent",
    "ContactSubmission",
    "ContactAcknowledgement",
    "DashboardStats",
    "DashboardResponse",

    # Form sessions
    "FormMode",
    "FormOpenRequest",
    "FormSessionResponse",
    "FormValidationResponse",
    "FormSubmitResponse"
]
