"""
Pydantic schemas for admin property form sessions.
"""

from enum import Enum
from typing import Dict, List, Optional

from pydantic import Field

from estate_portal.schemas.category import Category
from estate_portal.schemas.image import ImageSetResponse
from estate_portal.schemas.property import CamelModel, Property, PropertyDraft


class FormMode(str, Enum):
    CREATE = "create"
    EDIT = "edit"


class FormOpenRequest(CamelModel):
    """Open a create form (no property id) or an edit form."""

    property_id: Optional[int] = Field(None, gt=0)


class FormSessionResponse(CamelModel):
    id: str
    mode: FormMode
    property_id: Optional[int] = None
    draft: PropertyDraft
    categories: List[Category]
    images: ImageSetResponse


class FormValidationResponse(CamelModel):
    valid: bool
    errors: Dict[str, str] = Field(default_factory=dict)


class FormSubmitResponse(CamelModel):
    mode: FormMode
    property: Property
