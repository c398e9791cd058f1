"""
Pydantic schemas for image previews shown in the admin property forms.
"""

from enum import Enum
from typing import List

from pydantic import Field

from estate_portal.schemas.property import CamelModel


class ImageProvenance(str, Enum):
    """Where an image reference comes from."""
    EXISTING = "existing"
    NEW = "new"


class ImagePreviewEntry(CamelModel):
    """Displayable image reference in an edit form."""

    index: int = Field(..., ge=0)
    url: str
    provenance: ImageProvenance
    filename: str = ""


class ImageSetResponse(CamelModel):
    """Current preview list of a form session."""

    previews: List[ImagePreviewEntry]
    existing_count: int
    new_count: int
    max_images: int
