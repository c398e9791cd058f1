"""
Pydantic schemas for property records, drafts and listing responses.
Field names follow Python conventions; the backend's camelCase names are aliases.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import Optional, List, Dict, Any
from datetime import datetime
from enum import Enum


UNKNOWN_CATEGORY = "Unknown"


class PropertyStatus(str, Enum):
    """Known listing statuses. Other values from the backend are kept as plain strings."""
    AVAILABLE = "Available"
    SOLD = "Sold"
    RENTED = "Rented"


class CamelModel(BaseModel):
    """Base model that reads and writes the backend's camelCase field names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CategoryRef(CamelModel):
    """Category relation embedded in a property payload."""

    id: Optional[int] = None
    name: Optional[str] = None


def _to_display_string(v):
    if v is None:
        return ""
    if isinstance(v, float) and v.is_integer():
        return str(int(v))
    return str(v)


class Property(CamelModel):
    """A persisted real-estate listing as returned by the backend."""

    id: int = Field(..., description="Property identifier")
    title: str = Field(..., description="Listing title", examples=["Land plot near Ring Road"])
    category_id: int = Field(0, description="Referenced category")
    category: Optional[CategoryRef] = Field(None, description="Embedded category relation")
    location: str = Field("", examples=["Bafal, Kathmandu"])
    price: str = Field("", description="Price per aana, display string", examples=["2500000"])
    roi: str = Field("", description="Return on investment in percent", examples=["12"])
    status: str = Field(PropertyStatus.AVAILABLE.value, examples=["Available"])
    area: str = Field("", examples=["1200"])
    area_nepali: Optional[str] = Field(None, description="Ropani-Aana-Paisa-Daam", examples=["0-4-2-1.5"])
    distance_from_highway: Optional[float] = Field(None, ge=0, description="Distance in meters")
    images: List[str] = Field(default_factory=list, description="Ordered image references")
    description: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("price", "roi", "area", "location", "title", "description", mode="before")
    @classmethod
    def coerce_display_strings(cls, v):
        """The backend may send numeric columns as numbers."""
        return _to_display_string(v)

    @field_validator("status", mode="before")
    @classmethod
    def coerce_status(cls, v):
        if isinstance(v, PropertyStatus):
            return v.value
        return _to_display_string(v)

    @field_validator("images", mode="before")
    @classmethod
    def default_images(cls, v):
        return v or []

    @property
    def category_name(self) -> Optional[str]:
        """Name of the embedded category, or None when the relation is missing."""
        if self.category is None:
            return None
        return self.category.name or None

    @property
    def resolved_category_name(self) -> str:
        return self.category_name or UNKNOWN_CATEGORY


class PropertyDraft(CamelModel):
    """
    In-progress form representation of a property.

    Every field has an empty default so an unsaved draft can exist while
    required fields are still missing; validation decides whether it may be
    submitted.
    """

    title: str = ""
    category_id: int = 0
    location: str = ""
    price: str = ""
    roi: str = ""
    status: str = ""
    area: str = ""
    area_nepali: str = ""
    distance_from_highway: Optional[float] = None
    description: str = ""

    @field_validator("title", "location", "price", "roi", "status", "area", "area_nepali",
                     "description", mode="before")
    @classmethod
    def coerce_strings(cls, v):
        if isinstance(v, PropertyStatus):
            return v.value
        return _to_display_string(v)

    @field_validator("category_id", mode="before")
    @classmethod
    def coerce_category_id(cls, v):
        return v or 0

    @classmethod
    def from_property(cls, prop: Property) -> "PropertyDraft":
        """Seed an edit form from a persisted property."""
        return cls(
            title=prop.title,
            category_id=prop.category_id,
            location=prop.location,
            price=prop.price,
            roi=prop.roi,
            status=prop.status,
            area=prop.area,
            area_nepali=prop.area_nepali or "",
            distance_from_highway=prop.distance_from_highway,
            description=prop.description,
        )

    def to_form_fields(self) -> Dict[str, str]:
        """
        Scalar multipart fields for create/update requests.

        Optional fields are omitted when empty, matching what the backend
        expects from the admin forms.
        """
        fields = {
            "title": self.title,
            "categoryId": str(self.category_id),
            "location": self.location,
            "price": self.price,
            "roi": self.roi,
            "status": self.status,
            "area": self.area,
        }
        if self.area_nepali:
            fields["areaNepali"] = self.area_nepali
        if self.distance_from_highway is not None:
            fields["distanceFromHighway"] = _to_display_string(self.distance_from_highway)
        fields["description"] = self.description
        return fields


class PropertyDraftUpdate(CamelModel):
    """Partial edit of a draft; only fields that were sent are applied."""

    title: Optional[str] = None
    category_id: Optional[int] = None
    location: Optional[str] = None
    price: Optional[str] = None
    roi: Optional[str] = None
    status: Optional[str] = None
    area: Optional[str] = None
    area_nepali: Optional[str] = None
    distance_from_highway: Optional[float] = None
    description: Optional[str] = None

    @field_validator("price", "roi", "area", mode="before")
    @classmethod
    def coerce_numbers(cls, v):
        if v is None:
            return None
        return _to_display_string(v)

    def changes(self) -> Dict[str, Any]:
        """Fields explicitly set on this update, keyed by Python name."""
        return self.model_dump(exclude_unset=True)


class CategoryCount(CamelModel):
    """Category filter entry with the number of properties it covers."""

    id: str
    name: str
    count: int = Field(..., ge=0)


class PropertyListing(CamelModel):
    """Public listing: category filters plus the filtered properties."""

    categories: List[CategoryCount]
    selected_category: str
    total: int
    properties: List[Property]


class PropertyTableRow(CamelModel):
    """Admin table row with display formatting applied."""

    id: int
    title: str
    category: str
    location: str
    price: str
    roi: str
    status: str
    area: str
    area_nepali: Optional[str] = None
    distance_from_highway: str
    images: str

    @classmethod
    def from_property(cls, prop: Property, include_category: bool = True) -> "PropertyTableRow":
        return cls(
            id=prop.id,
            title=prop.title,
            category=(prop.category_name or "N/A") if include_category else "",
            location=prop.location,
            price=f"Nrs. {prop.price} per aana",
            roi=f"{prop.roi}%",
            status=prop.status,
            area=f"{prop.area} sq ft",
            area_nepali=prop.area_nepali,
            distance_from_highway=(
                f"{_to_display_string(prop.distance_from_highway)}m"
                if prop.distance_from_highway is not None else "N/A"
            ),
            images=f"{len(prop.images)} image(s)",
        )
