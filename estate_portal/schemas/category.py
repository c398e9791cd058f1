"""
Pydantic schemas for categories and the per-category admin view.
"""

from typing import List

from pydantic import Field

from estate_portal.schemas.property import CamelModel, Property, PropertyTableRow


class Category(CamelModel):
    """Grouping label for properties."""

    id: int
    name: str


class CategoryDetail(Category):
    """Category with the properties that reference it."""

    properties: List[Property] = Field(default_factory=list)


class CategoryPropertiesResponse(CamelModel):
    """Admin view of one category and its formatted property rows."""

    id: int
    name: str
    properties: List[PropertyTableRow]

    @classmethod
    def from_detail(cls, detail: CategoryDetail) -> "CategoryPropertiesResponse":
        return cls(
            id=detail.id,
            name=detail.name,
            properties=[
                PropertyTableRow.from_property(prop, include_category=False)
                for prop in detail.properties
            ],
        )
