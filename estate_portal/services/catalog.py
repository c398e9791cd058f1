"""
Property catalog: category aggregation and category filtering of listings.
Both the public listing and the admin properties table go through here.
"""

from typing import Dict, List, Sequence
import logging

from estate_portal.schemas.property import (
    CategoryCount,
    Property,
    PropertyListing,
    PropertyTableRow
)

logger = logging.getLogger(__name__)


ALL_CATEGORIES = "all"
ALL_CATEGORIES_LABEL = "All Properties"


def aggregate_categories(properties: Sequence[Property]) -> List[CategoryCount]:
    """
    Derive category filter entries from a property list.

    The first entry covers every property. It is followed by one entry per
    distinct category name, in the order the names first appear. Properties
    without an embedded category are counted under the "Unknown" name.
    """
    counts: Dict[str, int] = {}
    for prop in properties:
        name = prop.resolved_category_name
        counts[name] = counts.get(name, 0) + 1

    return [
        CategoryCount(id=ALL_CATEGORIES, name=ALL_CATEGORIES_LABEL, count=len(properties)),
        *(CategoryCount(id=name, name=name, count=count) for name, count in counts.items())
    ]


def filter_properties(properties: Sequence[Property], token: str) -> List[Property]:
    """
    Select the properties of one category, keeping their order.

    A property without an embedded category never matches a named filter
    but is always part of "all".
    """
    if token == ALL_CATEGORIES:
        return list(properties)
    return [prop for prop in properties if prop.category_name == token]


class CatalogSnapshot:
    """Properties as fetched in one load, with the views derived from them."""

    def __init__(self, properties: Sequence[Property]):
        self.properties = list(properties)

    def __len__(self) -> int:
        return len(self.properties)

    def categories(self) -> List[CategoryCount]:
        return aggregate_categories(self.properties)

    def filter(self, token: str = ALL_CATEGORIES) -> List[Property]:
        return filter_properties(self.properties, token)

    def listing(self, token: str = ALL_CATEGORIES) -> PropertyListing:
        selected = self.filter(token)
        return PropertyListing(
            categories=self.categories(),
            selected_category=token,
            total=len(selected),
            properties=selected
        )

    def table_rows(self) -> List[PropertyTableRow]:
        return [PropertyTableRow.from_property(prop) for prop in self.properties]


class PropertyCatalog:
    """
    Single owner of the fetch-and-filter flow for property lists.

    Args:
        client: Backend client used to fetch the properties
    """

    def __init__(self, client):
        self.client = client

    async def load(self) -> CatalogSnapshot:
        properties = await self.client.list_properties()
        logger.debug(f"Loaded {len(properties)} properties")
        return CatalogSnapshot(properties)

    async def listing(self, token: str = ALL_CATEGORIES) -> PropertyListing:
        snapshot = await self.load()
        return snapshot.listing(token)
