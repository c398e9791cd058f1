"""
Tests for category aggregation, category filtering and the catalog views.
"""

import pytest

from estate_portal.schemas.property import Property, PropertyTableRow
from estate_portal.services.catalog import (
    ALL_CATEGORIES,
    CatalogSnapshot,
    PropertyCatalog,
    aggregate_categories,
    filter_properties
)
from tests.conftest import PropertyFactory


def make_property(id: int, category_name=None, **overrides) -> Property:
    category = {"id": id, "name": category_name} if category_name else {}
    return Property.model_validate(
        PropertyFactory.create_property_data(id=id, category=category, **overrides)
    )


@pytest.fixture
def mixed_properties():
    return [
        make_property(1, "Land"),
        make_property(2, "Apartment"),
        make_property(3, "Land"),
        make_property(4, None),
    ]


class TestAggregateCategories:
    """Test category filter derivation."""

    def test_all_entry_first_then_first_seen_order(self, mixed_properties):
        categories = aggregate_categories(mixed_properties)

        assert [c.id for c in categories] == ["all", "Land", "Apartment", "Unknown"]
        assert categories[0].name == "All Properties"
        assert [c.count for c in categories] == [4, 2, 1, 1]

    def test_counts_sum_to_total(self, mixed_properties):
        categories = aggregate_categories(mixed_properties)
        assert sum(c.count for c in categories[1:]) == categories[0].count

    def test_empty_list_has_only_all_entry(self):
        categories = aggregate_categories([])

        assert len(categories) == 1
        assert categories[0].id == ALL_CATEGORIES
        assert categories[0].count == 0

    def test_single_category(self):
        categories = aggregate_categories([make_property(1, "Land"), make_property(2, "Land")])
        assert [(c.id, c.count) for c in categories] == [("all", 2), ("Land", 2)]


class TestFilterProperties:
    """Test category filtering."""

    def test_all_returns_every_property_in_order(self, mixed_properties):
        result = filter_properties(mixed_properties, "all")

        assert [p.id for p in result] == [1, 2, 3, 4]
        assert result is not mixed_properties

    def test_named_category_keeps_order(self, mixed_properties):
        assert [p.id for p in filter_properties(mixed_properties, "Land")] == [1, 3]

    def test_unmatched_name_is_empty(self, mixed_properties):
        assert filter_properties(mixed_properties, "Commercial") == []

    def test_missing_category_never_matches_named_filter(self, mixed_properties):
        assert filter_properties(mixed_properties, "Unknown") == []

    def test_filter_length_matches_aggregated_count(self, mixed_properties):
        for entry in aggregate_categories(mixed_properties):
            if entry.id in ("all", "Unknown"):
                continue
            assert len(filter_properties(mixed_properties, entry.id)) == entry.count


class TestCatalogSnapshot:
    """Test listing and table views."""

    def test_listing(self, mixed_properties):
        listing = CatalogSnapshot(mixed_properties).listing("Apartment")

        assert listing.selected_category == "Apartment"
        assert listing.total == 1
        assert listing.properties[0].id == 2
        assert len(listing.categories) == 4

    def test_table_rows_formatting(self):
        prop = make_property(7, "Land", price="2500000", roi="12", area="1200", distanceFromHighway=150)
        row = CatalogSnapshot([prop]).table_rows()[0]

        assert row.price == "Nrs. 2500000 per aana"
        assert row.roi == "12%"
        assert row.area == "1200 sq ft"
        assert row.distance_from_highway == "150m"
        assert row.images == "2 image(s)"
        assert row.category == "Land"

    def test_table_row_without_distance_or_category(self):
        prop = make_property(8, None, distanceFromHighway=None)
        row = PropertyTableRow.from_property(prop)

        assert row.distance_from_highway == "N/A"
        assert row.category == "N/A"


class TestPropertyCatalog:
    """Test catalog loading through the backend client."""

    @pytest.mark.asyncio
    async def test_listing_fetches_and_filters(self, backend_client, fake_backend):
        fake_backend.add_property(id=1, category={"id": 1, "name": "Land"})
        fake_backend.add_property(id=2, category={"id": 2, "name": "Apartment"})

        listing = await PropertyCatalog(backend_client).listing("Land")

        assert [p.id for p in listing.properties] == [1]
        assert [c.id for c in listing.categories] == ["all", "Land", "Apartment"]
        assert len(fake_backend.requests_to("GET", "/api/properties")) == 1
