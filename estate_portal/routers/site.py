"""
Public site endpoints: static content, property listing and the contact form.
"""

from fastapi import APIRouter, Depends, Path, Query, status

from estate_portal.content import get_site_content
from estate_portal.schemas.error import get_backend_error_responses, get_error_responses
from estate_portal.schemas.property import Property, PropertyListing
from estate_portal.schemas.site import ContactAcknowledgement, ContactSubmission, SiteContent
from estate_portal.services.backend import BackendClient
from estate_portal.services.catalog import ALL_CATEGORIES, PropertyCatalog
from estate_portal.utils.dependencies import get_backend_client, get_property_catalog
from estate_portal.utils.exceptions import FormValidationError
from estate_portal.utils.validators import ContactFormValidator, errors_from, kinds_from


router = APIRouter(tags=["Site"])


@router.get(
    "/site",
    response_model=SiteContent,
    summary="Static site content",
    description="Brand, navigation, services, process steps, team and contact details"
)
async def site_content() -> SiteContent:
    return get_site_content()


@router.get(
    "/properties",
    response_model=PropertyListing,
    status_code=status.HTTP_200_OK,
    summary="List properties by category",
    description="Category filters with counts, and the properties of the selected category",
    responses=get_backend_error_responses()
)
async def list_properties(
    category: str = Query(ALL_CATEGORIES, description="Category name, or 'all'"),
    catalog: PropertyCatalog = Depends(get_property_catalog)
) -> PropertyListing:
    """
    Get the public property listing.

    Args:
        category: Selected category token
        catalog: Property catalog

    Returns:
        Category filters and the filtered properties
    """
    return await catalog.listing(category)


@router.get(
    "/properties/{property_id}",
    response_model=Property,
    summary="Get property details",
    responses=get_backend_error_responses()
)
async def get_property(
    property_id: int = Path(..., gt=0, description="Property ID"),
    client: BackendClient = Depends(get_backend_client)
) -> Property:
    return await client.get_property(property_id)


@router.post(
    "/contact",
    response_model=ContactAcknowledgement,
    status_code=status.HTTP_200_OK,
    summary="Send a contact inquiry",
    responses=get_error_responses(422, 502, 503)
)
async def submit_contact(
    submission: ContactSubmission,
    client: BackendClient = Depends(get_backend_client)
) -> ContactAcknowledgement:
    """
    Validate a contact inquiry and forward it to the backend.

    Raises:
        FormValidationError: If required fields are missing or malformed
    """
    violations = ContactFormValidator.violations(submission)
    if violations:
        raise FormValidationError(errors_from(violations), kinds_from(violations))

    await client.submit_contact(submission)
    return ContactAcknowledgement()
