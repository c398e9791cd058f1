"""
Admin back-office endpoints: dashboard, properties table and categories table.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Path, status

from estate_portal.schemas.category import Category, CategoryPropertiesResponse
from estate_portal.schemas.error import get_backend_error_responses
from estate_portal.schemas.property import PropertyTableRow
from estate_portal.schemas.site import DashboardResponse, QuickAction
from estate_portal.services.backend import BackendClient
from estate_portal.services.catalog import PropertyCatalog
from estate_portal.utils.dependencies import get_backend_client, get_property_catalog


router = APIRouter(prefix="/admin", tags=["Admin"])


QUICK_ACTIONS = [
    QuickAction(href="/admin/addProperty", label="Add New Property"),
    QuickAction(href="/admin/properties", label="Manage Properties"),
    QuickAction(href="/admin/categories", label="Manage Categories"),
]


@router.get(
    "/dashboard",
    response_model=DashboardResponse,
    summary="Dashboard stats",
    responses=get_backend_error_responses()
)
async def dashboard(client: BackendClient = Depends(get_backend_client)) -> DashboardResponse:
    stats = await client.get_stats()
    return DashboardResponse(
        stats=stats,
        quick_actions=QUICK_ACTIONS,
        greeting="Welcome Back, Admin"
    )


@router.get(
    "/properties",
    response_model=List[PropertyTableRow],
    summary="Properties table",
    description="All properties with display formatting for the admin table",
    responses=get_backend_error_responses()
)
async def properties_table(
    catalog: PropertyCatalog = Depends(get_property_catalog)
) -> List[PropertyTableRow]:
    snapshot = await catalog.load()
    return snapshot.table_rows()


@router.delete(
    "/properties/{property_id}",
    status_code=status.HTTP_200_OK,
    summary="Delete property",
    responses=get_backend_error_responses()
)
async def delete_property(
    property_id: int = Path(..., gt=0, description="Property ID"),
    client: BackendClient = Depends(get_backend_client)
) -> Dict[str, Any]:
    await client.delete_property(property_id)
    return {"message": "Property deleted successfully", "id": property_id}


@router.get(
    "/categories",
    response_model=List[Category],
    summary="Categories table",
    responses=get_backend_error_responses()
)
async def categories_table(client: BackendClient = Depends(get_backend_client)) -> List[Category]:
    return await client.list_categories()


@router.get(
    "/categories/{category_id}",
    response_model=CategoryPropertiesResponse,
    summary="Properties of one category",
    responses=get_backend_error_responses()
)
async def category_properties(
    category_id: int = Path(..., gt=0, description="Category ID"),
    client: BackendClient = Depends(get_backend_client)
) -> CategoryPropertiesResponse:
    detail = await client.get_category(category_id)
    return CategoryPropertiesResponse.from_detail(detail)


@router.delete(
    "/categories/{category_id}",
    status_code=status.HTTP_200_OK,
    summary="Delete category",
    responses=get_backend_error_responses()
)
async def delete_category(
    category_id: int = Path(..., gt=0, description="Category ID"),
    client: BackendClient = Depends(get_backend_client)
) -> Dict[str, Any]:
    await client.delete_category(category_id)
    return {"message": "Category deleted successfully", "id": category_id}
