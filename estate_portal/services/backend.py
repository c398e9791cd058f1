"""
Client for the REST backend that owns properties, categories, stats and
contact submissions. Every failure is mapped onto the API exception taxonomy
so routers can let it propagate to the global error handlers.
"""

import json
import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError as PydanticValidationError

from estate_portal.config import Settings
from estate_portal.schemas.category import Category, CategoryDetail
from estate_portal.schemas.property import Property, PropertyDraft
from estate_portal.schemas.site import ContactSubmission, DashboardStats
from estate_portal.utils.exceptions import (
    BackendHTTPError,
    BackendUnavailableError,
    NotFoundError
)
from estate_portal.utils.file_utils import SelectedFile

logger = logging.getLogger(__name__)


ModelT = TypeVar("ModelT", bound=BaseModel)
MultipartParts = List[Tuple[str, Tuple[Optional[str], Any, Optional[str]]]]


def build_property_parts(
    draft: PropertyDraft,
    new_files: Sequence[SelectedFile] = (),
    retained_images: Optional[Sequence[str]] = None
) -> MultipartParts:
    """
    Multipart parts for a property create/update request.

    Scalar fields are sent as parts without a filename so the request is
    multipart even when no image is attached.
    """
    parts: MultipartParts = [
        (name, (None, value, None)) for name, value in draft.to_form_fields().items()
    ]
    for selected in new_files:
        parts.append(("images", (selected.filename, selected.content, selected.content_type)))
    if retained_images:
        parts.append(("existingImages", (None, json.dumps(list(retained_images)), None)))
    return parts


class BackendClient:
    """
    Async client for the property backend.

    Args:
        base_url: Backend address, e.g. ``http://localhost:3000/api``
        timeout: Request timeout in seconds
        transport: Optional httpx transport (used by tests)
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
            headers={"Accept": "application/json"}
        )

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs) -> "BackendClient":
        return cls(settings.backend_base_url, timeout=settings.backend_timeout, **kwargs)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "BackendClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    # Categories

    async def list_categories(self) -> List[Category]:
        data = await self._request("GET", "/categories", failure="Failed to fetch categories")
        return [self._parse(Category, item, "category") for item in self._expect_list(data, "categories")]

    async def get_category(self, category_id: int) -> CategoryDetail:
        data = await self._request(
            "GET", f"/categories/{category_id}",
            failure="Failed to fetch category details",
            resource=("Category", category_id)
        )
        return self._parse(CategoryDetail, data, "category")

    async def delete_category(self, category_id: int) -> Dict[str, Any]:
        data = await self._request(
            "DELETE", f"/categories/{category_id}",
            failure="Failed to delete category",
            resource=("Category", category_id)
        )
        logger.info(f"Deleted category {category_id}")
        return data or {}

    # Properties

    async def list_properties(self) -> List[Property]:
        data = await self._request("GET", "/properties", failure="Failed to fetch properties")
        return [self._parse(Property, item, "property") for item in self._expect_list(data, "properties")]

    async def get_property(self, property_id: int) -> Property:
        data = await self._request(
            "GET", f"/properties/{property_id}",
            failure="Failed to fetch property",
            resource=("Property", property_id)
        )
        return self._parse(Property, data, "property")

    async def create_property(
        self,
        draft: PropertyDraft,
        new_files: Sequence[SelectedFile] = ()
    ) -> Property:
        data = await self._request(
            "POST", "/properties",
            failure="Failed to create property",
            files=build_property_parts(draft, new_files)
        )
        created = self._parse(Property, data, "property")
        logger.info(f"Created property {created.id}: {created.title}")
        return created

    async def update_property(
        self,
        property_id: int,
        draft: PropertyDraft,
        new_files: Sequence[SelectedFile] = (),
        retained_images: Sequence[str] = ()
    ) -> Property:
        data = await self._request(
            "PUT", f"/properties/{property_id}",
            failure="Failed to update property",
            resource=("Property", property_id),
            files=build_property_parts(draft, new_files, retained_images)
        )
        updated = self._parse(Property, data, "property")
        logger.info(f"Updated property {property_id}")
        return updated

    async def delete_property(self, property_id: int) -> Dict[str, Any]:
        data = await self._request(
            "DELETE", f"/properties/{property_id}",
            failure="Failed to delete property",
            resource=("Property", property_id)
        )
        logger.info(f"Deleted property {property_id}")
        return data or {}

    # Dashboard and contact

    async def get_stats(self) -> DashboardStats:
        data = await self._request("GET", "/stats", failure="Failed to load stats")
        return self._parse(DashboardStats, data or {}, "stats")

    async def submit_contact(self, submission: ContactSubmission) -> Dict[str, Any]:
        data = await self._request(
            "POST", "/contacts",
            failure="Failed to send message",
            json=submission.model_dump(by_alias=True)
        )
        logger.info("Contact submission forwarded")
        return data or {}

    # Internals

    async def _request(
        self,
        method: str,
        path: str,
        failure: str,
        resource: Optional[Tuple[str, Any]] = None,
        **kwargs
    ) -> Any:
        """
        Send a request and decode the JSON body.

        Raises:
            BackendUnavailableError: If the backend cannot be reached
            NotFoundError: If the backend answers 404 for a known resource
            BackendHTTPError: For any other non-2xx response or an undecodable body
        """
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.RequestError as e:
            logger.error(f"Backend request {method} {path} failed: {type(e).__name__} - {e}")
            raise BackendUnavailableError(f"{failure}: backend unreachable")

        if response.is_error:
            logger.warning(f"Backend {method} {path} returned {response.status_code}")
            if response.status_code == 404 and resource is not None:
                raise NotFoundError(resource[0], str(resource[1]))
            raise BackendHTTPError(response.status_code, self._error_message(response, failure))

        if not response.content:
            return None

        try:
            return response.json()
        except ValueError:
            raise BackendHTTPError(response.status_code, f"{failure}: invalid response from backend")

    @staticmethod
    def _error_message(response: httpx.Response, failure: str) -> str:
        try:
            payload = response.json()
        except ValueError:
            return failure
        if isinstance(payload, dict) and payload.get("message"):
            return f"{failure}: {payload['message']}"
        return failure

    @staticmethod
    def _expect_list(data: Any, what: str) -> List[Any]:
        if not isinstance(data, list):
            logger.error(f"Expected a list of {what} but got {type(data).__name__}")
            raise BackendHTTPError(200, f"Unexpected {what} payload from backend")
        return data

    @staticmethod
    def _parse(model: Type[ModelT], data: Any, what: str) -> ModelT:
        try:
            return model.model_validate(data)
        except PydanticValidationError as e:
            logger.error(f"Malformed {what} from backend: {e.error_count()} error(s)")
            raise BackendHTTPError(200, f"Malformed {what} payload from backend")
