"""
Test configuration and fixtures for the Estate Portal.
Provides an in-memory backend served through httpx's mock transport, test
data factories, and common test utilities.
"""

import io
import json
import re
from typing import Any, Dict, List, Optional, Tuple

import httpx
import pytest
from fastapi.testclient import TestClient
from PIL import Image

from estate_portal.config import Settings
from estate_portal.main import create_app
from estate_portal.services.backend import BackendClient
from estate_portal.services.image_set import ImageSetEditor, PreviewStore
from estate_portal.services.property_form import FormSessionRegistry
from estate_portal.utils.file_utils import SelectedFile


BACKEND_URL = "http://backend.test/api"
IMAGE_HOST = "http://backend.test"


def create_test_image(width: int = 800, height: int = 600, format: str = "JPEG") -> bytes:
    """Create a test image in memory."""
    img = Image.new('RGB', (width, height), color='red')
    img_bytes = io.BytesIO()
    img.save(img_bytes, format=format)
    img_bytes.seek(0)
    return img_bytes.getvalue()


def make_selected_file(name: str = "photo.jpg") -> SelectedFile:
    """Create a validated-looking selected file for image set tests."""
    if name.endswith(".png"):
        return SelectedFile(filename=name, content_type="image/png", content=create_test_image(format="PNG"))
    return SelectedFile(filename=name, content_type="image/jpeg", content=create_test_image())


def parse_multipart(request: httpx.Request) -> List[Tuple[str, Optional[str], bytes]]:
    """Split a multipart request body into (name, filename, body) parts."""
    content_type = request.headers["content-type"]
    boundary = content_type.split("boundary=")[1].encode()
    parts = []
    for chunk in request.content.split(b"--" + boundary):
        chunk = chunk.strip(b"\r\n")
        if not chunk or chunk == b"--":
            continue
        head, _, body = chunk.partition(b"\r\n\r\n")
        disposition = head.decode()
        name = re.search(r'name="([^"]*)"', disposition).group(1)
        filename_match = re.search(r'filename="([^"]*)"', disposition)
        parts.append((name, filename_match.group(1) if filename_match else None, body))
    return parts


def multipart_fields(request: httpx.Request) -> Dict[str, str]:
    """Scalar (non-file) parts of a multipart request."""
    return {
        name: body.decode()
        for name, filename, body in parse_multipart(request)
        if filename is None
    }


class PropertyFactory:
    """Factory for backend property payloads."""

    @staticmethod
    def create_property_data(
        id: int = 1,
        title: str = "Land plot near Ring Road",
        category: Optional[Dict[str, Any]] = None,
        **overrides
    ) -> Dict[str, Any]:
        """Create a property as the backend returns it (camelCase)."""
        if category is None:
            category = {"id": 1, "name": "Land"}
        data = {
            "id": id,
            "title": title,
            "categoryId": category["id"] if category else 0,
            "category": category or None,
            "location": "Bafal, Kathmandu",
            "price": "2500000",
            "roi": "12",
            "status": "Available",
            "area": "1200",
            "areaNepali": "0-4-2-1.5",
            "distanceFromHighway": 150,
            "images": ["/uploads/a.jpg", "/uploads/b.jpg"],
            "description": "Flat land with road access",
        }
        data.update(overrides)
        return data


class FakeBackend:
    """
    In-memory stand-in for the REST backend.

    Records every request it receives and answers the routes the portal uses.
    Set ``fail_with`` to make every request return that status.
    """

    def __init__(self):
        self.categories: List[Dict[str, Any]] = [
            {"id": 1, "name": "Land"},
            {"id": 2, "name": "Apartment"},
        ]
        self.properties: List[Dict[str, Any]] = []
        self.contacts: List[Dict[str, Any]] = []
        self.requests: List[httpx.Request] = []
        self.fail_with: Optional[int] = None
        self.unreachable = False
        self._next_id = 100

    def add_property(self, **kwargs) -> Dict[str, Any]:
        data = PropertyFactory.create_property_data(**kwargs)
        self.properties.append(data)
        return data

    def requests_to(self, method: str, path: str) -> List[httpx.Request]:
        return [r for r in self.requests if r.method == method and r.url.path == path]

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.unreachable:
            raise httpx.ConnectError("Connection refused", request=request)
        if self.fail_with is not None:
            return httpx.Response(self.fail_with, json={"message": "backend exploded"})

        path = request.url.path.removeprefix("/api")
        method = request.method

        if path == "/categories" and method == "GET":
            return httpx.Response(200, json=self.categories)
        match = re.fullmatch(r"/categories/(\d+)", path)
        if match:
            return self._category(method, int(match.group(1)))

        if path == "/properties" and method == "GET":
            return httpx.Response(200, json=self.properties)
        if path == "/properties" and method == "POST":
            return self._save_property(request, None)
        match = re.fullmatch(r"/properties/(\d+)", path)
        if match:
            return self._property(request, int(match.group(1)))

        if path == "/stats" and method == "GET":
            return httpx.Response(200, json={
                "totalProperties": len(self.properties),
                "totalCategories": len(self.categories),
            })
        if path == "/contacts" and method == "POST":
            self.contacts.append(json.loads(request.content))
            return httpx.Response(201, json={"success": True})

        return httpx.Response(404, json={"message": "Route not found"})

    def _category(self, method: str, category_id: int) -> httpx.Response:
        category = next((c for c in self.categories if c["id"] == category_id), None)
        if category is None:
            return httpx.Response(404, json={"message": "Category not found"})
        if method == "DELETE":
            self.categories.remove(category)
            return httpx.Response(200, json={"message": "Category deleted"})
        properties = [p for p in self.properties if p["categoryId"] == category_id]
        return httpx.Response(200, json={**category, "properties": properties})

    def _property(self, request: httpx.Request, property_id: int) -> httpx.Response:
        prop = next((p for p in self.properties if p["id"] == property_id), None)
        if prop is None:
            return httpx.Response(404, json={"message": "Property not found"})
        if request.method == "DELETE":
            self.properties.remove(prop)
            return httpx.Response(200, json={"message": "Property deleted"})
        if request.method == "PUT":
            return self._save_property(request, prop)
        return httpx.Response(200, json=prop)

    def _save_property(self, request: httpx.Request, existing: Optional[Dict[str, Any]]) -> httpx.Response:
        fields = multipart_fields(request)
        uploaded = [
            f"/uploads/{filename}"
            for name, filename, _ in parse_multipart(request)
            if name == "images" and filename
        ]
        category_id = int(fields.get("categoryId", "0"))
        category = next((c for c in self.categories if c["id"] == category_id), None)

        if existing is None:
            self._next_id += 1
            saved = {"id": self._next_id, "images": uploaded}
            self.properties.append(saved)
            status_code = 201
        else:
            saved = existing
            kept = json.loads(fields["existingImages"]) if "existingImages" in fields else []
            saved["images"] = kept + uploaded
            status_code = 200

        saved.update({
            "title": fields.get("title", ""),
            "categoryId": category_id,
            "category": category,
            "location": fields.get("location", ""),
            "price": fields.get("price", ""),
            "roi": fields.get("roi", ""),
            "status": fields.get("status", ""),
            "area": fields.get("area", ""),
            "areaNepali": fields.get("areaNepali"),
            "distanceFromHighway": (
                float(fields["distanceFromHighway"]) if "distanceFromHighway" in fields else None
            ),
            "description": fields.get("description", ""),
        })
        return httpx.Response(status_code, json=saved)


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    """Settings isolated to a temporary preview directory."""
    return Settings(
        environment="testing",
        backend_base_url=BACKEND_URL,
        image_base_url=IMAGE_HOST,
        preview_dir=str(tmp_path / "previews"),
        max_images_per_property=10,
        form_session_ttl_seconds=3600,
    )


@pytest.fixture
def fake_backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
async def backend_client(fake_backend: FakeBackend):
    """Backend client wired to the in-memory backend."""
    client = BackendClient(BACKEND_URL, transport=fake_backend.transport())
    yield client
    await client.aclose()


@pytest.fixture
def preview_store(tmp_path) -> PreviewStore:
    return PreviewStore(tmp_path / "session", url_prefix="/admin/forms/s1/previews", size=(64, 64))


@pytest.fixture
def image_editor(preview_store: PreviewStore):
    editor = ImageSetEditor(
        preview_store,
        existing=["/uploads/a.jpg", "/uploads/b.jpg"],
        max_images=10,
        image_base_url=IMAGE_HOST
    )
    yield editor
    editor.teardown()


@pytest.fixture
def form_registry(test_settings: Settings):
    registry = FormSessionRegistry(test_settings)
    yield registry
    registry.close_all()


@pytest.fixture
def client(test_settings: Settings, fake_backend: FakeBackend) -> TestClient:
    """Test client for an app talking to the in-memory backend."""
    backend = BackendClient(BACKEND_URL, transport=fake_backend.transport())
    app = create_app(settings=test_settings, backend_client=backend)
    test_client = TestClient(app)
    yield test_client
    app.state.form_registry.close_all()
