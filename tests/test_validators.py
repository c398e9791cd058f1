"""
Tests for property form, contact form and image file validation.
"""

import pytest

from estate_portal.schemas.property import PropertyDraft
from estate_portal.schemas.site import ContactSubmission
from estate_portal.utils.exceptions import (
    FileSizeExceededError,
    UnsupportedFileTypeError,
    ValidationError
)
from estate_portal.utils.file_utils import FileValidator
from estate_portal.utils.validators import (
    INVALID_FORMAT,
    REQUIRED,
    ContactFormValidator,
    PropertyFormValidator
)
from tests.conftest import create_test_image


def valid_draft(**overrides) -> PropertyDraft:
    data = {
        "title": "Land plot",
        "category_id": 1,
        "location": "Bafal",
        "price": "2500000",
        "roi": "12",
        "status": "Available",
        "area": "1200",
        "description": "Flat land",
    }
    data.update(overrides)
    return PropertyDraft(**data)


class TestPropertyFormValidator:
    """Test property draft validation."""

    def test_valid_draft(self):
        assert PropertyFormValidator.validate(valid_draft()) == {}
        assert PropertyFormValidator.is_valid(valid_draft())

    def test_empty_draft_reports_every_required_field(self):
        errors = PropertyFormValidator.validate(PropertyDraft())

        assert set(errors) == {
            "title", "categoryId", "location", "price", "roi", "status", "area", "description"
        }
        assert errors["title"] == "Title is required"
        assert errors["roi"] == "ROI is required"
        assert errors["categoryId"] == "Category is required"

    def test_whitespace_only_is_missing(self):
        errors = PropertyFormValidator.validate(valid_draft(title="   "))
        assert errors == {"title": "Title is required"}

    @pytest.mark.parametrize("value", ["0-0-0-0", "1-2-3-4.5", "12-10-3-0.25"])
    def test_area_nepali_valid_formats(self, value):
        assert PropertyFormValidator.validate(valid_draft(area_nepali=value)) == {}

    @pytest.mark.parametrize("value", [
        "1-2-3", "a-b-c-d", "1-2-3-4.", "1 -2-3-4", "   ", " 1-2-3-4 ", "1-2-3-4\n"
    ])
    def test_area_nepali_invalid_formats(self, value):
        errors = PropertyFormValidator.validate(valid_draft(area_nepali=value))
        assert errors == {"areaNepali": "Invalid format (e.g., 0-0-0-0.0)"}

    def test_area_nepali_optional(self):
        assert PropertyFormValidator.validate(valid_draft(area_nepali="")) == {}

    def test_negative_distance(self):
        errors = PropertyFormValidator.validate(valid_draft(distance_from_highway=-1))
        assert errors == {"distanceFromHighway": "Distance from highway cannot be negative"}

    def test_zero_distance_allowed(self):
        assert PropertyFormValidator.validate(valid_draft(distance_from_highway=0)) == {}

    def test_violation_kinds(self):
        violations = PropertyFormValidator.violations(valid_draft(title="", area_nepali="bad"))
        kinds = {v.field: v.kind for v in violations}
        assert kinds == {"title": REQUIRED, "areaNepali": INVALID_FORMAT}


class TestContactFormValidator:
    """Test contact inquiry validation."""

    def make_submission(self, **overrides) -> ContactSubmission:
        data = {
            "name": "Sita Sharma",
            "email": "sita@bwic.com.np",
            "phone": "+9779812345678",
            "investmentRange": "1-5 Crore",
            "propertyType": "Land",
            "message": "Interested in land near the highway",
        }
        data.update(overrides)
        return ContactSubmission.model_validate(data)

    def test_valid_submission(self):
        assert ContactFormValidator.validate(self.make_submission()) == {}

    def test_missing_required_fields(self):
        errors = ContactFormValidator.validate(ContactSubmission())
        assert set(errors) == {"name", "email", "investmentRange", "propertyType"}

    def test_invalid_email(self):
        errors = ContactFormValidator.validate(self.make_submission(email="not-an-email"))
        assert errors == {"email": "Please enter a valid email address"}

    @pytest.mark.parametrize("phone", ["9812345678", "+977 981 234 5678", ""])
    def test_valid_phone(self, phone):
        assert ContactFormValidator.validate(self.make_submission(phone=phone)) == {}

    @pytest.mark.parametrize("phone", ["12345", "9512345678", "+1 555 123 4567"])
    def test_invalid_phone(self, phone):
        errors = ContactFormValidator.validate(self.make_submission(phone=phone))
        assert errors == {"phone": "Please enter a valid phone number"}

    def test_fields_are_trimmed(self):
        submission = self.make_submission(name="  Sita  ")
        assert submission.name == "Sita"


class TestFileValidator:
    """Test image file checks."""

    def test_valid_jpeg(self):
        selected = FileValidator.validate_selected_file("photo.jpg", "image/jpeg", create_test_image())

        assert selected.filename == "photo.jpg"
        assert selected.size > 0

    def test_unsupported_extension(self):
        with pytest.raises(ValidationError):
            FileValidator.validate_file_extension("notes.txt")

    def test_unsupported_mime_type(self):
        with pytest.raises(UnsupportedFileTypeError):
            FileValidator.validate_mime_type("text/plain")

    def test_mime_type_outside_configured_list(self):
        with pytest.raises(UnsupportedFileTypeError):
            FileValidator.validate_mime_type("image/webp", allowed_types=["image/jpeg"])

    def test_oversized_file(self):
        with pytest.raises(FileSizeExceededError):
            FileValidator.validate_file_size(11 * 1024 * 1024)

    def test_empty_file(self):
        with pytest.raises(ValidationError):
            FileValidator.validate_file_size(0)

    def test_content_must_match_mime_type(self):
        with pytest.raises(ValidationError, match="doesn't match"):
            FileValidator.validate_selected_file(
                "photo.jpg", "image/jpeg", create_test_image(format="PNG")
            )

    def test_extension_must_match_mime_type(self):
        with pytest.raises(ValidationError, match="doesn't match"):
            FileValidator.validate_selected_file("photo.png", "image/jpeg", create_test_image())
