"""
Form validation utilities for the admin property forms and the contact form.
Validators collect every violation instead of stopping at the first one, so a
form can show all of its errors at once.
"""

import re
from typing import Any, Dict, List, NamedTuple, Optional
from email_validator import validate_email, EmailNotValidError

from estate_portal.schemas.property import PropertyDraft
from estate_portal.schemas.site import ContactSubmission


REQUIRED = "required"
INVALID_FORMAT = "invalid_format"
INVALID_VALUE = "invalid_value"


class FieldViolation(NamedTuple):
    """One failed rule for one form field."""
    field: str
    kind: str
    message: str


def is_blank(value: Any) -> bool:
    """True for None and for strings that are empty after trimming."""
    if value is None:
        return True
    return not str(value).strip()


def errors_from(violations: List[FieldViolation]) -> Dict[str, str]:
    """Collapse violations into a field -> message map, keeping the first per field."""
    errors: Dict[str, str] = {}
    for violation in violations:
        errors.setdefault(violation.field, violation.message)
    return errors


def kinds_from(violations: List[FieldViolation]) -> Dict[str, str]:
    kinds: Dict[str, str] = {}
    for violation in violations:
        kinds.setdefault(violation.field, violation.kind)
    return kinds


class PropertyFormValidator:
    """
    Field-level checks for a property draft.

    Error keys are the form field names used on the wire (``categoryId``,
    ``areaNepali``), so they line up with the inputs that render them.
    """

    AREA_NEPALI_PATTERN = re.compile(r'^\d+-\d+-\d+-\d+(\.\d+)?$')

    # (attribute, form field, label)
    REQUIRED_TEXT_FIELDS = [
        ("title", "title", "Title"),
        ("location", "location", "Location"),
        ("price", "price", "Price"),
        ("roi", "roi", "ROI"),
        ("status", "status", "Status"),
        ("area", "area", "Area"),
        ("description", "description", "Description"),
    ]

    @classmethod
    def violations(cls, draft: PropertyDraft) -> List[FieldViolation]:
        """
        Evaluate every rule against the draft.

        Args:
            draft: Property draft to check

        Returns:
            List of violations in form order; empty when the draft is valid
        """
        found: List[FieldViolation] = []

        for attribute, field, label in cls.REQUIRED_TEXT_FIELDS:
            if is_blank(getattr(draft, attribute)):
                found.append(FieldViolation(field, REQUIRED, f"{label} is required"))

        if not draft.category_id:
            found.append(FieldViolation("categoryId", REQUIRED, "Category is required"))

        if draft.area_nepali and not cls.AREA_NEPALI_PATTERN.fullmatch(draft.area_nepali):
            found.append(FieldViolation(
                "areaNepali", INVALID_FORMAT, "Invalid format (e.g., 0-0-0-0.0)"
            ))

        if draft.distance_from_highway is not None and draft.distance_from_highway < 0:
            found.append(FieldViolation(
                "distanceFromHighway", INVALID_VALUE, "Distance from highway cannot be negative"
            ))

        return found

    @classmethod
    def validate(cls, draft: PropertyDraft) -> Dict[str, str]:
        """
        Validate a draft.

        Returns:
            Mapping of form field name to message; empty when the draft may be submitted
        """
        return errors_from(cls.violations(draft))

    @classmethod
    def is_valid(cls, draft: PropertyDraft) -> bool:
        return not cls.violations(draft)


class ContactFormValidator:
    """Checks for the public contact form."""

    # Nepali mobile numbers, optionally with the country code
    PHONE_PATTERN = re.compile(r'^(\+977)?9[6-9]\d{8}$')

    @classmethod
    def violations(cls, submission: ContactSubmission) -> List[FieldViolation]:
        found: List[FieldViolation] = []

        if is_blank(submission.name):
            found.append(FieldViolation("name", REQUIRED, "Name is required"))

        if is_blank(submission.email):
            found.append(FieldViolation("email", REQUIRED, "Email is required"))
        else:
            email_error = cls._email_error(submission.email)
            if email_error:
                found.append(FieldViolation("email", INVALID_FORMAT, email_error))

        if submission.phone and not cls.PHONE_PATTERN.match(submission.phone.replace(" ", "")):
            found.append(FieldViolation("phone", INVALID_FORMAT, "Please enter a valid phone number"))

        if is_blank(submission.investment_range):
            found.append(FieldViolation("investmentRange", REQUIRED, "Investment range is required"))

        if is_blank(submission.property_type):
            found.append(FieldViolation("propertyType", REQUIRED, "Property type is required"))

        return found

    @classmethod
    def validate(cls, submission: ContactSubmission) -> Dict[str, str]:
        return errors_from(cls.violations(submission))

    @staticmethod
    def _email_error(email: str) -> Optional[str]:
        try:
            # Syntax only; deliverability would need a DNS lookup per submission
            validate_email(email, check_deliverability=False)
            return None
        except EmailNotValidError:
            return "Please enter a valid email address"
