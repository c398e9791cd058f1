"""
Pydantic schemas for public site content, the contact form and dashboard stats.
"""

from pydantic import Field, field_validator
from typing import Optional, List

from estate_portal.schemas.property import CamelModel


class Brand(CamelModel):
    name: str
    logo: str = ""


class NavItem(CamelModel):
    name: str
    path: str


class Service(CamelModel):
    title: str
    icon: str
    description: str
    features: List[str] = Field(default_factory=list)


class ProcessStep(CamelModel):
    step: str
    title: str
    description: str


class TeamMember(CamelModel):
    name: str
    position: str
    experience: str
    image: str
    background: str
    bio: str
    achievements: List[str] = Field(default_factory=list)


class Address(CamelModel):
    street: str
    city: str
    country: str


class ContactInformation(CamelModel):
    email: str
    phone: str
    address: Address


class SiteContent(CamelModel):
    """Everything the static marketing pages render."""

    brand: Brand
    navigation: List[NavItem]
    services: List[Service]
    process_steps: List[ProcessStep]
    team: List[TeamMember]
    contact: ContactInformation


class ContactSubmission(CamelModel):
    """Contact form as posted by a visitor and forwarded to the backend."""

    name: str = ""
    email: str = ""
    phone: str = ""
    investment_range: str = ""
    property_type: str = ""
    message: str = ""

    @field_validator("name", "email", "phone", "investment_range", "property_type", "message",
                     mode="before")
    @classmethod
    def strip_fields(cls, v):
        if v is None:
            return ""
        return str(v).strip()


class ContactAcknowledgement(CamelModel):
    success: bool = True
    message: str = "Thank you for your inquiry! We'll get back to you within 24 hours."


class DashboardStats(CamelModel):
    total_properties: int = Field(0, ge=0)
    total_categories: int = Field(0, ge=0)


class QuickAction(CamelModel):
    href: str
    label: str


class DashboardResponse(CamelModel):
    stats: DashboardStats
    quick_actions: List[QuickAction]
    greeting: Optional[str] = None
