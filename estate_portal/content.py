"""
Static content of the public marketing pages.
"""

from estate_portal.schemas.site import (
    Address,
    Brand,
    ContactInformation,
    NavItem,
    ProcessStep,
    Service,
    SiteContent,
    TeamMember
)


BRAND = Brand(name="BWIC", logo="")

NAV_ITEMS = [
    NavItem(name="Home", path="/"),
    NavItem(name="About", path="/about"),
    NavItem(name="Services", path="/services"),
    NavItem(name="Properties", path="/properties"),
    NavItem(name="Contact", path="/contact"),
]

SERVICES = [
    Service(
        title="Property Investment Advisory",
        icon="🏘️",
        description="Expert guidance on investing in residential and commercial real estate across Nepal.",
        features=[
            "Local market insights",
            "Feasibility studies",
            "Risk assessment",
            "ROI projections",
            "Custom investment plans",
        ],
    ),
    Service(
        title="Land Acquisition Support",
        icon="🗺️",
        description="We assist you in identifying and acquiring legally verified land in strategic locations.",
        features=[
            "Due diligence and title verification",
            "Government clearance assistance",
            "Location scouting",
            "Zoning & regulatory checks",
            "Purchase negotiation support",
        ],
    ),
    Service(
        title="Project Development Services",
        icon="🏗️",
        description="End-to-end support for real estate development, from planning to project execution.",
        features=[
            "Architectural planning",
            "Contractor liaison",
            "Regulatory compliance",
            "Timeline management",
            "Quality assurance",
        ],
    ),
    Service(
        title="Rental Property Management",
        icon="🏠",
        description="Manage and grow your rental property portfolio with our reliable property management services.",
        features=[
            "Tenant sourcing",
            "Rental agreements",
            "Maintenance coordination",
            "Rent collection",
            "Occupancy tracking",
        ],
    ),
    Service(
        title="Real Estate Portfolio Diversification",
        icon="📈",
        description="We help you diversify your investment portfolio with strategic real estate assets across Nepal.",
        features=[
            "Mixed-use properties",
            "Tourism real estate",
            "Agricultural lands",
            "Commercial spaces",
            "Joint venture opportunities",
        ],
    ),
    Service(
        title="Legal & Financial Consultation",
        icon="📜",
        description="Access professional legal and financial advisors to ensure safe and smart investment decisions.",
        features=[
            "Legal vetting",
            "Tax and compliance guidance",
            "Banking and loan assistance",
            "Document drafting",
            "Investment structuring",
        ],
    ),
]

PROCESS_STEPS = [
    ProcessStep(
        step="1",
        title="Initial Consultation",
        description="We begin with a comprehensive discussion of your financial goals, risk tolerance, and current situation.",
    ),
    ProcessStep(
        step="2",
        title="Market Research",
        description="We shortlist verified properties that match your goals using local market data.",
    ),
    ProcessStep(
        step="3",
        title="Due Diligence",
        description="Titles, zoning and approvals are checked before any commitment is made.",
    ),
    ProcessStep(
        step="4",
        title="Acquisition & Management",
        description="We support the purchase and keep managing the asset for long-term returns.",
    ),
]

TEAM_MEMBERS = [
    TeamMember(
        name="Rameshwor Paudel",
        position="Founder & CEO",
        experience="35+ years in real estate and entrepreneurship",
        image="RP",
        background="Property consultant, BBA from KU School of Management",
        bio="Rameshwor leads BWIC with a passion for transforming Nepal's real estate landscape through innovation and accessibility.",
        achievements=[
            "Founded BWIC to simplify property investment in Nepal",
            "Built partnerships with key developers in Kathmandu Valley",
        ],
    ),
    TeamMember(
        name="Roshan Poudel",
        position="Chief Operating Officer",
        experience="4+ years in accounts, project management and operations",
        image="RP",
        background="Former operations lead at a fintech startup, BBA from Ace Institute",
        bio="Roshan ensures smooth execution of company strategies and investor services.",
        achievements=[
            "Led setup of BWIC's investment portal",
            "Streamlined due diligence and compliance procedures",
        ],
    ),
    TeamMember(
        name="Rajan Khadka",
        position="Head of Market Research",
        experience="3+ years in real estate data analysis",
        image="RK",
        background="Economics graduate from Tribhuvan University",
        bio="Rajan studies local and regional real estate trends to guide our acquisition strategy.",
        achievements=[
            "Published reports on land value trends in Kathmandu & Pokhara",
            "Developed BWIC's first market scoring framework",
        ],
    ),
    TeamMember(
        name="Sujata Tamang",
        position="Community & Investor Relations Lead",
        experience="4+ years in client engagement",
        image="ST",
        background="PR and Communications specialist, Bachelors from PU",
        bio="Sujata handles our communication with investors and local communities.",
        achievements=[
            "Built BWIC's investor onboarding and FAQ content",
            "Launched BWIC's monthly investor newsletter",
        ],
    ),
]

CONTACT_INFO = ContactInformation(
    email="info@bwic.com.np",
    phone="+977 9851069535",
    address=Address(street="Nagarjun Tole, Bafal-13", city="Kathmandu", country="Nepal"),
)


def get_site_content() -> SiteContent:
    return SiteContent(
        brand=BRAND,
        navigation=NAV_ITEMS,
        services=SERVICES,
        process_steps=PROCESS_STEPS,
        team=TEAM_MEMBERS,
        contact=CONTACT_INFO,
    )
