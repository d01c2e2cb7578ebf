"""Core data models for the itinerary builder."""

import base64
from dataclasses import dataclass, field, asdict
from typing import List, Optional, Dict, Any, Union


@dataclass
class NightBreakup:
    destination: str
    nights: int


@dataclass
class CostInputs:
    """Pricing block of an itinerary.

    ``total_pax`` and ``total_cost`` are derived by the pricing reconciler;
    ``total_cost`` may also hold a manual override such as "Price on Request".
    """

    adults: int = 0
    children: int = 0
    rooms: int = 0
    extra_beds: int = 0
    cnb_count: int = 0
    per_adult_price: str = ""
    per_child_price: str = ""
    extra_bed_price: str = ""
    cnb_price: str = ""
    total_pax: int = 0
    total_cost: str = "Price on Request"
    night_breakup: List[NightBreakup] = field(default_factory=list)


@dataclass
class DayPlan:
    id: str
    title: str
    description: str = ""
    date: Optional[str] = None
    distance: Optional[str] = None
    travel_time: Optional[str] = None


@dataclass
class DayTemplate:
    id: str
    title: str
    description: str
    distance: Optional[str] = None
    travel_time: Optional[str] = None


@dataclass
class OverviewTemplate:
    title: str
    content: str


@dataclass
class Hotel:
    id: str
    name: str
    location: str
    stars: int = 3
    amenities: List[str] = field(default_factory=list)
    images: List[str] = field(default_factory=list)
    category: str = ""


@dataclass
class ItineraryHotel(Hotel):
    is_selected: bool = True


@dataclass
class Branding:
    company_name: str = ""
    logo_url: str = ""
    address: str = ""
    office_locations: List[str] = field(default_factory=list)
    phone: str = ""
    whatsapp: str = ""
    helpline: str = ""
    website: str = ""
    primary_color: str = "#D31A1A"
    secondary_color: str = "#300000"
    accent_color: str = "#fbbf24"
    heading_color: str = "#FFFFFF"
    text_color: str = "#111111"
    locations: List[str] = field(default_factory=list)
    package_categories: List[str] = field(default_factory=list)
    room_types: List[str] = field(default_factory=list)
    terms: List[str] = field(default_factory=list)
    cancellation_policy: List[str] = field(default_factory=list)
    default_inclusions: List[str] = field(default_factory=list)
    default_exclusions: List[str] = field(default_factory=list)
    default_supplement_costs: List[str] = field(default_factory=list)
    saved_day_templates: List[DayTemplate] = field(default_factory=list)
    saved_overviews: List[OverviewTemplate] = field(default_factory=list)
    master_cover_images: List[str] = field(default_factory=list)


@dataclass
class Itinerary:
    id: str
    client_name: str = ""
    package_name: str = ""
    destinations: str = ""
    duration: str = ""
    package_type: str = ""
    travel_dates: str = ""
    overview: str = ""
    cover_images: List[str] = field(default_factory=lambda: ["", "", "", ""])
    days: List[DayPlan] = field(default_factory=list)
    selected_hotels: List[ItineraryHotel] = field(default_factory=list)
    pricing: CostInputs = field(default_factory=CostInputs)
    inclusions: List[str] = field(default_factory=list)
    exclusions: List[str] = field(default_factory=list)
    supplement_costs: List[str] = field(default_factory=list)
    terms: List[str] = field(default_factory=list)
    cancellation_policy: List[str] = field(default_factory=list)


@dataclass
class CompressionRequest:
    image: Union[bytes, str]
    max_width: int = 1280
    max_height: int = 720
    target_bytes: int = 70_000


@dataclass
class CompressionResult:
    data: bytes
    width: int
    height: int
    quality: int
    size_bytes: int
    mime_type: str = "image/jpeg"

    def to_data_url(self) -> str:
        encoded = base64.b64encode(self.data).decode("ascii")
        return f"data:{self.mime_type};base64,{encoded}"


@dataclass
class ItineraryDocument:
    """Structured document handed to the PDF renderer."""

    cover: Dict[str, Any]
    overview: str
    day_plan_table: str
    hotels_summary: str
    pricing_summary: str
    inclusions: str
    exclusions: str
    supplement_costs: str
    terms: str
    cancellation_policy: str
    contact: str


def to_dict(obj: Any) -> Dict[str, Any]:
    """Convenience helper for serializing models in APIs."""

    return asdict(obj)
