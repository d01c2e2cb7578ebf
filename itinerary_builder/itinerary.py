"""State operations behind the itinerary form wizard."""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Tuple

from .images import ImageSource, compress_image
from .models import (
    Branding,
    CostInputs,
    DayPlan,
    DayTemplate,
    Hotel,
    Itinerary,
    ItineraryHotel,
    OverviewTemplate,
)
from .pricing import reconcile_pricing
from .services.remote_images import fetch_image
from .utils import add_days, duration_label, format_day_label, format_short_date, make_id, nights_between


logger = logging.getLogger(__name__)

DEFAULT_PACKAGE_TYPE = "Standard Package"
LIST_FIELDS = ("inclusions", "exclusions", "supplement_costs", "terms", "cancellation_policy")
BRANDING_LIST_FIELDS = ("package_categories", "locations", "office_locations", "terms", "cancellation_policy")


def new_itinerary(branding: Optional[Branding] = None) -> Itinerary:
    branding = branding or Branding()
    package_type = (branding.package_categories or [""])[0] or DEFAULT_PACKAGE_TYPE
    return Itinerary(
        id=make_id("itinerary"),
        package_type=package_type,
        days=[DayPlan(id=make_id("day_1"), title="Arrival", description="", distance="", travel_time="")],
        pricing=CostInputs(),
        terms=list(branding.terms),
        cancellation_policy=list(branding.cancellation_policy),
    )


def derive_trip_dates(start_date: str, end_date: str) -> Tuple[str, str]:
    """Return the ``("3N / 4D", "10 Jun 2025 to 13 Jun 2025")`` pair for a trip."""

    nights = nights_between(start_date, end_date)
    travel_dates = f"{format_short_date(start_date)} to {format_short_date(end_date)}"
    return duration_label(nights), travel_dates


def apply_trip_dates(itinerary: Itinerary, start_date: str, end_date: str) -> None:
    itinerary.duration, itinerary.travel_dates = derive_trip_dates(start_date, end_date)


def date_for_day(start_date: Optional[str], index: int) -> str:
    if not start_date:
        return ""
    return add_days(start_date, index) or ""


def day_date_label(index: int, start_date: Optional[str] = None, manual_date: Optional[str] = None) -> str:
    active = manual_date or date_for_day(start_date, index)
    if not active:
        return f"Day {index + 1:02d}"
    return format_day_label(active)


def add_day(itinerary: Itinerary) -> DayPlan:
    number = len(itinerary.days) + 1
    day = DayPlan(id=make_id(f"day_{number}"), title="", description="", distance="", travel_time="")
    itinerary.days.append(day)
    return day


def remove_day(itinerary: Itinerary, day_id: str) -> bool:
    remaining = [d for d in itinerary.days if d.id != day_id]
    removed = len(remaining) != len(itinerary.days)
    itinerary.days = remaining
    return removed


def apply_day_template(itinerary: Itinerary, day_id: str, template_id: str, branding: Branding) -> bool:
    """Copy a saved day template into the matching day."""

    template = next((t for t in branding.saved_day_templates if t.id == template_id), None)
    if template is None:
        return False
    for day in itinerary.days:
        if day.id == day_id:
            day.title = template.title
            day.description = template.description
            day.distance = template.distance or ""
            day.travel_time = template.travel_time or ""
            return True
    return False


def apply_overview_template(itinerary: Itinerary, title: str, branding: Branding) -> bool:
    overview = next((o for o in branding.saved_overviews if o.title == title), None)
    if overview is None:
        return False
    itinerary.overview = overview.content
    return True


def toggle_hotel_selection(itinerary: Itinerary, hotel: Hotel) -> bool:
    """Select ``hotel`` if it is not yet on the itinerary, otherwise drop it.

    Returns ``True`` when the hotel ends up selected.
    """

    if any(h.id == hotel.id for h in itinerary.selected_hotels):
        itinerary.selected_hotels = [h for h in itinerary.selected_hotels if h.id != hotel.id]
        return False
    itinerary.selected_hotels.append(
        ItineraryHotel(
            id=hotel.id,
            name=hotel.name,
            location=hotel.location,
            stars=hotel.stars,
            amenities=list(hotel.amenities),
            images=list(hotel.images),
            category=hotel.category,
            is_selected=True,
        )
    )
    return True


def add_list_entry(itinerary: Itinerary, field_name: str, text: str) -> bool:
    if field_name not in LIST_FIELDS:
        raise ValueError(f"Unknown list field: {field_name}")
    if not text or not text.strip():
        return False
    getattr(itinerary, field_name).append(text)
    return True


def reconcile(itinerary: Itinerary) -> bool:
    return reconcile_pricing(itinerary.pricing)


def _load_source(source: ImageSource) -> ImageSource:
    if isinstance(source, str) and source.startswith(("http://", "https://")):
        return fetch_image(source)
    return source


def attach_hotel_images(
    hotel: Hotel,
    sources: Iterable[ImageSource],
    max_width: Optional[int] = None,
    max_height: Optional[int] = None,
    target_bytes: Optional[int] = None,
) -> List[str]:
    """Compress uploads (data URLs, bytes or image URLs) into the hotel gallery."""

    added: List[str] = []
    for source in sources:
        result = compress_image(_load_source(source), max_width, max_height, target_bytes)
        added.append(result.to_data_url())
    hotel.images.extend(added)
    logger.info("Attached %s image(s) to hotel %s", len(added), hotel.id)
    return added


def set_cover_image(hotel: Hotel, index: int) -> None:
    if index < 0 or index >= len(hotel.images):
        raise IndexError(f"Hotel {hotel.id} has no image at position {index}")
    hotel.images.insert(0, hotel.images.pop(index))


def remove_image(hotel: Hotel, index: int) -> bool:
    if index < 0 or index >= len(hotel.images):
        return False
    del hotel.images[index]
    return True


def new_hotel(branding: Optional[Branding] = None) -> Hotel:
    branding = branding or Branding()
    return Hotel(
        id=make_id("hotel"),
        name="",
        location="",
        stars=3,
        category=(branding.locations or [""])[0],
    )


def save_hotel(hotels: List[Hotel], hotel: Hotel) -> bool:
    """Insert ``hotel`` into the master list or replace the entry with its id.

    Returns ``True`` when the hotel was new. Name and category are mandatory.
    """

    if not hotel.name or not hotel.category:
        raise ValueError("Hotel name and region/category are mandatory.")
    for idx, existing in enumerate(hotels):
        if existing.id == hotel.id:
            hotels[idx] = hotel
            return False
    hotels.append(hotel)
    return True


def delete_hotel(hotels: List[Hotel], hotel_id: str) -> bool:
    remaining = [h for h in hotels if h.id != hotel_id]
    removed = len(remaining) != len(hotels)
    hotels[:] = remaining
    return removed


def toggle_amenity(hotel: Hotel, amenity: str) -> bool:
    if amenity in hotel.amenities:
        hotel.amenities = [a for a in hotel.amenities if a != amenity]
        return False
    hotel.amenities.append(amenity)
    return True


def add_amenity(hotel: Hotel, text: str) -> bool:
    amenity = (text or "").strip()
    if not amenity or amenity in hotel.amenities:
        return False
    hotel.amenities.append(amenity)
    return True


def remove_amenity(hotel: Hotel, index: int) -> bool:
    if index < 0 or index >= len(hotel.amenities):
        return False
    del hotel.amenities[index]
    return True


def add_branding_entry(branding: Branding, field_name: str, text: str) -> bool:
    """Append a trimmed entry to one of the branding master lists."""

    if field_name not in BRANDING_LIST_FIELDS:
        raise ValueError(f"Unknown branding list field: {field_name}")
    entry = (text or "").strip()
    if not entry:
        return False
    getattr(branding, field_name).append(entry)
    return True


def add_day_template(
    branding: Branding,
    title: str,
    description: str = "",
    distance: str = "",
    travel_time: str = "",
) -> Optional[DayTemplate]:
    if not title or not title.strip():
        return None
    template = DayTemplate(
        id=make_id("template"),
        title=title,
        description=description,
        distance=distance,
        travel_time=travel_time,
    )
    branding.saved_day_templates.append(template)
    return template


def remove_day_template(branding: Branding, template_id: str) -> bool:
    remaining = [t for t in branding.saved_day_templates if t.id != template_id]
    removed = len(remaining) != len(branding.saved_day_templates)
    branding.saved_day_templates = remaining
    return removed


def save_overview_template(branding: Branding, title: str, content: str) -> Optional[OverviewTemplate]:
    title = (title or "").strip()
    content = (content or "").strip()
    if not title or not content:
        return None
    overview = OverviewTemplate(title=title, content=content)
    branding.saved_overviews.append(overview)
    return overview


def remove_overview_template(branding: Branding, index: int) -> bool:
    if index < 0 or index >= len(branding.saved_overviews):
        return False
    del branding.saved_overviews[index]
    return True
