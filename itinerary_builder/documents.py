"""Assemble the structured itinerary document consumed by the PDF renderer."""

from __future__ import annotations

import logging
from typing import List

from .models import Branding, Hotel, Itinerary, ItineraryDocument
from .pricing import reconcile_pricing
from .utils import format_short_date


logger = logging.getLogger(__name__)


def _cell(value: str) -> str:
    return (value or "").replace("|", "/").replace("\n", "<br>")


def build_day_plan_table(itinerary: Itinerary) -> str:
    table_lines = [
        "| Day | Date | Title | Plan | Distance | Travel Time |",
        "| --- | --- | --- | --- | --- | --- |",
    ]
    for idx, day in enumerate(itinerary.days):
        row = "| {number} | {date} | {title} | {desc} | {distance} | {time} |".format(
            number=idx + 1,
            date=_cell(format_short_date(day.date) if day.date else ""),
            title=_cell(day.title),
            desc=_cell(day.description),
            distance=_cell(day.distance or "-"),
            time=_cell(day.travel_time or "-"),
        )
        table_lines.append(row)
    return "\n".join(table_lines)


def format_hotel_option(hotel: Hotel) -> str:
    stars = "★" * max(0, int(hotel.stars or 0))
    line = f"{hotel.name} ({hotel.location}) {stars}".rstrip()
    if hotel.category:
        line += f" – {hotel.category}"
    if hotel.amenities:
        line += f", Amenities: {', '.join(hotel.amenities)}"
    return line


def build_pricing_summary(itinerary: Itinerary) -> str:
    pricing = itinerary.pricing
    lines = [f"Total Travellers: {pricing.total_pax} (Adults: {pricing.adults}, Children: {pricing.children})"]
    if pricing.rooms:
        lines.append(f"Rooms: {pricing.rooms}")
    priced = [
        ("Per Adult", pricing.per_adult_price, None),
        ("Per Child", pricing.per_child_price, None),
        ("Extra Bed", pricing.extra_bed_price, pricing.extra_beds),
        ("Child Without Bed", pricing.cnb_price, pricing.cnb_count),
    ]
    for label, price, count in priced:
        if not price:
            continue
        if count:
            lines.append(f"{label} ({count}): {price}")
        elif count is None:
            lines.append(f"{label}: {price}")
    for stop in pricing.night_breakup:
        lines.append(f"{stop.destination}: {stop.nights} Night(s)")
    lines.append(f"Total Package Cost: {pricing.total_cost}")
    return "\n".join(lines)


def _checklist(items: List[str]) -> str:
    return "\n".join(f"- {item}" for item in items)


def build_contact_footer(branding: Branding) -> str:
    parts = [branding.company_name]
    if branding.office_locations:
        parts.append(f"Offices: {', '.join(branding.office_locations)}")
    for label, value in (
        ("Phone", branding.phone),
        ("WhatsApp", branding.whatsapp),
        ("Helpline", branding.helpline),
        ("Web", branding.website),
    ):
        if value:
            parts.append(f"{label}: {value}")
    return " | ".join(p for p in parts if p)


def build_itinerary_document(itinerary: Itinerary, branding: Branding) -> ItineraryDocument:
    """Reconcile pricing and lay the itinerary out as renderer-ready sections."""

    reconcile_pricing(itinerary.pricing)
    cover_images = [img for img in itinerary.cover_images if img]
    if not cover_images and branding.master_cover_images:
        cover_images = branding.master_cover_images[:1]

    cover = {
        "company_name": branding.company_name,
        "logo_url": branding.logo_url,
        "package_name": itinerary.package_name.upper(),
        "client_name": itinerary.client_name,
        "destinations": itinerary.destinations,
        "duration": itinerary.duration,
        "travel_dates": itinerary.travel_dates,
        "package_type": itinerary.package_type,
        "cover_images": cover_images,
        "primary_color": branding.primary_color,
        "accent_color": branding.accent_color,
    }
    hotels_lines = [format_hotel_option(h) for h in itinerary.selected_hotels if h.is_selected]
    logger.info("Built document for itinerary %s with %s day(s)", itinerary.id, len(itinerary.days))
    return ItineraryDocument(
        cover=cover,
        overview=itinerary.overview,
        day_plan_table=build_day_plan_table(itinerary),
        hotels_summary="\n".join(hotels_lines),
        pricing_summary=build_pricing_summary(itinerary),
        inclusions=_checklist(itinerary.inclusions),
        exclusions=_checklist(itinerary.exclusions),
        supplement_costs=_checklist(itinerary.supplement_costs),
        terms=_checklist(itinerary.terms or branding.terms),
        cancellation_policy=_checklist(itinerary.cancellation_policy or branding.cancellation_policy),
        contact=build_contact_footer(branding),
    )
