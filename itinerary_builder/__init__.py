"""Itinerary builder: derived pricing, image compression and document assembly."""

from .models import (
    Branding,
    CompressionRequest,
    CompressionResult,
    CostInputs,
    DayPlan,
    DayTemplate,
    Hotel,
    Itinerary,
    ItineraryDocument,
    ItineraryHotel,
    NightBreakup,
    OverviewTemplate,
)
from .pricing import compute_pricing, format_amount, parse_price, reconcile_pricing
from .images import ImageDecodeError, compress_image, compress_image_async, compress_images, fit_dimensions
from .itinerary import new_itinerary
from .documents import build_itinerary_document

__all__ = [
    "Branding",
    "CompressionRequest",
    "CompressionResult",
    "CostInputs",
    "DayPlan",
    "DayTemplate",
    "Hotel",
    "ImageDecodeError",
    "Itinerary",
    "ItineraryDocument",
    "ItineraryHotel",
    "NightBreakup",
    "OverviewTemplate",
    "build_itinerary_document",
    "compress_image",
    "compress_image_async",
    "compress_images",
    "compute_pricing",
    "fit_dimensions",
    "format_amount",
    "new_itinerary",
    "parse_price",
    "reconcile_pricing",
]
