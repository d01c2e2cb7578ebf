"""Tests for itinerary form state helpers."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from conftest import as_data_url, make_image
from itinerary_builder.itinerary import (
    add_amenity,
    add_branding_entry,
    add_day,
    add_day_template,
    add_list_entry,
    apply_day_template,
    apply_overview_template,
    apply_trip_dates,
    attach_hotel_images,
    date_for_day,
    day_date_label,
    delete_hotel,
    derive_trip_dates,
    new_hotel,
    new_itinerary,
    reconcile,
    remove_amenity,
    remove_day,
    remove_day_template,
    remove_image,
    remove_overview_template,
    save_hotel,
    save_overview_template,
    set_cover_image,
    toggle_amenity,
    toggle_hotel_selection,
)
from itinerary_builder.models import Branding, DayTemplate, Hotel, OverviewTemplate


def _branding(**overrides):
    data = dict(
        company_name="Deenxconsultancy",
        package_categories=["Silver", "Gold"],
        terms=["50% advance payment required"],
        cancellation_policy=["Within 7 days: No refund"],
        saved_day_templates=[
            DayTemplate(
                id="1",
                title="Arrival & Local Sightseeing",
                description="Meet our representative and drive to hotel.",
                distance="15 km",
                travel_time="45 mins",
            ),
            DayTemplate(id="2", title="Gulmarg Excursion", description="Gondola ride."),
        ],
        saved_overviews=[OverviewTemplate(title="Kashmir Welcome", content="Paradise on Earth.")],
    )
    data.update(overrides)
    return Branding(**data)


def _hotel(**overrides):
    data = dict(id="h1", name="Lake View", location="Srinagar", stars=4, amenities=["WiFi"], category="Deluxe")
    data.update(overrides)
    return Hotel(**data)


def test_new_itinerary_defaults_from_branding():
    branding = _branding()
    itinerary = new_itinerary(branding)
    assert itinerary.id.startswith("itinerary_")
    assert itinerary.package_type == "Silver"
    assert itinerary.cover_images == ["", "", "", ""]
    assert [d.title for d in itinerary.days] == ["Arrival"]
    assert itinerary.pricing.total_cost == "Price on Request"
    assert itinerary.terms == branding.terms
    assert itinerary.terms is not branding.terms


def test_new_itinerary_without_categories():
    assert new_itinerary(Branding()).package_type == "Standard Package"


def test_derive_trip_dates():
    assert derive_trip_dates("2025-06-10", "2025-06-18") == ("8N / 9D", "10 Jun 2025 to 18 Jun 2025")


def test_derive_trip_dates_clamps_reversed_range():
    duration, _ = derive_trip_dates("2025-06-18", "2025-06-10")
    assert duration == "0N / 1D"


def test_derive_trip_dates_rejects_garbage():
    with pytest.raises(ValueError):
        derive_trip_dates("soon", "2025-06-10")


def test_apply_trip_dates_sets_fields():
    itinerary = new_itinerary(_branding())
    apply_trip_dates(itinerary, "2025-06-10", "2025-06-13")
    assert itinerary.duration == "3N / 4D"
    assert itinerary.travel_dates == "10 Jun 2025 to 13 Jun 2025"


def test_day_labels():
    assert date_for_day("2025-06-30", 1) == "2025-07-01"
    assert date_for_day(None, 1) == ""
    assert day_date_label(0) == "Day 01"
    assert day_date_label(11) == "Day 12"
    assert day_date_label(2, start_date="2025-06-10") == "12 Jun"
    assert day_date_label(2, start_date="2025-06-10", manual_date="2025-07-01") == "01 Jul"


def test_add_and_remove_day():
    itinerary = new_itinerary(_branding())
    day = add_day(itinerary)
    assert len(itinerary.days) == 2
    assert remove_day(itinerary, day.id) is True
    assert remove_day(itinerary, "missing") is False
    assert len(itinerary.days) == 1


def test_apply_day_template_copies_fields():
    branding = _branding()
    itinerary = new_itinerary(branding)
    day_id = itinerary.days[0].id

    assert apply_day_template(itinerary, day_id, "2", branding) is True
    day = itinerary.days[0]
    assert day.title == "Gulmarg Excursion"
    assert day.distance == ""

    assert apply_day_template(itinerary, day_id, "1", branding) is True
    assert day.travel_time == "45 mins"


def test_apply_day_template_unknown_template_is_noop():
    branding = _branding()
    itinerary = new_itinerary(branding)
    assert apply_day_template(itinerary, itinerary.days[0].id, "99", branding) is False
    assert itinerary.days[0].title == "Arrival"


def test_apply_overview_template():
    branding = _branding()
    itinerary = new_itinerary(branding)
    assert apply_overview_template(itinerary, "Kashmir Welcome", branding) is True
    assert itinerary.overview == "Paradise on Earth."
    assert apply_overview_template(itinerary, "Nope", branding) is False


def test_toggle_hotel_selection():
    itinerary = new_itinerary(_branding())
    hotel = _hotel()
    assert toggle_hotel_selection(itinerary, hotel) is True
    assert itinerary.selected_hotels[0].is_selected
    assert itinerary.selected_hotels[0].name == "Lake View"
    assert toggle_hotel_selection(itinerary, hotel) is False
    assert itinerary.selected_hotels == []


def test_add_list_entry():
    itinerary = new_itinerary(_branding())
    assert add_list_entry(itinerary, "inclusions", "Daily breakfast") is True
    assert add_list_entry(itinerary, "inclusions", "   ") is False
    assert itinerary.inclusions == ["Daily breakfast"]
    with pytest.raises(ValueError):
        add_list_entry(itinerary, "days", "nope")


def test_reconcile_updates_pricing():
    itinerary = new_itinerary(_branding())
    itinerary.pricing.adults = 2
    itinerary.pricing.per_adult_price = "18,500/-"
    assert reconcile(itinerary) is True
    assert itinerary.pricing.total_cost == "37,000/-"


def test_attach_hotel_images_compresses_uploads():
    hotel = _hotel()
    added = attach_hotel_images(hotel, [as_data_url(make_image(2000, 500)), make_image(50, 50)])
    assert len(added) == 2
    assert hotel.images == added
    assert all(img.startswith("data:image/jpeg;base64,") for img in added)


@patch("itinerary_builder.itinerary.fetch_image")
def test_attach_hotel_images_downloads_urls(mock_fetch):
    mock_fetch.return_value = make_image(40, 20)
    hotel = _hotel()
    attach_hotel_images(hotel, ["https://images.example.com/room.jpg"])
    mock_fetch.assert_called_once_with("https://images.example.com/room.jpg")
    assert len(hotel.images) == 1


def test_set_cover_image():
    hotel = _hotel(images=["a", "b", "c"])
    set_cover_image(hotel, 2)
    assert hotel.images == ["c", "a", "b"]
    with pytest.raises(IndexError):
        set_cover_image(hotel, 5)


def test_new_itinerary_skips_blank_first_category():
    itinerary = new_itinerary(_branding(package_categories=["", "Gold"]))
    assert itinerary.package_type == "Standard Package"


def test_new_hotel_defaults_to_first_location():
    hotel = new_hotel(_branding(locations=["Srinagar", "Gulmarg"]))
    assert hotel.id.startswith("hotel_")
    assert (hotel.name, hotel.stars, hotel.category) == ("", 3, "Srinagar")
    assert new_hotel().category == ""


def test_save_hotel_upserts_by_id():
    hotels = [_hotel()]
    assert save_hotel(hotels, _hotel(id="h2", name="Pine Spring")) is True
    assert save_hotel(hotels, _hotel(name="Lake View Deluxe")) is False
    assert [h.name for h in hotels] == ["Lake View Deluxe", "Pine Spring"]


@pytest.mark.parametrize("overrides", [{"name": ""}, {"category": ""}])
def test_save_hotel_requires_name_and_category(overrides):
    hotels = []
    with pytest.raises(ValueError):
        save_hotel(hotels, _hotel(**overrides))
    assert hotels == []


def test_delete_hotel():
    hotels = [_hotel(), _hotel(id="h2")]
    assert delete_hotel(hotels, "h1") is True
    assert [h.id for h in hotels] == ["h2"]
    assert delete_hotel(hotels, "missing") is False


def test_amenity_editing():
    hotel = _hotel(amenities=["WiFi"])
    assert toggle_amenity(hotel, "Heater") is True
    assert toggle_amenity(hotel, "WiFi") is False
    assert hotel.amenities == ["Heater"]

    assert add_amenity(hotel, "  Room Service ") is True
    assert add_amenity(hotel, "Heater") is False
    assert add_amenity(hotel, "   ") is False
    assert hotel.amenities == ["Heater", "Room Service"]

    assert remove_amenity(hotel, 0) is True
    assert remove_amenity(hotel, 5) is False
    assert hotel.amenities == ["Room Service"]


def test_remove_image():
    hotel = _hotel(images=["a", "b", "c"])
    assert remove_image(hotel, 1) is True
    assert remove_image(hotel, 7) is False
    assert hotel.images == ["a", "c"]


def test_add_branding_entry():
    branding = _branding(locations=[])
    assert add_branding_entry(branding, "locations", "  Pahalgam ") is True
    assert add_branding_entry(branding, "office_locations", "Delhi") is True
    assert add_branding_entry(branding, "terms", "   ") is False
    assert branding.locations == ["Pahalgam"]
    assert branding.office_locations == ["Delhi"]
    with pytest.raises(ValueError):
        add_branding_entry(branding, "company_name", "Other")


def test_day_template_library():
    branding = _branding()
    template = add_day_template(branding, "Sonamarg Trip", "Glacier visit", "80 km", "3 hours")
    assert template.id.startswith("template_")
    assert branding.saved_day_templates[-1] is template
    assert add_day_template(branding, "   ") is None

    assert remove_day_template(branding, template.id) is True
    assert remove_day_template(branding, template.id) is False
    assert [t.id for t in branding.saved_day_templates] == ["1", "2"]


def test_overview_library():
    branding = _branding()
    overview = save_overview_template(branding, " Honeymoon ", " Romantic stay. ")
    assert (overview.title, overview.content) == ("Honeymoon", "Romantic stay.")
    assert save_overview_template(branding, "Empty", "  ") is None
    assert len(branding.saved_overviews) == 2

    assert remove_overview_template(branding, 0) is True
    assert remove_overview_template(branding, 3) is False
    assert [o.title for o in branding.saved_overviews] == ["Honeymoon"]
