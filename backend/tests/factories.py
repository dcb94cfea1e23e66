"""Builders for hotel records and upstream Amadeus payloads."""
from __future__ import annotations

from hotelscout.schemas.hotel import HotelRecord


def build_hotel(hotel_id: str = "H1", **overrides) -> HotelRecord:
    fields = {
        "hotel_id": hotel_id,
        "name": f"Hotel {hotel_id}",
        "price": 100.0,
        "rating": 4.0,
        "review_count": 100,
        "amenities": ["WiFi", "Pool"],
        "distance": 1.0,
        "has_real_price": True,
    }
    fields.update(overrides)
    return HotelRecord(**fields)


def upstream_hotel(hotel_id: str, name: str | None = None, distance: float | None = 1.2) -> dict:
    """Hotel entry shaped like the Amadeus by-city response."""
    hotel = {
        "chainCode": "HI",
        "iataCode": "LON",
        "name": name or f"HOTEL {hotel_id}",
        "hotelId": hotel_id,
        "geoCode": {"latitude": 51.5, "longitude": -0.12},
        "address": {"countryCode": "GB"},
    }
    if distance is not None:
        hotel["distance"] = {"value": distance, "unit": "KM"}
    return hotel


def upstream_offer(hotel_id: str, total: str = "180.50", currency: str = "USD", rating: str | None = None) -> dict:
    """Entry shaped like the Amadeus hotel-offers response."""
    hotel = {"hotelId": hotel_id, "name": f"Offer {hotel_id}"}
    if rating is not None:
        hotel["rating"] = rating
    return {
        "type": "hotel-offers",
        "hotel": hotel,
        "available": True,
        "offers": [
            {"id": f"O-{hotel_id}-1", "price": {"currency": currency, "total": total}},
            {"id": f"O-{hotel_id}-2", "price": {"currency": currency, "total": "999.00"}},
        ],
    }
