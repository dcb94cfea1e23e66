"""Inventory service — merges the upstream hotel list with live offers and placeholder data."""

import logging
from collections.abc import Callable
from datetime import date

from hotelscout.config import settings
from hotelscout.schemas.hotel import HotelRecord
from hotelscout.services.amadeus_client import AmadeusClient, AmadeusError, amadeus_client
from hotelscout.services.synthetic_data import SyntheticDataGenerator

logger = logging.getLogger(__name__)

MILES_TO_KM = 1.609344

GeneratorFactory = Callable[..., SyntheticDataGenerator]


def _default_generator(city_code: str, check_in, check_out) -> SyntheticDataGenerator:
    if settings.synthetic_seed is not None:
        return SyntheticDataGenerator(settings.synthetic_seed)
    return SyntheticDataGenerator.for_search(city_code, check_in, check_out)


def _parse_float(value) -> float | None:
    if value in (None, ""):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _distance_km(hotel: dict) -> float | None:
    distance = hotel.get("distance") or {}
    value = _parse_float(distance.get("value"))
    if value is None:
        return None
    if str(distance.get("unit", "KM")).upper().startswith("MILE"):
        return round(value * MILES_TO_KM, 2)
    return value


def _base_fields(hotel: dict) -> dict:
    """Descriptive fields carried over from the upstream hotel-list entry."""
    geo = hotel.get("geoCode") or {}
    address = hotel.get("address") or {}
    return {
        "hotel_id": hotel["hotelId"],
        "name": hotel.get("name"),
        "chain_code": hotel.get("chainCode"),
        "iata_code": hotel.get("iataCode"),
        "city_name": address.get("cityName"),
        "country_code": address.get("countryCode"),
        "latitude": _parse_float(geo.get("latitude")),
        "longitude": _parse_float(geo.get("longitude")),
        "distance": _distance_km(hotel),
    }


class InventoryService:
    """Proxies hotel inventory from Amadeus and degrades to placeholder pricing."""

    def __init__(
        self,
        client: AmadeusClient | None = None,
        generator_factory: GeneratorFactory | None = None,
        batch_size: int | None = None,
    ):
        self._client = client or amadeus_client
        self._generator_factory = generator_factory or _default_generator
        self._batch_size = batch_size or settings.hotel_offer_batch_size

    async def hotel_list(self, city_code: str | None) -> list[dict]:
        """Raw upstream hotel list for a city."""
        return await self._client.hotels_by_city(city_code)

    async def search_hotels(
        self,
        city_code: str | None,
        check_in: date | str | None,
        check_out: date | str | None,
        adults: int = 2,
    ) -> list[HotelRecord]:
        """Hotels for a city with live prices where available.

        Raises AmadeusError only when the hotel list itself cannot be fetched.
        An offers failure falls back to fully synthesized records.
        """
        hotels = [h for h in await self._client.hotels_by_city(city_code) if h.get("hotelId")]
        if not hotels:
            logger.info(f"No hotels found for {city_code}")
            return []

        generator = self._generator_factory((city_code or "").upper(), check_in, check_out)
        batch = hotels[: self._batch_size]
        hotel_ids = [h["hotelId"] for h in batch]

        try:
            offers = await self._client.hotel_offers(hotel_ids, check_in, check_out, adults)
        except AmadeusError as e:
            logger.warning(
                f"Hotel offers unavailable for {city_code} ({e.description}), "
                f"using placeholder pricing for {len(hotels)} hotels"
            )
            return [self._synthesized(h, generator) for h in hotels]

        by_id = {h["hotelId"]: h for h in hotels}
        priced = [
            self._with_offer(entry, by_id, generator)
            for entry in offers
            if isinstance(entry, dict) and (entry.get("hotel") or {}).get("hotelId")
        ]
        placeholders = [self._synthesized(h, generator) for h in hotels[self._batch_size:]]

        logger.info(
            f"Hotel search {city_code}: {len(hotels)} hotels, "
            f"{len(priced)} with live offers, {len(placeholders)} placeholders"
        )
        return priced + placeholders

    def _with_offer(
        self, entry: dict, by_id: dict[str, dict], generator: SyntheticDataGenerator
    ) -> HotelRecord:
        offer_hotel = entry.get("hotel") or {}
        hotel_id = offer_hotel.get("hotelId")
        info = by_id.get(hotel_id) or {"hotelId": hotel_id}
        offers = entry.get("offers") or []
        first_price = (offers[0].get("price") or {}) if offers else {}

        fields = _base_fields(info)
        fields["name"] = offer_hotel.get("name") or fields["name"]
        upstream_rating = _parse_float(offer_hotel.get("rating"))

        return HotelRecord(
            **fields,
            price=_parse_float(first_price.get("total")) or 0.0,
            currency=first_price.get("currency") or settings.hotel_currency,
            rating=upstream_rating if upstream_rating is not None else generator.rating(),
            review_count=generator.review_count(),
            amenities=generator.amenities(),
            has_real_price=True,
            offers=offers,
        )

    def _synthesized(self, hotel: dict, generator: SyntheticDataGenerator) -> HotelRecord:
        return HotelRecord(
            **_base_fields(hotel),
            currency=settings.hotel_currency,
            **generator.placeholder_fields(),
        )


inventory_service = InventoryService()
