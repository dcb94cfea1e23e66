"""Hotel router — hotel search with prices and raw hotel-list passthrough."""

import logging

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from hotelscout.config import settings
from hotelscout.dependencies import get_current_user_id
from hotelscout.schemas.hotel import ErrorResponse
from hotelscout.services.amadeus_client import AmadeusError
from hotelscout.services.inventory_service import inventory_service

logger = logging.getLogger(__name__)

router = APIRouter()


def _error_response(message: str, error: AmadeusError) -> JSONResponse:
    body = ErrorResponse(message=message, error=error.description)
    return JSONResponse(status_code=500, content=body.model_dump())


@router.get("/hotels")
async def search_hotels(
    city_code: str | None = Query(None, alias="cityCode"),
    check_in: str | None = Query(None, alias="checkIn"),
    check_out: str | None = Query(None, alias="checkOut"),
    adults: int = Query(settings.default_adults),
    _user_id: str | None = Depends(get_current_user_id),
):
    """Hotels for a city with live prices where available, placeholders otherwise."""
    try:
        hotels = await inventory_service.search_hotels(city_code, check_in, check_out, adults)
    except AmadeusError as e:
        logger.error(f"Hotel search failed for {city_code}: {e.description}")
        return _error_response("Failed to fetch hotels", e)

    return [h.to_json() for h in hotels]


@router.get("/hotel-list")
async def hotel_list(
    city_code: str | None = Query(None, alias="cityCode"),
    _user_id: str | None = Depends(get_current_user_id),
):
    """Raw upstream hotel list for a city."""
    try:
        return await inventory_service.hotel_list(city_code)
    except AmadeusError as e:
        logger.error(f"Hotel list failed for {city_code}: {e.description}")
        return _error_response("Failed to fetch hotel list", e)
