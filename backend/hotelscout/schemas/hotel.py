from typing import Any

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class HotelRecord(BaseModel):
    """One hotel's display and pricing data for a given search."""

    hotel_id: str
    name: str | None = None
    chain_code: str | None = None
    iata_code: str | None = None
    city_name: str | None = None
    country_code: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    distance: float | None = None  # km from city center
    price: float = 0.0
    currency: str = "USD"
    rating: float = 0.0
    review_count: int = Field(default=0, ge=0)
    amenities: list[str] = Field(default_factory=list)
    has_real_price: bool = False
    offers: list[dict[str, Any]] | None = None

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "frozen": True,
    }

    def to_json(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")


class ErrorResponse(BaseModel):
    message: str
    error: str | None = None


class HealthResponse(BaseModel):
    status: str = "ok"
