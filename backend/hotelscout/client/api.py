"""Proxy API client — fetches hotel results from the HotelScout server."""

import logging

import httpx
from pydantic import ValidationError

from hotelscout.config import settings
from hotelscout.schemas.hotel import HotelRecord

logger = logging.getLogger(__name__)


class SearchError(Exception):
    """The proxy could not return hotels."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class HotelSearchClient:
    """Async client for the proxy's hotel endpoints."""

    def __init__(
        self,
        base_url: str | None = None,
        token: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._base_url = (base_url or settings.api_base_url).rstrip("/")
        self._token = token
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                timeout=30.0,
                transport=self._transport,
            )
        return self._client

    async def search_hotels(
        self,
        city_code: str,
        check_in: str,
        check_out: str,
        adults: int,
    ) -> list[HotelRecord]:
        client = await self._get_client()
        headers = {"Authorization": f"Bearer {self._token}"} if self._token else {}

        try:
            resp = await client.get(
                "/hotels",
                params={
                    "cityCode": city_code,
                    "checkIn": check_in,
                    "checkOut": check_out,
                    "adults": adults,
                },
                headers=headers,
            )
        except httpx.RequestError as e:
            logger.error(f"Hotel search request failed: {e}")
            raise SearchError("Failed to fetch hotels") from e

        if resp.is_error:
            raise SearchError(self._error_message(resp), resp.status_code)

        try:
            payload = resp.json()
        except ValueError as e:
            logger.error(f"Hotel search returned a non-JSON body ({resp.status_code})")
            raise SearchError("Failed to fetch hotels", resp.status_code) from e
        if isinstance(payload, list):
            items = payload
        elif isinstance(payload, dict):
            items = payload.get("data") or []
        else:
            items = []
        try:
            hotels = [HotelRecord.model_validate(item) for item in items]
        except ValidationError as e:
            logger.error(f"Malformed hotel payload: {e}")
            raise SearchError("Received malformed hotel data") from e

        logger.info(f"Loaded {len(hotels)} hotels for {city_code}")
        return hotels

    @staticmethod
    def _error_message(resp: httpx.Response) -> str:
        try:
            body = resp.json()
        except ValueError:
            return "Failed to fetch hotels"
        if isinstance(body, dict):
            return body.get("message") or body.get("error") or body.get("detail") or "Failed to fetch hotels"
        return "Failed to fetch hotels"

    async def close(self):
        if self._client:
            await self._client.aclose()
            self._client = None
