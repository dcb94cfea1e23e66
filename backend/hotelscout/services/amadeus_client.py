"""Amadeus API client — adapter for hotel list and hotel offer lookups with OAuth2."""

import asyncio
import hashlib
import logging
import random
from datetime import date, datetime, timedelta, timezone

import httpx

from hotelscout.config import settings

logger = logging.getLogger(__name__)

HOTELS_BY_CITY_PATH = "/v1/reference-data/locations/hotels/by-city"
HOTEL_OFFERS_PATH = "/v3/shopping/hotel-offers"
TOKEN_PATH = "/v1/security/oauth2/token"

# Hotel names for mocking
MOCK_CHAINS = [
    ("MC", ["Courtyard", "Residence Inn", "Marriott Grand", "Fairfield Inn"]),
    ("HI", ["Hilton Garden Inn", "Hampton Inn", "DoubleTree", "Grand Hilton"]),
    ("IC", ["Holiday Inn Express", "Crowne Plaza", "InterContinental"]),
    ("HY", ["Hyatt Place", "Hyatt Regency", "Grand Hyatt"]),
    ("BW", ["Best Western Plus", "Best Western Premier"]),
    ("XX", ["City Center Hotel", "The Metropolitan", "Urban Suites", "Park View Hotel"]),
]


class AmadeusError(Exception):
    """Upstream lookup failed (transport, auth, or non-2xx response)."""

    def __init__(self, message: str, description: str | None = None, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.description = description or message
        self.status_code = status_code


def _describe_error(resp: httpx.Response) -> str:
    """Flatten an Amadeus `errors` payload into one line."""
    try:
        payload = resp.json()
    except ValueError:
        return resp.text or f"HTTP {resp.status_code}"
    if not isinstance(payload, dict):
        return f"HTTP {resp.status_code}"
    errors = payload.get("errors")
    if not errors:
        return payload.get("error_description") or f"HTTP {resp.status_code}"
    return "; ".join(
        e.get("detail") or e.get("title") or str(e.get("code", "unknown error"))
        for e in errors
    )


def _json_body(resp: httpx.Response) -> dict:
    """Decoded JSON object of a 2xx response; anything else is an upstream failure."""
    try:
        payload = resp.json()
    except ValueError as e:
        logger.error(f"Amadeus returned a non-JSON body ({resp.status_code})")
        raise AmadeusError("Amadeus request failed", "Invalid JSON in upstream response", resp.status_code) from e
    if not isinstance(payload, dict):
        raise AmadeusError("Amadeus request failed", "Unexpected upstream response shape", resp.status_code)
    return payload


class AmadeusClient:
    """Adapter for Amadeus Self-Service hotel APIs."""

    def __init__(
        self,
        client_id: str | None = None,
        client_secret: str | None = None,
        base_url: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._client_id = settings.amadeus_client_id if client_id is None else client_id
        self._client_secret = settings.amadeus_client_secret if client_secret is None else client_secret
        self._base_url = base_url or settings.amadeus_base_url
        self._transport = transport
        self._token: str | None = None
        self._token_expires: datetime | None = None
        self._semaphore = asyncio.Semaphore(settings.amadeus_max_concurrency)
        self._client: httpx.AsyncClient | None = None
        self._use_mock = not self._client_id

    @property
    def use_mock(self) -> bool:
        return self._use_mock

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                timeout=settings.amadeus_timeout_seconds,
                transport=self._transport,
            )
        return self._client

    async def _ensure_token(self):
        """Get or refresh OAuth2 token."""
        if self._token and self._token_expires and datetime.now(timezone.utc) < self._token_expires:
            return

        client = await self._get_client()
        try:
            resp = await client.post(
                TOKEN_PATH,
                data={
                    "grant_type": "client_credentials",
                    "client_id": self._client_id,
                    "client_secret": self._client_secret,
                },
                headers={"Content-Type": "application/x-www-form-urlencoded"},
            )
        except httpx.RequestError as e:
            raise AmadeusError("Amadeus authentication failed", str(e)) from e

        if resp.is_error:
            raise AmadeusError(
                "Amadeus authentication failed", _describe_error(resp), resp.status_code
            )

        data = _json_body(resp)
        token = data.get("access_token")
        if not token:
            raise AmadeusError("Amadeus authentication failed", "No access_token in token response", resp.status_code)
        self._token = token
        self._token_expires = datetime.now(timezone.utc) + timedelta(
            seconds=data.get("expires_in", 1799) - 60
        )
        logger.info("Amadeus token refreshed")

    async def _get(self, path: str, params: dict) -> dict:
        async with self._semaphore:
            await self._ensure_token()
            client = await self._get_client()
            try:
                resp = await client.get(
                    path,
                    params=params,
                    headers={"Authorization": f"Bearer {self._token}"},
                )
            except httpx.RequestError as e:
                logger.error(f"Amadeus request error on {path}: {e}")
                raise AmadeusError("Amadeus request failed", str(e)) from e

        if resp.is_error:
            description = _describe_error(resp)
            logger.error(f"Amadeus error on {path}: {resp.status_code} {description}")
            raise AmadeusError("Amadeus request failed", description, resp.status_code)
        return _json_body(resp)

    async def hotels_by_city(
        self,
        city_code: str | None,
        radius: int | None = None,
        radius_unit: str | None = None,
    ) -> list[dict]:
        """List hotels around a city center (raw Amadeus hotel objects)."""
        if not city_code:
            raise AmadeusError("Amadeus request failed", "cityCode is required", 400)

        city_code = city_code.upper()
        radius = radius or settings.hotel_search_radius
        radius_unit = radius_unit or settings.hotel_search_radius_unit

        if self._use_mock:
            return self._generate_mock_hotels(city_code, radius)

        data = await self._get(
            HOTELS_BY_CITY_PATH,
            {"cityCode": city_code, "radius": radius, "radiusUnit": radius_unit},
        )
        return [h for h in data.get("data") or [] if isinstance(h, dict)]

    async def hotel_offers(
        self,
        hotel_ids: list[str],
        check_in: date | str | None,
        check_out: date | str | None,
        adults: int,
        currency: str | None = None,
    ) -> list[dict]:
        """Fetch live offers for a batch of hotel ids (raw Amadeus hotel-offers objects)."""
        currency = currency or settings.hotel_currency
        check_in = check_in.isoformat() if isinstance(check_in, date) else check_in
        check_out = check_out.isoformat() if isinstance(check_out, date) else check_out

        if self._use_mock:
            return self._generate_mock_offers(hotel_ids, check_in, check_out, adults, currency)

        params = {
            "hotelIds": ",".join(hotel_ids),
            "adults": adults,
            "roomQuantity": 1,
            "currency": currency,
        }
        if check_in:
            params["checkInDate"] = check_in
        if check_out:
            params["checkOutDate"] = check_out

        data = await self._get(HOTEL_OFFERS_PATH, params)
        return [h for h in data.get("data") or [] if isinstance(h, dict)]

    # --- Mock data generation for demo mode ---

    def _generate_mock_hotels(self, city_code: str, radius: int) -> list[dict]:
        """Generate a deterministic hotel list for a city."""
        seed = int(hashlib.md5(f"hotels_{city_code}".encode()).hexdigest()[:8], 16)
        rng = random.Random(seed)

        hotels = []
        for i in range(rng.randint(15, 35)):
            chain_code, names = rng.choice(MOCK_CHAINS)
            hotels.append({
                "chainCode": chain_code,
                "iataCode": city_code,
                "dupeId": 700000000 + rng.randint(0, 99999999),
                "name": f"{rng.choice(names)} {city_code} {i + 1}".upper(),
                "hotelId": f"{chain_code}{city_code}{i:03d}",
                "geoCode": {
                    "latitude": round(rng.uniform(-60, 60), 5),
                    "longitude": round(rng.uniform(-150, 150), 5),
                },
                "address": {"countryCode": "XX"},
                "distance": {"value": round(rng.uniform(0.1, float(radius)), 2), "unit": "KM"},
            })
        return hotels

    def _generate_mock_offers(
        self,
        hotel_ids: list[str],
        check_in: str | None,
        check_out: str | None,
        adults: int,
        currency: str,
    ) -> list[dict]:
        """Generate offers for roughly two thirds of the requested hotels."""
        seed_str = f"offers_{','.join(hotel_ids)}_{check_in}_{check_out}_{adults}"
        seed = int(hashlib.md5(seed_str.encode()).hexdigest()[:8], 16)
        rng = random.Random(seed)

        offers = []
        for hotel_id in hotel_ids:
            if rng.random() > 0.66:
                continue
            total = round(rng.uniform(60, 400) * max(1, adults) ** 0.5, 2)
            offers.append({
                "type": "hotel-offers",
                "hotel": {"hotelId": hotel_id, "rating": str(rng.randint(2, 5))},
                "available": True,
                "offers": [{
                    "id": f"MOCK{hotel_id}",
                    "checkInDate": check_in,
                    "checkOutDate": check_out,
                    "price": {"currency": currency, "total": f"{total:.2f}"},
                }],
            })
        return offers

    async def close(self):
        if self._client:
            await self._client.aclose()
            self._client = None


amadeus_client = AmadeusClient()
