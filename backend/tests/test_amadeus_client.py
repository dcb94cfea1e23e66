from __future__ import annotations

import asyncio

import httpx
import pytest

from factories import upstream_hotel, upstream_offer
from hotelscout.services.amadeus_client import AmadeusClient, AmadeusError


def _client(handler) -> AmadeusClient:
    return AmadeusClient(
        client_id="id",
        client_secret="secret",
        base_url="https://amadeus.test",
        transport=httpx.MockTransport(handler),
    )


def _token_response():
    return httpx.Response(200, json={"access_token": "tok", "expires_in": 1799})


def test_hotels_by_city_sends_radius_and_uppercased_city():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/oauth2/token"):
            return _token_response()
        seen.append(request)
        return httpx.Response(200, json={"data": [upstream_hotel("H1")]})

    hotels = asyncio.run(_client(handler).hotels_by_city("lon"))

    assert [h["hotelId"] for h in hotels] == ["H1"]
    params = seen[0].url.params
    assert seen[0].url.path == "/v1/reference-data/locations/hotels/by-city"
    assert params["cityCode"] == "LON"
    assert params["radius"] == "5"
    assert params["radiusUnit"] == "KM"
    assert seen[0].headers["Authorization"] == "Bearer tok"


def test_hotel_offers_joins_ids_and_reuses_token():
    token_calls = []
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/oauth2/token"):
            token_calls.append(request)
            return _token_response()
        seen.append(request)
        return httpx.Response(200, json={"data": [upstream_offer("H1")]})

    client = _client(handler)

    async def run():
        await client.hotel_offers(["H1", "H2"], "2026-02-25", "2026-02-28", 2)
        return await client.hotel_offers(["H1"], "2026-02-25", "2026-02-28", 2)

    offers = asyncio.run(run())

    assert len(token_calls) == 1
    assert offers[0]["hotel"]["hotelId"] == "H1"
    params = seen[0].url.params
    assert params["hotelIds"] == "H1,H2"
    assert params["checkInDate"] == "2026-02-25"
    assert params["checkOutDate"] == "2026-02-28"
    assert params["adults"] == "2"
    assert params["roomQuantity"] == "1"
    assert params["currency"] == "USD"


def test_upstream_error_raises_with_description():
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/oauth2/token"):
            return _token_response()
        return httpx.Response(
            400,
            json={"errors": [{"status": 400, "code": 477, "title": "INVALID FORMAT", "detail": "cityCode invalid"}]},
        )

    with pytest.raises(AmadeusError) as exc_info:
        asyncio.run(_client(handler).hotels_by_city("ZZZZ"))

    assert exc_info.value.status_code == 400
    assert exc_info.value.description == "cityCode invalid"


def test_transport_error_raises_amadeus_error():
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/oauth2/token"):
            return _token_response()
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(AmadeusError):
        asyncio.run(_client(handler).hotel_offers(["H1"], "2026-02-25", "2026-02-28", 1))


def test_failed_authentication_raises():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, json={"error": "invalid_client", "error_description": "Client credentials are invalid"})

    with pytest.raises(AmadeusError) as exc_info:
        asyncio.run(_client(handler).hotels_by_city("LON"))

    assert exc_info.value.description == "Client credentials are invalid"


def test_missing_city_code_is_an_upstream_failure():
    with pytest.raises(AmadeusError):
        asyncio.run(AmadeusClient(client_id="").hotels_by_city(None))


def test_mock_mode_is_deterministic():
    client = AmadeusClient(client_id="")

    async def run():
        first = await client.hotels_by_city("par")
        second = await client.hotels_by_city("PAR")
        ids = [h["hotelId"] for h in first[:20]]
        offers = await client.hotel_offers(ids, "2026-02-25", "2026-02-28", 2)
        return first, second, ids, offers

    first, second, ids, offers = asyncio.run(run())

    assert client.use_mock
    assert first == second
    assert 15 <= len(first) <= 35
    assert {o["hotel"]["hotelId"] for o in offers} <= set(ids)


def test_non_json_success_body_raises_amadeus_error():
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/oauth2/token"):
            return _token_response()
        return httpx.Response(200, text="<html>gateway</html>")

    with pytest.raises(AmadeusError) as exc_info:
        asyncio.run(_client(handler).hotel_offers(["H1"], "2026-02-25", "2026-02-28", 2))

    assert exc_info.value.description == "Invalid JSON in upstream response"


def test_non_object_payload_raises_amadeus_error():
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/oauth2/token"):
            return _token_response()
        return httpx.Response(200, json=["not", "an", "object"])

    with pytest.raises(AmadeusError):
        asyncio.run(_client(handler).hotels_by_city("LON"))


def test_token_response_without_access_token_raises_amadeus_error():
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/oauth2/token"):
            return httpx.Response(200, json={"expires_in": 1799})
        return httpx.Response(200, json={"data": []})

    with pytest.raises(AmadeusError) as exc_info:
        asyncio.run(_client(handler).hotels_by_city("LON"))

    assert exc_info.value.message == "Amadeus authentication failed"
