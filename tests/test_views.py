"""Tests for the aiohttp.web routes."""
import datetime
from unittest.mock import AsyncMock, MagicMock

import pytest
from aiohttp.test_utils import TestClient, TestServer

from dpd_russia import create_app
from dpd_russia.api_dpd import DpdApi
from dpd_russia.config import DpdConfig
from dpd_russia.exceptions import DpdConnectionError, DpdResponseError
from dpd_russia.models import Delivery
from dpd_russia.views import API_KEY


def _client(api, prefix="/dpd"):
    app = create_app(DpdConfig(route_prefix=prefix))
    app[API_KEY] = api
    return TestClient(TestServer(app))


@pytest.fixture
def api():
    return MagicMock(spec=DpdApi)


class TestAuthorizeRoute:

    @pytest.mark.asyncio
    async def test_returns_session(self, api):
        api.authorize = AsyncMock(return_value="abc123")

        async with _client(api) as client:
            resp = await client.post("/dpd/authorize", json={"login": "u", "password": "p"})
            assert resp.status == 200
            assert await resp.json() == {"session": "abc123"}

        api.authorize.assert_awaited_once_with("u", "p")

    @pytest.mark.asyncio
    async def test_without_body_uses_defaults(self, api):
        api.authorize = AsyncMock(return_value=None)

        async with _client(api) as client:
            resp = await client.post("/dpd/authorize")
            assert await resp.json() == {"session": None}

        api.authorize.assert_awaited_once_with(None, None)

    @pytest.mark.asyncio
    async def test_invalid_json(self, api):
        async with _client(api) as client:
            resp = await client.post(
                "/dpd/authorize", data="{not json", headers={"Content-Type": "application/json"}
            )
            assert resp.status == 400


class TestCityRoutes:

    @pytest.mark.asyncio
    async def test_find_city(self, api):
        api.find_city = AsyncMock(return_value={"geonames": [{"id": 48993149, "name": "X"}]})

        async with _client(api) as client:
            resp = await client.get("/dpd/cities", params={"query": "X", "country_code": "3"})
            assert resp.status == 200
            assert await resp.json() == {"geonames": [{"id": 48993149, "name": "X"}]}

        api.find_city.assert_awaited_once_with("X", "3")

    @pytest.mark.asyncio
    async def test_find_city_requires_country_code(self, api):
        api.find_city = AsyncMock()

        async with _client(api) as client:
            resp = await client.get("/dpd/cities", params={"query": "X"})
            assert resp.status == 422
            body = await resp.json()
            assert "country_code" in body["errors"]

        api.find_city.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_calibration_failure_is_bad_gateway(self, api):
        api.find_city = AsyncMock(side_effect=DpdResponseError("Failed to connect to DPD Server"))

        async with _client(api) as client:
            resp = await client.get("/dpd/cities", params={"query": "X", "country_code": "3"})
            assert resp.status == 502
            assert await resp.json() == {"error": "Failed to connect to DPD Server"}

    @pytest.mark.asyncio
    async def test_find_city_street(self, api):
        api.find_city_street = AsyncMock(return_value=[{"name": "Ленина"}])

        async with _client(api) as client:
            resp = await client.get(
                "/dpd/cities/48994107/streets", params={"query": "Лен", "session": "abc"}
            )
            assert await resp.json() == [{"name": "Ленина"}]

        api.find_city_street.assert_awaited_once_with(48994107, "Лен", "abc")

    @pytest.mark.asyncio
    async def test_find_city_street_bad_city_id(self, api):
        async with _client(api) as client:
            resp = await client.get(
                "/dpd/cities/moscow/streets", params={"query": "Лен", "session": "abc"}
            )
            assert resp.status == 422


class TestReceivePointRoutes:

    @pytest.mark.asyncio
    async def test_receive_point_city(self, api):
        api.find_receive_point_city = AsyncMock(return_value=[])

        async with _client(api) as client:
            resp = await client.get("/dpd/receive-points/cities", params={"query": "Моск"})
            assert await resp.json() == []

        api.find_receive_point_city.assert_awaited_once_with("Моск")

    @pytest.mark.asyncio
    async def test_receive_points_and_terminals(self, api):
        api.get_receive_points = AsyncMock(return_value=[{"code": "A"}])
        api.get_terminals = AsyncMock(return_value=[{"code": "T", "departmentType": "Т"}])
        params = {"bounds": "55,37,56,38", "city": "Москва"}

        async with _client(api) as client:
            points = await client.get("/dpd/receive-points", params=params)
            terminals = await client.get("/dpd/terminals", params=params)
            assert await points.json() == [{"code": "A"}]
            assert await terminals.json() == [{"code": "T", "departmentType": "Т"}]

        api.get_terminals.assert_awaited_once_with("55,37,56,38", "Москва")

    @pytest.mark.asyncio
    async def test_connection_error_is_bad_gateway(self, api):
        api.get_terminals = AsyncMock(side_effect=DpdConnectionError("DPD API request timed out"))

        async with _client(api) as client:
            resp = await client.get("/dpd/terminals", params={"bounds": "b", "city": "c"})
            assert resp.status == 502


class TestSoapRoutes:

    @pytest.mark.asyncio
    async def test_price(self, api):
        api.get_price = AsyncMock(return_value=[{"serviceCode": "ECN", "cost": 350.0}])

        async with _client(api) as client:
            resp = await client.post(
                "/dpd/price",
                json={
                    "derival_city_id": "48994107",
                    "arrival_city_id": 49694102,
                    "parcel_total_weight": 1.5,
                    "arrival_terminal": "true",
                },
            )
            assert resp.status == 200
            assert await resp.json() == [{"serviceCode": "ECN", "cost": 350.0}]

        api.get_price.assert_awaited_once_with(
            Delivery(
                derival_city_id=48994107,
                arrival_city_id=49694102,
                parcel_total_weight=1.5,
                arrival_terminal=True,
            )
        )

    @pytest.mark.asyncio
    async def test_price_validation(self, api):
        api.get_price = AsyncMock()

        async with _client(api) as client:
            resp = await client.post("/dpd/price", json={"derival_city_id": 1})
            assert resp.status == 422
            errors = (await resp.json())["errors"]
            assert "arrival_city_id" in errors
            assert "parcel_total_weight" in errors

        api.get_price.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_track(self, api):
        api.find_by_track_number = AsyncMock(
            return_value={"newState": "Посылка в пути", "transitionTime": datetime.datetime(2024, 1, 2, 10, 0)}
        )

        async with _client(api) as client:
            resp = await client.get("/dpd/track/RU012345678")
            assert await resp.json() == {
                "newState": "Посылка в пути",
                "transitionTime": "2024-01-02 10:00:00",
            }

        api.find_by_track_number.assert_awaited_once_with("RU012345678")


@pytest.mark.asyncio
async def test_custom_prefix(api):
    api.find_receive_point_city = AsyncMock(return_value=[])

    async with _client(api, prefix="/couriers/dpd/") as client:
        resp = await client.get("/couriers/dpd/receive-points/cities", params={"query": "x"})
        assert resp.status == 200


@pytest.mark.asyncio
async def test_app_creates_client_on_startup():
    app = create_app(DpdConfig(client_number="1", client_key="k"))

    async with TestClient(TestServer(app)):
        assert isinstance(app[API_KEY], DpdApi)
