import aiohttp
import logging

from .api_helpers import ApiResponse, parse_cookie, remove_null_values, request
from .api_soap import call_soap
from .const import (
    CALCULATOR_WSDL,
    CHOOSER_URL,
    CITIES_URL,
    DEFAULT_LANGUAGE,
    DEFAULT_TIMEOUT,
    GEOCODE_URL,
    LOGON_URL,
    ORDER_URL,
    REFERENCE_CITY,
    REFERENCE_CITY_ID,
    REFERENCE_COUNTRY,
    SESSION_COOKIE,
    STREETS_URL,
    TERMINAL_TYPES,
    TRACING_WSDL,
)
from .exceptions import DpdResponseError
from .helpers import translate_status
from .models import Delivery

_LOGGER = logging.getLogger(__name__)

"""
Session bootstrap is:
1. GET the order page anonymously to get a MYDPDSessionID cookie
2. POST credentials to the logon endpoint with that cookie
The cookie value stays the same, only the server side state behind it changes.

City ids differ between anonymous and logged in sessions. Anonymous ids are
shifted by a constant that is measured on every search with a reference city.
"""
class DpdApi:
    def __init__(
        self,
        session: aiohttp.ClientSession | None = None,
        client_number: str | None = None,
        client_key: str | None = None,
        *,
        login: str | None = None,
        password: str | None = None,
        timeout: int = DEFAULT_TIMEOUT,
        language: str = DEFAULT_LANGUAGE,
    ):
        self._session = session
        self._owns_session = session is None
        self._client_number = client_number
        self._client_key = client_key
        self._login = login
        self._password = password
        self._timeout = timeout
        self._language = language

    @classmethod
    def from_config(cls, config, session: aiohttp.ClientSession | None = None):
        return cls(
            session,
            config.client_number,
            config.client_key,
            login=config.login,
            password=config.password,
            timeout=config.timeout,
            language=config.language,
        )

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None:
            self._session = aiohttp.ClientSession(cookie_jar=aiohttp.DummyCookieJar())
        return self._session

    async def close(self) -> None:
        """Close the client session if this client created it."""
        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None

    async def request(
        self,
        method: str,
        url: str,
        params: dict | None = None,
        session_id: str | None = None,
        encoding: str = "form",
    ) -> ApiResponse:
        return await request(
            self._get_session(),
            method,
            url,
            params,
            session_id=session_id,
            encoding=encoding,
            timeout=self._timeout,
            label="DPD",
        )

    async def authorize(self, login: str | None = None, password: str | None = None) -> str | None:
        """Return a MYDPDSessionID, logged in with the given or configured credentials."""
        resp = await self.request("GET", ORDER_URL)
        session_id = parse_cookie(resp.headers.getall("Set-Cookie", []), SESSION_COOKIE)
        if not session_id:
            _LOGGER.info("DPD did not issue a %s cookie", SESSION_COOKIE)
            return None

        # The logon result is not checked, the provider gives no reliable signal.
        await self.request(
            "POST",
            LOGON_URL,
            {
                "username": login if login is not None else self._login,
                "password": password if password is not None else self._password,
            },
            session_id=session_id,
        )
        return session_id

    async def _find_magic_value(self) -> int:
        resp = await self.request(
            "POST",
            CITIES_URL,
            {"name_startsWith": REFERENCE_CITY, "country": REFERENCE_COUNTRY},
        )
        data = resp.json()
        cities = data.get("geonames") if isinstance(data, dict) else None
        if not cities:
            _LOGGER.error("DPD returned no reference city (status %s)", resp.status)
            raise DpdResponseError("Failed to connect to DPD Server")
        return REFERENCE_CITY_ID - int(cities[0]["id"])

    async def find_city(self, query: str, country_code: str):
        """Search cities anonymously and shift their ids to the logged in numbering."""
        magic_value = await self._find_magic_value()
        # Must stay anonymous: ids from a session cannot be corrected.
        resp = await self.request(
            "POST",
            CITIES_URL,
            {"name_startsWith": query, "country": country_code},
        )
        data = resp.json()
        if not data or not isinstance(data, dict):
            return None
        for city in data.get("geonames") or []:
            city["id"] = int(city["id"]) + magic_value
        return data

    async def find_city_street(self, city_id: int, query: str, session_id: str):
        resp = await self.request(
            "POST",
            STREETS_URL,
            {"cityId": city_id, "streetName": query},
            session_id=session_id,
        )
        return resp.json()

    async def find_receive_point_city(self, query: str):
        resp = await self.request("POST", GEOCODE_URL, {"value": query})
        return resp.json() or []

    async def get_receive_points(self, bounds: str, city: str):
        resp = await self.request(
            "POST",
            CHOOSER_URL,
            {"bounds": bounds, "city": city},
            encoding="query",
        )
        return resp.json()

    async def get_terminals(self, bounds: str, city: str) -> list:
        data = await self.get_receive_points(bounds, city)
        if not isinstance(data, list):
            return []
        return [point for point in data if point.get("departmentType") in TERMINAL_TYPES]

    def _auth(self) -> dict:
        return {"clientNumber": self._client_number, "clientKey": self._client_key}

    async def get_price(self, delivery: Delivery) -> list:
        """Return the service offers of the calculator for a delivery."""
        data = remove_null_values({"auth": self._auth(), **delivery.to_request()})
        result = await call_soap(
            CALCULATOR_WSDL, "getServiceCost2", data, timeout=self._timeout
        )
        if result is None:
            return []
        if isinstance(result, dict):
            return [result]
        return result

    async def find_by_track_number(self, track_number: str) -> dict:
        """Return the latest state of a DPD order with a readable newState."""
        data = {"auth": self._auth(), "dpdOrderNr": track_number}
        result = await call_soap(
            TRACING_WSDL, "getStatesByDPDOrder", data, timeout=self._timeout
        )
        if isinstance(result, dict) and "return" in result:
            result = result["return"]
        states = (result or {}).get("states") or []
        if isinstance(states, dict):
            states = [states]
        if not states:
            return {}

        state = dict(states[-1])
        state["newState"] = translate_status(state.get("newState"), self._language)
        return state
