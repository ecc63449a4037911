"""aiohttp.web routes exposing the DPD client as JSON endpoints."""
from __future__ import annotations

import functools
import json
import logging

import voluptuous as vol
from aiohttp import web

from .api_dpd import DpdApi
from .config import DpdConfig
from .exceptions import DpdConnectionError, DpdError
from .models import Delivery

_LOGGER = logging.getLogger(__name__)

API_KEY = web.AppKey("dpd_api", DpdApi)
CONFIG_KEY = web.AppKey("dpd_config", DpdConfig)

_NON_EMPTY = vol.All(str, vol.Length(min=1))

AUTHORIZE_SCHEMA = vol.Schema(
    {
        vol.Optional("login"): _NON_EMPTY,
        vol.Optional("password"): _NON_EMPTY,
    },
    extra=vol.REMOVE_EXTRA,
)

CITY_SCHEMA = vol.Schema(
    {
        vol.Required("query"): _NON_EMPTY,
        vol.Required("country_code"): _NON_EMPTY,
    },
    extra=vol.REMOVE_EXTRA,
)

STREET_SCHEMA = vol.Schema(
    {
        vol.Required("city_id"): vol.Coerce(int),
        vol.Required("query"): _NON_EMPTY,
        vol.Required("session"): _NON_EMPTY,
    },
    extra=vol.REMOVE_EXTRA,
)

RECEIVE_POINT_CITY_SCHEMA = vol.Schema(
    {vol.Required("query"): _NON_EMPTY},
    extra=vol.REMOVE_EXTRA,
)

BOUNDS_SCHEMA = vol.Schema(
    {
        vol.Required("bounds"): _NON_EMPTY,
        vol.Required("city"): _NON_EMPTY,
    },
    extra=vol.REMOVE_EXTRA,
)

DELIVERY_SCHEMA = vol.Schema(
    {
        vol.Required("derival_city_id"): vol.Coerce(int),
        vol.Required("arrival_city_id"): vol.Coerce(int),
        vol.Required("parcel_total_weight"): vol.All(vol.Coerce(float), vol.Range(min=0)),
        vol.Optional("derival_terminal", default=False): vol.Boolean(),
        vol.Optional("arrival_terminal", default=False): vol.Boolean(),
        vol.Optional("parcel_total_volume"): vol.Any(None, vol.Coerce(float)),
        vol.Optional("parcel_total_value"): vol.Any(None, vol.Coerce(float)),
        vol.Optional("pickup_date"): vol.Any(None, vol.Match(r"^\d{4}-\d{2}-\d{2}$")),
        vol.Optional("max_delivery_days"): vol.Any(None, vol.Coerce(int)),
        vol.Optional("max_delivery_price"): vol.Any(None, vol.Coerce(float)),
    },
    extra=vol.REMOVE_EXTRA,
)

_dumps = functools.partial(json.dumps, ensure_ascii=False, default=str)


def _json_response(data, status=200):
    return web.json_response(data, status=status, dumps=_dumps)


def _validate(schema, data):
    try:
        return schema(dict(data))
    except vol.MultipleInvalid as err:
        errors = {
            ".".join(str(part) for part in error.path) or "_": error.msg
            for error in err.errors
        }
        raise web.HTTPUnprocessableEntity(
            text=_dumps({"errors": errors}), content_type="application/json"
        )


async def _read_json(request):
    if not request.can_read_body:
        return {}
    try:
        data = await request.json()
    except ValueError:
        raise web.HTTPBadRequest(
            text=_dumps({"error": "Invalid JSON body"}), content_type="application/json"
        )
    if not isinstance(data, dict):
        raise web.HTTPBadRequest(
            text=_dumps({"error": "JSON object expected"}), content_type="application/json"
        )
    return data


@web.middleware
async def error_middleware(request, handler):
    try:
        return await handler(request)
    except DpdConnectionError as err:
        _LOGGER.error("DPD unreachable while serving %s: %s", request.path, err)
        return _json_response({"error": str(err)}, status=502)
    except DpdError as err:
        _LOGGER.error("DPD error while serving %s: %s", request.path, err)
        return _json_response({"error": str(err)}, status=502)


async def authorize(request):
    data = _validate(AUTHORIZE_SCHEMA, await _read_json(request))
    session = await request.app[API_KEY].authorize(data.get("login"), data.get("password"))
    return _json_response({"session": session})


async def find_city(request):
    data = _validate(CITY_SCHEMA, request.query)
    return _json_response(
        await request.app[API_KEY].find_city(data["query"], data["country_code"])
    )


async def find_city_street(request):
    data = _validate(STREET_SCHEMA, {**request.query, **request.match_info})
    return _json_response(
        await request.app[API_KEY].find_city_street(
            data["city_id"], data["query"], data["session"]
        )
    )


async def find_receive_point_city(request):
    data = _validate(RECEIVE_POINT_CITY_SCHEMA, request.query)
    return _json_response(await request.app[API_KEY].find_receive_point_city(data["query"]))


async def get_receive_points(request):
    data = _validate(BOUNDS_SCHEMA, request.query)
    return _json_response(
        await request.app[API_KEY].get_receive_points(data["bounds"], data["city"])
    )


async def get_terminals(request):
    data = _validate(BOUNDS_SCHEMA, request.query)
    return _json_response(await request.app[API_KEY].get_terminals(data["bounds"], data["city"]))


async def get_price(request):
    data = _validate(DELIVERY_SCHEMA, await _read_json(request))
    return _json_response(await request.app[API_KEY].get_price(Delivery.from_dict(data)))


async def find_by_track_number(request):
    track_number = request.match_info["track_number"]
    return _json_response(await request.app[API_KEY].find_by_track_number(track_number))


def routes(prefix: str) -> list:
    prefix = prefix.rstrip("/")
    return [
        web.post(f"{prefix}/authorize", authorize),
        web.get(f"{prefix}/cities", find_city),
        web.get(f"{prefix}/cities/{{city_id}}/streets", find_city_street),
        web.get(f"{prefix}/receive-points/cities", find_receive_point_city),
        web.get(f"{prefix}/receive-points", get_receive_points),
        web.get(f"{prefix}/terminals", get_terminals),
        web.post(f"{prefix}/price", get_price),
        web.get(f"{prefix}/track/{{track_number}}", find_by_track_number),
    ]
