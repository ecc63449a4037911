import aiohttp
import asyncio
import async_timeout
import json
import logging
from typing import NamedTuple
from urllib.parse import urlsplit

from .const import COOKIE_HOST, DEFAULT_TIMEOUT, SESSION_COOKIE
from .exceptions import DpdConnectionError


_LOGGER = logging.getLogger(__name__)


class ApiResponse(NamedTuple):
    """Raw provider response. Headers keep repeated keys such as Set-Cookie."""

    status: int
    headers: object
    text: str

    def json(self):
        """Return the decoded body, or None when it is empty or not JSON."""
        if not self.text:
            return None
        try:
            return json.loads(self.text)
        except ValueError:
            return None


async def request(
    session: aiohttp.ClientSession,
    method: str,
    url: str,
    params: dict | None = None,
    *,
    session_id: str | None = None,
    encoding: str = "form",
    timeout: int = DEFAULT_TIMEOUT,
    label: str = "DPD",
) -> ApiResponse:
    """
    Perform a single request and return the raw response.

    Error statuses are returned to the caller, not raised. The session cookie is
    sent only when ``session_id`` is given and only to the provider host, so each
    call is cookie-isolated. Timeouts and client errors raise DpdConnectionError.

    ``session`` must use aiohttp.DummyCookieJar; a jar that stores Set-Cookie
    would replay a logged in session id on anonymous calls.
    """
    if not isinstance(session.cookie_jar, aiohttp.DummyCookieJar):
        raise ValueError("DPD requests need a ClientSession with aiohttp.DummyCookieJar")
    api_label = f"{label} API"
    headers = {}
    if session_id and urlsplit(url).hostname == COOKIE_HOST:
        headers["Cookie"] = f"{SESSION_COOKIE}={session_id}"

    kwargs = {"headers": headers}
    if encoding == "query":
        kwargs["params"] = params or {}
    elif params:
        kwargs["data"] = params

    _LOGGER.debug("%s %s %s (session: %s)", api_label, method, url, bool(session_id))
    try:
        async with async_timeout.timeout(timeout):
            async with session.request(method, url, **kwargs) as resp:
                text = await resp.text()
                if resp.status >= 400:
                    _LOGGER.warning("%s error %s: %s", label, resp.status, text)
                return ApiResponse(resp.status, resp.headers, text)
    except asyncio.TimeoutError:
        _LOGGER.error("%s request to %s timed out", api_label, url)
        raise DpdConnectionError(f"{api_label} request timed out")
    except aiohttp.ClientError as err:
        _LOGGER.error("%s client error: %s", api_label, err)
        raise DpdConnectionError(f"{api_label} client error: {err}")


async def request_json(session: aiohttp.ClientSession, method: str, url: str, params=None, **kwargs):
    """Perform a request and return the decoded JSON body (None if there is none)."""
    resp = await request(session, method, url, params, **kwargs)
    return resp.json()


def parse_cookie(values, name: str = SESSION_COOKIE) -> str | None:
    """Return the value of cookie ``name`` from Set-Cookie header values.

    Every ``;`` separated chunk is checked, so the last match wins.
    """
    found = None
    for cookie in values:
        for chunk in cookie.split(";"):
            parts = chunk.split("=")
            if parts[0].strip() == name and len(parts) > 1:
                found = parts[1].strip()
    return found


def remove_null_values(data):
    """Drop None values from nested mappings."""
    if isinstance(data, dict):
        return {key: remove_null_values(value) for key, value in data.items() if value is not None}
    return data
