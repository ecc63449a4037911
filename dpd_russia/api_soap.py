"""SOAP calls against ws.dpd.ru.

suds is synchronous, so the WSDL load and the call itself run in the default
executor. Results are converted to plain dicts and lists so callers get the same
shapes as from the JSON endpoints.
"""
import asyncio
import async_timeout
import functools
import logging

from suds import WebFault
from suds.client import Client
from suds.sudsobject import Object, asdict
from suds.transport import TransportError

from .const import DEFAULT_TIMEOUT
from .exceptions import DpdApiError, DpdConnectionError

_LOGGER = logging.getLogger(__name__)


def to_native(value):
    """Recursively convert suds objects into dicts and lists."""
    if isinstance(value, Object):
        return {key: to_native(item) for key, item in asdict(value).items()}
    if isinstance(value, (list, tuple)):
        return [to_native(item) for item in value]
    return value


def _call(wsdl, operation, request, timeout):
    client = Client(wsdl, timeout=timeout)
    return getattr(client.service, operation)(request=request)


async def call_soap(
    wsdl: str,
    operation: str,
    request: dict,
    *,
    timeout: int = DEFAULT_TIMEOUT,
    label: str = "DPD SOAP",
):
    """Invoke ``operation`` on ``wsdl`` with a single ``request`` argument.

    The WSDL is loaded on every call. On timeout DpdConnectionError is raised
    and the call is abandoned, not cancelled: the executor thread keeps running
    until suds returns or its own socket timeout fires.
    """
    _LOGGER.debug("%s %s on %s", label, operation, wsdl)
    loop = asyncio.get_running_loop()
    try:
        async with async_timeout.timeout(timeout):
            result = await loop.run_in_executor(
                None, functools.partial(_call, wsdl, operation, request, timeout)
            )
    except asyncio.TimeoutError:
        _LOGGER.error("%s %s timed out", label, operation)
        raise DpdConnectionError(f"{label} request timed out")
    except WebFault as err:
        _LOGGER.error("%s fault in %s: %s", label, operation, err)
        raise DpdApiError(f"{label} fault: {err}")
    except (TransportError, OSError) as err:
        _LOGGER.error("%s transport error: %s", label, err)
        raise DpdConnectionError(f"{label} transport error: {err}")
    return to_native(result)
