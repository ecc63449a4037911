"""DPD Russia client and its aiohttp.web routes."""
import logging

from aiohttp import web

from .api_dpd import DpdApi
from .config import DpdConfig, load_config
from .const import DOMAIN, VERSION
from .views import API_KEY, CONFIG_KEY, error_middleware, routes

_LOGGER = logging.getLogger(__name__)

OWNED_API_KEY = web.AppKey("dpd_owned_api", DpdApi)

__all__ = [
    "DOMAIN",
    "VERSION",
    "DpdApi",
    "DpdConfig",
    "create_app",
    "load_config",
    "setup",
]


def setup(app: web.Application, config=None) -> web.Application:
    """Register the DPD routes and the client lifecycle on an existing app.

    ``config`` may be a DpdConfig, a plain mapping or None (environment only).
    A DpdApi already stored under API_KEY is used as is and not closed.
    """
    if not isinstance(config, DpdConfig):
        config = load_config(config)
    app[CONFIG_KEY] = config
    app.middlewares.append(error_middleware)
    app.on_startup.append(_async_start_client)
    app.on_cleanup.append(_async_close_client)
    app.router.add_routes(routes(config.route_prefix))
    _LOGGER.debug("%s %s routes registered under %s", DOMAIN, VERSION, config.route_prefix)
    return app


def create_app(config=None) -> web.Application:
    return setup(web.Application(), config)


async def _async_start_client(app: web.Application) -> None:
    if API_KEY in app:
        return
    # The client builds its own cookie-less session on first use.
    api = DpdApi.from_config(app[CONFIG_KEY])
    app[API_KEY] = api
    app[OWNED_API_KEY] = api


async def _async_close_client(app: web.Application) -> None:
    api = app.get(OWNED_API_KEY)
    if api is not None:
        await api.close()
