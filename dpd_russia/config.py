"""Configuration for the DPD Russia client."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass

import voluptuous as vol

from .const import (
    CONF_CLIENT_KEY,
    CONF_CLIENT_NUMBER,
    CONF_LANGUAGE,
    CONF_LOGIN,
    CONF_PASSWORD,
    CONF_ROUTE_PREFIX,
    CONF_TIMEOUT,
    DEFAULT_LANGUAGE,
    DEFAULT_ROUTE_PREFIX,
    DEFAULT_TIMEOUT,
)

_LOGGER = logging.getLogger(__name__)

ENV_VARS = {
    CONF_CLIENT_NUMBER: "DPD_CLIENT_NUMBER",
    CONF_CLIENT_KEY: "DPD_CLIENT_KEY",
    CONF_LOGIN: "DPD_LOGIN",
    CONF_PASSWORD: "DPD_PASSWORD",
    CONF_TIMEOUT: "DPD_TIMEOUT",
    CONF_LANGUAGE: "DPD_LANGUAGE",
    CONF_ROUTE_PREFIX: "DPD_ROUTE_PREFIX",
}

CONFIG_SCHEMA = vol.Schema(
    {
        vol.Optional(CONF_CLIENT_NUMBER): vol.Coerce(str),
        vol.Optional(CONF_CLIENT_KEY): str,
        vol.Optional(CONF_LOGIN): str,
        vol.Optional(CONF_PASSWORD): str,
        vol.Optional(CONF_TIMEOUT, default=DEFAULT_TIMEOUT): vol.All(
            vol.Coerce(int), vol.Range(min=1)
        ),
        vol.Optional(CONF_LANGUAGE, default=DEFAULT_LANGUAGE): str,
        vol.Optional(CONF_ROUTE_PREFIX, default=DEFAULT_ROUTE_PREFIX): vol.Match(r"^/"),
    }
)


@dataclass(frozen=True)
class DpdConfig:
    client_number: str | None = None
    client_key: str | None = None
    login: str | None = None
    password: str | None = None
    timeout: int = DEFAULT_TIMEOUT
    language: str = DEFAULT_LANGUAGE
    route_prefix: str = DEFAULT_ROUTE_PREFIX


def load_config(data: dict | None = None, env=None) -> DpdConfig:
    """Build the configuration from environment variables and explicit data.

    Explicit values win over the environment. Raises vol.Invalid on bad input.
    """
    if env is None:
        env = os.environ
    merged = {key: env[name] for key, name in ENV_VARS.items() if env.get(name)}
    merged.update({key: value for key, value in (data or {}).items() if value is not None})

    config = DpdConfig(**CONFIG_SCHEMA(merged))
    if not (config.client_number and config.client_key):
        _LOGGER.warning("DPD client number/key not set, price and tracking calls will fail")
    if not (config.login and config.password):
        _LOGGER.warning("DPD login/password not set, authorize needs explicit credentials")
    return config
