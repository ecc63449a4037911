"""Constants for the DPD Russia client."""

DOMAIN = "dpd_russia"
VERSION = "0.1.0"

SESSION_COOKIE = "MYDPDSessionID"
COOKIE_HOST = "www.dpd.ru"

ORDER_URL = "https://www.dpd.ru/ols/order/order.do2"
LOGON_URL = "https://www.dpd.ru/ols/etc/logon.do2"
CITIES_URL = "https://www.dpd.ru/ols/calc/cities.do2"
STREETS_URL = "https://www.dpd.ru/ols/order/addressStreetAutocomplete.do2"
CHOOSER_URL = "https://chooser.dpd.ru/api"
GEOCODE_URL = "https://chooser.dpd.ru/api/geocode"

CALCULATOR_WSDL = "http://ws.dpd.ru/services/calculator2?wsdl"
TRACING_WSDL = "http://ws.dpd.ru/services/tracing1-1?wsdl"

# Calibration anchor: Yekaterinburg and its id in the authenticated numbering.
REFERENCE_CITY = "Екатеринбург"
REFERENCE_COUNTRY = "3"
REFERENCE_CITY_ID = 48994107

# Department types of terminals ("Т" terminal, "СД" sorting depot), Cyrillic.
TERMINAL_TYPES = ("Т", "СД")

CONF_CLIENT_NUMBER = "client_number"
CONF_CLIENT_KEY = "client_key"
CONF_LOGIN = "login"
CONF_PASSWORD = "password"
CONF_TIMEOUT = "timeout"
CONF_LANGUAGE = "language"
CONF_ROUTE_PREFIX = "route_prefix"

DEFAULT_TIMEOUT = 30
DEFAULT_LANGUAGE = "ru"
DEFAULT_ROUTE_PREFIX = "/dpd"
