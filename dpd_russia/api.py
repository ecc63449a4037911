"""Convenience exports for the DPD client."""

from .api_dpd import DpdApi
from .api_helpers import ApiResponse, parse_cookie, remove_null_values, request, request_json
from .api_soap import call_soap
from .exceptions import DpdApiError, DpdConnectionError, DpdError, DpdResponseError
from .models import Delivery

__all__ = [
    "ApiResponse",
    "Delivery",
    "DpdApi",
    "DpdApiError",
    "DpdConnectionError",
    "DpdError",
    "DpdResponseError",
    "call_soap",
    "parse_cookie",
    "remove_null_values",
    "request",
    "request_json",
]
