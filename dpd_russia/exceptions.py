"""Errors raised by the DPD Russia client."""


class DpdError(Exception):
    """Base class for DPD client errors."""


class DpdConnectionError(DpdError):
    """The provider could not be reached or timed out."""


class DpdResponseError(DpdError):
    """The provider answered with an unexpected (usually empty) body."""


class DpdApiError(DpdError):
    """The SOAP service returned a fault."""
