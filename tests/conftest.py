"""Pytest fixtures for the DPD client tests."""
import json
from unittest.mock import AsyncMock, MagicMock

import pytest
from multidict import CIMultiDict

from dpd_russia.api_dpd import DpdApi
from dpd_russia.api_helpers import ApiResponse


@pytest.fixture
def make_response():
    """Build an ApiResponse from a JSON-able body and Set-Cookie values."""

    def _make(body=None, status=200, cookies=()):
        headers = CIMultiDict()
        for cookie in cookies:
            headers.add("Set-Cookie", cookie)
        text = "" if body is None else json.dumps(body, ensure_ascii=False)
        return ApiResponse(status, headers, text)

    return _make


@pytest.fixture
def dpd_api():
    """DpdApi with a mocked request method."""
    api = DpdApi(
        MagicMock(),
        "1001038335",
        "KEY",
        login="user",
        password="secret",
        language="ru",
    )
    api.request = AsyncMock()
    return api
