"""
Shared Test Fixtures
====================

Fake credentials, a client wired to fixed hosts, and canned HTTP responses.
HTTP is faked by patching ``requests.request`` inside the client module.
"""

import json
from typing import Any, Optional
from unittest.mock import MagicMock, patch

import pytest
import requests

from testlab.core.client.client import TestLabClient
from testlab.core.client.config import TestLabConfig

TOOL_RESULTS_URL = "https://toolresults.test"
TESTING_URL = "https://testing.test"


class FakeSigner:
    """Adds a fixed bearer header, recording every call."""

    def __init__(self) -> None:
        self.calls = 0

    def apply(self, headers: dict[str, str]) -> dict[str, str]:
        self.calls += 1
        signed = dict(headers)
        signed["Authorization"] = "Bearer test-token"
        return signed


class FakeCredential:
    def __init__(self) -> None:
        self.signer = FakeSigner()
        self.requested_scopes: Optional[list[str]] = None

    def get_google_credential(self, scopes: list[str]) -> FakeSigner:
        self.requested_scopes = list(scopes)
        return self.signer


def make_response(status_code: int = 200, body: Any = None) -> MagicMock:
    """Create a mock requests.Response with JSON (or raw text) body."""
    response = MagicMock(spec=requests.Response)
    response.status_code = status_code
    if isinstance(body, str):
        text = body
    else:
        text = json.dumps(body if body is not None else {})
    response.text = text

    def _json():
        return json.loads(text)

    response.json.side_effect = _json
    return response


def google_error(code: int, status: str, message: str) -> dict[str, Any]:
    return {"error": {"code": code, "status": status, "message": message}}


@pytest.fixture
def credential() -> FakeCredential:
    return FakeCredential()


@pytest.fixture
def config() -> TestLabConfig:
    return TestLabConfig(
        tool_results_url=TOOL_RESULTS_URL,
        testing_url=TESTING_URL,
        client_name="testlab-client",
        client_version="9.9.9",
    )


@pytest.fixture
def client(credential: FakeCredential, config: TestLabConfig) -> TestLabClient:
    return TestLabClient(credential, config)


@pytest.fixture
def mock_request():
    """Patch the single outbound HTTP call used by the client."""
    with patch("testlab.core.client.client.requests.request") as mocked:
        yield mocked
