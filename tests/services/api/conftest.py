from typing import Any, Dict

import pytest

from app.services.api.api_service import HttpService
from app.services.api.authenticators.authenticator import Authenticator


class MockAuthenticator(Authenticator):
    def get_authentication_header(self) -> str:
        return "Bearer some-token"

    def get_auth(self) -> Any:
        return None


@pytest.fixture()
def base_url() -> str:
    return "https://objects.example.com/api/v2"


@pytest.fixture()
def mock_sub_route() -> str:
    return "objects"


@pytest.fixture()
def mock_params() -> Dict[str, Any]:
    return {"_schema": "https://example.com/schema.json", "assessmentNumber": "123456"}


@pytest.fixture()
def mock_body() -> Dict[str, Any]:
    return {"assessmentNumber": "123456", "assessmentSequenceNumber": "2"}


@pytest.fixture()
def mock_authenticator() -> MockAuthenticator:
    return MockAuthenticator()


@pytest.fixture()
def mock_authentication_headers() -> Dict[str, str]:
    return {
        "Content-Type": "application/json",
        "Accept": "application/json",
        "Authorization": "Bearer some-token",
    }


@pytest.fixture()
def http_service(base_url: str) -> HttpService:
    return HttpService(base_url=base_url, timeout=1, retries=2, backoff=0)
