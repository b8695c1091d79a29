"""Shared fixtures."""

import httpx
import pytest

from nurture_proxy.models.config import ProviderConfig, ServerConfig

GEMINI_KEY = "test-gemini-key"

PROVIDER_VALUES = {
    "api_key": "fb-api-key",
    "auth_domain": "nurture.firebaseapp.com",
    "project_id": "nurture",
    "storage_bucket": "nurture.appspot.com",
    "messaging_sender_id": "1234567890",
    "app_id": "1:1234567890:web:abc",
    "measurement_id": "G-TEST",
}

GEMINI_RESPONSE = {"candidates": [{"content": {"parts": [{"text": "hi"}]}}]}


@pytest.fixture
def full_config() -> ServerConfig:
    """Config with every provider field and the secret set."""
    return ServerConfig(
        provider=ProviderConfig(**PROVIDER_VALUES),
        gemini_api_key=GEMINI_KEY,
    )


@pytest.fixture
def upstream_calls() -> list[httpx.Request]:
    """Requests received by the mock upstream."""
    return []


@pytest.fixture
def upstream(upstream_calls):
    """Mock upstream transport answering GEMINI_RESPONSE."""

    def handler(request: httpx.Request) -> httpx.Response:
        upstream_calls.append(request)
        return httpx.Response(200, json=GEMINI_RESPONSE)

    return httpx.MockTransport(handler)
