"""
Pytest configuration for the Paystack checkout app.

The Paystack API is never contacted: every test talks to a FakePaystack
served through httpx.MockTransport and injected with dependency overrides.
"""

import json

import httpx
import pytest
from fastapi.testclient import TestClient

from app.config import Settings, get_settings
from app.dependencies import get_http_client
from app.main import app
from app.services.paystack_client import PaystackClient

PUBLIC_KEY = "pk_test_public"
SECRET_KEY = "sk_test_secret"


class RecordingTransport(httpx.MockTransport):
    """MockTransport that tells its FakePaystack when the owning client closes it."""

    def __init__(self, fake):
        super().__init__(fake.handler)
        self.fake = fake

    async def aclose(self):
        self.fake.closed_transports += 1
        await super().aclose()


class FakePaystack:
    """Records outbound requests and answers with canned responses keyed by path."""

    def __init__(self):
        self.requests = []
        self.routes = {}
        self.opened_transports = 0
        self.closed_transports = 0

    def respond(self, method, path, status_code=200, json_body=None, text=None):
        self.routes[(method, path)] = (status_code, json_body, text)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.method, request.url.path)
        if key not in self.routes:
            return httpx.Response(404, json={"status": False, "message": "Route not stubbed"})

        status_code, json_body, text = self.routes[key]
        if text is not None:
            return httpx.Response(status_code, text=text)
        return httpx.Response(status_code, json=json_body)

    def last_json(self):
        return json.loads(self.requests[-1].content)

    def transport(self) -> httpx.MockTransport:
        self.opened_transports += 1
        return RecordingTransport(self)


# ============================================================================
# SETTINGS & GATEWAY FIXTURES
# ============================================================================

@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        PAYSTACK_PUBLIC_KEY=PUBLIC_KEY,
        PAYSTACK_SECRET_KEY=SECRET_KEY,
        PAYSTACK_BASE_URL="https://api.paystack.co",
        PAYSTACK_CURRENCY="ZAR",
        PAYSTACK_PLAN_INTERVAL="monthly",
        PAYSTACK_CALLBACK_URL=None,
    )


@pytest.fixture
def paystack():
    return FakePaystack()


@pytest.fixture
async def paystack_client(paystack, settings):
    async with httpx.AsyncClient(transport=paystack.transport()) as http_client:
        yield PaystackClient(http_client, settings)


# ============================================================================
# FASTAPI CLIENT
# ============================================================================

@pytest.fixture
def test_client(paystack, settings):
    """TestClient wired to the fake gateway; redirects are not followed."""
    async def fake_http_client():
        async with httpx.AsyncClient(transport=paystack.transport()) as http_client:
            yield http_client

    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_http_client] = fake_http_client

    client = TestClient(app, follow_redirects=False)
    yield client

    app.dependency_overrides.clear()


@pytest.fixture
def anyio_backend():
    return "asyncio"
