import httpx
import pytest
from fastapi.testclient import TestClient

from confsched.client import ApiClient
from confsched.main import app, get_client

API_URL = "http://api.test"


def envelope(data=None, code=200, status="OK", message="success", errors=None):
    return {
        "code": code,
        "status": status,
        "message": message,
        "pagination": None,
        "data": data,
        "errors": errors,
    }


class FakeApi:
    """Routes (method, path) to canned responses and records every request."""

    def __init__(self):
        self.routes = {}
        self.requests = []

    def add(self, method, path, json=None, status_code=200, headers=None):
        self.routes[(method, path)] = (status_code, json, headers or {})

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.method, request.url.path)
        if key not in self.routes:
            return httpx.Response(404, json=envelope(code=404, status="error", message="not found"))
        status_code, body, headers = self.routes[key]
        if isinstance(body, Exception):
            raise body
        return httpx.Response(status_code, json=body, headers=headers)

    def client(self) -> ApiClient:
        http = httpx.AsyncClient(transport=httpx.MockTransport(self.handler), base_url=API_URL)
        return ApiClient(API_URL, http=http)


@pytest.fixture
def fake_api():
    return FakeApi()


@pytest.fixture
def api_client(fake_api):
    return fake_api.client()


@pytest.fixture
def web(fake_api, api_client):
    """TestClient wired to the fake remote API, with a valid refresh cookie."""
    fake_api.add(
        "POST", "/api/v1/auth/refresh-token",
        json=envelope({}),
        headers={"Authorization": "Bearer access-1"},
    )
    app.dependency_overrides[get_client] = lambda: api_client
    with TestClient(app) as c:
        c.cookies.set("refresh_token", "refresh-1")
        yield c
    app.dependency_overrides.clear()
