"""API tests for RateLimitMiddleware and GET /api/v1/rate-limit.

Tests cover:
- Auth preset: 5 POSTs per 15 minutes per client IP, 6th gets 429
- X-RateLimit-* headers on allowed responses
- Retry-After header and retry_after field on 429
- CORS headers on 429 so browsers can read Retry-After
- Separate budgets per IP (X-Forwarded-For)
- Unlimited system routes
- Fail-open when the limiter raises

The autouse container reset in tests/conftest.py gives every test fresh
in-memory limiters.
"""

from dataclasses import replace
from datetime import datetime
from unittest.mock import AsyncMock, Mock

import pytest

from src.application.commands.handlers.request_password_reset_handler import (
    PasswordResetRequestResponse,
)
from src.core.config import settings
from src.core.container import get_rate_limiters, get_request_password_reset_handler
from src.core.result import Success
from src.main import app
from src.presentation.routers.api.middleware.rate_limit_middleware import (
    RateLimitMiddleware,
)

RESET_URL = "/api/v1/password-reset-tokens"


class StubRequestPasswordResetHandler:
    async def handle(self, cmd):
        return Success(value=PasswordResetRequestResponse())


@pytest.fixture(autouse=True)
def stub_handler():
    app.dependency_overrides[get_request_password_reset_handler] = (
        lambda: StubRequestPasswordResetHandler()
    )


def request_reset(client, ip="10.0.0.5"):
    return client.post(
        RESET_URL,
        json={"email": "ada@example.com"},
        headers={"X-Forwarded-For": ip},
    )


@pytest.mark.api
class TestAuthRateLimit:
    def test_sixth_request_rejected(self, client):
        for _ in range(5):
            assert request_reset(client).status_code == 201

        response = request_reset(client)

        assert response.status_code == 429
        body = response.json()
        assert body["title"] == "Rate Limit Exceeded"
        assert body["instance"] == RESET_URL
        assert 0 < body["retry_after"] <= 900
        assert response.headers["Retry-After"] == str(body["retry_after"])
        assert response.headers["X-RateLimit-Remaining"] == "0"

    def test_rejection_carries_cors_headers(self, client):
        origin = settings.cors_origin_list[0]
        for _ in range(5):
            request_reset(client)

        response = client.post(
            RESET_URL,
            json={"email": "ada@example.com"},
            headers={"X-Forwarded-For": "10.0.0.5", "Origin": origin},
        )

        assert response.status_code == 429
        assert response.headers["Access-Control-Allow-Origin"] == origin
        assert "Retry-After" in response.headers["Access-Control-Expose-Headers"]

    def test_allowed_response_carries_headers(self, client):
        first = request_reset(client)
        second = request_reset(client)

        assert first.headers["X-RateLimit-Limit"] == "5"
        assert first.headers["X-RateLimit-Remaining"] == "4"
        assert second.headers["X-RateLimit-Remaining"] == "3"
        reset = datetime.fromisoformat(first.headers["X-RateLimit-Reset"])
        assert reset.tzinfo is not None

    def test_budgets_are_per_client_ip(self, client):
        for _ in range(5):
            request_reset(client, ip="10.0.0.5")

        assert request_reset(client, ip="10.0.0.5").status_code == 429
        assert request_reset(client, ip="10.0.0.6").status_code == 201

    def test_first_forwarded_address_is_used(self, client):
        for _ in range(5):
            request_reset(client, ip="10.0.0.5, 172.16.0.1")

        assert request_reset(client, ip="10.0.0.5").status_code == 429


@pytest.mark.api
class TestApiRateLimit:
    def test_rate_limit_endpoint_reports_budget(self, client):
        response = client.get("/api/v1/rate-limit")

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Rate limit check passed"
        assert body["limit"] == 100
        assert body["remaining"] == 99
        assert response.headers["X-RateLimit-Limit"] == "100"

    def test_api_budget_separate_from_auth(self, client):
        for _ in range(5):
            request_reset(client)

        assert client.get("/api/v1/rate-limit").status_code == 200

    @pytest.mark.parametrize("path", ["/", "/docs", "/openapi.json"])
    def test_system_routes_not_limited(self, client, path):
        response = client.get(path)

        assert response.status_code == 200
        assert "X-RateLimit-Limit" not in response.headers


@pytest.mark.api
class TestFailOpen:
    def test_limiter_error_lets_request_through(self, client, monkeypatch):
        limiters = get_rate_limiters()
        broken = Mock()
        broken.rule = limiters.auth.rule
        broken.check = AsyncMock(side_effect=RuntimeError("store down"))
        monkeypatch.setattr(
            RateLimitMiddleware,
            "_get_limiters",
            staticmethod(lambda: replace(limiters, auth=broken)),
        )

        response = request_reset(client)

        assert response.status_code == 201
        assert "X-RateLimit-Limit" not in response.headers
