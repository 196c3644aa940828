"""Unit tests for DiscordWebhookService.

Tests cover:
- Registration and audit embeds posted to their channels
- Disabled switch and missing URLs are no-ops returning False
- Non-2xx answers and transport errors return False (never raise)

Architecture:
- HTTP layer mocked with pytest-httpx (no network)
"""

import json
from unittest.mock import Mock

import httpx
import pytest

from src.infrastructure.notifications import DiscordWebhookService

REGISTRATION_URL = "https://discord.test/api/webhooks/1/registrations"
AUDIT_URL = "https://discord.test/api/webhooks/2/audit"


@pytest.fixture
def logger():
    return Mock()


@pytest.fixture
def notifier(logger, clock):
    return DiscordWebhookService(
        logger=logger,
        enabled=True,
        webhook_url=REGISTRATION_URL,
        audit_webhook_url=AUDIT_URL,
        clock=clock,
    )


@pytest.mark.unit
class TestDiscordWebhookService:
    @pytest.mark.asyncio
    async def test_user_registration_embed(self, notifier, httpx_mock, clock):
        httpx_mock.add_response(url=REGISTRATION_URL, status_code=204)

        assert await notifier.send_user_registration("ada_l", "ada@example.com") is True

        payload = json.loads(httpx_mock.get_request().content)
        embed = payload["embeds"][0]
        assert embed["title"] == "👋 New User Registration"
        assert embed["timestamp"] == clock.now.isoformat()
        assert [f["value"] for f in embed["fields"]] == [
            "ada_l",
            "ada@example.com",
            "credentials",
        ]

    @pytest.mark.asyncio
    async def test_audit_log_embed_with_metadata(self, notifier, httpx_mock):
        httpx_mock.add_response(url=AUDIT_URL, status_code=204)

        sent = await notifier.send_audit_log(
            "password_reset_completed",
            "ada@example.com",
            metadata={"user_id": "42"},
        )

        assert sent is True
        fields = json.loads(httpx_mock.get_request().content)["embeds"][0]["fields"]
        assert fields[0] == {
            "name": "Action",
            "value": "password_reset_completed",
            "inline": True,
        }
        assert fields[2]["value"] == "-"
        assert '"user_id": "42"' in fields[3]["value"]

    @pytest.mark.asyncio
    async def test_disabled_sends_nothing(self, logger, httpx_mock):
        notifier = DiscordWebhookService(
            logger=logger,
            enabled=False,
            webhook_url=REGISTRATION_URL,
            audit_webhook_url=AUDIT_URL,
        )

        assert await notifier.send_user_registration("ada_l", "a@b.c") is False
        assert await notifier.send_audit_log("x", "a@b.c") is False
        assert httpx_mock.get_requests() == []

    @pytest.mark.asyncio
    async def test_missing_audit_url_sends_nothing(self, logger, httpx_mock):
        notifier = DiscordWebhookService(
            logger=logger, enabled=True, webhook_url=REGISTRATION_URL
        )

        assert await notifier.send_audit_log("x", "a@b.c") is False
        assert httpx_mock.get_requests() == []

    @pytest.mark.asyncio
    async def test_error_status_returns_false(self, notifier, httpx_mock, logger):
        httpx_mock.add_response(url=AUDIT_URL, status_code=429)

        assert await notifier.send_audit_log("x", "a@b.c") is False
        logger.error.assert_called_once()

    @pytest.mark.asyncio
    async def test_timeout_returns_false(self, notifier, httpx_mock, logger):
        httpx_mock.add_exception(httpx.ReadTimeout("timed out"))

        assert await notifier.send_user_registration("ada_l", "a@b.c") is False
        logger.warning.assert_called_once()

    @pytest.mark.asyncio
    async def test_connection_error_returns_false(self, notifier, httpx_mock, logger):
        httpx_mock.add_exception(httpx.ConnectError("refused"))

        assert await notifier.send_user_registration("ada_l", "a@b.c") is False
        logger.error.assert_called_once()

    @pytest.mark.asyncio
    async def test_empty_endpoint(self, notifier, logger):
        assert await notifier.send_notification("", {"content": "hi"}) is False
        logger.warning.assert_called_once()
