"""Discord webhook notifier (adapter for NotificationProtocol).

Posts Discord embeds for new registrations and for the audit trail.
Notifications are best effort: a missing URL, a disabled switch, a non-2xx
answer or a transport error all yield ``False`` and a log line, never an
exception.

Thread-safe: uses an httpx.AsyncClient per request (no shared state).
"""

import json
from typing import Any

import httpx

from src.core.clock import Clock, utc_now
from src.domain.protocols.logger_protocol import LoggerProtocol

AUDIT_COLOR = 0x6366F1
REGISTRATION_COLOR = 0x06B6D4


class DiscordWebhookService:
    """Outbound Discord webhook notifier.

    Args:
        logger: Structured logger.
        enabled: Master switch (DISCORD_WEBHOOK_ENABLED).
        webhook_url: Registration channel webhook.
        audit_webhook_url: Audit channel webhook.
        timeout: Seconds before a webhook call is abandoned.
        clock: Time source for embed timestamps.

    Example:
        >>> notifier = DiscordWebhookService(logger=logger, enabled=True,
        ...     audit_webhook_url="https://discord.com/api/webhooks/...")
        >>> await notifier.send_audit_log("password_reset", "ada@example.com")
    """

    def __init__(
        self,
        *,
        logger: LoggerProtocol,
        enabled: bool = False,
        webhook_url: str | None = None,
        audit_webhook_url: str | None = None,
        timeout: float = 10.0,
        clock: Clock | None = None,
    ) -> None:
        self._logger = logger
        self._enabled = enabled
        self._webhook_url = webhook_url
        self._audit_webhook_url = audit_webhook_url
        self._timeout = timeout
        self._clock = clock or utc_now

    async def send_notification(self, endpoint: str, payload: dict[str, Any]) -> bool:
        """POST payload to endpoint.

        Returns:
            True on a 2xx response, False otherwise.
        """
        if not endpoint:
            self._logger.warning("Discord webhook URL not configured")
            return False

        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.post(endpoint, json=payload)
        except httpx.TimeoutException as e:
            self._logger.warning("Discord webhook timed out", error_message=str(e))
            return False
        except httpx.RequestError as e:
            self._logger.error("Discord webhook connection error", error=e)
            return False

        if not response.is_success:
            self._logger.error(
                "Discord webhook failed",
                status_code=response.status_code,
                reason=response.reason_phrase,
            )
            return False
        return True

    async def send_audit_log(
        self,
        action: str,
        user: str,
        details: str | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> bool:
        """Post an audit embed (Action, User, Details, optional Metadata)."""
        if not self._enabled or not self._audit_webhook_url:
            return False

        fields = [
            {"name": "Action", "value": action, "inline": True},
            {"name": "User", "value": user, "inline": True},
            {"name": "Details", "value": details or "-", "inline": False},
        ]
        if metadata:
            fields.append(
                {
                    "name": "Metadata",
                    "value": f"```json\n{json.dumps(metadata, indent=2, default=str)}```",
                    "inline": False,
                }
            )

        return await self.send_notification(
            self._audit_webhook_url,
            {
                "username": "Hypea Audit",
                "embeds": [self._embed("🔍 Audit Log", AUDIT_COLOR, fields)],
            },
        )

    async def send_user_registration(
        self,
        username: str,
        email: str,
        provider: str = "credentials",
    ) -> bool:
        if not self._enabled or not self._webhook_url:
            return False

        fields = [
            {"name": "Username", "value": username, "inline": True},
            {"name": "Email", "value": email, "inline": True},
            {"name": "Provider", "value": provider, "inline": True},
        ]
        return await self.send_notification(
            self._webhook_url,
            {
                "username": "Hypea Platform",
                "embeds": [
                    self._embed("👋 New User Registration", REGISTRATION_COLOR, fields)
                ],
            },
        )

    def _embed(
        self, title: str, color: int, fields: list[dict[str, Any]]
    ) -> dict[str, Any]:
        return {
            "title": title,
            "color": color,
            "timestamp": self._clock().isoformat(),
            "fields": fields,
        }
