"""NotificationProtocol - Port for chat webhook notifications.

Notifications are informational (registrations, audit trail). Every method
reports delivery as a bool and never raises, so a down webhook never fails
the request that triggered it.
"""

from typing import Any, Protocol


class NotificationProtocol(Protocol):
    """Outbound webhook notifier (port).

    Implementations:
        - DiscordWebhookService: src/infrastructure/notifications/
    """

    async def send_notification(self, endpoint: str, payload: dict[str, Any]) -> bool:
        """POST payload as JSON to endpoint. True on a 2xx response."""
        ...

    async def send_audit_log(
        self,
        action: str,
        user: str,
        details: str | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> bool:
        """Record a security-relevant action (password reset, verification)."""
        ...

    async def send_user_registration(
        self,
        username: str,
        email: str,
        provider: str = "credentials",
    ) -> bool:
        """Announce a new account."""
        ...
