"""Outbound notification adapters."""

from src.infrastructure.notifications.discord_webhook_service import (
    DiscordWebhookService,
)

__all__ = ["DiscordWebhookService"]
