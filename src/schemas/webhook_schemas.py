"""Inbound webhook schemas.

POST /api/v1/webhooks/discord
"""

from typing import Any

from pydantic import BaseModel, Field


class WebhookEvent(BaseModel):
    """Signed event posted by a trusted internal producer."""

    type: str = Field(..., min_length=1, examples=["user_registered"])
    data: dict[str, Any] = Field(..., description="Event payload")


class UserRegisteredData(BaseModel):
    """``data`` of a user_registered event."""

    email: str
    username: str | None = None
    provider: str = "email"


class AuditLogData(BaseModel):
    """``data`` of an audit_log event."""

    action: str
    user: str
    details: str | None = None
    metadata: dict[str, Any] | None = None


class WebhookAcceptedResponse(BaseModel):
    success: bool = True
