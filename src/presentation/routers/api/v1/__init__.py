"""API v1 routers.

RESTful resource-based endpoints. All endpoints use resource nouns, not
action verbs.

Resources:
    /api/v1/users                              - User registration
    /api/v1/email-verifications                - Email verification
    /api/v1/verification-emails                - Verification email resend
    /api/v1/password-reset-tokens              - Password reset token requests
    /api/v1/password-reset-tokens/validation   - Reset token validation
    /api/v1/password-resets                    - Password reset execution
    /api/v1/webhooks/discord                   - Signed inbound notifications
    /api/v1/rate-limit                         - Rate limit diagnostic
"""

from fastapi import APIRouter

from src.core.config import settings
from src.presentation.routers.api.v1 import (
    email_verifications,
    password_resets,
    rate_limit,
    users,
    webhooks,
)

v1_router = APIRouter(prefix=settings.api_v1_prefix)
v1_router.include_router(users.router)
v1_router.include_router(email_verifications.router)
v1_router.include_router(email_verifications.verification_emails_router)
v1_router.include_router(password_resets.password_reset_tokens_router)
v1_router.include_router(password_resets.password_resets_router)
v1_router.include_router(webhooks.router)
v1_router.include_router(rate_limit.router)

__all__ = [
    "v1_router",
]
