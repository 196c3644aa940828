"""Inbound webhooks router.

Endpoints:
    POST /api/v1/webhooks/discord - Relay a signed internal event to Discord

Requests must carry ``X-Webhook-Signature: sha256=<hex>``, the HMAC-SHA256
of the raw body keyed with WEBHOOK_SECRET. The signature is checked before
the body is parsed.

Event types:
    user_registered  -> DiscordWebhookService.send_user_registration
    audit_log        -> DiscordWebhookService.send_audit_log
    anything else    -> logged and acknowledged
"""

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError

from src.core.config import settings
from src.core.constants import WEBHOOK_SIGNATURE_HEADER
from src.core.container import get_logger, get_notifier
from src.core.enums import ErrorCode
from src.core.errors import DomainError, ValidationError
from src.domain.protocols import LoggerProtocol, NotificationProtocol
from src.infrastructure.security import verify_signature
from src.presentation.routers.api.v1.errors import ErrorResponseBuilder, ProblemDetails
from src.schemas.webhook_schemas import (
    AuditLogData,
    UserRegisteredData,
    WebhookAcceptedResponse,
    WebhookEvent,
)

router = APIRouter(prefix="/webhooks", tags=["Webhooks"])


def get_webhook_secret() -> str | None:
    """Shared secret for inbound signatures (None disables the endpoint)."""
    return settings.webhook_secret


@router.post(
    "/discord",
    status_code=status.HTTP_200_OK,
    response_model=WebhookAcceptedResponse,
    responses={
        400: {"description": "Missing type or data", "model": ProblemDetails},
        401: {"description": "Missing or invalid signature", "model": ProblemDetails},
        503: {"description": "Webhook secret not configured", "model": ProblemDetails},
    },
    summary="Relay webhook event",
)
async def receive_discord_webhook(
    request: Request,
    secret: str | None = Depends(get_webhook_secret),
    notifier: NotificationProtocol = Depends(get_notifier),
    logger: LoggerProtocol = Depends(get_logger),
) -> WebhookAcceptedResponse | JSONResponse:
    """Verify, parse and dispatch one webhook event.

    POST /api/v1/webhooks/discord → 200 OK
    """
    if not secret:
        return ErrorResponseBuilder.from_domain_error(
            DomainError(
                code=ErrorCode.WEBHOOK_NOT_CONFIGURED,
                message="Webhook endpoint is not configured",
            ),
            request,
        )

    body = await request.body()
    signature = request.headers.get(WEBHOOK_SIGNATURE_HEADER)
    if not signature or not verify_signature(body, signature, secret):
        logger.warning("Webhook signature rejected", path=request.url.path)
        return ErrorResponseBuilder.from_domain_error(
            DomainError(
                code=ErrorCode.WEBHOOK_SIGNATURE_INVALID,
                message="Invalid webhook signature",
            ),
            request,
        )

    try:
        event = WebhookEvent.model_validate_json(body)
        delivered = await _dispatch(event, notifier, logger)
    except PydanticValidationError:
        return ErrorResponseBuilder.from_domain_error(
            ValidationError(
                code=ErrorCode.VALIDATION_FAILED,
                message="Missing required fields",
            ),
            request,
        )

    logger.info("Webhook processed", event_type=event.type, delivered=delivered)
    return WebhookAcceptedResponse()


async def _dispatch(
    event: WebhookEvent,
    notifier: NotificationProtocol,
    logger: LoggerProtocol,
) -> bool:
    match event.type:
        case "user_registered":
            data = UserRegisteredData.model_validate(event.data)
            return await notifier.send_user_registration(
                username=data.username or data.email,
                email=data.email,
                provider=data.provider,
            )
        case "audit_log":
            audit = AuditLogData.model_validate(event.data)
            return await notifier.send_audit_log(
                action=audit.action,
                user=audit.user,
                details=audit.details,
                metadata=audit.metadata,
            )
        case _:
            logger.warning("Unknown webhook type", event_type=event.type)
            return False
