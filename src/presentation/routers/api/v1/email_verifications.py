"""Email verifications resource router.

Endpoints:
    POST /api/v1/email-verifications - Create email verification (verify email)
    POST /api/v1/verification-emails - Resend the verification email
"""

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from src.application.commands.auth_commands import ResendVerification, VerifyEmail
from src.application.commands.handlers.resend_verification_handler import (
    ResendVerificationHandler,
)
from src.application.commands.handlers.verify_email_handler import VerifyEmailHandler
from src.core.container import get_resend_verification_handler, get_verify_email_handler
from src.core.result import Failure, Success
from src.presentation.routers.api.v1.errors import ErrorResponseBuilder, ProblemDetails
from src.schemas.auth_schemas import (
    EmailVerificationCreateRequest,
    EmailVerificationCreateResponse,
    VerificationEmailCreateRequest,
    VerificationEmailCreateResponse,
)

router = APIRouter(prefix="/email-verifications", tags=["Email Verifications"])

verification_emails_router = APIRouter(
    prefix="/verification-emails",
    tags=["Email Verifications"],
)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=EmailVerificationCreateResponse,
    responses={
        400: {"description": "Invalid or expired token", "model": ProblemDetails},
        409: {"description": "Email already verified", "model": ProblemDetails},
    },
    summary="Create email verification",
    description="Verify the user's email address using the token from the email.",
)
async def create_email_verification(
    request: Request,
    data: EmailVerificationCreateRequest,
    handler: VerifyEmailHandler = Depends(get_verify_email_handler),
) -> EmailVerificationCreateResponse | JSONResponse:
    """Create email verification (verify email).

    POST /api/v1/email-verifications → 201 Created
    """
    match await handler.handle(VerifyEmail(token=data.token)):
        case Success(value=response):
            return EmailVerificationCreateResponse(message=response.message)
        case Failure(error=error):
            return ErrorResponseBuilder.from_domain_error(error, request)


@verification_emails_router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=VerificationEmailCreateResponse,
    summary="Resend verification email",
    description="Send a fresh verification link. Always returns success.",
)
async def create_verification_email(
    request: Request,
    data: VerificationEmailCreateRequest,
    handler: ResendVerificationHandler = Depends(get_resend_verification_handler),
) -> VerificationEmailCreateResponse | JSONResponse:
    """Resend verification email.

    POST /api/v1/verification-emails → 201 Created (for every address)
    """
    match await handler.handle(ResendVerification(email=data.email)):
        case Success(value=response):
            return VerificationEmailCreateResponse(message=response.message)
        case Failure(error=error):
            return ErrorResponseBuilder.from_domain_error(error, request)
