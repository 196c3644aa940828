"""Password resets resource router.

RESTful endpoints for password reset management.

Endpoints:
    POST /api/v1/password-reset-tokens            - Create password reset token (request reset)
    POST /api/v1/password-reset-tokens/validation - Check a reset token without using it
    POST /api/v1/password-resets                  - Create password reset (execute reset)
"""

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from src.application.commands.auth_commands import (
    ConfirmPasswordReset,
    RequestPasswordReset,
)
from src.application.commands.handlers.confirm_password_reset_handler import (
    ConfirmPasswordResetHandler,
)
from src.application.commands.handlers.request_password_reset_handler import (
    RequestPasswordResetHandler,
)
from src.application.queries.auth_queries import ValidateResetToken
from src.application.queries.handlers.validate_reset_token_handler import (
    ValidateResetTokenHandler,
)
from src.core.container import (
    get_confirm_password_reset_handler,
    get_request_password_reset_handler,
    get_validate_reset_token_handler,
)
from src.core.result import Failure, Success
from src.presentation.routers.api.v1.errors import ErrorResponseBuilder, ProblemDetails
from src.schemas.auth_schemas import (
    PasswordResetCreateRequest,
    PasswordResetCreateResponse,
    PasswordResetTokenCreateRequest,
    PasswordResetTokenCreateResponse,
    PasswordResetTokenValidationRequest,
    PasswordResetTokenValidationResponse,
)

# Router for password reset tokens
password_reset_tokens_router = APIRouter(
    prefix="/password-reset-tokens",
    tags=["Password Reset Tokens"],
)

# Router for password resets
password_resets_router = APIRouter(
    prefix="/password-resets",
    tags=["Password Resets"],
)


@password_reset_tokens_router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=PasswordResetTokenCreateResponse,
    summary="Create password reset token",
    description="Request a password reset. Always returns success to prevent user enumeration.",
)
async def create_password_reset_token(
    request: Request,
    data: PasswordResetTokenCreateRequest,
    handler: RequestPasswordResetHandler = Depends(get_request_password_reset_handler),
) -> PasswordResetTokenCreateResponse | JSONResponse:
    """Create password reset token (request reset).

    POST /api/v1/password-reset-tokens → 201 Created

    Sends a password reset email if the account exists.

    Args:
        request: FastAPI request object.
        data: Password reset token request (email).
        handler: Request password reset handler (injected).

    Returns:
        PasswordResetTokenCreateResponse (always 201 for security).
    """
    match await handler.handle(RequestPasswordReset(email=data.email)):
        case Success(value=response):
            return PasswordResetTokenCreateResponse(message=response.message)
        case Failure(error=error):
            return ErrorResponseBuilder.from_domain_error(error, request)


@password_reset_tokens_router.post(
    "/validation",
    status_code=status.HTTP_200_OK,
    response_model=PasswordResetTokenValidationResponse,
    responses={
        400: {"description": "Invalid or expired token", "model": ProblemDetails},
    },
    summary="Validate password reset token",
    description="Check that a reset link still works before showing the reset form.",
)
async def validate_password_reset_token(
    request: Request,
    data: PasswordResetTokenValidationRequest,
    handler: ValidateResetTokenHandler = Depends(get_validate_reset_token_handler),
) -> PasswordResetTokenValidationResponse | JSONResponse:
    """Validate a reset token without consuming it.

    POST /api/v1/password-reset-tokens/validation → 200 OK
    """
    match await handler.handle(ValidateResetToken(token=data.token)):
        case Success(value=token_status):
            return PasswordResetTokenValidationResponse(
                message=token_status.message,
                expires_at=token_status.expires_at,
            )
        case Failure(error=error):
            return ErrorResponseBuilder.from_domain_error(error, request)


@password_resets_router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=PasswordResetCreateResponse,
    responses={
        400: {
            "description": "Invalid or expired token, or weak password",
            "model": ProblemDetails,
        },
    },
    summary="Create password reset",
    description="Reset password using token from email.",
)
async def create_password_reset(
    request: Request,
    data: PasswordResetCreateRequest,
    handler: ConfirmPasswordResetHandler = Depends(get_confirm_password_reset_handler),
) -> PasswordResetCreateResponse | JSONResponse:
    """Create password reset (execute reset).

    POST /api/v1/password-resets → 201 Created

    Args:
        request: FastAPI request object.
        data: Password reset request (token, new_password).
        handler: Confirm password reset handler (injected).

    Returns:
        PasswordResetCreateResponse on success (201 Created).
        JSONResponse with RFC 7807 error on failure (400).
    """
    command = ConfirmPasswordReset(
        token=data.token,
        new_password=data.new_password,
    )

    match await handler.handle(command):
        case Success(value=response):
            return PasswordResetCreateResponse(message=response.message)
        case Failure(error=error):
            return ErrorResponseBuilder.from_domain_error(error, request)
