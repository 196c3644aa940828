"""Authentication request/response schemas.

Pydantic models for API request validation and response serialization.
Kept separate from domain entities - these are HTTP-layer concerns.

RESTful Endpoints (100% resource-based):
    POST   /api/v1/users                            - Create user (registration)
    POST   /api/v1/email-verifications              - Create verification (verify email)
    POST   /api/v1/verification-emails              - Resend verification email
    POST   /api/v1/password-reset-tokens            - Create reset token (request)
    POST   /api/v1/password-reset-tokens/validation - Validate reset token
    POST   /api/v1/password-resets                  - Create reset (execute)

Tokens are accepted at any length up to 128 characters: a malformed token
gets the same "Invalid or expired token" answer as an expired one instead
of a schema error.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from src.domain.enums import UserStatus


# =============================================================================
# Registration
# =============================================================================


class UserCreateRequest(BaseModel):
    """Request schema for user creation (registration).

    POST /api/v1/users
    Returns: 201 Created
    """

    email: EmailStr = Field(
        ...,
        description="User's email address",
        examples=["user@example.com"],
    )
    username: str = Field(
        ...,
        min_length=1,
        max_length=64,
        description="Public handle (3-20 letters, numbers or underscores)",
        examples=["ada_l"],
    )
    password: str = Field(
        ...,
        min_length=8,
        max_length=128,
        description="Password (8-128 chars, mixed case, number, special char)",
        examples=["Sn3aky!23"],
    )
    display_name: str | None = Field(
        None,
        max_length=100,
        description="Name shown to other members (defaults to username)",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "user@example.com",
                "username": "ada_l",
                "password": "Sn3aky!23",
            }
        }
    )


class UserCreateResponse(BaseModel):
    """Response schema for user creation (201 Created).

    User must verify email before the account becomes active.
    """

    id: UUID = Field(..., description="Created user's ID")
    email: str = Field(..., description="User's email address")
    username: str = Field(..., description="User's handle")
    status: UserStatus = Field(..., description="Account status")
    message: str = Field(
        default="User created successfully",
        description="Success message",
    )


# =============================================================================
# Email Verification
# =============================================================================


class EmailVerificationCreateRequest(BaseModel):
    """Request schema for email verification creation.

    POST /api/v1/email-verifications
    Returns: 201 Created
    """

    token: str = Field(
        ...,
        min_length=1,
        max_length=128,
        description="Verification token from email",
    )


class EmailVerificationCreateResponse(BaseModel):
    """Response schema for email verification (201 Created)."""

    message: str = Field(
        default="Email verified successfully",
        description="Success message",
    )


class VerificationEmailCreateRequest(BaseModel):
    """Request schema for resending the verification email.

    POST /api/v1/verification-emails
    Returns: 201 Created (always)
    """

    email: EmailStr = Field(..., description="Address the account was registered with")


class VerificationEmailCreateResponse(BaseModel):
    """Response schema for verification resend (same for every address)."""

    message: str = Field(..., description="Generic success message")


# =============================================================================
# Password Reset
# =============================================================================


class PasswordResetTokenCreateRequest(BaseModel):
    """Request schema for password reset token creation.

    POST /api/v1/password-reset-tokens
    Returns: 201 Created (always, to prevent user enumeration)
    """

    email: EmailStr = Field(
        ...,
        description="Email address of the account",
        examples=["user@example.com"],
    )


class PasswordResetTokenCreateResponse(BaseModel):
    """Response schema for password reset token creation (201 Created)."""

    message: str = Field(..., description="Generic success message")


class PasswordResetTokenValidationRequest(BaseModel):
    """Request schema for reset token validation.

    POST /api/v1/password-reset-tokens/validation
    Returns: 200 OK when the token can still be used
    """

    token: str = Field(..., min_length=1, max_length=128)


class PasswordResetTokenValidationResponse(BaseModel):
    """Response schema for a usable reset token."""

    valid: bool = Field(default=True)
    message: str = Field(default="Token is valid")
    expires_at: datetime = Field(..., description="When the token stops working")


class PasswordResetCreateRequest(BaseModel):
    """Request schema for password reset creation.

    POST /api/v1/password-resets
    Returns: 201 Created
    """

    token: str = Field(
        ...,
        min_length=1,
        max_length=128,
        description="Reset token from email",
    )
    new_password: str = Field(
        ...,
        min_length=8,
        max_length=128,
        description="New password (8-128 chars, mixed case, number, special char)",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "token": "f3a1...",
                "new_password": "Sn3aky!23",
            }
        }
    )


class PasswordResetCreateResponse(BaseModel):
    """Response schema for password reset (201 Created)."""

    message: str = Field(
        default="Password reset successfully",
        description="Success message",
    )
