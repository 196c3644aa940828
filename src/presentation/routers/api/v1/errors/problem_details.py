"""RFC 7807 Problem Details for HTTP APIs.

This module implements RFC 7807 (Problem Details for HTTP APIs) using Pydantic
models for structured error responses.

RFC 7807: https://tools.ietf.org/html/rfc7807

Exports:
    ErrorDetail: Individual field-specific error
    ProblemDetails: RFC 7807 compliant error response schema
"""

from pydantic import BaseModel, Field


class ErrorDetail(BaseModel):
    """Individual field-specific error.

    Used for validation errors where multiple fields may have errors.

    Examples:
        >>> error = ErrorDetail(
        ...     field="password",
        ...     code="password_too_weak",
        ...     message="Add uppercase letters",
        ... )
    """

    field: str = Field(..., description="Field name")
    code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")


class ProblemDetails(BaseModel):
    """RFC 7807 Problem Details for HTTP APIs.

    Attributes:
        type: URI reference identifying the problem type
        title: Short, human-readable summary of the problem type
        status: HTTP status code for this occurrence
        detail: Human-readable explanation specific to this occurrence
        instance: URI reference identifying the specific occurrence
        errors: Optional list of field-specific errors (for validation failures)
        retry_after: Seconds to wait before retrying (rate limit responses)
        trace_id: Optional request trace ID for debugging

    Examples:
        >>> problem = ProblemDetails(
        ...     type="https://api.hypea.com/errors/token_invalid",
        ...     title="Bad Request",
        ...     status=400,
        ...     detail="Invalid or expired token",
        ...     instance="/api/v1/password-resets",
        ... )
    """

    type: str = Field(
        ...,
        description="URI reference identifying the problem type",
        examples=["https://api.hypea.com/errors/token_invalid"],
    )
    title: str = Field(
        ...,
        description="Short, human-readable summary",
        examples=["Bad Request"],
    )
    status: int = Field(
        ...,
        description="HTTP status code",
        examples=[400],
    )
    detail: str = Field(
        ...,
        description="Human-readable explanation",
        examples=["Invalid or expired token"],
    )
    instance: str = Field(
        ...,
        description="URI reference identifying this occurrence",
        examples=["/api/v1/password-resets"],
    )
    errors: list[ErrorDetail] | None = Field(
        None,
        description="List of field-specific errors",
    )
    retry_after: int | None = Field(
        None,
        description="Seconds until the rate limit window resets",
    )
    trace_id: str | None = Field(
        None,
        description="Request trace ID for debugging",
    )
