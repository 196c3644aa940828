"""Error response builder for RFC 7807 Problem Details.

Converts domain errors returned by handlers (``Failure(error=...)``) into
RFC 7807 JSON responses. The HTTP status is derived from the error code;
the detail is the error message, which is always safe to show to clients.

Exports:
    ErrorResponseBuilder: Utility class for building RFC 7807 responses
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse

from src.core.config import settings
from src.core.enums import ErrorCode
from src.core.errors import DomainError, ValidationError
from src.presentation.routers.api.middleware.trace_middleware import get_trace_id
from src.presentation.routers.api.v1.errors.problem_details import (
    ErrorDetail,
    ProblemDetails,
)

_STATUS_BY_CODE: dict[ErrorCode, int] = {
    ErrorCode.INVALID_EMAIL: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_USERNAME: status.HTTP_400_BAD_REQUEST,
    ErrorCode.PASSWORD_TOO_WEAK: status.HTTP_400_BAD_REQUEST,
    ErrorCode.VALIDATION_FAILED: status.HTTP_400_BAD_REQUEST,
    ErrorCode.TOKEN_INVALID: status.HTTP_400_BAD_REQUEST,
    ErrorCode.USER_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.EMAIL_ALREADY_EXISTS: status.HTTP_409_CONFLICT,
    ErrorCode.USERNAME_ALREADY_EXISTS: status.HTTP_409_CONFLICT,
    ErrorCode.EMAIL_ALREADY_VERIFIED: status.HTTP_409_CONFLICT,
    ErrorCode.WEBHOOK_SIGNATURE_INVALID: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.WEBHOOK_NOT_CONFIGURED: status.HTTP_503_SERVICE_UNAVAILABLE,
}

_TITLES: dict[int, str] = {
    status.HTTP_400_BAD_REQUEST: "Bad Request",
    status.HTTP_401_UNAUTHORIZED: "Authentication Required",
    status.HTTP_404_NOT_FOUND: "Resource Not Found",
    status.HTTP_409_CONFLICT: "Resource Conflict",
    status.HTTP_503_SERVICE_UNAVAILABLE: "Service Unavailable",
}


class ErrorResponseBuilder:
    """Build RFC 7807 Problem Details error responses.

    Example:
        >>> match await handler.handle(command):
        ...     case Failure(error=error):
        ...         return ErrorResponseBuilder.from_domain_error(error, request)
    """

    @staticmethod
    def from_domain_error(error: DomainError, request: Request) -> JSONResponse:
        """Convert a DomainError to an RFC 7807 JSON response.

        ValidationErrors that name a field also get a matching entry in
        ``errors``. ``details`` is never copied into the response.

        Args:
            error: Domain error returned by a handler.
            request: FastAPI Request object (for instance URL).

        Returns:
            JSONResponse with RFC 7807 ProblemDetails content.
        """
        status_code = ErrorResponseBuilder.status_for(error.code)

        errors = None
        if isinstance(error, ValidationError) and error.field:
            errors = [
                ErrorDetail(
                    field=error.field,
                    code=error.code.value,
                    message=error.message,
                )
            ]

        problem = ProblemDetails(
            type=f"{settings.api_base_url}/errors/{error.code.value}",
            title=_TITLES.get(status_code, "Error"),
            status=status_code,
            detail=error.message,
            instance=str(request.url.path),
            errors=errors,
            trace_id=get_trace_id(),
        )
        return JSONResponse(
            status_code=status_code,
            content=problem.model_dump(exclude_none=True),
        )

    @staticmethod
    def status_for(code: ErrorCode) -> int:
        """Map a domain error code to an HTTP status code (default 400)."""
        return _STATUS_BY_CODE.get(code, status.HTTP_400_BAD_REQUEST)
