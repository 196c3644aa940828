"""Rate limit middleware for FastAPI.

Every request under the API prefix is counted against one fixed-window
limiter before it reaches a route:

    POST auth endpoints      -> auth     (5 per 15 minutes, keyed auth:<ip>)
    POST /webhooks/discord   -> webhook  (10 per minute)
    anything else under /api -> api      (100 per 15 minutes)

Root, health and docs are never limited.

Response Headers:
    - X-RateLimit-Limit: Requests allowed per window
    - X-RateLimit-Remaining: Requests left in the window
    - X-RateLimit-Reset: End of the window (ISO-8601, UTC)
    - Retry-After: Seconds until retry allowed (on 429)

Fail-Open Design:
    A limiter that raises lets the request through and logs a warning.
    Rate limiting should NEVER cause denial of service.

Usage:
    # In main.py
    app.add_middleware(RateLimitMiddleware)
"""

from typing import TYPE_CHECKING, Awaitable, Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.types import ASGIApp

from src.core.config import settings
from src.presentation.routers.api.middleware.trace_middleware import get_trace_id
from src.presentation.routers.api.v1.errors.problem_details import ProblemDetails

if TYPE_CHECKING:
    from src.domain.protocols.logger_protocol import LoggerProtocol
    from src.domain.protocols.rate_limit_protocol import RateLimiterProtocol
    from src.domain.value_objects.rate_limit_rule import RateLimitResult
    from src.infrastructure.rate_limit.config import RateLimiters

AUTH_PATHS = frozenset(
    {
        "/users",
        "/password-reset-tokens",
        "/password-reset-tokens/validation",
        "/password-resets",
        "/email-verifications",
        "/verification-emails",
    }
)
WEBHOOK_PATHS = frozenset({"/webhooks/discord"})

_SKIP_PREFIXES = ("/docs", "/redoc", "/openapi.json", "/favicon.ico")


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Starlette middleware applying the preset limiters.

    Limiters and logger are loaded lazily from the container so tests can
    reset them between cases.
    """

    def __init__(self, app: ASGIApp, *, api_prefix: str | None = None) -> None:
        super().__init__(app)
        self._api_prefix = api_prefix or settings.api_v1_prefix

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        """Check the matching limiter, then pass the request on or reject it."""
        limiter = self._select_limiter(request)
        if limiter is None:
            return await call_next(request)

        try:
            result = await limiter.check(request)
        except Exception as exc:  # noqa: BLE001
            self._get_logger().warning(
                "Rate limit fail-open",
                rule=limiter.rule.name,
                path=request.url.path,
                error=str(exc),
                result="fail_open",
            )
            return await call_next(request)

        if not result.success:
            self._get_logger().info(
                "Rate limit exceeded",
                rule=limiter.rule.name,
                path=request.url.path,
            )
            return self._build_429_response(request, result)

        request.state.rate_limit = result
        response = await call_next(request)
        response.headers.update(_limit_headers(result))
        return response

    def _select_limiter(self, request: Request) -> "RateLimiterProtocol | None":
        path = request.url.path
        if request.method == "OPTIONS":
            return None
        if path in ("/", "/health") or path.startswith(_SKIP_PREFIXES):
            return None
        if not path.startswith(self._api_prefix):
            return None

        limiters = self._get_limiters()
        route = path[len(self._api_prefix) :].rstrip("/")
        if request.method == "POST" and route in WEBHOOK_PATHS:
            return limiters.webhook
        if request.method == "POST" and route in AUTH_PATHS:
            return limiters.auth
        return limiters.api

    def _build_429_response(
        self, request: Request, result: "RateLimitResult"
    ) -> JSONResponse:
        retry_after = result.retry_after_seconds()
        problem = ProblemDetails(
            type=f"{settings.api_base_url}/errors/rate-limit-exceeded",
            title="Rate Limit Exceeded",
            status=429,
            detail=f"Too many requests. Please try again in {retry_after} seconds.",
            instance=request.url.path,
            retry_after=retry_after,
            trace_id=get_trace_id(),
        )
        return JSONResponse(
            status_code=429,
            content=problem.model_dump(exclude_none=True),
            headers={"Retry-After": str(retry_after), **_limit_headers(result)},
        )

    @staticmethod
    def _get_limiters() -> "RateLimiters":
        from src.core.container import get_rate_limiters

        return get_rate_limiters()

    @staticmethod
    def _get_logger() -> "LoggerProtocol":
        from src.core.container import get_logger

        return get_logger()


def _limit_headers(result: "RateLimitResult") -> dict[str, str]:
    return {
        "X-RateLimit-Limit": str(result.limit),
        "X-RateLimit-Remaining": str(result.remaining),
        "X-RateLimit-Reset": result.reset_time.isoformat(),
    }
