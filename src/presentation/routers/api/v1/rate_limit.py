"""Rate limit diagnostic router.

Endpoints:
    GET /api/v1/rate-limit - Report the caller's api limiter budget

The request itself is counted by RateLimitMiddleware (api preset); a caller
over budget gets the middleware's 429 and never reaches this handler.
"""

from fastapi import APIRouter, Request

from src.schemas.system_schemas import RateLimitCheckResponse

router = APIRouter(tags=["Rate Limit"])


@router.get("/rate-limit", response_model=RateLimitCheckResponse)
async def check_rate_limit(request: Request) -> RateLimitCheckResponse:
    result = getattr(request.state, "rate_limit", None)
    if result is None:
        return RateLimitCheckResponse()
    return RateLimitCheckResponse(
        limit=result.limit,
        remaining=result.remaining,
        reset_time=result.reset_time,
    )
