"""System endpoint schemas (root, health, rate limit diagnostic)."""

from datetime import datetime

from pydantic import BaseModel, Field


class CacheStatsResponse(BaseModel):
    total: int
    active: int
    expired: int
    tags: int


class HealthServices(BaseModel):
    database: str = Field(..., examples=["healthy"])
    cache: str = Field(..., examples=["healthy"])


class HealthMetrics(BaseModel):
    response_time_ms: float
    cache: CacheStatsResponse | None = None


class HealthResponse(BaseModel):
    """Health report; served with 503 when any service is unhealthy."""

    status: str = Field(..., examples=["healthy"])
    timestamp: datetime
    services: HealthServices
    metrics: HealthMetrics


class RateLimitCheckResponse(BaseModel):
    message: str = "Rate limit check passed"
    limit: int | None = None
    remaining: int | None = None
    reset_time: datetime | None = None
