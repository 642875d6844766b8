"""Pydantic models for request/response validation."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Basic health check response."""

    status: str
    version: str


class DetailedHealthResponse(BaseModel):
    """Readiness response with per-dependency results."""

    status: str = Field(..., description="healthy or unhealthy")
    version: str = Field(..., description="Application version")
    timestamp: datetime = Field(..., description="Current server time")
    checks: dict[str, str] = Field(..., description="Result of each dependency check")
    stats: dict[str, int] = Field(default_factory=dict, description="Uptime, request, workspace and grid counts")


class ErrorDetail(BaseModel):
    """Body of a structured error."""

    code: str
    message: str
    details: dict[str, Any] = Field(default_factory=dict)


class ErrorResponse(BaseModel):
    """Error response envelope returned by the exception handlers."""

    error: ErrorDetail
