"""Pydantic models for API responses."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field


class HealthCheckResponse(BaseModel):
    """Response model for health check endpoint."""

    status: Literal["healthy", "unhealthy", "degraded"] = Field(
        ..., description="Overall system status"
    )
    version: str = Field(..., description="API version")
    timestamp: datetime = Field(..., description="Check timestamp")
    notion_configured: bool = Field(
        ..., description="Whether a Notion token and database ID are set"
    )
    block_fetch_policy: str = Field(..., description="Active block fetch failure policy")


class ErrorResponse(BaseModel):
    """Standard error response model."""

    error: str = Field(..., description="Error type")
    message: str = Field(..., description="Human-readable error message")
    detail: Optional[str] = Field(None, description="Additional error details")
    path: Optional[str] = Field(None, description="Request path that caused the error")
    timestamp: datetime = Field(..., description="Error timestamp")
