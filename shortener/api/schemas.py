"""
API Request and Response Schemas

This module defines all Pydantic models for API requests and responses.
Separated from endpoints to keep concerns separated and enable reuse.

Design Principles:
- Request models: Parse the body into a typed struct before the core runs
- Response models: Define output structure
- The request URL is a plain string; HttpUrl would normalize it and
  break exact-match deduplication
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from shortener.services.url_service import StatsResult


class ShortenRequest(BaseModel):
    """Request model for URL shortening endpoint."""
    url: Optional[str] = Field(default=None, description="The long URL to shorten")


class ShortenResponse(BaseModel):
    """Response model for URL shortening endpoint."""
    short_code: str = Field(..., description="The generated short code")
    short_url: str = Field(..., description="The complete short URL")
    original_url: str = Field(..., description="The original long URL")


class StatsResponse(BaseModel):
    """Response model for statistics endpoints."""
    original_url: str
    short_code: str
    created_at: str
    visit_count: int

    @classmethod
    def from_result(cls, result: StatsResult) -> "StatsResponse":
        return cls(
            original_url=result.original_url,
            short_code=result.short_code,
            created_at=result.created_at.isoformat(),
            visit_count=result.visits,
        )


class HealthResponse(BaseModel):
    """Response model for health endpoint."""
    status: str
    timestamp: datetime
