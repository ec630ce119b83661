"""
FastAPI Endpoints for URL Shortener Service

This module defines all REST API endpoints with minimal logic.
Endpoints only handle:
- Request parsing (Pydantic models)
- Choosing between redirect and JSON responses
- Error handling and HTTP responses
- Delegating to the service layer

All business logic is in URLShorteningService.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status
from fastapi.responses import JSONResponse, RedirectResponse

from shortener.api.schemas import ShortenRequest, ShortenResponse, StatsResponse
from shortener.core.exceptions import (
    InvalidURLError,
    ShortCodeNotFoundError,
    ShortenFailedError,
)
from shortener.core.service_manager import get_url_service
from shortener.services.url_service import RedirectResult, URLShorteningService

logger = logging.getLogger(__name__)

router = APIRouter()


def build_short_url(request: Request, short_code: str) -> str:
    """Prefix ``short_code`` with the configured base URL."""
    base_url = request.app.state.settings.BASE_URL.rstrip("/")
    return f"{base_url}/{short_code}"


def wants_json(request: Request, stats: Optional[str]) -> bool:
    """API clients ask for stats via ?stats=true or an Accept: application/json header."""
    return stats == "true" or "application/json" in request.headers.get("accept", "")


@router.post(
    "/shorten",
    response_model=ShortenResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a short URL",
    description=(
        "Takes a long URL and returns a shortened version with a unique code. "
        "Shortening the same URL again returns the existing code with status 200."
    )
)
async def create_short_url(
    request: Request,
    response: Response,
    body: ShortenRequest,
    service: URLShorteningService = Depends(get_url_service)
) -> ShortenResponse:
    """
    Create a new short URL from a long URL.

    Returns:
        ShortenResponse with short_code, short_url, and original_url
    """
    try:
        result = service.shorten(body.url)
    except InvalidURLError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=e.reason
        )
    except ShortenFailedError as e:
        logger.error(f"Failed to shorten {body.url}: {e.reason}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to shorten URL"
        )

    if not result.created:
        response.status_code = status.HTTP_200_OK

    return ShortenResponse(
        short_code=result.code,
        short_url=build_short_url(request, result.code),
        original_url=result.original_url
    )


@router.get(
    "/api/stats/{short_code}",
    response_model=StatsResponse,
    summary="Get URL statistics",
    description="Returns statistics for a short URL without counting a visit"
)
async def get_url_stats(
    short_code: str,
    service: URLShorteningService = Depends(get_url_service)
) -> StatsResponse:
    """
    Get statistics for a short URL.

    Raises:
        HTTPException 404: If short code not found
    """
    try:
        stats = service.peek_stats(short_code)
    except ShortCodeNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )

    return StatsResponse.from_result(stats)


@router.get(
    "/{short_code}",
    summary="Redirect to original URL",
    description=(
        "Redirects to the original URL and counts a visit. "
        "With ?stats=true or Accept: application/json, returns statistics instead."
    ),
    responses={200: {"model": StatsResponse}, 404: {"description": "Short code not found"}}
)
async def resolve_short_code(
    short_code: str,
    request: Request,
    stats: Optional[str] = Query(default=None, description="Pass \"true\" to return statistics instead of redirecting"),
    service: URLShorteningService = Depends(get_url_service)
):
    """
    Resolve a short code, counting the visit either way.

    Returns:
        RedirectResponse (HTTP 302) or StatsResponse (HTTP 200)

    Raises:
        HTTPException 404: If short code not found
    """
    try:
        result = service.resolve(short_code, want_stats=wants_json(request, stats))
    except ShortCodeNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )

    if isinstance(result, RedirectResult):
        return RedirectResponse(
            url=result.target,
            status_code=status.HTTP_302_FOUND
        )

    return JSONResponse(
        content=StatsResponse.from_result(result).model_dump(),
        status_code=status.HTTP_200_OK
    )
